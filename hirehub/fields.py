import re

from django import forms


def split_tags(raw) -> list[str]:
    """Split "Python, Django;  SQL" into ["Python", "Django", "SQL"].

    Order is kept and case-insensitive duplicates are dropped.
    """
    if not raw:
        return []
    if isinstance(raw, (list, tuple)):
        parts = [str(p) for p in raw]
    else:
        parts = re.split(r"[,;\n]", str(raw))
    out = []
    seen = set()
    for part in parts:
        value = re.sub(r"\s+", " ", part).strip()
        if not value or value.lower() in seen:
            continue
        out.append(value)
        seen.add(value.lower())
    return out


class CommaSeparatedListField(forms.CharField):
    """Text input that round-trips a JSON list of short strings."""

    def __init__(self, *, max_items=30, **kwargs):
        self.max_items = max_items
        kwargs.setdefault("required", False)
        kwargs.setdefault("help_text", "Comma separated (e.g. Python, Django, SQL).")
        super().__init__(**kwargs)

    def widget_attrs(self, widget):
        # max_length limits each item, not the whole input
        attrs = super().widget_attrs(widget)
        attrs.pop("maxlength", None)
        return attrs

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return ", ".join(value)
        return value

    def to_python(self, value):
        return split_tags(super().to_python(value))

    def validate(self, value):
        if self.required and not value:
            raise forms.ValidationError(self.error_messages["required"], code="required")
        if len(value) > self.max_items:
            raise forms.ValidationError(f"Please enter at most {self.max_items} items.", code="max_items")

    def run_validators(self, value):
        # CharField validators (max_length) apply per item
        for item in value:
            super().run_validators(item)
