from django import template

register = template.Library()

_STATUS_CLASSES = {
    "pending": "badge-muted",
    "reviewed": "badge-primary",
    "shortlisted": "badge-warning",
    "rejected": "badge-danger",
    "accepted": "badge-success",
    "open": "badge-success",
    "draft": "badge-warning",
    "closed": "badge-muted",
}


@register.filter
def get_item(mapping, key):
    try:
        return mapping.get(key)
    except AttributeError:
        return None


@register.filter
def status_class(status):
    return _STATUS_CLASSES.get(status or "", "badge-muted")
