from django import forms

from hirehub.fields import CommaSeparatedListField

from .models import Job, JobStatus
from .workflow import COVER_LETTER_MAX_LENGTH


class JobForm(forms.ModelForm):
    skills = CommaSeparatedListField(max_length=60)
    benefits = CommaSeparatedListField(max_length=120, help_text="Comma separated (e.g. Health insurance, Remote stipend).")

    class Meta:
        model = Job
        fields = [
            "title",
            "location",
            "location_type",
            "employment_type",
            "experience_level",
            "salary_min",
            "salary_max",
            "description",
            "requirements",
            "responsibilities",
            "skills",
            "benefits",
            "status",
        ]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 6}),
            "requirements": forms.Textarea(attrs={"rows": 4}),
            "responsibilities": forms.Textarea(attrs={"rows": 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Closing only makes sense for a posting that already exists.
        if self.instance.pk:
            allowed = JobStatus.choices
        else:
            allowed = [c for c in JobStatus.choices if c[0] != JobStatus.CLOSED]
        self.fields["status"].choices = allowed
        self.fields["experience_level"].required = False

    def clean_title(self):
        title = (self.cleaned_data.get("title") or "").strip()
        if len(title) < 3:
            raise forms.ValidationError("Title must be at least 3 characters")
        return title

    def clean_description(self):
        description = (self.cleaned_data.get("description") or "").strip()
        if len(description) < 50:
            raise forms.ValidationError("Description must be at least 50 characters")
        return description

    def clean_location(self):
        location = (self.cleaned_data.get("location") or "").strip()
        if len(location) < 2:
            raise forms.ValidationError("Location is required")
        return location

    def clean_experience_level(self):
        return self.cleaned_data.get("experience_level") or None

    def clean(self):
        cleaned = super().clean()
        lo = cleaned.get("salary_min")
        hi = cleaned.get("salary_max")
        if lo is not None and hi is not None and lo > hi:
            self.add_error("salary_max", "Maximum salary must be greater than or equal to minimum salary.")
        return cleaned


class ApplyForm(forms.Form):
    cover_letter = forms.CharField(
        required=False,
        max_length=COVER_LETTER_MAX_LENGTH,
        widget=forms.Textarea(attrs={
            "rows": 6,
            "placeholder": "Tell the recruiter why you're a great fit for this role...",
        }),
    )
