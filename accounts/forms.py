from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password

from hirehub.fields import CommaSeparatedListField

from .models import Company, Profile

User = get_user_model()


class RegisterForm(forms.Form):
    full_name = forms.CharField(max_length=150, min_length=2, error_messages={
        "min_length": "Name must be at least 2 characters",
    })
    email = forms.EmailField(error_messages={"invalid": "Please enter a valid email address"})
    password = forms.CharField(widget=forms.PasswordInput, min_length=8, error_messages={
        "min_length": "Password must be at least 8 characters",
    })
    confirm_password = forms.CharField(widget=forms.PasswordInput)
    role = forms.ChoiceField(choices=User.Role.choices, initial=User.Role.JOB_SEEKER, widget=forms.RadioSelect)

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("An account with this email already exists.")
        return email

    def clean(self):
        cleaned = super().clean()
        password = cleaned.get("password")
        confirm = cleaned.get("confirm_password")
        if password and confirm and password != confirm:
            self.add_error("confirm_password", "Passwords don't match")
        if password and not self.errors.get("password"):
            candidate = User(email=cleaned.get("email") or "", username=cleaned.get("email") or "")
            try:
                validate_password(password, user=candidate)
            except forms.ValidationError as exc:
                self.add_error("password", exc)
        return cleaned


class LoginForm(forms.Form):
    email = forms.EmailField(error_messages={"invalid": "Please enter a valid email address"})
    password = forms.CharField(widget=forms.PasswordInput, min_length=6, error_messages={
        "min_length": "Password must be at least 6 characters",
    })


class ProfileForm(forms.ModelForm):
    skills = CommaSeparatedListField(max_length=60)

    class Meta:
        model = Profile
        fields = ["full_name", "phone", "location", "bio", "skills", "experience_years"]
        widgets = {"bio": forms.Textarea(attrs={"rows": 4})}

    def clean_full_name(self):
        name = (self.cleaned_data.get("full_name") or "").strip()
        if len(name) < 2:
            raise forms.ValidationError("Name must be at least 2 characters")
        return name


class CompanyForm(forms.ModelForm):
    class Meta:
        model = Company
        fields = ["name", "description", "website", "logo_url", "industry", "size", "location"]
        widgets = {"description": forms.Textarea(attrs={"rows": 4})}
