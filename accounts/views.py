import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import ValidationError
from django.shortcuts import render, redirect, get_object_or_404
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_http_methods, require_POST

from jobs import workflow

from .decorators import recruiter_required
from .forms import CompanyForm, LoginForm, ProfileForm, RegisterForm
from .identity import sign_in, sign_out, sign_up, start_session
from .models import Company, Notification, Profile, User

logger = logging.getLogger(__name__)


def _landing_for(user) -> str:
    if getattr(user, "role", "") == User.Role.RECRUITER:
        return "recruiter_dashboard"
    return "dashboard"


def _safe_next(request, candidate):
    if candidate and url_has_allowed_host_and_scheme(candidate, allowed_hosts={request.get_host()}):
        return candidate
    return None


# -----------------------------
# Register
# -----------------------------
@require_http_methods(["GET", "POST"])
def register(request):
    if request.user.is_authenticated:
        return redirect(_landing_for(request.user))

    if request.method == "POST":
        form = RegisterForm(request.POST)
        if form.is_valid():
            data = form.cleaned_data
            try:
                user = sign_up(data["email"], data["password"], data["role"], data["full_name"])
            except ValidationError as exc:
                form.add_error("email", exc)
            else:
                start_session(request, user)
                messages.success(request, "Account created successfully!")
                return redirect(_landing_for(user))
        logger.warning("Registration failed: errors=%s", form.errors.as_json())
    else:
        form = RegisterForm(initial={"role": request.GET.get("role") or User.Role.JOB_SEEKER})

    return render(request, "accounts/register.html", {"form": form})


# -----------------------------
# Login / Logout
# -----------------------------
@require_http_methods(["GET", "POST"])
def user_login(request):
    next_url = _safe_next(request, request.POST.get("next") or request.GET.get("next"))
    if request.method == "POST":
        form = LoginForm(request.POST)
        if form.is_valid():
            user = sign_in(request, form.cleaned_data["email"], form.cleaned_data["password"])
            if user:
                messages.success(request, "Welcome back!")
                return redirect(next_url or _landing_for(user))
            messages.error(request, "Invalid email or password.")
    else:
        form = LoginForm()

    return render(request, "accounts/login.html", {"form": form, "next": next_url or ""})


@require_POST
def user_logout(request):
    sign_out(request)
    messages.info(request, "Signed out successfully.")
    return redirect("home")


# -----------------------------
# Profile + company
# -----------------------------
@login_required
@require_http_methods(["GET", "POST"])
def profile_edit(request):
    profile, _ = Profile.objects.get_or_create(
        user=request.user,
        defaults={"full_name": request.user.get_full_name() or request.user.email, "email": request.user.email},
    )
    if request.method == "POST":
        form = ProfileForm(request.POST, instance=profile)
        if form.is_valid():
            form.save()
            workflow.invalidate_for_seeker(request.user.pk)
            messages.success(request, "Profile updated.")
            logger.info("Profile updated: user=%s", request.user.email)
            return redirect("profile_edit")
    else:
        form = ProfileForm(instance=profile)
    return render(request, "accounts/profile_edit.html", {"form": form})


@recruiter_required
@require_http_methods(["GET", "POST"])
def company_edit(request):
    company = Company.objects.filter(owner=request.user).first()
    if request.method == "POST":
        form = CompanyForm(request.POST, instance=company)
        if form.is_valid():
            created = company is None
            company = form.save(commit=False)
            company.owner = request.user
            company.save()
            if not created:
                workflow.invalidate_for_jobs(company.jobs.values_list("id", flat=True))
            messages.success(request, "Company created." if created else "Company updated.")
            logger.info("Company saved: company_id=%s owner=%s created=%s", company.id, request.user.email, created)
            return redirect("recruiter_dashboard")
    else:
        form = CompanyForm(instance=company)
    return render(request, "accounts/company_edit.html", {"form": form, "company": company})


# -----------------------------
# Notifications
# -----------------------------
@login_required
def notifications_list(request):
    qs = Notification.objects.filter(user=request.user).order_by("-created_at")
    return render(request, "accounts/notifications.html", {"notifications": qs})

@login_required
@require_POST
def notification_mark_read(request, notification_id):
    notif = get_object_or_404(Notification, id=notification_id, user=request.user)
    notif.is_read = True
    notif.save(update_fields=["is_read"])
    next_url = _safe_next(request, request.POST.get("next") or request.META.get("HTTP_REFERER"))
    return redirect(next_url or "notifications_list")

@login_required
@require_POST
def notifications_mark_all_read(request):
    Notification.objects.filter(user=request.user, is_read=False).update(is_read=True)
    next_url = _safe_next(request, request.POST.get("next") or request.META.get("HTTP_REFERER"))
    return redirect(next_url or "notifications_list")
