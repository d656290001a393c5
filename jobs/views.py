import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.shortcuts import render, redirect, get_object_or_404
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from accounts.decorators import recruiter_required, job_seeker_required
from accounts.models import Company, Profile
from . import workflow
from .exceptions import DuplicateApplication, WorkflowError
from .forms import ApplyForm, JobForm
from .models import Application, ApplicationStatus, EmploymentType, Job, JobStatus, LocationType

logger = logging.getLogger(__name__)


def _paginate(request, queryset, per_page=10):
    paginator = Paginator(queryset, per_page)
    page_number = request.GET.get("page") or 1
    return paginator.get_page(page_number)


def _safe_next(request, candidate):
    if candidate and url_has_allowed_host_and_scheme(candidate, allowed_hosts={request.get_host()}):
        return candidate
    return None


def _flash_workflow_error(request, exc):
    if isinstance(exc, DuplicateApplication):
        messages.info(request, str(exc))
    else:
        messages.error(request, str(exc))


# -----------------------------
# Public landing page
# -----------------------------
def home(request):
    recent_jobs = Job.objects.open().select_related("company").recent()[:6]
    stats = {
        "jobs": Job.objects.open().count(),
        "companies": Company.objects.count(),
    }
    return render(request, "jobs/home.html", {"recent_jobs": recent_jobs, "stats": stats})


# -----------------------------
# Public: Job browsing + search
# -----------------------------
def job_list(request):
    q = (request.GET.get("q") or "").strip()
    location_type = (request.GET.get("location_type") or "all").strip().lower()
    employment_type = (request.GET.get("employment_type") or "all").strip().lower()
    if location_type not in LocationType.values:
        location_type = "all"
    if employment_type not in EmploymentType.values:
        employment_type = "all"

    qs = (
        Job.objects.open()
        .select_related("company")
        .search(q=q, location_type=location_type, employment_type=employment_type)
        .recent()
    )
    page_obj = _paginate(request, qs, per_page=10)

    ctx = {
        "page_obj": page_obj,
        "jobs": list(page_obj.object_list),
        "total": page_obj.paginator.count,
        "q": q,
        "location_type": location_type,
        "employment_type": employment_type,
        "location_type_choices": LocationType.choices,
        "employment_type_choices": EmploymentType.choices,
    }
    return render(request, "jobs/job_list.html", ctx)


def job_detail(request, job_id):
    job = get_object_or_404(
        Job.objects.select_related("company", "recruiter").visible_to(request.user),
        id=job_id,
    )
    existing_application = None
    can_apply = False
    if request.user.is_authenticated and getattr(request.user, "role", "") == "job_seeker":
        existing_application = Application.objects.filter(job=job, applicant=request.user).first()
        can_apply = existing_application is None and job.is_open

    return render(
        request,
        "jobs/job_detail.html",
        {
            "job": job,
            "existing_application": existing_application,
            "can_apply": can_apply,
            "is_owner": job.is_owned_by(request.user),
            "form": ApplyForm(),
        },
    )


# -----------------------------
# Job Seeker: Apply + my applications
# -----------------------------
@job_seeker_required
@require_POST
def apply_job(request, job_id):
    form = ApplyForm(request.POST)
    if not form.is_valid():
        for error in form.errors.get("cover_letter", []):
            messages.error(request, error)
        return redirect("job_detail", job_id=job_id)

    try:
        workflow.submit(request.user, job_id, form.cleaned_data.get("cover_letter"))
    except WorkflowError as exc:
        _flash_workflow_error(request, exc)
        return redirect("job_detail", job_id=job_id)

    messages.success(request, "Application submitted successfully!")
    return redirect("job_detail", job_id=job_id)


@login_required
def dashboard(request):
    """Job seeker dashboard; recruiters are sent to their own."""
    if getattr(request.user, "role", "") == "recruiter":
        return redirect("recruiter_dashboard")

    try:
        applications = workflow.list_for_seeker(request.user.pk)
    except WorkflowError as exc:
        _flash_workflow_error(request, exc)
        applications = []

    status = (request.GET.get("status") or "all").lower()
    if status not in ApplicationStatus.values:
        status = "all"
    shown = applications if status == "all" else [a for a in applications if a.status == status]

    profile = Profile.objects.filter(user=request.user).first()
    return render(
        request,
        "jobs/dashboard.html",
        {
            "applications": shown,
            "summary": workflow.status_summary(applications),
            "status": status,
            "status_choices": ApplicationStatus.choices,
            "profile": profile,
        },
    )


# -----------------------------
# Recruiter: Create/Edit Jobs
# -----------------------------
@recruiter_required
def create_job(request):
    company = Company.objects.filter(owner=request.user).first()
    if request.method == "POST":
        form = JobForm(request.POST)
        if form.is_valid():
            job = form.save(commit=False)
            job.recruiter = request.user
            job.company = company
            job.save()
            if job.status == JobStatus.DRAFT:
                messages.success(request, "Job saved as draft.")
            else:
                messages.success(request, "Job posted successfully!")
            logger.info("Job created: job_id=%s status=%s recruiter=%s", job.id, job.status, request.user.email)
            return redirect("recruiter_dashboard")
    else:
        form = JobForm(initial={"status": JobStatus.OPEN})

    return render(request, "jobs/job_form.html", {"form": form, "company": company, "job": None})


@recruiter_required
def edit_job(request, job_id):
    job = get_object_or_404(Job, id=job_id)
    if not job.is_owned_by(request.user):
        messages.error(request, "This is not your job posting.")
        return redirect("recruiter_dashboard")

    if request.method == "POST":
        form = JobForm(request.POST, instance=job)
        if form.is_valid():
            form.save()
            workflow.invalidate_for_jobs([job.id])
            messages.success(request, "Job updated.")
            logger.info("Job updated: job_id=%s status=%s recruiter=%s", job.id, job.status, request.user.email)
            return redirect("recruiter_dashboard")
    else:
        form = JobForm(instance=job)

    return render(request, "jobs/job_form.html", {"form": form, "company": job.company, "job": job})


@recruiter_required
def recruiter_dashboard(request):
    jobs = list(
        Job.objects.for_recruiter(request.user)
        .select_related("company")
        .with_application_counts()
        .recent()
    )
    ctx = {
        "jobs": jobs,
        "total_applications": sum(j.applications_count for j in jobs),
        "active_jobs": sum(1 for j in jobs if j.status == JobStatus.OPEN),
        "draft_jobs": sum(1 for j in jobs if j.status == JobStatus.DRAFT),
        "company": Company.objects.filter(owner=request.user).first(),
        "profile": Profile.objects.filter(user=request.user).first(),
    }
    return render(request, "jobs/recruiter_dashboard.html", ctx)


# -----------------------------
# Recruiter: applications
# -----------------------------
@recruiter_required
def job_applications(request, job_id):
    job = Job.objects.select_related("company").filter(id=job_id, recruiter=request.user).first()
    if job is None:
        messages.error(request, "Job not found. It may have been removed or you don't have access.")
        return redirect("recruiter_dashboard")

    try:
        applications = workflow.list_for_job(job.id)
    except WorkflowError as exc:
        _flash_workflow_error(request, exc)
        applications = []

    return render(
        request,
        "jobs/job_applications.html",
        {
            "job": job,
            "applications": applications,
            "summary": workflow.status_summary(applications),
            "status_choices": ApplicationStatus.choices,
        },
    )


@recruiter_required
@require_POST
def update_application_status(request, application_id):
    new_status = (request.POST.get("status") or "").strip()
    next_url = _safe_next(request, request.POST.get("next"))
    try:
        application = workflow.set_status(request.user, application_id, new_status)
    except WorkflowError as exc:
        _flash_workflow_error(request, exc)
        return redirect(next_url or "recruiter_dashboard")

    messages.success(request, "Application status updated!")
    if next_url:
        return redirect(next_url)
    return redirect("job_applications", job_id=application.job_id)


@login_required
def application_detail(request, application_id):
    application = get_object_or_404(
        Application.objects.select_related("job", "job__company", "applicant", "applicant__profile"),
        id=application_id,
    )
    can_manage = application.job.is_owned_by(request.user)
    if not can_manage and application.applicant_id != request.user.pk:
        messages.error(request, "Access denied.")
        return redirect("home")

    return render(
        request,
        "jobs/application_detail.html",
        {
            "application": application,
            "events": application.events.select_related("actor"),
            "can_manage": can_manage,
            "status_choices": ApplicationStatus.choices,
        },
    )
