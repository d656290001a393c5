"""Application workflow: submit, re-status and list job applications.

Callers pass the acting user explicitly (``request.user`` in views).
Status changes are an unconditional overwrite: any status may follow any
other, and nothing is treated as terminal.
"""
import logging
from collections import Counter

from django.conf import settings
from django.core.cache import cache
from django.db import DatabaseError, IntegrityError, transaction

from .exceptions import (
    DuplicateApplication,
    Forbidden,
    NotFound,
    RemoteFailure,
    Unauthenticated,
    ValidationError,
)
from .models import Application, ApplicationStatus, Job, JobStatus
from .utils import (
    notify_applicant_status_change,
    notify_recruiter_new_application,
    record_application_event,
)

logger = logging.getLogger(__name__)

COVER_LETTER_MAX_LENGTH = 5000


def seeker_cache_key(seeker_id) -> str:
    return f"my-applications:{seeker_id}"


def job_cache_key(job_id) -> str:
    return f"job-applications:{job_id}"


def _cache_timeout() -> int:
    return int(getattr(settings, "APPLICATION_LIST_CACHE_SECONDS", 60))


def invalidate_application_lists(*, seeker_id=None, job_id=None) -> None:
    keys = []
    if seeker_id is not None:
        keys.append(seeker_cache_key(seeker_id))
    if job_id is not None:
        keys.append(job_cache_key(job_id))
    if keys:
        cache.delete_many(keys)


def invalidate_for_jobs(job_ids) -> None:
    """Drop cached lists that embed these jobs (job lists and their applicants' lists)."""
    job_ids = list(job_ids)
    if not job_ids:
        return
    seeker_ids = (
        Application.objects.filter(job_id__in=job_ids)
        .values_list("applicant_id", flat=True)
        .distinct()
    )
    keys = [job_cache_key(j) for j in job_ids] + [seeker_cache_key(s) for s in seeker_ids]
    cache.delete_many(keys)


def invalidate_for_seeker(seeker_id) -> None:
    """Drop the seeker's list and every job list the seeker's profile appears in."""
    job_ids = Application.objects.for_seeker(seeker_id).values_list("job_id", flat=True)
    keys = [seeker_cache_key(seeker_id)] + [job_cache_key(j) for j in job_ids]
    cache.delete_many(keys)


def _require_user(user):
    if user is None or not getattr(user, "is_authenticated", False):
        raise Unauthenticated()
    return user


def submit(user, job_id, cover_letter=None) -> Application:
    """Create a pending application from ``user`` to job ``job_id``."""
    from accounts.models import User

    _require_user(user)
    if getattr(user, "role", None) != User.Role.JOB_SEEKER:
        raise Forbidden("Only job seekers can apply.")

    cover_letter = (cover_letter or "").strip() or None
    if cover_letter and len(cover_letter) > COVER_LETTER_MAX_LENGTH:
        raise ValidationError(f"Cover letter must be at most {COVER_LETTER_MAX_LENGTH} characters.")

    try:
        job = (
            Job.objects.select_related("recruiter")
            .exclude(status=JobStatus.DRAFT)
            .filter(pk=job_id)
            .first()
        )
        if job is None:
            raise NotFound("Job not found.")
        if job.status != JobStatus.OPEN:
            raise ValidationError("This job is no longer accepting applications.")

        # Pre-check for a friendly message; the unique constraint still decides races.
        if Application.objects.filter(job=job, applicant=user).exists():
            raise DuplicateApplication()

        with transaction.atomic():
            application = Application.objects.create(
                job=job,
                applicant=user,
                cover_letter=cover_letter,
                status=ApplicationStatus.PENDING,
            )
            record_application_event(application, ApplicationStatus.PENDING, actor=user, note="Application submitted")
    except IntegrityError as exc:
        logger.info("Duplicate application rejected by store: job_id=%s user=%s", job_id, user.pk)
        raise DuplicateApplication() from exc
    except DatabaseError as exc:
        logger.exception("Application submit failed: job_id=%s user=%s", job_id, user.pk)
        raise RemoteFailure(str(exc)) from exc

    invalidate_application_lists(seeker_id=user.pk, job_id=job.pk)
    notify_recruiter_new_application(application)
    logger.info("Application submitted: app_id=%s job_id=%s user=%s", application.id, job.id, user.pk)
    return application


def set_status(user, application_id, new_status) -> Application:
    """Overwrite an application's status. Only the job's recruiter may do this."""
    if new_status not in ApplicationStatus.values:
        raise ValidationError(f"Unknown application status: {new_status!r}.")
    _require_user(user)

    try:
        application = (
            Application.objects.select_related("job", "applicant")
            .filter(pk=application_id)
            .first()
        )
        if application is None:
            raise NotFound("Application not found.")
        if application.job.recruiter_id != user.pk:
            logger.warning(
                "Status change denied: app_id=%s user=%s owner=%s",
                application.id,
                user.pk,
                application.job.recruiter_id,
            )
            raise Forbidden()

        previous_status = application.status
        with transaction.atomic():
            application.status = new_status
            application.save(update_fields=["status", "updated_at"])
            record_application_event(
                application,
                new_status,
                previous_status=previous_status,
                actor=user,
                note=f"Status changed from {previous_status} to {new_status}",
            )
    except DatabaseError as exc:
        logger.exception("Status change failed: app_id=%s", application_id)
        raise RemoteFailure(str(exc)) from exc

    invalidate_application_lists(seeker_id=application.applicant_id, job_id=application.job_id)
    if previous_status != new_status:
        notify_applicant_status_change(application, previous_status)
    logger.info(
        "Application status changed: app_id=%s from=%s to=%s by=%s",
        application.id,
        previous_status,
        new_status,
        user.pk,
    )
    return application


def list_for_seeker(seeker_id) -> list[Application]:
    key = seeker_cache_key(seeker_id)
    cached = cache.get(key)
    if cached is not None:
        return cached
    try:
        rows = list(
            Application.objects.for_seeker(seeker_id)
            .select_related("job", "job__company")
            .recent()
        )
    except DatabaseError as exc:
        raise RemoteFailure(str(exc)) from exc
    cache.set(key, rows, timeout=_cache_timeout())
    return rows


def list_for_job(job_id) -> list[Application]:
    key = job_cache_key(job_id)
    cached = cache.get(key)
    if cached is not None:
        return cached
    try:
        rows = list(
            Application.objects.for_job(job_id)
            .select_related("applicant", "applicant__profile")
            .recent()
        )
    except DatabaseError as exc:
        raise RemoteFailure(str(exc)) from exc
    cache.set(key, rows, timeout=_cache_timeout())
    return rows


def status_summary(applications) -> dict[str, int]:
    counts = Counter(getattr(a, "status", a) for a in applications)
    summary = {"total": sum(counts.values())}
    for status in ApplicationStatus.values:
        summary[status] = counts.get(status, 0)
    return summary
