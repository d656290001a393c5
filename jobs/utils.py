import logging

from hirehub.mailer import send_notification_email

logger = logging.getLogger(__name__)


def create_in_app_notification(user, title: str, message: str = "", url: str = ""):
    try:
        from accounts.models import Notification
        Notification.objects.create(user=user, title=title, message=message or None, url=url or None)
    except Exception:
        logger.exception("Failed to create in-app notification: user_id=%s", getattr(user, "pk", None))


def record_application_event(application, status: str, *, previous_status=None, actor=None, note=None):
    """Append a timeline event for an application."""
    from .models import ApplicationEvent
    return ApplicationEvent.objects.create(
        application=application,
        status=status,
        previous_status=previous_status,
        actor=actor,
        note=note,
    )


def notify_recruiter_new_application(application):
    job = application.job
    recruiter = job.recruiter
    applicant_name = application.applicant.display_name()

    create_in_app_notification(
        recruiter,
        title=f"New application for {job.title}",
        message=f"Candidate: {applicant_name}",
        url=f"/jobs/{job.id}/applications/",
    )
    try:
        send_notification_email(
            to_emails=[recruiter.email],
            subject=f"HireHub: New application for {job.title}",
            message=(
                f"You have a new application for '{job.title}'.\n"
                f"Candidate: {applicant_name}\n"
                f"Application id: {application.id}"
            ),
            tag="NEW_APPLICATION",
            meta={"job_id": job.id, "application_id": application.id, "recruiter_user_id": recruiter.id},
        )
    except Exception:
        logger.exception("Email notification failed: kind=new_application app_id=%s", application.id)


def notify_applicant_status_change(application, previous_status: str):
    user = application.applicant
    job_title = application.job.title
    label = application.get_status_display()

    create_in_app_notification(
        user,
        title=f"Application update for {job_title}",
        message=f"Your application status changed to {label.lower()}.",
        url=f"/jobs/applications/{application.id}/",
    )
    try:
        send_notification_email(
            to_emails=[user.email],
            subject=f"HireHub: Update on your application for {job_title}",
            message=(
                f"Hello {user.display_name()},\n\n"
                f"Your application for '{job_title}' is now {label.upper()}.\n\n"
                "HireHub"
            ),
            tag="APPLICATION_STATUS",
            meta={
                "application_id": application.id,
                "job_id": application.job_id,
                "previous_status": previous_status,
                "status": application.status,
                "user_id": user.id,
            },
        )
    except Exception:
        logger.exception("Email notification failed: kind=status app_id=%s", application.id)
