from django.conf import settings
from django.db import models
from django.db.models import Count, Q


class JobStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    OPEN = "open", "Active"
    CLOSED = "closed", "Closed"


class LocationType(models.TextChoices):
    ONSITE = "onsite", "On-site"
    REMOTE = "remote", "Remote"
    HYBRID = "hybrid", "Hybrid"


class EmploymentType(models.TextChoices):
    FULL_TIME = "full_time", "Full-time"
    PART_TIME = "part_time", "Part-time"
    CONTRACT = "contract", "Contract"
    INTERNSHIP = "internship", "Internship"


class ExperienceLevel(models.TextChoices):
    ENTRY = "entry", "Entry Level"
    MID = "mid", "Mid Level"
    SENIOR = "senior", "Senior Level"
    LEAD = "lead", "Lead / Manager"
    EXECUTIVE = "executive", "Executive"


class ApplicationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    REVIEWED = "reviewed", "Reviewed"
    SHORTLISTED = "shortlisted", "Shortlisted"
    REJECTED = "rejected", "Rejected"
    ACCEPTED = "accepted", "Accepted"


# "all" (or empty) means no filter on the listing page
_ANY = {"", "all", "any"}


class JobQuerySet(models.QuerySet):
    def open(self):
        return self.filter(status=JobStatus.OPEN)

    def for_recruiter(self, user):
        return self.filter(recruiter=user)

    def recent(self):
        return self.order_by("-created_at", "-id")

    def visible_to(self, user):
        """Drafts are only visible to the recruiter who owns them."""
        if user is not None and user.is_authenticated:
            return self.filter(~Q(status=JobStatus.DRAFT) | Q(recruiter=user))
        return self.exclude(status=JobStatus.DRAFT)

    def with_application_counts(self):
        return self.annotate(
            applications_count=Count("applications", distinct=True),
            pending_count=Count(
                "applications",
                filter=Q(applications__status=ApplicationStatus.PENDING),
                distinct=True,
            ),
        )

    def search(self, q=None, location_type=None, employment_type=None):
        qs = self
        q = (q or "").strip()
        if q:
            qs = qs.filter(Q(title__icontains=q) | Q(description__icontains=q))
        location_type = (location_type or "").strip().lower()
        if location_type not in _ANY and location_type in LocationType.values:
            qs = qs.filter(location_type=location_type)
        employment_type = (employment_type or "").strip().lower()
        if employment_type not in _ANY and employment_type in EmploymentType.values:
            qs = qs.filter(employment_type=employment_type)
        return qs


class Job(models.Model):
    recruiter = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="jobs")
    company = models.ForeignKey(
        "accounts.Company", on_delete=models.SET_NULL, related_name="jobs", blank=True, null=True
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    requirements = models.TextField(blank=True, null=True)
    responsibilities = models.TextField(blank=True, null=True)
    location = models.CharField(max_length=255)
    location_type = models.CharField(max_length=20, choices=LocationType.choices, default=LocationType.ONSITE)
    employment_type = models.CharField(max_length=20, choices=EmploymentType.choices, default=EmploymentType.FULL_TIME)
    experience_level = models.CharField(max_length=20, choices=ExperienceLevel.choices, blank=True, null=True)
    salary_min = models.PositiveIntegerField(blank=True, null=True)
    salary_max = models.PositiveIntegerField(blank=True, null=True)
    salary_currency = models.CharField(max_length=3, default="USD")
    status = models.CharField(max_length=20, choices=JobStatus.choices, default=JobStatus.OPEN)
    skills = models.JSONField(default=list, blank=True)
    benefits = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = JobQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    @property
    def is_open(self):
        return self.status == JobStatus.OPEN

    def is_owned_by(self, user):
        return user is not None and user.is_authenticated and self.recruiter_id == user.pk

    def salary_display(self):
        symbol = "$" if self.salary_currency == "USD" else f"{self.salary_currency} "
        lo, hi = self.salary_min, self.salary_max
        if lo and hi:
            return f"{symbol}{lo:,} - {symbol}{hi:,}"
        if lo:
            return f"From {symbol}{lo:,}"
        if hi:
            return f"Up to {symbol}{hi:,}"
        return None


class ApplicationQuerySet(models.QuerySet):
    def for_seeker(self, user_id):
        return self.filter(applicant_id=user_id)

    def for_job(self, job_id):
        return self.filter(job_id=job_id)

    def recent(self):
        return self.order_by("-created_at", "-id")


class Application(models.Model):
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="applications")
    applicant = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="applications")
    cover_letter = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=ApplicationStatus.choices, default=ApplicationStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ApplicationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["job", "applicant"], name="unique_application_per_job"),
        ]

    def __str__(self):
        return f"{self.applicant} → {self.job.title}"


class ApplicationEvent(models.Model):
    """Timeline row written on submit and on every status change."""

    application = models.ForeignKey(Application, on_delete=models.CASCADE, related_name="events")
    status = models.CharField(max_length=20, choices=ApplicationStatus.choices)
    previous_status = models.CharField(max_length=20, choices=ApplicationStatus.choices, blank=True, null=True)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, related_name="+", blank=True, null=True
    )
    note = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"#{self.application_id}: {self.previous_status or '-'} → {self.status}"
