import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.identity import sign_up
from accounts.models import Company
from jobs import workflow
from jobs.models import ApplicationStatus, EmploymentType, ExperienceLevel, Job, JobStatus, LocationType

User = get_user_model()

_SKILL_POOL = [
    "python",
    "django",
    "postgresql",
    "react",
    "typescript",
    "docker",
    "aws",
    "linux",
    "sql",
    "figma",
    "go",
    "kubernetes",
    "git",
    "rest",
    "graphql",
]

_BENEFIT_POOL = [
    "Health insurance",
    "Remote stipend",
    "401(k) match",
    "Learning budget",
    "Flexible hours",
    "Parental leave",
]

_TITLES = [
    "Backend Engineer",
    "Frontend Developer",
    "Full Stack Engineer",
    "Data Analyst",
    "DevOps Engineer",
    "Product Designer",
    "QA Engineer",
    "Engineering Manager",
]

_CITIES = ["San Francisco, CA", "New York, NY", "Austin, TX", "Seattle, WA", "Denver, CO", "Boston, MA"]


class Command(BaseCommand):
    help = "Seed demo data: recruiters with companies and jobs, seekers with applications."

    def add_arguments(self, parser):
        parser.add_argument("--prefix", type=str, default="demo")
        parser.add_argument("--recruiters", type=int, default=3)
        parser.add_argument("--seekers", type=int, default=8)
        parser.add_argument("--jobs-per-recruiter", type=int, default=4)
        parser.add_argument("--applications-per-seeker", type=int, default=3)
        parser.add_argument("--password", type=str, default="DemoPass123!")
        parser.add_argument("--seed", type=int, default=42)
        parser.add_argument("--wipe", action="store_true", help="Delete existing users whose email starts with prefix before seeding.")

    def _pick(self, rnd, pool, minimum, maximum):
        return sorted(rnd.sample(pool, rnd.randint(minimum, maximum)))

    def _user(self, email, role, full_name, password):
        existing = User.objects.filter(email=email).first()
        if existing:
            return existing
        return sign_up(email, password, role, full_name)

    @transaction.atomic
    def handle(self, *args, **opts):
        rnd = random.Random(opts["seed"])
        prefix = (opts["prefix"] or "demo").strip().lower()
        recruiters_n = max(1, int(opts["recruiters"]))
        seekers_n = max(1, int(opts["seekers"]))
        jobs_per_recruiter = max(1, int(opts["jobs_per_recruiter"]))
        apps_per_seeker = max(0, int(opts["applications_per_seeker"]))
        password = opts["password"]

        if opts["wipe"]:
            deleted, _ = User.objects.filter(email__startswith=f"{prefix}_").delete()
            self.stdout.write(f"Wiped {deleted} rows for prefix '{prefix}'.")

        open_jobs = []
        for i in range(1, recruiters_n + 1):
            recruiter = self._user(
                f"{prefix}_recruiter{i}@example.com", User.Role.RECRUITER, f"Recruiter {i}", password
            )
            company, _ = Company.objects.get_or_create(
                owner=recruiter,
                defaults={
                    "name": f"{prefix.title()} Company {i}",
                    "description": "A fast-growing team building useful software.",
                    "industry": rnd.choice(["Software", "Fintech", "Healthcare", "E-commerce"]),
                    "size": rnd.choice(["1-10", "11-50", "51-200", "201-500"]),
                    "location": rnd.choice(_CITIES),
                },
            )
            for j in range(jobs_per_recruiter):
                salary_min = rnd.randrange(60_000, 120_000, 5_000)
                status = JobStatus.DRAFT if j == jobs_per_recruiter - 1 and jobs_per_recruiter > 1 else JobStatus.OPEN
                job = Job.objects.create(
                    recruiter=recruiter,
                    company=company,
                    title=rnd.choice(_TITLES),
                    description=(
                        "Join our team to design, build and ship features used by thousands of customers. "
                        "You will work closely with product and design."
                    ),
                    requirements="Solid fundamentals and a habit of writing tests.",
                    responsibilities="Own features end to end, review code, mentor peers.",
                    location=company.location,
                    location_type=rnd.choice(LocationType.values),
                    employment_type=rnd.choice(EmploymentType.values),
                    experience_level=rnd.choice(ExperienceLevel.values),
                    salary_min=salary_min,
                    salary_max=salary_min + rnd.randrange(10_000, 50_000, 5_000),
                    status=status,
                    skills=self._pick(rnd, _SKILL_POOL, 3, 5),
                    benefits=self._pick(rnd, _BENEFIT_POOL, 2, 4),
                )
                if job.status == JobStatus.OPEN:
                    open_jobs.append(job)

        applications = 0
        for i in range(1, seekers_n + 1):
            seeker = self._user(f"{prefix}_seeker{i}@example.com", User.Role.JOB_SEEKER, f"Seeker {i}", password)
            profile = seeker.profile
            profile.skills = self._pick(rnd, _SKILL_POOL, 2, 6)
            profile.experience_years = rnd.randint(0, 12)
            profile.location = rnd.choice(_CITIES)
            profile.save(update_fields=["skills", "experience_years", "location", "updated_at"])

            for job in rnd.sample(open_jobs, min(apps_per_seeker, len(open_jobs))):
                if job.applications.filter(applicant=seeker).exists():
                    continue
                app = workflow.submit(seeker, job.id, cover_letter=f"Hello, I am Seeker {i} and I would love to join.")
                new_status = rnd.choice(ApplicationStatus.values)
                if new_status != ApplicationStatus.PENDING:
                    workflow.set_status(job.recruiter, app.id, new_status)
                applications += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {recruiters_n} recruiters, {len(open_jobs)} open jobs, {seekers_n} seekers, "
                f"{applications} applications (password: {password})."
            )
        )
