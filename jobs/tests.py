from datetime import timedelta
from io import StringIO
from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.core import mail
from django.core.cache import cache
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from accounts.models import Company, Notification, Profile, User
from hirehub.fields import split_tags

from . import workflow
from .exceptions import DuplicateApplication, Forbidden, NotFound, Unauthenticated, ValidationError
from .forms import JobForm
from .models import Application, ApplicationEvent, ApplicationStatus, Job, JobStatus

LONG_DESCRIPTION = "Build and operate the services behind our hiring platform, end to end."


def make_user(email, role, full_name=None):
    user = User.objects.create_user(username=email, email=email, password="pass", role=role)
    Profile.objects.create(user=user, full_name=full_name or email.split("@")[0].title(), email=email)
    return user


def make_job(recruiter, title="Backend Engineer", **kwargs):
    kwargs.setdefault("description", LONG_DESCRIPTION)
    kwargs.setdefault("location", "Austin, TX")
    return Job.objects.create(recruiter=recruiter, title=title, **kwargs)


class WorkflowBase(TestCase):
    def setUp(self):
        cache.clear()
        self.r1 = make_user("r1@example.com", User.Role.RECRUITER, "Rita Recruiter")
        self.r2 = make_user("r2@example.com", User.Role.RECRUITER, "Ron Recruiter")
        self.seeker = make_user("s@example.com", User.Role.JOB_SEEKER, "Sam Seeker")
        self.job = make_job(self.r1)


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend")
class SubmitTests(WorkflowBase):
    def test_submit_creates_pending_application_and_notifies_recruiter(self):
        app = workflow.submit(self.seeker, self.job.id, "  I would love to join.  ")

        self.assertEqual(app.status, ApplicationStatus.PENDING)
        self.assertEqual(app.cover_letter, "I would love to join.")
        self.assertEqual(app.applicant_id, self.seeker.id)
        self.assertEqual(list(app.events.values_list("status", flat=True)), ["pending"])

        self.assertTrue(Notification.objects.filter(user=self.r1, title="New application for Backend Engineer").exists())
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["r1@example.com"])
        self.assertIn("New application for Backend Engineer", mail.outbox[0].subject)

    def test_blank_cover_letter_is_stored_as_null(self):
        app = workflow.submit(self.seeker, self.job.id, "   ")
        self.assertIsNone(app.cover_letter)

    def test_second_submit_is_a_duplicate(self):
        workflow.submit(self.seeker, self.job.id)
        with self.assertRaises(DuplicateApplication) as ctx:
            workflow.submit(self.seeker, self.job.id, "again")
        self.assertEqual(str(ctx.exception), "You already applied to this job.")
        self.assertEqual(Application.objects.filter(job=self.job, applicant=self.seeker).count(), 1)

    def test_unique_constraint_maps_to_duplicate(self):
        Application.objects.create(job=self.job, applicant=self.seeker)
        with mock.patch("jobs.models.ApplicationQuerySet.exists", return_value=False):
            with self.assertRaises(DuplicateApplication):
                workflow.submit(self.seeker, self.job.id)
        self.assertEqual(Application.objects.filter(job=self.job, applicant=self.seeker).count(), 1)

    def test_submit_requires_a_signed_in_user(self):
        with self.assertRaises(Unauthenticated):
            workflow.submit(None, self.job.id)
        with self.assertRaises(Unauthenticated):
            workflow.submit(AnonymousUser(), self.job.id)
        self.assertFalse(Application.objects.exists())

    def test_recruiter_cannot_apply(self):
        with self.assertRaises(Forbidden):
            workflow.submit(self.r2, self.job.id)

    def test_missing_and_draft_jobs_are_not_found(self):
        draft = make_job(self.r1, title="Hidden", status=JobStatus.DRAFT)
        with self.assertRaises(NotFound):
            workflow.submit(self.seeker, draft.id)
        with self.assertRaises(NotFound):
            workflow.submit(self.seeker, 999999)

    def test_closed_job_rejects_applications(self):
        closed = make_job(self.r1, title="Filled", status=JobStatus.CLOSED)
        with self.assertRaises(ValidationError):
            workflow.submit(self.seeker, closed.id)

    def test_cover_letter_too_long(self):
        with self.assertRaises(ValidationError):
            workflow.submit(self.seeker, self.job.id, "x" * (workflow.COVER_LETTER_MAX_LENGTH + 1))
        self.assertFalse(Application.objects.exists())


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend")
class SetStatusTests(WorkflowBase):
    def setUp(self):
        super().setUp()
        self.app = workflow.submit(self.seeker, self.job.id, "Hello")
        mail.outbox.clear()

    def test_any_status_can_follow_any_other(self):
        sequence = ["shortlisted", "accepted", "pending", "rejected", "reviewed", "accepted"]
        for status in sequence:
            workflow.set_status(self.r1, self.app.id, status)
            self.app.refresh_from_db()
            self.assertEqual(self.app.status, status)

        events = list(ApplicationEvent.objects.filter(application=self.app).values_list("previous_status", "status"))
        self.assertEqual(events[0], (None, "pending"))
        self.assertEqual(events[1:], list(zip(["pending"] + sequence[:-1], sequence)))

    def test_other_recruiter_is_forbidden(self):
        with self.assertRaises(Forbidden):
            workflow.set_status(self.r2, self.app.id, "accepted")
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "pending")

    def test_seeker_cannot_change_own_status(self):
        with self.assertRaises(Forbidden):
            workflow.set_status(self.seeker, self.app.id, "accepted")

    def test_unknown_application(self):
        with self.assertRaises(NotFound):
            workflow.set_status(self.r1, 999999, "reviewed")

    def test_unknown_status_value(self):
        with self.assertRaises(ValidationError):
            workflow.set_status(self.r1, self.app.id, "hired")

    def test_anonymous_cannot_change_status(self):
        with self.assertRaises(Unauthenticated):
            workflow.set_status(AnonymousUser(), self.app.id, "reviewed")

    def test_applicant_notified_only_on_change(self):
        workflow.set_status(self.r1, self.app.id, "shortlisted")
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["s@example.com"])
        self.assertIn("Update on your application for Backend Engineer", mail.outbox[0].subject)
        self.assertIn("SHORTLISTED", mail.outbox[0].body)
        notif = Notification.objects.get(user=self.seeker)
        self.assertEqual(notif.url, f"/jobs/applications/{self.app.id}/")

        workflow.set_status(self.r1, self.app.id, "shortlisted")
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(Notification.objects.filter(user=self.seeker).count(), 1)


class ListingTests(WorkflowBase):
    def test_list_for_seeker_is_newest_first(self):
        jobs = [self.job, make_job(self.r1, title="Data Analyst"), make_job(self.r2, title="QA Engineer")]
        apps = [Application.objects.create(job=j, applicant=self.seeker) for j in jobs]
        now = timezone.now()
        for offset, app in zip([3, 1, 2], apps):
            Application.objects.filter(pk=app.pk).update(created_at=now - timedelta(days=offset))

        rows = workflow.list_for_seeker(self.seeker.id)
        self.assertEqual([a.id for a in rows], [apps[1].id, apps[2].id, apps[0].id])
        self.assertEqual(rows[0].job.title, "Data Analyst")

    def test_list_for_seeker_only_returns_own_applications(self):
        other = make_user("other@example.com", User.Role.JOB_SEEKER)
        Application.objects.create(job=self.job, applicant=other)
        self.assertEqual(workflow.list_for_seeker(self.seeker.id), [])

    def test_submit_invalidates_cached_lists(self):
        self.assertEqual(workflow.list_for_seeker(self.seeker.id), [])
        self.assertEqual(workflow.list_for_job(self.job.id), [])

        app = workflow.submit(self.seeker, self.job.id)

        self.assertEqual([a.id for a in workflow.list_for_seeker(self.seeker.id)], [app.id])
        self.assertEqual([a.id for a in workflow.list_for_job(self.job.id)], [app.id])

    def test_set_status_invalidates_cached_lists(self):
        app = workflow.submit(self.seeker, self.job.id)
        self.assertEqual(workflow.list_for_job(self.job.id)[0].status, "pending")
        self.assertEqual(workflow.list_for_seeker(self.seeker.id)[0].status, "pending")

        workflow.set_status(self.r1, app.id, "reviewed")

        self.assertEqual(workflow.list_for_job(self.job.id)[0].status, "reviewed")
        self.assertEqual(workflow.list_for_seeker(self.seeker.id)[0].status, "reviewed")

    def test_status_summary(self):
        summary = workflow.status_summary(["pending", "pending", "shortlisted", "accepted"])
        self.assertEqual(
            summary,
            {"total": 4, "pending": 2, "reviewed": 0, "shortlisted": 1, "rejected": 0, "accepted": 1},
        )

    def test_status_summary_from_list(self):
        seekers = [make_user(f"s{i}@example.com", User.Role.JOB_SEEKER) for i in range(4)]
        for seeker, status in zip(seekers, ["pending", "pending", "shortlisted", "accepted"]):
            Application.objects.create(job=self.job, applicant=seeker, status=status)

        summary = workflow.status_summary(workflow.list_for_job(self.job.id))
        self.assertEqual(summary["total"], 4)
        self.assertEqual(summary["pending"], 2)
        self.assertEqual(summary["shortlisted"], 1)
        self.assertEqual(summary["accepted"], 1)
        self.assertEqual(summary["rejected"], 0)

    def test_status_summary_empty(self):
        self.assertEqual(workflow.status_summary([])["total"], 0)


class JobModelTests(TestCase):
    def test_salary_display(self):
        self.assertEqual(Job(salary_min=50000, salary_max=90000).salary_display(), "$50,000 - $90,000")
        self.assertEqual(Job(salary_min=50000).salary_display(), "From $50,000")
        self.assertEqual(Job(salary_max=90000).salary_display(), "Up to $90,000")
        self.assertIsNone(Job().salary_display())

    def test_split_tags(self):
        self.assertEqual(split_tags("Python, Django;  sql\npython,,"), ["Python", "Django", "sql"])
        self.assertEqual(split_tags(""), [])


class JobFormTests(TestCase):
    def _data(self, **overrides):
        data = {
            "title": "Backend Engineer",
            "location": "Austin, TX",
            "location_type": "remote",
            "employment_type": "full_time",
            "experience_level": "",
            "salary_min": "",
            "salary_max": "",
            "description": LONG_DESCRIPTION,
            "requirements": "",
            "responsibilities": "",
            "skills": "Python, Django, python",
            "benefits": "",
            "status": "open",
        }
        data.update(overrides)
        return data

    def test_valid_form(self):
        form = JobForm(self._data())
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data["skills"], ["Python", "Django"])
        self.assertIsNone(form.cleaned_data["experience_level"])

    def test_short_fields_rejected(self):
        form = JobForm(self._data(title="QA", description="Too short", location="X"))
        self.assertFalse(form.is_valid())
        self.assertIn("Title must be at least 3 characters", form.errors["title"])
        self.assertIn("Description must be at least 50 characters", form.errors["description"])
        self.assertIn("Location is required", form.errors["location"])

    def test_salary_range_checked(self):
        form = JobForm(self._data(salary_min="90000", salary_max="50000"))
        self.assertFalse(form.is_valid())
        self.assertIn("salary_max", form.errors)

    def test_list_inputs_have_no_whole_field_maxlength(self):
        form = JobForm()
        self.assertNotIn("maxlength", str(form["skills"]))
        self.assertNotIn("maxlength", str(form["benefits"]))

    def test_list_items_limited_individually(self):
        many_skills = ", ".join(f"skill{i}" for i in range(25))
        form = JobForm(self._data(skills=many_skills))
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(len(form.cleaned_data["skills"]), 25)

        form = JobForm(self._data(skills="Python, " + "x" * 61))
        self.assertFalse(form.is_valid())
        self.assertIn("skills", form.errors)

    def test_new_job_cannot_be_closed(self):
        form = JobForm(self._data(status="closed"))
        self.assertFalse(form.is_valid())
        self.assertIn("status", form.errors)


class JobBrowsingViewTests(TestCase):
    def setUp(self):
        cache.clear()
        self.recruiter = make_user("r@example.com", User.Role.RECRUITER)
        self.company = Company.objects.create(owner=self.recruiter, name="Acme")
        self.remote = make_job(self.recruiter, title="Remote Python Developer", company=self.company, location_type="remote")
        self.onsite = make_job(self.recruiter, title="Office Manager", location_type="onsite", employment_type="part_time")
        self.draft = make_job(self.recruiter, title="Secret Role", status=JobStatus.DRAFT)

    def test_home(self):
        resp = self.client.get(reverse("home"))
        self.assertContains(resp, "Find your dream job today")
        self.assertEqual(resp.context["stats"]["jobs"], 2)
        self.assertNotContains(resp, "Secret Role")

    def test_job_list_shows_open_jobs_only(self):
        resp = self.client.get(reverse("job_list"))
        self.assertContains(resp, "Remote Python Developer")
        self.assertContains(resp, "Office Manager")
        self.assertNotContains(resp, "Secret Role")
        self.assertEqual(resp.context["total"], 2)

    def test_job_list_filters(self):
        resp = self.client.get(reverse("job_list"), {"q": "python"})
        self.assertEqual([j.id for j in resp.context["jobs"]], [self.remote.id])

        resp = self.client.get(reverse("job_list"), {"location_type": "onsite"})
        self.assertEqual([j.id for j in resp.context["jobs"]], [self.onsite.id])

        resp = self.client.get(reverse("job_list"), {"employment_type": "part_time", "location_type": "all"})
        self.assertEqual([j.id for j in resp.context["jobs"]], [self.onsite.id])

        resp = self.client.get(reverse("job_list"), {"location_type": "moon"})
        self.assertEqual(resp.context["total"], 2)

    def test_job_list_empty(self):
        resp = self.client.get(reverse("job_list"), {"q": "astronaut"})
        self.assertContains(resp, "No jobs found")

    def test_draft_hidden_from_public_but_visible_to_owner(self):
        resp = self.client.get(reverse("job_detail", args=[self.draft.id]))
        self.assertEqual(resp.status_code, 404)

        self.client.login(username="r@example.com", password="pass")
        resp = self.client.get(reverse("job_detail", args=[self.draft.id]))
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.context["is_owner"])

    def test_recruiter_sees_no_apply_form(self):
        make_user("other-r@example.com", User.Role.RECRUITER)
        self.client.login(username="other-r@example.com", password="pass")
        resp = self.client.get(reverse("job_detail", args=[self.remote.id]))
        self.assertFalse(resp.context["can_apply"])
        self.assertContains(resp, "Only job seekers can apply to jobs.")


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend")
class ApplyViewTests(TestCase):
    def setUp(self):
        cache.clear()
        self.recruiter = make_user("r@example.com", User.Role.RECRUITER)
        self.seeker = make_user("s@example.com", User.Role.JOB_SEEKER, "Sam Seeker")
        self.job = make_job(self.recruiter)

    def test_apply_flow(self):
        self.client.login(username="s@example.com", password="pass")
        resp = self.client.get(reverse("job_detail", args=[self.job.id]))
        self.assertContains(resp, "Apply for this job")

        resp = self.client.post(reverse("apply_job", args=[self.job.id]), {"cover_letter": "Hi there"}, follow=True)
        self.assertRedirects(resp, reverse("job_detail", args=[self.job.id]))
        self.assertContains(resp, "Application submitted successfully!")
        self.assertContains(resp, "Application submitted")
        self.assertEqual(Application.objects.get(job=self.job).cover_letter, "Hi there")

    def test_apply_twice_shows_duplicate_message(self):
        self.client.login(username="s@example.com", password="pass")
        self.client.post(reverse("apply_job", args=[self.job.id]), {"cover_letter": ""})
        resp = self.client.post(reverse("apply_job", args=[self.job.id]), {"cover_letter": ""}, follow=True)
        self.assertContains(resp, "You already applied to this job.")
        self.assertEqual(Application.objects.filter(job=self.job).count(), 1)

    def test_apply_requires_login(self):
        resp = self.client.post(reverse("apply_job", args=[self.job.id]))
        self.assertEqual(resp.status_code, 302)
        self.assertIn(reverse("login"), resp["Location"])
        self.assertFalse(Application.objects.exists())

    def test_recruiter_cannot_apply(self):
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.post(reverse("apply_job", args=[self.job.id]))
        self.assertRedirects(resp, reverse("home"))
        self.assertFalse(Application.objects.exists())

    def test_apply_get_not_allowed(self):
        self.client.login(username="s@example.com", password="pass")
        resp = self.client.get(reverse("apply_job", args=[self.job.id]))
        self.assertEqual(resp.status_code, 405)

    def test_seeker_dashboard(self):
        workflow.submit(self.seeker, self.job.id)
        self.client.login(username="s@example.com", password="pass")
        resp = self.client.get(reverse("dashboard"))
        self.assertContains(resp, "Welcome back, Sam!")
        self.assertContains(resp, "Total Applications")
        self.assertEqual(resp.context["summary"]["total"], 1)
        self.assertEqual(resp.context["summary"]["pending"], 1)

        resp = self.client.get(reverse("dashboard"), {"status": "accepted"})
        self.assertEqual(resp.context["applications"], [])
        self.assertContains(resp, "No applications yet")

    def test_recruiter_dashboard_redirect(self):
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.get(reverse("dashboard"))
        self.assertRedirects(resp, reverse("recruiter_dashboard"))


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend")
class RecruiterViewTests(TestCase):
    def setUp(self):
        cache.clear()
        self.recruiter = make_user("r@example.com", User.Role.RECRUITER)
        self.other = make_user("r2@example.com", User.Role.RECRUITER)
        self.seeker = make_user("s@example.com", User.Role.JOB_SEEKER, "Sam Seeker")
        self.company = Company.objects.create(owner=self.recruiter, name="Acme")
        self.job = make_job(self.recruiter, company=self.company)
        self.app = workflow.submit(self.seeker, self.job.id, "Please hire me")
        mail.outbox.clear()

    def _job_data(self, **overrides):
        data = {
            "title": "Platform Engineer",
            "location": "Remote",
            "location_type": "remote",
            "employment_type": "contract",
            "experience_level": "senior",
            "salary_min": "100000",
            "salary_max": "150000",
            "description": LONG_DESCRIPTION,
            "requirements": "",
            "responsibilities": "",
            "skills": "Go, Kubernetes",
            "benefits": "Remote stipend",
            "status": "open",
        }
        data.update(overrides)
        return data

    def test_create_job_assigns_recruiter_and_company(self):
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.post(reverse("create_job"), self._job_data())
        self.assertRedirects(resp, reverse("recruiter_dashboard"))
        job = Job.objects.get(title="Platform Engineer")
        self.assertEqual(job.recruiter, self.recruiter)
        self.assertEqual(job.company, self.company)
        self.assertEqual(job.skills, ["Go", "Kubernetes"])
        self.assertEqual(job.benefits, ["Remote stipend"])

    def test_create_job_invalid(self):
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.post(reverse("create_job"), self._job_data(description="short"))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Description must be at least 50 characters")
        self.assertFalse(Job.objects.filter(title="Platform Engineer").exists())

    def test_edit_job_only_by_owner(self):
        self.client.login(username="r2@example.com", password="pass")
        resp = self.client.post(reverse("edit_job", args=[self.job.id]), self._job_data(title="Hijacked"))
        self.assertRedirects(resp, reverse("recruiter_dashboard"))
        self.job.refresh_from_db()
        self.assertEqual(self.job.title, "Backend Engineer")

    def test_edit_job_refreshes_cached_lists(self):
        self.assertEqual(workflow.list_for_seeker(self.seeker.id)[0].job.title, "Backend Engineer")
        self.assertEqual(len(workflow.list_for_job(self.job.id)), 1)

        self.client.login(username="r@example.com", password="pass")
        self.client.post(reverse("edit_job", args=[self.job.id]), self._job_data(title="Staff Backend Engineer", status="closed"))

        row = workflow.list_for_seeker(self.seeker.id)[0]
        self.assertEqual(row.job.title, "Staff Backend Engineer")
        self.assertEqual(row.job.status, JobStatus.CLOSED)

    def test_profile_edit_refreshes_applicant_list(self):
        self.assertEqual(workflow.list_for_job(self.job.id)[0].applicant.profile.full_name, "Sam Seeker")

        self.client.login(username="s@example.com", password="pass")
        self.client.post(
            reverse("profile_edit"),
            {"full_name": "Samantha Seeker", "phone": "", "location": "", "bio": "", "skills": "Go", "experience_years": ""},
        )

        profile = workflow.list_for_job(self.job.id)[0].applicant.profile
        self.assertEqual(profile.full_name, "Samantha Seeker")
        self.assertEqual(profile.skills, ["Go"])

    def test_company_edit_refreshes_seeker_list(self):
        self.assertEqual(workflow.list_for_seeker(self.seeker.id)[0].job.company.name, "Acme")

        self.client.login(username="r@example.com", password="pass")
        self.client.post(reverse("company_edit"), {"name": "Acme Corp"})

        self.assertEqual(workflow.list_for_seeker(self.seeker.id)[0].job.company.name, "Acme Corp")

    def test_owner_can_close_job(self):
        self.client.login(username="r@example.com", password="pass")
        self.client.post(reverse("edit_job", args=[self.job.id]), self._job_data(title="Backend Engineer", status="closed"))
        self.job.refresh_from_db()
        self.assertEqual(self.job.status, JobStatus.CLOSED)

    def test_recruiter_dashboard_counts(self):
        make_job(self.recruiter, title="Draft Role", status=JobStatus.DRAFT)
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.get(reverse("recruiter_dashboard"))
        self.assertContains(resp, "Recruiter Dashboard")
        self.assertEqual(resp.context["total_applications"], 1)
        self.assertEqual(resp.context["active_jobs"], 1)
        self.assertEqual(resp.context["draft_jobs"], 1)

    def test_job_applications_for_owner(self):
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.get(reverse("job_applications", args=[self.job.id]))
        self.assertContains(resp, "Applications (1)")
        self.assertContains(resp, "Sam Seeker")
        self.assertContains(resp, "Please hire me")

    def test_job_applications_hidden_from_other_recruiter(self):
        self.client.login(username="r2@example.com", password="pass")
        resp = self.client.get(reverse("job_applications", args=[self.job.id]))
        self.assertRedirects(resp, reverse("recruiter_dashboard"))

    def test_update_status_view(self):
        self.client.login(username="r@example.com", password="pass")
        resp = self.client.post(reverse("update_application_status", args=[self.app.id]), {"status": "shortlisted"})
        self.assertRedirects(resp, reverse("job_applications", args=[self.job.id]))
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "shortlisted")
        self.assertEqual(len(mail.outbox), 1)
        self.assertTrue(Notification.objects.filter(user=self.seeker, title="Application update for Backend Engineer").exists())

    def test_update_status_view_honours_next(self):
        self.client.login(username="r@example.com", password="pass")
        detail = reverse("application_detail", args=[self.app.id])
        resp = self.client.post(reverse("update_application_status", args=[self.app.id]), {"status": "rejected", "next": detail})
        self.assertRedirects(resp, detail)

    def test_update_status_view_by_other_recruiter(self):
        self.client.login(username="r2@example.com", password="pass")
        resp = self.client.post(reverse("update_application_status", args=[self.app.id]), {"status": "accepted"}, follow=True)
        self.assertContains(resp, "Access denied.")
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "pending")
        self.assertEqual(len(mail.outbox), 0)

    def test_application_detail_access(self):
        self.client.login(username="s@example.com", password="pass")
        resp = self.client.get(reverse("application_detail", args=[self.app.id]))
        self.assertContains(resp, "Timeline")
        self.assertFalse(resp.context["can_manage"])

        self.client.login(username="r@example.com", password="pass")
        resp = self.client.get(reverse("application_detail", args=[self.app.id]))
        self.assertTrue(resp.context["can_manage"])

        make_user("nosy@example.com", User.Role.JOB_SEEKER)
        self.client.login(username="nosy@example.com", password="pass")
        resp = self.client.get(reverse("application_detail", args=[self.app.id]))
        self.assertRedirects(resp, reverse("home"))


@override_settings(EMAIL_BACKEND="django.core.mail.backends.locmem.EmailBackend")
class SeedDemoDataTests(TestCase):
    def setUp(self):
        cache.clear()

    def test_seed_creates_users_jobs_and_applications(self):
        out = StringIO()
        call_command(
            "seed_demo_data",
            recruiters=2,
            seekers=3,
            jobs_per_recruiter=2,
            applications_per_seeker=1,
            stdout=out,
        )
        self.assertEqual(User.objects.filter(role="recruiter", email__startswith="demo_").count(), 2)
        self.assertEqual(User.objects.filter(role="job_seeker", email__startswith="demo_").count(), 3)
        self.assertEqual(Company.objects.count(), 2)
        self.assertEqual(Job.objects.filter(status=JobStatus.DRAFT).count(), 2)
        self.assertEqual(Job.objects.filter(status=JobStatus.OPEN).count(), 2)
        self.assertEqual(Application.objects.count(), 3)
        self.assertIn("Seeded", out.getvalue())

        call_command("seed_demo_data", recruiters=2, seekers=3, jobs_per_recruiter=2, applications_per_seeker=1, stdout=StringIO())
        self.assertEqual(User.objects.filter(email__startswith="demo_").count(), 5)
