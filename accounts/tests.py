from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse

from .identity import sign_up
from .models import Company, Notification, Profile, User


class RegistrationTests(TestCase):
    def _post(self, **overrides):
        data = {
            "full_name": "Ada Lovelace",
            "email": "Ada@Example.com",
            "password": "Engine-Notes-1843",
            "confirm_password": "Engine-Notes-1843",
            "role": "job_seeker",
        }
        data.update(overrides)
        return self.client.post(reverse("register"), data)

    def test_register_job_seeker_creates_profile_and_logs_in(self):
        resp = self._post()
        self.assertRedirects(resp, reverse("dashboard"))

        user = User.objects.get(email="ada@example.com")
        self.assertEqual(user.role, "job_seeker")
        self.assertEqual(user.username, "ada@example.com")
        self.assertEqual(Profile.objects.get(user=user).full_name, "Ada Lovelace")
        self.assertEqual(self.client.session["role"], "job_seeker")
        self.assertEqual(int(self.client.session["_auth_user_id"]), user.pk)

    def test_register_recruiter_lands_on_recruiter_dashboard(self):
        resp = self._post(email="grace@example.com", role="recruiter", full_name="Grace Hopper")
        self.assertRedirects(resp, reverse("recruiter_dashboard"))
        self.assertEqual(User.objects.get(email="grace@example.com").role, "recruiter")

    def test_register_rejects_short_password(self):
        resp = self._post(password="short", confirm_password="short")
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Password must be at least 8 characters")
        self.assertFalse(User.objects.exists())

    def test_register_rejects_mismatched_confirmation(self):
        resp = self._post(confirm_password="Engine-Notes-1844")
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Passwords don")
        self.assertFalse(User.objects.exists())

    def test_register_rejects_short_name_and_bad_email(self):
        resp = self._post(full_name="A", email="not-an-email")
        self.assertContains(resp, "Name must be at least 2 characters")
        self.assertContains(resp, "Please enter a valid email address")

    def test_register_rejects_duplicate_email(self):
        sign_up("ada@example.com", "Engine-Notes-1843", "job_seeker", "Ada")
        resp = self._post()
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "An account with this email already exists.")
        self.assertEqual(User.objects.count(), 1)


class IdentityTests(TestCase):
    def test_sign_up_normalizes_email(self):
        user = sign_up("  Mixed@Case.COM ", "Engine-Notes-1843", "recruiter", " Mixed Case ")
        self.assertEqual(user.email, "mixed@case.com")
        self.assertEqual(user.profile.full_name, "Mixed Case")
        self.assertEqual(user.profile.email, "mixed@case.com")

    def test_sign_up_rejects_unknown_role(self):
        with self.assertRaises(ValidationError):
            sign_up("x@example.com", "Engine-Notes-1843", "admin", "X Y")
        self.assertFalse(User.objects.exists())

    def test_sign_up_rejects_duplicate_email(self):
        sign_up("dup@example.com", "Engine-Notes-1843", "job_seeker", "First")
        with self.assertRaises(ValidationError):
            sign_up("DUP@example.com", "Engine-Notes-1843", "job_seeker", "Second")
        self.assertEqual(Profile.objects.count(), 1)


class LoginTests(TestCase):
    def setUp(self):
        self.user = sign_up("login@example.com", "secret123", "job_seeker", "Log In")

    def test_login_by_email(self):
        resp = self.client.post(reverse("login"), {"email": "LOGIN@example.com", "password": "secret123"})
        self.assertRedirects(resp, reverse("dashboard"))
        self.assertEqual(self.client.session["role"], "job_seeker")

    def test_login_respects_safe_next(self):
        resp = self.client.post(
            reverse("login") + "?next=/jobs/",
            {"email": "login@example.com", "password": "secret123", "next": "/jobs/"},
        )
        self.assertRedirects(resp, "/jobs/")

    def test_login_ignores_external_next(self):
        resp = self.client.post(
            reverse("login"),
            {"email": "login@example.com", "password": "secret123", "next": "https://evil.example.com/"},
        )
        self.assertRedirects(resp, reverse("dashboard"))

    def test_login_wrong_password(self):
        resp = self.client.post(reverse("login"), {"email": "login@example.com", "password": "wrong-pass"}, follow=True)
        self.assertContains(resp, "Invalid email or password.")
        self.assertNotIn("_auth_user_id", self.client.session)

    def test_login_password_too_short_is_a_form_error(self):
        resp = self.client.post(reverse("login"), {"email": "login@example.com", "password": "abc"})
        self.assertContains(resp, "Password must be at least 6 characters")

    def test_logout(self):
        self.client.login(username="login@example.com", password="secret123")
        resp = self.client.post(reverse("logout"))
        self.assertRedirects(resp, reverse("home"))
        self.assertNotIn("_auth_user_id", self.client.session)

    def test_logout_rejects_get(self):
        self.client.login(username="login@example.com", password="secret123")
        resp = self.client.get(reverse("logout"))
        self.assertEqual(resp.status_code, 405)
        self.assertIn("_auth_user_id", self.client.session)


class RoleGateTests(TestCase):
    def setUp(self):
        self.seeker = sign_up("seeker@example.com", "secret123", "job_seeker", "Seeker")
        self.recruiter = sign_up("recruiter@example.com", "secret123", "recruiter", "Recruiter")

    def test_anonymous_redirected_to_login(self):
        resp = self.client.get(reverse("recruiter_dashboard"))
        self.assertEqual(resp.status_code, 302)
        self.assertIn(reverse("login"), resp["Location"])

    def test_wrong_role_gets_access_denied(self):
        self.client.login(username="seeker@example.com", password="secret123")
        resp = self.client.get(reverse("create_job"), follow=True)
        self.assertRedirects(resp, reverse("home"))
        self.assertContains(resp, "Access denied.")

    def test_recruiter_can_create_company(self):
        self.client.login(username="recruiter@example.com", password="secret123")
        resp = self.client.post(
            reverse("company_edit"),
            {"name": "Acme", "description": "", "website": "https://acme.example.com", "logo_url": "", "industry": "Software", "size": "11-50", "location": "Austin, TX"},
        )
        self.assertRedirects(resp, reverse("recruiter_dashboard"))
        company = Company.objects.get(owner=self.recruiter)
        self.assertEqual(company.name, "Acme")

        self.client.post(reverse("company_edit"), {"name": "Acme Corp"})
        self.assertEqual(Company.objects.filter(owner=self.recruiter).count(), 1)
        self.assertEqual(Company.objects.get(owner=self.recruiter).name, "Acme Corp")

    def test_seeker_cannot_edit_company(self):
        self.client.login(username="seeker@example.com", password="secret123")
        self.client.post(reverse("company_edit"), {"name": "Nope"})
        self.assertFalse(Company.objects.exists())


class ProfileAndNotificationTests(TestCase):
    def setUp(self):
        self.user = sign_up("me@example.com", "secret123", "job_seeker", "Me Myself")
        self.client.login(username="me@example.com", password="secret123")

    def test_profile_edit_stores_skills_as_list(self):
        resp = self.client.post(
            reverse("profile_edit"),
            {"full_name": "Me Myself", "phone": "", "location": "Remote", "bio": "", "skills": "Python, django; Python", "experience_years": "4"},
        )
        self.assertRedirects(resp, reverse("profile_edit"))
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.skills, ["Python", "django"])
        self.assertEqual(profile.experience_years, 4)

    def test_profile_skills_input_has_no_maxlength(self):
        resp = self.client.get(reverse("profile_edit"))
        self.assertNotIn("maxlength", str(resp.context["form"]["skills"]))

    def test_mark_all_read(self):
        Notification.objects.create(user=self.user, title="One")
        Notification.objects.create(user=self.user, title="Two")
        resp = self.client.get(reverse("notifications_list"))
        self.assertEqual(resp.context["nav_unread_notifications"], 2)

        self.client.post(reverse("notifications_mark_all_read"))
        self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())

    def test_cannot_mark_someone_elses_notification(self):
        other = sign_up("other@example.com", "secret123", "job_seeker", "Other")
        notif = Notification.objects.create(user=other, title="Private")
        resp = self.client.post(reverse("notification_mark_read", args=[notif.id]))
        self.assertEqual(resp.status_code, 404)
        notif.refresh_from_db()
        self.assertFalse(notif.is_read)
