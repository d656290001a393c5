"""Sign-up, sign-in and sign-out.

Views pass the request (and so the session) in explicitly; nothing here
reads ambient user state.
"""
import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model, login, logout
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from .models import Profile

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def sign_up(email: str, password: str, role: str, full_name: str):
    """Create a user with its profile; the email doubles as username."""
    User = get_user_model()
    email = normalize_email(email)
    if role not in User.Role.values:
        raise ValidationError("Unknown role: %(role)s", params={"role": role}, code="invalid_role")
    if User.objects.filter(email__iexact=email).exists():
        raise ValidationError("An account with this email already exists.", code="duplicate_email")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                role=role,
            )
            Profile.objects.create(user=user, full_name=full_name.strip(), email=email)
    except IntegrityError as exc:
        logger.warning("Sign up failed (integrity): email=%s error=%s", email, exc)
        raise ValidationError("An account with this email already exists.", code="duplicate_email") from exc

    logger.info("User signed up: user_id=%s email=%s role=%s", user.pk, email, role)
    return user


def start_session(request, user) -> None:
    login(request, user, backend="django.contrib.auth.backends.ModelBackend")
    request.session.set_expiry(getattr(settings, "SESSION_COOKIE_AGE", 3600))
    request.session["role"] = getattr(user, "role", "")


def sign_in(request, email: str, password: str):
    """Authenticate by email and start a session. Returns None on failure."""
    email = normalize_email(email)
    user = authenticate(request, username=email, password=password)
    if user is None:
        logger.info("Sign in failed: email=%s", email)
        return None
    start_session(request, user)
    logger.info("Sign in success: email=%s role=%s", email, getattr(user, "role", ""))
    return user


def sign_out(request) -> None:
    email = request.user.email if request.user.is_authenticated else None
    logout(request)
    if email:
        logger.info("Sign out: email=%s", email)
