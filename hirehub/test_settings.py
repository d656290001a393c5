"""Settings for the test suite: in-memory SQLite, locmem email, fast hashing."""
from .settings import *  # noqa: F401,F403
from .settings import LOG_DIR

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
DEFAULT_FROM_EMAIL = "no-reply@test.local"
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
EMAIL_OUTBOX_LOG = LOG_DIR / "test_email_outbox.jsonl"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "hirehub-tests",
    }
}
