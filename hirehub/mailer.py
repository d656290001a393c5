"""Outgoing email helper.

Every message goes through Django's configured backend (console in
development) and is also appended to a JSON-lines outbox so recruiters and
seekers can be shown what was sent during a demo.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _append_jsonl(path: Path, payload: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(payload, ensure_ascii=False) + "\n")


def send_notification_email(
    *,
    to_emails: Iterable[str],
    subject: str,
    message: str,
    tag: str = "EMAIL",
    meta: dict[str, Any] | None = None,
    from_email: str | None = None,
) -> bool:
    """Send one email and record it in the outbox.

    Returns False when there is nobody to send to.
    """
    recipients = [e for e in (to_emails or []) if e]
    if not recipients:
        return False

    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "tag": tag,
        "to": recipients,
        "subject": subject,
        "message": message,
        "meta": dict(meta or {}),
    }

    outbox = getattr(settings, "EMAIL_OUTBOX_LOG", None)
    if not outbox:
        outbox = Path(getattr(settings, "LOG_DIR", ".")) / "email_outbox.jsonl"
    _append_jsonl(Path(str(outbox)), payload)

    send_mail(
        subject=subject,
        message=message,
        from_email=(from_email or getattr(settings, "DEFAULT_FROM_EMAIL", "no-reply@hirehub.local")),
        recipient_list=recipients,
        fail_silently=False,
    )
    logger.info("Email sent: tag=%s to=%s subject=%s", tag, ",".join(recipients), subject)
    return True
