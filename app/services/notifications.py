import asyncio
import logging
from enum import Enum
from typing import Any

from app.core.config import Settings, settings
from app.core.errors import SendError
from app.schemas.contact import ContactCreate
from app.services.email_service import build_admin_alert, build_auto_reply
from app.utils.timeouts import call_with_timeout

logger = logging.getLogger(__name__)


class NotificationResult(str, Enum):
    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"


async def _send_one(sender: Any, msg, kind: str, timeout: float):
    try:
        await call_with_timeout(sender.send(msg), timeout, f"{kind} email")
    except asyncio.TimeoutError as e:
        raise SendError(kind, f"timed out after {timeout:g}s") from e
    except Exception as e:
        raise SendError(kind, str(e)) from e


async def send_notifications(sender: Any, submission: ContactCreate, timeout: float = 10,
                             config: Settings = settings) -> NotificationResult:
    """
    Send the admin alert and the auto-reply concurrently.

    Each send has its own bound and its own failure; neither one stops the
    other from being attempted.
    """
    messages = {
        "admin alert": build_admin_alert(submission.name, submission.email, submission.message, config),
        "auto-reply": build_auto_reply(submission.name, submission.email, config),
    }
    results = await asyncio.gather(
        *(_send_one(sender, msg, kind, timeout) for kind, msg in messages.items()),
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, Exception)]
    for failure in failures:
        logger.warning(f"❌ Email sending failed: {failure}")

    sent = len(results) - len(failures)
    if sent == len(results):
        return NotificationResult.FULL
    if sent:
        return NotificationResult.PARTIAL
    return NotificationResult.NONE
