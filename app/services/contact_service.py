"""
Contact form pipeline: validate, persist, acquire a sender, notify, reply.

Only invalid input is rejected. Storage and mail trouble is caught at its
own stage and degrades the reply into a qualified acceptance; anything
else becomes a generic 500.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.core.config import Settings, settings
from app.core.errors import InternalFault, PersistenceError, SenderUnavailableError, ValidationError
from app.schemas.contact import ContactCreate
from app.services.database.contact_repository import ContactRepository
from app.services.notifications import NotificationResult, send_notifications
from app.services.sender_cache import SenderHolder
from app.services.validator import validate_submission
from app.utils.timeouts import call_with_timeout

logger = logging.getLogger(__name__)


@dataclass
class ContactOutcome:
    violations: List[dict] = field(default_factory=list)
    persisted: bool = False
    # None means acquisition was never attempted
    sender_available: Optional[bool] = None
    notification: Optional[NotificationResult] = None
    fault: Optional[InternalFault] = None


@dataclass
class ComposedResponse:
    status_code: int
    body: Dict[str, Any]


SUCCESS_MESSAGE = "Message sent successfully!"

ACCEPTANCE_MESSAGES = {
    (True, "full"): SUCCESS_MESSAGE,
    (True, "partial"): "Message received! We saved your message but one of the email notifications could not be sent.",
    (True, "none"): "Message received! We saved your message but there was an issue sending email notifications.",
    (True, "unavailable"): "Message received! We saved your message but email notifications are temporarily unavailable.",
    (False, "full"): "Message received! We could not confirm your message was saved, but it was forwarded by email.",
    (False, "partial"): "Message received! We could not confirm your message was saved, and only part of the email notifications went out.",
    (False, "none"): "Message received, but we could not confirm it was saved and email notifications failed. Please try again later.",
    (False, "unavailable"): "Message received, but we could not confirm it was saved and email notifications are temporarily unavailable. Please try again later.",
    (False, "skipped"): "Message received, but we could not confirm it was saved. Please try again later.",
}

INTERNAL_ERROR_BODY = {
    "success": False,
    "error": "Internal server error",
    "message": "Failed to process your message. Please try again later.",
}


def _delivery(outcome: ContactOutcome) -> str:
    if outcome.notification is not None:
        return outcome.notification.value
    if outcome.sender_available is False:
        return "unavailable"
    return "skipped"


def compose_response(outcome: ContactOutcome) -> ComposedResponse:
    """Map stage outcomes to the HTTP reply. Pure, no I/O."""
    if outcome.fault is not None:
        return ComposedResponse(500, dict(INTERNAL_ERROR_BODY))

    if outcome.violations:
        return ComposedResponse(400, {
            "success": False,
            "error": "Validation failed",
            "details": outcome.violations,
        })

    key = (outcome.persisted, _delivery(outcome))
    if key not in ACCEPTANCE_MESSAGES:
        # e.g. saved but notification skipped, which the pipeline never produces
        return ComposedResponse(500, dict(INTERNAL_ERROR_BODY))
    return ComposedResponse(200, {"success": True, "message": ACCEPTANCE_MESSAGES[key]})


class ContactPipeline:
    def __init__(self, repository: ContactRepository, sender_holder: SenderHolder,
                 config: Settings = settings, notify_on_persist_failure: Optional[bool] = None):
        self.repository = repository
        self.sender_holder = sender_holder
        self.config = config
        if notify_on_persist_failure is None:
            notify_on_persist_failure = config.NOTIFY_ON_PERSIST_FAILURE
        self.notify_on_persist_failure = notify_on_persist_failure

    async def submit(self, raw: Any) -> ComposedResponse:
        try:
            outcome = await self.run(raw)
        except Exception as e:
            logger.exception("❌ Contact form error")
            outcome = ContactOutcome(fault=InternalFault(str(e)))
        return compose_response(outcome)

    async def run(self, raw: Any) -> ContactOutcome:
        try:
            submission = validate_submission(raw)
        except ValidationError as e:
            return ContactOutcome(violations=e.violations)

        outcome = ContactOutcome(persisted=await self._persist(submission))
        if not outcome.persisted and not self.notify_on_persist_failure:
            logger.warning("⚠️ Skipping notifications because the message was not stored")
            return outcome

        try:
            sender = await self.sender_holder.acquire()
        except SenderUnavailableError as e:
            logger.error(f"❌ Transporter creation failed: {e}")
            outcome.sender_available = False
            return outcome

        outcome.sender_available = True
        outcome.notification = await send_notifications(
            sender, submission, timeout=self.config.SEND_TIMEOUT_SECONDS, config=self.config
        )
        if outcome.notification is not NotificationResult.FULL:
            self.sender_holder.invalidate(sender)
        return outcome

    async def _store(self, submission: ContactCreate):
        timeout = self.config.PERSIST_TIMEOUT_SECONDS
        try:
            return await call_with_timeout(
                asyncio.to_thread(self.repository.create, submission), timeout, "contact message save"
            )
        except asyncio.TimeoutError as e:
            raise PersistenceError(f"Save did not finish within {timeout:g}s", timed_out=True) from e

    async def _persist(self, submission: ContactCreate) -> bool:
        try:
            record = await self._store(submission)
        except PersistenceError as e:
            reason = "timeout" if e.timed_out else "store error"
            logger.error(f"❌ Contact message not saved ({reason}): {e}")
            return False

        logger.info(f"✅ Contact message {record.id} saved to database")
        return True
