import logging
from typing import Callable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PersistenceError
from app.models.contact import ContactMessage
from app.schemas.contact import ContactCreate

logger = logging.getLogger(__name__)


class ContactRepository:
    """
    Stored contact messages.

    Every call opens its own session so an abandoned call (timed out by the
    pipeline) never shares a session with the request that gave up on it.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def create(self, submission: ContactCreate) -> ContactMessage:
        with self.session_factory() as db:
            try:
                record = ContactMessage(
                    name=submission.name,
                    email=submission.email,
                    message=submission.message,
                    is_read=False,
                )
                db.add(record)
                db.commit()
                db.refresh(record)
                return record
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"❌ Failed to store contact message from {submission.email}: {e}")
                raise PersistenceError("Store rejected the write") from e

    def list_recent(self, limit: int = 50) -> List[ContactMessage]:
        """Most recent messages, newest first."""
        with self.session_factory() as db:
            try:
                return (
                    db.query(ContactMessage)
                    .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
                    .limit(limit)
                    .all()
                )
            except SQLAlchemyError as e:
                logger.error(f"❌ Failed to list contact messages: {e}")
                raise PersistenceError("Store unavailable") from e

    def mark_read(self, message_id: int) -> ContactMessage:
        with self.session_factory() as db:
            try:
                record = db.get(ContactMessage, message_id)
                if record is None:
                    raise NotFoundError(f"Message {message_id} not found")
                record.is_read = True
                db.commit()
                db.refresh(record)
                return record
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"❌ Failed to mark message {message_id} as read: {e}")
                raise PersistenceError("Store rejected the update") from e
