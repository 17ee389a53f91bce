import asyncio
from typing import List, Optional, Set

from app.core.database import SessionLocal
from app.models.contact import ContactMessage

VALID_PAYLOAD = {
    "name": "Ada Lovelace",
    "email": "Ada@Example.com",
    "message": "Hello! I would like to talk about a project.",
}


class FakeSender:
    """In-memory sender; records messages instead of talking SMTP."""

    def __init__(self, fail_to: Optional[Set[str]] = None, delay: float = 0.0):
        self.fail_to = fail_to or set()
        self.delay = delay
        self.sent: List = []
        self.verify_calls = 0

    async def verify(self):
        self.verify_calls += 1

    async def send(self, msg):
        if self.delay:
            await asyncio.sleep(self.delay)
        if msg["To"] in self.fail_to:
            raise ConnectionError(f"mailbox unavailable: {msg['To']}")
        self.sent.append(msg)

    @property
    def recipients(self) -> List[str]:
        return [m["To"] for m in self.sent]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def stored_messages() -> List[ContactMessage]:
    with SessionLocal() as db:
        return db.query(ContactMessage).order_by(ContactMessage.id).all()
