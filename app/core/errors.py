"""
Failure kinds of the contact pipeline and the admin endpoints.

Only ``ValidationError`` and ``NotFoundError`` ever reach a caller as a
rejection. Persistence and mail failures are caught at their own stage
and turned into a qualified acceptance.
"""

from typing import List


class ContactError(Exception):
    """Base class for anticipated failures."""


class ValidationError(ContactError):
    def __init__(self, violations: List[dict]):
        self.violations = violations
        fields = ", ".join(v["field"] for v in violations)
        super().__init__(f"Invalid fields: {fields}")


class PersistenceError(ContactError):
    def __init__(self, message: str, timed_out: bool = False):
        self.timed_out = timed_out
        super().__init__(message)


class SenderUnavailableError(ContactError):
    pass


class SendError(ContactError):
    def __init__(self, kind: str, message: str):
        self.kind = kind
        super().__init__(f"{kind}: {message}")


class NotFoundError(ContactError):
    pass


class InternalFault(Exception):
    """Anything unanticipated that reached the top of the pipeline."""
