from typing import Any

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.schemas.contact import ContactCreate, FIELD_MESSAGES


def validate_submission(raw: Any) -> ContactCreate:
    """
    Validate and normalize the three contact fields.

    Every field is checked independently so one ValidationError carries a
    violation for each bad field. No store or network access happens here.
    """
    if not isinstance(raw, dict):
        raw = {}

    try:
        return ContactCreate.model_validate(raw)
    except PydanticValidationError as e:
        bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        violations = [
            {"field": field, "message": message}
            for field, message in FIELD_MESSAGES.items()
            if field in bad_fields
        ]
        raise ValidationError(violations)
