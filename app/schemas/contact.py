import re
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# pragmatic local@domain.tld shape, not RFC 5322
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FIELD_MESSAGES = {
    "name": "Name must be between 2 and 50 characters",
    "email": "Please provide a valid email",
    "message": "Message must be between 10 and 1000 characters",
}


class ContactCreate(BaseModel):
    name: str
    email: str
    message: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        # the name ends up in a mail Subject header
        value = " ".join(value.split())
        if not 2 <= len(value) <= 50:
            raise PydanticCustomError("name_length", FIELD_MESSAGES["name"])
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        value = value.strip()
        if not EMAIL_PATTERN.match(value):
            raise PydanticCustomError("email_shape", FIELD_MESSAGES["email"])
        return value.lower()

    @field_validator("message")
    @classmethod
    def check_message(cls, value: str) -> str:
        value = value.strip()
        if not 10 <= len(value) <= 1000:
            raise PydanticCustomError("message_length", FIELD_MESSAGES["message"])
        return value


class FieldViolation(BaseModel):
    field: str
    message: str


class ContactReply(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    details: Optional[List[FieldViolation]] = None


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    name: str
    email: str
    message: str
    created_at: Optional[datetime] = None
    is_read: bool
