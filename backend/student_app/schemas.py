"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and carry the declarative
field constraints that every student payload must satisfy before it
reaches the database.
"""

from email_validator import EmailNotValidError, validate_email
from http import HTTPStatus
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional

SUCCESS = "success"
FAILURE = "failure"


class StudentIn(BaseModel):
    """Payload for creating a student. The id is assigned by the database."""
    name: str = Field(min_length=3, max_length=20)
    password: str = Field(min_length=8, max_length=20)
    branch: str
    percentage: str = Field(min_length=1, max_length=3)
    phone: str = Field(min_length=10, max_length=11)
    email: str

    @field_validator("email")
    @classmethod
    def _email_format(cls, v: str) -> str:
        # format check only; the address is stored exactly as sent
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"invalid email address: {exc}") from exc
        return v

    @field_validator("branch")
    @classmethod
    def _branch_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("branch must not be blank")
        return v


class StudentUpdate(StudentIn):
    """Full-record overwrite payload; `id` selects the row to replace."""
    id: int = Field(ge=1)


class StudentOut(BaseModel):
    """Student representation returned by read endpoints (no password)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    branch: str
    percentage: str
    phone: str
    email: str


class ApiErrorOut(BaseModel):
    """The four-field status object used for errors and write acknowledgements."""
    status: str
    code: str
    message: str
    detail: Optional[str] = None

    @classmethod
    def of(cls, status: int, code: str, message: str, detail: Optional[str] = None) -> "ApiErrorOut":
        return cls(status=HTTPStatus(status).name, code=code, message=message, detail=detail)


class ResultInfo(BaseModel):
    """Acknowledgement returned by the cache endpoints."""
    code: str
    message: str
    data: Optional[Any] = None
