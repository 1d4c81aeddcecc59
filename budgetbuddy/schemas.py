"""Request body schemas.

``validate_payload`` never raises: it returns a ``Validation`` that is
either ok with the parsed model or carries a readable message for a 400.
"""
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Literal, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, ValidationError, field_validator

from .records import CATEGORIES

CategoryName = Literal[CATEGORIES]


class Credentials(BaseModel):
    email: str
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        # validate the format only; the address is stored exactly as submitted
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e))
        return v


class NewExpense(BaseModel):
    amount: float = Field(ge=0, allow_inf_nan=False, strict=True)
    category: CategoryName
    date: date
    note: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def iso_date_only(cls, v):
        if not isinstance(v, str):
            raise ValueError("date must be a YYYY-MM-DD string")
        try:
            return date.fromisoformat(v)
        except ValueError:
            raise ValueError("date must be a YYYY-MM-DD string")


class AdviceRequest(BaseModel):
    expenses: List[dict] = Field(min_length=1)


@dataclass
class Validation:
    ok: bool
    value: Any = None
    message: Optional[str] = None


def format_errors(err: ValidationError) -> str:
    parts = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e["loc"]) or "body"
        parts.append(f"{loc}: {e['msg']}")
    return "; ".join(parts)


def validate_payload(schema, data) -> Validation:
    if not isinstance(data, dict):
        return Validation(False, message="Request body must be a JSON object")
    try:
        return Validation(True, value=schema.model_validate(data))
    except ValidationError as e:
        return Validation(False, message=format_errors(e))
