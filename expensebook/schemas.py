import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s<>]+@[^@\s<>]+\.[^@\s<>]+$"


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Credentials(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=3, max_length=180)
    password: str = Field(..., min_length=1)
    remember: bool = False


class Registration(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., max_length=180, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


def _strip(value):
    return value.strip() if isinstance(value, str) else value


def _check_amount(value):
    # JSON true/false would otherwise pass as 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("Input should be a number")
    return value


def _parse_iso_date(value):
    if value is None or isinstance(value, dt.date):
        return value.date() if isinstance(value, dt.datetime) else value
    if not isinstance(value, str):
        raise ValueError("Input should be an ISO 8601 date string")
    try:
        return dt.date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError("Input should be a valid ISO 8601 date (YYYY-MM-DD)")


class ExpenseCreate(BaseModel):
    """Incoming expense for creation.

    ``category`` is the category *name*, passed on untouched so the lookup
    stays exact; it is optional here so the service can report a missing
    category with its own error.
    """

    label: str = Field(default="", max_length=255)
    amount: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    date: Optional[dt.date] = None
    category: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("date", mode="before")
    @classmethod
    def iso_date(cls, v):
        return _parse_iso_date(_blank_to_none(v))

    @field_validator("amount", mode="before")
    @classmethod
    def missing_amount_is_zero(cls, v):
        v = _check_amount(_strip(_blank_to_none(v)))
        return 0.0 if v is None else v

    @field_validator("label", mode="before")
    @classmethod
    def missing_label_is_empty(cls, v):
        return "" if v is None else _strip(v)


class ExpenseUpdate(BaseModel):
    """Partial update; ``changes()`` only returns the fields actually supplied."""

    label: Optional[str] = Field(default=None, max_length=255)
    amount: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    date: Optional[dt.date] = None
    category: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("date", mode="before")
    @classmethod
    def iso_date(cls, v):
        return _parse_iso_date(_blank_to_none(v))

    @field_validator("amount", mode="before")
    @classmethod
    def numeric_amount(cls, v):
        return _check_amount(_strip(_blank_to_none(v)))

    @field_validator("label", mode="before")
    @classmethod
    def strip_label(cls, v):
        return _strip(v)

    def changes(self) -> dict:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    label: str
    amount: float
    date: dt.date
    category: CategoryOut

    @classmethod
    def dump(cls, expense) -> dict:
        return cls.model_validate(expense).model_dump(mode="json")
