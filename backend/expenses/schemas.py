from __future__ import annotations

import re
from datetime import datetime, time, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.expense_model import CATEGORIES, PAYMENT_METHODS

_DAY_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # stored datetimes are naive UTC
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_choice(value, choices, label):
    if value not in choices:
        raise ValueError(f"{label} must be one of: {', '.join(choices)}")
    return value


def _reject_bool(value):
    # JSON true/false would otherwise coerce to 1.0/0.0
    if isinstance(value, bool):
        raise ValueError("Amount must be a positive number")
    return value


class ExpenseCreateSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: float = Field(ge=0, allow_inf_nan=False)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: Optional[datetime] = None
    payment_method: str = Field(alias="paymentMethod", min_length=1)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_not_bool(cls, v):
        return _reject_bool(v)

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("category")
    @classmethod
    def _known_category(cls, v):
        return _check_choice(v, CATEGORIES, "Category")

    @field_validator("payment_method")
    @classmethod
    def _known_payment_method(cls, v):
        return _check_choice(v, PAYMENT_METHODS, "Payment method")

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v):
        return _to_naive_utc(v)


class ExpenseUpdateSchema(BaseModel):
    """
    Every field optional; only the fields sent by the client are applied.
    """

    model_config = ConfigDict(populate_by_name=True)

    amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    category: Optional[str] = None
    description: Optional[str] = None
    date: Optional[datetime] = None
    payment_method: Optional[str] = Field(None, alias="paymentMethod")

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_not_bool(cls, v):
        return _reject_bool(v)

    @field_validator("category", "payment_method", mode="before")
    @classmethod
    def _blank_is_omitted(cls, v):
        # a blank choice keeps the stored value
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("description", mode="before")
    @classmethod
    def _strip_description(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("description")
    @classmethod
    def _description_not_empty(cls, v):
        if v is not None and not v:
            raise ValueError("Description cannot be empty")
        return v

    @field_validator("category")
    @classmethod
    def _known_category(cls, v):
        return v if v is None else _check_choice(v, CATEGORIES, "Category")

    @field_validator("payment_method")
    @classmethod
    def _known_payment_method(cls, v):
        return v if v is None else _check_choice(v, PAYMENT_METHODS, "Payment method")

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, v):
        return _to_naive_utc(v)

    def changes(self) -> dict:
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class ExpenseFilterSchema(BaseModel):
    """Query-string filters for the list endpoint; blank values are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    search: Optional[str] = None
    category: Optional[str] = None
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    min_amount: Optional[float] = Field(None, alias="minAmount", allow_inf_nan=False)
    max_amount: Optional[float] = Field(None, alias="maxAmount", allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("end_date", mode="before")
    @classmethod
    def _end_of_day(cls, v):
        # a bare YYYY-MM-DD end bound covers that whole day
        if isinstance(v, str) and _DAY_ONLY.match(v.strip()):
            return datetime.combine(datetime.fromisoformat(v.strip()).date(), time.max)
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def _normalize_dates(cls, v):
        return _to_naive_utc(v)
