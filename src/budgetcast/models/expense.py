"""Expense records and their date helpers."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import field_validator
from sqlmodel import Field, SQLModel


class Recurrence(str, Enum):
    """How an expense repeats."""

    ONE_TIME = "one-time"
    MONTHLY = "monthly"


def parse_iso_date(value: Any) -> Optional[dt.date]:
    """Return the calendar date of an ISO-8601 date or date-time, or None.

    Only the ``YYYY-MM-DD`` prefix is read, so a trailing time or offset
    never shifts the month.
    """

    if value is None:
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    text = str(value).strip()
    if len(text) < 10:
        return None
    try:
        return dt.date.fromisoformat(text[:10])
    except ValueError:
        return None


class Expense(SQLModel):
    """A single actual or planned cost recorded against a category."""

    id: str = Field(min_length=1)
    category_id: str
    budget_id: str = ""
    description: str = ""
    amount: float = Field(default=0.0, ge=0)
    budgeted_amount: Optional[float] = Field(default=None, ge=0)
    date: Optional[str] = Field(default=None, description="ISO-8601 anchor date")
    recurring: Recurrence = Recurrence.ONE_TIME
    is_actual: bool = True

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_text(cls, value: Any) -> Any:
        if isinstance(value, (dt.date, dt.datetime)):
            return value.isoformat()
        return value

    @field_validator("recurring", mode="before")
    @classmethod
    def _known_recurrence(cls, value: Any) -> Recurrence:
        try:
            return Recurrence(value)
        except ValueError:
            accepted = ", ".join(repr(r.value) for r in Recurrence)
            raise ValueError(f"recurring must be one of {accepted}; got {value!r}") from None

    @property
    def anchor_date(self) -> Optional[dt.date]:
        """Parsed ``date``; None when missing or unparseable."""
        return parse_iso_date(self.date)

    @property
    def forecast_amount(self) -> float:
        """Amount used in projections: actual when recorded, else the planned figure."""
        if self.is_actual or self.budgeted_amount is None:
            return self.amount
        return self.budgeted_amount
