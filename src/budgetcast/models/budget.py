"""Budget record as supplied by the backing store."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class Budget(SQLModel):
    """Aggregate root: the ceiling every remaining-amount is measured against."""

    id: str = Field(min_length=1)
    name: str = ""
    total_amount: float = Field(default=0.0, ge=0)
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
