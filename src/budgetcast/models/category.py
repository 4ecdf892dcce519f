"""Spending category records."""

from __future__ import annotations

from sqlmodel import Field, SQLModel

CategoryId = str


class Category(SQLModel):
    """A spending bucket within one budget."""

    id: CategoryId = Field(min_length=1)
    budget_id: str = ""
    name: str = Field(min_length=1)
    color: str = "#888888"
    budget: float = Field(default=0.0, ge=0, description="Allocated amount")
    # Hidden categories stay in the store but drop out of totals and charts.
    visible: bool = True


class EnrichedCategory(Category):
    """Category carrying its derived spent-to-date and remaining amounts."""

    spent: float = 0.0
    remaining: float = 0.0
