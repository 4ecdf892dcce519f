"""Bundle of records fetched from the store for one budget."""

from __future__ import annotations

from sqlmodel import Field, SQLModel

from .budget import Budget
from .category import Category
from .expense import Expense


class BudgetSnapshot(SQLModel):
    """Everything the engine needs to compute one budget's views."""

    budget: Budget
    categories: list[Category] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
