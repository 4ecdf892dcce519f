"""Record model exports."""

from .budget import Budget
from .category import Category, CategoryId, EnrichedCategory
from .currency import CurrencyConfig
from .expense import Expense, Recurrence, parse_iso_date
from .snapshot import BudgetSnapshot

__all__ = [
    "Budget",
    "BudgetSnapshot",
    "Category",
    "CategoryId",
    "CurrencyConfig",
    "EnrichedCategory",
    "Expense",
    "Recurrence",
    "parse_iso_date",
]
