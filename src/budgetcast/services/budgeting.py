"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Sequence

from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.category import Category, EnrichedCategory
from ..models.expense import Expense, Recurrence

logger = get_logger(__name__)

DANGER_THRESHOLD = 90.0
WARNING_THRESHOLD = 75.0


def recurrence_of(expense: Expense) -> Recurrence:
    """Return the expense's recurrence, failing fast on values outside the enum."""

    try:
        return Recurrence(expense.recurring)
    except ValueError:
        accepted = ", ".join(repr(r.value) for r in Recurrence)
        raise ValueError(
            f"Expense {expense.id!r} has recurring={expense.recurring!r}; expected one of {accepted}"
        ) from None


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month (may be negative)."""

    return (end.year - start.year) * 12 + (end.month - start.month)


def effective_spent_amount(expense: Expense, reference_date: date) -> float:
    """Amount an expense has consumed as of ``reference_date``.

    One-time expenses count their raw amount. Monthly expenses are charged for
    their start month plus every elapsed month since; a monthly expense that
    starts after the reference month is counted once. Expenses without a
    usable date contribute nothing.
    """

    recurrence = recurrence_of(expense)
    anchor = expense.anchor_date
    if anchor is None:
        logger.debug(
            "Skipping undated expense",
            extra={"expense_id": expense.id, "raw_date": expense.date},
        )
        return 0.0

    if recurrence is Recurrence.ONE_TIME:
        return float(expense.amount)

    month_diff = months_between(anchor, reference_date)
    multiplier = 1 if month_diff < 0 else month_diff + 1
    return float(expense.amount) * multiplier


def enrich_categories(
    categories: Sequence[Category],
    expenses: Iterable[Expense],
    reference_date: date,
) -> list[EnrichedCategory]:
    """Attach ``spent`` and ``remaining`` to every category.

    ``remaining`` is not floored; a negative value means the category is over budget.
    """

    spent_by_category: dict[str, float] = {c.id: 0.0 for c in categories}
    for expense in expenses:
        if expense.category_id not in spent_by_category:
            continue
        spent_by_category[expense.category_id] += effective_spent_amount(expense, reference_date)

    enriched = []
    for category in categories:
        spent = spent_by_category[category.id]
        enriched.append(
            EnrichedCategory.model_validate(
                {**category.model_dump(), "spent": spent, "remaining": float(category.budget) - spent}
            )
        )
    return enriched


def visible_only(categories: Iterable[Category]) -> list:
    """Drop hidden categories before totals or charts are computed."""

    return [c for c in categories if c.visible]


def total_allocated(categories: Iterable[Category]) -> float:
    return sum((float(c.budget) for c in categories), 0.0)


def unallocated_budget(total_budget: float, categories: Iterable[Category]) -> float:
    """Budget not assigned to any category; negative when over-allocated."""

    return float(total_budget) - total_allocated(categories)


def calculate_percentage(value: float, total: float, decimals: int = 1) -> float:
    """Return ``value`` as a percentage of ``total``, or 0.0 when total is not positive."""

    if total <= 0:
        return 0.0
    return round(value / total * 100, decimals)


@dataclass(frozen=True, slots=True)
class Totals:
    """Aggregate figures for a whole budget."""

    spent: float
    allocated: float
    unallocated: float
    remaining: float
    percent_used: str


def aggregate_totals(total_budget: float, categories: Sequence[EnrichedCategory]) -> Totals:
    """Roll enriched categories up into budget totals.

    Callers pass visible categories only. ``remaining`` is measured against the
    budget total rather than the allocated sum, so unallocated money still
    counts as headroom.
    """

    spent = sum((c.spent for c in categories), 0.0)
    allocated = total_allocated(categories)
    percent = spent / total_budget * 100 if total_budget > 0 else 0.0
    return Totals(
        spent=spent,
        allocated=allocated,
        unallocated=float(total_budget) - allocated,
        remaining=float(total_budget) - spent,
        percent_used=f"{percent:.1f}",
    )


class HealthStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    DANGER = "danger"


def classify_health(spent: float, total_budget: float) -> HealthStatus:
    """Three-way budget health from the share of the total already spent."""

    percent_spent = spent / total_budget * 100 if total_budget > 0 else 0.0
    if percent_spent > DANGER_THRESHOLD:
        return HealthStatus.DANGER
    if percent_spent > WARNING_THRESHOLD:
        return HealthStatus.WARNING
    return HealthStatus.GOOD


@dataclass(frozen=True, slots=True)
class CategoryBreakdown:
    """One row of the category table: allocation share and usage."""

    category_id: str
    name: str
    color: str
    budget: float
    spent: float
    remaining: float
    percent_of_total: str
    percent_used: str

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0


def category_breakdown(
    categories: Iterable[EnrichedCategory], total_budget: float
) -> list[CategoryBreakdown]:
    """Per visible category: share of the budget total and share of its own allocation used."""

    rows = []
    for category in visible_only(categories):
        rows.append(
            CategoryBreakdown(
                category_id=category.id,
                name=category.name,
                color=category.color,
                budget=float(category.budget),
                spent=category.spent,
                remaining=category.remaining,
                percent_of_total=f"{calculate_percentage(category.budget, total_budget):.1f}",
                percent_used=f"{calculate_percentage(category.spent, category.budget):.1f}",
            )
        )
    return rows


@dataclass(frozen=True, slots=True)
class BudgetSummary:
    """Dashboard view model for a single budget."""

    budget_id: str
    total_budget: float
    categories: list[EnrichedCategory]
    totals: Totals
    health: HealthStatus
    breakdown: list[CategoryBreakdown]

    @property
    def over_allocated(self) -> bool:
        """Category allocations exceed the budget total (a warning, not an error)."""
        return self.totals.unallocated < 0


def summarize_budget(
    budget: Budget,
    categories: Sequence[Category],
    expenses: Iterable[Expense],
    reference_date: date,
) -> BudgetSummary:
    """Compute every dashboard figure for ``budget`` as of ``reference_date``."""

    enriched = enrich_categories(categories, expenses, reference_date)
    visible = visible_only(enriched)
    totals = aggregate_totals(budget.total_amount, visible)
    health = classify_health(totals.spent, budget.total_amount)
    if totals.unallocated < 0:
        logger.info(
            "Budget is over-allocated",
            extra={"budget_id": budget.id, "unallocated": totals.unallocated},
        )
    return BudgetSummary(
        budget_id=budget.id,
        total_budget=float(budget.total_amount),
        categories=enriched,
        totals=totals,
        health=health,
        breakdown=category_breakdown(enriched, budget.total_amount),
    )


def recent_expenses(expenses: Iterable[Expense], *, limit: int = 5) -> list[Expense]:
    """Newest expenses first by anchor date; undated records sort last."""

    records = list(expenses)
    dated = [e for e in records if e.anchor_date is not None]
    undated = [e for e in records if e.anchor_date is None]
    dated.sort(key=lambda e: e.anchor_date, reverse=True)
    return (dated + undated)[:limit]
