"""Month-by-month spending projection for the current calendar year."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import AbstractSet, Iterable, Sequence

from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.category import Category
from ..models.expense import Expense, Recurrence
from .budgeting import recurrence_of, visible_only

logger = get_logger(__name__)

MONTHS_PER_YEAR = 12
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


@dataclass(frozen=True, slots=True)
class ForecastMonth:
    """One calendar month of the projection.

    ``category_amounts`` is keyed by category id; display names are resolved
    with :meth:`amounts_by_name` at the presentation boundary.
    """

    name: str
    month_index: int
    category_amounts: dict[str, float]
    total: float
    cumulative: float
    remaining: float
    projected_average: bool = False

    def amount_for(self, category_id: str) -> float:
        return self.category_amounts.get(category_id, 0.0)

    def amounts_by_name(self, categories: Iterable[Category]) -> dict[str, float]:
        """Amounts keyed by category name.

        Categories sharing a name are summed into one key, matching the legacy
        name-keyed forecast rows that existing spreadsheets were built from.
        """

        by_name: dict[str, float] = {}
        for category in categories:
            if category.id not in self.category_amounts:
                continue
            by_name[category.name] = by_name.get(category.name, 0.0) + self.category_amounts[category.id]
        return by_name


def _months_touched(recurrence: Recurrence, anchor: date, current_year: int) -> range:
    start = anchor.month - 1
    if recurrence is Recurrence.MONTHLY:
        # Past-year start dates still recur from the same month-of-year onward.
        return range(start, MONTHS_PER_YEAR)
    if anchor.year != current_year:
        return range(0)
    return range(start, start + 1)


def _with_running_totals(
    months: Sequence[ForecastMonth], total_budget: float, *, start_cumulative: float = 0.0
) -> list[ForecastMonth]:
    cumulative = start_cumulative
    result = []
    for month in months:
        cumulative += month.total
        result.append(replace(month, cumulative=cumulative, remaining=float(total_budget) - cumulative))
    return result


def project_monthly_forecast(
    categories: Sequence[Category],
    expenses: Iterable[Expense],
    total_budget: float,
    current_year: int,
) -> list[ForecastMonth]:
    """Spread expenses over January..December of ``current_year``.

    One-time expenses land in their own month and only when dated in
    ``current_year``. Monthly expenses repeat from their start month through
    December regardless of the year they started. Expenses whose category is
    unknown, or whose date cannot be parsed, are skipped.
    """

    known_ids = {c.id for c in categories}
    amounts = [{c.id: 0.0 for c in categories} for _ in range(MONTHS_PER_YEAR)]
    totals = [0.0] * MONTHS_PER_YEAR

    for expense in expenses:
        if expense.category_id not in known_ids:
            logger.debug(
                "Skipping expense with unknown category",
                extra={"expense_id": expense.id, "category_id": expense.category_id},
            )
            continue
        recurrence = recurrence_of(expense)
        anchor = expense.anchor_date
        if anchor is None:
            logger.debug(
                "Skipping undated expense",
                extra={"expense_id": expense.id, "raw_date": expense.date},
            )
            continue

        amount = float(expense.forecast_amount)
        for index in _months_touched(recurrence, anchor, current_year):
            amounts[index][expense.category_id] += amount
            totals[index] += amount

    months = [
        ForecastMonth(
            name=MONTH_NAMES[index],
            month_index=index,
            category_amounts=amounts[index],
            total=totals[index],
            cumulative=0.0,
            remaining=0.0,
        )
        for index in range(MONTHS_PER_YEAR)
    ]
    return _with_running_totals(months, total_budget)


def apply_average_overlay(
    forecast: Sequence[ForecastMonth],
    categories: Iterable[Category],
    selected_category_ids: AbstractSet[str],
    current_month_index: int,
    total_budget: float,
) -> list[ForecastMonth]:
    """Replace future months of the selected categories with their average so far.

    Months ``0..current_month_index`` are history and are returned unchanged.
    For every later month, each visible selected category takes its average
    over the history months; other categories keep their projected values.
    Totals, cumulative and remaining are rebuilt from the first future month.
    """

    if len(forecast) != MONTHS_PER_YEAR:
        raise ValueError(f"Forecast must hold {MONTHS_PER_YEAR} months, got {len(forecast)}")
    if not 0 <= current_month_index < MONTHS_PER_YEAR:
        raise ValueError(f"current_month_index must be within 0..11, got {current_month_index}")
    if not selected_category_ids:
        return list(forecast)

    past = forecast[: current_month_index + 1]
    future = forecast[current_month_index + 1 :]
    overridden = [c.id for c in categories if c.visible and c.id in selected_category_ids]
    if not overridden:
        return list(forecast)
    averages = {
        category_id: sum(m.amount_for(category_id) for m in past) / max(len(past), 1)
        for category_id in overridden
    }

    rewritten = []
    for month in future:
        amounts = dict(month.category_amounts)
        amounts.update(averages)
        rewritten.append(
            replace(
                month,
                category_amounts=amounts,
                total=sum(amounts.values(), 0.0),
                projected_average=True,
            )
        )

    logger.debug(
        "Applied average overlay",
        extra={"categories": overridden, "current_month_index": current_month_index},
    )
    return list(past) + _with_running_totals(
        rewritten, total_budget, start_cumulative=past[-1].cumulative
    )


def zero_month_index(forecast: Sequence[ForecastMonth]) -> int:
    """Index of the first month whose remaining budget is used up, or -1."""

    for index, month in enumerate(forecast):
        if month.remaining <= 0:
            return index
    return -1


def build_forecast(
    budget: Budget,
    categories: Sequence[Category],
    expenses: Iterable[Expense],
    reference_date: date,
    *,
    selected_category_ids: AbstractSet[str] = frozenset(),
) -> list[ForecastMonth]:
    """Projection for the reference year over visible categories, with optional overlay."""

    visible = visible_only(categories)
    forecast = project_monthly_forecast(
        visible, expenses, budget.total_amount, reference_date.year
    )
    return apply_average_overlay(
        forecast,
        visible,
        selected_category_ids,
        reference_date.month - 1,
        budget.total_amount,
    )
