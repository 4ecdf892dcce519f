"""CSV export of budget views.

Each sheet is produced from the same aggregation functions the dashboard
uses, so exported figures always match what is shown on screen.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Optional, Sequence

from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.category import Category, EnrichedCategory
from ..models.currency import CurrencyConfig
from ..models.expense import Expense
from .budgeting import BudgetSummary, calculate_percentage, visible_only
from .currency import format_currency
from .forecast import ForecastMonth

logger = get_logger(__name__)

UNKNOWN_CATEGORY = "Unknown category"


def _serialize_value(value, currency: Optional[CurrencyConfig] = None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float) and currency is not None:
        return format_currency(value, currency)
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _write_rows(
    output_path: Path,
    headers: list[str],
    rows: Iterable[dict],
    *,
    labels: Optional[dict[str, str]] = None,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=headers, quoting=csv.QUOTE_MINIMAL)
        if labels is None:
            writer.writeheader()
        else:
            writer.writerow({key: labels.get(key, key) for key in headers})
        for row in rows:
            writer.writerow(row)
            count += 1
    logger.info("CSV written", extra={"path": str(output_path), "rows": count})
    return output_path


def export_forecast_csv(
    *,
    forecast: Sequence[ForecastMonth],
    categories: Sequence[Category],
    output_path: Path,
    currency: Optional[CurrencyConfig] = None,
) -> Path:
    """Write the 12-month forecast, one column per visible category name.

    Columns: month, <category names in input order>, total, cumulative,
    remaining, projected. Amounts are raw numbers unless ``currency`` is given.
    Category columns are keyed internally by position, so a category named
    like one of the fixed columns still gets its own values.
    """

    visible = visible_only(categories)
    names = list(dict.fromkeys(c.name for c in visible))
    column_keys = {name: f"category_{index}" for index, name in enumerate(names)}
    headers = ["month", *column_keys.values(), "total", "cumulative", "remaining", "projected"]
    labels = {key: name for name, key in column_keys.items()}

    def rows():
        for month in forecast:
            by_name = month.amounts_by_name(visible)
            row = {"month": month.name}
            for name, key in column_keys.items():
                row[key] = _serialize_value(by_name.get(name, 0.0), currency)
            row["total"] = _serialize_value(month.total, currency)
            row["cumulative"] = _serialize_value(month.cumulative, currency)
            row["remaining"] = _serialize_value(month.remaining, currency)
            row["projected"] = _serialize_value(month.projected_average)
            yield row

    return _write_rows(output_path, headers, rows(), labels=labels)


def export_overview_csv(
    *,
    budget: Budget,
    summary: BudgetSummary,
    output_path: Path,
    currency: Optional[CurrencyConfig] = None,
) -> Path:
    """Write the budget overview as property/value pairs."""

    totals = summary.totals
    pairs = [
        ("Budget name", budget.name),
        ("Total budget", float(budget.total_amount)),
        ("Allocated", totals.allocated),
        ("Unallocated", totals.unallocated),
        ("Spent", totals.spent),
        ("Remaining", totals.remaining),
        ("Percent used", totals.percent_used),
        ("Health", summary.health),
        ("Over-allocated", summary.over_allocated),
    ]
    rows = ({"property": name, "value": _serialize_value(value, currency)} for name, value in pairs)
    return _write_rows(output_path, ["property", "value"], rows)


def export_categories_csv(
    *,
    categories: Iterable[EnrichedCategory],
    total_budget: float,
    output_path: Path,
) -> Path:
    """Write every category (hidden ones included) with its usage figures."""

    headers = ["name", "budget", "spent", "remaining", "percent_of_total", "percent_used", "visible"]
    rows = (
        {
            "name": c.name,
            "budget": _serialize_value(float(c.budget)),
            "spent": _serialize_value(c.spent),
            "remaining": _serialize_value(c.remaining),
            "percent_of_total": f"{calculate_percentage(c.budget, total_budget):.1f}",
            "percent_used": f"{calculate_percentage(c.spent, c.budget):.1f}",
            "visible": _serialize_value(c.visible),
        }
        for c in categories
    )
    return _write_rows(output_path, headers, rows)


def export_expenses_csv(
    *,
    expenses: Iterable[Expense],
    categories: Iterable[Category],
    output_path: Path,
) -> Path:
    """Write the expense register with category names resolved."""

    names = {c.id: c.name for c in categories}
    headers = [
        "id",
        "date",
        "category",
        "description",
        "amount",
        "budgeted_amount",
        "recurring",
        "is_actual",
    ]
    rows = (
        {
            "id": _serialize_value(e.id),
            "date": _serialize_value(e.date),
            "category": names.get(e.category_id, UNKNOWN_CATEGORY),
            "description": _serialize_value(e.description),
            "amount": _serialize_value(float(e.amount)),
            "budgeted_amount": _serialize_value(e.budgeted_amount),
            "recurring": _serialize_value(e.recurring),
            "is_actual": _serialize_value(e.is_actual),
        }
        for e in expenses
    )
    return _write_rows(output_path, headers, rows)
