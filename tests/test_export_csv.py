"""Tests for CSV export of forecast, category and expense sheets."""

from __future__ import annotations

import csv
from datetime import date
from pathlib import Path

from budgetcast.models import CurrencyConfig
from budgetcast.services import budgeting, export_csv, forecast


def _read(path: Path) -> list[dict]:
    with path.open(newline="", encoding="utf-8") as fh:
        return list(csv.DictReader(fh))


def test_export_forecast_csv_creates_file(tmp_path, food_scenario, reference_date):
    """Forecast export writes one row per month with per-category columns."""

    budget, categories, expenses = food_scenario
    months = forecast.build_forecast(budget, categories, expenses, reference_date)

    output_path = tmp_path / "nested" / "forecast.csv"
    written = export_csv.export_forecast_csv(
        forecast=months, categories=categories, output_path=output_path
    )

    assert written == output_path
    rows = _read(output_path)
    assert len(rows) == 12
    assert list(rows[0].keys()) == ["month", "Food", "total", "cumulative", "remaining", "projected"]
    assert rows[0]["month"] == "January"
    assert float(rows[0]["Food"]) == 1100.0
    assert float(rows[2]["remaining"]) == 10700.0
    assert {row["projected"] for row in rows} == {"no"}


def test_export_forecast_merges_shared_names_and_skips_hidden(
    tmp_path, budget_factory, category_factory, expense_factory
):
    budget = budget_factory(total_amount=500.0)
    first = category_factory(id="a", name="Drinks")
    second = category_factory(id="b", name="Drinks")
    hidden = category_factory(id="h", name="Secret", visible=False)
    expenses = [
        expense_factory(first, amount=10.0, on=date(2025, 1, 2)),
        expense_factory(second, amount=15.0, on=date(2025, 1, 3)),
    ]
    categories = [first, second, hidden]
    months = forecast.build_forecast(budget, categories, expenses, date(2025, 6, 1))

    path = export_csv.export_forecast_csv(
        forecast=months, categories=categories, output_path=tmp_path / "f.csv"
    )

    rows = _read(path)
    assert "Secret" not in rows[0]
    assert float(rows[0]["Drinks"]) == 25.0


def test_export_forecast_with_currency(tmp_path, food_scenario, reference_date):
    budget, categories, expenses = food_scenario
    months = forecast.build_forecast(
        budget, categories, expenses, reference_date, selected_category_ids=frozenset({"food"})
    )
    usd = CurrencyConfig(code="USD", symbol="$", decimal_places=2, locale="en-US")

    path = export_csv.export_forecast_csv(
        forecast=months, categories=categories, output_path=tmp_path / "f.csv", currency=usd
    )

    rows = _read(path)
    assert rows[0]["total"] == "$1,100.00"
    assert rows[3]["projected"] == "yes"


def test_export_categories_csv(tmp_path, category_factory, expense_factory, reference_date):
    food = category_factory(name="Food", budget=400.0)
    hidden = category_factory(name="Hidden", budget=100.0, visible=False)
    enriched = budgeting.enrich_categories(
        [food, hidden], [expense_factory(food, amount=100.0)], reference_date
    )

    path = export_csv.export_categories_csv(
        categories=enriched, total_budget=1000.0, output_path=tmp_path / "categories.csv"
    )

    rows = _read(path)
    assert [r["name"] for r in rows] == ["Food", "Hidden"]
    assert rows[0]["spent"] == "100.0"
    assert rows[0]["remaining"] == "300.0"
    assert rows[0]["percent_of_total"] == "40.0"
    assert rows[0]["percent_used"] == "25.0"
    assert rows[1]["visible"] == "no"


def test_export_expenses_csv(tmp_path, category_factory, expense_factory):
    food = category_factory(name="Food")
    expenses = [
        expense_factory(food, amount=42.0, on=date(2025, 2, 1), recurring="monthly", id="e1"),
        expense_factory("gone", amount=7.0, is_actual=False, budgeted_amount=9.0, id="e2"),
    ]

    path = export_csv.export_expenses_csv(
        expenses=expenses, categories=[food], output_path=tmp_path / "expenses.csv"
    )

    rows = _read(path)
    assert rows[0]["category"] == "Food"
    assert rows[0]["recurring"] == "monthly"
    assert rows[0]["date"] == "2025-02-01"
    assert rows[0]["budgeted_amount"] == ""
    assert rows[1]["category"] == export_csv.UNKNOWN_CATEGORY
    assert rows[1]["budgeted_amount"] == "9.0"
    assert rows[1]["is_actual"] == "no"


def test_category_named_like_a_fixed_column_keeps_its_values(
    tmp_path, budget_factory, category_factory, expense_factory
):
    budget = budget_factory(total_amount=1000.0)
    clash = category_factory(id="t", name="total")
    food = category_factory(id="f", name="Food")
    expenses = [
        expense_factory(clash, amount=7.0, on=date(2025, 1, 2)),
        expense_factory(food, amount=100.0, on=date(2025, 1, 3)),
    ]
    months = forecast.build_forecast(budget, [clash, food], expenses, date(2025, 6, 1))

    path = export_csv.export_forecast_csv(
        forecast=months, categories=[clash, food], output_path=tmp_path / "f.csv"
    )

    with path.open(newline="", encoding="utf-8") as fh:
        header, january, *_ = list(csv.reader(fh))
    assert header == ["month", "total", "Food", "total", "cumulative", "remaining", "projected"]
    assert january[:4] == ["January", "7.0", "100.0", "107.0"]


def test_export_overview_csv(tmp_path, food_scenario, reference_date):
    budget, categories, expenses = food_scenario
    summary = budgeting.summarize_budget(budget, categories, expenses, reference_date)

    path = export_csv.export_overview_csv(
        budget=budget, summary=summary, output_path=tmp_path / "overview.csv"
    )

    values = {row["property"]: row["value"] for row in _read(path)}
    assert values["Budget name"] == budget.name
    assert values["Total budget"] == "12000.0"
    assert values["Allocated"] == "6000.0"
    assert values["Unallocated"] == "6000.0"
    assert values["Spent"] == "1300.0"
    assert values["Remaining"] == "10700.0"
    assert values["Percent used"] == "10.8"
    assert values["Health"] == "good"
    assert values["Over-allocated"] == "no"


def test_export_overview_with_currency(tmp_path, food_scenario, reference_date):
    budget, categories, expenses = food_scenario
    summary = budgeting.summarize_budget(budget, categories, expenses, reference_date)
    usd = CurrencyConfig(code="USD", symbol="$", decimal_places=2, locale="en-US")

    path = export_csv.export_overview_csv(
        budget=budget, summary=summary, output_path=tmp_path / "overview.csv", currency=usd
    )

    values = {row["property"]: row["value"] for row in _read(path)}
    assert values["Spent"] == "$1,300.00"
    assert values["Percent used"] == "10.8"
