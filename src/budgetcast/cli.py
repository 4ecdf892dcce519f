"""Command line entry points for BudgetCast."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .errors import SnapshotError
from .logging_config import setup_logging
from .services import budgeting, export_csv, forecast
from .services.currency import format_currency
from .services.snapshot import load_snapshot

_AS_OF = click.option(
    "--as-of",
    "as_of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Reference date (YYYY-MM-DD); defaults to today.",
)


def _reference_date(as_of) -> date:
    return as_of.date() if as_of is not None else date.today()


def _load(path: str):
    try:
        return load_snapshot(Path(path))
    except SnapshotError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Budget summaries and forecasts from a store snapshot."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = config


@main.command()
@click.argument("snapshot_path", type=click.Path(dir_okay=False))
@_AS_OF
@click.pass_obj
def summary(config: BaseConfig, snapshot_path: str, as_of) -> None:
    """Print totals, health and per-category usage."""

    snap = _load(snapshot_path)
    money = config.currency()
    result = budgeting.summarize_budget(
        snap.budget, snap.categories, snap.expenses, _reference_date(as_of)
    )
    totals = result.totals

    click.echo(f"Budget: {snap.budget.name or snap.budget.id}")
    click.echo(f"Total:       {format_currency(result.total_budget, money)}")
    click.echo(f"Spent:       {format_currency(totals.spent, money)} ({totals.percent_used}%)")
    click.echo(f"Remaining:   {format_currency(totals.remaining, money)}")
    click.echo(f"Unallocated: {format_currency(totals.unallocated, money)}")
    click.echo(f"Health:      {result.health.value}")
    if result.over_allocated:
        click.echo("Warning: categories are allocated more than the budget total.")

    for row in result.breakdown:
        flag = "  OVER" if row.over_budget else ""
        click.echo(
            f"  {row.name}: {format_currency(row.spent, money)} of "
            f"{format_currency(row.budget, money)} ({row.percent_used}%){flag}"
        )


@main.command(name="forecast")
@click.argument("snapshot_path", type=click.Path(dir_okay=False))
@_AS_OF
@click.option(
    "--average",
    "average_ids",
    multiple=True,
    help="Category id to project at its average monthly rate (repeatable).",
)
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False), default=None)
@click.pass_obj
def forecast_command(
    config: BaseConfig,
    snapshot_path: str,
    as_of,
    average_ids: tuple[str, ...],
    csv_path: Optional[str],
) -> None:
    """Print the month-by-month forecast for the reference year."""

    snap = _load(snapshot_path)
    money = config.currency()
    months = forecast.build_forecast(
        snap.budget,
        snap.categories,
        snap.expenses,
        _reference_date(as_of),
        selected_category_ids=frozenset(average_ids),
    )

    for month in months:
        marker = "*" if month.projected_average else " "
        click.echo(
            f"{marker}{month.name:<10} {format_currency(month.total, money):>14} "
            f"{format_currency(month.cumulative, money):>14} "
            f"{format_currency(month.remaining, money):>14}"
        )

    zero_index = forecast.zero_month_index(months)
    if zero_index >= 0:
        click.echo(f"Budget runs out in {months[zero_index].name}.")
    else:
        click.echo("Budget lasts the whole year.")

    if csv_path:
        written = export_csv.export_forecast_csv(
            forecast=months, categories=snap.categories, output_path=Path(csv_path)
        )
        click.echo(f"Forecast written: {written}")


@main.command()
@click.argument("snapshot_path", type=click.Path(dir_okay=False))
@click.argument("output_dir", type=click.Path(file_okay=False))
@_AS_OF
def export(snapshot_path: str, output_dir: str, as_of) -> None:
    """Write overview, forecast, category and expense sheets as CSV files."""

    snap = _load(snapshot_path)
    reference = _reference_date(as_of)
    out = Path(output_dir)

    months = forecast.build_forecast(snap.budget, snap.categories, snap.expenses, reference)
    summary = budgeting.summarize_budget(snap.budget, snap.categories, snap.expenses, reference)
    enriched = summary.categories

    paths = [
        export_csv.export_overview_csv(
            budget=snap.budget, summary=summary, output_path=out / "overview.csv"
        ),
        export_csv.export_forecast_csv(
            forecast=months, categories=snap.categories, output_path=out / "forecast.csv"
        ),
        export_csv.export_categories_csv(
            categories=enriched,
            total_budget=snap.budget.total_amount,
            output_path=out / "categories.csv",
        ),
        export_csv.export_expenses_csv(
            expenses=snap.expenses, categories=snap.categories, output_path=out / "expenses.csv"
        ),
    ]
    for path in paths:
        click.echo(f"Export written: {path}")
