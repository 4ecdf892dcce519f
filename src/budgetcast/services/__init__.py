"""Service module exports."""

from . import budgeting, currency, export_csv, forecast, snapshot

__all__ = [
    "budgeting",
    "currency",
    "export_csv",
    "forecast",
    "snapshot",
]
