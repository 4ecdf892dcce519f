"""Exception types raised by BudgetCast."""

from __future__ import annotations


class BudgetCastError(Exception):
    """Base class for application errors."""


class SnapshotError(BudgetCastError):
    """Raised when a store snapshot cannot be read or validated."""

    def __init__(self, path: object, reason: str):
        super().__init__(f"Could not load snapshot {path}: {reason}")
        self.path = path
        self.reason = reason
