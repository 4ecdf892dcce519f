"""Pytest configuration and shared fixtures for BudgetCast tests.

Records are built in memory with the same shapes the backing store hands to
the engine; nothing here touches disk except through ``tmp_path``.
"""

from __future__ import annotations

import itertools
import json
from datetime import date
from pathlib import Path

import pytest

from budgetcast.models import Budget, Category, Expense

REFERENCE_DATE = date(2025, 3, 15)


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def reference_date() -> date:
    """Fixed "now" for recurrence and forecast calculations (March 2025)."""
    return REFERENCE_DATE


@pytest.fixture
def budget_factory():
    """Factory for Budget records.

    Returns:
        Callable: Function that creates Budget instances
    """

    counter = itertools.count(1)

    def _create_budget(total_amount: float = 12000.0, name: str = "Test Budget", **kwargs) -> Budget:
        budget_id = kwargs.pop("id", f"budget-{next(counter)}")
        return Budget(id=budget_id, name=name, total_amount=total_amount, **kwargs)

    return _create_budget


@pytest.fixture
def category_factory():
    """Factory for Category records.

    Returns:
        Callable: Function that creates Category instances with unique ids
    """

    counter = itertools.count(1)

    def _create_category(
        name: str = "Test Category",
        budget: float = 1000.0,
        visible: bool = True,
        color: str = "#FF5733",
        budget_id: str = "budget-1",
        **kwargs,
    ) -> Category:
        """Create a category with sensible defaults.

        Args:
            name: Display name
            budget: Allocated amount
            visible: Whether the category counts toward totals and charts
            color: Display color token
            budget_id: Owning budget

        Returns:
            Category: Validated record
        """
        category_id = kwargs.pop("id", f"cat-{next(counter)}")
        return Category(
            id=category_id,
            budget_id=budget_id,
            name=name,
            color=color,
            budget=budget,
            visible=visible,
            **kwargs,
        )

    return _create_category


@pytest.fixture
def expense_factory():
    """Factory for Expense records.

    Returns:
        Callable: Function that creates Expense instances with unique ids
    """

    counter = itertools.count(1)

    def _create_expense(
        category: Category | str,
        amount: float = 100.0,
        on: date | str | None = date(2025, 1, 10),
        recurring: str = "one-time",
        is_actual: bool = True,
        budgeted_amount: float | None = None,
        description: str = "Test expense",
        **kwargs,
    ) -> Expense:
        """Create an expense against ``category`` (record or id).

        Args:
            category: Category record or raw category id
            amount: Actual amount
            on: Anchor date (date object or raw ISO string)
            recurring: 'one-time' or 'monthly'
            is_actual: Actual (True) or planned (False)
            budgeted_amount: Planned amount used when not actual

        Returns:
            Expense: Validated record
        """
        category_id = category if isinstance(category, str) else category.id
        expense_id = kwargs.pop("id", f"exp-{next(counter)}")
        return Expense(
            id=expense_id,
            category_id=category_id,
            budget_id=kwargs.pop("budget_id", "budget-1"),
            description=description,
            amount=amount,
            budgeted_amount=budgeted_amount,
            date=on,
            recurring=recurring,
            is_actual=is_actual,
            **kwargs,
        )

    return _create_expense


@pytest.fixture
def food_scenario(budget_factory, category_factory, expense_factory):
    """Budget of 12000 with one Food category and a one-time plus a monthly expense."""

    budget = budget_factory(total_amount=12000.0, id="budget-1")
    food = category_factory(name="Food", budget=6000.0, id="food")
    expenses = [
        expense_factory(food, amount=1000.0, on=date(2025, 1, 5), recurring="one-time"),
        expense_factory(food, amount=100.0, on=date(2025, 1, 1), recurring="monthly"),
    ]
    return budget, [food], expenses


@pytest.fixture
def snapshot_file(tmp_path, food_scenario) -> Path:
    """The food scenario written as a store snapshot JSON file."""

    budget, categories, expenses = food_scenario
    payload = {
        "budget": budget.model_dump(mode="json"),
        "categories": [c.model_dump(mode="json") for c in categories],
        "expenses": [e.model_dump(mode="json") for e in expenses],
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
