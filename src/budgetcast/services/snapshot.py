"""Load a store snapshot (budget, categories, expenses) from JSON."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from ..errors import SnapshotError
from ..logging_config import get_logger
from ..models.snapshot import BudgetSnapshot

logger = get_logger(__name__)


def load_snapshot(path: Path) -> BudgetSnapshot:
    """Read and validate ``path``.

    Raises:
        SnapshotError: when the file is missing, is not JSON, or does not
            match the record shapes.
    """

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SnapshotError(path, "file not found") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    try:
        snapshot = BudgetSnapshot.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotError(path, f"{exc.error_count()} invalid field(s)\n{exc}") from exc

    logger.info(
        "Snapshot loaded",
        extra={
            "budget_id": snapshot.budget.id,
            "category_count": len(snapshot.categories),
            "expense_count": len(snapshot.expenses),
        },
    )
    return snapshot
