"""
Default category template offered when a new budget is created.
"""

from __future__ import annotations

import uuid
from typing import Callable

from ..models.category import Category

DEFAULT_CATEGORY_TEMPLATE = [
    {"name": "Mat / Drikke Dagligvare", "color": "#0088FE", "budget": 4000, "visible": True},
    {"name": "Vinmonopolet", "color": "#00C49F", "budget": 2000, "visible": True},
    {"name": "Holmenkollstafetten", "color": "#FFBB28", "budget": 1500, "visible": True},
    {"name": "Opplevelser", "color": "#FF8042", "budget": 2000, "visible": True},
    {"name": "Leie av lokaler", "color": "#A28BFF", "budget": 3000, "visible": True},
    {"name": "Bonger", "color": "#FF6B6B", "budget": 1500, "visible": True},
    {"name": "Foredragsholdere", "color": "#4ECDC4", "budget": 2000, "visible": True},
]


def _new_id() -> str:
    return str(uuid.uuid4())


def build_default_categories(
    budget_id: str, *, id_factory: Callable[[], str] = _new_id
) -> list[Category]:
    """Fresh template categories for ``budget_id``."""

    return [
        Category(id=id_factory(), budget_id=budget_id, **template)
        for template in DEFAULT_CATEGORY_TEMPLATE
    ]
