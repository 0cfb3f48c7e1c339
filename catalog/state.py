"""
catalog.state - Session-scoped state shared by navigator and editor.

One CatalogState is created per session and passed by reference.
Each attribute is written only by the component that owns it:
category/part-list fields by CatalogNavigator, nothing here by
PartEditor (it only reads ``selected_part_id``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from catalog.errors import CatalogError
from catalog.models import Category, PartSummary


@dataclass
class CatalogState:
    categories: list[Category] = field(default_factory=list)
    categories_loaded: bool = False
    visible_categories: list[Category] = field(default_factory=list)
    filter_term: str = ""

    selected_category: Optional[str] = None
    parts: list[PartSummary] = field(default_factory=list)
    selected_part_id: Optional[str] = None

    # Set when the last parts fetch for selected_category failed, so
    # selecting it again retries instead of being skipped.
    parts_failed: bool = False

    last_error: Optional[CatalogError] = None

    # Bumped for every parts-by-category request; a response whose
    # ticket is not the latest is stale.
    parts_request: int = 0

    def category(self, category_id: str) -> Optional[Category]:
        for cat in self.categories:
            if cat.id == category_id:
                return cat
        return None

    def part(self, part_id: str) -> Optional[PartSummary]:
        for p in self.parts:
            if p.id == part_id:
                return p
        return None
