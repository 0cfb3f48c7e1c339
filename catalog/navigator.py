"""
catalog.navigator - Category list, category selection and part listing.
"""

from __future__ import annotations

import logging
from typing import Optional

from catalog.client import CatalogClient
from catalog.errors import CatalogError, CreateFailed, MalformedResponse
from catalog.models import Category, PartSummary
from catalog.state import CatalogState

logger = logging.getLogger(__name__)


def filter_categories(categories: list[Category], term: str) -> list[Category]:
    """Case-insensitive substring match on category id and name."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(categories)
    return [
        cat for cat in categories
        if needle in cat.id.lower() or needle in (cat.name or "").lower()
    ]


class CatalogNavigator:

    def __init__(self, client: CatalogClient, state: Optional[CatalogState] = None):
        self.client = client
        self.state = state if state is not None else CatalogState()

    # ── Categories ─────────────────────────────────────────────────────

    async def list_categories(self, refresh: bool = False) -> list[Category]:
        """
        Fetch the category list once per session.  Later calls return
        the stored list unless ``refresh`` is set.  Resets the filter.
        """
        st = self.state
        if st.categories_loaded and not refresh:
            return st.categories

        try:
            categories = await self.client.list_categories()
        except CatalogError as exc:
            logger.error(f"Failed to load categories: {exc}")
            st.last_error = exc
            raise

        st.categories = categories
        st.categories_loaded = True
        st.filter_term = ""
        st.visible_categories = list(categories)
        logger.info(f"Loaded {len(categories)} categories")
        return categories

    def filter_categories(self, term: str) -> list[Category]:
        """Recompute the displayed subset.  Never touches the stored list."""
        self.state.filter_term = term or ""
        self.state.visible_categories = filter_categories(self.state.categories, term)
        return self.state.visible_categories

    # ── Parts ──────────────────────────────────────────────────────────

    async def select_category(self, category_id: str) -> list[PartSummary]:
        """
        Make ``category_id`` current and load its parts.

        Selecting the already-selected category does nothing unless its
        last fetch failed, in which case it is retried.  The previous
        part list is cleared before the request goes out.
        """
        if (category_id == self.state.selected_category
                and not self.state.parts_failed):
            return self.state.parts

        self.state.selected_category = category_id
        self.state.selected_part_id = None
        return await self._load_parts(category_id)

    async def refresh_parts(self) -> list[PartSummary]:
        """Re-fetch the parts of the current category."""
        if self.state.selected_category is None:
            return []
        return await self._load_parts(self.state.selected_category)

    async def _load_parts(self, category_id: str) -> list[PartSummary]:
        st = self.state
        st.parts = []
        st.parts_request += 1
        st.parts_failed = False
        ticket = st.parts_request

        try:
            parts = await self.client.list_parts(category_id)
        except MalformedResponse as exc:
            logger.error(f"Unexpected parts response for {category_id}: {exc}")
            if self._is_current(category_id, ticket):
                st.last_error = exc
                st.parts_failed = True
                st.parts = []
            return []
        except CatalogError as exc:
            logger.error(f"Failed to load parts for {category_id}: {exc}")
            if not self._is_current(category_id, ticket):
                return []
            st.last_error = exc
            st.parts_failed = True
            st.parts = []
            raise

        if not self._is_current(category_id, ticket):
            logger.debug(f"Discarding stale parts response for {category_id}")
            return st.parts

        st.parts = parts
        st.last_error = None
        return parts

    def _is_current(self, category_id: str, ticket: int) -> bool:
        return (self.state.selected_category == category_id
                and self.state.parts_request == ticket)

    def select_part(self, part_id: str) -> PartSummary:
        """Mark a listed part as the one to open in the editor."""
        part = self.state.part(part_id)
        if part is None:
            raise KeyError(f"part {part_id} is not in the current list")
        self.state.selected_part_id = part_id
        return part

    async def create_part(self, part_id: str, name: str = "") -> list[PartSummary]:
        """
        Create a part in the selected category and reload the list.
        Raises CreateFailed (nothing changes locally on failure).
        """
        category_id = self.state.selected_category
        part_id = (part_id or "").strip()
        if not category_id:
            raise CreateFailed("no category selected")
        if not part_id:
            raise CreateFailed("part id is required")

        try:
            await self.client.create_part(part_id, (name or "").strip(), category_id)
        except CatalogError as exc:
            logger.error(f"Failed to create part {part_id}: {exc}")
            self.state.last_error = exc
            raise

        logger.info(f"Created part {part_id} in {category_id}")
        if self.state.selected_category != category_id:
            return self.state.parts
        return await self._load_parts(category_id)
