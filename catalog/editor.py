"""
catalog.editor - Part editor state machine.

    UNLOADED ─load→ LOADING ─ok→ LOADED ─edit→ EDITING ─save→ SAVING ─ok→ LOADED
                       └─fail→ UNLOADED                        └─fail→ EDITING
    LOADED ─start_revision→ REVISION_PENDING ─ok→ LOADING (new id)
                                             └─fail→ LOADED

Local edits live in ``description`` / ``sources`` and never touch the
held Part's field map; only a successful save replaces the Part with
the server's canonical copy.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Optional

from catalog.client import CatalogClient
from catalog.errors import (
    CatalogError, EditorStateError, OperationInProgress, SaveFailed,
)
from catalog.models import Part, SourceRecord
from catalog.state import CatalogState

logger = logging.getLogger(__name__)


class EditorState(enum.Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    EDITING = "editing"
    SAVING = "saving"
    REVISION_PENDING = "revision_pending"


_BUSY = (EditorState.SAVING, EditorState.REVISION_PENDING)
_EDITABLE = (EditorState.LOADED, EditorState.EDITING)
_SOURCE_FIELDS = {"manufacturer": "manufacturer", "mpn": "mpn"}


class PartEditor:

    def __init__(self, client: CatalogClient, catalog: Optional[CatalogState] = None):
        self.client = client
        self.catalog = catalog
        self.state = EditorState.UNLOADED
        self.target_id: Optional[str] = None
        self.part: Optional[Part] = None
        self.description = ""
        self.sources: list[SourceRecord] = []
        self.last_error: Optional[CatalogError] = None
        self._generation = 0
        self._seen_selection: Optional[str] = None

    # ── Loading ────────────────────────────────────────────────────────

    async def load(self, part_id: Optional[str] = None) -> Optional[Part]:
        """
        Fetch ``part_id`` (default: the navigator's selected part, then
        the current target) and make it editable.

        Returns None when the response arrived after a newer load()
        re-targeted the editor; that response is discarded.
        """
        if self.state in _BUSY:
            raise OperationInProgress(
                f"cannot load while {self.state.value} for {self.target_id}")

        # A navigator selection is taken once; after that the editor's own
        # target (e.g. a freshly minted revision) wins until it changes.
        selected = self.catalog.selected_part_id if self.catalog is not None else None
        if part_id is None and selected and selected != self._seen_selection:
            part_id = selected
        self._seen_selection = selected
        part_id = part_id or self.target_id
        if not part_id:
            raise EditorStateError("no part selected")

        return await self._fetch(part_id)

    async def _fetch(self, part_id: str) -> Optional[Part]:
        self.target_id = part_id
        self._generation += 1
        generation = self._generation
        self.state = EditorState.LOADING

        try:
            part = await self.client.get_part(part_id)
            sources = part.sources
        except CatalogError as exc:
            if not self._is_current(part_id, generation):
                logger.debug(f"Ignoring failed load of superseded part {part_id}")
                return None
            logger.error(f"Failed to load part {part_id}: {exc}")
            self._clear()
            self.state = EditorState.UNLOADED
            self.last_error = exc
            raise

        if not self._is_current(part_id, generation):
            logger.debug(f"Discarding stale detail response for {part_id}")
            return None

        self.part = part
        self.description = part.description
        self.sources = sources
        self.state = EditorState.LOADED
        self.last_error = None
        return part

    def _is_current(self, part_id: str, generation: int) -> bool:
        return self.target_id == part_id and self._generation == generation

    def _clear(self):
        self.part = None
        self.description = ""
        self.sources = []

    # ── Local edits ────────────────────────────────────────────────────

    def edit(self, field: str, value: str, index: Optional[int] = None) -> None:
        """
        Change ``description``, or the ``manufacturer`` / ``mpn`` of the
        source at 0-based ``index``.  No request is made.
        """
        self._require_editable("edit")
        value = "" if value is None else str(value)

        if field == "description":
            self.description = value
        elif field in _SOURCE_FIELDS:
            if index is None or not 0 <= index < len(self.sources):
                raise IndexError(f"no source at position {index}")
            self.sources[index] = dataclasses.replace(
                self.sources[index], **{_SOURCE_FIELDS[field]: value})
        else:
            raise ValueError(f"unknown field {field!r}")

        self.state = EditorState.EDITING

    def add_source(self) -> int:
        """Append an empty source row; returns its index."""
        self._require_editable("add a source")
        self.sources.append(SourceRecord())
        self.state = EditorState.EDITING
        return len(self.sources) - 1

    def remove_source(self, index: int) -> None:
        """Drop a source row.  The last remaining row is blanked instead."""
        self._require_editable("remove a source")
        if not 0 <= index < len(self.sources):
            raise IndexError(f"no source at position {index}")
        if len(self.sources) == 1:
            self.sources[0] = SourceRecord()
        else:
            del self.sources[index]
        self.state = EditorState.EDITING

    def discard_edits(self) -> None:
        """Throw away local edits and re-derive from the held part."""
        self._require_editable("discard edits")
        self.description = self.part.description
        self.sources = self.part.sources
        self.state = EditorState.LOADED

    @property
    def is_dirty(self) -> bool:
        if self.part is None:
            return False
        return (self.description != self.part.description
                or self.sources != self.part.sources)

    def _require_editable(self, action: str):
        if self.state not in _EDITABLE or self.part is None:
            raise EditorStateError(f"cannot {action} while {self.state.value}")

    # ── Save ───────────────────────────────────────────────────────────

    async def save(self) -> Part:
        """
        Send local edits.  On success the held part is replaced by the
        server's response.  On failure the editor returns to EDITING
        with edits untouched and SaveFailed is raised.
        """
        if self.state in _BUSY:
            raise OperationInProgress(
                f"{self.state.value} already in progress for {self.target_id}")
        self._require_editable("save")

        part_id = self.part.id
        self.state = EditorState.SAVING
        try:
            updated = await self.client.update_part(
                part_id, self.description, list(self.sources))
            sources = updated.sources
        except CatalogError as exc:
            logger.error(f"Failed to save part {part_id}: {exc}")
            self.state = EditorState.EDITING
            if not isinstance(exc, SaveFailed):
                exc = SaveFailed(f"save of {part_id} failed: {exc}", status=exc.status)
            self.last_error = exc
            raise exc

        self.part = updated
        self.target_id = updated.id
        self.description = updated.description
        self.sources = sources
        self.state = EditorState.LOADED
        self.last_error = None
        logger.info(f"Saved part {part_id}")
        return updated

    # ── Revisions ──────────────────────────────────────────────────────

    async def start_revision(self) -> str:
        """
        Ask the service for a new revision of the held part, then load it.
        Returns the new part identifier.
        """
        if self.state in _BUSY:
            raise OperationInProgress(
                f"{self.state.value} already in progress for {self.target_id}")
        if self.state != EditorState.LOADED or self.part is None:
            raise EditorStateError(
                f"cannot start a revision while {self.state.value}")

        part_id = self.part.id
        self.state = EditorState.REVISION_PENDING
        try:
            new_id = await self.client.start_revision(part_id)
        except CatalogError as exc:
            logger.error(f"Failed to start revision of {part_id}: {exc}")
            self.state = EditorState.LOADED
            self.last_error = exc
            raise

        logger.info(f"Revision of {part_id} created as {new_id}")
        self._clear()
        # A failed fetch leaves target_id on the new revision for a retry.
        await self._fetch(new_id)
        return new_id
