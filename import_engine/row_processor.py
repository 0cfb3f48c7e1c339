"""
import_engine.row_processor - Merge partmaster rows into part field maps.

A partmaster may list the same IPN on several rows, one per source.
Rows are ordered by Priority (lowest first, blank last) and their
Manufacturer/MPN pairs become sources 1..n.  Other columns take the
first non-empty value in that order.
"""

from __future__ import annotations

from catalog.codec import decode_sources, is_source_key, merge_fields
from catalog.errors import MalformedFieldMap
from catalog.models import SourceRecord
from schema.numbering import parse_ipn

# Columns that drive the merge and are never stored as fields
CONTROL_COLUMNS = frozenset({"IPN", "Priority"})


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


def row_ipn(row: dict) -> str:
    """Validated, upper-cased IPN of a row.  Raises RowError."""
    ipn = (row.get("IPN") or "").strip().upper()
    if not ipn:
        raise RowError("Missing IPN")
    if parse_ipn(ipn) is None:
        raise RowError(f"Invalid IPN {ipn!r} (expected CCC-NNN-VVVV)")
    return ipn


def _priority(row: dict) -> float:
    raw = (row.get("Priority") or "").strip()
    try:
        return int(raw)
    except ValueError:
        return float("inf")


def merge_rows(rows: list[dict]) -> dict[str, str]:
    """
    Build one field map from all rows sharing an IPN.
    Raises RowError if a row carries a runaway source list.
    """
    ordered = sorted(rows, key=_priority)      # stable for equal priority

    values: dict[str, str] = {}
    for row in ordered:
        for col, raw in row.items():
            if not col or col in CONTROL_COLUMNS or is_source_key(col):
                continue
            val = (raw or "").strip()
            if val and not values.get(col):
                values[col] = val

    sources: list[SourceRecord] = []
    for row in ordered:
        cleaned = {k: (v or "").strip() for k, v in row.items()
                   if k and is_source_key(k)}
        try:
            decoded = decode_sources(cleaned)
        except MalformedFieldMap as exc:
            raise RowError(str(exc)) from exc
        sources.extend(s for s in decoded if not s.is_empty)

    if not values.get("Value") and sources and sources[0].mpn:
        values["Value"] = sources[0].mpn

    return merge_fields(values, sources, values.get("Description", ""))
