"""
catalog.codec - Field map  <->  ordered source list translation.

The backend stores a part's sources as flat keys:

    Manufacturer / MPN              source 1
    Manufacturer{i} / MPN{i}        source i, i >= 2

This is the only module that knows about the numeric-suffix naming.
Everything else works with list[SourceRecord].
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

import config
from catalog.errors import MalformedFieldMap
from catalog.models import SourceRecord

DESCRIPTION_KEY = "Description"
MANUFACTURER_KEY = "Manufacturer"
MPN_KEY = "MPN"

# Manufacturer, MPN, Manufacturer2, MPN17 … but not Manufacturer1 / MPN0
_SOURCE_KEY_RE = re.compile(r"^(?:Manufacturer|MPN)(?:[2-9]|[1-9]\d+)?$")


def source_keys(index: int) -> tuple[str, str]:
    """Return the (manufacturer, mpn) key pair for a 1-based position."""
    if index < 1:
        raise ValueError(f"source index must be >= 1, got {index}")
    if index == 1:
        return MANUFACTURER_KEY, MPN_KEY
    return f"{MANUFACTURER_KEY}{index}", f"{MPN_KEY}{index}"


def is_source_key(key: str) -> bool:
    return bool(_SOURCE_KEY_RE.match(key))


def _value_of(entry: Any) -> str:
    # Accept FieldValue, raw {"value": …} dicts and bare strings.
    if entry is None:
        return ""
    if isinstance(entry, str):
        return entry
    if isinstance(entry, Mapping):
        val = entry.get("value")
    else:
        val = getattr(entry, "value", None)
    return "" if val is None else str(val)


# ── Decode ────────────────────────────────────────────────────────────

def decode_sources(
    fields: Mapping[str, Any],
    limit: Optional[int] = None,
) -> list[SourceRecord]:
    """
    Walk indices 1, 2, … until both keys of a pair are absent.

    Never returns an empty list: a map without any source yields one
    empty record so an editor always has a row to work with.
    Raises MalformedFieldMap when more than ``limit`` sources decode.
    """
    if limit is None:
        limit = config.MAX_SOURCE_INDEX

    sources: list[SourceRecord] = []
    index = 1
    while True:
        mfr_key, mpn_key = source_keys(index)
        if mfr_key not in fields and mpn_key not in fields:
            break
        if index > limit:
            raise MalformedFieldMap(
                f"field map holds more than {limit} sources")
        sources.append(SourceRecord(
            manufacturer=_value_of(fields.get(mfr_key)),
            mpn=_value_of(fields.get(mpn_key)),
        ))
        index += 1

    if not sources:
        sources.append(SourceRecord())
    return sources


def decode_description(fields: Mapping[str, Any]) -> str:
    return _value_of(fields.get(DESCRIPTION_KEY))


# ── Encode ────────────────────────────────────────────────────────────

def trim_trailing_empty(sources: Iterable[SourceRecord]) -> list[SourceRecord]:
    """Drop the trailing run of records whose both sides are empty."""
    out = list(sources)
    while out and out[-1].is_empty:
        out.pop()
    return out


def encode_sources(
    sources: Iterable[SourceRecord],
    description: str = "",
) -> dict[str, str]:
    """
    Flat key -> value subset for the given sources and description.

    Positions come from list order.  Interior empty records keep their
    slot; the trailing empty run is dropped.  Description is emitted
    only when non-empty.
    """
    out: dict[str, str] = {}
    if description:
        out[DESCRIPTION_KEY] = description
    for index, src in enumerate(trim_trailing_empty(sources), start=1):
        mfr_key, mpn_key = source_keys(index)
        out[mfr_key] = src.manufacturer
        out[mpn_key] = src.mpn
    return out


def update_payload(sources: Iterable[SourceRecord], description: str = "") -> dict:
    """JSON body for PUT /v1/parts/<id>.json."""
    return {
        "description": description,
        "sources": [s.to_dict() for s in trim_trailing_empty(sources)],
    }


def sources_from_payload(raw: Any) -> list[SourceRecord]:
    """Parse the ``sources`` array of an update body.  Raises ValueError."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValueError("sources must be a list")
    out = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValueError(f"source entry is not an object: {item!r}")
        out.append(SourceRecord(
            manufacturer=str(item.get("manufacturer") or "").strip(),
            mpn=str(item.get("mpn") or "").strip(),
        ))
    return out


def _source_count(values: Mapping[str, Any]) -> int:
    # Contiguous run from index 1, the same walk decode_sources makes.
    count = 0
    while True:
        mfr_key, mpn_key = source_keys(count + 1)
        if mfr_key not in values and mpn_key not in values:
            return count
        count += 1


def merge_fields(
    values: Mapping[str, str],
    sources: Iterable[SourceRecord],
    description: str = "",
) -> dict[str, str]:
    """
    Rebuild a complete value map: unrelated keys are kept verbatim, the
    description and the contiguous source run (the part decode_sources
    sees) are replaced by the encoding of ``sources`` and ``description``.

    Source keys past a gap were never decoded, so they are left alone.
    """
    sources = trim_trailing_empty(sources)
    span = max(_source_count(values), len(sources))
    replaced = {DESCRIPTION_KEY}
    for index in range(1, span + 1):
        replaced.update(source_keys(index))

    merged = {k: v for k, v in values.items() if k not in replaced}
    merged.update(encode_sources(sources, description))
    return merged
