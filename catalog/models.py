"""
catalog.models - Plain data records exchanged with the catalog service.

Part carries the backend's flat field map; its ``description`` and
``sources`` views are always derived from that map through
catalog.codec and never stored separately.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from catalog.errors import MalformedResponse


@dataclass(frozen=True)
class SourceRecord:
    """One manufacturer / MPN pair.  Identity is its list position."""

    manufacturer: str = ""
    mpn: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.manufacturer and not self.mpn

    def to_dict(self) -> dict:
        return {"manufacturer": self.manufacturer, "mpn": self.mpn}


@dataclass
class FieldValue:
    """A field-map entry: the current value plus opaque backend metadata."""

    value: str = ""
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: Any) -> "FieldValue":
        if isinstance(raw, str):
            return cls(value=raw)
        if not isinstance(raw, dict):
            raise MalformedResponse(f"field entry is not an object: {raw!r}")
        extra = {k: v for k, v in raw.items() if k != "value"}
        value = raw.get("value", "")
        return cls(value="" if value is None else str(value), extra=extra)

    def to_dict(self) -> dict:
        return {"value": self.value, **self.extra}


@dataclass(frozen=True)
class Category:
    id: str
    name: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, raw: Any) -> "Category":
        return cls(**_summary_fields(raw, "category"))


@dataclass(frozen=True)
class PartSummary:
    id: str
    name: str = ""
    description: str = ""

    @classmethod
    def from_json(cls, raw: Any) -> "PartSummary":
        return cls(**_summary_fields(raw, "part"))


@dataclass
class Part:
    id: str
    revision: str = ""
    name: str = ""
    fields: dict[str, FieldValue] = field(default_factory=dict)
    # Remaining top-level keys (symbolIdStr, exclude_from_bom, …)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: Any) -> "Part":
        if not isinstance(raw, dict):
            raise MalformedResponse(f"part detail is not an object: {type(raw).__name__}")
        part_id = raw.get("id")
        if not isinstance(part_id, str) or not part_id:
            raise MalformedResponse("part detail has no id")
        raw_fields = raw.get("fields") or {}
        if not isinstance(raw_fields, dict):
            raise MalformedResponse(f"fields of {part_id} is not a mapping")
        return cls(
            id=part_id,
            revision=str(raw.get("revision") or ""),
            name=str(raw.get("name") or ""),
            fields={str(k): FieldValue.from_json(v) for k, v in raw_fields.items()},
            extra={k: v for k, v in raw.items()
                   if k not in ("id", "revision", "name", "fields")},
        )

    def value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        entry = self.fields.get(key)
        return entry.value if entry is not None else default

    @property
    def description(self) -> str:
        from catalog.codec import decode_description
        return decode_description(self.fields)

    @property
    def sources(self) -> list[SourceRecord]:
        from catalog.codec import decode_sources
        return decode_sources(self.fields)


def _summary_fields(raw: Any, what: str) -> dict:
    if not isinstance(raw, dict):
        raise MalformedResponse(f"{what} entry is not an object: {raw!r}")
    item_id = raw.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise MalformedResponse(f"{what} entry has no id: {raw!r}")
    return {
        "id": item_id,
        "name": str(raw.get("name") or ""),
        "description": str(raw.get("description") or ""),
    }
