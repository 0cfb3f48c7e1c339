"""
services.parts_service - Create / read / update / revise Part records.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and allows
the caller to batch multiple operations in one transaction.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from catalog.codec import decode_description, merge_fields
from catalog.models import SourceRecord
from db.models import Part, PartField
from schema.numbering import bump_revision, parse_ipn
from services.sequence_service import next_revision

logger = logging.getLogger(__name__)


class PartExists(ValueError):
    """An IPN is already taken."""


def set_fields(part: Part, values: dict[str, str]) -> None:
    """
    Replace the part's field map with ``values``, reusing rows for keys
    that survive so their ids stay stable.
    """
    existing = {f.field_name: f for f in part.fields}
    kept: list[PartField] = []
    for position, (name, value) in enumerate(values.items()):
        row = existing.get(name)
        if row is None:
            row = PartField(field_name=name)
        row.field_value = value
        row.position = position
        kept.append(row)
    part.fields = kept


class PartsService:

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create(
        session: Session,
        ipn: str,
        name: str = "",
        category: Optional[str] = None,
        values: Optional[dict[str, str]] = None,
    ) -> Part:
        """
        Create a new Part.  ``ipn`` must be CCC-NNN-VVVV and, when a
        category is given, its CCC must match it.  ``name`` becomes the
        Description field unless ``values`` already carries one.
        """
        ipn = (ipn or "").strip().upper()
        parsed = parse_ipn(ipn)
        if parsed is None:
            raise ValueError(f"invalid IPN {ipn!r} (expected CCC-NNN-VVVV)")
        if category and category.strip().upper() != parsed["ccc"]:
            raise ValueError(f"IPN {ipn} does not belong to category {category}")
        if session.get(Part, ipn) is not None:
            raise PartExists(f"part {ipn} already exists")

        part = Part(ipn=ipn, category=parsed["ccc"],
                    number=parsed["nnn"], revision=parsed["vvvv"])
        values = dict(values or {})
        if name and not values.get("Description"):
            values = {"Description": name.strip(), **values}
        set_fields(part, {k: v for k, v in values.items() if k})

        session.add(part)
        session.flush()
        return part

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get(session: Session, ipn: str) -> Part | None:
        return session.get(Part, (ipn or "").strip().upper())

    # ── Update ─────────────────────────────────────────────────────────

    @staticmethod
    def update(
        session: Session,
        part: Part,
        description: Optional[str],
        sources: Iterable[SourceRecord],
    ) -> Part:
        """
        Apply an edit: the contiguous source keys are rewritten from
        ``sources`` (trailing empty sources drop their keys); other fields,
        including source keys past a gap, are left alone.
        ``description=None`` keeps the stored description.
        """
        values = part.field_values()
        if description is None:
            description = decode_description(values)
        set_fields(part, merge_fields(values, sources, description.strip()))
        session.flush()
        return part

    # ── Revisions ──────────────────────────────────────────────────────

    @staticmethod
    def start_revision(session: Session, part: Part) -> Part:
        """Copy ``part`` into the next unused revision of its CCC-NNN."""
        rev = next_revision(session, part.category, part.number)
        new_ipn = bump_revision(part.ipn, at_least=rev)
        clone = Part(ipn=new_ipn, category=part.category,
                     number=part.number, revision=new_ipn[-4:])
        set_fields(clone, part.field_values())
        session.add(clone)
        session.flush()
        logger.info(f"Started revision {new_ipn} from {part.ipn}")
        return clone
