"""
services.sequence_service - Revision (VVVV) allocation.

Kept apart from parts_service so the numbering rule can be reused by
anything that mints IPNs.
"""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from db.models import Part


def next_revision(session: Session, category: str, number: str) -> int:
    """
    Return the next unused revision number for the given CCC-NNN
    group.  Raises ValueError on overflow (>9999).
    """
    db_max = session.query(func.max(Part.revision)).filter(
        Part.category == category, Part.number == number,
    ).scalar()
    nxt = (int(db_max) if db_max else 0) + 1
    if nxt > 9999:
        raise ValueError(f"revision overflow for group {category}-{number}")
    return nxt
