"""
services.category_service - Category derivation and per-category listing.

Categories are not stored: they are the distinct CCC prefixes of the
IPNs present in the parts table.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import Part
from schema.categories import category_name, category_description


class CategoryService:

    @staticmethod
    def list_categories(session: Session) -> list[dict]:
        codes = sorted(
            row[0] for row in session.query(Part.category).distinct()
            if row[0]
        )
        return [
            {
                "id": code,
                "name": category_name(code),
                "description": category_description(code),
            }
            for code in codes
        ]

    @staticmethod
    def list_parts(session: Session, category: str) -> list[dict]:
        parts = (
            session.query(Part)
            .filter(Part.category == category.upper())
            .order_by(Part.ipn)
            .all()
        )
        return [p.to_summary() for p in parts]
