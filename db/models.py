"""
db.models - SQLAlchemy ORM declarations.

Tables
------
parts        - one row per IPN (CCC-NNN-VVVV).  Category and revision
               segments are stored directly for indexed listing.
part_fields  - EAV store for the part's flat field map (Description,
               Value, Manufacturer, MPN, Manufacturer2, …).  Keys vary
               per part, so no column is fixed in advance.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, DateTime, Text, ForeignKey, Index,
)
from sqlalchemy.orm import DeclarativeBase, relationship

from schema.categories import symbol_id


class Base(DeclarativeBase):
    pass


class Part(Base):
    __tablename__ = "parts"

    # ── Primary key ────────────────────────────────────────────────────
    ipn = Column(String(20), primary_key=True)                  # CCC-NNN-VVVV

    # ── IPN segments ───────────────────────────────────────────────────
    category = Column(String(3), nullable=False, index=True)
    number   = Column(String(3), nullable=False)
    revision = Column(String(4), nullable=False)

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc),
                        onupdate=lambda: datetime.now(timezone.utc))

    # ── EAV relationship ───────────────────────────────────────────────
    fields = relationship(
        "PartField", back_populates="part",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="PartField.position",
    )

    __table_args__ = (
        Index("ix_category_number", "category", "number"),
    )

    def field_values(self) -> dict[str, str]:
        return {f.field_name: f.field_value or "" for f in self.fields}

    # ── Serialisation ──────────────────────────────────────────────────
    def to_summary(self) -> dict:
        desc = self.field_values().get("Description", "")
        return {"id": self.ipn, "name": desc, "description": desc}

    def to_detail(self) -> dict:
        values = self.field_values()
        return {
            "id": self.ipn,
            "name": values.get("Description", ""),
            "symbolIdStr": symbol_id(self.category),
            "exclude_from_bom": "false",
            "revision": self.revision,
            "fields": {k: {"value": v} for k, v in values.items()},
        }


class PartField(Base):
    __tablename__ = "part_fields"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    ipn         = Column(String(20),
                         ForeignKey("parts.ipn", ondelete="CASCADE"),
                         nullable=False, index=True)
    field_name  = Column(String(200), nullable=False)
    field_value = Column(Text, nullable=False, default="")
    position    = Column(Integer, nullable=False, default=0)

    part = relationship("Part", back_populates="fields")

    __table_args__ = (
        Index("ix_field_lookup", "ipn", "field_name"),
    )
