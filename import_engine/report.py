"""
import_engine.report - Structured result of a partmaster import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    files: int = 0
    total_rows: int = 0
    imported: int = 0           # parts written
    skipped: int = 0            # rows rejected
    errors: list[dict] = field(default_factory=list)   # [{file, row, reason}]

    def add_error(self, row: int, reason: str, file: str = ""):
        self.errors.append({"file": file, "row": row, "reason": reason})
        self.skipped += 1

    def to_dict(self) -> dict:
        return {
            "files": self.files,
            "total_rows": self.total_rows,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": self.errors,
        }
