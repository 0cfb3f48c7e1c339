"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → row_processor → DB commit and produces
a structured ImportReport.
"""

from __future__ import annotations

import logging
from pathlib import Path

from db.engine import get_session
from import_engine.csv_parser import find_csv_files, prepare_reader
from import_engine.row_processor import RowError, merge_rows, row_ipn
from import_engine.report import ImportReport
from services.parts_service import PartsService, set_fields

logger = logging.getLogger(__name__)


def collect_rows(
    sources: dict[str, str | bytes],
    report: ImportReport,
) -> dict[str, list[dict]]:
    """
    Group the rows of every CSV blob by IPN, preserving first-seen
    order.  ``sources`` maps a display name to raw CSV content.
    """
    groups: dict[str, list[dict]] = {}
    for name, content in sources.items():
        report.files += 1
        reader = prepare_reader(content)
        if reader is None:
            report.add_error(0, "CSV has no header row or is empty", file=name)
            continue
        for row_idx, row in enumerate(reader, start=2):   # row 1 = header
            report.total_rows += 1
            try:
                ipn = row_ipn(row)
            except RowError as exc:
                report.add_error(row_idx, str(exc), file=name)
                continue
            groups.setdefault(ipn, []).append(row)
    return groups


def run_import(
    sources: dict[str, str | bytes],
    *,
    replace_existing: bool = False,
) -> ImportReport:
    """
    Import partmaster CSV blobs into the database.

    Parameters
    ----------
    sources : {name: raw CSV (bytes or str)}
    replace_existing : if True, overwrite the field map of IPNs that
                       already exist instead of skipping them

    Returns
    -------
    ImportReport with per-row error details
    """
    report = ImportReport()
    groups = collect_rows(sources, report)

    session = get_session()
    try:
        for ipn, rows in groups.items():
            try:
                values = merge_rows(rows)
            except RowError as exc:
                report.add_error(0, f"{ipn}: {exc}")
                continue

            existing = PartsService.get(session, ipn)
            if existing is not None and not replace_existing:
                report.add_error(0, f"Duplicate IPN {ipn} (enable replace to overwrite)")
                continue
            if existing is not None:
                set_fields(existing, values)
            else:
                PartsService.create(session, ipn, values=values)
            report.imported += 1

        session.commit()
    except Exception as exc:
        session.rollback()
        logger.error(f"Fatal import error: {exc}")
        report.add_error(0, f"Fatal import error: {exc}")
    finally:
        session.close()

    return report


def import_directory(directory: str | Path, **kwargs) -> ImportReport:
    """Import every *.csv file in ``directory`` as one partmaster."""
    blobs = {p.name: p.read_bytes() for p in find_csv_files(directory)}
    return run_import(blobs, **kwargs)
