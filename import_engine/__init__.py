"""
import_engine - Partmaster CSV import pipeline.

Public API:
    run_import({name: content}, replace_existing=False) → ImportReport
    import_directory(path, replace_existing=False)       → ImportReport
"""

from import_engine.importer import run_import, import_directory   # noqa: F401
from import_engine.report import ImportReport                     # noqa: F401
