"""
services - Business-logic layer sitting between API and DB.
"""

from services.parts_service import PartsService, PartExists    # noqa: F401
from services.category_service import CategoryService         # noqa: F401
from services.sequence_service import next_revision           # noqa: F401
