"""
db - Database layer for the reference catalog service.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Part, PartField → ORM models
"""

from db.engine import init_db, get_session          # noqa: F401
from db.models import Base, Part, PartField         # noqa: F401
