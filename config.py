"""
GitPLM catalog - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.  A .env file next to this
module (or in the working directory) is honoured.
"""

from __future__ import annotations
import os
from pathlib import Path

import dotenv

BASE_DIR = Path(__file__).resolve().parent

dotenv.load_dotenv(BASE_DIR / ".env")


# ── Catalog client ─────────────────────────────────────────────────────
API_BASE    = os.environ.get("GITPLM_API_BASE", "http://localhost:8080").rstrip("/")
API_TOKEN   = os.environ.get("GITPLM_TOKEN", "")
API_TIMEOUT = float(os.environ.get("GITPLM_TIMEOUT", "10"))
USER_AGENT  = "GitPLM-Catalog/1.0"

# Upper bound on decoded source indices; a field map with more is rejected
MAX_SOURCE_INDEX = int(os.environ.get("GITPLM_MAX_SOURCE_INDEX", "10000"))

# ── Reference catalog service ──────────────────────────────────────────
PM_DIR = Path(os.environ.get("GITPLM_PM_DIR", BASE_DIR / "partmaster"))
DB_URL = os.environ.get("GITPLM_DB", f"sqlite:///{BASE_DIR / 'gitplm.sqlite'}")
HOST   = os.environ.get("GITPLM_HOST", "0.0.0.0")
PORT   = int(os.environ.get("GITPLM_PORT", "8080"))
DEBUG  = os.environ.get("GITPLM_DEBUG", "0") == "1"

# ── Logging ────────────────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("GITPLM_LOG_LEVEL", "INFO").upper()
