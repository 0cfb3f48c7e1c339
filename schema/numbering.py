"""
schema.numbering - IPN construction and parsing.

Format:  CCC-NNN-VVVV
         CCC  = 3-letter category code
         NNN  = 3-digit part number within the category
         VVVV = 4-digit revision / variation
"""

from __future__ import annotations

import re
from typing import Optional

_IPN_RE = re.compile(r"^([A-Z]{3})-(\d{3})-(\d{4})$")


def build_ipn(ccc: str, nnn: str | int, vvvv: str | int) -> str:
    """Assemble a canonical IPN string."""
    return f"{ccc.upper()}-{str(nnn).zfill(3)}-{str(vvvv).zfill(4)}"


def parse_ipn(ipn: str) -> Optional[dict]:
    """
    Parse 'CCC-NNN-VVVV' → {ccc, nnn, vvvv}.
    Returns None on any format violation.
    """
    m = _IPN_RE.match((ipn or "").strip())
    if not m:
        return None
    return {"ccc": m.group(1), "nnn": m.group(2), "vvvv": m.group(3)}


def extract_category(ipn: str) -> str:
    parsed = parse_ipn(ipn)
    return parsed["ccc"] if parsed else ""


def extract_revision(ipn: str) -> str:
    parsed = parse_ipn(ipn)
    return parsed["vvvv"] if parsed else ""


def bump_revision(ipn: str, at_least: int = 0) -> str:
    """
    Return the IPN with its revision incremented (or raised to
    ``at_least`` when that is higher).  Raises ValueError on a
    malformed IPN or revision overflow (>9999).
    """
    parsed = parse_ipn(ipn)
    if parsed is None:
        raise ValueError(f"invalid IPN format: {ipn!r}")
    nxt = max(int(parsed["vvvv"]) + 1, at_least)
    if nxt > 9999:
        raise ValueError(f"revision overflow for {ipn}")
    return build_ipn(parsed["ccc"], parsed["nnn"], nxt)
