"""
schema - IPN numbering and category metadata.

Public API:
    numbering.build_ipn / parse_ipn / bump_revision
    categories.category_name / category_description / symbol_id
"""

from schema.numbering import (                                  # noqa: F401
    build_ipn, parse_ipn, extract_category, extract_revision, bump_revision,
)
from schema.categories import (                                 # noqa: F401
    category_name, category_description, symbol_id,
)
