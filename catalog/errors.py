"""
catalog.errors - Failure kinds raised by the catalog client core.

Transport-level problems are converted into one of these at the
request site; nothing outside catalog.client ever sees a raw
requests exception.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Base class.  ``status`` is the HTTP status when one was received."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self):
        if self.status is not None:
            return f"{self.message} (HTTP {self.status})"
        return self.message


class FetchFailed(CatalogError):
    pass


class MalformedResponse(CatalogError):
    """Payload shape violates the documented contract."""


class SaveFailed(CatalogError):
    pass


class CreateFailed(CatalogError):
    pass


class RevisionFailed(CatalogError):
    pass


class OperationInProgress(CatalogError):
    """A save or revision for the same part is already in flight."""


class MalformedFieldMap(CatalogError):
    """Source decoding ran past the index bound."""


class EditorStateError(CatalogError):
    """Operation is not valid in the editor's current state."""
