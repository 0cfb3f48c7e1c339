"""
catalog - Client-side core of the GitPLM catalog browser/editor.

Public API:
    CatalogClient     → async access to the catalog service
    CatalogState      → session state shared by navigator and editor
    CatalogNavigator  → categories, category selection, part list
    PartEditor        → part edit / save / revision state machine
    decode_sources / encode_sources → field map ↔ source list codec
"""

from catalog.errors import (                                   # noqa: F401
    CatalogError, FetchFailed, MalformedResponse, SaveFailed,
    CreateFailed, RevisionFailed, OperationInProgress,
    MalformedFieldMap, EditorStateError,
)
from catalog.models import (                                   # noqa: F401
    Category, PartSummary, Part, FieldValue, SourceRecord,
)
from catalog.codec import decode_sources, encode_sources       # noqa: F401
from catalog.client import CatalogClient                       # noqa: F401
from catalog.state import CatalogState                         # noqa: F401
from catalog.navigator import CatalogNavigator                 # noqa: F401
from catalog.editor import PartEditor, EditorState             # noqa: F401
