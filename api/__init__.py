"""
api - REST API of the reference catalog service.

All route modules register on a single Flask Blueprint
with url_prefix /v1.
"""

from flask import Blueprint

api_bp = Blueprint("api", __name__, url_prefix="/v1")

# Import route modules so their @api_bp decorators execute
from api import auth              # noqa: F401, E402
from api import routes_catalog    # noqa: F401, E402
from api import routes_parts      # noqa: F401, E402
from api import errors            # noqa: F401, E402
