"""
Route modules for the API.

Each module exports a FastAPI APIRouter with endpoints
for a specific domain/feature.
"""

from api.routes import health
from api.routes import pinterest
from api.routes import ranking

__all__ = ["health", "pinterest", "ranking"]
