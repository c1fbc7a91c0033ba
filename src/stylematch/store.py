"""
Whole-document storage for pins, products and embedding caches.

A document is any JSON-serializable value addressed by a scope string such as
``pins/<board_id>`` or ``embeddings/pin``. The only operations are reading a
whole document and replacing a whole document; there is no partial update.

Two backends:
1. InMemory: For testing
2. JsonFile: One JSON file per scope under a data directory (default)
"""

import copy
import json
import os
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Protocol
from urllib.parse import quote

from core.logging import get_logger

logger = get_logger(__name__)


PRODUCTS_SCOPE = "products"
PIN_EMBEDDINGS_SCOPE = "embeddings/pin"
PRODUCT_EMBEDDINGS_SCOPE = "embeddings/product"


def pins_scope(board_id: str) -> str:
    return f"pins/{board_id}"


class DocumentStore(Protocol):
    def get(self, scope: str, default: Any = None) -> Any:
        ...

    def put(self, scope: str, document: Any) -> None:
        ...

    def location(self, scope: str) -> str:
        ...


# =============================================================================
# In-Memory Backend
# =============================================================================

class InMemoryDocumentStore:
    """Dict-backed store. Documents are deep-copied on the way in and out."""

    def __init__(self, documents: Dict[str, Any] = None):
        self._documents: Dict[str, Any] = copy.deepcopy(documents or {})
        self._lock = Lock()
        self.writes: Dict[str, int] = {}

    def get(self, scope: str, default: Any = None) -> Any:
        with self._lock:
            if scope not in self._documents:
                return default
            return copy.deepcopy(self._documents[scope])

    def put(self, scope: str, document: Any) -> None:
        with self._lock:
            self._documents[scope] = copy.deepcopy(document)
            self.writes[scope] = self.writes.get(scope, 0) + 1

    def location(self, scope: str) -> str:
        return f"memory://{scope}"


# =============================================================================
# JSON File Backend
# =============================================================================

class JsonFileDocumentStore:
    """
    One pretty-printed JSON file per scope.

    ``pins/abc`` maps to ``<root>/pins/abc.json``. Writes go to a temp file in
    the same directory and are moved into place with os.replace, so readers
    never see a half-written document. Missing or unreadable files read as the
    default.
    """

    def __init__(self, root: Path):
        self._root = Path(root)

    def path_for(self, scope: str) -> Path:
        # quote() never escapes ".", so "." and ".." segments are encoded by hand
        # to keep every document under the root.
        parts = [
            part.replace(".", "%2E") if part in (".", "..") else quote(part, safe="")
            for part in scope.split("/")
            if part
        ]
        if not parts:
            raise ValueError(f"Invalid document scope: {scope!r}")
        parts[-1] = f"{parts[-1]}.json"
        return self._root.joinpath(*parts)

    def get(self, scope: str, default: Any = None) -> Any:
        path = self.path_for(scope)
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable document, using default", scope=scope, error=str(e))
            return default

    def put(self, scope: str, document: Any) -> None:
        path = self.path_for(scope)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def location(self, scope: str) -> str:
        return str(self.path_for(scope))
