"""
Board ingestion: page through a board's pins and store the normalized set.

An import is always a full refresh. The stored pin set for a board is
replaced wholesale, never merged with the previous import.
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from core.errors import InvalidRequestError, UpstreamError
from core.logging import get_logger
from integrations.pinterest_client import PinterestApiError, PinterestClient
from integrations.pinterest_models import PinterestPin
from stylematch.limits import clamp_count
from stylematch.models import BoardImportResult, Pin, PinMetadata
from stylematch.store import DocumentStore, pins_scope
from stylematch.text_quality import assess_pin_text, clean_text

logger = get_logger(__name__)


DEFAULT_PAGE_SIZE_CAP = 100
DEFAULT_IMPORT_LIMIT = 100
MAX_IMPORT_LIMIT = 200

_LOW_RES_SEGMENT = "/150x150/"
_HIGH_RES_SEGMENT = "/736x/"


# =============================================================================
# Pin normalization
# =============================================================================

def boost_image_url(url: Optional[str]) -> str:
    """Swap Pinterest's 150x150 thumbnail path for the 736px rendition."""
    if not url:
        return ""
    return url.replace(_LOW_RES_SEGMENT, _HIGH_RES_SEGMENT)


def extract_image_url(pin: PinterestPin) -> str:
    """
    Best-effort image URL for a pin.

    Prefers the first entry of ``media.images`` that has a URL, then the
    first image-typed entry of ``media_list``; empty string if neither.
    """
    if pin.media is not None:
        for image in pin.media.images.values():
            if image.url:
                return boost_image_url(image.url)

    for item in pin.media_list:
        if item.media_type == "image" and item.image_url:
            return boost_image_url(item.image_url)

    return ""


def normalize_pin(pin: PinterestPin, board_id: str) -> Pin:
    title = clean_text(pin.title or pin.note or "")
    alt_text = clean_text(pin.alt_text or "")
    link = clean_text(pin.link or "")
    description = clean_text(pin.description or alt_text or link or "")
    assessment = assess_pin_text(title, description)

    return Pin(
        pin_id=pin.id,
        board_id=board_id,
        title=title,
        description=description,
        alt_text=alt_text,
        link=link,
        image_url=extract_image_url(pin),
        embedding_text=assessment.embedding_text,
        usable_for_embedding=assessment.usable_for_embedding,
        text_quality=assessment.text_quality,
        metadata=PinMetadata(
            created_at=pin.created_at or "",
            dominant_color=pin.dominant_color or "",
            media_type=pin.media_type or "",
            board_section_id=pin.board_section_id or "",
        ),
    )


# =============================================================================
# Import service
# =============================================================================

class BoardImportService:
    """Lists boards, imports a board's pins, and reads back imported pins."""

    def __init__(
        self,
        client: PinterestClient,
        store: DocumentStore,
        page_size_cap: int = DEFAULT_PAGE_SIZE_CAP,
        default_limit: int = DEFAULT_IMPORT_LIMIT,
        max_limit: int = MAX_IMPORT_LIMIT,
    ):
        self._client = client
        self._store = store
        self._page_size_cap = page_size_cap
        self._default_limit = default_limit
        self._max_limit = max_limit

    def clamp_limit(self, limit: Any) -> int:
        return clamp_count(limit, self._default_limit, 1, self._max_limit)

    def list_boards(
        self,
        access_token: str,
        page_size: int = 25,
        bookmark: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            page = self._client.list_boards(access_token, page_size=page_size, bookmark=bookmark)
        except PinterestApiError as exc:
            raise UpstreamError(
                "Failed to fetch boards from Pinterest.",
                upstream_status=exc.status_code,
                details=exc.details,
            ) from exc

        boards = [
            {
                "id": board.id,
                "name": board.name or "",
                "description": board.description or "",
                "privacy": board.privacy or "PUBLIC",
                "pinCount": board.pin_count or 0,
            }
            for board in page.items
        ]
        return {"boards": boards, "bookmark": page.bookmark, "pageSize": page_size}

    def fetch_board_pins(self, board_id: str, limit: int, access_token: str) -> List[PinterestPin]:
        """
        Page through a board until ``limit`` pins, an empty page, or no bookmark.
        """
        pins: List[PinterestPin] = []
        bookmark: Optional[str] = None

        while len(pins) < limit:
            page_size = min(self._page_size_cap, limit - len(pins))
            page = self._client.list_board_pins(
                access_token,
                board_id=board_id,
                page_size=page_size,
                bookmark=bookmark,
            )
            pins.extend(page.items)
            bookmark = page.bookmark
            logger.debug(
                "Fetched board page",
                board_id=board_id,
                page_items=len(page.items),
                total=len(pins),
                has_more=bool(bookmark),
            )
            if not bookmark or not page.items:
                break

        return pins[:limit]

    def import_board(self, board_id: str, limit: Any, access_token: str) -> BoardImportResult:
        board_id = (board_id or "").strip()
        if not board_id:
            raise InvalidRequestError("boardId is required.")
        limit = self.clamp_limit(limit)

        try:
            raw_pins = self.fetch_board_pins(board_id, limit, access_token)
        except PinterestApiError as exc:
            raise UpstreamError(
                "Failed to fetch pins for selected board.",
                upstream_status=exc.status_code,
                details=exc.details,
            ) from exc

        pins = [normalize_pin(raw, board_id) for raw in raw_pins]
        scope = pins_scope(board_id)
        self._store.put(scope, [pin.to_json_dict() for pin in pins])

        usable = sum(1 for pin in pins if pin.usable_for_embedding)
        result = BoardImportResult(
            board_id=board_id,
            pins=pins,
            usable_count=usable,
            low_signal_count=len(pins) - usable,
            cache_location=self._store.location(scope),
        )
        logger.info(
            "Board imported",
            board_id=board_id,
            limit=limit,
            imported=result.imported_count,
            usable=result.usable_count,
            low_signal=result.low_signal_count,
        )
        return result

    def load_pins(self, board_id: str) -> List[Pin]:
        """Pins from the last import of ``board_id``; unparseable records are skipped."""
        raw = self._store.get(pins_scope(board_id), default=[])
        if not isinstance(raw, list):
            return []

        pins: List[Pin] = []
        for record in raw:
            try:
                pins.append(Pin.model_validate(record))
            except ValidationError:
                logger.warning("Skipping malformed stored pin", board_id=board_id)
        return pins
