"""Pinterest credential, board listing and board import endpoints."""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query
from pydantic import Field

from api.dependencies import get_board_service, get_session
from core.logging import get_logger
from stylematch.ingestion import BoardImportService
from stylematch.models import CamelModel
from stylematch.session import ProviderSession

logger = get_logger(__name__)

router = APIRouter(prefix="/api/pinterest", tags=["Pinterest"])


class PinterestStatusResponse(CamelModel):
    connected: bool
    scope: Optional[str] = None
    expires_in: Optional[int] = None


class PinterestTokenRequest(CamelModel):
    access_token: str = Field(..., min_length=1, description="Pinterest access token")
    scope: Optional[str] = Field(None, description="Space or comma separated scopes")
    expires_in: Optional[int] = Field(None, ge=1, description="Token lifetime in seconds")


class PinterestBoardSummary(CamelModel):
    id: str
    name: str = ""
    description: str = ""
    privacy: str = "PUBLIC"
    pin_count: int = 0


class PinterestBoardsResponse(CamelModel):
    boards: List[PinterestBoardSummary]
    bookmark: Optional[str] = None
    page_size: int


class ImportBoardRequest(CamelModel):
    board_id: str = Field("", description="Board to import")
    limit: Optional[Any] = Field(None, description="Max pins to import (clamped to 1-200)")


class ImportBoardResponse(CamelModel):
    board_id: str
    imported_count: int
    usable_for_embedding_count: int
    low_signal_count: int
    cache_file: str


@router.get(
    "/status",
    response_model=PinterestStatusResponse,
    summary="Check Pinterest connection status",
)
def pinterest_status(session: ProviderSession = Depends(get_session)) -> PinterestStatusResponse:
    return PinterestStatusResponse(**session.status())


@router.post(
    "/token",
    summary="Connect Pinterest using a pre-issued access token",
)
def pinterest_connect_token(
    request: PinterestTokenRequest,
    session: ProviderSession = Depends(get_session),
) -> Dict[str, str]:
    session.connect(request.access_token, scope=request.scope, expires_in=request.expires_in)
    logger.info("Pinterest credential connected", scope=request.scope)
    return {"status": "connected"}


@router.delete(
    "/disconnect",
    summary="Forget the Pinterest credential",
)
def pinterest_disconnect(session: ProviderSession = Depends(get_session)) -> Dict[str, str]:
    session.disconnect()
    return {"status": "disconnected"}


@router.get(
    "/boards",
    response_model=PinterestBoardsResponse,
    summary="List the connected account's boards",
)
def pinterest_boards(
    page_size: int = Query(25, ge=1, le=100),
    bookmark: Optional[str] = Query(None, description="Cursor from a previous page"),
    session: ProviderSession = Depends(get_session),
    boards: BoardImportService = Depends(get_board_service),
) -> PinterestBoardsResponse:
    access_token = session.require_access_token()
    page = boards.list_boards(access_token, page_size=page_size, bookmark=bookmark)
    return PinterestBoardsResponse.model_validate(page)


@router.post(
    "/import-board",
    response_model=ImportBoardResponse,
    summary="Import a board's pins (full refresh)",
)
def pinterest_import_board(
    request: Optional[ImportBoardRequest] = Body(None),
    session: ProviderSession = Depends(get_session),
    boards: BoardImportService = Depends(get_board_service),
) -> ImportBoardResponse:
    access_token = session.require_access_token()
    request = request or ImportBoardRequest()

    result = boards.import_board(request.board_id, request.limit, access_token)
    return ImportBoardResponse(
        board_id=result.board_id,
        imported_count=result.imported_count,
        usable_for_embedding_count=result.usable_count,
        low_signal_count=result.low_signal_count,
        cache_file=result.cache_location,
    )
