"""Style ranking endpoint."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from pydantic import Field

from api.dependencies import get_ranking_service
from stylematch.models import CamelModel
from stylematch.pipeline import RankingResult, StyleRankingService

router = APIRouter(prefix="/api/ai", tags=["Ranking"])


class RankProductsRequest(CamelModel):
    board_id: str = Field("", description="Previously imported board")
    top_k: Optional[Any] = Field(None, description="Products to return (clamped to 1-100)")


@router.post(
    "/rank-products",
    response_model=RankingResult,
    summary="Rank the product catalog against a board's style profile",
)
def rank_products(
    request: Optional[RankProductsRequest] = Body(None),
    ranking: StyleRankingService = Depends(get_ranking_service),
) -> RankingResult:
    request = request or RankProductsRequest()
    return ranking.rank_products(request.board_id, request.top_k)
