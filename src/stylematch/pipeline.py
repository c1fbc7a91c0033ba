"""
Style ranking pipeline.

Given an imported board, rank the product catalog by how close each product's
embedding is to the board's style profile:

1. Select the board's usable pins and the catalog's embeddable products
2. Resolve pin embeddings through the cache, then product embeddings
3. Average pin vectors into the style profile
4. Cosine-rank products against the profile and keep the top K

Low-signal pins and products without text are dropped silently; only running
out of usable inputs altogether is an error.
"""

from typing import Any, Dict, List

from pydantic import Field

from core.errors import ConfigurationError, InsufficientSignalError, InvalidRequestError, ServiceError, UpstreamError
from core.logging import get_logger
from integrations.openai_embeddings import EmbeddingApiError
from stylematch.catalog import ProductCatalog
from stylematch.embedding_cache import EmbeddingCacheManager
from stylematch.ingestion import BoardImportService
from stylematch.limits import clamp_count
from stylematch.models import CamelModel, EmbeddingEntity, RankedProduct
from stylematch.profile import mean_vector
from stylematch.ranker import rank
from stylematch.store import PIN_EMBEDDINGS_SCOPE, PRODUCT_EMBEDDINGS_SCOPE
from stylematch.text_quality import build_product_embedding_text

logger = get_logger(__name__)


DEFAULT_TOP_K = 24
MAX_TOP_K = 100


class RankingResult(CamelModel):
    board_id: str
    pins_used: int
    products_ranked: int
    model: str
    ranked_products: List[RankedProduct] = Field(default_factory=list)


class StyleRankingService:
    def __init__(
        self,
        boards: BoardImportService,
        catalog: ProductCatalog,
        cache: EmbeddingCacheManager,
        embeddings_configured: bool = True,
        default_top_k: int = DEFAULT_TOP_K,
        max_top_k: int = MAX_TOP_K,
    ):
        self._boards = boards
        self._catalog = catalog
        self._cache = cache
        self._embeddings_configured = embeddings_configured
        self._default_top_k = default_top_k
        self._max_top_k = max_top_k

    def clamp_top_k(self, top_k: Any) -> int:
        return clamp_count(top_k, self._default_top_k, 1, self._max_top_k)

    def rank_products(self, board_id: str, top_k: Any = None) -> RankingResult:
        if not self._embeddings_configured:
            raise ConfigurationError(
                "Missing OPENAI_API_KEY in environment.",
                required=["OPENAI_API_KEY"],
            )

        board_id = (board_id or "").strip()
        if not board_id:
            raise InvalidRequestError("boardId is required.")
        top_k = self.clamp_top_k(top_k)

        products = self._catalog.load()
        if not products:
            raise InsufficientSignalError(f"No products found in {self._catalog.location}.")

        pin_entities = [
            EmbeddingEntity(id=pin.pin_id, text=pin.embedding_text)
            for pin in self._boards.load_pins(board_id)
            if pin.usable_for_embedding and pin.embedding_text
        ]
        if not pin_entities:
            raise InsufficientSignalError(
                "No usable pins found for embedding on this board.",
                hint="Try importing another board or enriching pin text fields.",
            )

        product_entities = []
        for product in products:
            text = build_product_embedding_text(product)
            if text:
                product_entities.append(EmbeddingEntity(id=product.id, text=text))
        if not product_entities:
            raise InsufficientSignalError("No usable products for embedding.")

        try:
            pin_entries = self._cache.ensure_embeddings(pin_entities, PIN_EMBEDDINGS_SCOPE, key="pin")
            product_entries = self._cache.ensure_embeddings(
                product_entities, PRODUCT_EMBEDDINGS_SCOPE, key="product"
            )
        except EmbeddingApiError as exc:
            raise UpstreamError(
                "Failed to generate embeddings or rank products.",
                upstream_status=exc.status_code,
                details=exc.details,
                message=str(exc),
            ) from exc

        pin_vectors_by_id = {entry.id: entry.embedding for entry in pin_entries}
        pin_vectors = [pin_vectors_by_id[e.id] for e in pin_entities if e.id in pin_vectors_by_id]
        if not pin_vectors:
            raise ServiceError("No pin embeddings available after embedding step.")

        profile = mean_vector(pin_vectors)

        product_vectors: Dict[str, List[float]] = {entry.id: entry.embedding for entry in product_entries}
        product_by_id = {product.id: product for product in products}
        scored = rank(
            profile,
            [(e.id, product_vectors[e.id]) for e in product_entities if e.id in product_vectors],
            top_k,
        )
        ranked = [
            RankedProduct.model_validate({**product_by_id[item.id].model_dump(), "score": item.score})
            for item in scored
            if item.id in product_by_id
        ]

        logger.info(
            "Ranked products for board",
            board_id=board_id,
            pins_used=len(pin_vectors),
            candidates=len(product_entities),
            returned=len(ranked),
            top_score=ranked[0].score if ranked else None,
        )
        return RankingResult(
            board_id=board_id,
            pins_used=len(pin_vectors),
            products_ranked=len(ranked),
            model=self._cache.model,
            ranked_products=ranked,
        )
