"""
Service wiring for the API.

All process-wide state (credential session, document store, embedding cache)
lives in one ServiceContainer attached to ``app.state``. Route handlers get
components through the Depends providers below, so tests swap in fakes by
passing their own container to create_app().
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from config.settings import Settings, get_settings
from core.logging import get_logger
from integrations.openai_embeddings import OpenAIEmbedder
from integrations.pinterest_client import PinterestClient
from stylematch.catalog import ProductCatalog
from stylematch.embedding_cache import Embedder, EmbeddingCacheManager
from stylematch.ingestion import BoardImportService
from stylematch.pipeline import StyleRankingService
from stylematch.session import ProviderSession
from stylematch.store import DocumentStore, JsonFileDocumentStore

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    settings: Settings
    session: ProviderSession
    store: DocumentStore
    pinterest: PinterestClient
    embedder: Embedder
    cache: EmbeddingCacheManager
    boards: BoardImportService
    ranking: StyleRankingService


def build_container(
    settings: Optional[Settings] = None,
    store: Optional[DocumentStore] = None,
    pinterest_client: Optional[PinterestClient] = None,
    embedder: Optional[Embedder] = None,
    session: Optional[ProviderSession] = None,
) -> ServiceContainer:
    settings = settings or get_settings()
    store = store if store is not None else JsonFileDocumentStore(settings.data_dir)
    pinterest_client = pinterest_client or PinterestClient(settings)
    embedder = embedder or OpenAIEmbedder(settings)

    if session is None:
        session = ProviderSession()
        if settings.pinterest_access_token:
            session.connect(
                settings.pinterest_access_token,
                scope=settings.pinterest_access_token_scope,
            )
            logger.info("Connected Pinterest credential from environment")

    boards = BoardImportService(
        client=pinterest_client,
        store=store,
        page_size_cap=settings.pinterest_page_size_cap,
        default_limit=settings.import_default_limit,
        max_limit=settings.import_max_limit,
    )
    cache = EmbeddingCacheManager(
        store=store,
        embedder=embedder,
        batch_size=settings.embedding_batch_size,
    )
    ranking = StyleRankingService(
        boards=boards,
        catalog=ProductCatalog(store),
        cache=cache,
        embeddings_configured=bool(settings.openai_api_key),
        default_top_k=settings.rank_default_top_k,
        max_top_k=settings.rank_max_top_k,
    )
    return ServiceContainer(
        settings=settings,
        session=session,
        store=store,
        pinterest=pinterest_client,
        embedder=embedder,
        cache=cache,
        boards=boards,
        ranking=ranking,
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_session(request: Request) -> ProviderSession:
    return get_container(request).session


def get_board_service(request: Request) -> BoardImportService:
    return get_container(request).boards


def get_ranking_service(request: Request) -> StyleRankingService:
    return get_container(request).ranking
