"""
Content-addressed embedding cache.

Each cache scope (pins, products) is one EmbeddingCacheDocument tagged with
the embedding model that produced it. A cached vector is reused only when its
id matches and its text is byte-identical to the entity's current text;
anything else is a miss. Misses are embedded in fixed-size batches, one
provider call per batch, sequentially.

Persistence is at-least-once: the document is merged and written after every
successful batch, so when batch N fails, batches 1..N-1 are already stored and
the error propagates. A retry then hits the cache for those entries.
"""

import time
from collections import defaultdict
from threading import Lock
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

from pydantic import ValidationError

from core.logging import get_logger
from integrations.openai_embeddings import EmbeddingApiError
from stylematch.models import EmbeddingCacheDocument, EmbeddingCacheEntry, EmbeddingEntity
from stylematch.store import DocumentStore

logger = get_logger(__name__)


DEFAULT_BATCH_SIZE = 50


class Embedder(Protocol):
    model: str

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        ...


class EmbeddingCacheManager:
    """Resolve embeddings for entities, calling the provider only for misses."""

    def __init__(
        self,
        store: DocumentStore,
        embedder: Embedder,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._store = store
        self._embedder = embedder
        self._batch_size = batch_size
        # One writer per scope: a read-modify-write of a cache document must
        # not interleave with another on the same scope.
        self._scope_locks: Dict[str, Lock] = defaultdict(Lock)
        self._locks_guard = Lock()

    @property
    def model(self) -> str:
        return self._embedder.model

    def load_document(self, scope: str) -> EmbeddingCacheDocument:
        """
        Load the cache document for ``scope``.

        A missing, malformed or other-model document comes back empty, since
        vectors from another model are not comparable.
        """
        raw = self._store.get(scope)
        if raw is None:
            return EmbeddingCacheDocument(model=self.model)

        try:
            document = EmbeddingCacheDocument.model_validate(raw)
        except ValidationError as e:
            logger.warning("Discarding malformed embedding cache", scope=scope, error=str(e))
            return EmbeddingCacheDocument(model=self.model)

        if document.model != self.model:
            logger.info(
                "Embedding cache built with another model, treating as cold",
                scope=scope,
                cached_model=document.model,
                model=self.model,
            )
            return EmbeddingCacheDocument(model=self.model)
        return document

    def ensure_embeddings(
        self,
        entities: Iterable[EmbeddingEntity],
        scope: str,
        key: Optional[str] = None,
    ) -> List[EmbeddingCacheEntry]:
        """
        Return cache entries (reused or freshly computed) for ``entities``.

        Entities must have non-empty text. The result is not in input order;
        look entries up by id. Raises whatever the embedder raises on the
        first failing batch.
        """
        key = key or scope.rsplit("/", 1)[-1]
        entities = list(entities)

        with self._lock_for(scope):
            document = self.load_document(scope)
            cached_by_id = {entry.id: entry for entry in document.items}

            resolved: Dict[str, EmbeddingCacheEntry] = {}
            misses: List[EmbeddingEntity] = []
            for entity in entities:
                cached = cached_by_id.get(entity.id)
                if cached is not None and cached.text == entity.text:
                    resolved[entity.id] = cached
                else:
                    misses.append(entity)

            logger.info(
                "Embedding cache lookup",
                scope=scope,
                requested=len(entities),
                hits=len(resolved),
                misses=len(misses),
            )

            for start in range(0, len(misses), self._batch_size):
                batch = misses[start:start + self._batch_size]
                vectors = self._embedder.embed([entity.text for entity in batch])
                if len(vectors) != len(batch):
                    raise EmbeddingApiError(
                        f"Embedder returned {len(vectors)} vectors for {len(batch)} texts"
                    )

                now_ms = int(time.time() * 1000)
                fresh = [
                    EmbeddingCacheEntry(
                        id=entity.id,
                        text=entity.text,
                        embedding=list(vector),
                        updated_at=now_ms,
                        key=key,
                    )
                    for entity, vector in zip(batch, vectors)
                ]
                document = merge_entries(document, fresh)
                self._store.put(scope, document.to_json_dict())
                for entry in fresh:
                    resolved[entry.id] = entry

                logger.info(
                    "Embedded and cached batch",
                    scope=scope,
                    batch_size=len(batch),
                    batch_start=start,
                )

        return list(resolved.values())

    def _lock_for(self, scope: str) -> Lock:
        with self._locks_guard:
            return self._scope_locks[scope]


def merge_entries(
    document: EmbeddingCacheDocument,
    entries: Iterable[EmbeddingCacheEntry],
) -> EmbeddingCacheDocument:
    """Upsert entries into the document by id (last write wins)."""
    by_id = {entry.id: entry for entry in document.items}
    for entry in entries:
        by_id[entry.id] = entry
    return EmbeddingCacheDocument(model=document.model, items=list(by_id.values()))
