"""OpenAI text embedding client used by the embedding cache."""

from __future__ import annotations

import threading
from typing import Any, List, Optional, Sequence

from config.settings import Settings, get_settings
from core.logging import get_logger

logger = get_logger(__name__)


class EmbeddingApiError(RuntimeError):
    """Raised when the embedding provider returns a non-success response."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class OpenAIEmbedder:
    """Batch text -> vector calls against the OpenAI embeddings endpoint."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self._client = None
        self._client_lock = threading.Lock()
        self._api_key = settings.openai_api_key
        self._timeout = settings.openai_timeout_seconds
        self.model = settings.openai_embed_model

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    @property
    def client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    from openai import OpenAI
                    self._client = OpenAI(
                        api_key=self._api_key,
                        timeout=self._timeout,
                        max_retries=0,
                    )
        return self._client

    def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Embed a batch of texts.

        Returns one vector per input, in input order. Any provider failure,
        including a response with the wrong number of vectors, raises
        EmbeddingApiError.
        """
        import openai

        if not texts:
            return []

        try:
            response = self.client.embeddings.create(model=self.model, input=list(texts))
        except openai.APIStatusError as exc:
            raise EmbeddingApiError(
                _provider_message(exc) or "Embedding request failed",
                status_code=exc.status_code,
                details=_provider_body(exc),
            ) from exc
        except openai.APIError as exc:
            raise EmbeddingApiError(str(exc) or "Embedding request failed") from exc

        data = sorted(response.data, key=lambda item: item.index)
        if len(data) != len(texts):
            raise EmbeddingApiError(
                f"Embedding response had {len(data)} vectors for {len(texts)} inputs"
            )

        logger.debug("Embedded batch", model=self.model, size=len(texts))
        return [list(item.embedding) for item in data]


def _provider_body(exc: Any) -> Any:
    return getattr(exc, "body", None)


def _provider_message(exc: Any) -> Optional[str]:
    body = _provider_body(exc)
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return getattr(exc, "message", None)
