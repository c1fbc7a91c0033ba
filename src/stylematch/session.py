"""The single active board-provider credential held by the service."""

import time
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Dict, Optional

from core.errors import NotConnectedError


@dataclass
class ProviderCredential:
    access_token: str
    scope: Optional[str] = None
    expires_in: Optional[int] = None
    created_at: float = field(default_factory=time.time)


class ProviderSession:
    """
    Holds at most one bearer credential.

    The service is single-tenant: connecting replaces whatever credential was
    there before.
    """

    def __init__(self, credential: Optional[ProviderCredential] = None):
        self._credential = credential
        self._lock = Lock()

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._credential is not None

    def connect(
        self,
        access_token: str,
        scope: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> ProviderCredential:
        if not access_token:
            raise ValueError("access_token is required")
        credential = ProviderCredential(
            access_token=access_token,
            scope=scope or None,
            expires_in=expires_in,
        )
        with self._lock:
            self._credential = credential
        return credential

    def disconnect(self) -> None:
        with self._lock:
            self._credential = None

    def require_access_token(self) -> str:
        with self._lock:
            credential = self._credential
        if credential is None:
            raise NotConnectedError(
                "Pinterest is not connected yet.",
                action="Connect a Pinterest access token at /api/pinterest/token",
            )
        return credential.access_token

    def status(self) -> Dict[str, Any]:
        with self._lock:
            credential = self._credential
        return {
            "connected": credential is not None,
            "scope": credential.scope if credential else None,
            "expiresIn": credential.expires_in if credential else None,
        }
