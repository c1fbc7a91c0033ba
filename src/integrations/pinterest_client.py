"""Pinterest v5 API client for board listing and board pin paging."""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from config.settings import Settings, get_settings
from core.logging import get_logger
from integrations.pinterest_models import BoardPage, PinPage

logger = get_logger(__name__)


class PinterestApiError(RuntimeError):
    """Raised for Pinterest API failures."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class PinterestClient:
    """Thin wrapper over the Pinterest REST API using bearer credentials."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http: Optional[requests.Session] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._http = http or requests.Session()

    def list_boards(
        self,
        access_token: str,
        page_size: int = 25,
        bookmark: Optional[str] = None,
    ) -> BoardPage:
        payload = self._get(
            access_token=access_token,
            path="/boards",
            params=_build_pagination_params(page_size, bookmark),
            error_prefix="Pinterest list boards failed",
        )
        return BoardPage.model_validate(payload)

    def list_board_pins(
        self,
        access_token: str,
        board_id: str,
        page_size: int = 100,
        bookmark: Optional[str] = None,
    ) -> PinPage:
        payload = self._get(
            access_token=access_token,
            path=f"/boards/{quote(board_id, safe='')}/pins",
            params=_build_pagination_params(page_size, bookmark),
            error_prefix="Pinterest list board pins failed",
        )
        return PinPage.model_validate(payload)

    # ---------------------------------------------------------------------
    # Internal
    # ---------------------------------------------------------------------

    def _get(
        self,
        access_token: str,
        path: str,
        params: Optional[Dict[str, Any]],
        error_prefix: str,
    ) -> Dict[str, Any]:
        url = f"{self._settings.pinterest_api_base_url}{path}"
        try:
            resp = self._http.get(
                url,
                headers={"Authorization": f"Bearer {access_token}"},
                params=params,
                timeout=self._settings.pinterest_request_timeout_seconds,
            )
        except requests.RequestException as exc:
            raise PinterestApiError(f"{error_prefix}: {exc}") from exc

        body = _json_or_text(resp)
        if resp.status_code >= 400:
            logger.warning(
                "Pinterest request failed",
                path=path,
                status_code=resp.status_code,
            )
            raise PinterestApiError(
                f"{error_prefix} ({resp.status_code})",
                status_code=resp.status_code,
                details=body,
            )
        if not isinstance(body, dict):
            raise PinterestApiError(
                f"{error_prefix}: response was not a JSON object",
                status_code=resp.status_code,
                details=body,
            )
        return body


def _json_or_text(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def _build_pagination_params(page_size: int, bookmark: Optional[str]) -> Dict[str, Any]:
    params: Dict[str, Any] = {"page_size": page_size}
    if bookmark:
        params["bookmark"] = bookmark
    return params
