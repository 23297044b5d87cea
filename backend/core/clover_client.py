"""
Read-only client for the Clover v3 merchant API.

Only the two catalog endpoints the dashboard needs:
- GET /v3/merchants/{mId}/items?expand=categories
- GET /v3/merchants/{mId}/categories

Both are paginated with limit/offset and return {"elements": [...]}.
Any HTTP status >= 400 (or a transport error) raises CloverApiError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from core.config import settings


class CloverApiError(RuntimeError):
    pass


@dataclass
class CloverConfig:
    token: str
    merchant_id: str
    sandbox: bool = True

    @property
    def base_url(self) -> str:
        return settings.clover_sandbox_url if self.sandbox else settings.clover_production_url


@dataclass
class CloverApiClient:
    config: CloverConfig
    timeout: float = settings.clover_timeout
    session: Optional[requests.Session] = None

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.token}",
        }

    def _url(self, path: str) -> str:
        base = self.config.base_url.rstrip("/")
        return f"{base}/v3/merchants/{self.config.merchant_id}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, *, params: Dict[str, Any] | None = None) -> Any:
        http = self.session or requests
        try:
            resp = http.request(
                method,
                self._url(path),
                params=params,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CloverApiError(f"Clover API unreachable: {e}") from e

        if resp.status_code >= 400:
            raise CloverApiError(f"Clover API error: {resp.status_code}")
        try:
            return resp.json()
        except ValueError as e:
            raise CloverApiError("Clover API returned invalid JSON") from e

    def _paginate(self, path: str, *, limit: int, params: Dict[str, Any] | None = None) -> List[Dict]:
        out: List[Dict] = []
        offset = 0
        while True:
            page_params = dict(params or {})
            page_params.update({"limit": limit, "offset": offset})
            data = self._request("GET", path, params=page_params) or {}
            elements = data.get("elements") or []
            out.extend(elements)
            if len(elements) < limit:
                return out
            offset += limit

    def fetch_items(self) -> List[Dict]:
        return self._paginate(
            "/items",
            limit=settings.clover_items_page_limit,
            params={"expand": "categories"},
        )

    def fetch_categories(self) -> List[Dict]:
        return self._paginate("/categories", limit=settings.clover_categories_page_limit)
