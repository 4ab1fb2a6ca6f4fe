from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import (
    HTTP_TIMEOUT,
    NEWS_API_URL,
    REQUEST_HEADERS,
    RETRY_BACKOFF_FACTOR,
    RETRY_STATUS_FORCELIST,
    RETRY_TOTAL,
)
from .datamodels import DraftCreate, NewsItem
from .errors import CreateError, DeleteError, FetchError, GatewayError, UpdateError

logger = logging.getLogger("news_admin")


class NewsGateway:
    """Issues the four CRUD requests against the news collection.

    Every call either returns its result or raises the matching
    ``GatewayError`` subclass; nothing else escapes.
    """

    def __init__(self, base_url: str = NEWS_API_URL, timeout: float = HTTP_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        # urllib3 only retries idempotent methods by default, so POST is never replayed.
        retries = Retry(
            total=RETRY_TOTAL,
            backoff_factor=RETRY_BACKOFF_FACTOR,
            status_forcelist=RETRY_STATUS_FORCELIST,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def _request(
        self,
        method: str,
        error_cls: Type[GatewayError],
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> requests.Response:
        logger.debug("%s %s params=%s", method, self.base_url, params)
        try:
            resp = self.session.request(
                method, self.base_url, params=params, json=json, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, self.base_url, e)
            raise error_cls(str(e)) from e
        if not 200 <= resp.status_code < 300:
            logger.warning(
                "%s %s answered %d", method, self.base_url, resp.status_code
            )
            raise error_cls(f"HTTP {resp.status_code}", status=resp.status_code)
        logger.debug("%s %s OK (%d)", method, self.base_url, resp.status_code)
        return resp

    def list_all(self) -> List[NewsItem]:
        resp = self._request("GET", FetchError)
        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("News list is not valid JSON: %s", e)
            raise FetchError("invalid JSON in news list") from e
        if not isinstance(data, list):
            raise FetchError("news list is not a JSON array")
        return [NewsItem.from_dict(entry) for entry in data if isinstance(entry, dict)]

    def create(self, draft: DraftCreate) -> NewsItem:
        resp = self._request("POST", CreateError, json=draft.to_payload())
        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("Created news is not valid JSON: %s", e)
            raise CreateError("invalid JSON in create response") from e
        if not isinstance(data, dict):
            raise CreateError("create response is not a JSON object")
        return NewsItem.from_dict(data)

    def update(self, original_title: str, draft: NewsItem) -> None:
        # The resource is addressed by the title the item was loaded under.
        self._request(
            "PUT",
            UpdateError,
            params={"title": original_title, "news_content": draft.content},
        )

    def delete(self, title: str) -> None:
        self._request("DELETE", DeleteError, params={"title": title})
