"""Web search backed by the Google Custom Search JSON API."""

from __future__ import annotations

import logging
from typing import List

import httpx

from paravault.errors import SearchError
from paravault.models import ResearchResult

LOGGER = logging.getLogger(__name__)

CUSTOM_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
# The API rejects num > 10.
MAX_RESULTS_PER_REQUEST = 10


class WebSearchClient:
    """Runs keyed queries against a Programmable Search Engine."""

    def __init__(
        self,
        api_key: str | None,
        engine_id: str | None,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
        url: str = CUSTOM_SEARCH_URL,
    ) -> None:
        self.api_key = api_key
        self.engine_id = engine_id
        self.timeout = timeout
        self.url = url
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.engine_id)

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=httpx.Timeout(self.timeout))
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()

    def search(self, query: str, *, limit: int = 5) -> List[ResearchResult]:
        """Return up to ``limit`` raw results.

        An unconfigured backend or an empty result page yields ``[]``.
        Transport and API failures raise :class:`SearchError`.
        """
        if not self.configured:
            LOGGER.warning(
                "GOOGLE_SEARCH_ENGINE_ID or GOOGLE_API_KEY not set - skipping web search. "
                "Create a search engine at https://programmablesearchengine.google.com/"
            )
            return []

        params = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            "num": max(1, min(limit, MAX_RESULTS_PER_REQUEST)),
        }
        try:
            response = self.client.get(self.url, params=params)
            data = response.json()
        except httpx.HTTPError as exc:
            raise SearchError(f"Search request failed: {exc}") from exc
        except ValueError as exc:
            raise SearchError(f"Search returned non-JSON (HTTP {response.status_code})") from exc

        if not isinstance(data, dict):
            raise SearchError("Search returned an unexpected payload")
        if data.get("error"):
            error = data["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise SearchError(f"Search API error: {message}")
        if response.status_code >= 400:
            raise SearchError(f"Search HTTP {response.status_code}")

        items = data.get("items") or []
        if not items:
            LOGGER.info("No search results for %r", query)
            return []

        return [
            ResearchResult(
                title=item.get("title", ""),
                url=item.get("link") or item.get("url", ""),
                snippet=item.get("snippet", ""),
            )
            for item in items[:limit]
        ]
