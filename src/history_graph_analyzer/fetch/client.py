"""HTTP client for encyclopedia pages.

Callers depend on the `FetchSource` protocol only, so a caching or offline
source can stand in for `WikipediaClient` without changing them.
"""

import logging
from typing import Protocol

import httpx

from ..config import Settings, get_settings
from ..errors import FetchError, ParseError
from ..models.relationships import SearchResult
from .document import PageDocument

logger = logging.getLogger(__name__)


class FetchSource(Protocol):
    """Anything that can turn a subject name into a parsed page."""

    def fetch(self, subject: str) -> PageDocument: ...


def page_title(subject: str) -> str:
    """URL path segment for a subject name."""
    return subject.strip().replace(" ", "_")


def subject_for_id(person_id: str) -> str:
    """Best-effort subject name for a derived identifier."""
    return person_id.replace("-", " ")


class WikipediaClient:
    """Fetches and parses encyclopedia pages over HTTP.

    Usage:
        with WikipediaClient() as client:
            doc = client.fetch("Isaac Newton")
            hits = client.search("Newton")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Settings override (defaults to environment settings)
            client: Preconfigured httpx client, mainly for tests
        """
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self.client = client or httpx.Client(
            base_url=self.settings.wiki_base_url,
            timeout=self.settings.request_timeout,
            headers={"User-Agent": self.settings.user_agent},
            follow_redirects=True,
        )

    def __enter__(self) -> "WikipediaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _get(self, path: str, subject: str, params: dict | None = None) -> httpx.Response:
        try:
            response = self.client.get(path, params=params)
        except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as exc:
            raise FetchError(f"Request for {subject!r} failed: {exc}", subject=subject) from exc

        logger.debug("GET %s -> %s", response.url, response.status_code)
        if response.status_code != 200:
            raise FetchError(
                f"Unexpected status code {response.status_code} for {subject!r}",
                subject=subject,
                status_code=response.status_code,
            )
        return response

    def fetch(self, subject: str) -> PageDocument:
        """Fetch and parse the page for a subject.

        Raises:
            FetchError: On network failure, timeout or non-200 status.
            ParseError: If the page markup is unusable.
        """
        path = f"/wiki/{page_title(subject)}"
        response = self._get(path, subject)
        return PageDocument.from_html(response.text, subject=subject, url=str(response.url))

    def search(self, query: str, limit: int | None = None) -> list[SearchResult]:
        """Suggest page titles matching a query via the OpenSearch endpoint."""
        params = {
            "action": "opensearch",
            "search": query,
            "limit": limit or self.settings.search_limit,
            "namespace": 0,
            "format": "json",
        }
        response = self._get("/w/api.php", query, params=params)

        try:
            data = response.json()
        except ValueError as exc:
            raise ParseError(f"Search response for {query!r} is not JSON", subject=query) from exc

        if not isinstance(data, list) or len(data) < 4:
            raise ParseError(f"Unexpected search response format for {query!r}", subject=query)

        titles, descriptions, urls = data[1], data[2], data[3]
        if not all(isinstance(part, list) for part in (titles, descriptions, urls)):
            raise ParseError(f"Invalid search result lists for {query!r}", subject=query)

        results = []
        for i, title in enumerate(titles):
            results.append(
                SearchResult(
                    title=str(title),
                    description=str(descriptions[i]) if i < len(descriptions) else "",
                    url=str(urls[i]) if i < len(urls) else "",
                )
            )
        return results
