# primerpedia/wiki_client.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Literal, Optional

import requests

from primerpedia import config
from primerpedia.datatypes import Query
from primerpedia.errors import MalformedPayloadError, TransportError

LanguageCode = Literal["en", "ko", "es", "de", "fr", "ja", "zh", "pt", "simple"]

Payload = dict[str, Any]
Transport = Callable[[Query], Awaitable[Payload]]

logger = logging.getLogger(__name__)


class ExtractsClient:
    """
    Thin wrapper around the MediaWiki Action API (api.php) for TextExtracts queries.
    Respects Wikimedia UA etiquette; one blocking GET per query.
    """

    def __init__(
        self,
        language: LanguageCode = config.DEFAULT_LANG,  # type: ignore[assignment]
        *,
        session: Optional[requests.Session] = None,
        timeout: float = config.DEFAULT_TIMEOUT_S,
    ) -> None:
        self.language = language
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": config.DEFAULT_UA,
                "Accept": "application/json",
            }
        )

    @property
    def api_url(self) -> str:
        return config.api_url(self.language)

    def url_for(self, query: Query) -> str:
        # The query string is built by hand so the bare `exintro` flag survives as-is
        return f"{self.api_url}?{query.to_query_string()}"

    def fetch(self, query: Query) -> Payload:
        """
        Run a query and return the decoded JSON object.
        Raises TransportError on connection/HTTP/decoding problems and
        MalformedPayloadError when the body is JSON but not an object.
        """
        url = self.url_for(query)
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            # requests' JSONDecodeError is a RequestException too
            raise TransportError(str(exc)) from exc

        if not isinstance(data, dict):
            raise MalformedPayloadError(
                f"expected a JSON object, got {type(data).__name__}"
            )
        return data


def async_transport(client: ExtractsClient) -> Transport:
    """
    Adapt the blocking client into an awaitable transport.
    The GET runs in a worker thread so the event loop stays free while it's in flight.
    """

    async def transport(query: Query) -> Payload:
        return await asyncio.to_thread(client.fetch, query)

    return transport
