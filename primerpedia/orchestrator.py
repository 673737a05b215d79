# primerpedia/orchestrator.py
from __future__ import annotations

import logging
from typing import Optional

from primerpedia import config
from primerpedia.datatypes import RequestHandle, ViewState
from primerpedia.dispatcher import Dispatcher
from primerpedia.interpreter import interpret
from primerpedia.query import build_random_query, build_search_query
from primerpedia.render import PageContext, ViewRenderer
from primerpedia.utils import get_query_variable
from primerpedia.wiki_client import ExtractsClient, Payload, Transport, async_transport

logger = logging.getLogger(__name__)


class QueryOrchestrator:
    """
    User actions in, view states out: random(), search() and open_deep_link()
    build a query and hand it to the dispatcher; responses are interpreted and
    either rendered or, for a spelling suggestion, re-dispatched.

    The methods that start a request must be called from inside a running event loop.
    """

    def __init__(
        self,
        page: PageContext,
        renderer: ViewRenderer,
        *,
        client: Optional[ExtractsClient] = None,
        transport: Optional[Transport] = None,
        timeout: float = config.DEFAULT_TIMEOUT_S,
        max_suggestion_hops: int = config.DEFAULT_MAX_SUGGESTION_HOPS,
        plain_text: bool = False,
        lang: str = config.DEFAULT_LANG,
    ) -> None:
        if transport is None:
            client = client or ExtractsClient(language=lang, timeout=timeout)  # type: ignore[arg-type]
            transport = async_transport(client)

        self.page = page
        self.lang = lang
        self.plain_text = plain_text
        self.max_suggestion_hops = max(0, max_suggestion_hops)
        self._renderer = renderer
        self._dispatcher = Dispatcher(
            transport, renderer, self._handle_payload, timeout=timeout
        )

    def random(self) -> RequestHandle:
        """
        Fetch a random article. Clears the search field.
        """
        self.page.search_term = ""
        return self._dispatcher.dispatch(build_random_query(plain_text=self.plain_text))

    def search(self, term: Optional[str] = None) -> RequestHandle:
        """
        Search for `term`, or for whatever the search field holds when no term is given.
        A blank term fetches a random article instead.
        """
        if term is not None:
            self.page.search_term = term

        if not self.page.search_term.strip():
            return self.random()

        return self._dispatcher.dispatch(
            build_search_query(self.page.search_term, plain_text=self.plain_text)
        )

    def open_deep_link(self, url: str) -> Optional[RequestHandle]:
        """
        Honour a `?search=...` parameter on the page URL: pre-fill the search field
        and search. Returns None when the URL carries no such parameter.
        """
        term = get_query_variable(url, "search")
        if term is None:
            return None
        logger.debug("Deep link search for %r", term)
        return self.search(term)

    async def settle(self) -> ViewState:
        """
        Wait for the pending request (and any suggestion redirect) to finish.
        """
        await self._dispatcher.settle()
        return self.page.state

    def _handle_payload(self, handle: RequestHandle, payload: Payload) -> None:
        result = interpret(
            payload,
            hops=handle.hops,
            max_hops=self.max_suggestion_hops,
            lang=self.lang,
            plain_text=self.plain_text,
        )
        if result.follow_up is not None:
            self._dispatcher.dispatch(result.follow_up, hops=handle.hops + 1)
            return

        if result.view is not None:
            self._renderer.apply(result.view)
