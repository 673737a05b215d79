# primerpedia/dispatcher.py
from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from primerpedia import config
from primerpedia.datatypes import Query, RequestHandle, ViewState
from primerpedia.errors import PrimerpediaError
from primerpedia.render import ViewRenderer
from primerpedia.wiki_client import Payload, Transport

OnPayload = Callable[[RequestHandle, Payload], None]

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Async bridge between a query and its response.

    Every dispatch gets the next generation number and becomes the only live request;
    the previous task is cancelled. Whatever finishes first, the response or the
    timeout guard, consumes the request, and only if its generation is still current.
    Nothing raised by the transport or by `on_payload` escapes to the caller;
    it ends up as a view state instead.
    """

    def __init__(
        self,
        transport: Transport,
        renderer: ViewRenderer,
        on_payload: OnPayload,
        *,
        timeout: float = config.DEFAULT_TIMEOUT_S,
    ) -> None:
        self.timeout = timeout
        self._transport = transport
        self._renderer = renderer
        self._on_payload = on_payload
        self._generation = 0
        self._pending: Optional[RequestHandle] = None

    @property
    def pending(self) -> Optional[RequestHandle]:
        """The live request, or None once it has been consumed."""
        if self._pending is None or self._pending.done:
            return None
        return self._pending

    def dispatch(self, query: Query, *, hops: int = 0) -> RequestHandle:
        """
        Show the loading indicator and start `query`. Must be called from a running loop.
        """
        self._renderer.apply(ViewState.loading())

        previous = self._pending
        self._generation += 1
        generation = self._generation

        # A suggestion redirect dispatches from inside the previous task; don't cancel it
        if (
            previous is not None
            and not previous.done
            and previous.task is not asyncio.current_task()
        ):
            logger.debug("Request #%d superseded by #%d", previous.generation, generation)
            previous.task.cancel()

        task = asyncio.get_running_loop().create_task(
            self._run(generation, query), name=f"primerpedia-request-{generation}"
        )
        self._pending = RequestHandle(
            generation=generation, query=query, task=task, hops=hops
        )
        logger.debug("Request #%d dispatched: %s", generation, query.to_query_string())
        return self._pending

    async def settle(self) -> None:
        """
        Wait until no request is pending, following any redirects issued on the way.
        """
        while True:
            handle = self._pending
            if handle is None:
                return
            await asyncio.wait({handle.task})
            if handle is self._pending:
                if not handle.task.cancelled():
                    # surfaces anything unexpected raised inside the task
                    handle.task.result()
                return

    def _is_stale(self, generation: int, event: str) -> bool:
        if generation == self._generation:
            return False
        logger.debug(
            "Dropping %s of request #%d (current is #%d)",
            event,
            generation,
            self._generation,
        )
        return True

    async def _run(self, generation: int, query: Query) -> None:
        try:
            payload = await asyncio.wait_for(
                self._transport(query), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            if self._is_stale(generation, "timeout"):
                return
            logger.warning(
                "Request #%d timed out after %gs", generation, self.timeout
            )
            self._renderer.apply(ViewState.timed_out(self.timeout))
            return
        except PrimerpediaError as exc:
            if self._is_stale(generation, "failure"):
                return
            logger.error("Request #%d failed: %s", generation, exc)
            self._renderer.apply(ViewState.failed(str(exc)))
            return

        if self._is_stale(generation, "response"):
            return

        handle = self._pending
        if handle is None:
            return
        try:
            self._on_payload(handle, payload)
        except PrimerpediaError as exc:
            logger.exception("Could not interpret response of request #%d", generation)
            self._renderer.apply(ViewState.failed(str(exc)))
