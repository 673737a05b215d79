from __future__ import annotations

import asyncio
from typing import Any, Optional

import pytest
from rich.console import Console

from primerpedia.datatypes import Query, ViewState
from primerpedia.render import PageContext


def make_hit_payload(
    title: str = "Cat",
    extract: str = "<p>The <b>cat</b> is a small domesticated carnivorous mammal.</p>",
    pageid: str = "6678",
    totalhits: Optional[int] = None,
) -> dict[str, Any]:
    query: dict[str, Any] = {
        "pageids": [pageid],
        "pages": {
            pageid: {"pageid": int(pageid), "ns": 0, "title": title, "extract": extract}
        },
    }
    if totalhits is not None:
        query["searchinfo"] = {"totalhits": totalhits}
    return {"batchcomplete": "", "query": query}


def make_miss_payload(suggestion: Optional[str] = None) -> dict[str, Any]:
    info: dict[str, Any] = {"totalhits": 0}
    if suggestion is not None:
        info["suggestion"] = suggestion
        info["suggestionsnippet"] = suggestion
    return {"batchcomplete": "", "query": {"searchinfo": info}}


class RecordingRenderer:
    def __init__(self, page: PageContext) -> None:
        self.page = page
        self.states: list[ViewState] = []

    def apply(self, state: ViewState) -> None:
        self.page.state = state
        self.states.append(state)


class FakeTransport:
    """
    Async transport scripted by search term (None is the random-article query).
    A response may be an exception to raise; a gate holds the response back until set.
    """

    def __init__(self, responses: Optional[dict[Optional[str], Any]] = None) -> None:
        self.responses: dict[Optional[str], Any] = dict(responses or {})
        self.gates: dict[Optional[str], asyncio.Event] = {}
        self.calls: list[Query] = []

    def hold(self, term: Optional[str]) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[term] = gate
        return gate

    @property
    def terms(self) -> list[Optional[str]]:
        return [q.search_term for q in self.calls]

    async def __call__(self, query: Query) -> dict[str, Any]:
        self.calls.append(query)
        term = query.search_term
        gate = self.gates.get(term)
        if gate is not None:
            await gate.wait()
        response = self.responses[term]
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def hit_payload():
    return make_hit_payload


@pytest.fixture
def miss_payload():
    return make_miss_payload


@pytest.fixture
def page() -> PageContext:
    return PageContext(console=Console(record=True, width=100))


@pytest.fixture
def renderer(page: PageContext) -> RecordingRenderer:
    return RecordingRenderer(page)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
