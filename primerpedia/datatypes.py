# primerpedia/datatypes.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional, Union

from primerpedia import config
from primerpedia.utils import encode_uri_component


@dataclass(frozen=True, slots=True)
class Query:
    """
    An immutable set of Action API parameters, kept in insertion order.
    A value of None marks a bare flag such as `exintro`.
    """

    params: tuple[tuple[str, Optional[str]], ...]

    def to_query_string(self) -> str:
        parts: list[str] = []
        for key, value in self.params:
            if value is None:
                parts.append(key)
            else:
                parts.append(f"{key}={encode_uri_component(value)}")
        return "&".join(parts)

    def get(self, key: str) -> Optional[str]:
        for k, v in self.params:
            if k == key:
                return v
        return None

    @property
    def search_term(self) -> Optional[str]:
        """The literal search term, or None for a random-article query."""
        if self.get("generator") != "search":
            return None
        return self.get("gsrsearch")


@dataclass(frozen=True, slots=True)
class ArticleResult:
    """
    The introductory extract of a single article, plus the links derived from its title.
    `plain_text` is set when the API was asked for `explaintext`: the extract is then
    plain text with blank lines between paragraphs, not HTML.
    """

    title: str
    canonical_url: str
    edit_url: str
    extract_html: str
    plain_text: bool = False


@dataclass(frozen=True, slots=True)
class Spinner:
    text: str = config.DEFAULT_LOADING_TEXT


@dataclass(frozen=True, slots=True)
class NotFoundMessage:
    text: str = config.DEFAULT_NOT_FOUND_TEXT


@dataclass(frozen=True, slots=True)
class TimedOutMessage:
    seconds: float

    @property
    def text(self) -> str:
        return f"The request timed out after {self.seconds:g} seconds."


@dataclass(frozen=True, slots=True)
class FailureMessage:
    reason: str

    @property
    def text(self) -> str:
        return f"The request failed: {self.reason}"


Body = Union[Spinner, ArticleResult, NotFoundMessage, TimedOutMessage, FailureMessage]


@dataclass(frozen=True, slots=True)
class ViewState:
    """
    What the page shows: whether the title bar and the license/info icons are visible,
    and exactly one body variant.
    """

    title_visible: bool
    icons_visible: bool
    body: Optional[Body]

    @classmethod
    def blank(cls) -> ViewState:
        return cls(title_visible=False, icons_visible=False, body=None)

    @classmethod
    def loading(cls) -> ViewState:
        return cls(title_visible=False, icons_visible=False, body=Spinner())

    @classmethod
    def article(cls, result: ArticleResult) -> ViewState:
        return cls(title_visible=True, icons_visible=True, body=result)

    @classmethod
    def not_found(cls) -> ViewState:
        return cls(title_visible=False, icons_visible=False, body=NotFoundMessage())

    @classmethod
    def timed_out(cls, seconds: float) -> ViewState:
        return cls(
            title_visible=False, icons_visible=False, body=TimedOutMessage(seconds)
        )

    @classmethod
    def failed(cls, reason: str) -> ViewState:
        return cls(title_visible=False, icons_visible=False, body=FailureMessage(reason))

    @property
    def is_loading(self) -> bool:
        return isinstance(self.body, Spinner)


@dataclass(frozen=True, slots=True)
class RequestHandle:
    """
    The single in-flight request. `generation` increases with every dispatch;
    a response or timeout only counts if its handle is still the current one.
    `hops` is how many suggestion redirects led to this request.
    """

    generation: int
    query: Query
    task: asyncio.Task
    hops: int = 0

    @property
    def done(self) -> bool:
        return self.task.done()
