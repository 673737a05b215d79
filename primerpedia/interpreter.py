# primerpedia/interpreter.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from primerpedia import config
from primerpedia.datatypes import ArticleResult, Query, ViewState
from primerpedia.errors import MalformedPayloadError
from primerpedia.query import build_search_query
from primerpedia.utils import encode_uri_component

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Hit:
    """The payload carries an article to show (random fetch, or a search with hits)."""


@dataclass(frozen=True, slots=True)
class Suggestion:
    """Zero hits, but the search backend offered a spelling correction."""

    term: str


@dataclass(frozen=True, slots=True)
class NotFound:
    """Nothing to show and nothing to retry."""


Outcome = Union[Hit, Suggestion, NotFound]


@dataclass(frozen=True, slots=True)
class Interpretation:
    """
    Either a view state to render, or a follow-up query to dispatch.
    Exactly one of the two is set.
    """

    view: Optional[ViewState] = None
    follow_up: Optional[Query] = None


def classify(payload: Mapping[str, Any]) -> Outcome:
    """
    Decide what a response means without touching the article fields.

    - no `query` section -> NotFound
    - no `searchinfo` (random-article fetch) -> Hit
    - `totalhits` > 0 -> Hit
    - zero hits with a `suggestion` -> Suggestion
    - zero hits otherwise -> NotFound
    """
    query = payload.get("query")
    if not isinstance(query, Mapping):
        return NotFound()

    search_info = query.get("searchinfo")
    if search_info is None:
        return Hit()

    if not isinstance(search_info, Mapping):
        raise MalformedPayloadError("`searchinfo` is not an object")

    total_hits = search_info.get("totalhits", 0)
    try:
        total_hits = int(total_hits)
    except (TypeError, ValueError) as exc:
        raise MalformedPayloadError(f"bad `totalhits`: {total_hits!r}") from exc

    if total_hits > 0:
        return Hit()

    suggestion = search_info.get("suggestion")
    if isinstance(suggestion, str) and suggestion.strip():
        return Suggestion(term=suggestion)

    return NotFound()


def article_urls(title: str, *, lang: str = config.DEFAULT_LANG) -> tuple[str, str]:
    """
    (canonical_url, edit_url) for an article title.
    """
    canonical_url = config.article_url(lang) + encode_uri_component(title)
    return canonical_url, canonical_url + config.DEFAULT_EDIT_SUFFIX


def extract_article(
    payload: Mapping[str, Any],
    *,
    lang: str = config.DEFAULT_LANG,
    plain_text: bool = False,
) -> ArticleResult:
    """
    Pull the single returned page out of a hit payload.
    Raises MalformedPayloadError when any of the expected fields is missing.
    """
    try:
        query = payload["query"]
        pageid = query["pageids"][0]
        page = query["pages"][str(pageid)]
        title = page["title"]
        extract = page["extract"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedPayloadError(f"hit payload is missing {exc}") from exc

    if not isinstance(title, str) or not isinstance(extract, str):
        raise MalformedPayloadError("article title and extract must be strings")

    canonical_url, edit_url = article_urls(title, lang=lang)
    return ArticleResult(
        title=title,
        canonical_url=canonical_url,
        edit_url=edit_url,
        extract_html=extract,
        plain_text=plain_text,
    )


def interpret(
    payload: Mapping[str, Any],
    *,
    hops: int = 0,
    max_hops: int = config.DEFAULT_MAX_SUGGESTION_HOPS,
    lang: str = config.DEFAULT_LANG,
    plain_text: bool = False,
) -> Interpretation:
    """
    Turn a response into the next step.
    `hops` is the number of suggestion redirects already followed for this search;
    once it reaches `max_hops`, a further suggestion renders as not found.
    """
    outcome = classify(payload)

    if isinstance(outcome, Hit):
        article = extract_article(payload, lang=lang, plain_text=plain_text)
        return Interpretation(view=ViewState.article(article))

    if isinstance(outcome, Suggestion):
        if hops < max_hops:
            logger.info("No hits; following suggestion %r", outcome.term)
            return Interpretation(
                follow_up=build_search_query(outcome.term, plain_text=plain_text)
            )
        logger.info(
            "No hits; ignoring suggestion %r after %d redirect(s)", outcome.term, hops
        )

    return Interpretation(view=ViewState.not_found())
