# primerpedia/query.py
from __future__ import annotations

from typing import Optional

from primerpedia.datatypes import Query

# Extracts of the intro section only, one JSON object keyed by page id.
# https://www.mediawiki.org/wiki/Extension:TextExtracts
_EXTRACTS_PARAMS: tuple[tuple[str, Optional[str]], ...] = (
    ("action", "query"),
    ("prop", "extracts"),
    ("exintro", None),
    ("indexpageids", "true"),
    ("format", "json"),
)


def _base_params(plain_text: bool) -> tuple[tuple[str, Optional[str]], ...]:
    if plain_text:
        return _EXTRACTS_PARAMS + (("explaintext", None),)
    return _EXTRACTS_PARAMS


def build_random_query(*, plain_text: bool = False) -> Query:
    """
    A random article from the main (article) namespace.
    """
    return Query(
        params=_base_params(plain_text)
        + (
            ("generator", "random"),
            ("grnnamespace", "0"),
        )
    )


def build_search_query(term: Optional[str], *, plain_text: bool = False) -> Query:
    """
    The first search hit for `term`.
    A blank term is not an error: it yields the random-article query instead.
    """
    term = (term or "").strip()
    if not term:
        return build_random_query(plain_text=plain_text)

    return Query(
        params=_base_params(plain_text)
        + (
            ("generator", "search"),
            ("gsrlimit", "1"),
            ("gsrsearch", term),
        )
    )
