# primerpedia/utils.py
from __future__ import annotations

import logging
from urllib.parse import parse_qsl, quote, urlsplit

from rich.console import Console
from rich.logging import RichHandler

# Characters JavaScript's encodeURIComponent leaves alone on top of quote()'s own
_URI_COMPONENT_SAFE = "!*'()"


def encode_uri_component(value: str) -> str:
    """
    Percent-encode a value for use inside a query string or URL path segment.
    Spaces become %20 (not '+'), and '/', '&', '=', '?' are all escaped.
    """
    return quote(value, safe=_URI_COMPONENT_SAFE)


def get_query_variable(url: str, parameter: str) -> str | None:
    """
    Return the decoded value of the first `parameter` in the query part of `url`,
    or None when it isn't there. A bare parameter (no '=') yields an empty string.
    """
    query = urlsplit(url).query
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == parameter:
            return value
    return None


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """
    Route log records through rich. WARNING and above by default, everything with verbose.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=console or Console(stderr=True),
                rich_tracebacks=True,
                show_path=verbose,
            )
        ],
    )
