# primerpedia/render.py
from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from string import Template
from typing import Optional, Protocol

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from primerpedia import config
from primerpedia.datatypes import (
    ArticleResult,
    FailureMessage,
    NotFoundMessage,
    Spinner,
    TimedOutMessage,
    ViewState,
)

logger = logging.getLogger(__name__)


class ViewRenderer(Protocol):
    def apply(self, state: ViewState) -> None: ...


@dataclass
class PageContext:
    """
    Render targets, populated once at startup and handed to the renderer.
    `search_term` plays the part of the search box: the orchestrator reads and clears it.
    """

    console: Console = field(default_factory=Console)
    html_path: Optional[Path] = None
    search_term: str = ""
    state: ViewState = field(default_factory=ViewState.blank)


_PAGE_TEMPLATE = Template(
    """<!DOCTYPE html>
<html lang="$lang">
<head>
<meta charset="utf-8">
<title>$page_title</title>
</head>
<body>
<h1 id="article-title"$title_style><a id="viewlink" href="$view_href">$view_text</a>
<a id="editlink" href="$edit_href">[edit]</a></h1>
<div id="content">$content</div>
<footer>
<span id="license-icon"$icons_style>$license</span>
<span id="info-icon"$icons_style>$info</span>
</footer>
</body>
</html>
"""
)

_HIDDEN = ' style="display: none"'


def plain_text_to_html(text: str) -> str:
    """
    Escape a plain-text extract and wrap each paragraph (one per line) in <p>.
    """
    paragraphs = [p.strip() for p in re.split(r"\n+", text) if p.strip()]
    return "\n".join(f"<p>{html.escape(p)}</p>" for p in paragraphs)


def render_html_page(state: ViewState, *, lang: str = config.DEFAULT_LANG) -> str:
    """
    A standalone HTML page for `state`. An HTML extract is inserted as-is;
    a plain-text one is escaped first.
    """
    body = state.body
    view_href = view_text = edit_href = ""
    page_title = "primerpedia"

    if isinstance(body, ArticleResult):
        view_href = html.escape(body.canonical_url)
        view_text = html.escape(body.title)
        edit_href = html.escape(body.edit_url)
        page_title = f"{view_text} - primerpedia"
        content = (
            plain_text_to_html(body.extract_html)
            if body.plain_text
            else body.extract_html
        )
    elif isinstance(body, Spinner):
        content = f'<p id="loading-spinner">{html.escape(body.text)}</p>'
    elif body is None:
        content = ""
    else:
        content = f'<div class="error">{html.escape(body.text)}</div>'

    return _PAGE_TEMPLATE.substitute(
        lang=html.escape(lang),
        page_title=page_title,
        title_style="" if state.title_visible else _HIDDEN,
        view_href=view_href,
        view_text=view_text,
        edit_href=edit_href,
        content=content,
        icons_style="" if state.icons_visible else _HIDDEN,
        license=html.escape(config.DEFAULT_LICENSE_TEXT),
        info=html.escape(config.DEFAULT_INFO_TEXT),
    )


class Renderer:
    """
    Applies view states to a PageContext: the state is replaced wholesale,
    then drawn to the console and, when configured, written out as an HTML page.
    """

    def __init__(
        self,
        page: PageContext,
        *,
        echo: bool = True,
        show_spinner: bool = True,
        lang: str = config.DEFAULT_LANG,
    ) -> None:
        self.page = page
        self.echo = echo
        self.show_spinner = show_spinner
        self.lang = lang

    def apply(self, state: ViewState) -> None:
        self.page.state = state

        if self.echo:
            self._draw(state)

        if self.page.html_path is not None and not state.is_loading:
            self.page.html_path.write_text(
                render_html_page(state, lang=self.lang), encoding="utf-8"
            )
            logger.debug("Wrote %s", self.page.html_path)

    def _draw(self, state: ViewState) -> None:
        console = self.page.console
        body = state.body

        if isinstance(body, Spinner):
            if self.show_spinner:
                console.print(f"[dim]{escape(body.text)}[/dim]")
            return

        if isinstance(body, ArticleResult):
            console.print(self._article_panel(body, state))
            return

        if isinstance(body, NotFoundMessage):
            console.print(Panel.fit(f"[bold red]{escape(body.text)}[/bold red]"))
        elif isinstance(body, TimedOutMessage):
            console.print(Panel.fit(f"[bold yellow]{escape(body.text)}[/bold yellow]"))
        elif isinstance(body, FailureMessage):
            console.print(Panel.fit(f"[bold red]{escape(body.text)}[/bold red]"))

    def _article_panel(self, article: ArticleResult, state: ViewState) -> Panel:
        parts: list = [Text(article.extract_html.strip())]
        if state.icons_visible:
            parts.append(Text(""))
            parts.append(Text(config.DEFAULT_LICENSE_TEXT, style="dim"))
            parts.append(Text(config.DEFAULT_INFO_TEXT, style="dim"))

        title = (
            f"[bold][link={article.canonical_url}]{escape(article.title)}[/link][/bold]"
            if state.title_visible
            else None
        )
        return Panel(
            Group(*parts),
            title=title,
            subtitle=f"[dim]{escape(article.canonical_url)}  "
            f"[link={article.edit_url}]edit[/link][/dim]",
        )
