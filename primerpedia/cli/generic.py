# primerpedia/cli/generic.py
from __future__ import annotations

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import Callable, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from primerpedia import config
from primerpedia.datatypes import (
    ArticleResult,
    NotFoundMessage,
    TimedOutMessage,
    ViewState,
)
from primerpedia.orchestrator import QueryOrchestrator
from primerpedia.render import PageContext, Renderer
from primerpedia.utils import configure_logging, get_query_variable

app = typer.Typer(add_completion=False, no_args_is_help=True)

Action = Callable[[QueryOrchestrator], object]

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_TIMED_OUT = 2
EXIT_FAILED = 3
EXIT_BAD_INPUT = 4


def exit_code_for(state: ViewState) -> int:
    """
    0 article shown, 1 not found, 2 timed out, 3 anything else (failure, nothing shown).
    Bad command-line input exits with 4 before any request is made.
    """
    if isinstance(state.body, ArticleResult):
        return EXIT_OK
    if isinstance(state.body, NotFoundMessage):
        return EXIT_NOT_FOUND
    if isinstance(state.body, TimedOutMessage):
        return EXIT_TIMED_OUT
    return EXIT_FAILED


def state_to_json(state: ViewState, search_term: str) -> str:
    body = state.body
    return json.dumps(
        {
            "search_term": search_term,
            "kind": type(body).__name__ if body is not None else None,
            "title_visible": state.title_visible,
            "icons_visible": state.icons_visible,
            "body": asdict(body) if body is not None else None,
            "message": getattr(body, "text", None),
        },
        indent=2,
        ensure_ascii=False,
    )


def run_action(
    action: Action,
    *,
    lang: str,
    timeout: float,
    max_hops: int,
    plain: bool,
    html_out: Optional[Path],
    json_out: bool,
    console: Optional[Console] = None,
) -> ViewState:
    """
    Build the page and orchestrator, run one user action to completion,
    print the outcome and exit with the matching code.
    """
    # Validate the output path before doing any work
    if html_out is not None and not html_out.parent.is_dir():
        print(
            Panel.fit(
                f"[bold red]No such directory for --html-out:[/bold red] "
                f"{escape(str(html_out.parent))}"
            )
        )
        raise typer.Exit(code=EXIT_BAD_INPUT)

    page = PageContext(console=console or Console(), html_path=html_out)
    renderer = Renderer(page, echo=not json_out, lang=lang)

    async def _run() -> ViewState:
        orchestrator = QueryOrchestrator(
            page,
            renderer,
            timeout=timeout,
            max_suggestion_hops=max_hops,
            plain_text=plain,
            lang=lang,
        )
        action(orchestrator)
        return await orchestrator.settle()

    try:
        state = asyncio.run(_run())
    except OSError as exc:
        print(Panel.fit(f"[bold red]Could not write the page:[/bold red] {escape(str(exc))}"))
        raise typer.Exit(code=EXIT_FAILED)

    if json_out:
        typer.echo(state_to_json(state, page.search_term))
    elif html_out is not None and state.body is not None:
        print(f"[dim]Page written to[/dim] [bold]{html_out}[/bold]")

    code = exit_code_for(state)
    if code:
        raise typer.Exit(code=code)
    return state


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """
    Show the introductory extract of a Wikipedia article.
    """
    configure_logging(verbose)


@app.command()
def random(
    lang: str = typer.Option(config.DEFAULT_LANG, help="Language code, e.g., en, ko, es"),
    timeout: float = typer.Option(
        config.DEFAULT_TIMEOUT_S, help="Seconds to wait for the API"
    ),
    plain: bool = typer.Option(
        True, "--plain/--html", help="Ask the API for a plain-text or an HTML extract"
    ),
    html_out: Optional[Path] = typer.Option(
        None, "--html-out", help="Also write the page as HTML to this path"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of a panel"),
) -> None:
    """
    Show the intro of a random article.
    """
    run_action(
        lambda orchestrator: orchestrator.random(),
        lang=lang,
        timeout=timeout,
        max_hops=config.DEFAULT_MAX_SUGGESTION_HOPS,
        plain=plain,
        html_out=html_out,
        json_out=json_out,
    )


@app.command()
def search(
    term: str = typer.Argument(..., help="Search term; blank means a random article"),
    lang: str = typer.Option(config.DEFAULT_LANG, help="Language code, e.g., en, ko, es"),
    timeout: float = typer.Option(
        config.DEFAULT_TIMEOUT_S, help="Seconds to wait for the API"
    ),
    max_hops: int = typer.Option(
        config.DEFAULT_MAX_SUGGESTION_HOPS,
        "--max-hops",
        help="How many spelling suggestions to follow when a search has no hits",
    ),
    plain: bool = typer.Option(
        True, "--plain/--html", help="Ask the API for a plain-text or an HTML extract"
    ),
    html_out: Optional[Path] = typer.Option(
        None, "--html-out", help="Also write the page as HTML to this path"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of a panel"),
) -> None:
    """
    Show the intro of the first article matching TERM.
    """
    run_action(
        lambda orchestrator: orchestrator.search(term),
        lang=lang,
        timeout=timeout,
        max_hops=max_hops,
        plain=plain,
        html_out=html_out,
        json_out=json_out,
    )


@app.command("open")
def open_link(
    url: str = typer.Argument(..., help="Page URL carrying a ?search=... parameter"),
    lang: str = typer.Option(config.DEFAULT_LANG, help="Language code, e.g., en, ko, es"),
    timeout: float = typer.Option(
        config.DEFAULT_TIMEOUT_S, help="Seconds to wait for the API"
    ),
    max_hops: int = typer.Option(
        config.DEFAULT_MAX_SUGGESTION_HOPS,
        "--max-hops",
        help="How many spelling suggestions to follow when a search has no hits",
    ),
    plain: bool = typer.Option(
        True, "--plain/--html", help="Ask the API for a plain-text or an HTML extract"
    ),
    html_out: Optional[Path] = typer.Option(
        None, "--html-out", help="Also write the page as HTML to this path"
    ),
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of a panel"),
) -> None:
    """
    Follow a deep link: search for the URL's `search` parameter.
    """
    if get_query_variable(url, "search") is None:
        print(Panel.fit(f"[bold red]No search parameter in:[/bold red] {escape(url)}"))
        raise typer.Exit(code=EXIT_BAD_INPUT)

    run_action(
        lambda orchestrator: orchestrator.open_deep_link(url),
        lang=lang,
        timeout=timeout,
        max_hops=max_hops,
        plain=plain,
        html_out=html_out,
        json_out=json_out,
    )
