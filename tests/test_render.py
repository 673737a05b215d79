from __future__ import annotations

from primerpedia.datatypes import ArticleResult, ViewState
from primerpedia.render import Renderer, plain_text_to_html, render_html_page

CAT = ArticleResult(
    title="Cat",
    canonical_url="https://en.wikipedia.org/wiki/Cat",
    edit_url="https://en.wikipedia.org/wiki/Cat?action=edit&section=0",
    extract_html="<p>The <b>cat</b> is a small mammal.</p>",
)


def test_apply_replaces_state_wholesale(page):
    renderer = Renderer(page)
    renderer.apply(ViewState.loading())
    renderer.apply(ViewState.article(CAT))
    assert page.state == ViewState.article(CAT)

    renderer.apply(ViewState.not_found())
    assert page.state.body.text == "The search term wasn't found."
    assert not page.state.title_visible


def test_console_output(page):
    renderer = Renderer(page)
    renderer.apply(ViewState.loading())
    renderer.apply(ViewState.article(CAT))
    out = page.console.export_text()
    assert "Loading..." in out
    assert "Cat" in out
    assert "is a small mammal" in out
    assert "Creative Commons" in out


def test_console_spinner_can_be_hidden(page):
    Renderer(page, show_spinner=False).apply(ViewState.loading())
    assert page.console.export_text() == ""


def test_console_echo_off(page):
    renderer = Renderer(page, echo=False)
    renderer.apply(ViewState.article(CAT))
    assert page.console.export_text() == ""
    assert page.state.body == CAT


def test_console_not_found_and_timeout(page):
    renderer = Renderer(page)
    renderer.apply(ViewState.not_found())
    renderer.apply(ViewState.timed_out(3.0))
    out = page.console.export_text()
    assert "The search term wasn't found." in out
    assert "timed out after 3 seconds" in out


def test_html_page_for_article():
    doc = render_html_page(ViewState.article(CAT))
    assert '<a id="viewlink" href="https://en.wikipedia.org/wiki/Cat">Cat</a>' in doc
    assert 'href="https://en.wikipedia.org/wiki/Cat?action=edit&amp;section=0"' in doc
    assert "<p>The <b>cat</b> is a small mammal.</p>" in doc
    assert 'style="display: none"' not in doc


def test_html_page_for_not_found_hides_chrome():
    doc = render_html_page(ViewState.not_found())
    assert '<div class="error">The search term wasn&#x27;t found.</div>' in doc
    assert doc.count('style="display: none"') == 3


def test_html_page_escapes_title():
    article = ArticleResult(
        title="<script>",
        canonical_url="https://en.wikipedia.org/wiki/%3Cscript%3E",
        edit_url="https://en.wikipedia.org/wiki/%3Cscript%3E?action=edit&section=0",
        extract_html="",
    )
    doc = render_html_page(ViewState.article(article))
    assert ">&lt;script&gt;</a>" in doc


def test_html_file_written_for_final_states(page, tmp_path):
    page.html_path = tmp_path / "page.html"
    renderer = Renderer(page, echo=False)

    renderer.apply(ViewState.loading())
    assert not page.html_path.exists()

    renderer.apply(ViewState.article(CAT))
    assert "<p>The <b>cat</b>" in page.html_path.read_text(encoding="utf-8")


def test_plain_text_to_html_escapes_and_splits_paragraphs():
    text = "Cats & dogs.\n\nSecond <b>line</b>\nThird"
    assert plain_text_to_html(text) == (
        "<p>Cats &amp; dogs.</p>\n"
        "<p>Second &lt;b&gt;line&lt;/b&gt;</p>\n"
        "<p>Third</p>"
    )


def test_html_page_for_plain_text_article():
    article = ArticleResult(
        title="Cat",
        canonical_url=CAT.canonical_url,
        edit_url=CAT.edit_url,
        extract_html="The cat <meows>.\nIt purrs.",
        plain_text=True,
    )
    doc = render_html_page(ViewState.article(article))
    assert "<meows>" not in doc
    assert '<div id="content"><p>The cat &lt;meows&gt;.</p>\n<p>It purrs.</p></div>' in doc
