"""Tests for HTML to markdown conversion."""

import re
from dataclasses import asdict

import pytest

from wallabag_sync.core.errors import ConversionError
from wallabag_sync.core.types import Entry
from wallabag_sync.fetch import converter
from wallabag_sync.fetch.converter import html_to_markdown, to_markdown

_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")


def test_paragraph():
    assert html_to_markdown("<p>Hi</p>") == "Hi"


def test_inline_formatting_and_links():
    html = '<p>Read <strong>this</strong> and <em>that</em> at <a href="https://x.org">x</a>.</p>'
    assert html_to_markdown(html) == "Read **this** and *that* at [x](https://x.org)."


def test_headings_and_paragraphs_are_separated():
    html = "<h2>Title</h2><p>One</p><p>Two</p>"
    assert html_to_markdown(html) == "## Title\n\nOne\n\nTwo"


def test_lists():
    html = "<ul><li>a</li><li>b<ul><li>c</li></ul></li></ul><ol><li>x</li><li>y</li></ol>"
    assert html_to_markdown(html) == "- a\n- b\n  - c\n\n1. x\n2. y"


def test_blockquote_and_code():
    html = "<blockquote><p>quoted</p></blockquote><pre><code>print(1)\n</code></pre><p>use <code>x</code></p>"
    assert html_to_markdown(html) == "> quoted\n\n```\nprint(1)\n```\n\nuse `x`"


def test_images_and_scripts():
    html = '<p><img src="a.png" alt="pic"></p><script>alert(1)</script><style>p{}</style>'
    assert html_to_markdown(html) == "![pic](a.png)"


def test_no_residual_tags_for_article_html():
    html = """
    <!DOCTYPE html>
    <html><head><title>t</title></head><body>
    <article><h1>Head</h1><div><p>Text with <span class="x">span</span> and <br> break</p>
    <figure><img src="i.jpg"><figcaption>cap</figcaption></figure>
    <table><tr><td>a</td><td>b</td></tr></table><!-- comment --></div></article>
    </body></html>
    """
    markdown = html_to_markdown(html)
    assert not _TAG_RE.search(markdown)
    assert "# Head" in markdown
    assert "comment" not in markdown


def test_empty_content():
    assert html_to_markdown("") == ""
    assert html_to_markdown("   ") == ""


def test_to_markdown_preserves_other_fields():
    entry = Entry(
        id=7,
        title="T",
        url="https://x/7",
        domain="x",
        created_at="2026-01-01",
        content="<p>Hi <b>there</b></p>",
        tags=("a", "TO_READ"),
        is_archived=False,
        is_starred=True,
    )
    converted = to_markdown(entry)

    assert converted.content == "Hi **there**"
    before = asdict(entry)
    after = asdict(converted)
    before.pop("content")
    after.pop("content")
    assert before == after
    assert entry.content == "<p>Hi <b>there</b></p>"


def test_to_markdown_wraps_failures(monkeypatch):
    def broken(html):
        raise RuntimeError("bad html")

    monkeypatch.setattr(converter, "html_to_markdown", broken)
    with pytest.raises(ConversionError) as info:
        to_markdown(Entry(id=3, title="T", url="u", content="<p>x</p>"))
    assert info.value.entry_id == 3
