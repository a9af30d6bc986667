"""
HTML to markdown conversion for entry bodies.

Walks the BeautifulSoup tree of an entry's HTML and emits markdown for
the common article elements. Unknown tags contribute their text only, so
the output never contains raw HTML tags.
"""

from __future__ import annotations

from dataclasses import replace
import re

from bs4 import BeautifulSoup
from bs4.element import Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

from ..core.errors import ConversionError
from ..core.types import Entry

_DROP_TAGS = {"script", "style", "noscript", "head", "iframe", "svg", "form", "button"}
_BLOCK_TAGS = {
    "p", "div", "section", "article", "main", "header", "footer", "aside",
    "figure", "figcaption", "table", "tr", "dl", "dt", "dd", "details", "summary",
}
_HEADINGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_SPACE_RE = re.compile(r"[ \t\r\n]+")


def to_markdown(entry: Entry) -> Entry:
    """Return a copy of the entry with its HTML content converted to markdown.

    Raises:
        ConversionError: If the HTML cannot be translated
    """
    try:
        content = html_to_markdown(entry.content)
    except Exception as exc:  # noqa: BLE001
        raise ConversionError(entry.id, f"{type(exc).__name__}: {exc}") from exc
    return replace(entry, content=content)


def html_to_markdown(html: str) -> str:
    """Convert an HTML fragment to markdown.

    Args:
        html: HTML content of an entry

    Returns:
        Markdown text with surrounding whitespace stripped

    Examples:
        >>> html_to_markdown("<p>Hi <strong>there</strong></p>")
        'Hi **there**'
    """
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(list(_DROP_TAGS)):
        tag.decompose()
    return _normalize(_render_children(soup))


def _render_children(node: Tag) -> str:
    return "".join(_render(child) for child in node.children)


def _render(node) -> str:
    if isinstance(node, (Comment, Declaration, Doctype, ProcessingInstruction)):
        return ""
    if isinstance(node, NavigableString):
        return _SPACE_RE.sub(" ", str(node))
    if not isinstance(node, Tag):
        return ""

    name = node.name
    if name in _HEADINGS:
        return f"\n\n{'#' * _HEADINGS[name]} {_inline(node)}\n\n"
    if name in _BLOCK_TAGS:
        inner = _render_children(node).strip()
        return f"\n\n{inner}\n\n" if inner else ""
    if name == "br":
        return "\n"
    if name == "hr":
        return "\n\n---\n\n"
    if name in ("strong", "b"):
        return _wrap(node, "**")
    if name in ("em", "i"):
        return _wrap(node, "*")
    if name in ("del", "s", "strike"):
        return _wrap(node, "~~")
    if name == "code":
        text = node.get_text()
        return f"`{text}`" if text else ""
    if name == "pre":
        code = node.get_text().strip("\n")
        return f"\n\n```\n{code}\n```\n\n"
    if name == "a":
        text = _inline(node)
        href = node.get("href")
        if not href:
            return text
        return f"[{text or href}]({href})"
    if name == "img":
        src = node.get("src")
        if not src:
            return ""
        return f"![{node.get('alt', '')}]({src})"
    if name in ("ul", "ol"):
        return "\n\n" + _render_list(node, depth=0) + "\n\n"
    if name == "blockquote":
        inner = _normalize(_render_children(node))
        quoted = "\n".join(f"> {line}" if line else ">" for line in inner.split("\n"))
        return f"\n\n{quoted}\n\n"
    if name in ("td", "th"):
        return _inline(node) + " "
    return _render_children(node)


def _normalize(text: str) -> str:
    lines = [line.rstrip() for line in text.split("\n")]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def _inline(node: Tag) -> str:
    return _SPACE_RE.sub(" ", _render_children(node)).strip()


def _wrap(node: Tag, marker: str) -> str:
    text = _inline(node)
    return f"{marker}{text}{marker}" if text else ""


def _render_list(node: Tag, depth: int) -> str:
    ordered = node.name == "ol"
    indent = "  " * depth
    lines = []
    index = 1
    for child in node.children:
        if not isinstance(child, Tag) or child.name != "li":
            continue
        nested = []
        parts = []
        for part in child.children:
            if isinstance(part, Tag) and part.name in ("ul", "ol"):
                nested.append(_render_list(part, depth + 1))
            else:
                parts.append(_render(part))
        text = _SPACE_RE.sub(" ", "".join(parts)).strip()
        bullet = f"{index}." if ordered else "-"
        lines.append(f"{indent}{bullet} {text}")
        lines.extend(nested)
        index += 1
    return "\n".join(lines)
