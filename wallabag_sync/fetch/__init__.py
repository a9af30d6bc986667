"""
Remote entry retrieval and content conversion.

This package handles the Wallabag API client and the
HTML to markdown translation of entry bodies.
"""

from .client import WallabagClient
from .converter import html_to_markdown, to_markdown

__all__ = [
    "WallabagClient",
    "html_to_markdown",
    "to_markdown",
]
