"""HTML pages served outside the JSON API."""

from blogsearch.pages.root import render_root_page

__all__ = ["render_root_page"]
