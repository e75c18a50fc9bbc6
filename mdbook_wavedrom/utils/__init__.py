# mdbook_wavedrom/utils/__init__.py
from .parsing import count_lines, line_spans, make_parser
from .text import escape_html

__all__ = [
    "count_lines",
    "escape_html",
    "line_spans",
    "make_parser",
]
