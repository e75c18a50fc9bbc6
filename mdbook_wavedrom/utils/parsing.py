import re
from typing import List, Tuple

from markdown_it import MarkdownIt
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

# markdown-it normalizes all three of these to "\n" before splitting lines,
# so counting them in the original text keeps line numbers aligned.
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def make_parser() -> MarkdownIt:
    """
    Build a tokenizer with the same extensions mdBook's HTML renderer turns on:
    tables, footnotes, strikethrough and task lists. Block boundaries shift
    around those constructs when the two parsers disagree.
    """
    md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
    md.use(footnote_plugin)
    md.use(tasklists_plugin)
    return md


def line_spans(text: str) -> List[Tuple[int, int]]:
    """
    Return `(start, end)` for every line of `text`, where `end` excludes the
    line terminator. Line `i` here is line `i` of a markdown-it token map.
    """
    spans: List[Tuple[int, int]] = []
    pos = 0
    for m in _NEWLINE_RE.finditer(text):
        spans.append((pos, m.start()))
        pos = m.end()
    if pos < len(text):
        spans.append((pos, len(text)))
    return spans


def count_lines(content: str) -> int:
    """Number of lines in a fence token's content (trailing partial line included)."""
    if not content:
        return 0
    n = content.count("\n")
    if not content.endswith("\n"):
        n += 1
    return n
