# mdbook_wavedrom/transform.py
"""
Replace ```wavedrom fenced blocks with the HTML the WaveDrom loader picks up.

The scan trusts markdown-it completely: a block is whatever the tokenizer
reports as a `fence` token, so fences inside raw HTML, lists, block quotes
and footnotes follow CommonMark rules rather than a hand-written text scan.
Matches are collected first and spliced in afterwards, last one first, so
earlier offsets stay valid while the document changes length.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from markdown_it.token import Token

from ._logging import resolve_logger
from .errors import RewriteError
from .models.blocks import TargetSpan
from .utils.parsing import count_lines, line_spans, make_parser
from .utils.text import escape_html

DEFAULT_TAG = "wavedrom"

EMBED_TEMPLATE = (
    '<body onload="WaveDrom.ProcessAll()">\n\n'
    '<script type="WaveDrom">{payload}</script>\n\n'
)


def render_block(payload: str) -> str:
    """Wrap a raw payload in the WaveDrom embedding template."""
    return EMBED_TEMPLATE.format(payload=escape_html(payload))


def _is_closed(token: Token) -> bool:
    # A closed fence spans its content plus both fence lines; an unclosed one
    # runs to the end of its container and is one line shorter.
    first, last = token.map
    return last - first - 2 == count_lines(token.content)


def _target_span(document: str, lines, token: Token) -> TargetSpan:
    first, last = token.map
    open_start, _ = lines[first]
    close_start, close_end = lines[last - 1]

    # Skip list markers or "> " prefixes in front of the opening fence.
    start = document.find(token.markup, open_start)
    payload = document[lines[first + 1][0] : close_start]

    return TargetSpan(start=start, end=close_end, replacement="\n" + render_block(payload))


def find_blocks(
    document: str,
    tag: str = DEFAULT_TAG,
    *,
    logger: Optional[logging.Logger] = None,
    log: bool = False,
) -> List[TargetSpan]:
    """
    Tokenize `document` and return a TargetSpan for every closed fenced block
    whose info string is exactly `tag`, ordered by position.

    Raises:
        RewriteError: if the tokenizer fails on the document.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__)

    try:
        tokens = make_parser().parse(document)
    except Exception as exc:
        raise RewriteError(f"could not tokenize markdown: {exc}") from exc

    lines = line_spans(document)
    spans: List[TargetSpan] = []
    for token in tokens:
        if token.type != "fence" or token.map is None:
            continue
        log.debug("fence info=%r map=%r", token.info, token.map)
        if token.info.strip() != tag:
            continue
        if not _is_closed(token):
            log.debug("Ignoring unterminated '%s' block starting on line %d", tag, token.map[0] + 1)
            continue
        spans.append(_target_span(document, lines, token))

    # Footnote bodies are emitted after the main flow, so restore source order.
    spans.sort(key=lambda s: s.start)
    return spans


def rewrite(
    document: str,
    tag: str = DEFAULT_TAG,
    *,
    logger: Optional[logging.Logger] = None,
    log: bool = False,
) -> str:
    """
    Return `document` with every closed ```<tag> block replaced by the
    WaveDrom embedding HTML. All other text is kept byte for byte; a document
    without matching blocks comes back unchanged.

    Raises:
        RewriteError: if the tokenizer fails on the document.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    spans = find_blocks(document, tag, logger=log)

    content = document
    for span in reversed(spans):
        content = span.apply(content)

    if spans:
        log.debug("Replaced %d '%s' block(s)", len(spans), tag)
    return content
