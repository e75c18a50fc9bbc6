"""
mdBook preprocessor protocol.

mdBook runs the preprocessor with a JSON array `[context, book]` on stdin and
expects the (modified) book back as JSON on stdout. Every chapter's markdown
is passed through `rewrite`; separators and part titles are left alone.

Public API:
  - supports_renderer(renderer: str) -> bool
  - process_book(book: dict, *, logger=None, log=False) -> dict
  - parse_input(stream) -> (context, book)
  - run(stdin, stdout, *, logger=None, log=False) -> None
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, IO, Iterable, Tuple

from ._logging import resolve_logger
from .errors import PreprocessError, RewriteError
from .transform import rewrite

PREPROCESSOR_NAME = "wavedrom"
SUPPORTED_RENDERERS = ("html",)
# mdBook release line the book JSON layout was taken from.
MDBOOK_VERSION = "0.4"

__all__ = ["supports_renderer", "process_book", "parse_input", "run"]


def supports_renderer(renderer: str) -> bool:
    return renderer in SUPPORTED_RENDERERS


def _book_items(book: Dict[str, Any]) -> list:
    # mdBook 0.4 calls the top-level list "sections", 0.5 calls it "items".
    for key in ("sections", "items"):
        items = book.get(key)
        if isinstance(items, list):
            return items
    raise PreprocessError("book has neither 'sections' nor 'items'")


def _rewrite_items(items: Iterable[Any], log) -> int:
    count = 0
    for item in items:
        # "Separator" is a bare string; {"PartTitle": ...} has no content.
        if not isinstance(item, dict) or "Chapter" not in item:
            continue
        chapter = item["Chapter"]
        content = chapter.get("content")
        if not isinstance(content, str):
            raise PreprocessError(f"chapter {chapter.get('name')!r} has no markdown content")

        try:
            chapter["content"] = rewrite(content, logger=log)
        except RewriteError as exc:
            raise RewriteError(str(exc), chapter=chapter.get("name")) from exc
        count += 1

        count += _rewrite_items(chapter.get("sub_items") or [], log)
    return count


def process_book(
    book: Dict[str, Any],
    *,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> Dict[str, Any]:
    """
    Rewrite the markdown of every chapter in `book` (in place) and return it.
    The first chapter that fails to tokenize aborts the whole book.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    count = _rewrite_items(_book_items(book), log)
    log.debug("Processed %d chapter(s)", count)
    return book


def parse_input(stream: IO[str]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Read the `[context, book]` pair mdBook writes to the preprocessor's stdin."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as exc:
        raise PreprocessError(f"Unable to parse the input: {exc}") from exc

    if not isinstance(data, list) or len(data) != 2:
        raise PreprocessError("expected a JSON array of [context, book]")
    context, book = data
    if not isinstance(context, dict) or not isinstance(book, dict):
        raise PreprocessError("expected a JSON array of [context, book]")
    return context, book


def check_version(context: Dict[str, Any], log) -> None:
    version = str(context.get("mdbook_version", ""))
    if version.split(".")[:2] != MDBOOK_VERSION.split("."):
        log.warning(
            "The mdbook-wavedrom preprocessor was built against version %s of mdbook, "
            "but we're being called from version %s",
            MDBOOK_VERSION,
            version or "<unknown>",
        )


def run(
    stdin: IO[str],
    stdout: IO[str],
    *,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> None:
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    context, book = parse_input(stdin)
    check_version(context, log)
    json.dump(process_book(book, logger=log), stdout)
    stdout.flush()
