from __future__ import annotations

from .base import WavedromError


class RewriteError(WavedromError):
    """The markdown tokenizer failed on a document; nothing was rewritten."""

    def __init__(self, message: str, *, chapter: str | None = None):
        self.chapter = chapter
        if chapter:
            message = f"{chapter}: {message}"
        super().__init__(message)
