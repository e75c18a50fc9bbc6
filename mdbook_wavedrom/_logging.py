"""
Opt-in logging for the library half of mdbook-wavedrom.

Usage in library code:
    from mdbook_wavedrom._logging import resolve_logger

    def rewrite(document, ..., logger=None, log: bool = False):
        log = resolve_logger(logger=logger, enabled=log, name=__name__)
        log.debug("scanning document")  # no-op unless enabled or logger passed

The CLI is the only place that configures handlers; it sends everything to
stderr because stdout carries the book JSON back to mdBook.
"""
from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "MDBOOK_WAVEDROM_LOG"
ROOT_LOGGER = "mdbook_wavedrom"


class NoopLogger:
    """Stand-in used when the caller asked for no logging at all."""

    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug

    def isEnabledFor(self, level: int) -> bool:
        return False


def _library_logger(name: str | None, level: int) -> logging.Logger:
    lg = logging.getLogger(name or ROOT_LOGGER)
    lg.setLevel(level)
    # No handler of our own: records reach the root (the CLI's stderr handler,
    # or pytest's caplog) exactly once.
    lg.propagate = True
    return lg


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Pick the logger a rewrite/preprocess/install call reports through.

    An explicit `logger` (the CLI passes its own) wins; `enabled=True` gives
    the module's `mdbook_wavedrom.*` logger at `level`; otherwise calls are
    dropped so embedding the rewriter in another tool stays quiet.
    """
    if logger is not None:
        return logger
    if enabled:
        return _library_logger(name, level)
    return NoopLogger()


def level_from_env(default: str = "INFO") -> int:
    """Map $MDBOOK_WAVEDROM_LOG (e.g. "debug") to a logging level."""
    raw = os.environ.get(LOG_LEVEL_ENV, default).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.getLevelName(default.upper())


def configure_cli_logging(level: int | None = None) -> None:
    """Route log records to stderr; called once from the CLI entry point."""
    logging.basicConfig(
        level=level if level is not None else level_from_env(),
        format="%(asctime)s [%(levelname)s] (%(name)s): %(message)s",
    )
