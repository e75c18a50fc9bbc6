__version__ = "0.1.0"

from .errors import (
    InstallError,
    PreprocessError,
    RewriteError,
    WavedromError,
)
from .installer import install
from .preprocess import process_book, supports_renderer
from .transform import DEFAULT_TAG, EMBED_TEMPLATE, find_blocks, render_block, rewrite
from .utils.text import escape_html

__all__ = [
    "rewrite",
    "find_blocks",
    "render_block",
    "escape_html",
    "process_book",
    "supports_renderer",
    "install",
    "DEFAULT_TAG",
    "EMBED_TEMPLATE",
    "WavedromError",
    "RewriteError",
    "PreprocessError",
    "InstallError",
]
