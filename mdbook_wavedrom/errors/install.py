from .base import WavedromError


class InstallError(WavedromError):
    """The book directory cannot be set up (missing or broken book.toml)."""
