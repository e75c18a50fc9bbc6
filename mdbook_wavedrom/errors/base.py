class WavedromError(Exception):
    """Base class for every error raised by mdbook-wavedrom."""
