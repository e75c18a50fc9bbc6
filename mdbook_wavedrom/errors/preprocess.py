from .base import WavedromError


class PreprocessError(WavedromError):
    """mdBook handed us input that is not a [context, book] JSON pair."""
