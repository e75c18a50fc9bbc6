from .base import WavedromError
from .install import InstallError
from .preprocess import PreprocessError
from .rewrite import RewriteError

__all__ = ["WavedromError", "RewriteError", "PreprocessError", "InstallError"]
