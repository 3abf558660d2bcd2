"""Tracks Wintun releases and re-emits its DLLs as importable Python modules."""

from .errors import WintunEmbedError
from .models import ARCHITECTURES, Version

__version__ = "0.1.0"

__all__ = ["ARCHITECTURES", "Version", "WintunEmbedError", "__version__"]
