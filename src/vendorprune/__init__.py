"""Clean a glide-populated Go vendor tree."""

from __future__ import annotations

__version__ = "0.1.0"

from vendorprune.core import cleanup
from vendorprune.models import CleanupResult, Options

__all__ = ["CleanupResult", "Options", "cleanup", "__version__"]
