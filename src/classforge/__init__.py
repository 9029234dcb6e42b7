"""classforge: Variant-aware classpath resolution and build action synthesis."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
