# primerpedia/cli/__init__.py
from __future__ import annotations
from primerpedia.cli.generic import app

# Expose the main app only
__all__ = ["app"]
