"""
cub - Composer update bot for a single package
"""

__version__ = "0.3.0"

from .core import CubUpdater
from .errors import CubError
from .models import Configuration, RunResult

__all__ = ["CubUpdater", "CubError", "Configuration", "RunResult"]
