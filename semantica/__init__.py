"""Semantica - an in-process semantic index.

Values are stored under text labels and retrieved by the meaning of a query
rather than by exact key.
"""

__version__ = "0.1.0"
__author__ = "Semantica Contributors"

from semantica.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
