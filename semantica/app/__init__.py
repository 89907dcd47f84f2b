"""Application layer for semantica.

This layer orchestrates the index without direct filesystem or model access.
All side effects are delegated to adapters via port interfaces.
"""

__all__ = [
    "IndexChange",
    "IndexService",
]

from semantica.app.index_service import IndexChange, IndexService
