"""Port interfaces for the semantica application layer.

Domain logic depends on these protocols, never on concrete implementations.
"""

__all__ = [
    "EmbeddingPort",
    "EncodeError",
    "IndexStoragePort",
]

from semantica.app.ports.embedding import EmbeddingPort, EncodeError
from semantica.app.ports.storage import IndexStoragePort
