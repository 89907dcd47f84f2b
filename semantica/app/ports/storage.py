"""Storage port interface for persisted index blobs."""

from pathlib import Path
from typing import Protocol


class IndexStoragePort(Protocol):
    """Port interface for reading and writing whole index files.

    Abstracts filesystem I/O to enable testing and alternative backends.

    Side effects: Reads/writes files.
    """

    def exists(self, path: Path) -> bool:
        """Return True when an index file is present at ``path``."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read the full contents of ``path``.

        Args:
            path: File path

        Returns:
            File contents
        """
        ...

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Replace the contents of ``path`` with ``data``.

        Args:
            path: File path
            data: Bytes to write
        """
        ...
