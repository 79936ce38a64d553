"""Read-only byte sources that segments are sliced from."""

import io
import threading
from abc import ABC, abstractmethod
from typing import BinaryIO


class ByteSource(ABC):
    """Immutable byte sequence of known size."""

    @property
    @abstractmethod
    def size(self) -> int:
        """Total number of bytes in the source."""

    @abstractmethod
    def slice(self, start: int, end: int) -> bytes:
        """
        Returns the bytes in ``[start, end)``.

        Implementations must not mutate the source and must only copy the
        requested range.
        """

    def _check_range(self, start: int, end: int) -> None:
        if start < 0 or end < start or end > self.size:
            raise ValueError(
                f"Invalid range [{start}, {end}) for source of size {self.size}"
            )


class InMemorySource(ByteSource):
    """Byte source backed by an in-memory buffer."""

    def __init__(self, data: bytes):
        self._view = memoryview(data).toreadonly()

    @property
    def size(self) -> int:
        return self._view.nbytes

    def slice(self, start: int, end: int) -> bytes:
        self._check_range(start, end)
        return self._view[start:end].tobytes()


class FileSource(ByteSource):
    """
    Byte source backed by a seekable binary file.

    Reads are serialized with a lock so segments can be read concurrently
    from worker threads. The file is never written to or closed here.
    """

    def __init__(self, fileobj: BinaryIO, size: int | None = None):
        self._file = fileobj
        self._lock = threading.Lock()
        if size is None:
            size = self._file.seek(0, io.SEEK_END)
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    def slice(self, start: int, end: int) -> bytes:
        self._check_range(start, end)
        with self._lock:
            self._file.seek(start)
            return self._file.read(end - start)
