"""Memory-mapped file that grows in steps of a fixed granulate."""

from __future__ import annotations

import mmap
import os


class FastFile:
    """A file mapped into memory for direct reading and writing.

    Files opened for writing are mapped with spare room rounded up to the
    granulate; on close the file is cut back to its logical size.
    """

    def __init__(self, granulate: int = 0) -> None:
        if granulate < 0:
            raise ValueError("granulate must not be negative")
        self.granulate = granulate or mmap.ALLOCATIONGRANULARITY
        self.file_size = 0
        self.over_file_size = 0
        self.read_only = False
        self.modified = 0
        self._fd: int | None = None
        self._memory: mmap.mmap | None = None

    @property
    def memory(self) -> mmap.mmap | None:
        """The mapped region, or None when nothing is open."""
        return self._memory

    def _rounded(self, size: int) -> int:
        return (size // self.granulate + 1) * self.granulate

    def _map(self) -> None:
        access = mmap.ACCESS_READ if self.read_only else mmap.ACCESS_WRITE
        self._memory = mmap.mmap(self._fd, self.over_file_size, access=access)

    def open(self, file_name: str, file_size: int = 0, read_only: bool = False) -> FastFile:
        """Map ``file_name``; an empty file takes ``file_size`` as its size."""
        self.close()
        self.read_only = read_only
        if read_only and not os.path.exists(file_name):
            raise FileNotFoundError(file_name)

        flags = os.O_RDONLY if read_only else os.O_RDWR | os.O_CREAT
        self._fd = os.open(file_name, flags | getattr(os, "O_BINARY", 0), 0o660)
        try:
            status = os.fstat(self._fd)
            self.modified = int(status.st_mtime)
            self.file_size = status.st_size or file_size
            if read_only:
                self.over_file_size = self.file_size
            else:
                self.over_file_size = self._rounded(self.file_size)
                os.ftruncate(self._fd, self.over_file_size)
            self._map()
        except BaseException:
            self.close()
            raise
        return self

    def set_length(self, new_size: int) -> None:
        """Set the logical size, remapping with more room when it outgrows the map."""
        if new_size <= self.file_size or new_size <= self.over_file_size:
            self.file_size = new_size
            return
        if self._fd is None:
            raise RuntimeError("file is not open")
        if self.read_only:
            raise PermissionError("cannot grow a file opened read-only")
        if self._memory is not None:
            self._memory.close()
            self._memory = None
        self.file_size = new_size
        self.over_file_size = self._rounded(new_size)
        os.ftruncate(self._fd, self.over_file_size)
        self._map()

    def close(self, size_on_close: int = 0) -> None:
        """Unmap and close; a written file is cut to ``size_on_close`` or its size."""
        if self._memory is not None:
            self._memory.close()
            self._memory = None
        if self._fd is not None:
            if not self.read_only:
                os.ftruncate(self._fd, size_on_close or self.file_size)
            os.close(self._fd)
            self._fd = None

    def __enter__(self) -> FastFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()