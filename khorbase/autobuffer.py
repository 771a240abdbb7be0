"""Growable byte buffer with a filled region and spare capacity."""

from __future__ import annotations

DEFAULT_GRANULATE = 0x400


class AutoBuffer:
    """A byte buffer that grows in steps of ``granulate`` bytes.

    The buffer has a full capacity and a filled region at its head; the rest
    is free space that can be written to.
    """

    def __init__(self, data: bytes | bytearray | None = None, granulate: int = DEFAULT_GRANULATE) -> None:
        if granulate <= 0:
            raise ValueError("granulate must be positive")
        self._granulate = granulate
        self._buffer = bytearray(data) if data is not None else bytearray()
        self._ready = len(self._buffer)

    def __len__(self) -> int:
        return self._ready

    def __getitem__(self, position):
        return bytes(self._buffer[: self._ready])[position]

    @property
    def free_size(self) -> int:
        """Number of bytes that can be written without growing."""
        return len(self._buffer) - self._ready

    @property
    def full_size(self) -> int:
        """Total capacity of the buffer."""
        return len(self._buffer)

    @property
    def data(self) -> bytes:
        """The filled region."""
        return bytes(self._buffer[: self._ready])

    def flush(self) -> None:
        """Mark the whole buffer as free, keeping the capacity."""
        self._ready = 0

    def find(self, start: int, match: bytes) -> int:
        """Return the first position of ``match`` at or after ``start``, or -1."""
        match = bytes(match)
        last = self._ready - len(match)
        for position in range(start, last + 1):
            if self._buffer[position : position + len(match)] == match:
                return position
        return -1

    def compare(self, start: int, match: bytes) -> int | None:
        """Compare the bytes at ``start`` with ``match``.

        Returns 0 when equal, a negative or positive number for less or
        greater, and None when ``match`` runs past the filled region.
        """
        match = bytes(match)
        if start + len(match) > self._ready:
            return None
        current = bytes(self._buffer[start : start + len(match)])
        return (current > match) - (current < match)

    def advance(self, size: int) -> int:
        """Extend the filled region by ``size`` bytes, up to the capacity."""
        self._ready = min(self._ready + size, len(self._buffer))
        return self._ready

    def retreat(self, size: int) -> int:
        """Shrink the filled region by ``size`` bytes, down to zero."""
        self._ready = max(self._ready - size, 0)
        return self._ready

    def append(self, data: bytes, granulate: int | None = None) -> int:
        """Append ``data`` to the filled region and return the new fill size."""
        data = bytes(data)
        if len(data) > self.free_size:
            self.ensure_capacity(self._ready + len(data), granulate)
        self._buffer[self._ready : self._ready + len(data)] = data
        self._ready += len(data)
        return self._ready

    def ensure_capacity(self, demand_size: int, granulate: int | None = None) -> None:
        """Grow the capacity to hold ``demand_size`` bytes.

        A demand of zero asks for one more step beyond the filled region.
        """
        step = self._granulate if granulate is None else granulate
        if step <= 0:
            raise ValueError("granulate must be positive")
        if demand_size == 0:
            demand_size = self._ready + step
        if demand_size > len(self._buffer):
            new_size = (demand_size // step + 1) * step
            self._buffer.extend(bytes(new_size - len(self._buffer)))

    def cut_from_head(self, count: int) -> None:
        """Drop ``count`` bytes from the head of the filled region."""
        if count == 0 or count > self._ready:
            return
        tail = self._buffer[count : self._ready]
        self._buffer[: len(tail)] = tail
        self._ready -= count

    def replace(self, match: bytes, replacement: bytes, single: bool = True) -> bool:
        """Replace occurrences of ``match`` with ``replacement`` in place.

        When ``single`` is true only the first occurrence is replaced.
        Returns whether anything was replaced.
        """
        match = bytes(match)
        replacement = bytes(replacement)
        if not match:
            raise ValueError("match must not be empty")
        match_len, replace_len = len(match), len(replacement)
        if self._ready < match_len:
            return False

        delta = replace_len - match_len
        max_pos = self._ready - match_len
        step_after = max(replace_len, match_len)
        replaced = False
        position = 0
        while position <= max_pos:
            if self._buffer[position : position + match_len] != match:
                position += 1
                continue
            if delta > 0:
                self.ensure_capacity(self._ready + delta)
            capacity = len(self._buffer)
            self._buffer[position : position + match_len] = replacement
            if len(self._buffer) < capacity:
                self._buffer.extend(bytes(capacity - len(self._buffer)))
            else:
                del self._buffer[capacity:]
            self._ready += delta
            max_pos += delta
            position += step_after
            replaced = True
            if single:
                break
        return replaced


class BufferChunk:
    """A reference to a position inside an :class:`AutoBuffer`."""

    def __init__(self, parent: AutoBuffer) -> None:
        self._parent = parent
        self._reference: int | None = None

    @property
    def reference(self) -> int | None:
        return self._reference

    def chunk(self) -> bytes | None:
        """Bytes of the parent's filled region from the reference on, or None."""
        if not self.is_valid():
            return None
        return self._parent.data[self._reference :]

    def clear_reference(self) -> None:
        self._reference = None

    def set_reference(self, reference: int) -> None:
        self._reference = reference

    def is_valid(self) -> bool:
        return self._reference is not None