"""
tsproject.filebuffer - Growable random-access byte buffer.

Backs both the cached project document and the write-back session.
"""

from __future__ import annotations


class FileBuffer:
    """In-memory file contents addressed by byte offset."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    @property
    def size(self) -> int:
        return len(self._data)

    def read(self, offset: int, length: int) -> bytes:
        """Read up to length bytes at offset; short or empty past the end."""
        if offset < 0 or length < 0:
            raise ValueError("offset and length must be non-negative")
        return bytes(self._data[offset : offset + length])

    def write(self, data: bytes, offset: int) -> int:
        """Write data at offset, growing the buffer as needed.

        Writing past the current end zero-fills the gap.

        Returns:
            Number of bytes written
        """
        if offset < 0:
            raise ValueError("offset must be non-negative")
        end = offset + len(data)
        if offset > len(self._data):
            self._data.extend(bytes(offset - len(self._data)))
        self._data[offset:end] = data
        return len(data)

    def truncate(self, length: int = 0) -> None:
        """Cut the buffer to length bytes, zero-extending if it is shorter."""
        if length < 0:
            raise ValueError("length must be non-negative")
        if length <= len(self._data):
            del self._data[length:]
        else:
            self._data.extend(bytes(length - len(self._data)))

    def copy(self) -> FileBuffer:
        return FileBuffer(self._data)

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)
