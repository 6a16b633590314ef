"""
tsproject.session - Write-back buffer for the virtual project file.

The editor may hold several writer handles on the project file at once; they
share one buffer that lives until the last handle is closed.
"""

from __future__ import annotations

import threading

from tsproject.descriptor.cache import DescriptorCache
from tsproject.exceptions import SessionNotOpenError
from tsproject.filebuffer import FileBuffer
from tsproject.logging import logger
from tsproject.models import TrimContext


class WriteSession:
    """Reference-counted write buffer, seeded from the cached document.

    The buffer exists exactly while the refcount is positive. All operations
    run under one lock, so a write never races a close.
    """

    def __init__(self, cache: DescriptorCache) -> None:
        self._cache = cache
        self._lock = threading.Lock()
        self._refcount = 0
        self._buffer: FileBuffer | None = None

    @property
    def refcount(self) -> int:
        return self._refcount

    @property
    def is_open(self) -> bool:
        return self._buffer is not None

    def open(self, ctx: TrimContext, truncate: bool = False) -> None:
        """Register a writer handle.

        The first handle creates the buffer: empty when truncate is set,
        otherwise a copy of the current document. Later handles only clear
        the shared buffer when they ask for truncation.
        """
        with self._lock:
            # A handle is counted only once its buffer exists.
            if self._buffer is None:
                if truncate:
                    logger.debug("opening empty project write buffer")
                    self._buffer = FileBuffer()
                else:
                    logger.debug("opening project write buffer from project file")
                    self._buffer = FileBuffer(self._cache.get(ctx))
            elif truncate:
                self._buffer.truncate(0)
            self._refcount += 1
            logger.debug("project write session refcount is %d", self._refcount)

    def write(self, data: bytes, offset: int) -> int:
        """Write data at offset into the shared buffer.

        Raises:
            SessionNotOpenError: If no writer handle is open
        """
        with self._lock:
            if self._buffer is None:
                logger.debug("write to project file failed: not opened before")
                raise SessionNotOpenError("project file is not open for writing")
            logger.debug("writing %d bytes to project file at %d", len(data), offset)
            return self._buffer.write(data, offset)

    def truncate(self, length: int = 0) -> None:
        with self._lock:
            if self._buffer is not None:
                self._buffer.truncate(length)

    def close(self) -> bytes | None:
        """Release a writer handle; the last one discards the buffer.

        A close without a matching open is ignored.

        Returns:
            Final buffer contents when this was the last handle, else None
        """
        with self._lock:
            if self._refcount == 0:
                logger.warning("project file closed more often than opened, ignoring")
                return None
            self._refcount -= 1
            if self._refcount > 0:
                return None
            logger.debug("discarding project write buffer")
            final = self._buffer.getvalue() if self._buffer is not None else None
            self._buffer = None
            return final

    def snapshot(self) -> bytes | None:
        """Current buffer contents, or None when no session is open."""
        with self._lock:
            if self._buffer is None:
                return None
            return self._buffer.getvalue()
