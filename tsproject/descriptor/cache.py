"""
tsproject.descriptor.cache - Single-slot project document cache.

The virtual file is read in many small chunks, so the document for the
current trim is rendered once and served from memory until the trim changes.
"""

from __future__ import annotations

import threading

from tsproject.descriptor.template import render_descriptor
from tsproject.filebuffer import FileBuffer
from tsproject.logging import logger
from tsproject.models import TrimContext, TrimKey


class DescriptorCache:
    """Holds the rendered project document for exactly one TrimKey."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buffer: FileBuffer | None = None
        self._key: TrimKey | None = None

    def _lookup(self, ctx: TrimContext) -> FileBuffer:
        # Caller holds self._lock.
        key = ctx.key
        if self._buffer is not None and self._key == key:
            logger.debug("project file cache hit for %s", key)
            return self._buffer

        logger.debug("project file cache miss for %s", key)
        content = render_descriptor(
            in_frame=ctx.in_frame,
            frame_count=ctx.frame_count,
            total_frames=ctx.total_frames,
            out_frame=ctx.out_frame,
            blank_length=ctx.blank_length,
            file_size=ctx.file_size,
            resource_path=ctx.resource_path,
        )
        if self._buffer is None:
            self._buffer = FileBuffer()
        self._buffer.write(content, 0)
        self._buffer.truncate(len(content))
        self._key = key
        return self._buffer

    def get(self, ctx: TrimContext) -> bytes:
        """Return the document for ctx, rendering it on a key mismatch.

        Rendering happens under the lock; it is rare and bounded.
        """
        with self._lock:
            return self._lookup(ctx).getvalue()

    def size(self, ctx: TrimContext) -> int:
        with self._lock:
            return self._lookup(ctx).size

    def read(self, ctx: TrimContext, offset: int, length: int) -> bytes:
        """Read a chunk of the document for ctx."""
        with self._lock:
            return self._lookup(ctx).read(offset, length)

    def reset(self) -> None:
        """Drop the cached document. Safe to call when empty."""
        with self._lock:
            if self._buffer is not None:
                logger.debug("dropping cached project file")
            self._buffer = None
            self._key = None

    @property
    def key(self) -> TrimKey | None:
        return self._key
