"""
tsproject.project - The virtual Kdenlive project file.

Ties the document cache, the write-back session and cut mark extraction
together behind the operations a filesystem layer dispatches for one path.
"""

from __future__ import annotations

from tsproject.config import MAX_BLANK_FRAMES, TsProjectConfig
from tsproject.descriptor.cache import DescriptorCache
from tsproject.extract import extract_cutmarks
from tsproject.logging import logger
from tsproject.models import ExtractionResult, TrimContext
from tsproject.session import WriteSession


class ProjectFile:
    """Represents the virtual project file at one path of the mount."""

    def __init__(self, path: str = "/project.kdenlive", max_blank: int = MAX_BLANK_FRAMES) -> None:
        self.path = path
        self.max_blank = max_blank
        self.cache = DescriptorCache()
        self.session = WriteSession(self.cache)

    @classmethod
    def from_config(cls, config: TsProjectConfig) -> ProjectFile:
        return cls(path=config.project_path, max_blank=config.max_blank_frames)

    def matches(self, path: str) -> bool:
        return path == self.path

    # Reading

    def read(self, ctx: TrimContext, offset: int, length: int) -> bytes:
        logger.debug("reading project file at %d with a length of %d", offset, length)
        return self.cache.read(ctx, offset, length)

    def content_size(self, ctx: TrimContext) -> int:
        return self.cache.size(ctx)

    def reset(self) -> None:
        """Forget the rendered document, e.g. after the media changed."""
        self.cache.reset()

    # Writing

    def open(self, ctx: TrimContext, truncate: bool = False) -> None:
        self.session.open(ctx, truncate=truncate)

    def write(self, data: bytes, offset: int) -> int:
        return self.session.write(data, offset)

    def truncate(self, length: int = 0) -> None:
        self.session.truncate(length)

    def find_cutmarks(self) -> ExtractionResult:
        """Extract cut marks from the current write buffer."""
        return extract_cutmarks(self.session.snapshot(), max_blank=self.max_blank)

    def close(self) -> ExtractionResult | None:
        """Release a writer handle.

        Returns:
            Cut marks found in the final buffer when the last handle closes,
            None while other handles remain open
        """
        final = self.session.close()
        if final is None:
            return None
        return extract_cutmarks(final, max_blank=self.max_blank)
