"""
tsproject.models - Request context, cache keys and extraction results.

TrimContext carries every parameter a project file operation needs, so no
operation depends on process-wide state.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field

from tsproject.config import MAX_BLANK_FRAMES


class TrimKey(NamedTuple):
    """Identifies which trim a rendered document belongs to."""

    in_frame: int
    out_frame: int
    blank_length: int


class TrimContext(BaseModel):
    """Parameters of one trimmed view of a captured media file.

    Attributes:
        in_frame: First visible frame
        out_frame: Last visible frame, negative for "to the end of the media"
        total_frames: Total known frame count of the media
        frame_count: Frames the media producer exposes to the editor
        blank_length: Leading padding in frames
        file_size: Media file size in bytes
        movie_path: Media path inside the mount, e.g. "/uncut.ts"
        mount_root: Mount point the absolute resource path is built from
    """

    model_config = ConfigDict(frozen=True)

    in_frame: int = 0
    out_frame: int = -1
    total_frames: int = Field(default=0, ge=0)
    frame_count: int = Field(default=0, ge=0)
    blank_length: int = 0
    file_size: int = Field(default=0, ge=0)
    movie_path: str = "/uncut.ts"
    mount_root: Path = Path("/mnt")

    @property
    def key(self) -> TrimKey:
        return TrimKey(self.in_frame, self.out_frame, self.blank_length)

    @property
    def effective_out(self) -> int:
        return self.total_frames if self.out_frame < 0 else self.out_frame

    @property
    def resource_path(self) -> str:
        root = str(self.mount_root).rstrip("/")
        return f"{root}/{self.movie_path.lstrip('/')}"


class CutMarks(BaseModel):
    """Trim points recovered from a project saved by the editor."""

    model_config = ConfigDict(frozen=True)

    in_frame: int = Field(ge=0)
    out_frame: int = Field(gt=0)
    blank_length: int = Field(default=0, ge=0, le=MAX_BLANK_FRAMES)


class ExtractionErrorKind(Enum):
    """Reasons the cut marks could not be recovered."""

    NO_SESSION = ("no_session", "session")
    PARSE_FAILURE = ("parse_failure", "parse")
    PLAYLIST_NOT_FOUND = ("playlist_not_found", "structure")
    ENTRY_NOT_FOUND = ("entry_not_found", "structure")
    MISSING_INPOINT = ("missing_inpoint", "structure")
    MISSING_OUTPOINT = ("missing_outpoint", "structure")
    INVALID_INPOINT = ("invalid_inpoint", "validation")
    INVALID_OUTPOINT = ("invalid_outpoint", "validation")

    def __init__(self, code: str, category: str) -> None:
        self.code = code
        self.category = category


class ExtractionFailure(BaseModel):
    """Failed extraction, tagged with its reason."""

    model_config = ConfigDict(frozen=True)

    kind: ExtractionErrorKind
    detail: str = ""

    @property
    def category(self) -> str:
        return self.kind.category


ExtractionResult = Union[CutMarks, ExtractionFailure]
