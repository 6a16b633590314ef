"""
tsproject.descriptor.template - Kdenlive 0.9 project document builder.

Builds the synthesized project as an element tree and serializes it with the
exact element layout Kdenlive expects: one filler producer, four empty
overlay tracks, the trimmed media producer in playlist5 behind a blank
spacer, and the mix transitions wiring the tracks together.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import PurePosixPath

from lxml import etree

from tsproject.exceptions import DescriptorOverflowError
from tsproject.logging import logger

PROJECT_TITLE = "Anonymous Submission"
MEDIA_PRODUCER_ID = "1"
TRIM_PLAYLIST_ID = "playlist5"
XML_DECLARATION = b"<?xml version='1.0' encoding='utf-8'?>"

_BLACK_PROPERTIES = [
    ("mlt_type", "producer"),
    ("aspect_ratio", "0"),
    ("length", "15000"),
    ("eof", "pause"),
    ("resource", "black"),
    ("mlt_service", "colour"),
]

_TRACKS = [
    {"producer": "black_track"},
    {"hide": "video", "producer": "playlist1"},
    {"hide": "video", "producer": "playlist2"},
    {"producer": "playlist3"},
    {"producer": "playlist4"},
    {"producer": TRIM_PLAYLIST_ID},
]

_TRACK_INFOS = [
    ("1", "Audio 2", "audio"),
    ("1", "Audio 1", "audio"),
    ("0", "Video 3", None),
    ("0", "Video 2", None),
    ("0", "Video 1", None),
]

_PROFILE_INFO = {
    "width": "1440",
    "display_aspect_den": "9",
    "frame_rate_den": "1",
    "description": "HDV 1440x1080i 25 fps",
    "height": "1080",
    "frame_rate_num": "25",
    "display_aspect_num": "16",
    "progressive": "0",
    "sample_aspect_num": "4",
    "sample_aspect_den": "3",
}


def _sub(parent: etree._Element, tag: str, text: str | None = None, **attrib: str) -> etree._Element:
    el = etree.SubElement(parent, tag)
    for name, value in attrib.items():
        el.set(name.rstrip("_"), value)
    if text is not None:
        el.text = text
    return el


def _properties(parent: etree._Element, pairs: list[tuple[str, str]]) -> None:
    for name, value in pairs:
        _sub(parent, "property", value, name=name)


def _indent(el: etree._Element, depth: int = 0) -> None:
    """Lay out children one space per nesting level, without newlines."""
    children = list(el)
    if not children:
        return
    el.text = " " * (depth + 1)
    for child in children:
        _indent(child, depth + 1)
        child.tail = " " * (depth + 1)
    children[-1].tail = " " * depth


def build_descriptor_tree(
    in_frame: str,
    frame_count: str,
    last_frame: str,
    file_size: str,
    resource_path: str,
    out_frame: str,
    blank_length: str,
) -> etree._Element:
    """Build the project tree from already formatted substitution values.

    Args:
        in_frame: Trim-in frame
        frame_count: Frames exposed by the media producer
        last_frame: frame_count - 1
        file_size: Media file size in bytes
        resource_path: Absolute path of the media file
        out_frame: Effective trim-out frame
        blank_length: Leading blank in frames

    Returns:
        Root mlt element
    """
    root = etree.Element("mlt")
    root.set("title", PROJECT_TITLE)
    root.set("root", "/tmp")
    root.set("version", "0.8.8")

    black = _sub(root, "producer", in_="0", out="500", id="black")
    _properties(black, _BLACK_PROPERTIES)
    black_track = _sub(root, "playlist", id="black_track")
    _sub(black_track, "entry", in_="0", out="7000", producer="black")
    for i in range(1, 5):
        _sub(root, "playlist", id=f"playlist{i}")

    media = _sub(root, "producer", in_="0", out=last_frame, id=MEDIA_PRODUCER_ID)
    _properties(
        media,
        [
            ("mlt_type", "producer"),
            ("aspect_ratio", "1.422222"),
            ("length", frame_count),
            ("eof", "pause"),
            ("resource", resource_path),
            ("mlt_service", "avformat"),
            ("source_fps", "25.000000"),
        ],
    )

    trim = _sub(root, "playlist", id=TRIM_PLAYLIST_ID)
    _sub(trim, "blank", length=blank_length)
    _sub(trim, "entry", in_=in_frame, out=out_frame, producer=MEDIA_PRODUCER_ID)

    tractor = _sub(
        root,
        "tractor",
        title=PROJECT_TITLE,
        global_feed="1",
        in_="0",
        out=last_frame,
        id="maintractor",
    )
    for track in _TRACKS:
        _sub(tractor, "track", **track)
    for i, b_track in enumerate(range(2, 6)):
        transition = _sub(tractor, "transition", in_="0", out="0", id=f"transition{i}")
        _properties(
            transition,
            [
                ("a_track", "1"),
                ("b_track", str(b_track)),
                ("mlt_type", "transition"),
                ("mlt_service", "mix"),
                ("always_active", "1"),
                ("combine", "1"),
                ("internal_added", "237"),
            ],
        )

    doc = _sub(
        root,
        "kdenlivedoc",
        profile="hdv_1080_50i",
        kdenliveversion="0.9.0",
        version="0.88",
        projectfolder="/tmp/kdenlive",
    )
    _sub(
        doc,
        "documentproperties",
        zonein="0",
        zoneout="100",
        zoom="8",
        verticalzoom="1",
        position="0",
    )
    _sub(doc, "profileinfo", **_PROFILE_INFO)
    tracksinfo = _sub(doc, "tracksinfo")
    for blind, name, track_type in _TRACK_INFOS:
        info = _sub(tracksinfo, "trackinfo", blind=blind, mute="0", locked="0", trackname=name)
        if track_type:
            info.set("type", track_type)
    _sub(
        doc,
        "kdenlive_producer",
        audio_max="2",
        id=MEDIA_PRODUCER_ID,
        default_video="0",
        fps="25.000000",
        name=PurePosixPath(resource_path).name,
        videocodec="H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10",
        resource=resource_path,
        default_audio="1",
        audiocodec="Advanced Audio Coding",
        duration=frame_count,
        aspect_ratio="1.422222",
        channels="2",
        frequency="48000",
        video_max="0",
        type="3",
        frame_size="720x576",
        file_size=file_size,
    )
    _sub(doc, "markers")
    _sub(doc, "groups")

    _indent(root)
    return root


def _serialize(root: etree._Element) -> bytes:
    # The declaration directly precedes the root, with no newline in between.
    return XML_DECLARATION + etree.tostring(root, encoding="utf-8", xml_declaration=False)


@lru_cache(maxsize=1)
def static_length() -> int:
    """Length of the document with every substitution point left empty."""
    return len(_serialize(build_descriptor_tree("", "", "", "", "", "", "")))


def render_descriptor(
    in_frame: int,
    frame_count: int,
    total_frames: int,
    out_frame: int,
    blank_length: int,
    file_size: int,
    resource_path: str,
) -> bytes:
    """Render the project document for one trim.

    Args:
        in_frame: Trim-in frame
        frame_count: Frames exposed by the media producer
        total_frames: Total known frames, used when out_frame is negative
        out_frame: Trim-out frame, negative for "to the end"
        blank_length: Leading blank in frames
        file_size: Media file size in bytes
        resource_path: Absolute path of the media file

    Returns:
        UTF-8 encoded project document

    Raises:
        DescriptorOverflowError: If the document reaches twice the static length
    """
    effective_out = total_frames if out_frame < 0 else out_frame
    root = build_descriptor_tree(
        in_frame=str(in_frame),
        frame_count=str(frame_count),
        last_frame=str(frame_count - 1),
        file_size=str(file_size),
        resource_path=resource_path,
        out_frame=str(effective_out),
        blank_length=str(blank_length),
    )
    content = _serialize(root)

    limit = static_length() * 2
    if len(content) >= limit:
        raise DescriptorOverflowError(len(content), limit)
    logger.debug("rendered project file: %d bytes", len(content))
    return content
