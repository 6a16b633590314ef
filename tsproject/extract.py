"""
tsproject.extract - Recover cut marks from a project saved by the editor.

Looks up playlist[@id='playlist5']/entry[@producer='1'] and its in/out
attributes, plus the optional leading blank of the same playlist.
"""

from __future__ import annotations

import re

from lxml import etree

from tsproject.config import MAX_BLANK_FRAMES
from tsproject.descriptor.template import MEDIA_PRODUCER_ID, TRIM_PLAYLIST_ID
from tsproject.logging import logger
from tsproject.models import CutMarks, ExtractionErrorKind, ExtractionFailure, ExtractionResult

_LEADING_INT = re.compile(r"[ \t\n\r\f\v]*([+-]?)([0-9]+)")

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_frame(value: str) -> int:
    """Read a frame number the way the editor's own parser tolerates it.

    Leading whitespace and a sign are accepted, trailing garbage is ignored
    and anything without leading ASCII digits reads as 0. Values beyond the
    32-bit range saturate.
    """
    match = _LEADING_INT.match(value)
    if match is None:
        return 0
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > 10:
        return INT_MIN if sign == "-" else INT_MAX
    number = -int(digits) if sign == "-" else int(digits)
    return max(INT_MIN, min(INT_MAX, number))


def clamp_blank(value: int, upper: int = MAX_BLANK_FRAMES) -> int:
    """Clamp a blank length into [0, upper]."""
    if value < 0:
        logger.debug("blank length %d is negative, assuming 0", value)
        return 0
    if value > upper:
        logger.debug("blank length %d is too high, clipping to %d", value, upper)
        return upper
    return value


def _fail(kind: ExtractionErrorKind, detail: str) -> ExtractionFailure:
    logger.debug("find cutmarks: %s", detail)
    return ExtractionFailure(kind=kind, detail=detail)


def _find_element(scope: etree._Element, tag: str, attr: str, value: str) -> etree._Element | None:
    for el in scope.iter(tag):
        if el.get(attr) == value:
            return el
    return None


def parse_project(content: bytes) -> etree._Element | None:
    """Parse project bytes, returning None if they are not well-formed XML."""
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        return etree.fromstring(content, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        logger.debug("project file is not valid XML: %s", e)
        return None


def extract_cutmarks(content: bytes | None, max_blank: int = MAX_BLANK_FRAMES) -> ExtractionResult:
    """Recover the cut marks from saved project contents.

    Args:
        content: Write-back buffer contents, None if no session is open
        max_blank: Upper bound for the recovered blank length

    Returns:
        CutMarks on success, otherwise an ExtractionFailure naming the reason
    """
    if content is None:
        return _fail(ExtractionErrorKind.NO_SESSION, "file has not been written to")

    root = parse_project(content)
    if root is None:
        return _fail(ExtractionErrorKind.PARSE_FAILURE, "no valid XML")

    playlist = _find_element(root, "playlist", "id", TRIM_PLAYLIST_ID)
    if playlist is None:
        return _fail(
            ExtractionErrorKind.PLAYLIST_NOT_FOUND, f"playlist '{TRIM_PLAYLIST_ID}' not found"
        )

    blank = 0
    blank_el = next(playlist.iter("blank"), None)
    if blank_el is None:
        logger.debug("find cutmarks: no blank in playlist, assuming 0")
    else:
        length = blank_el.get("length")
        if length is not None:
            blank = clamp_blank(parse_frame(length), min(max_blank, MAX_BLANK_FRAMES))

    entry = _find_element(playlist, "entry", "producer", MEDIA_PRODUCER_ID)
    if entry is None:
        return _fail(ExtractionErrorKind.ENTRY_NOT_FOUND, "entry in playlist not found")

    str_in = entry.get("in")
    str_out = entry.get("out")
    if str_in is None:
        return _fail(ExtractionErrorKind.MISSING_INPOINT, "no inpoint found")
    if str_out is None:
        return _fail(ExtractionErrorKind.MISSING_OUTPOINT, "no outpoint found")
    logger.debug("find cutmarks: found attributes in='%s' out='%s'", str_in, str_out)

    in_frame = parse_frame(str_in)
    out_frame = parse_frame(str_out)
    if in_frame < 0:
        return _fail(ExtractionErrorKind.INVALID_INPOINT, f"inpoint {in_frame} is negative")
    if out_frame <= 0:
        return _fail(ExtractionErrorKind.INVALID_OUTPOINT, f"outpoint {out_frame} is not positive")

    logger.debug("find cutmarks: in=%d out=%d blank=%d", in_frame, out_frame, blank)
    return CutMarks(in_frame=in_frame, out_frame=out_frame, blank_length=blank)
