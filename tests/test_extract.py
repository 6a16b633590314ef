"""Tests for tsproject.extract module."""

from __future__ import annotations

import pytest

from tsproject.descriptor.template import render_descriptor
from tsproject.extract import clamp_blank, extract_cutmarks, parse_frame
from tsproject.models import CutMarks, ExtractionErrorKind, ExtractionFailure


def assert_failure(result, kind: ExtractionErrorKind) -> None:
    assert isinstance(result, ExtractionFailure)
    assert result.kind is kind


class TestParseFrame:
    def test_plain_number(self) -> None:
        assert parse_frame("300") == 300

    def test_signs_and_whitespace(self) -> None:
        assert parse_frame(" -5") == -5
        assert parse_frame("+7") == 7

    def test_trailing_garbage_ignored(self) -> None:
        assert parse_frame("12abc") == 12

    def test_non_numeric_is_zero(self) -> None:
        assert parse_frame("abc") == 0
        assert parse_frame("") == 0


    def test_ascii_digits_only(self) -> None:
        assert parse_frame("\u0665\u0660") == 0
        assert parse_frame("7\u0665") == 7

    def test_out_of_range_saturates(self) -> None:
        assert parse_frame("9" * 5000) == 2**31 - 1
        assert parse_frame("-" + "9" * 5000) == -(2**31)
        assert parse_frame("0" * 5000 + "12") == 12


class TestClampBlank:
    def test_in_range(self) -> None:
        assert clamp_blank(100) == 100

    def test_bounds(self) -> None:
        assert clamp_blank(-5) == 0
        assert clamp_blank(99999) == 45000
        assert clamp_blank(45000) == 45000


class TestExtractCutmarks:
    def test_entry_without_blank(self, saved_project: bytes) -> None:
        assert extract_cutmarks(saved_project) == CutMarks(
            in_frame=50, out_frame=300, blank_length=0
        )

    def test_blank_is_read(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(blank='<blank length="125"/>'))
        assert result == CutMarks(in_frame=50, out_frame=300, blank_length=125)

    @pytest.mark.parametrize(
        ("length", "expected"),
        [("99999", 45000), ("-5", 0), ("junk", 0), ("45000", 45000)],
    )
    def test_blank_is_clamped(self, project_factory, length: str, expected: int) -> None:
        result = extract_cutmarks(project_factory(blank=f'<blank length="{length}"/>'))
        assert isinstance(result, CutMarks)
        assert result.blank_length == expected

    def test_blank_without_length_defaults_to_zero(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(blank="<blank/>"))
        assert isinstance(result, CutMarks)
        assert result.blank_length == 0

    def test_lower_configured_blank_limit(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(blank='<blank length="5000"/>'), max_blank=1000)
        assert result.blank_length == 1000

    def test_no_session(self) -> None:
        result = extract_cutmarks(None)
        assert_failure(result, ExtractionErrorKind.NO_SESSION)
        assert result.category == "session"

    @pytest.mark.parametrize("content", [b"", b"not xml at all", b"<mlt><playlist></mlt>"])
    def test_parse_failure(self, content: bytes) -> None:
        result = extract_cutmarks(content)
        assert_failure(result, ExtractionErrorKind.PARSE_FAILURE)
        assert result.category == "parse"

    def test_playlist_not_found(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(playlist_id="playlist3"))
        assert_failure(result, ExtractionErrorKind.PLAYLIST_NOT_FOUND)
        assert result.category == "structure"

    def test_entry_not_found(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(entry='<entry in="1" out="2" producer="2"/>'))
        assert_failure(result, ExtractionErrorKind.ENTRY_NOT_FOUND)

    def test_missing_inpoint(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(entry='<entry out="300" producer="1"/>'))
        assert_failure(result, ExtractionErrorKind.MISSING_INPOINT)

    def test_missing_outpoint(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(entry='<entry in="50" producer="1"/>'))
        assert_failure(result, ExtractionErrorKind.MISSING_OUTPOINT)

    def test_negative_inpoint(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(entry='<entry in="-1" out="300" producer="1"/>'))
        assert_failure(result, ExtractionErrorKind.INVALID_INPOINT)
        assert result.category == "validation"

    def test_zero_outpoint(self, project_factory) -> None:
        result = extract_cutmarks(project_factory(entry='<entry in="0" out="0" producer="1"/>'))
        assert_failure(result, ExtractionErrorKind.INVALID_OUTPOINT)

    def test_huge_inpoint_does_not_raise(self, project_factory) -> None:
        entry = '<entry in="' + "9" * 5000 + '" out="300" producer="1"/>'
        result = extract_cutmarks(project_factory(entry=entry))
        assert result == CutMarks(in_frame=2**31 - 1, out_frame=300, blank_length=0)

    def test_huge_negative_inpoint_is_invalid(self, project_factory) -> None:
        entry = '<entry in="-' + "9" * 5000 + '" out="300" producer="1"/>'
        result = extract_cutmarks(project_factory(entry=entry))
        assert_failure(result, ExtractionErrorKind.INVALID_INPOINT)

    def test_huge_outpoint_does_not_raise(self, project_factory) -> None:
        entry = '<entry in="0" out="' + "9" * 5000 + '" producer="1"/>'
        result = extract_cutmarks(project_factory(entry=entry))
        assert result == CutMarks(in_frame=0, out_frame=2**31 - 1, blank_length=0)

    def test_huge_blank_is_clamped(self, project_factory) -> None:
        blank = '<blank length="' + "9" * 5000 + '"/>'
        result = extract_cutmarks(project_factory(blank=blank))
        assert isinstance(result, CutMarks)
        assert result.blank_length == 45000

    def test_non_ascii_digits_read_as_zero(self, project_factory) -> None:
        entry = '<entry in="0" out="\u0665\u0660" producer="1"/>'
        result = extract_cutmarks(project_factory(entry=entry))
        assert_failure(result, ExtractionErrorKind.INVALID_OUTPOINT)

    def test_entry_after_other_producers(self, project_factory) -> None:
        entry = '<entry in="0" out="10" producer="black"/><entry in="20" out="40" producer="1"/>'
        result = extract_cutmarks(project_factory(entry=entry))
        assert result == CutMarks(in_frame=20, out_frame=40, blank_length=0)

    def test_entry_outside_playlist5_ignored(self) -> None:
        content = (
            b'<mlt><playlist id="playlist4"><entry in="1" out="2" producer="1"/></playlist>'
            b'<playlist id="playlist5"/></mlt>'
        )
        assert_failure(extract_cutmarks(content), ExtractionErrorKind.ENTRY_NOT_FOUND)

    def test_unedited_render_round_trips(self) -> None:
        content = render_descriptor(
            in_frame=0,
            frame_count=1000,
            total_frames=1000,
            out_frame=-1,
            blank_length=0,
            file_size=123456,
            resource_path="/mnt/uncut.ts",
        )
        assert extract_cutmarks(content) == CutMarks(in_frame=0, out_frame=1000, blank_length=0)


class TestCutMarks:
    def test_is_frozen(self) -> None:
        marks = CutMarks(in_frame=1, out_frame=2)
        with pytest.raises(ValueError):
            marks.in_frame = 5

    def test_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            CutMarks(in_frame=-1, out_frame=2)
        with pytest.raises(ValueError):
            CutMarks(in_frame=0, out_frame=0)
        with pytest.raises(ValueError):
            CutMarks(in_frame=0, out_frame=1, blank_length=45001)
