import pytest

from finchcmake.source import SourceBuffer, SourceLocation


def test_location_fields_and_string():
    loc = SourceLocation("test.cpp", 42, 10, 500)
    assert loc.file == "test.cpp"
    assert loc.line == 42
    assert loc.column == 10
    assert loc.offset == 500
    assert loc.is_valid()
    assert str(loc) == "test.cpp:42:10"


def test_default_location_is_invalid():
    assert not SourceLocation().is_valid()


def test_line_column_of_second_line():
    buf = SourceBuffer("cmd\narg", "test.cmake")
    assert buf.line_column_at(0) == (1, 1)
    assert buf.line_column_at(3) == (1, 4)
    assert buf.line_column_at(4) == (2, 1)


def test_location_at_carries_filename_and_offset():
    buf = SourceBuffer("cmd\narg", "test.cmake")
    loc = buf.location_at(4)
    assert loc.file == "test.cmake"
    assert loc.offset == 4
    assert (loc.line, loc.column) == buf.line_column_at(4)


def test_at_returns_nul_past_end():
    buf = SourceBuffer("abc", "f")
    assert buf.at(1) == "b"
    assert buf.at(len(buf)) == "\0"
    assert buf.at(100) == "\0"


def test_slice_clips_and_handles_start_past_end():
    text = "add_library(mylib)"
    buf = SourceBuffer(text, "f")
    assert buf.slice(0, 11) == text[:11]
    assert buf.slice(12, 1000) == text[12:]
    assert buf.slice(len(text), len(text) + 5) == ""


def test_slice_rejects_negative_offsets():
    buf = SourceBuffer("abc", "f")
    with pytest.raises(ValueError):
        buf.slice(-1, 2)


def test_line_content_round_trip():
    lines = ["project(MyProject)", "set(A b)", "message(STATUS x)"]
    buf = SourceBuffer("\n".join(lines), "f")
    assert buf.line_count() == len(lines)
    assert [buf.line_content(n) for n in range(1, buf.line_count() + 1)] == lines
    assert buf.line_content(0) == ""
    assert buf.line_content(len(lines) + 1) == ""


def test_line_content_matches_offsets():
    text = "one\ntwo\nthree"
    buf = SourceBuffer(text, "f")
    for offset in range(len(text)):
        line, column = buf.line_column_at(offset)
        if text[offset] != "\n":
            assert buf.line_content(line)[column - 1] == text[offset]


def test_len_and_valid_offsets():
    text = "cmd arg"
    buf = SourceBuffer(text, "f")
    assert len(buf) == len(text)
    assert buf.is_valid_offset(0)
    assert buf.is_valid_offset(len(text) - 1)
    assert not buf.is_valid_offset(len(text))
    assert not buf.is_valid_offset(-1)


def test_empty_buffer_has_one_line():
    buf = SourceBuffer("", "f")
    assert buf.line_count() == 1
    assert buf.line_content(1) == ""
    assert buf.slice(0, 10) == ""