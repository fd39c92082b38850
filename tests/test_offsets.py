from __future__ import annotations

import pytest

from gocovgui.core.model.function import CharSpan
from gocovgui.core.offsets import (
    REPLACEMENT_CHAR,
    byte_to_char_offset,
    byte_to_char_offsets,
    char_to_byte_offset,
    decode_source,
    display_text,
    highlight_range_nicely,
    iter_char_starts,
)

# a(0) é(1-2) 😀(3-6) b(7), 8 bytes, 4 characters
MIXED = "aé😀b".encode()


def test_ascii_offsets_are_identity() -> None:
    blob = b"func main() {}"
    assert byte_to_char_offsets(blob, range(len(blob) + 1)) == {i: i for i in range(len(blob) + 1)}


def test_multibyte_offsets() -> None:
    assert byte_to_char_offsets(MIXED, [0, 1, 3, 7, 8]) == {0: 0, 1: 1, 3: 2, 7: 3, 8: 4}


@pytest.mark.parametrize(("offset", "expected"), [(2, 1), (4, 2), (5, 2), (6, 2)])
def test_offset_inside_character_maps_to_that_character(offset: int, expected: int) -> None:
    assert byte_to_char_offset(MIXED, offset) == expected


def test_batch_accepts_duplicates_and_any_order() -> None:
    assert byte_to_char_offsets(MIXED, [8, 0, 3, 8, 3]) == {0: 0, 3: 2, 8: 4}
    assert byte_to_char_offsets(MIXED, []) == {}


@pytest.mark.parametrize("offset", [-1, 9])
def test_offset_out_of_range(offset: int) -> None:
    with pytest.raises(ValueError, match="outside"):
        byte_to_char_offset(MIXED, offset)


def test_invalid_bytes_count_as_one_character_each() -> None:
    blob = b"a\xff\xfeb"
    assert len(decode_source(blob)) == 4
    assert byte_to_char_offsets(blob, [1, 2, 3, 4]) == {1: 1, 2: 2, 3: 3, 4: 4}
    assert display_text(blob) == f"a{REPLACEMENT_CHAR}{REPLACEMENT_CHAR}b"


def test_truncated_sequence_is_one_character_per_byte() -> None:
    # first two bytes of a three byte sequence
    blob = b"x" + "€".encode()[:2] + b"y"
    assert display_text(blob) == f"x{REPLACEMENT_CHAR}{REPLACEMENT_CHAR}y"
    assert byte_to_char_offset(blob, 4) == 4


def test_char_starts_round_trip() -> None:
    starts = list(iter_char_starts(MIXED))
    assert starts == [(0, 0), (1, 1), (3, 2), (7, 3), (8, 4)]
    for byte, index in starts:
        assert char_to_byte_offset(MIXED, index) == byte
        assert byte_to_char_offset(MIXED, byte) == index


def test_char_to_byte_offset_out_of_range() -> None:
    with pytest.raises(ValueError, match="character offset 5"):
        char_to_byte_offset(MIXED, 5)


# --------------------------------------------------------------------------- #
# highlighting                                                                #
# --------------------------------------------------------------------------- #


def test_single_line_statement_is_one_span() -> None:
    assert highlight_range_nicely(10, b"x := 1") == [CharSpan(10, 16)]


def test_indentation_after_newline_is_skipped() -> None:
    assert highlight_range_nicely(0, b"ab\n  cd") == [CharSpan(0, 2), CharSpan(5, 7)]


def test_blank_continuation_lines_are_skipped() -> None:
    assert highlight_range_nicely(0, b"a\n \n\tb") == [CharSpan(0, 1), CharSpan(5, 6)]


def test_trailing_newline_adds_no_span() -> None:
    assert highlight_range_nicely(3, b"ab\n") == [CharSpan(3, 5)]
    assert highlight_range_nicely(3, b"ab\n\t\t") == [CharSpan(3, 5)]


def test_empty_statement_has_no_span() -> None:
    assert highlight_range_nicely(7, b"") == []


def test_spans_are_counted_in_characters() -> None:
    data = "é + ü\n\tö".encode()
    assert highlight_range_nicely(2, data) == [CharSpan(2, 7), CharSpan(9, 10)]


def test_leading_newline_starts_in_skip_mode() -> None:
    assert highlight_range_nicely(0, b"\n  x") == [CharSpan(3, 4)]
