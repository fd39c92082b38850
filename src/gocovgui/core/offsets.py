"""Byte to character offset translation for UTF-8 encoded source text.

Coverage tools report positions as byte offsets into the source file while
text widgets address characters, so every highlighted range has to be
translated. Decoding follows the same rules everywhere in the package:

* every valid UTF-8 sequence is one character;
* every byte that is not part of a valid sequence is one character of its
  own (Python's ``surrogateescape`` handler gives exactly that).

Because character boundaries cannot be computed arithmetically, each
translation walks the blob from the start. Batch lookups go through
:func:`byte_to_char_offsets`, which answers any number of offsets with a
single left-to-right pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gocovgui.core.model.function import CharSpan

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_ESCAPED_LO = 0xDC80
_ESCAPED_HI = 0xDCFF
REPLACEMENT_CHAR = "\N{REPLACEMENT CHARACTER}"


def decode_source(blob: bytes) -> str:
    """Decode *blob* one character per UTF-8 sequence or undecodable byte."""
    return blob.decode("utf-8", errors="surrogateescape")


def display_text(blob: bytes) -> str:
    """Decode *blob* for display, showing undecodable bytes as U+FFFD.

    The result has exactly as many characters as :func:`decode_source`
    returns, so character offsets computed here stay valid for it.
    """
    return "".join(REPLACEMENT_CHAR if _is_escaped(ch) else ch for ch in decode_source(blob))


def _is_escaped(ch: str) -> bool:
    return _ESCAPED_LO <= ord(ch) <= _ESCAPED_HI


def _utf8_width(ch: str) -> int:
    cp = ord(ch)
    if cp < 0x80 or _ESCAPED_LO <= cp <= _ESCAPED_HI:  # noqa: PLR2004
        return 1
    if cp < 0x800:  # noqa: PLR2004
        return 2
    if cp < 0x10000:  # noqa: PLR2004
        return 3
    return 4


def iter_char_starts(blob: bytes) -> Iterator[tuple[int, int]]:
    """Yield ``(byte_offset, char_offset)`` for the start of every character.

    A final pair for the end of the blob is yielded as well.
    """
    byte = 0
    index = 0
    for ch in decode_source(blob):
        yield byte, index
        byte += _utf8_width(ch)
        index += 1
    yield byte, index


def _check_range(blob: bytes, offset: int) -> None:
    if not 0 <= offset <= len(blob):
        msg = f"byte offset {offset} outside of [0, {len(blob)}]"
        raise ValueError(msg)


def byte_to_char_offsets(blob: bytes, offsets: Iterable[int]) -> dict[int, int]:
    """Translate many byte offsets into character offsets in one pass.

    An offset that falls inside a multi-byte character maps to that
    character. Offsets outside ``[0, len(blob)]`` raise :class:`ValueError`.
    """
    wanted = sorted(set(offsets))
    for offset in wanted:
        _check_range(blob, offset)

    result: dict[int, int] = {}
    pending = iter(wanted)
    target = next(pending, None)
    if target is None:
        return result

    byte = 0
    index = 0
    for ch in decode_source(blob):
        width = _utf8_width(ch)
        while target is not None and target < byte + width:
            result[target] = index
            target = next(pending, None)
        if target is None:
            return result
        byte += width
        index += 1

    # only the end-of-blob offset can be left
    while target is not None:
        result[target] = index
        target = next(pending, None)
    return result


def byte_to_char_offset(blob: bytes, byte_offset: int) -> int:
    """Return the character offset of *byte_offset* within *blob*."""
    return byte_to_char_offsets(blob, (byte_offset,))[byte_offset]


def char_to_byte_offset(blob: bytes, char_offset: int) -> int:
    """Return the byte offset at which character *char_offset* starts."""
    for byte, index in iter_char_starts(blob):
        if index == char_offset:
            return byte
    msg = f"character offset {char_offset} outside of the decoded text"
    raise ValueError(msg)


def highlight_range_nicely(char_start: int, data: bytes) -> list[CharSpan]:
    """Split a statement into highlight spans that skip line indentation.

    *data* holds the statement's bytes and *char_start* is the character
    offset at which it starts in the displayed text. A span ends at every
    newline; the whitespace that follows is skipped and the next span begins
    at the first non-whitespace character. Empty spans are dropped.
    """
    spans: list[CharSpan] = []
    skipping = False
    begin = pos = char_start
    for ch in decode_source(data):
        if not skipping:
            if ch == "\n":
                if pos > begin:
                    spans.append(CharSpan(begin, pos))
                skipping = True
        elif not ch.isspace():
            begin = pos
            skipping = False
        pos += 1
    if not skipping and pos > begin:
        spans.append(CharSpan(begin, pos))
    return spans


__all__ = [
    "REPLACEMENT_CHAR",
    "byte_to_char_offset",
    "byte_to_char_offsets",
    "char_to_byte_offset",
    "decode_source",
    "display_text",
    "highlight_range_nicely",
    "iter_char_starts",
]
