"""Validating, escaping and converting between UTF-8, UTF-16 and UTF-32.

UTF-8 data is handled as ``bytes``; UTF-16 as a list of 16-bit code units;
UTF-32 as a ``str`` (one character per code point).
"""

from __future__ import annotations

import struct
from typing import Iterable, Optional, Union

INTERLINEAR_ANNOTATION_ANCHOR = 0xFFF9
INTERLINEAR_ANNOTATION_SEPARATOR = 0xFFFA
INTERLINEAR_ANNOTATION_TERMINATOR = 0xFFFB
OBJECT_REPLACEMENT_CHARACTER = 0xFFFC
REPLACEMENT_CHARACTER = 0xFFFD
BOM = 0xFEFF

# Four-byte sequences are only passed through when they decode at or above
# this value, which no valid code point reaches; they are always escaped.
_FOUR_BYTE_MINIMUM = 0x1000000

BytesLike = Union[bytes, bytearray, memoryview, str]


class BadUnicode(ValueError):
    """Raised when validation is requested and the input is not valid UTF-8."""

    def __init__(self, bad: bytes) -> None:
        super().__init__(bad)
        self.bad = bad


class InvalidUTF16(ValueError):
    """Raised when data cannot be interpreted as UTF-16."""


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def octal_escape(ch: int) -> str:
    """Return the ``\\ooo`` escape for a byte value."""
    return f"\\{ch & 0xFF:03o}"


def utf8cont(ch: int) -> bool:
    """True if the byte is a UTF-8 continuation byte."""
    return (ch & 0xC0) == 0x80


def valid_utf8codepoint(unichar: int) -> bool:
    """True if a decoded code point is acceptable (not a surrogate, non-character or unassigned plane)."""
    if unichar in (0xFFFE, 0xFFFF):
        return False
    if 0xD800 <= unichar <= 0xDFFF:
        return False
    if unichar < 0x10000:
        return True
    # Plane 1 gaps
    if 0x13FFF < unichar < 0x16000:
        return False
    if 0x16FFF < unichar < 0x1B000:
        return False
    if 0x1BFFF < unichar < 0x1D000:
        return False
    # Plane 2 gap
    if 0x2BFFF < unichar < 0x2F000:
        return False
    # Planes 3 to 13
    if 0x30000 <= unichar < 0xDFFFF:
        return False
    if unichar > 0x10FFFF:
        return False
    return True


def _sequence_length(data: bytes, i: int) -> int:
    """Length of an acceptable UTF-8 sequence starting at i, or 0."""
    n = len(data)
    ch = data[i]
    if (ch & 0xE0) == 0xC0 and i + 1 < n and utf8cont(data[i + 1]):
        unichar = ((ch & 0x1F) << 6) | (data[i + 1] & 0x3F)
        if valid_utf8codepoint(unichar) and ch != 0xC0 and unichar >= 0x80:
            return 2
    if (ch & 0xF0) == 0xE0 and i + 2 < n and utf8cont(data[i + 1]) and utf8cont(data[i + 2]):
        unichar = ((ch & 0x0F) << 12) | ((data[i + 1] & 0x3F) << 6) | (data[i + 2] & 0x3F)
        if valid_utf8codepoint(unichar) and unichar >= 0x800:
            return 3
    if (
        (ch & 0xF8) == 0xF0
        and i + 3 < n
        and all(utf8cont(b) for b in data[i + 1 : i + 4])
    ):
        unichar = (
            ((ch & 0x07) << 18)
            | ((data[i + 1] & 0x3F) << 12)
            | ((data[i + 2] & 0x3F) << 6)
            | (data[i + 3] & 0x3F)
        )
        if valid_utf8codepoint(unichar) and unichar >= _FOUR_BYTE_MINIMUM:
            return 4
    return 0


def validate_or_escape_utf8(
    data: BytesLike,
    escape_bad_utf8: bool = True,
    escape_backslash: bool = True,
    validate: bool = False,
) -> bytes:
    """Return UTF-8 with control characters and, optionally, bad sequences and backslashes escaped.

    Raises BadUnicode if ``validate`` is set, ``escape_bad_utf8`` is not, and
    the input holds an invalid sequence.
    """
    raw = _as_bytes(data)
    if not (escape_bad_utf8 or escape_backslash or validate):
        return raw

    out = bytearray()
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch < 0x80:
            if (ch == 0x5C and escape_backslash) or ch < 0x20:
                out += octal_escape(ch).encode("ascii")
            else:
                out.append(ch)
            i += 1
            continue
        length = _sequence_length(raw, i)
        if length:
            out += raw[i : i + length]
            i += length
            continue
        if escape_bad_utf8:
            out += octal_escape(ch).encode("ascii")
        elif validate:
            raise BadUnicode(raw)
        else:
            out.append(ch)
        i += 1
    return bytes(out)


def looks_like_utf16(data: BytesLike) -> tuple[bool, bool]:
    """Guess whether data is UTF-16; return ``(is_utf16, little_endian)``."""
    raw = _as_bytes(data)
    if raw[:2] == b"\xff\xfe":
        return True, True
    if raw[:2] == b"\xfe\xff":
        return True, False
    even = raw[0 : len(raw) - len(raw) % 2 : 2]
    odd = raw[1::2]
    even_nulls = even.count(0)
    odd_nulls = odd.count(0)
    if even_nulls == 0 and odd_nulls > 1:
        return True, True
    if odd_nulls == 0 and even_nulls > 1:
        return True, False
    return False, False


def _units_to_str(units: Iterable[int]) -> str:
    """Decode UTF-16 code units strictly, raising InvalidUTF16 on bad surrogates."""
    chars: list[str] = []
    it = iter(units)
    for unit in it:
        unit &= 0xFFFF
        if 0xD800 <= unit <= 0xDBFF:
            trail = next(it, None)
            if trail is None:
                raise InvalidUTF16(unit)
            trail &= 0xFFFF
            if not 0xDC00 <= trail <= 0xDFFF:
                raise InvalidUTF16(trail)
            chars.append(chr(0x10000 + ((unit - 0xD800) << 10) + (trail - 0xDC00)))
        elif 0xDC00 <= unit <= 0xDFFF:
            raise InvalidUTF16(unit)
        else:
            chars.append(chr(unit))
    return "".join(chars)


def convert_utf16_to_utf8(data: BytesLike, little_endian: Optional[bool] = None) -> str:
    """Decode UTF-16 bytes and drop any NUL characters.

    When ``little_endian`` is None the byte order is guessed, and InvalidUTF16
    is raised if the data does not look like UTF-16.
    """
    raw = _as_bytes(data)
    if little_endian is None:
        is_utf16, little_endian = looks_like_utf16(raw)
        if not is_utf16:
            raise InvalidUTF16(0)
    if len(raw) % 2:
        raw += b"\x00"
    fmt = "<" if little_endian else ">"
    units = [u for (u,) in struct.iter_unpack(fmt + "H", raw)]
    return _units_to_str(units).replace("\x00", "")


def make_utf8(data: BytesLike) -> str:
    """Return valid, escaped UTF-8 text from UTF-8 or UTF-16 input."""
    try:
        return convert_utf16_to_utf8(data)
    except InvalidUTF16:
        return validate_or_escape_utf8(data, True, True, True).decode("utf-8")


def convert_utf16_to_utf32(units: Iterable[int]) -> str:
    """Decode UTF-16 code units, replacing unpaired surrogates with U+FFFD."""
    seq = [u & 0xFFFF for u in units]
    out: list[str] = []
    i = 0
    while i < len(seq):
        uc = seq[i]
        if not 0xD800 <= uc <= 0xDFFF:
            out.append(chr(uc))
        elif uc <= 0xDBFF and i + 1 < len(seq) and 0xDC00 <= seq[i + 1] <= 0xDFFF:
            i += 1
            out.append(chr(0x10000 + ((uc - 0xD800) << 10) + (seq[i] - 0xDC00)))
        else:
            out.append(chr(REPLACEMENT_CHARACTER))
        i += 1
    return "".join(out)


def _code_points(codepoints: Union[str, Iterable[int]]) -> list[int]:
    if isinstance(codepoints, str):
        return [ord(c) for c in codepoints]
    return list(codepoints)


def convert_utf32_to_utf16(codepoints: Union[str, Iterable[int]]) -> list[int]:
    """Encode code points as UTF-16 units; invalid ones become U+FFFD."""
    result: list[int] = []
    for ch in _code_points(codepoints):
        if ch < 0 or ch > 0x10FFFF or 0xD800 <= ch <= 0xDFFF:
            result.append(REPLACEMENT_CHARACTER)
        elif ch < 0x10000:
            result.append(ch)
        else:
            result.append((ch - 0x10000) // 0x400 + 0xD800)
            result.append((ch - 0x10000) % 0x400 + 0xDC00)
    return result


def utf32_lowercase(codepoints: str) -> str:
    """Lowercase ASCII letters only, leaving all other code points alone."""
    return "".join(chr(ord(c) + 32) if "A" <= c <= "Z" else c for c in codepoints)


def utf32_extract_numeric(codepoints: str) -> str:
    """Keep only the decimal digits 0-9."""
    return "".join(c for c in codepoints if "0" <= c <= "9")


def convert_utf8_to_utf16(data: BytesLike) -> list[int]:
    """Encode UTF-8 data as UTF-16 code units; raises ValueError on bad UTF-8."""
    text = _as_bytes(data).decode("utf-8")
    raw = text.encode("utf-16-le")
    return [u for (u,) in struct.iter_unpack("<H", raw)]


def convert_utf8_to_utf32(data: BytesLike) -> str:
    """Decode UTF-8 data; raises ValueError on bad UTF-8."""
    return _as_bytes(data).decode("utf-8")


def convert_utf32_to_utf8(codepoints: Union[str, Iterable[int]]) -> bytes:
    """Encode code points as UTF-8; raises ValueError on invalid code points."""
    text = codepoints if isinstance(codepoints, str) else "".join(map(chr, codepoints))
    return text.encode("utf-8")


def safe_utf16to8(units: Iterable[int]) -> bytes:
    """Encode UTF-16 units as UTF-8, or return empty bytes if they are invalid."""
    try:
        return _units_to_str(units).encode("utf-8")
    except InvalidUTF16:
        return b""


def safe_utf8to16(data: BytesLike) -> list[int]:
    """Convert UTF-8 to UTF-16 units, or return an empty list if it is invalid."""
    try:
        return convert_utf8_to_utf16(data)
    except UnicodeDecodeError:
        return []