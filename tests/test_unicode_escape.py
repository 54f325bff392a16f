import itertools

import pytest

from be20kit.unicode_escape import (
    BadUnicode,
    InvalidUTF16,
    convert_utf16_to_utf32,
    convert_utf16_to_utf8,
    convert_utf32_to_utf16,
    convert_utf32_to_utf8,
    convert_utf8_to_utf16,
    convert_utf8_to_utf32,
    looks_like_utf16,
    make_utf8,
    octal_escape,
    safe_utf16to8,
    safe_utf8to16,
    utf32_extract_numeric,
    utf32_lowercase,
    utf8cont,
    valid_utf8codepoint,
    validate_or_escape_utf8,
)

U1F601 = b"\xf0\x9f\x98\x81"


def test_octal_escape():
    assert octal_escape(ord("a")) == "\\141"
    assert octal_escape(0) == "\\000"


def test_utf8cont():
    assert utf8cont(ord("a")) is False
    assert utf8cont(U1F601[0]) is False
    assert utf8cont(U1F601[1]) is True
    assert utf8cont(U1F601[2]) is True
    assert utf8cont(U1F601[3]) is True


def test_valid_codepoints():
    assert valid_utf8codepoint(0x01) is True
    assert valid_utf8codepoint(0xFFFF) is False
    assert valid_utf8codepoint(0xFFFE) is False
    assert valid_utf8codepoint(0xD800) is False
    assert valid_utf8codepoint(0x1F601) is True
    assert valid_utf8codepoint(0x30000) is False
    assert valid_utf8codepoint(0x110000) is False


@pytest.mark.parametrize("a,b,c", list(itertools.product([False, True], repeat=3)))
def test_hello_all_combinations(a, b, c):
    assert validate_or_escape_utf8(b"hello", a, b, c) == b"hello"


def test_backslash_escape():
    assert validate_or_escape_utf8(b"backslash=\\", False, True, False) == b"backslash=\\134"


def test_round_trip_utf32():
    s = "我想玩"
    assert convert_utf8_to_utf32(convert_utf32_to_utf8(s)) == s


def test_control_characters():
    test1 = b"a\x01b"
    assert validate_or_escape_utf8(test1, True, False, False) == b"a\\001b"
    assert validate_or_escape_utf8(test1, True, True, False) == b"a\\001b"


def test_valid_multibyte_passes():
    assert validate_or_escape_utf8("é我".encode(), True, True, True) == "é我".encode()


def test_bad_byte_escaped():
    assert validate_or_escape_utf8(b"a\xffb", True, False, False) == b"a\\377b"


def test_four_byte_sequence_escaped():
    assert validate_or_escape_utf8(U1F601, True, False, False) == b"\\360\\237\\230\\201"


def test_validate_raises():
    with pytest.raises(BadUnicode):
        validate_or_escape_utf8(b"a\xffb", False, False, True)


def test_unicode_detection_little_endian():
    utf8 = "http://www.example.com/docs/consumer_rights.pdf"
    data = utf8.encode("utf-16-le")
    assert len(data) == 2 * len(utf8)
    assert looks_like_utf16(data) == (True, True)


def test_unicode_detection_big_endian_and_boms():
    assert looks_like_utf16("hello".encode("utf-16-be")) == (True, False)
    assert looks_like_utf16(b"\xff\xfeh\x00") == (True, True)
    assert looks_like_utf16(b"\xfe\xff\x00h") == (True, False)
    assert looks_like_utf16(b"hello world")[0] is False


def test_convert_utf16_to_utf8():
    assert convert_utf16_to_utf8(b"h\x00i\x00", True) == "hi"
    assert convert_utf16_to_utf8(b"\x00h\x00i", False) == "hi"
    assert convert_utf16_to_utf8("hello".encode("utf-16-le")) == "hello"


def test_convert_utf16_not_utf16_raises():
    with pytest.raises(InvalidUTF16):
        convert_utf16_to_utf8(b"plain text")


def test_convert_utf16_lone_surrogate_raises():
    with pytest.raises(InvalidUTF16):
        convert_utf16_to_utf8(b"\x00\xd8a\x00", True)


def test_make_utf8():
    assert make_utf8(b"a\\b") == "a\\134b"
    assert make_utf8("hello".encode("utf-16-le")) == "hello"


def test_utf16_to_utf32():
    assert convert_utf16_to_utf32([0x48, 0xD83D, 0xDE01]) == "H\U0001F601"
    assert convert_utf16_to_utf32([0xD83D, 0x41]) == "\ufffdA"
    assert convert_utf16_to_utf32([0xDE01]) == "\ufffd"


def test_utf32_to_utf16():
    assert convert_utf32_to_utf16("H\U0001F601") == [0x48, 0xD83D, 0xDE01]
    assert convert_utf32_to_utf16([0x110000, 0xD800, 0x41]) == [0xFFFD, 0xFFFD, 0x41]


def test_utf16_utf32_round_trip():
    s = "我想玩\U0001F601"
    assert convert_utf16_to_utf32(convert_utf32_to_utf16(s)) == s


def test_lowercase_and_numeric():
    assert utf32_lowercase("ABC\u00c9z") == "abc\u00c9z"
    assert utf32_extract_numeric("a1b2\u0663c3") == "123"


def test_utf8_to_utf16():
    assert convert_utf8_to_utf16("A\U0001F601".encode()) == [0x41, 0xD83D, 0xDE01]
    with pytest.raises(ValueError):
        convert_utf8_to_utf16(b"\xff")


def test_safe_conversions():
    assert safe_utf16to8([0x41, 0x42]) == b"AB"
    assert safe_utf16to8([0xD800]) == b""
    assert safe_utf8to16(b"AB") == [0x41, 0x42]
    assert safe_utf8to16(b"\xff") == []