from __future__ import annotations

import pytest

from faceeditor.profiles.codec import (
    PALETTE,
    UNKNOWN_COLOR,
    Color,
    EmbeddedNulError,
    color_name,
    decode_text,
    display_length,
    encode_text,
    is_known_color,
    is_too_long,
    resolve_color,
)


@pytest.mark.parametrize("text", ["", ":)", "abc", "héé", "日本", "😀😀", "a b\tc"])
def test_encoded_text_decodes_back(text):
    assert decode_text(encode_text(text)) == text


def test_encode_text_appends_single_nul():
    assert encode_text(":)") == b":)\x00"
    assert encode_text("") == b"\x00"
    assert encode_text("é") == b"\xc3\xa9\x00"


def test_encode_text_rejects_embedded_nul():
    with pytest.raises(EmbeddedNulError):
        encode_text("a\x00b")


def test_embedded_nul_error_is_value_error():
    assert issubclass(EmbeddedNulError, ValueError)


def test_decode_text_stops_at_first_nul():
    assert decode_text(b"hi\x00garbage") == "hi"
    assert decode_text(b"hi\x00\x00\x00") == "hi"
    assert decode_text(b"\x00hi") == ""


def test_decode_text_without_nul_uses_whole_input():
    assert decode_text(b"abc") == "abc"
    assert decode_text(b"") == ""


def test_decode_text_ignores_invalid_bytes_after_nul():
    assert decode_text(b"ok\x00\xff\xfe") == "ok"


def test_decode_text_rejects_invalid_utf8_before_nul():
    with pytest.raises(UnicodeDecodeError):
        decode_text(b"\xff\xfe\x00")
    with pytest.raises(UnicodeDecodeError):
        decode_text(b"ab\xc3")


def test_display_length_counts_utf16_units():
    assert display_length("") == 0
    assert display_length("abc") == 3
    assert display_length("é") == 1
    assert display_length("😀") == 2
    assert display_length("😀😀") == 4


def test_display_length_is_independent_of_utf8_size():
    assert display_length("日本") == 2
    assert len(encode_text("日本")) == 7


@pytest.mark.parametrize(
    "text, expected",
    [("", False), ("abc", False), (":)", False), ("abcd", True), ("😀😀", True), ("😀a", False)],
)
def test_is_too_long(text, expected):
    assert is_too_long(text) is expected


def test_resolve_color_palette():
    assert resolve_color(0) == Color(250, 189, 0)
    assert resolve_color(1) == Color(254, 134, 37)
    assert resolve_color(2) == Color(254, 88, 68)
    assert resolve_color(3) == Color(254, 131, 238)
    assert resolve_color(4) == Color(76, 177, 254)
    assert resolve_color(5) == Color(120, 235, 198)
    assert resolve_color(6) == Color(141, 228, 28)


@pytest.mark.parametrize("index", [7, 42, 255, 2**31, 2**32 - 1])
def test_resolve_color_unknown_index_is_black(index):
    assert resolve_color(index) == UNKNOWN_COLOR == (0, 0, 0)
    assert not is_known_color(index)
    assert color_name(index) is None


def test_palette_entries_are_indexed_in_order():
    assert [entry.index for entry in PALETTE] == list(range(7))
    assert [entry.name for entry in PALETTE] == [
        "Yellow",
        "Orange",
        "Red",
        "Pink",
        "Blue",
        "Teal",
        "Green",
    ]
    assert color_name(4) == "Blue"


def test_color_renderings():
    color = resolve_color(0)
    assert color.hex == "#fabd00"
    assert color.css() == "rgb(250, 189, 0)"
    assert UNKNOWN_COLOR.hex == "#000000"
