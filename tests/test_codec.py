import pytest

from paradox_db_reader import DecodeError, decode_signed, encode_signed
from paradox_db_reader.codec import encoding_for_code_page, is_empty, make_text_decoder


@pytest.mark.parametrize("raw, expected", [
    (b"\x7f\xff", -1),
    (b"\x80\x00", 0),
    (b"\xff\xff", 32767),
    (b"\x00\x00", -32768),
    (b"\x80\x01", 1),
])
def test_decode_short(raw, expected):
    assert decode_signed(raw, 2) == expected


@pytest.mark.parametrize("raw, expected", [
    (b"\x80\x00\x00\x2a", 42),
    (b"\x7f\xff\xff\xff", -1),
    (b"\x7f\xfe\xee\x90", -70000),
    (b"\xff\xff\xff\xff", 2147483647),
])
def test_decode_long(raw, expected):
    assert decode_signed(raw, 4) == expected


def test_inverse_transform_reproduces_bytes():
    for width in (2, 4):
        for raw in (b"\x12\x34\x56\x78"[:width], b"\xff" * width, b"\x80" + b"\x00" * (width - 1)):
            assert encode_signed(decode_signed(raw, width), width) == raw


def test_encode_orders_like_numbers():
    values = [-70000, -1, 0, 1, 255, 70000]
    encoded = [encode_signed(v, 4) for v in values]
    assert encoded == sorted(encoded)


def test_bad_width_and_short_input():
    with pytest.raises(DecodeError):
        decode_signed(b"\x80", 2)
    with pytest.raises(DecodeError):
        decode_signed(b"\x80\x00\x00", 3)
    with pytest.raises(DecodeError):
        encode_signed(1 << 20, 2)


def test_is_empty():
    assert is_empty(b"\x00\x00\x00")
    assert not is_empty(b"\x00\x01")


def test_text_decoder_strips_padding():
    decode = make_text_decoder("gbk")
    assert decode("宝剑".encode("gbk") + b"\x00\x00") == "宝剑"
    assert make_text_decoder("cp1252")(b"caf\xe9\x00") == "café"


def test_encoding_for_code_page():
    assert encoding_for_code_page(1252) == "cp1252"
    assert encoding_for_code_page(0) is None
    assert encoding_for_code_page(None) is None
    assert encoding_for_code_page(9999) is None
