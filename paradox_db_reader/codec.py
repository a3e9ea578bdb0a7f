from __future__ import annotations
import codecs
import struct
from typing import Callable, Optional

from .errors import DecodeError

TextDecoder = Callable[[bytes], str]

# Source charset of text columns and names unless the caller picks another
DEFAULT_ENCODING = "gbk"

# Pass as encoding= to use the DOS code page recorded in the 4.0+ header
HEADER_ENCODING = "header"

_SIGNED_FORMATS = {2: "<h", 4: "<i"}


def is_empty(raw: bytes) -> bool:
    """A column whose bytes are all zero holds no value."""
    return not any(raw)


def decode_signed(raw: bytes, width: int) -> int:
    """
    Decode a Paradox integer column.

    Integers are stored big-endian with the sign bit inverted so that
    unsigned byte comparison orders them numerically. Flip the top bit of
    the first byte, reverse to little-endian and unpack `width` bytes.
    """
    fmt = _SIGNED_FORMATS.get(width)
    if fmt is None:
        raise DecodeError(f"unsupported integer width: {width}")
    if len(raw) < width:
        raise DecodeError(f"integer column needs {width} bytes, got {len(raw)}")
    buf = bytearray(raw)
    buf[0] ^= 0x80
    buf.reverse()
    return struct.unpack_from(fmt, bytes(buf))[0]


def encode_signed(value: int, width: int) -> bytes:
    """Inverse of decode_signed: produce the on-disk bytes for `value`."""
    fmt = _SIGNED_FORMATS.get(width)
    if fmt is None:
        raise DecodeError(f"unsupported integer width: {width}")
    try:
        buf = bytearray(struct.pack(fmt, value))
    except struct.error as e:
        raise DecodeError(f"value {value} does not fit in {width} bytes") from e
    buf.reverse()
    buf[0] ^= 0x80
    return bytes(buf)


def encoding_for_code_page(code_page: Optional[int]) -> Optional[str]:
    """Map a DOS code page number to a Python codec name, if Python knows it."""
    if not code_page:
        return None
    name = f"cp{code_page}"
    try:
        codecs.lookup(name)
    except LookupError:
        return None
    return name


def make_text_decoder(encoding: str = DEFAULT_ENCODING) -> TextDecoder:
    """
    Build the bytes -> str converter for Alpha columns and names.
    Trailing NUL padding is dropped; undecodable bytes are replaced.
    """
    codecs.lookup(encoding)

    def decode(raw: bytes) -> str:
        return raw.rstrip(b"\x00").decode(encoding, errors="replace")

    return decode
