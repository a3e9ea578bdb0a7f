from __future__ import annotations
import struct
from typing import Optional

from .errors import DecodeError

# Fixed-width little-endian formats used by the header and block prefixes
U8  = "B"
I16 = "<h"
U16 = "<H"
I32 = "<i"
U32 = "<I"


class FileStorage:
    """
    Low-level file access: loads the whole Paradox file into memory.
    Tables are read-only, so the buffer is never written back.
    """
    def __init__(self, path: str) -> None:
        self.path = path

    def read_all(self) -> bytes:
        with open(self.path, "rb") as fh:
            return fh.read()

    def open_stream(self) -> "ByteStream":
        return ByteStream(self.read_all())


class ByteStream:
    """
    Positionable reader over an immutable byte buffer.
    Every read starts at the current position and advances it.
    """
    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self._data = bytes(data)
        self._pos = 0
        self.seek(offset)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._data) - self._pos

    def seek(self, offset: int) -> "ByteStream":
        if offset < 0 or offset > len(self._data):
            raise DecodeError(f"seek to offset {offset} outside buffer of {len(self._data)} bytes")
        self._pos = offset
        return self

    def skip(self, count: int) -> "ByteStream":
        if count < 0:
            raise DecodeError(f"negative skip of {count} bytes at offset {self._pos}")
        return self.seek(self._pos + count)

    def peek(self, count: int) -> bytes:
        """Return the next `count` bytes without moving the position."""
        end = self._pos + count
        if count < 0 or end > len(self._data):
            raise DecodeError(
                f"read of {count} bytes at offset {self._pos} "
                f"exceeds buffer of {len(self._data)} bytes"
            )
        return self._data[self._pos:end]

    def read_bytes(self, count: int) -> bytes:
        chunk = self.peek(count)
        self._pos += count
        return chunk

    def read(self, fmt: str) -> int:
        size = struct.calcsize(fmt)
        return struct.unpack(fmt, self.read_bytes(size))[0]

    def read_byte(self) -> int:
        return self.read(U8)

    def read_int16(self) -> int:
        return self.read(I16)

    def read_uint16(self) -> int:
        return self.read(U16)

    def read_int32(self) -> int:
        return self.read(I32)

    def read_uint32(self) -> int:
        return self.read(U32)

    def read_cstring(self, limit: Optional[int] = None) -> bytes:
        """
        Read bytes up to a zero terminator. The terminator is consumed but not returned.
        """
        start = self._pos
        end = len(self._data) if limit is None else min(len(self._data), start + limit)
        null = self._data.find(b"\x00", start, end)
        if null < 0:
            raise DecodeError(f"no string terminator found after offset {start}")
        self._pos = null + 1
        return self._data[start:null]
