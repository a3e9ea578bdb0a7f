from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

from .codec import TextDecoder, decode_signed, is_empty
from .constants import BLOCK_PREFIX_SIZE, BLOCK_UNIT, INTEGER_WIDTHS, FieldType
from .errors import DecodeError
from .header import Header
from .schema import FieldDescriptor
from .storage import ByteStream

Record = Dict[str, Any]


def block_offset(header: Header, index: int) -> int:
    """File offset of data block `index` (0-based, in file order)."""
    return index * header["maxTableSize"] * BLOCK_UNIT + header["headerSize"]


class DataBlock:
    """
    One fixed-size data block: a 6-byte prefix followed by packed records.
    Constructing a block reads the prefix at the stream's current position.
    """

    def __init__(
        self,
        stream: ByteStream,
        header: Header,
        descriptors: Sequence[FieldDescriptor],
        columns: Sequence[str],
        decode_text: TextDecoder,
    ) -> None:
        self._stream = stream
        self._descriptors = list(descriptors)
        self._columns = list(columns)
        self._decode_text = decode_text
        self._record_size: int = header["recordSize"]
        self._cache: Optional[List[Optional[Record]]] = None

        start = stream.position
        if stream.remaining < BLOCK_PREFIX_SIZE:
            raise DecodeError(f"data block at offset {start} is past the end of file")
        self.next_block: int = stream.read_uint16()
        self.block_number: int = stream.read_uint16()
        self.add_data_size: int = stream.read_int16()
        if self._record_size <= 0:
            raise DecodeError(f"invalid record size {self._record_size} for block at offset {start}")
        # Empty blocks store -recordSize here
        self.record_count: int = max(0, self.add_data_size // self._record_size + 1)
        self.offset: int = stream.position

    def __len__(self) -> int:
        return self.record_count

    def __repr__(self) -> str:
        return (
            f"DataBlock(block_number={self.block_number}, next_block={self.next_block}, "
            f"records={self.record_count}, offset={self.offset})"
        )

    def get(self, row: int) -> Optional[Record]:
        records = self.records()
        if 0 <= row < len(records):
            return records[row]
        return None

    def records(self) -> List[Optional[Record]]:
        if self._cache is None:
            self._cache = [self._read_record(row) for row in range(self.record_count)]
        return self._cache

    def _read_record(self, row: int) -> Optional[Record]:
        stream = self._stream
        stream.seek(self.offset + row * self._record_size)
        if not self._descriptors:
            return None
        rec: Record = {}
        for name, desc in zip(self._columns, self._descriptors):
            # Peek first: an all-zero column is NULL whatever its type; step over it
            # so the columns after it are read from their own offsets
            if is_empty(stream.peek(desc.size)):
                rec[name] = None
                stream.skip(desc.size)
                continue
            rec[name] = self._read_value(desc)
        return rec

    def _read_value(self, desc: FieldDescriptor) -> Any:
        raw = self._stream.read_bytes(desc.size)
        if not isinstance(desc.type, FieldType) or not desc.type.supported:
            return None
        if desc.type == FieldType.ALPHA:
            return self._decode_text(raw)
        return decode_signed(raw, INTEGER_WIDTHS[desc.type])
