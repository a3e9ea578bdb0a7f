from __future__ import annotations
from dataclasses import dataclass
from typing import List, Union

from .codec import TextDecoder
from .constants import (
    FieldType,
    FileType,
    LONG_TABLE_NAME_VERSION,
    PX_EXTRA_FIELDS,
    TABLE_FILE_TYPES,
    TABLE_NAME_SIZE_LONG,
    TABLE_NAME_SIZE_SHORT,
    field_type_of,
)
from .errors import DecodeError
from .header import Header
from .storage import ByteStream


@dataclass(frozen=True)
class FieldDescriptor:
    type: Union[FieldType, int]
    size: int

    @property
    def type_label(self) -> str:
        if isinstance(self.type, FieldType):
            return self.type.label
        return f"0x{self.type:02X}"


# .PX records end with three implicit 2-byte index columns
PX_EXTRA_DESCRIPTOR = FieldDescriptor(FieldType.SHORT, 2)


def declared_field_count(header: Header) -> int:
    count = header["fieldCount"]
    if count < 0:
        raise DecodeError(f"negative field count {count} in header")
    return count


def effective_field_count(header: Header) -> int:
    """Number of columns per record; .PX files add the implicit index columns."""
    declared = declared_field_count(header)
    if header["fileType"] == FileType.PX_FILE:
        return declared + PX_EXTRA_FIELDS
    return declared


def is_table_file(header: Header) -> bool:
    return header["fileType"] in TABLE_FILE_TYPES


def read_field_descriptors(stream: ByteStream, header: Header) -> List[FieldDescriptor]:
    descriptors: List[FieldDescriptor] = []
    for _ in range(declared_field_count(header)):
        code = stream.read_byte()
        size = stream.read_byte()
        descriptors.append(FieldDescriptor(field_type_of(code), size))
    if header["fileType"] == FileType.PX_FILE:
        descriptors.extend([PX_EXTRA_DESCRIPTOR] * PX_EXTRA_FIELDS)
    return descriptors


def table_name_size(header: Header) -> int:
    if header["fileVersionID"] >= LONG_TABLE_NAME_VERSION:
        return TABLE_NAME_SIZE_LONG
    return TABLE_NAME_SIZE_SHORT


def read_table_name(stream: ByteStream, header: Header, decode: TextDecoder) -> str:
    """
    Skip the in-memory pointers the engine persisted (table name pointer, then
    one per field name for table files) and read the fixed-size name buffer.
    """
    stream.read_int32()
    if is_table_file(header):
        stream.skip(4 * declared_field_count(header))
    raw = stream.read_bytes(table_name_size(header))
    # Buffer is zero padded; anything after the first NUL is leftover memory
    raw = raw.split(b"\x00", 1)[0]
    return decode(raw).strip()


def read_field_names(stream: ByteStream, header: Header, decode: TextDecoder) -> List[str]:
    if not is_table_file(header):
        return []
    return [decode(stream.read_cstring()) for _ in range(declared_field_count(header))]
