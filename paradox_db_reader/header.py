from __future__ import annotations
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Tuple, Union

from .constants import V4_HEADER_FILE_TYPES, V4_MIN_VERSION
from .errors import HeaderKeyError
from .storage import ByteStream, I16, I32, U16, U8

# A field is either a struct format (scalar) or a byte count (raw span kept as bytes)
FieldSpec = Union[str, int]

# Header layout at offset 0x00..0x57, in file order
BASE_SCHEMA: List[Tuple[str, FieldSpec]] = [
    ("recordSize",            U16),
    ("headerSize",            U16),
    ("fileType",              U8),
    ("maxTableSize",          U8),
    ("recordCount",           I32),
    ("nextBlock",             U16),
    ("fileBlocks",            U16),
    ("firstBlock",            U16),
    ("lastBlock",             U16),
    ("reserved_12",           U16),
    ("modifiedFlags1",        U8),
    ("indexFieldNumber",      U8),
    ("primaryIndexWorkspace", I32),
    ("reserved_1a",           I32),
    ("pxRootBlockId",         U16),
    ("pxLevelCount",          U8),
    ("fieldCount",            I16),
    ("primaryKeyFields",      I16),
    ("encryption1",           I32),
    ("sortOrder",             U8),
    ("modifiedFlags2",        U8),
    ("reserved_2b",           2),
    ("changeCount1",          U8),
    ("changeCount2",          U8),
    ("reserved_2f",           U8),
    ("tableNamePtrPtr",       I32),
    ("fldInfoPtr",            I32),
    ("writeProtected",        U8),
    ("fileVersionID",         U8),
    ("maxBlocks",             U16),
    ("reserved_3c",           U8),
    ("auxPasswords",          U8),
    ("reserved_3e",           2),
    ("cryptInfoStartPtr",     I32),
    ("cryptInfoEndPtr",       I32),
    ("reserved_48",           U8),
    ("autoIncVal",            I32),
    ("reserved_4d",           2),
    ("indexUpdateRequired",   U8),
    ("reserved_50",           5),
    ("refIntegrity",          U8),
    ("reserved_56",           2),
]

# Paradox 4.0+ extension at offset 0x58..0x77
V4_SCHEMA: List[Tuple[str, FieldSpec]] = [
    ("fileVerID2",         I16),
    ("fileVerID3",         I16),
    ("encryption2",        I32),
    ("fileUpdateTime",     I32),
    ("hiFieldID",          U16),
    ("hiFieldIDinfo",      U16),
    ("sometimesNumFields", I16),
    ("dosCodePage",        U16),
    ("reserved_6c",        4),
    ("changeCount4",       I16),
    ("reserved_72",        6),
]


class Header(Mapping):
    """
    Read-only, ordered view of the decoded file header.
    Unknown keys raise HeaderKeyError instead of returning a default.
    """
    __slots__ = ("_fields",)

    def __init__(self, fields: Dict[str, Any]) -> None:
        self._fields = dict(fields)

    def __getitem__(self, name: str) -> Any:
        try:
            return self._fields[name]
        except KeyError:
            raise HeaderKeyError(f"header key not found: {name!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Header({self._fields!r})"

    @property
    def has_v4_extension(self) -> bool:
        return "fileVerID2" in self._fields


def _load(stream: ByteStream, schema: List[Tuple[str, FieldSpec]]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, spec in schema:
        if isinstance(spec, int):
            out[key] = stream.read_bytes(spec)
        else:
            out[key] = stream.read(spec)
    return out


def needs_v4_extension(file_type: int, version: int) -> bool:
    return file_type in V4_HEADER_FILE_TYPES and version >= V4_MIN_VERSION


def decode_header(stream: ByteStream) -> Header:
    """
    Decode the header starting at the current position (normally offset 0).
    The stream is left right after the last header field read.
    """
    fields = _load(stream, BASE_SCHEMA)
    if needs_v4_extension(fields["fileType"], fields["fileVersionID"]):
        fields.update(_load(stream, V4_SCHEMA))
    return Header(fields)
