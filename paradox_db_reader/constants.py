from __future__ import annotations
from enum import IntEnum


class FileType(IntEnum):
    DB_FILE_INDEXED = 0
    PX_FILE = 1
    DB_FILE_NOT_INDEXED = 2
    XNN_FILE_NON_INC = 3
    YNN_FILE = 4
    XNN_FILE_INC = 5
    XGN_FILE_NON_INC = 6
    YGN_FILE = 7
    XGN_FILE_INC = 8

    @property
    def label(self) -> str:
        return _FILE_TYPE_LABELS[self]


_FILE_TYPE_LABELS = {
    FileType.DB_FILE_INDEXED:     "DbFileIndexed",
    FileType.PX_FILE:             "PxFile",
    FileType.DB_FILE_NOT_INDEXED: "DbFileNotIndexed",
    FileType.XNN_FILE_NON_INC:    "XnnFileNonInc",
    FileType.YNN_FILE:            "YnnFile",
    FileType.XNN_FILE_INC:        "XnnFileInc",
    FileType.XGN_FILE_NON_INC:    "XgnFileNonInc",
    FileType.YGN_FILE:            "YgnFile",
    FileType.XGN_FILE_INC:        "XgnFileInc",
}

# Files that carry field names after the table name
TABLE_FILE_TYPES = frozenset({FileType.DB_FILE_INDEXED, FileType.DB_FILE_NOT_INDEXED})

# Files whose header is followed by the 4.0+ extension block (when fileVersionID >= 5)
V4_HEADER_FILE_TYPES = frozenset({
    FileType.DB_FILE_INDEXED,
    FileType.DB_FILE_NOT_INDEXED,
    FileType.XNN_FILE_INC,
    FileType.XNN_FILE_NON_INC,
})
V4_MIN_VERSION = 5

# Table name buffer grew from 79 to 261 bytes in file version 0x0C
LONG_TABLE_NAME_VERSION = 0x0C
TABLE_NAME_SIZE_LONG = 261
TABLE_NAME_SIZE_SHORT = 79

BLOCK_UNIT = 0x0400
BLOCK_PREFIX_SIZE = 6

# Implicit trailing columns of a .PX primary index record
PX_EXTRA_FIELDS = 3


class FieldType(IntEnum):
    ALPHA = 0x01
    DATE = 0x02
    SHORT = 0x03
    LONG = 0x04
    CURRENCY = 0x05
    NUMBER = 0x06
    LOGICAL = 0x09
    MEMOBLOB = 0x0C
    BLOB = 0x0D
    FMTMEMOBLOB = 0x0E
    OLE = 0x0F
    GRAPHIC = 0x10
    TIME = 0x14
    TIMESTAMP = 0x15
    AUTOINC = 0x16
    BCD = 0x17
    BYTES = 0x18

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def supported(self) -> bool:
        return self in SUPPORTED_FIELD_TYPES


SUPPORTED_FIELD_TYPES = frozenset({
    FieldType.ALPHA,
    FieldType.SHORT,
    FieldType.LONG,
    FieldType.AUTOINC,
})

# Storage width used when decoding integer columns
INTEGER_WIDTHS = {
    FieldType.SHORT: 2,
    FieldType.LONG: 4,
    FieldType.AUTOINC: 4,
}


def file_type_of(code: int) -> "FileType | int":
    try:
        return FileType(code)
    except ValueError:
        return code


def field_type_of(code: int) -> "FieldType | int":
    try:
        return FieldType(code)
    except ValueError:
        return code
