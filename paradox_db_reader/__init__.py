from .block import DataBlock, block_offset
from .codec import decode_signed, encode_signed, make_text_decoder
from .constants import FieldType, FileType
from .errors import DecodeError, HeaderKeyError, ParadoxError
from .header import Header, decode_header
from .schema import FieldDescriptor
from .storage import ByteStream, FileStorage
from .table import Table

__all__ = [
    "ByteStream",
    "DataBlock",
    "DecodeError",
    "FieldDescriptor",
    "FieldType",
    "FileStorage",
    "FileType",
    "Header",
    "HeaderKeyError",
    "ParadoxError",
    "Table",
    "block_offset",
    "decode_header",
    "decode_signed",
    "encode_signed",
    "make_text_decoder",
]
