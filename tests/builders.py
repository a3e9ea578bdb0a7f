import struct

from paradox_db_reader.codec import encode_signed
from paradox_db_reader.constants import FieldType, FileType, INTEGER_WIDTHS
from paradox_db_reader.header import BASE_SCHEMA, V4_SCHEMA, needs_v4_extension


def pack_schema(schema, values):
    out = b""
    for key, spec in schema:
        if isinstance(spec, int):
            out += bytes(values.get(key, b"\x00" * spec)).ljust(spec, b"\x00")
        else:
            out += struct.pack(spec, values.get(key, 0))
    return out


def encode_value(ftype, size, value, encoding):
    if value is None:
        return b"\x00" * size
    if isinstance(value, bytes):
        return value.ljust(size, b"\x00")
    if ftype == FieldType.ALPHA:
        return value.encode(encoding).ljust(size, b"\x00")
    return encode_signed(value, INTEGER_WIDTHS[ftype])


def build_paradox(
    fields,
    blocks=(),
    *,
    file_type=FileType.DB_FILE_INDEXED,
    version=0x0C,
    table_name="TEST.DB",
    max_table_size=1,
    encoding="gbk",
    header_overrides=None,
):
    """
    Assemble a Paradox file in memory.

    fields: [(FieldType, size, name), ...]
    blocks: [[row, ...], ...] where each row is a list of values (None, int, str or raw bytes)
    """
    is_table = file_type in (FileType.DB_FILE_INDEXED, FileType.DB_FILE_NOT_INDEXED)
    record_size = sum(size for _, size, _ in fields)
    if file_type == FileType.PX_FILE:
        record_size += 6
    block_size = max_table_size * 1024

    # Everything after the fixed header
    tail = b"".join(bytes([int(t), size]) for t, size, _ in fields)
    tail += struct.pack("<i", 0)
    if is_table:
        tail += b"\x00" * (4 * len(fields))
    name_size = 261 if version >= 0x0C else 79
    tail += table_name.encode("ascii").ljust(name_size, b"\x00")
    if is_table:
        tail += b"".join(name.encode(encoding) + b"\x00" for _, _, name in fields)

    values = {
        "recordSize": record_size,
        "fileType": int(file_type),
        "maxTableSize": max_table_size,
        "recordCount": sum(len(b) for b in blocks),
        "fileBlocks": len(blocks),
        "firstBlock": 1 if blocks else 0,
        "lastBlock": len(blocks),
        "fieldCount": len(fields),
        "fileVersionID": version,
    }
    values.update(header_overrides or {})
    with_v4 = needs_v4_extension(values["fileType"], values["fileVersionID"])
    fixed_size = 0x78 if with_v4 else 0x58
    header_size = -(-(fixed_size + len(tail)) // 1024) * 1024
    values.setdefault("headerSize", header_size)

    head = pack_schema(BASE_SCHEMA, values)
    if with_v4:
        head += pack_schema(V4_SCHEMA, values)
    head = (head + tail).ljust(values["headerSize"], b"\x00")

    body = b""
    for i, rows in enumerate(blocks):
        nxt = i + 2 if i + 1 < len(blocks) else 0
        chunk = struct.pack("<HHh", nxt, i + 1, (len(rows) - 1) * record_size)
        for row in rows:
            raw = b"".join(
                encode_value(t, size, v, encoding) for (t, size, _), v in zip(fields, row)
            )
            chunk += raw.ljust(record_size, b"\x00")
        body += chunk.ljust(block_size, b"\x00")
    return head + body


PEOPLE_FIELDS = [
    (FieldType.AUTOINC, 4, "ID"),
    (FieldType.ALPHA, 12, "Name"),
    (FieldType.SHORT, 2, "Level"),
    (FieldType.LONG, 4, "Price"),
]


