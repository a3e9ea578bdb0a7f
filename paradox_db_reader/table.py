from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .block import DataBlock, Record, block_offset
from .codec import (
    DEFAULT_ENCODING,
    HEADER_ENCODING,
    TextDecoder,
    encoding_for_code_page,
    make_text_decoder,
)
from .constants import FileType, file_type_of
from .header import Header, decode_header
from .progress import Progress, ProgressCallback
from .query import match_record, project, sort_records
from .schema import (
    FieldDescriptor,
    effective_field_count,
    read_field_descriptors,
    read_field_names,
    read_table_name,
)
from .storage import ByteStream, FileStorage


class Table:
    """
    A Paradox table (or index) file decoded into memory.

    Everything is read once in the constructor: header, field descriptors,
    table and field names, then every data block. Any decode failure aborts
    construction; there is no partially loaded table.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        *,
        data: Optional[bytes] = None,
        encoding: Optional[str] = None,
        text_decoder: Optional[TextDecoder] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        if (path is None) == (data is None):
            raise ValueError("pass exactly one of path or data")
        self.path = path
        if data is None:
            data = FileStorage(path).read_all()
        self._stream = ByteStream(data)
        self._progress = Progress(on_progress)
        self._encoding = encoding
        self._text_decoder = text_decoder
        self._blocks: List[DataBlock] = []
        self._dataset: List[Optional[Record]] = []
        self._open()

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs: Any) -> "Table":
        return cls(data=data, **kwargs)

    def _open(self) -> None:
        self._progress.emit("open.start", 0, self.path or "<bytes>")

        # 1. header
        self._stream.seek(0)
        self._header = decode_header(self._stream)
        self._progress.emit("open.header", 100)

        # 2. field descriptors
        self._encoding = self._resolve_encoding()
        decode_name = make_text_decoder(self._encoding)
        self._decode_text = self._text_decoder or decode_name
        self._types = read_field_descriptors(self._stream, self._header)

        # 3. table name, 4. field names
        self._table_name = read_table_name(self._stream, self._header, decode_name)
        self._names = read_field_names(self._stream, self._header, decode_name)
        self._columns = self._column_keys()
        self._progress.emit("open.fields", 100, f"{len(self._types)} fields")

        # 5. data blocks
        self._scan_blocks()
        self._progress.emit("open.done", 100, f"{len(self._dataset)} records")

    def _resolve_encoding(self) -> str:
        # Alpha values may go through text_decoder; names always use this codec
        if self._encoding is None:
            return DEFAULT_ENCODING
        if self._encoding == HEADER_ENCODING:
            return encoding_for_code_page(self._header.get("dosCodePage")) or DEFAULT_ENCODING
        return self._encoding

    def _column_keys(self) -> List[str]:
        # Index files carry no names; their columns are keyed by position
        keys = list(self._names)
        for i in range(len(keys), len(self._types)):
            keys.append(f"field_{i + 1}")
        return keys

    def _scan_blocks(self) -> None:
        total = self._header["fileBlocks"]
        self._progress.emit("open.blocks", 0, f"block 0/{total}")
        for i in range(total):
            self._stream.seek(block_offset(self._header, i))
            block = DataBlock(self._stream, self._header, self._types, self._columns, self._decode_text)
            self._blocks.append(block)
            self._dataset.extend(block.records())
            self._progress.step("open.blocks", i + 1, total, f"block {i + 1}/{total}")

    # ----- Header / schema -----

    @property
    def header(self) -> Header:
        return self._header

    def header_value(self, name: str) -> Any:
        return self._header[name]

    @property
    def file_type(self) -> Union[FileType, int]:
        return file_type_of(self._header["fileType"])

    @property
    def field_count(self) -> int:
        return effective_field_count(self._header)

    @property
    def encoding(self) -> str:
        """Codec used for the table name and field names (and Alpha values unless text_decoder is set)."""
        return self._encoding

    @property
    def types(self) -> List[FieldDescriptor]:
        return list(self._types)

    def type_at(self, index: int) -> Optional[FieldDescriptor]:
        if 0 <= index < len(self._types):
            return self._types[index]
        return None

    @property
    def names(self) -> List[str]:
        return list(self._names)

    def name_at(self, index: int) -> Optional[str]:
        if 0 <= index < len(self._names):
            return self._names[index]
        return None

    @property
    def table_name(self) -> str:
        return self._table_name

    def describe(self) -> List[Dict[str, Any]]:
        return [
            {"name": name, "type": desc.type_label, "size": desc.size}
            for name, desc in zip(self._columns, self._types)
        ]

    # ----- Data -----

    @property
    def blocks(self) -> List[DataBlock]:
        return list(self._blocks)

    @property
    def dataset(self) -> List[Optional[Record]]:
        return list(self._dataset)

    def __len__(self) -> int:
        return len(self._dataset)

    def __iter__(self) -> Iterator[Optional[Record]]:
        return iter(self._dataset)

    def row(self, index: int) -> Optional[Record]:
        return self._dataset[index]

    def column(self, name: str) -> List[Any]:
        """Values of one column across all records, NULL where a record lacks it."""
        return [rec.get(name) if rec is not None else None for rec in self._dataset]

    def find(
        self,
        query: Dict[str, Any],
        *,
        limit: Optional[int] = None,
        skip: int = 0,
        order_by: Optional[Sequence[Tuple[str, str]]] = None,
        fields: Optional[Sequence[str]] = None,
    ) -> Iterable[Optional[Record]]:
        # Full scan; blocks are already decoded
        recs = [rec for rec in self._dataset if match_record(rec, query)]

        if order_by:
            recs = sort_records(recs, order_by)

        start = max(0, int(skip)) if isinstance(skip, int) else 0
        if limit is None:
            selected = recs[start:]
        else:
            selected = recs[start:start + int(limit)]
        for r in selected:
            yield project(r, fields)

    def __repr__(self) -> str:
        label = self.file_type.label if isinstance(self.file_type, FileType) else self.file_type
        return f"Table(name={self._table_name!r}, type={label}, fields={self.field_count}, records={len(self)})"
