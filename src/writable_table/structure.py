"""
Structural codec for Table contents.

Serializes a Table's columns and rows (but not its print configuration)
into a compact little-endian byte layout:

    int32 column_count
      per column: int32 name_len, name (UTF-8), uint8 type tag
    int32 row_count
      per row, per column: uint8 present (0 = None, 1 = value)
                           value: STRING int32 len + UTF-8
                                  INT    int64
                                  FLOAT  float64
                                  BOOL   uint8

The binary codec treats this payload as an opaque blob and frames it with
its own length prefix, so any other StructureCodec implementation can be
plugged in as long as it round-trips losslessly.
"""

from __future__ import annotations

import struct
from typing import Any, Protocol

from .exceptions import CorruptDataError, ValidationError
from .table import Column, ColumnType, Table

TYPE_TAGS: dict[ColumnType, int] = {
    ColumnType.STRING: 1,
    ColumnType.INT: 2,
    ColumnType.FLOAT: 3,
    ColumnType.BOOL: 4,
}
TAG_TYPES: dict[int, ColumnType] = {tag: t for t, tag in TYPE_TAGS.items()}

# Rows of a column-less table carry no bytes, so their count is capped.
MAX_ROWS_WITHOUT_COLUMNS = 65_536

_INT32 = struct.Struct("<i")
_INT64 = struct.Struct("<q")
_FLOAT64 = struct.Struct("<d")
_UINT8 = struct.Struct("<B")


class StructureCodec(Protocol):
    """Protocol for codecs that turn a Table into bytes and back."""

    def serialize(self, table: Table) -> bytes:
        """
        Serialize columns and rows.

        Args:
            table: Table to serialize

        Returns:
            Encoded payload
        """
        ...

    def deserialize(self, data: bytes) -> Table:
        """
        Rebuild a Table from a payload produced by serialize().

        Raises:
            CorruptDataError: If data is not a valid payload
        """
        ...


class ByteWriter:
    """Append-only little-endian buffer."""

    def __init__(self) -> None:
        self.buf = bytearray()

    def put_int32(self, value: int) -> ByteWriter:
        self.buf.extend(_INT32.pack(value))
        return self

    def put_int64(self, value: int) -> ByteWriter:
        self.buf.extend(_INT64.pack(value))
        return self

    def put_float64(self, value: float) -> ByteWriter:
        self.buf.extend(_FLOAT64.pack(value))
        return self

    def put_uint8(self, value: int) -> ByteWriter:
        self.buf.extend(_UINT8.pack(value))
        return self

    def put_bytes(self, value: bytes) -> ByteWriter:
        """Write raw bytes without a length prefix."""
        self.buf.extend(value)
        return self

    def put_string(self, value: str) -> ByteWriter:
        encoded = value.encode("utf-8")
        self.put_int32(len(encoded))
        self.buf.extend(encoded)
        return self

    def build(self) -> bytes:
        return bytes(self.buf)


class ByteReader:
    """
    Cursor over a byte buffer.

    Every read checks the remaining length first and raises
    CorruptDataError instead of struct.error or IndexError.
    """

    def __init__(self, data: bytes) -> None:
        self.data = memoryview(bytes(data))
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def take(self, size: int, what: str = "value") -> bytes:
        """Read exactly ``size`` raw bytes."""
        if size < 0:
            raise CorruptDataError(f"negative length for {what}", self.pos)
        if size > self.remaining:
            raise CorruptDataError(
                f"truncated {what}: need {size} bytes, {self.remaining} left", self.pos
            )
        chunk = bytes(self.data[self.pos : self.pos + size])
        self.pos += size
        return chunk

    def _unpack(self, fmt: struct.Struct, what: str) -> Any:
        return fmt.unpack(self.take(fmt.size, what))[0]

    def get_int32(self, what: str = "int32") -> int:
        return self._unpack(_INT32, what)

    def get_int64(self, what: str = "int64") -> int:
        return self._unpack(_INT64, what)

    def get_float64(self, what: str = "float64") -> float:
        return self._unpack(_FLOAT64, what)

    def get_uint8(self, what: str = "uint8") -> int:
        return self._unpack(_UINT8, what)

    def get_string(self, what: str = "string") -> str:
        start = self.pos
        length = self.get_int32(f"{what} length")
        raw = self.take(length, what)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise CorruptDataError(f"{what} is not valid UTF-8", start) from None

    def expect_end(self) -> None:
        if self.remaining:
            raise CorruptDataError(f"{self.remaining} unexpected trailing bytes", self.pos)


class RowMajorStructureCodec:
    """Tagged schema followed by row-major values."""

    def serialize(self, table: Table) -> bytes:
        ser = ByteWriter()
        columns = table.columns
        if not columns and len(table) > MAX_ROWS_WITHOUT_COLUMNS:
            raise ValidationError(
                "rows",
                len(table),
                f"At most {MAX_ROWS_WITHOUT_COLUMNS} rows are allowed without columns",
            )
        ser.put_int32(len(columns))
        for column in columns:
            ser.put_string(column.name)
            ser.put_uint8(TYPE_TAGS[column.type])

        ser.put_int32(len(table))
        for row in table:
            for column, value in zip(columns, row):
                if value is None:
                    ser.put_uint8(0)
                    continue
                ser.put_uint8(1)
                self._put_value(ser, column.type, value)
        return ser.build()

    def deserialize(self, data: bytes) -> Table:
        reader = ByteReader(data)
        column_count = reader.get_int32("column count")
        if column_count < 0:
            raise CorruptDataError("negative column count", 0)
        # each column needs at least a name length and a type tag
        if column_count * 5 > reader.remaining:
            raise CorruptDataError(f"column count {column_count} exceeds payload", 0)

        table = Table()
        for i in range(column_count):
            name = reader.get_string(f"name of column {i}")
            tag_pos = reader.pos
            tag = reader.get_uint8(f"type tag of column {i}")
            if tag not in TAG_TYPES:
                raise CorruptDataError(f"unknown type tag {tag}", tag_pos)
            try:
                table.add_column(name, TAG_TYPES[tag])
            except ValidationError as e:
                raise CorruptDataError(e.reason, tag_pos) from e

        columns = table.columns
        count_pos = reader.pos
        row_count = reader.get_int32("row count")
        if row_count < 0:
            raise CorruptDataError("negative row count", count_pos)
        if row_count * len(columns) > reader.remaining:
            raise CorruptDataError(f"row count {row_count} exceeds payload", count_pos)
        if not columns and row_count > MAX_ROWS_WITHOUT_COLUMNS:
            raise CorruptDataError(
                f"row count {row_count} too large for a table without columns",
                count_pos,
            )

        for r in range(row_count):
            values: list[Any] = []
            for column in columns:
                flag_pos = reader.pos
                flag = reader.get_uint8(f"presence flag of row {r}")
                if flag == 0:
                    values.append(None)
                elif flag == 1:
                    values.append(self._get_value(reader, column))
                else:
                    raise CorruptDataError(f"invalid presence flag {flag}", flag_pos)
            table.add_row(values)

        reader.expect_end()
        return table

    @staticmethod
    def _put_value(ser: ByteWriter, column_type: ColumnType, value: Any) -> None:
        if column_type is ColumnType.STRING:
            ser.put_string(value)
        elif column_type is ColumnType.INT:
            ser.put_int64(value)
        elif column_type is ColumnType.FLOAT:
            ser.put_float64(value)
        elif column_type is ColumnType.BOOL:
            ser.put_uint8(1 if value else 0)
        else:
            raise ValueError(f"Unknown column type: {column_type}")

    @staticmethod
    def _get_value(reader: ByteReader, column: Column) -> Any:
        what = f"value of column {column.name!r}"
        if column.type is ColumnType.STRING:
            return reader.get_string(what)
        if column.type is ColumnType.INT:
            return reader.get_int64(what)
        if column.type is ColumnType.FLOAT:
            return reader.get_float64(what)
        pos = reader.pos
        raw = reader.get_uint8(what)
        if raw not in (0, 1):
            raise CorruptDataError(f"invalid boolean byte {raw}", pos)
        return raw == 1


DEFAULT_STRUCTURE_CODEC: StructureCodec = RowMajorStructureCodec()


def serialize_structure(table: Table) -> bytes:
    """Serialize a Table with the default structural codec."""
    return DEFAULT_STRUCTURE_CODEC.serialize(table)


def deserialize_structure(data: bytes) -> Table:
    """Rebuild a Table with the default structural codec."""
    return DEFAULT_STRUCTURE_CODEC.deserialize(data)
