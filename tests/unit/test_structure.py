"""Tests for the structural codec."""

import struct

import pytest

from writable_table import (
    Column,
    ColumnType,
    CorruptDataError,
    RowMajorStructureCodec,
    Table,
    ValidationError,
    WritableTable,
    deserialize_structure,
    serialize_structure,
)
from writable_table.structure import MAX_ROWS_WITHOUT_COLUMNS, ByteReader, ByteWriter


class TestByteWriterReader:
    """Tests for the low-level buffer helpers."""

    def test_little_endian(self) -> None:
        """Integers are written little-endian."""
        data = ByteWriter().put_int32(1).put_int64(-2).put_uint8(255).build()
        assert data == b"\x01\x00\x00\x00" + b"\xfe" + b"\xff" * 7 + b"\xff"

    def test_string_is_length_prefixed_utf8(self) -> None:
        """Strings are int32 byte length followed by UTF-8."""
        assert ByteWriter().put_string("é").build() == b"\x02\x00\x00\x00\xc3\xa9"

    def test_reader_reads_back(self) -> None:
        """Values read back in order."""
        data = ByteWriter().put_int32(-7).put_float64(2.5).put_string("hi").build()
        reader = ByteReader(data)
        assert reader.get_int32() == -7
        assert reader.get_float64() == 2.5
        assert reader.get_string() == "hi"
        reader.expect_end()

    def test_truncated_read(self) -> None:
        """Short reads raise CorruptDataError with the offset."""
        reader = ByteReader(b"\x01\x00")
        with pytest.raises(CorruptDataError) as exc_info:
            reader.get_int32("count")
        assert exc_info.value.offset == 0
        assert "truncated count" in exc_info.value.reason

    def test_invalid_utf8(self) -> None:
        """Invalid UTF-8 is reported as corrupt data."""
        reader = ByteReader(b"\x01\x00\x00\x00\xff")
        with pytest.raises(CorruptDataError, match="UTF-8"):
            reader.get_string()

    def test_trailing_bytes(self) -> None:
        """expect_end() rejects leftovers."""
        reader = ByteReader(b"\x00")
        with pytest.raises(CorruptDataError, match="trailing"):
            reader.expect_end()


class TestRowMajorStructureCodec:
    """Tests for RowMajorStructureCodec."""

    def test_empty_table_layout(self) -> None:
        """An empty table is two zero counts."""
        assert serialize_structure(Table()) == b"\x00" * 8

    def test_layout(self) -> None:
        """Schema first, then row-major values with presence flags."""
        table = Table([Column("a", ColumnType.INT), Column("b", ColumnType.BOOL)])
        table.add_row([7, None])
        expected = (
            struct.pack("<i", 2)
            + struct.pack("<i", 1) + b"a" + bytes([2])
            + struct.pack("<i", 1) + b"b" + bytes([4])
            + struct.pack("<i", 1)
            + bytes([1]) + struct.pack("<q", 7)
            + bytes([0])
        )
        assert serialize_structure(table) == expected

    def test_round_trip_all_types(self, mixed_table: WritableTable) -> None:
        """Every type, including None and extremes, survives."""
        restored = deserialize_structure(serialize_structure(mixed_table.table))
        assert restored == mixed_table.table
        assert restored.column_types() == [
            ColumnType.STRING,
            ColumnType.INT,
            ColumnType.FLOAT,
            ColumnType.BOOL,
        ]

    def test_round_trip_zero_columns_with_rows(self) -> None:
        """Column-less rows are preserved."""
        table = Table(rows=[[], [], []])
        assert len(deserialize_structure(serialize_structure(table))) == 3

    def test_deserialized_table_is_new(self, people_table: Table) -> None:
        """The result shares nothing with the source."""
        restored = RowMajorStructureCodec().deserialize(serialize_structure(people_table))
        restored.set_value(0, "Name", "Changed")
        assert people_table.get_value(0, "Name") == "Al"

    def test_unknown_type_tag(self) -> None:
        """Unknown tags are corrupt data."""
        data = struct.pack("<i", 1) + struct.pack("<i", 1) + b"a" + bytes([9]) + b"\x00" * 4
        with pytest.raises(CorruptDataError, match="unknown type tag 9"):
            deserialize_structure(data)

    def test_duplicate_column(self) -> None:
        """Duplicate column names are corrupt data."""
        column = struct.pack("<i", 1) + b"a" + bytes([1])
        data = struct.pack("<i", 2) + column + column + struct.pack("<i", 0)
        with pytest.raises(CorruptDataError, match="already exists"):
            deserialize_structure(data)

    def test_invalid_presence_flag(self) -> None:
        """Presence flags other than 0/1 are corrupt data."""
        data = (
            struct.pack("<i", 1) + struct.pack("<i", 1) + b"a" + bytes([1])
            + struct.pack("<i", 1) + bytes([7])
        )
        with pytest.raises(CorruptDataError, match="presence flag"):
            deserialize_structure(data)

    def test_invalid_boolean_byte(self) -> None:
        """Boolean bytes other than 0/1 are corrupt data."""
        data = (
            struct.pack("<i", 1) + struct.pack("<i", 1) + b"a" + bytes([4])
            + struct.pack("<i", 1) + bytes([1, 2])
        )
        with pytest.raises(CorruptDataError, match="boolean"):
            deserialize_structure(data)

    @pytest.mark.parametrize("count", [-1, 1000])
    def test_bad_column_count(self, count: int) -> None:
        """Negative or impossible column counts are corrupt data."""
        with pytest.raises(CorruptDataError):
            deserialize_structure(struct.pack("<i", count) + b"\x00" * 8)

    def test_row_count_exceeds_payload(self, people_table: Table) -> None:
        """A row count larger than the data is rejected up front."""
        data = bytearray(serialize_structure(people_table))
        # row count sits after: int32 + ("Name": 4+4+1) + ("Age": 4+3+1)
        offset = 4 + 9 + 8
        data[offset : offset + 4] = struct.pack("<i", 10_000)
        with pytest.raises(CorruptDataError, match="row count"):
            deserialize_structure(bytes(data))

    @pytest.mark.parametrize("row_count", [MAX_ROWS_WITHOUT_COLUMNS + 1, 2**31 - 1])
    def test_row_count_without_columns_is_capped(self, row_count: int) -> None:
        """A column-less payload cannot announce an unbounded number of rows."""
        with pytest.raises(CorruptDataError, match="without columns"):
            RowMajorStructureCodec().deserialize(struct.pack("<ii", 0, row_count))

    def test_serialize_rejects_too_many_rows_without_columns(self) -> None:
        """Encoding refuses what decoding would reject."""
        table = Table()
        for _ in range(MAX_ROWS_WITHOUT_COLUMNS + 1):
            table.add_row([])
        with pytest.raises(ValidationError, match="without columns"):
            serialize_structure(table)

    def test_truncated_payload(self, people_table: Table) -> None:
        """Every strict prefix of a payload fails to decode."""
        data = serialize_structure(people_table)
        for cut in range(len(data)):
            with pytest.raises(CorruptDataError):
                deserialize_structure(data[:cut])

    def test_trailing_garbage(self, people_table: Table) -> None:
        """Extra bytes after the last row are rejected."""
        with pytest.raises(CorruptDataError, match="trailing"):
            deserialize_structure(serialize_structure(people_table) + b"\x00")
