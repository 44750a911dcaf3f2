"""
Binary form of a WritableTable.

Layout (all integers little-endian, no alignment bytes):

    int32   payload length
    bytes   structural payload (columns + rows, see structure.py)
    int32   justification code (RIGHT=0, LEFT=1)
    int32   padding
    uint16  pad character (one UTF-16 code unit)
    uint8   show_headers (0/1)

There is no version tag and no checksum.
"""

from __future__ import annotations

import logging
import struct

from .exceptions import CorruptDataError, ValidationError
from .models import Justification, PrintConfig
from .structure import ByteReader, ByteWriter, RowMajorStructureCodec, StructureCodec
from .writable import WritableTable

logger = logging.getLogger(__name__)

_PAD_CHAR = struct.Struct("<H")


class BinaryCodec:
    """Encode and decode the self-contained binary form of a table."""

    def __init__(self, structure_codec: StructureCodec | None = None) -> None:
        """
        Initialize the codec.

        Args:
            structure_codec: Codec for the columns/rows payload.
                Defaults to RowMajorStructureCodec.
        """
        self._structure = (
            structure_codec if structure_codec is not None else RowMajorStructureCodec()
        )

    def encode(self, table: WritableTable) -> bytes:
        """
        Serialize a table and its print configuration.

        Args:
            table: Table to encode

        Returns:
            The encoded buffer. Later changes to ``table`` do not affect it.
        """
        payload = self._structure.serialize(table.table)
        config = table.config

        ser = ByteWriter()
        ser.put_int32(len(payload))
        ser.put_bytes(payload)
        ser.put_int32(config.justification.value)
        ser.put_int32(config.padding)
        ser.put_bytes(_PAD_CHAR.pack(ord(config.pad_char)))
        ser.put_uint8(1 if config.show_headers else 0)
        data = ser.build()

        logger.debug(
            "Encoded table: %d columns, %d rows, %d payload bytes, %d total bytes",
            len(table.columns),
            len(table),
            len(payload),
            len(data),
        )
        return data

    def decode(self, data: bytes) -> WritableTable:
        """
        Rebuild a table from a buffer produced by :meth:`encode`.

        Decoding is all-or-nothing: either a complete table is returned or
        CorruptDataError is raised.

        Raises:
            CorruptDataError: On truncation, an invalid structural payload,
                an unknown justification code, or invalid configuration
        """
        try:
            return self._decode(data)
        except CorruptDataError as e:
            logger.warning("Failed to decode table (%d bytes): %s", len(data), e)
            raise

    def _decode(self, data: bytes) -> WritableTable:
        reader = ByteReader(data)
        length = reader.get_int32("payload length")
        if length < 0:
            raise CorruptDataError(f"negative payload length {length}", 0)
        payload = reader.take(length, "structural payload")

        table = WritableTable.from_table(self._structure.deserialize(payload))

        code_pos = reader.pos
        code = reader.get_int32("justification code")
        try:
            justification = Justification.from_code(code)
        except ValidationError:
            raise CorruptDataError(f"unknown justification code {code}", code_pos) from None

        config_pos = reader.pos
        padding = reader.get_int32("padding")
        pad_char = chr(_PAD_CHAR.unpack(reader.take(_PAD_CHAR.size, "pad character"))[0])
        flag = reader.get_uint8("show_headers flag")
        if flag not in (0, 1):
            raise CorruptDataError(f"invalid show_headers flag {flag}", reader.pos - 1)
        reader.expect_end()

        try:
            config = PrintConfig(
                justification=justification,
                padding=padding,
                pad_char=pad_char,
                show_headers=flag == 1,
            )
        except ValidationError as e:
            raise CorruptDataError(f"invalid print configuration: {e}", config_pos) from e
        table.configure(config)

        logger.debug(
            "Decoded table: %d columns, %d rows from %d bytes",
            len(table.columns),
            len(table),
            len(data),
        )
        return table


def encode_table(table: WritableTable) -> bytes:
    """Encode with the default structural codec."""
    return BinaryCodec().encode(table)


def decode_table(data: bytes) -> WritableTable:
    """Decode with the default structural codec."""
    return BinaryCodec().decode(data)
