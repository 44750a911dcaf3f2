"""
writable-table: aligned console tables with a compact binary form.

This library decorates a simple typed table with:
- Fixed-width, column-aligned text rendering (left or right justified)
- Configurable padding, pad character and header line
- A self-contained binary encoding of schema, rows and print settings

Example:
    from writable_table import Column, ColumnType, Table, WritableTable

    source = Table([Column("Name"), Column("Age", ColumnType.INT)])
    source.add_row(["Al", 30])
    source.add_row(["Bo", 5])

    table = WritableTable.from_table(source)
    table.print()
    #     Name    Age
    #       Al     30
    #       Bo      5

    data = table.to_bytes()
    assert WritableTable.from_bytes(data) == table
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _dist_version

from .codec import BinaryCodec, decode_table, encode_table
from .exceptions import (
    CorruptDataError,
    InvalidInputError,
    ValidationError,
    WritableTableError,
)
from .models import DEFAULT_PAD_CHAR, DEFAULT_PADDING, Justification, PrintConfig
from .renderer import ColumnRenderer, stringify
from .structure import (
    RowMajorStructureCodec,
    StructureCodec,
    deserialize_structure,
    serialize_structure,
)
from .table import Column, ColumnType, Table
from .writable import DEFAULT_HEAD, WritableTable

try:
    __version__ = _dist_version("writable-table")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

__all__ = [
    # Version
    "__version__",
    # Main classes
    "WritableTable",
    "Table",
    "ColumnRenderer",
    "BinaryCodec",
    # Models
    "Column",
    "ColumnType",
    "PrintConfig",
    "Justification",
    # Structural codec
    "StructureCodec",
    "RowMajorStructureCodec",
    "serialize_structure",
    "deserialize_structure",
    # Helpers
    "encode_table",
    "decode_table",
    "stringify",
    # Constants
    "DEFAULT_HEAD",
    "DEFAULT_PADDING",
    "DEFAULT_PAD_CHAR",
    # Exceptions
    "WritableTableError",
    "ValidationError",
    "InvalidInputError",
    "CorruptDataError",
]
