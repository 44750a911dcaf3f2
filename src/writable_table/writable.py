"""Table with print configuration and a binary form."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, TextIO

from .exceptions import InvalidInputError
from .models import Justification, PrintConfig
from .renderer import ColumnRenderer
from .table import Column, ColumnType, Table

DEFAULT_HEAD = 6


class WritableTable:
    """
    A Table decorated with console rendering and binary persistence.

    WritableTable owns its Table: it is built empty or from a deep copy
    of a source table, and never aliases a table owned by someone else.
    Use :meth:`copy` to obtain an independent instance.

    Example:
        source = Table([Column("Name"), Column("Age", ColumnType.INT)])
        source.add_row(["Al", 30])

        table = WritableTable.from_table(source)
        table.set_padding(2)
        table.print_head()

        data = table.to_bytes()
        restored = WritableTable.from_bytes(data)
    """

    def __init__(self, config: PrintConfig | None = None) -> None:
        self._table = Table()
        self._config = config if config is not None else PrintConfig()

    @classmethod
    def from_table(cls, source: Table | None) -> WritableTable:
        """
        Build a WritableTable from a deep copy of ``source``.

        Columns (name and type) and rows (value by value) are copied into a
        fresh Table; later changes to ``source`` are not seen here.

        Raises:
            InvalidInputError: If source is None or not a Table
        """
        if source is None:
            raise InvalidInputError("source table is required")
        if not isinstance(source, Table):
            raise InvalidInputError(f"expected a Table, got {type(source).__name__}")
        instance = cls()
        instance._table = source.copy()
        return instance

    @classmethod
    def from_bytes(cls, data: bytes) -> WritableTable:
        """
        Decode a table produced by :meth:`to_bytes`.

        Raises:
            CorruptDataError: If the data cannot be decoded
        """
        from .codec import BinaryCodec

        return BinaryCodec().decode(data)

    def to_bytes(self) -> bytes:
        """Encode rows, columns and print configuration into one buffer."""
        from .codec import BinaryCodec

        return BinaryCodec().encode(self)

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    @property
    def table(self) -> Table:
        """The owned Table. Mutations through it affect only this instance."""
        return self._table

    @property
    def columns(self) -> tuple[Column, ...]:
        return self._table.columns

    @property
    def rows(self) -> list[tuple[Any, ...]]:
        return self._table.rows

    def headers(self) -> list[str]:
        """Column names, in column order."""
        return self._table.column_names()

    def schema(self) -> list[ColumnType]:
        """Declared column types, parallel to :meth:`headers`."""
        return self._table.column_types()

    def copy(self) -> WritableTable:
        """Return an independent copy of both the table and its configuration."""
        clone = WritableTable(self._config)
        clone._table = self._table.copy()
        return clone

    # -------------------------------------------------------------------------
    # Print configuration
    # -------------------------------------------------------------------------

    @property
    def config(self) -> PrintConfig:
        return self._config

    def configure(self, config: PrintConfig) -> None:
        """Replace the whole print configuration."""
        if not isinstance(config, PrintConfig):
            raise InvalidInputError(f"expected a PrintConfig, got {type(config).__name__}")
        self._config = config

    @property
    def justification(self) -> Justification:
        return self._config.justification

    @property
    def padding(self) -> int:
        return self._config.padding

    @property
    def pad_char(self) -> str:
        return self._config.pad_char

    @property
    def show_headers(self) -> bool:
        return self._config.show_headers

    def set_padding(self, padding: int) -> None:
        """
        Set the padding added to every column width.

        Raises:
            ValidationError: If padding < 1 (configuration is left unchanged)
        """
        self._config = self._config.with_padding(padding)

    def set_justification(self, justification: Justification) -> None:
        self._config = self._config.with_justification(justification)

    def toggle_justification(self) -> None:
        """Flip between RIGHT and LEFT justification."""
        self._config = self._config.toggled()

    def set_pad_char(self, pad_char: str) -> None:
        self._config = self._config.with_pad_char(pad_char)

    def set_show_headers(self, show_headers: bool) -> None:
        self._config = self._config.with_show_headers(show_headers)

    # -------------------------------------------------------------------------
    # Printing
    # -------------------------------------------------------------------------

    def render(self, row_max: int | None = None) -> str:
        """Render up to ``row_max`` rows (all when None) as one string."""
        return ColumnRenderer(self._config).render(self._table, row_max)

    def print(self, file: TextIO | None = None) -> None:
        """Print every row."""
        ColumnRenderer(self._config).print(self._table, len(self._table), file)

    def print_head(self, row_max: int = DEFAULT_HEAD, file: TextIO | None = None) -> None:
        """Print the first ``min(row_max, row count)`` rows."""
        ColumnRenderer(self._config).print(self._table, row_max, file)

    # -------------------------------------------------------------------------
    # Container forwarding
    # -------------------------------------------------------------------------

    def add_column(
        self, name: str, type: ColumnType = ColumnType.STRING, default: Any = None
    ) -> Column:
        return self._table.add_column(name, type, default)

    def remove_column(self, column: str | int) -> Column:
        return self._table.remove_column(column)

    def add_row(self, values: Sequence[Any] | Mapping[str, Any]) -> tuple[Any, ...]:
        return self._table.add_row(values)

    def remove_row(self, index: int) -> tuple[Any, ...]:
        return self._table.remove_row(index)

    def row(self, index: int) -> tuple[Any, ...]:
        return self._table.row(index)

    def get_value(self, row: int, column: str | int) -> Any:
        return self._table.get_value(row, column)

    def set_value(self, row: int, column: str | int, value: Any) -> None:
        self._table.set_value(row, column, value)

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return iter(self._table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WritableTable):
            return NotImplemented
        return self._table == other._table and self._config == other._config

    __hash__ = None  # type: ignore[assignment]

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __repr__(self) -> str:
        return (
            f"WritableTable(columns={self.headers()!r}, rows={len(self._table)}, "
            f"config={self._config!r})"
        )
