"""
Generic in-memory table container.

A Table is an ordered list of typed columns plus an ordered list of rows,
where every row holds exactly one value per column, in column order.
Values are validated against the declared column type on the way in,
and ``None`` is accepted in every column.

Example:
    table = Table([Column("Name"), Column("Age", ColumnType.INT)])
    table.add_row(["Al", 30])
    table.add_row({"Name": "Bo", "Age": 5})
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import ValidationError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_TRUE_WORDS = frozenset({"true", "yes", "y", "1", "t"})
_FALSE_WORDS = frozenset({"false", "no", "n", "0", "f"})


def _same_value(a: Any, b: Any) -> bool:
    # NaN cells compare equal so decoded tables match their source
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


class ColumnType(Enum):
    """Declared value type of a column."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"

    @classmethod
    def from_name(cls, name: str) -> ColumnType:
        """Look up a column type by its name (e.g. ``"int"``)."""
        try:
            return cls(name.strip().lower())
        except (ValueError, AttributeError):
            choices = ", ".join(t.value for t in cls)
            raise ValidationError("type", name, f"Must be one of: {choices}") from None

    def validate(self, value: Any, column: str = "value") -> Any:
        """
        Check a value against this type and return the value to store.

        Ints are widened to float for FLOAT columns. ``bool`` is never
        accepted as a number even though it subclasses int.

        Raises:
            ValidationError: If the value does not fit the type
        """
        if value is None:
            return None
        if self is ColumnType.STRING:
            if isinstance(value, str):
                return value
        elif self is ColumnType.BOOL:
            if isinstance(value, bool):
                return value
        elif self is ColumnType.INT:
            if isinstance(value, int) and not isinstance(value, bool):
                if not INT64_MIN <= value <= INT64_MAX:
                    raise ValidationError(column, value, "Outside the signed 64-bit range")
                return value
        elif self is ColumnType.FLOAT:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
        raise ValidationError(
            column, value, f"Expected {self.value}, got {type(value).__name__}"
        )

    def parse(self, text: str, column: str = "value") -> Any:
        """
        Convert text (e.g. a CSV field) into a value of this type.

        Empty text parses as ``None``.
        """
        if text == "":
            return None
        if self is ColumnType.STRING:
            return text
        stripped = text.strip()
        if self is ColumnType.BOOL:
            lowered = stripped.lower()
            if lowered in _TRUE_WORDS:
                return True
            if lowered in _FALSE_WORDS:
                return False
            raise ValidationError(column, text, "Not a boolean")
        try:
            number = int(stripped) if self is ColumnType.INT else float(stripped)
        except ValueError:
            raise ValidationError(column, text, f"Not a valid {self.value}") from None
        return self.validate(number, column)


@dataclass(frozen=True)
class Column:
    """A named, typed column."""

    name: str
    type: ColumnType = ColumnType.STRING

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("column name", self.name, "Must be a non-empty string")
        if not isinstance(self.type, ColumnType):
            raise ValidationError("column type", self.type, "Must be a ColumnType member")


class Table:
    """
    Ordered typed columns plus ordered rows.

    Rows are stored as lists internally and handed out as tuples, so the
    only way to change a cell is through :meth:`set_value`.
    """

    def __init__(
        self,
        columns: Iterable[Column] | None = None,
        rows: Iterable[Sequence[Any] | Mapping[str, Any]] | None = None,
    ) -> None:
        self._columns: list[Column] = []
        self._rows: list[list[Any]] = []
        for column in columns or ():
            self.add_column(column.name, column.type)
        for row in rows or ():
            self.add_row(row)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def columns(self) -> tuple[Column, ...]:
        """Columns in order."""
        return tuple(self._columns)

    @property
    def rows(self) -> list[tuple[Any, ...]]:
        """Snapshot of all rows, in order."""
        return [tuple(row) for row in self._rows]

    @property
    def column_count(self) -> int:
        return len(self._columns)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def column_names(self) -> list[str]:
        """Column names in order."""
        return [c.name for c in self._columns]

    def column_types(self) -> list[ColumnType]:
        """Declared column types in order."""
        return [c.type for c in self._columns]

    def column_index(self, column: str | int) -> int:
        """
        Resolve a column name or position to a position.

        Raises:
            ValidationError: If the column does not exist
        """
        if isinstance(column, int) and not isinstance(column, bool):
            if 0 <= column < len(self._columns):
                return column
            raise ValidationError("column", column, "Column index out of range")
        for i, c in enumerate(self._columns):
            if c.name == column:
                return i
        raise ValidationError("column", column, "No such column")

    def row(self, index: int) -> tuple[Any, ...]:
        """Return one row as a tuple."""
        return tuple(self._rows[self._row_index(index)])

    def column_values(self, column: str | int) -> list[Any]:
        """Return every value of one column, in row order."""
        i = self.column_index(column)
        return [row[i] for row in self._rows]

    def get_value(self, row: int, column: str | int) -> Any:
        return self._rows[self._row_index(row)][self.column_index(column)]

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_column(
        self,
        name: str,
        type: ColumnType = ColumnType.STRING,
        default: Any = None,
    ) -> Column:
        """
        Append a column.

        Existing rows get ``default`` in the new position.

        Raises:
            ValidationError: If the name is taken or default does not fit the type
        """
        column = Column(name, type)
        if any(c.name == name for c in self._columns):
            raise ValidationError("column name", name, "Column already exists")
        value = type.validate(default, name)
        self._columns.append(column)
        for row in self._rows:
            row.append(value)
        return column

    def remove_column(self, column: str | int) -> Column:
        """Remove a column and its values from every row."""
        i = self.column_index(column)
        removed = self._columns.pop(i)
        for row in self._rows:
            del row[i]
        return removed

    def add_row(self, values: Sequence[Any] | Mapping[str, Any]) -> tuple[Any, ...]:
        """
        Append a row.

        ``values`` is either a sequence with one value per column, in column
        order, or a mapping from column name to value (missing names become
        ``None``).

        Raises:
            ValidationError: On arity mismatch, unknown names, or bad values
        """
        row = self._validate_row(values)
        self._rows.append(row)
        return tuple(row)

    def insert_row(self, index: int, values: Sequence[Any] | Mapping[str, Any]) -> None:
        row = self._validate_row(values)
        self._rows.insert(index, row)

    def remove_row(self, index: int) -> tuple[Any, ...]:
        """Remove a row and return its values."""
        return tuple(self._rows.pop(self._row_index(index)))

    def set_value(self, row: int, column: str | int, value: Any) -> None:
        """Replace a single cell."""
        r = self._row_index(row)
        c = self.column_index(column)
        col = self._columns[c]
        self._rows[r][c] = col.type.validate(value, col.name)

    def clear(self) -> None:
        """Remove all rows, keeping the columns."""
        self._rows.clear()

    def copy(self) -> Table:
        """Return an independent copy (columns and rows duplicated)."""
        clone = Table()
        clone._columns = list(self._columns)
        clone._rows = [list(row) for row in self._rows]
        return clone

    # -------------------------------------------------------------------------
    # Dunder helpers
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        for row in self._rows:
            yield tuple(row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented
        if self._columns != other._columns or len(self._rows) != len(other._rows):
            return False
        return all(
            _same_value(a, b)
            for mine, theirs in zip(self._rows, other._rows)
            for a, b in zip(mine, theirs)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        cols = ", ".join(f"{c.name}:{c.type.value}" for c in self._columns)
        return f"Table(columns=[{cols}], rows={len(self._rows)})"

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _row_index(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValidationError("row", index, "Row index must be an integer")
        if not -len(self._rows) <= index < len(self._rows):
            raise ValidationError("row", index, "Row index out of range")
        return index % len(self._rows)

    def _validate_row(self, values: Sequence[Any] | Mapping[str, Any]) -> list[Any]:
        if isinstance(values, Mapping):
            names = set(self.column_names())
            unknown = [k for k in values if k not in names]
            if unknown:
                raise ValidationError("column", unknown[0], "No such column")
            values = [values.get(c.name) for c in self._columns]
        elif isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
            raise ValidationError("row", values, "Row must be a sequence or mapping")
        if len(values) != len(self._columns):
            raise ValidationError(
                "row",
                values,
                f"Expected {len(self._columns)} values, got {len(values)}",
            )
        return [c.type.validate(v, c.name) for c, v in zip(self._columns, values)]
