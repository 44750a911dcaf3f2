"""Pytest fixtures for writable-table tests."""

import pytest

from writable_table import Column, ColumnType, Table, WritableTable


@pytest.fixture
def people_table() -> Table:
    """Two-column Name/Age table."""
    table = Table([Column("Name", ColumnType.STRING), Column("Age", ColumnType.INT)])
    table.add_row(["Al", 30])
    table.add_row(["Bo", 5])
    return table


@pytest.fixture
def people(people_table: Table) -> WritableTable:
    """WritableTable wrapping people_table with default configuration."""
    return WritableTable.from_table(people_table)


@pytest.fixture
def mixed_table() -> WritableTable:
    """Table exercising every column type, including None cells."""
    table = WritableTable()
    table.add_column("label", ColumnType.STRING)
    table.add_column("count", ColumnType.INT)
    table.add_column("ratio", ColumnType.FLOAT)
    table.add_column("active", ColumnType.BOOL)
    table.add_row(["alpha", 1, 0.5, True])
    table.add_row(["", -(2**63), -1.25, False])
    table.add_row([None, None, None, None])
    table.add_row(["ünïcødé ✓", 2**63 - 1, 1e300, True])
    return table


@pytest.fixture
def long_table() -> WritableTable:
    """Ten rows where the widest value is in the last row."""
    table = WritableTable()
    table.add_column("id", ColumnType.INT)
    table.add_column("word")
    for i in range(9):
        table.add_row([i, "x"])
    table.add_row([9, "supercalifragilistic"])
    return table
