"""
Fixed-width column renderer.

This module provides a ColumnRenderer class for rendering a Table as
padded, column-aligned text lines.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any, TextIO

from .models import Justification, PrintConfig

if TYPE_CHECKING:
    from .table import Table


def stringify(value: Any) -> str:
    """Natural text form of a cell value (``None`` renders as empty)."""
    if value is None:
        return ""
    return str(value)


class ColumnRenderer:
    """Render a table as aligned, padded columns.

    Example output (RIGHT justification, padding 4):
            Name    Age
              Al     30
              Bo      5
    """

    def __init__(self, config: PrintConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Print configuration. Defaults to PrintConfig().
        """
        self._config = config if config is not None else PrintConfig()

    @property
    def config(self) -> PrintConfig:
        return self._config

    def column_widths(self, table: Table) -> list[int]:
        """Calculate column widths (max of header and every cell in the table).

        All rows are scanned, not just the ones that will be printed, so a
        head view lines up exactly like the full view.
        """
        widths = [len(name) for name in table.column_names()]
        for row in table:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(stringify(cell)))
        return widths

    def format_cell(self, text: str, width: int) -> str:
        """Pad text to ``width + padding`` characters."""
        fill = self._config.pad_char * (width + self._config.padding - len(text))
        if self._config.justification is Justification.RIGHT:
            return fill + text
        return text + fill

    def render_lines(self, table: Table, row_max: int | None = None) -> list[str]:
        """Render the header line (if enabled) and up to ``row_max`` rows.

        Args:
            table: Table to render
            row_max: Maximum number of rows; None means all rows

        Returns:
            Lines without trailing newlines
        """
        widths = self.column_widths(table)
        limit = len(table) if row_max is None else max(0, min(row_max, len(table)))

        lines: list[str] = []
        if self._config.show_headers:
            lines.append(
                "".join(
                    self.format_cell(name, w) for name, w in zip(table.column_names(), widths)
                )
            )

        for index, row in enumerate(table):
            if index >= limit:
                break
            lines.append(
                "".join(self.format_cell(stringify(cell), w) for cell, w in zip(row, widths))
            )
        return lines

    def render(self, table: Table, row_max: int | None = None) -> str:
        """Render to a single newline-joined string."""
        return "\n".join(self.render_lines(table, row_max))

    def print(self, table: Table, row_max: int | None = None, file: TextIO | None = None) -> None:
        """Write rendered lines to ``file`` (stdout by default), one per line."""
        sink = file if file is not None else sys.stdout
        for line in self.render_lines(table, row_max):
            sink.write(line + "\n")
