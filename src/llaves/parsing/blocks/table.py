"""Table parsing for the llaves parser.

Handles GFM (GitHub Flavored Markdown) pipe tables. Cells hold inline
content, so an attribute bracket inside a cell attaches to the inline node
before it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from llaves.nodes import Table, TableCell, TableRow

if TYPE_CHECKING:
    from llaves.location import SourceLocation

type Alignment = Literal["left", "center", "right"] | None


class TableParsingMixin:
    """Mixin for GFM table parsing.

    Required Host Methods:
        - _parse_inline(text, location) -> tuple[Inline, ...]

    """

    def _try_parse_table(self, lines: list[str], location: SourceLocation) -> Table | None:
        """Try to parse lines as a GFM table.

        GFM table structure:
        | Header 1 | Header 2 |   <- header row
        |----------|----------|   <- delimiter row (required)
        | Cell 1   | Cell 2   |   <- body rows

        Returns Table if valid, None if not a table.
        """
        header_cells = self._parse_table_row(lines[0])
        if not header_cells:
            return None

        alignments = self._parse_table_delimiter(lines[1])
        if alignments is None or len(alignments) != len(header_cells):
            return None

        head = (self._build_row(header_cells, alignments, location, is_header=True),)
        body = tuple(
            self._build_row(cells, alignments, location, is_header=False)
            for line in lines[2:]
            if (cells := self._parse_table_row(line))
        )
        return Table(location=location, head=head, body=body, alignments=alignments)

    def _build_row(
        self,
        cells: list[str],
        alignments: tuple[Alignment, ...],
        location: SourceLocation,
        *,
        is_header: bool,
    ) -> TableRow:
        # Rows are padded or cut to the header's width
        width = len(alignments)
        cells = (cells + [""] * width)[:width]
        return TableRow(
            location=location,
            cells=tuple(
                TableCell(
                    location=location,
                    children=self._parse_inline(cell.strip(), location),  # type: ignore[attr-defined]
                    is_header=is_header,
                    align=alignments[i],
                )
                for i, cell in enumerate(cells)
            ),
            is_header=is_header,
        )

    def _parse_table_row(self, line: str) -> list[str] | None:
        """Split a table row into cells on unescaped pipes.

        Returns list of cell contents, or None if not a valid row.
        """
        line = line.strip()
        if "|" not in line:
            return None

        if line.startswith("|"):
            line = line[1:]
        if line.endswith("|") and not line.endswith("\\|"):
            line = line[:-1]

        cells: list[str] = []
        current: list[str] = []
        i = 0
        while i < len(line):
            if line[i] == "\\" and i + 1 < len(line) and line[i + 1] == "|":
                current.append("|")
                i += 2
            elif line[i] == "|":
                cells.append("".join(current))
                current = []
                i += 1
            else:
                current.append(line[i])
                i += 1
        cells.append("".join(current))
        return cells

    def _parse_table_delimiter(self, line: str) -> tuple[Alignment, ...] | None:
        """Parse a delimiter row like ``|:---|:---:|---:|`` into alignments.

        Returns None if the line is not a delimiter row.
        """
        line = line.strip()
        if line.startswith("|"):
            line = line[1:]
        if line.endswith("|"):
            line = line[:-1]

        alignments: list[Alignment] = []
        for part in line.split("|"):
            part = part.strip()
            left = part.startswith(":")
            right = part.endswith(":") and len(part) > 1
            inner = part[1 if left else 0 : -1 if right else None]
            if not inner or inner.strip("-"):
                return None

            if left and right:
                alignments.append("center")
            elif left:
                alignments.append("left")
            elif right:
                alignments.append("right")
            else:
                alignments.append(None)

        return tuple(alignments) if alignments else None
