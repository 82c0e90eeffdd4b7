"""
Board Commitment - Schemas
File: board.py

Purpose: Grid geometry, cells and coordinate keys.

Coordinate convention (used by every phase):
- row: 1-based integer, 1..R, the outer index of the input grid
- column: uppercase letter label, 'A'.., mapped from the 0-based inner index
- key: "{row}-{label}", e.g. "3-C"
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import BoardPreconditionException, ErrorCodes, HitCountMismatchException


MAX_COLUMNS = 26

DEFAULT_ROWS = 10
DEFAULT_COLUMNS = 10
DEFAULT_SHIP_CELLS = 20


# =============================================================================
# Coordinate helpers
# =============================================================================

def column_label(index: int) -> str:
    """
    Map a 0-based column index to its letter label.

    >>> column_label(0)
    'A'
    """
    if index < 0 or index >= MAX_COLUMNS:
        raise IndexError(f"Column index {index} out of range for {MAX_COLUMNS} labels")
    return chr(ord("A") + index)


def column_index(label: str) -> int:
    """Map a column letter label back to its 0-based index."""
    if len(label) != 1 or not "A" <= label <= "Z":
        raise ValueError(f"Invalid column label: {label!r}")
    return ord(label) - ord("A")


def coordinate_key(row: int, label: str) -> str:
    """Build the composite coordinate key, e.g. (3, 'C') -> '3-C'."""
    return f"{row}-{label}"


def parse_coordinate_key(key: str) -> tuple[int, str]:
    """
    Split a coordinate key into (row, label).

    Raises:
        ValueError: If the key is not of the form '<row>-<label>'
    """
    row_part, sep, label = key.partition("-")
    if not sep or not row_part.isdigit():
        raise ValueError(f"Invalid coordinate key: {key!r}")
    column_index(label)
    row = int(row_part)
    if row < 1:
        raise ValueError(f"Invalid coordinate key: {key!r}")
    return row, label


# =============================================================================
# Geometry
# =============================================================================

class BoardGeometry(BaseModel):
    """
    Fixed board shape and the required number of ship cells.

    A classic board is 10x10 with 20 ship cells (4+3+3+2+2+2+1+1+1+1).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    rows: int = Field(default=DEFAULT_ROWS, ge=1, description="Number of rows (R)")
    columns: int = Field(
        default=DEFAULT_COLUMNS,
        ge=1,
        le=MAX_COLUMNS,
        description="Number of columns (C), labelled A..",
    )
    ship_cells: int = Field(
        default=DEFAULT_SHIP_CELLS,
        ge=0,
        description="Required number of hit cells (K)",
    )

    @model_validator(mode="after")
    def _ship_cells_fit(self) -> "BoardGeometry":
        if self.ship_cells > self.rows * self.columns:
            raise ValueError(
                f"ship_cells ({self.ship_cells}) exceeds board size "
                f"({self.rows}x{self.columns})"
            )
        return self

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns

    @property
    def column_labels(self) -> tuple[str, ...]:
        return tuple(column_label(i) for i in range(self.columns))

    def label_for(self, index: int) -> str:
        """Column label for a 0-based index inside this board."""
        if index < 0 or index >= self.columns:
            raise IndexError(f"Column index {index} out of range for {self.columns} columns")
        return column_label(index)

    def index_for(self, label: str) -> int:
        """0-based column index for a label inside this board."""
        index = column_index(label)
        if index >= self.columns:
            raise ValueError(f"Column {label!r} outside board of {self.columns} columns")
        return index

    def contains(self, row: int, col: int) -> bool:
        """Whether (1-based row, 0-based column index) lies on the board."""
        return 1 <= row <= self.rows and 0 <= col < self.columns

    def offset(self, row: int, col: int) -> int:
        """Row-major position of (1-based row, 0-based column index)."""
        return (row - 1) * self.columns + col

    def keys(self) -> Iterator[str]:
        """All coordinate keys in row-major order."""
        for row in range(1, self.rows + 1):
            for col in range(self.columns):
                yield coordinate_key(row, column_label(col))


# =============================================================================
# Cell
# =============================================================================

class Cell(BaseModel):
    """
    One committed grid position.

    The leaf value committed to the tree is the triple (hit, row, column).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    hit: bool = Field(..., description="Whether a ship occupies this cell")
    row: int = Field(..., ge=1, description="1-based row number")
    column: str = Field(..., description="Column label (A..Z)")

    @field_validator("column")
    @classmethod
    def _valid_label(cls, v: str) -> str:
        column_index(v)
        return v

    @property
    def key(self) -> str:
        return coordinate_key(self.row, self.column)

    def as_leaf_value(self) -> tuple[bool, int, str]:
        return (self.hit, self.row, self.column)

    @classmethod
    def from_leaf_value(cls, value: Sequence[Any]) -> "Cell":
        hit, row, column = value
        return cls(hit=hit, row=row, column=column)


# =============================================================================
# Board
# =============================================================================

def _as_flag(value: Any, row: int, col: int) -> bool:
    # Input files use either JSON booleans or 0/1 integers
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    raise BoardPreconditionException(
        f"Cell ({row}, {col}) must be a boolean or 0/1, got {value!r}",
        code=ErrorCodes.GRID_SHAPE_INVALID,
        details={"row": row, "column": col, "value": repr(value)},
    )


class Board(BaseModel):
    """
    A validated R x C grid of hit flags indexed [row][column].
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    geometry: BoardGeometry
    grid: tuple[tuple[bool, ...], ...]

    @classmethod
    def from_matrix(
        cls,
        matrix: Sequence[Sequence[Any]],
        geometry: BoardGeometry | None = None,
    ) -> "Board":
        """
        Build a Board from a nested sequence of flags.

        Raises:
            BoardPreconditionException: If the grid is not R rows of C flags
        """
        geometry = geometry or BoardGeometry()

        if len(matrix) != geometry.rows:
            raise BoardPreconditionException(
                f"Grid must have {geometry.rows} rows, got {len(matrix)}",
                details={"expected_rows": geometry.rows, "actual_rows": len(matrix)},
            )

        rows: list[tuple[bool, ...]] = []
        for r, line in enumerate(matrix):
            if isinstance(line, (str, bytes)) or len(line) != geometry.columns:
                raise BoardPreconditionException(
                    f"Row {r + 1} must have {geometry.columns} columns",
                    details={"row": r + 1, "expected_columns": geometry.columns},
                )
            rows.append(tuple(_as_flag(v, r + 1, c) for c, v in enumerate(line)))

        return cls(geometry=geometry, grid=tuple(rows))

    @property
    def hit_count(self) -> int:
        return sum(sum(1 for flag in line if flag) for line in self.grid)

    def require_hit_count(self) -> None:
        """
        Raises:
            HitCountMismatchException: If the hit count differs from K
        """
        actual = self.hit_count
        if actual != self.geometry.ship_cells:
            raise HitCountMismatchException(self.geometry.ship_cells, actual)

    def cells(self) -> Iterator[Cell]:
        """Every cell in row-major order."""
        for r, line in enumerate(self.grid):
            for c, flag in enumerate(line):
                yield Cell(hit=flag, row=r + 1, column=column_label(c))

    def is_hit(self, row: int, label: str) -> bool:
        return self.grid[row - 1][self.geometry.index_for(label)]
