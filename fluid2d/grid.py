"""
grid.py — Dense Square Scalar Grid
===================================
The buffer every field in the simulation lives in.

Layout:
  - One float32 array of shape (rows, cols), row-major
  - Cell (col, row) sits at flat index  col + row * N
  - `grid.data[row, col]` is the same cell, for vectorised operators

Rows must equal columns. The stride is fixed to N, so a non-square
buffer would make every (col, row) lookup land in the wrong place.
We refuse to build one instead of finding out three steps later.
"""

import numpy as np


class Grid:
    """
    N x N float buffer addressed by (column, row).

    Usage:
        g = Grid(64, 64)
        g[10, 3] = 1.5      # column 10, row 3
        g.data[3, 10]       # same cell
    """

    def __init__(self, rows: int, cols: int, dtype=np.float32):
        """
        Args:
            rows  : Number of rows (M)
            cols  : Number of columns (N), must equal rows
            dtype : Element type (float32 matches the solver)
        """
        if rows != cols:
            raise ValueError(f"Grid must be square, got {rows} rows x {cols} cols")
        if cols < 3:
            raise ValueError(f"Grid edge must be at least 3 to have an interior, got {cols}")

        self.rows = rows
        self.cols = cols
        self.data = np.zeros((rows, cols), dtype=dtype)

    @property
    def size(self) -> int:
        return self.cols

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    @property
    def flat(self) -> np.ndarray:
        """Flat view of the buffer; flat[col + row*N] is cell (col, row)."""
        return self.data.reshape(-1)

    def index(self, col: int, row: int) -> int:
        """Flat buffer index of cell (col, row). Out-of-range raises IndexError."""
        if not (0 <= col < self.cols and 0 <= row < self.rows):
            raise IndexError(
                f"cell ({col}, {row}) outside {self.cols}x{self.rows} grid"
            )
        return col + row * self.cols

    def __getitem__(self, pos):
        col, row = pos
        return self.flat[self.index(col, row)]

    def __setitem__(self, pos, value):
        col, row = pos
        self.flat[self.index(col, row)] = value

    def fill(self, value: float = 0.0):
        self.data.fill(value)

    def copy(self) -> "Grid":
        g = Grid(self.rows, self.cols, dtype=self.data.dtype)
        np.copyto(g.data, self.data)
        return g

    def __repr__(self):
        return (
            f"Grid({self.rows}x{self.cols}, "
            f"min={self.data.min():.4f}, max={self.data.max():.4f})"
        )
