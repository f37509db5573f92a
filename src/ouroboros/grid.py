"""Occupancy grid backing the board's collision checks."""

from __future__ import annotations

import enum

import numpy as np

from ouroboros.vector import Vector


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    BODY = 1
    TARGET = 2


class Grid:
    """Square NumPy-backed grid of cell states.

    Cells are addressed with :class:`Vector` (x, y) and stored at
    ``cells[y, x]`` so the array prints the way the board looks.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, cell: Vector) -> bool:
        """Check whether a cell lies within the grid."""
        return 0 <= cell.x < self.size and 0 <= cell.y < self.size

    def get(self, cell: Vector) -> CellType:
        return CellType(self.cells[cell.y, cell.x])

    def set(self, cell: Vector, cell_type: CellType) -> None:
        self.cells[cell.y, cell.x] = cell_type

    def empty_cells(self) -> list[Vector]:
        """Return every empty cell, row by row."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return [Vector(x, y) for y, x in zip(ys.tolist(), xs.tolist(), strict=True)]

    def count(self, cell_type: CellType) -> int:
        return int(np.count_nonzero(self.cells == cell_type))

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "size": self.size,
            "cells": self.cells.tolist(),
        }
