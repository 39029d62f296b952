#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
grid.py
-------
Fixed-size 4-connected grid with a user-painted obstacle set.

Conventions:
- Cells are (x, y) = (column, row); x grows right, y grows down.
- Obstacles live in a Python set so membership tests are O(1).
- occupancy() exports the usual occupancy grid: arr[y, x] == True means blocked.

Edits are gated by a RunGate. While a search holds the gate, obstacles are
frozen and no second search may start.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple

import numpy as np

from envs.errors import InvalidOperation


class Cell(NamedTuple):
    x: int
    y: int


# Neighbour order is part of the search contract: up, right, down, left.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
)


# ------------------------------- Run gate ----------------------------------- #

class RunGate:
    """Single run-in-progress flag."""

    def __init__(self):
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> None:
        if self._active:
            raise InvalidOperation("a search is already running")
        self._active = True

    def release(self) -> None:
        self._active = False


# Process-wide gate used by every grid unless one is injected.
RUN_GATE = RunGate()


# ------------------------------- Grid model --------------------------------- #

class GridModel:
    def __init__(self, cols: int, rows: int,
                 start: Tuple[int, int], goal: Tuple[int, int],
                 obstacles: Iterable[Tuple[int, int]] = (),
                 gate: Optional[RunGate] = None):
        if int(cols) <= 0 or int(rows) <= 0:
            raise ValueError(f"grid dimensions must be positive, got {cols}x{rows}")
        self.cols = int(cols)
        self.rows = int(rows)
        self.start = Cell(*start)
        self.goal = Cell(*goal)
        if not self.in_bounds(self.start):
            raise ValueError(f"start {tuple(self.start)} is outside the grid")
        if not self.in_bounds(self.goal):
            raise ValueError(f"goal {tuple(self.goal)} is outside the grid")
        if self.start == self.goal:
            raise ValueError("start and goal must differ")

        self.gate = gate if gate is not None else RUN_GATE
        self._obstacles: Set[Cell] = set()
        for c in obstacles:
            c = Cell(*c)
            if not self.in_bounds(c):
                raise ValueError(f"obstacle {tuple(c)} is outside the grid")
            if c == self.start or c == self.goal:
                raise ValueError(f"obstacle {tuple(c)} covers an endpoint")
            self._obstacles.add(c)

    @classmethod
    def with_default_endpoints(cls, cols: int, rows: int, **kwargs) -> "GridModel":
        """Start two cells in from the top-left corner, goal two in from the bottom-right."""
        return cls(cols, rows, start=(2, 2), goal=(cols - 3, rows - 3), **kwargs)

    # ---------------------------- queries ---------------------------- #

    @property
    def obstacles(self) -> frozenset:
        return frozenset(self._obstacles)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def size(self) -> int:
        return self.cols * self.rows

    def in_bounds(self, c: Tuple[int, int]) -> bool:
        x, y = c
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_obstacle(self, c: Tuple[int, int]) -> bool:
        return Cell(*c) in self._obstacles

    def neighbors(self, c: Tuple[int, int]) -> List[Cell]:
        x, y = c
        out: List[Cell] = []
        for dx, dy in DIRECTIONS:
            n = Cell(x + dx, y + dy)
            if self.in_bounds(n) and n not in self._obstacles:
                out.append(n)
        return out

    def cells(self) -> Iterator[Cell]:
        """Every cell, row-major."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield Cell(x, y)

    def occupancy(self) -> np.ndarray:
        grid = np.zeros(self.shape, dtype=bool)
        for x, y in self._obstacles:
            grid[y, x] = True
        return grid

    # ---------------------------- edits ------------------------------ #

    def _check_editable(self, c: Cell) -> None:
        if self.gate.active:
            raise InvalidOperation("cannot edit obstacles while a search is running")
        if not self.in_bounds(c):
            raise ValueError(f"cell {tuple(c)} is outside the grid")
        if c == self.start or c == self.goal:
            raise InvalidOperation(f"cell {tuple(c)} is an endpoint and cannot be blocked")

    def toggle_obstacle(self, c: Tuple[int, int]) -> bool:
        """Flip a cell between free and blocked; returns the new blocked state."""
        c = Cell(*c)
        self._check_editable(c)
        if c in self._obstacles:
            self._obstacles.remove(c)
            return False
        self._obstacles.add(c)
        return True

    def set_obstacle(self, c: Tuple[int, int], blocked: bool = True) -> None:
        c = Cell(*c)
        self._check_editable(c)
        if blocked:
            self._obstacles.add(c)
        else:
            self._obstacles.discard(c)

    def clear_obstacles(self) -> None:
        if self.gate.active:
            raise InvalidOperation("cannot edit obstacles while a search is running")
        self._obstacles.clear()

    def copy(self) -> "GridModel":
        return GridModel(self.cols, self.rows, self.start, self.goal,
                         obstacles=self._obstacles, gate=self.gate)

    def __repr__(self) -> str:
        return (f"GridModel(cols={self.cols}, rows={self.rows}, start={tuple(self.start)}, "
                f"goal={tuple(self.goal)}, obstacles={len(self._obstacles)})")
