#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
generator.py
------------
Builders for GridModel instances: hand-drawn ASCII maps, walled corridors,
and random obstacle fields with an optional reachability guarantee.

Reachability is decided with connected-component labelling of the free
space (4-connected), so no search is needed to classify a random map.

Dependencies:
    numpy
    scipy.ndimage   (for connected-component labeling)

Usage (quick smoke test):
    python3 -m envs.generator
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

try:
    from scipy.ndimage import label as cc_label
except Exception as e:
    raise ImportError(
        "scipy.ndimage is required. Install with: pip install scipy"
    ) from e

from envs.grid import GridModel, RunGate


# Cross-shaped structuring element: labels follow 4-connectivity.
STRUCTURE_4 = np.array([
    [0, 1, 0],
    [1, 1, 1],
    [0, 1, 0],
], dtype=np.uint8)

ENSURE_STATUSES = ("any", "success", "failure")


# ------------------------------ Reachability -------------------------------- #

def free_space_connected(occupancy: np.ndarray,
                         start: Tuple[int, int],
                         goal: Tuple[int, int]) -> bool:
    """
    True if start and goal share a 4-connected component of free cells.

    occupancy: bool array indexed [y, x], True = obstacle.
    start/goal: (x, y).
    """
    sx, sy = start
    gx, gy = goal
    if occupancy[sy, sx] or occupancy[gy, gx]:
        return False
    labels, _ = cc_label(~occupancy, structure=STRUCTURE_4)
    return bool(labels[sy, sx] == labels[gy, gx])


# ------------------------------ ASCII maps ---------------------------------- #

def grid_from_ascii(text: str, gate: Optional[RunGate] = None) -> GridModel:
    """
    Parse a map drawn with
        S  start     G  goal     #  obstacle     .  free
    One text line per grid row. Blank leading/trailing lines are ignored.
    """
    lines = [ln.strip() for ln in text.strip().splitlines() if ln.strip()]
    if not lines:
        raise ValueError("empty map")
    cols = len(lines[0])
    start = goal = None
    walls = []
    for y, line in enumerate(lines):
        if len(line) != cols:
            raise ValueError(f"row {y} has width {len(line)}, expected {cols}")
        for x, ch in enumerate(line):
            if ch == "S":
                if start is not None:
                    raise ValueError(f"second 'S' at ({x}, {y}), first at {start}")
                start = (x, y)
            elif ch == "G":
                if goal is not None:
                    raise ValueError(f"second 'G' at ({x}, {y}), first at {goal}")
                goal = (x, y)
            elif ch == "#":
                walls.append((x, y))
            elif ch != ".":
                raise ValueError(f"unknown map symbol {ch!r} at ({x}, {y})")
    if start is None or goal is None:
        raise ValueError("map must contain exactly one 'S' and one 'G'")
    return GridModel(cols, len(lines), start, goal, obstacles=walls, gate=gate)


def grid_to_ascii(grid: GridModel) -> str:
    rows = []
    for y in range(grid.rows):
        row = []
        for x in range(grid.cols):
            if (x, y) == grid.start:
                row.append("S")
            elif (x, y) == grid.goal:
                row.append("G")
            elif grid.is_obstacle((x, y)):
                row.append("#")
            else:
                row.append(".")
        rows.append("".join(row))
    return "\n".join(rows)


def corridor_grid(length: int, gate: Optional[RunGate] = None) -> GridModel:
    """
    A 3-row grid whose middle row is the only free lane:
        #####
        S...G
        #####
    """
    if length < 2:
        raise ValueError("corridor needs at least 2 cells")
    walls = [(x, y) for y in (0, 2) for x in range(length)]
    return GridModel(length, 3, start=(0, 1), goal=(length - 1, 1),
                     obstacles=walls, gate=gate)


# ------------------------------ Random fields ------------------------------- #

def generate_grid(
    cols: int = 20,
    rows: int = 20,
    *,
    density: float = 0.25,
    start: Optional[Tuple[int, int]] = None,
    goal: Optional[Tuple[int, int]] = None,
    ensure_status: str = "any",        # "any" | "success" | "failure"
    rng: Optional[np.random.Generator] = None,
    max_tries: int = 200,
    gate: Optional[RunGate] = None,
) -> GridModel:
    """
    Scatter single-cell obstacles with probability `density`, never on the
    endpoints. Endpoints default to the (2, 2) / (cols-3, rows-3) layout when
    the grid is large enough, else to opposite corners.

    ensure_status:
        "any"     : no guarantee about path existence.
        "success" : resample until start and goal are connected.
        "failure" : resample until they are not.
    """
    if ensure_status not in ENSURE_STATUSES:
        raise ValueError(f"ensure_status must be one of {ENSURE_STATUSES}, got {ensure_status!r}")
    if not 0.0 <= density < 1.0:
        raise ValueError("density must be in [0, 1)")

    if start is None:
        start = (2, 2) if cols >= 5 and rows >= 5 else (0, 0)
    if goal is None:
        goal = (cols - 3, rows - 3) if cols >= 5 and rows >= 5 else (cols - 1, rows - 1)

    rng = rng or np.random.default_rng()
    sx, sy = start
    gx, gy = goal

    for _ in range(max_tries):
        occ = rng.random((rows, cols)) < density
        occ[sy, sx] = False
        occ[gy, gx] = False
        if ensure_status != "any":
            connected = free_space_connected(occ, start, goal)
            if connected != (ensure_status == "success"):
                continue
        ys, xs = np.nonzero(occ)
        walls = [(int(x), int(y)) for y, x in zip(ys, xs)]
        return GridModel(cols, rows, start, goal, obstacles=walls, gate=gate)

    raise RuntimeError(
        f"could not generate a '{ensure_status}' grid in {max_tries} tries "
        f"(cols={cols}, rows={rows}, density={density})"
    )


# ---------------------------------- Demo ------------------------------------ #

if __name__ == "__main__":
    rng = np.random.default_rng(123)
    g = generate_grid(24, 16, density=0.3, ensure_status="success", rng=rng)
    print(g)
    print(grid_to_ascii(g))
    print("Path exists?", free_space_connected(g.occupancy(), g.start, g.goal))
