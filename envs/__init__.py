# -*- coding: utf-8 -*-
"""
Grid model and builders.
Exposes:
- Cell, GridModel, RunGate, RUN_GATE   (from grid.py)
- grid_from_ascii, corridor_grid, generate_grid  (from generator.py)
- the search error hierarchy            (from errors.py)
"""

from __future__ import annotations

from .errors import InternalConsistencyError, InvalidOperation, NoPathFound, SearchError
from .grid import Cell, DIRECTIONS, GridModel, RUN_GATE, RunGate
from .generator import (
    corridor_grid,
    free_space_connected,
    generate_grid,
    grid_from_ascii,
    grid_to_ascii,
)

__all__ = [
    "Cell",
    "DIRECTIONS",
    "GridModel",
    "RunGate",
    "RUN_GATE",
    "SearchError",
    "InvalidOperation",
    "NoPathFound",
    "InternalConsistencyError",
    "grid_from_ascii",
    "grid_to_ascii",
    "corridor_grid",
    "generate_grid",
    "free_space_connected",
]
