#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Bellman-Ford planner on the explicit edge list of a 4-connected grid.

Edges are every ordered pair of adjacent free cells (cost 1), listed column
by column (x outer, y inner) and then in neighbour order. Up to
cols*rows - 1 passes relax every edge; the run ends

- inside the pass that first relaxes the goal (Found),
- after a pass that relaxes nothing, or when passes run out.

A Relaxed event is emitted per successful relaxation. Unit weights mean no
negative cycles, so the early exits never change the path length.
"""

from __future__ import annotations
from typing import Iterator, List, Tuple

from envs.grid import Cell, GridModel
from planners.base import BasePlanner, SearchState
from planners.events import Event, Found, NoPath, Relaxed


def edge_list(grid: GridModel) -> List[Tuple[Cell, Cell]]:
    edges: List[Tuple[Cell, Cell]] = []
    for x in range(grid.cols):
        for y in range(grid.rows):
            u = Cell(x, y)
            if grid.is_obstacle(u):
                continue
            for v in grid.neighbors(u):
                edges.append((u, v))
    return edges


class BellmanFordPlanner(BasePlanner):
    name = "bellman_ford"
    default_delay = 0.05

    def search(self, grid: GridModel, state: SearchState) -> Iterator[Event]:
        edges = edge_list(grid)

        for _ in range(grid.size - 1):
            any_update = False
            for u, v in edges:
                nd = state.dist(u) + 1
                if nd < state.dist(v):
                    state.relax(v, nd, u)
                    any_update = True
                    yield Relaxed(v, u)
                    if v == grid.goal:
                        yield Found(v)
                        return
            if not any_update:
                break

        yield NoPath()
