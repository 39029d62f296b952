#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Depth-First Search planner (not optimal, but useful as a baseline).
- Stack frontier; cells are marked visited when pushed.
- Neighbours are pushed up, right, down, left, so left is explored first.
- Returns the first path found (often long and twisty).
"""

from __future__ import annotations
from typing import Iterator

from envs.grid import GridModel
from planners.base import BasePlanner, SearchState
from planners.events import Event, Found, NoPath, Visited


class DFSPlanner(BasePlanner):
    name = "dfs"
    default_delay = 0.1

    def search(self, grid: GridModel, state: SearchState) -> Iterator[Event]:
        stack = [grid.start]
        state.mark_visited(grid.start)

        while stack:
            u = stack.pop()
            yield Visited(u)
            if u == grid.goal:
                yield Found(u)
                return

            # Explore neighbors
            for v in grid.neighbors(u):
                if state.is_visited(v):
                    continue
                state.mark_visited(v)
                state.relax(v, state.dist(u) + 1, u)
                stack.append(v)

        yield NoPath()
