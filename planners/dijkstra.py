#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Dijkstra planner for 4-connected unit-cost grids.
- Min-heap keyed (distance, insertion order): ties pop FIFO.
- A cell may sit in the heap several times; stale entries are skipped.
- Stops as soon as the goal is popped.
"""

from __future__ import annotations
from typing import Iterator, List, Tuple
import heapq

from envs.errors import InternalConsistencyError
from envs.grid import Cell, GridModel
from planners.base import BasePlanner, SearchState
from planners.events import Event, Found, NoPath, Visited


class DijkstraPlanner(BasePlanner):
    name = "dijkstra"
    default_delay = 0.1

    def search(self, grid: GridModel, state: SearchState) -> Iterator[Event]:
        seq = 0
        pq: List[Tuple[float, int, Cell]] = [(0.0, seq, grid.start)]

        while pq:
            d, _, u = heapq.heappop(pq)
            if state.is_visited(u):
                continue
            if d != state.dist(u):
                raise InternalConsistencyError(
                    f"heap entry {d} for {tuple(u)} disagrees with distance {state.dist(u)}")
            state.mark_visited(u)
            yield Visited(u)

            if u == grid.goal:
                yield Found(u)
                return

            for v in grid.neighbors(u):
                if state.is_visited(v):
                    continue
                nd = d + 1
                if nd < state.dist(v):
                    state.relax(v, nd, u)
                    seq += 1
                    heapq.heappush(pq, (nd, seq, v))

        yield NoPath()
