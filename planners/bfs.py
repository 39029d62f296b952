#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Breadth-First Search planner (unweighted shortest hops).
- Cells are marked visited when enqueued, so none is queued twice.
- Layers pop in non-decreasing distance, so the first goal dequeue is optimal.
- The goal is reported with Found only; it is never emitted as Visited.
"""

from __future__ import annotations
from typing import Iterator
from collections import deque

from envs.grid import GridModel
from planners.base import BasePlanner, SearchState
from planners.events import Event, Found, NoPath, Visited


class BFSPlanner(BasePlanner):
    name = "bfs"
    default_delay = 0.1

    def search(self, grid: GridModel, state: SearchState) -> Iterator[Event]:
        dq = deque([grid.start])
        state.mark_visited(grid.start)

        while dq:
            u = dq.popleft()
            if u == grid.goal:
                yield Found(u)
                return
            for v in grid.neighbors(u):
                if state.is_visited(v):
                    continue
                state.mark_visited(v)
                state.relax(v, state.dist(u) + 1, u)
                dq.append(v)
            yield Visited(u)

        yield NoPath()
