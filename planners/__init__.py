# -*- coding: utf-8 -*-
"""
Planners on 4-connected unit-cost grids with a unified API:

planner.start(grid: GridModel) -> SearchRun          (lazy event stream + predecessor map)
planner.plan(grid: GridModel)
  -> {'success': bool, 'path': List[Cell] or None, 'events': List[Event], 'distance': float}
"""

from __future__ import annotations
from typing import Dict, Type

from envs.grid import GridModel
from .base import BasePlanner, SearchRun, SearchState
from .bellman_ford import BellmanFordPlanner
from .bfs import BFSPlanner
from .dfs import DFSPlanner
from .dijkstra import DijkstraPlanner
from .events import Event, Found, NoPath, Relaxed, Visited
from .reconstruct import reconstruct

# Mapping used by factories/CLIs
PLANNERS: Dict[str, Type[BasePlanner]] = {
    "dijkstra": DijkstraPlanner,
    "bfs": BFSPlanner,
    "dfs": DFSPlanner,
    "bellman_ford": BellmanFordPlanner,
}


def run(name: str, grid: GridModel) -> SearchRun:
    try:
        planner_cls = PLANNERS[name]
    except KeyError:
        raise ValueError(f"unknown planner {name!r}; choose from {sorted(PLANNERS)}") from None
    return planner_cls().start(grid)


def run_dijkstra(grid: GridModel) -> SearchRun:
    return DijkstraPlanner().start(grid)


def run_bfs(grid: GridModel) -> SearchRun:
    return BFSPlanner().start(grid)


def run_dfs(grid: GridModel) -> SearchRun:
    return DFSPlanner().start(grid)


def run_bellman_ford(grid: GridModel) -> SearchRun:
    return BellmanFordPlanner().start(grid)


__all__ = [
    "BasePlanner",
    "SearchRun",
    "SearchState",
    "DijkstraPlanner",
    "BFSPlanner",
    "DFSPlanner",
    "BellmanFordPlanner",
    "PLANNERS",
    "Event",
    "Visited",
    "Relaxed",
    "Found",
    "NoPath",
    "reconstruct",
    "run",
    "run_dijkstra",
    "run_bfs",
    "run_dfs",
    "run_bellman_ford",
]
