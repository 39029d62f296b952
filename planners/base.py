#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared machinery for the grid planners.

A planner's `search(grid, state)` is a generator that yields Events and
mutates a SearchState it does not own. A SearchRun owns that state for one
run, drives the generator, and holds the grid's run gate while it is live.

Driving modes:
    run.run_to_completion()   headless, returns every event
    run.step()                one event per call, caller controls pacing
    run.paced(delay)          iterator that sleeps between events
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

import numpy as np

from envs.errors import InternalConsistencyError, InvalidOperation
from envs.grid import Cell, GridModel
from planners.events import Event, Found, TERMINAL_EVENTS
from planners.reconstruct import reconstruct


# ------------------------------ Per-run state -------------------------------- #

@dataclass
class SearchState:
    distance: np.ndarray                        # (rows, cols) float, inf = unreached
    visited: np.ndarray                         # (rows, cols) bool
    predecessor: Dict[Cell, Optional[Cell]]

    @classmethod
    def fresh(cls, grid: GridModel) -> "SearchState":
        state = cls(
            distance=np.full(grid.shape, np.inf, dtype=np.float64),
            visited=np.zeros(grid.shape, dtype=bool),
            predecessor={},
        )
        state.distance[grid.start.y, grid.start.x] = 0.0
        state.predecessor[grid.start] = None
        return state

    def dist(self, c: Cell) -> float:
        return float(self.distance[c[1], c[0]])

    def relax(self, c: Cell, d: float, via: Cell) -> None:
        self.distance[c[1], c[0]] = d
        self.predecessor[c] = via

    def is_visited(self, c: Cell) -> bool:
        return bool(self.visited[c[1], c[0]])

    def mark_visited(self, c: Cell) -> None:
        self.visited[c[1], c[0]] = True


# --------------------------------- Run ---------------------------------------- #

class SearchRun:
    """One in-flight search over a grid. Not reusable; start a new run instead."""

    def __init__(self, planner: "BasePlanner", grid: GridModel):
        self.planner = planner
        self.grid = grid
        self.state = SearchState.fresh(grid)
        self.events: List[Event] = []
        self.status = "idle"      # idle | running | found | no_path | closed | failed
        self._gen: Optional[Iterator[Event]] = None

    # ---------------------------- properties ---------------------------- #

    @property
    def name(self) -> str:
        return self.planner.name

    @property
    def predecessor(self) -> Dict[Cell, Optional[Cell]]:
        return self.state.predecessor

    @property
    def finished(self) -> bool:
        return self.status in ("found", "no_path", "closed", "failed")

    @property
    def found(self) -> bool:
        return self.status == "found"

    @property
    def path(self) -> Optional[List[Cell]]:
        """Start -> goal path once the goal was found, else None."""
        if self.status != "found":
            return None
        back = reconstruct(self.state.predecessor, self.grid.start, self.grid.goal,
                           max_steps=self.grid.size)
        back.reverse()
        return back

    def distance_to(self, c) -> float:
        c = Cell(*c)
        if not self.grid.in_bounds(c):
            raise ValueError(f"cell {tuple(c)} is outside the grid")
        return self.state.dist(c)

    # ------------------------------ driving ------------------------------ #

    def _drive(self) -> Iterator[Event]:
        self.grid.gate.acquire()
        try:
            yield from self.planner.search(self.grid, self.state)
        finally:
            self.grid.gate.release()

    def step(self) -> Optional[Event]:
        """Advance by one event; None once the run is over."""
        if self.finished:
            return None
        if self._gen is None:
            # A refused start leaves the run idle so it can be retried.
            if self.grid.gate.active:
                raise InvalidOperation("a search is already running")
            self._gen = self._drive()
            self.status = "running"
        try:
            ev = next(self._gen, None)
        except Exception:
            self.status = "failed"
            raise
        if ev is None:
            self.status = "failed"
            raise InternalConsistencyError(f"{self.name} stopped without a Found/NoPath event")

        self.events.append(ev)
        if isinstance(ev, TERMINAL_EVENTS):
            self.status = "found" if isinstance(ev, Found) else "no_path"
            self._gen.close()
        return ev

    def __iter__(self) -> Iterator[Event]:
        # A consumer that stops early cancels the run.
        try:
            while True:
                ev = self.step()
                if ev is None:
                    return
                yield ev
        finally:
            if self.status == "running":
                self.close()

    def run_to_completion(self) -> List[Event]:
        for _ in self:
            pass
        return self.events

    def paced(self, delay: Optional[float] = None,
              sleep: Callable[[float], None] = time.sleep) -> Iterator[Event]:
        """Yield events one by one, pausing `delay` seconds after each non-terminal one."""
        if delay is None:
            delay = self.planner.default_delay
        try:
            for ev in self:
                yield ev
                if delay > 0 and not isinstance(ev, TERMINAL_EVENTS):
                    sleep(delay)
        finally:
            if self.status == "running":
                self.close()

    def close(self) -> None:
        """Stop consuming events and release the gate. The current step is never interrupted."""
        if self._gen is not None:
            self._gen.close()
        if not self.finished:
            self.status = "closed"

    def __enter__(self) -> "SearchRun":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SearchRun({self.name}, status={self.status}, events={len(self.events)})"


# -------------------------------- Planner -------------------------------------- #

class BasePlanner:
    name: str = "base"
    default_delay: float = 0.1  # seconds between animation frames

    def search(self, grid: GridModel, state: SearchState) -> Iterator[Event]:
        raise NotImplementedError

    def start(self, grid: GridModel) -> SearchRun:
        return SearchRun(self, grid)

    def plan(self, grid: GridModel) -> Dict:
        """
        Run headless to completion.

        Returns:
            {'success': bool, 'path': List[Cell] (start -> goal) or None,
             'events': List[Event], 'distance': float (inf when unreached)}
        """
        run = self.start(grid)
        events = run.run_to_completion()
        return {
            'success': run.found,
            'path': run.path,
            'events': events,
            'distance': run.distance_to(grid.goal),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
