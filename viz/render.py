#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
render.py
---------
Matplotlib sink for search event streams.

FrameRecorder consumes Events in emission order and keeps an RGB snapshot per
event; save_animation() turns those snapshots into a GIF, save_png() writes a
single frame. Nothing here feeds back into the search.

Layers (bottom to top):
  - free cells (white) / obstacles (grey)
  - visited or relaxed cells (light pink), the latest one darker
  - final path (yellow)
  - start (green), goal (red)
"""

from __future__ import annotations

import os
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

# --- headless plotting; the sink never opens a window
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib import animation, colors

from envs.grid import Cell, GridModel
from planners.events import Event, Found, NoPath, Relaxed, Visited


# Canvas colours of the interactive page
FREE_COLOR = "white"
OBSTACLE_COLOR = "grey"
VISITED_COLOR = "#ffb3d9"
CURRENT_COLOR = "#ff66b2"
PATH_COLOR = "yellow"
START_COLOR = "green"
GOAL_COLOR = "red"
GRID_LINE_COLOR = "#dddddd"


def _paint(rgb: np.ndarray, cell: Tuple[int, int], color: str) -> None:
    x, y = cell
    rgb[y, x] = colors.to_rgb(color)


def grid_image(grid: GridModel,
               visited: Optional[np.ndarray] = None,
               current: Optional[Tuple[int, int]] = None,
               path: Optional[Iterable[Tuple[int, int]]] = None) -> np.ndarray:
    """(rows, cols, 3) float RGB image of one animation frame."""
    rgb = np.empty((grid.rows, grid.cols, 3), dtype=float)
    rgb[:] = colors.to_rgb(FREE_COLOR)
    occ = grid.occupancy()
    rgb[occ] = colors.to_rgb(OBSTACLE_COLOR)
    if visited is not None:
        rgb[visited & ~occ] = colors.to_rgb(VISITED_COLOR)
    if current is not None:
        _paint(rgb, current, CURRENT_COLOR)
    if path is not None:
        for c in path:
            _paint(rgb, c, PATH_COLOR)
    _paint(rgb, grid.start, START_COLOR)
    _paint(rgb, grid.goal, GOAL_COLOR)
    return rgb


def render_grid(grid: GridModel, ax=None, *,
                image: Optional[np.ndarray] = None,
                visited: Optional[np.ndarray] = None,
                current: Optional[Tuple[int, int]] = None,
                path: Optional[Iterable[Tuple[int, int]]] = None,
                title: Optional[str] = None,
                grid_lines: bool = True):
    """Draw one frame on `ax` (a new figure if None) and return the axis."""
    if ax is None:
        _, ax = plt.subplots(figsize=(max(3, grid.cols / 4), max(3, grid.rows / 4)), dpi=120)
    if image is None:
        image = grid_image(grid, visited=visited, current=current, path=path)

    ax.imshow(image, interpolation="nearest", origin="upper")
    if grid_lines:
        ax.set_xticks(np.arange(-0.5, grid.cols, 1), minor=True)
        ax.set_yticks(np.arange(-0.5, grid.rows, 1), minor=True)
        ax.grid(which="minor", color=GRID_LINE_COLOR, linewidth=0.5)
        ax.tick_params(which="minor", length=0)
    ax.set_xticks([]); ax.set_yticks([])
    if title:
        ax.set_title(title, fontsize=10)
    return ax


# ------------------------------ Event sink ---------------------------------- #

class FrameRecorder:
    """Consumes events and records one RGB frame per event."""

    def __init__(self, grid: GridModel, record: bool = True):
        self.grid = grid
        self.record = record
        self.visited = np.zeros(grid.shape, dtype=bool)
        self.current: Optional[Cell] = None
        self.path: Optional[List[Cell]] = None
        self.outcome: Optional[str] = None   # "found" | "no_path"
        self.frames: List[np.ndarray] = []

    def consume(self, ev: Event) -> None:
        if isinstance(ev, (Visited, Relaxed)):
            x, y = ev.cell
            self.visited[y, x] = True
            self.current = ev.cell
        elif isinstance(ev, Found):
            self.current = ev.cell
            self.outcome = "found"
        elif isinstance(ev, NoPath):
            self.current = None
            self.outcome = "no_path"
        else:
            raise TypeError(f"not a search event: {ev!r}")
        if self.record:
            self.frames.append(self.image())

    def consume_all(self, events: Iterable[Event]) -> "FrameRecorder":
        for ev in events:
            self.consume(ev)
        return self

    def show_path(self, path: Optional[Sequence[Tuple[int, int]]]) -> None:
        if path is None:
            return
        self.path = [Cell(*c) for c in path]
        self.current = None
        if self.record:
            self.frames.append(self.image())

    def image(self) -> np.ndarray:
        return grid_image(self.grid, visited=self.visited, current=self.current, path=self.path)


# ------------------------------ File output --------------------------------- #

def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_png(grid: GridModel, image: np.ndarray, path: str, title: Optional[str] = None) -> str:
    fig, ax = plt.subplots(figsize=(max(3, grid.cols / 4), max(3, grid.rows / 4)), dpi=120)
    try:
        render_grid(grid, ax=ax, image=image, title=title)
        fig.tight_layout()
        _ensure_parent(path)
        fig.savefig(path, bbox_inches="tight")
    finally:
        plt.close(fig)
    return path


def save_animation(grid: GridModel, frames: Sequence[np.ndarray], path: str,
                   fps: int = 10, title: Optional[str] = None) -> str:
    """Write frames as an animated GIF (Pillow writer)."""
    if not frames:
        raise ValueError("no frames to animate")
    fig, ax = plt.subplots(figsize=(max(3, grid.cols / 4), max(3, grid.rows / 4)), dpi=100)
    try:
        render_grid(grid, ax=ax, image=frames[0], title=title)
        im = ax.images[0]

        def _update(i):
            im.set_data(frames[i])
            return (im,)

        ani = animation.FuncAnimation(fig, _update, frames=len(frames),
                                      interval=1000 / max(1, fps), blit=True)
        _ensure_parent(path)
        ani.save(path, writer=animation.PillowWriter(fps=fps))
    finally:
        plt.close(fig)
    return path
