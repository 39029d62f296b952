#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_search.py
-------------
Run one or all planners on a grid and report what they found.

Grid source (first match wins):
- --map FILE          ASCII map (S start, G goal, # obstacle, . free)
- --density D         random obstacle field (seeded by --seed)
- otherwise           empty --cols x --rows grid, start (2,2), goal (cols-3,rows-3)
--walls "x,y;x,y"     toggles extra obstacles on top of any of the above.

Example:
    python -m cli.run_search --planners all --cols 30 --rows 20 \
        --walls "5,1;5,2;5,3;5,4" --png out/search.png --gif out/search.gif

    python -m cli.run_search --planners bfs --density 0.3 --seed 4 --animate --delay 0.02
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import Dict, List, Optional, Tuple

import numpy as np

from envs.errors import SearchError
from envs.generator import generate_grid, grid_from_ascii, grid_to_ascii
from envs.grid import GridModel
from planners import PLANNERS
from planners.events import Relaxed, Visited

DEFAULT_COLS = 20
DEFAULT_ROWS = 20


# -------------------- helpers -------------------- #

def _parse_planners(s: str) -> List[str]:
    if s.strip().lower() == "all":
        return list(PLANNERS)
    names = [p.strip().lower() for p in s.split(",") if p.strip()]
    for name in names:
        if name not in PLANNERS:
            raise ValueError(f"Unknown planner '{name}' (choose from {', '.join(PLANNERS)})")
    return names


def _parse_cells(s: str) -> List[Tuple[int, int]]:
    cells: List[Tuple[int, int]] = []
    for token in s.split(";"):
        token = token.strip()
        if not token:
            continue
        if "," not in token:
            raise ValueError(f"Bad cell '{token}', expected like 3,4")
        x, y = token.split(",")
        cells.append((int(x), int(y)))
    return cells


def build_grid(args) -> GridModel:
    if args.map:
        with open(args.map, "r", encoding="utf-8") as f:
            grid = grid_from_ascii(f.read())
    elif args.density is not None:
        rng = np.random.default_rng(args.seed)
        grid = generate_grid(args.cols, args.rows, density=args.density,
                             ensure_status=args.ensure, rng=rng)
    else:
        grid = GridModel.with_default_endpoints(args.cols, args.rows)
    for c in _parse_cells(args.walls or ""):
        grid.toggle_obstacle(c)
    return grid


def _ascii_frame(grid: GridModel, seen: set, path: Optional[list]) -> str:
    lines = grid_to_ascii(grid).splitlines()
    rows = [list(ln) for ln in lines]
    for x, y in seen:
        if rows[y][x] == ".":
            rows[y][x] = "o"
    for x, y in path or []:
        if rows[y][x] in ".o":
            rows[y][x] = "*"
    return "\n".join("".join(r) for r in rows)


def run_one(name: str, grid: GridModel, *, animate: bool = False,
            delay: Optional[float] = None, recorder=None) -> Dict:
    planner = PLANNERS[name]()
    run = planner.start(grid)
    seen = set()
    with run:
        events = run.paced(delay) if animate else iter(run)
        for ev in events:
            if recorder is not None:
                recorder.consume(ev)
            if isinstance(ev, (Visited, Relaxed)):
                seen.add(ev.cell)
                if animate:
                    print("\x1b[H\x1b[2J" + _ascii_frame(grid, seen, None), flush=True)
    path = run.path
    if recorder is not None:
        recorder.show_path(path)
    if animate:
        print("\x1b[H\x1b[2J" + _ascii_frame(grid, seen, path), flush=True)
    return {
        "planner": name,
        "success": run.found,
        "path_len": (len(path) - 1) if path else None,
        "events": len(run.events),
        "expanded": sum(1 for ev in run.events if isinstance(ev, (Visited, Relaxed))),
        "path": path,
    }


# -------------------- main -------------------- #

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Animate grid search planners (Dijkstra, BFS, DFS, Bellman-Ford).")
    ap.add_argument("--planners", type=str, default="all",
                    help="Comma-separated planners or 'all': " + ",".join(PLANNERS))
    ap.add_argument("--cols", type=int, default=DEFAULT_COLS, help="Grid width")
    ap.add_argument("--rows", type=int, default=DEFAULT_ROWS, help="Grid height")
    ap.add_argument("--map", type=str, default=None, help="ASCII map file")
    ap.add_argument("--walls", type=str, default=None, help='Extra obstacles, e.g. "3,4;3,5"')
    ap.add_argument("--density", type=float, default=None, help="Random obstacle density (0-1)")
    ap.add_argument("--ensure", type=str, default="any", choices=["any", "success", "failure"],
                    help="Reachability guarantee for random grids")
    ap.add_argument("--seed", type=int, default=0, help="RNG seed for random grids")
    ap.add_argument("--animate", action="store_true", help="Redraw the grid in the terminal after every event")
    ap.add_argument("--delay", type=float, default=None,
                    help="Seconds between frames when animating (default: per planner)")
    ap.add_argument("--png", type=str, default=None, help="Write the final frame of each planner to this PNG")
    ap.add_argument("--gif", type=str, default=None, help="Write an animated GIF of each planner's events")
    ap.add_argument("--fps", type=int, default=20, help="GIF frames per second")
    args = ap.parse_args(argv)

    try:
        names = _parse_planners(args.planners)
        grid = build_grid(args)
    except (ValueError, OSError, SearchError) as e:
        ap.error(str(e))

    print(f"[setup] {grid}", flush=True)

    rows = []
    for name in names:
        recorder = None
        if args.png or args.gif:
            from viz.render import FrameRecorder
            recorder = FrameRecorder(grid, record=bool(args.gif))
        try:
            res = run_one(name, grid, animate=args.animate, delay=args.delay, recorder=recorder)
        except SearchError as e:
            print(f"[error] {name}: {e}", flush=True)
            return 2
        rows.append(res)
        print(f"[run] {name}: {'found' if res['success'] else 'no path'} | "
              f"events={res['events']} path_len={res['path_len']}", flush=True)

        if recorder is not None:
            from viz.render import save_animation, save_png
            title = f"{name}: {'found' if res['success'] else 'no path'}"
            if args.png:
                out = _suffixed(args.png, name, len(names))
                save_png(grid, recorder.image(), out, title=title)
                print(f"[saved] {out}", flush=True)
            if args.gif:
                out = _suffixed(args.gif, name, len(names))
                save_animation(grid, recorder.frames, out, fps=args.fps, title=title)
                print(f"[saved] {out}", flush=True)

    # Pretty print
    print(f"{'planner':13} {'succ':4} {'events':>7} {'expanded':>9} {'path_len':>9}")
    for r in rows:
        plen = "-" if r["path_len"] is None else str(r["path_len"])
        print(f"{r['planner']:13} {int(r['success']):4d} {r['events']:7d} {r['expanded']:9d} {plen:>9}")
    print("[done]", flush=True)
    return 0


def _suffixed(path: str, name: str, n: int) -> str:
    """out.png -> out_bfs.png when several planners write files."""
    if n == 1:
        return path
    root, ext = os.path.splitext(path)
    return f"{root}_{name}{ext}"


if __name__ == "__main__":
    sys.exit(main())
