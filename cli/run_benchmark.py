#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
run_benchmark.py
----------------
Headless comparison of the four planners on random grids:
- Generates grids across (sizes x densities x seeds)
- Runs every selected planner to completion (no pacing)
- Records success, path length, event count and wall time
- Writes a CSV and prints a per-planner summary

Example:
    python -m cli.run_benchmark \
        --sizes 20x20,40x30 \
        --densities 0.10,0.25 \
        --num-envs 20 \
        --planners dijkstra,bfs,dfs,bellman_ford \
        --outdir results/csv
"""

from __future__ import annotations
import argparse
import os
import time
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from envs.generator import generate_grid
from envs.grid import GridModel, RunGate
from planners import PLANNERS
from planners.events import Relaxed, Visited

CSV_COLUMNS = [
    "env_id", "cols", "rows", "density", "seed", "planner",
    "success", "path_len", "events", "expanded", "time_s",
]


# -------------------- helpers -------------------- #

def _parse_sizes(s: str) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for token in s.split(","):
        token = token.strip().lower()
        if "x" not in token:
            raise ValueError(f"Bad size '{token}', expected like 30x20")
        w, h = token.split("x")
        sizes.append((int(w), int(h)))
    return sizes


def _parse_densities(s: str) -> List[float]:
    vals = []
    for token in s.split(","):
        token = token.strip()
        if token.endswith("%"):
            vals.append(float(token[:-1]) / 100.0)
        else:
            vals.append(float(token))
    return vals


def run_case(planner_name: str, grid: GridModel) -> Dict:
    planner = PLANNERS[planner_name]()
    t0 = time.perf_counter()
    out = planner.plan(grid)
    t1 = time.perf_counter()
    path = out["path"]
    return {
        "planner": planner_name,
        "success": int(out["success"]),
        "path_len": (len(path) - 1) if path else np.nan,
        "events": len(out["events"]),
        "expanded": sum(1 for ev in out["events"] if isinstance(ev, (Visited, Relaxed))),
        "time_s": t1 - t0,
    }


def benchmark(sizes: List[Tuple[int, int]], densities: List[float], num_envs: int,
              planners: List[str], seed: int = 0, progress: bool = True) -> pd.DataFrame:
    rows = []
    total = len(sizes) * len(densities) * num_envs
    # Benchmarks use a private gate so they never contend with an interactive run.
    gate = RunGate()
    env_id = 0
    with tqdm(total=total, desc="Benchmark", disable=not progress) as pbar:
        for (W, H) in sizes:
            for dens in densities:
                for i in range(num_envs):
                    env_seed = (seed * 1_000_003 + env_id * 97 + W * 11 + H * 13) % 2**32
                    rng = np.random.default_rng(env_seed)
                    grid = generate_grid(W, H, density=dens, rng=rng, gate=gate)
                    for name in planners:
                        rec = run_case(name, grid)
                        rec.update(env_id=env_id, cols=W, rows=H, density=dens, seed=env_seed)
                        rows.append(rec)
                    env_id += 1
                    pbar.update(1)
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    return df.groupby("planner").agg(
        runs=("success", "size"),
        success_rate=("success", "mean"),
        mean_path_len=("path_len", "mean"),
        mean_events=("events", "mean"),
        mean_time_s=("time_s", "mean"),
    ).reset_index()


# -------------------- main -------------------- #

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Benchmark grid search planners on random grids.")
    ap.add_argument("--sizes", type=str, default="20x20,30x30",
                    help="Comma-separated grid sizes as COLSxROWS, e.g. 20x20,40x30")
    ap.add_argument("--densities", type=str, default="0.10,0.20,0.30",
                    help="Comma-separated densities (0–1 or %%, e.g., 10%%)")
    ap.add_argument("--num-envs", type=int, default=20, help="Grids per (size,density)")
    ap.add_argument("--planners", type=str, default=",".join(PLANNERS),
                    help="Comma-separated planners: " + ",".join(PLANNERS))
    ap.add_argument("--seed", type=int, default=0, help="Base RNG seed")
    ap.add_argument("--outdir", type=str, default="results/csv", help="Output directory for CSV")
    ap.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    args = ap.parse_args(argv)

    try:
        sizes = _parse_sizes(args.sizes)
        densities = _parse_densities(args.densities)
    except ValueError as e:
        ap.error(str(e))
    planners = [p.strip().lower() for p in args.planners.split(",") if p.strip()]
    for key in planners:
        if key not in PLANNERS:
            ap.error(f"Unknown planner '{key}'")

    print(f"[setup] sizes={sizes} densities={densities} num_envs={args.num_envs} "
          f"planners={planners} seed={args.seed}", flush=True)

    df = benchmark(sizes, densities, args.num_envs, planners, seed=args.seed,
                   progress=not args.no_progress)

    os.makedirs(args.outdir, exist_ok=True)
    stamp = time.strftime("%Y%m%d_%H%M%S")
    out_csv = os.path.join(args.outdir, f"benchmark_s{args.seed}_{stamp}.csv")
    df.to_csv(out_csv, index=False)
    print(f"[saved] {out_csv} ({len(df)} rows)", flush=True)

    summary = summarize(df)
    print(summary.to_string(index=False, float_format=lambda v: f"{v:.4f}"))
    print("[done]", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
