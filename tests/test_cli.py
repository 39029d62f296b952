#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os

import pandas as pd
import pytest

from cli import run_benchmark, run_search


def test_run_search_default_grid(capsys):
    assert run_search.main(["--planners", "all", "--cols", "8", "--rows", "8"]) == 0
    out = capsys.readouterr().out
    for name in ("dijkstra", "bfs", "dfs", "bellman_ford"):
        assert f"[run] {name}: found" in out
    assert "[done]" in out


def test_run_search_reports_no_path(capsys):
    # goal (5,5) boxed in
    walls = "5,4;4,5;6,5;5,6"
    assert run_search.main(["--planners", "bfs,dfs", "--cols", "8", "--rows", "8",
                            "--walls", walls]) == 0
    out = capsys.readouterr().out
    assert "[run] bfs: no path" in out
    assert "[run] dfs: no path" in out


def test_run_search_from_map_with_images(tmp_path, capsys):
    m = tmp_path / "maze.txt"
    m.write_text("S.#.\n..#.\n...G\n")
    png = tmp_path / "out" / "search.png"
    gif = tmp_path / "out" / "search.gif"
    code = run_search.main(["--planners", "dijkstra,bfs", "--map", str(m),
                            "--png", str(png), "--gif", str(gif)])
    assert code == 0
    assert (tmp_path / "out" / "search_dijkstra.png").exists()
    assert (tmp_path / "out" / "search_bfs.gif").exists()
    assert "[saved]" in capsys.readouterr().out


def test_run_search_animates_without_sleeping(capsys):
    assert run_search.main(["--planners", "bfs", "--cols", "6", "--rows", "6",
                            "--animate", "--delay", "0"]) == 0
    assert "*" in capsys.readouterr().out


def test_run_search_rejects_bad_input():
    with pytest.raises(SystemExit):
        run_search.main(["--planners", "a_star"])
    with pytest.raises(SystemExit):
        run_search.main(["--cols", "8", "--rows", "8", "--walls", "2,2"])   # start cell


def test_benchmark_writes_csv(tmp_path, capsys):
    code = run_benchmark.main(["--sizes", "10x8", "--densities", "0.1,20%", "--num-envs", "2",
                               "--outdir", str(tmp_path), "--no-progress"])
    assert code == 0
    files = [f for f in os.listdir(tmp_path) if f.endswith(".csv")]
    assert len(files) == 1
    df = pd.read_csv(tmp_path / files[0])
    assert len(df) == 1 * 2 * 2 * 4
    assert set(df["planner"]) == {"dijkstra", "bfs", "dfs", "bellman_ford"}
    assert "[done]" in capsys.readouterr().out


def test_benchmark_summary_matches_shortest_paths():
    df = run_benchmark.benchmark([(12, 12)], [0.2], 4, ["dijkstra", "bfs"], seed=5, progress=False)
    pivot = df.pivot(index="env_id", columns="planner", values="path_len")
    assert pivot["dijkstra"].equals(pivot["bfs"])
    summary = run_benchmark.summarize(df)
    assert list(summary["runs"]) == [4, 4]
