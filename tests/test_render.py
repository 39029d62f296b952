#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import os

import numpy as np
import pytest
from matplotlib import colors

from envs.grid import GridModel, RunGate
from planners import BFSPlanner, BellmanFordPlanner
from planners.events import Found, NoPath, Visited
from viz.render import (CURRENT_COLOR, GOAL_COLOR, OBSTACLE_COLOR, PATH_COLOR, START_COLOR,
                        VISITED_COLOR, FrameRecorder, grid_image, save_animation, save_png)


def grid_with_wall():
    return GridModel(5, 4, (0, 0), (4, 3), obstacles=[(2, 0), (2, 1)], gate=RunGate())


def rgb(name):
    return np.array(colors.to_rgb(name))


def test_static_image_layers():
    g = grid_with_wall()
    img = grid_image(g)
    assert img.shape == (4, 5, 3)
    assert np.allclose(img[0, 2], rgb(OBSTACLE_COLOR))
    assert np.allclose(img[0, 0], rgb(START_COLOR))
    assert np.allclose(img[3, 4], rgb(GOAL_COLOR))
    assert np.allclose(img[2, 2], rgb("white"))


def test_recorder_snapshots_every_event_and_the_path():
    g = grid_with_wall()
    run = BFSPlanner().start(g)
    rec = FrameRecorder(g)
    rec.consume_all(run)
    assert len(rec.frames) == len(run.events)
    assert rec.outcome == "found"
    rec.show_path(run.path)
    assert len(rec.frames) == len(run.events) + 1

    final = rec.frames[-1]
    for x, y in run.path[1:-1]:
        assert np.allclose(final[y, x], rgb(PATH_COLOR))
    # start/goal are painted last
    assert np.allclose(final[0, 0], rgb(START_COLOR))
    assert np.allclose(final[3, 4], rgb(GOAL_COLOR))


def test_recorder_marks_current_and_visited_cells():
    g = grid_with_wall()
    rec = FrameRecorder(g)
    rec.consume(Visited((1, 0)))
    rec.consume(Visited((1, 1)))
    img = rec.frames[-1]
    assert np.allclose(img[1, 1], rgb(CURRENT_COLOR))
    assert np.allclose(img[0, 1], rgb(VISITED_COLOR))


def test_recorder_without_recording_keeps_only_state():
    g = grid_with_wall()
    rec = FrameRecorder(g, record=False)
    rec.consume_all(BellmanFordPlanner().start(g))
    assert rec.frames == []
    assert rec.visited.sum() > 0


def test_no_path_clears_current_cell():
    g = grid_with_wall()
    rec = FrameRecorder(g)
    rec.consume(Visited((1, 0)))
    rec.consume(NoPath())
    assert rec.current is None
    assert rec.outcome == "no_path"
    rec.show_path(None)
    assert rec.path is None


def test_recorder_rejects_foreign_objects():
    rec = FrameRecorder(grid_with_wall())
    with pytest.raises(TypeError):
        rec.consume("visited")


def test_save_png_and_gif(tmp_path):
    g = grid_with_wall()
    run = BFSPlanner().start(g)
    rec = FrameRecorder(g).consume_all(run)
    rec.show_path(run.path)

    png = save_png(g, rec.image(), str(tmp_path / "frames" / "bfs.png"), title="bfs")
    assert os.path.getsize(png) > 0

    gif = save_animation(g, rec.frames, str(tmp_path / "bfs.gif"), fps=30)
    assert os.path.getsize(gif) > 0


def test_save_animation_needs_frames(tmp_path):
    with pytest.raises(ValueError):
        save_animation(grid_with_wall(), [], str(tmp_path / "empty.gif"))


def test_found_event_keeps_goal_colour():
    g = grid_with_wall()
    rec = FrameRecorder(g)
    rec.consume(Found((4, 3)))
    assert np.allclose(rec.frames[-1][3, 4], rgb(GOAL_COLOR))


def test_failed_saves_close_their_figures(tmp_path, monkeypatch):
    import matplotlib.pyplot as plt
    from matplotlib import animation
    from matplotlib.figure import Figure

    def fail(*args, **kwargs):
        raise OSError("disk full")

    g = grid_with_wall()
    before = set(plt.get_fignums())
    monkeypatch.setattr(Figure, "savefig", fail)
    with pytest.raises(OSError):
        save_png(g, grid_image(g), str(tmp_path / "a.png"))
    monkeypatch.setattr(animation.Animation, "save", fail)
    with pytest.raises(OSError):
        save_animation(g, [grid_image(g)], str(tmp_path / "a.gif"))
    assert set(plt.get_fignums()) == before
