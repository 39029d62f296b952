#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import pytest

from envs.errors import InternalConsistencyError, NoPathFound
from planners.reconstruct import reconstruct


def test_walks_from_goal_back_to_start():
    pred = {(0, 0): None, (1, 0): (0, 0), (1, 1): (1, 0), (2, 1): (1, 1)}
    assert reconstruct(pred, (0, 0), (2, 1)) == [(2, 1), (1, 1), (1, 0), (0, 0)]


def test_goal_equal_to_start_is_a_single_cell():
    assert reconstruct({(3, 3): None}, (3, 3), (3, 3)) == [(3, 3)]


def test_missing_goal_predecessor_is_no_path():
    pred = {(0, 0): None, (1, 0): (0, 0)}
    with pytest.raises(NoPathFound) as exc:
        reconstruct(pred, (0, 0), (4, 4))
    assert exc.value.goal == (4, 4)


def test_dead_end_chain_is_no_path():
    pred = {(2, 2): (2, 1)}
    with pytest.raises(NoPathFound):
        reconstruct(pred, (0, 0), (2, 2))


def test_cycle_is_an_internal_error_not_a_hang():
    pred = {(0, 0): None, (1, 0): (2, 0), (2, 0): (3, 0), (3, 0): (1, 0)}
    with pytest.raises(InternalConsistencyError):
        reconstruct(pred, (0, 0), (1, 0))


def test_self_loop_is_an_internal_error():
    with pytest.raises(InternalConsistencyError):
        reconstruct({(1, 1): (1, 1)}, (0, 0), (1, 1))


def test_step_budget_is_enforced():
    pred = {(0, 0): None, (1, 0): (0, 0), (2, 0): (1, 0), (3, 0): (2, 0)}
    assert len(reconstruct(pred, (0, 0), (3, 0), max_steps=3)) == 4
    with pytest.raises(InternalConsistencyError):
        reconstruct(pred, (0, 0), (3, 0), max_steps=2)
