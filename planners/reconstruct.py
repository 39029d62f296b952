# -*- coding: utf-8 -*-
"""
Path reconstruction from a predecessor map.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from envs.errors import InternalConsistencyError, NoPathFound
from envs.grid import Cell


def reconstruct(predecessor: Mapping[Cell, Optional[Cell]],
                start: Tuple[int, int], goal: Tuple[int, int],
                max_steps: Optional[int] = None) -> List[Cell]:
    """
    Walk predecessor links from goal back to start.

    Returns the path ordered goal -> start (both inclusive).
    Raises NoPathFound if the chain never reaches start, and
    InternalConsistencyError if it revisits a cell or exceeds max_steps
    (default: one more than the number of predecessor entries).
    """
    start = Cell(*start)
    goal = Cell(*goal)
    if goal == start:
        return [goal]
    if predecessor.get(goal) is None:
        raise NoPathFound(start, goal)

    limit = max_steps if max_steps is not None else len(predecessor) + 1
    path = [goal]
    seen = {goal}
    cur = goal
    while cur != start:
        if len(path) - 1 >= limit:
            raise InternalConsistencyError(
                f"path from {tuple(goal)} exceeded {limit} steps without reaching {tuple(start)}")
        nxt = predecessor.get(cur)
        if nxt is None:
            raise NoPathFound(start, goal, f"predecessor chain from {tuple(goal)} "
                                            f"stops at {tuple(cur)}")
        nxt = Cell(*nxt)
        if nxt in seen:
            raise InternalConsistencyError(f"predecessor cycle through {tuple(nxt)}")
        seen.add(nxt)
        path.append(nxt)
        cur = nxt
    return path
