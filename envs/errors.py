# -*- coding: utf-8 -*-
"""
Exceptions shared by the grid model and the search planners.

- InvalidOperation         : grid edit or run start rejected (endpoint cell, run active)
- NoPathFound              : goal not reachable; the expected user-facing outcome
- InternalConsistencyError : broken search bookkeeping (predecessor cycle, heap drift)
"""

from __future__ import annotations


class SearchError(Exception):
    """Base class for every error raised by the search core."""


class InvalidOperation(SearchError):
    pass


class NoPathFound(SearchError):
    def __init__(self, start, goal, message: str = ""):
        self.start = start
        self.goal = goal
        super().__init__(message or f"no path from {tuple(start)} to {tuple(goal)}")


class InternalConsistencyError(SearchError):
    pass
