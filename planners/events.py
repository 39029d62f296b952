# -*- coding: utf-8 -*-
"""
Search events, emitted in traversal order. Renderers consume nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from envs.grid import Cell


@dataclass(frozen=True)
class Visited:
    cell: Cell
    kind: ClassVar[str] = "visited"


@dataclass(frozen=True)
class Relaxed:
    cell: Cell
    via: Cell
    kind: ClassVar[str] = "relaxed"


@dataclass(frozen=True)
class Found:
    cell: Cell
    kind: ClassVar[str] = "found"


@dataclass(frozen=True)
class NoPath:
    kind: ClassVar[str] = "no_path"


Event = Union[Visited, Relaxed, Found, NoPath]

TERMINAL_EVENTS = (Found, NoPath)
