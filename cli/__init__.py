# -*- coding: utf-8 -*-
"""
Command-line entry points (run with `python -m cli.<name>`):

- run_search     : run one or all planners on a grid, print/animate, write PNG/GIF
- run_benchmark  : compare planners on random grids, write CSV summary
"""
__all__ = [
    "run_search",
    "run_benchmark",
]
