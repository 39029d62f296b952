# -*- coding: utf-8 -*-
"""
Rendering sink for search events (matplotlib, headless).
"""

from .render import FrameRecorder, grid_image, render_grid, save_animation, save_png

__all__ = [
    "FrameRecorder",
    "grid_image",
    "render_grid",
    "save_animation",
    "save_png",
]
