"""Graphics module for miniprinter - board rasterization."""

from miniprinter.graphics.rasterizer import (
    Bitmap,
    board_size,
    canvas_size,
    compute_scale,
    render_board,
)

__all__ = [
    "Bitmap",
    "board_size",
    "canvas_size",
    "compute_scale",
    "render_board",
]
