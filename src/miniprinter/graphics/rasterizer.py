"""Board rasterizer for the thermal printer.

Turns the puzzle's SVG board into a 1-bit bitmap whose width is exactly the
printer's dot width (chars_per_line * pixels_per_char, 384 dots on 58mm
paper). The board keeps its aspect ratio through a single uniform scale.

The scale is snapped to two decimal places before rendering. At 203 DPI a
one-dot grid line drawn at a fractional offset can disappear entirely;
with a coarser scale every line lands on the same sub-pixel phase.
"""

import logging
import math
import re
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from miniprinter.errors import RenderError

logger = logging.getLogger(__name__)

_SVG_OPEN_TAG = re.compile(r"<svg\b[^>]*>")
_SHAPE_RENDERING = re.compile(r"""\bshape-rendering\s*=\s*(["']).*?\1""")


@dataclass(frozen=True)
class Bitmap:
    """A rendered monochrome image, PNG encoded."""

    width: int
    height: int
    scale: float
    png: bytes

    def image(self) -> Image.Image:
        """Decode to a PIL image (mode "1")."""
        return Image.open(BytesIO(self.png))

    def save(self, path: Union[str, Path]) -> None:
        """Write the PNG to disk."""
        Path(path).write_bytes(self.png)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_scale(intrinsic_width: float, target_width: int) -> float:
    """Uniform scale mapping the board width onto the target width.

    Rounded to two decimal places, halves away from zero.

    Raises:
        RenderError: if the intrinsic width is not positive
    """
    if intrinsic_width <= 0:
        raise RenderError(f"Board has non-positive width: {intrinsic_width}")
    return _round_half_up(target_width / intrinsic_width * 100) / 100


def canvas_size(intrinsic_size: Tuple[float, float], target_width: int) -> Tuple[int, int, float]:
    """Compute the output canvas for a board.

    Args:
        intrinsic_size: Board (width, height) in user units
        target_width: Printer width in dots

    Returns:
        (width, height, scale). Width is always target_width; height is the
        board height under the rounded scale.

    Raises:
        RenderError: if the board or the resulting canvas is empty
    """
    width, height = intrinsic_size
    if height <= 0:
        raise RenderError(f"Board has non-positive height: {height}")
    scale = compute_scale(width, target_width)
    canvas_height = _round_half_up(height * scale)
    if scale <= 0 or canvas_height <= 0:
        raise RenderError(
            f"Board {width}x{height} is too large to fit {target_width} dots"
        )
    return target_width, canvas_height, scale


def _crisp_edges(markup: str) -> str:
    """Force crispEdges shape rendering on the root <svg> element."""
    match = _SVG_OPEN_TAG.search(markup)
    if match is None:
        return markup

    tag = match.group(0)
    if _SHAPE_RENDERING.search(tag):
        tag = _SHAPE_RENDERING.sub('shape-rendering="crispEdges"', tag, count=1)
    else:
        tag = tag[:4] + ' shape-rendering="crispEdges"' + tag[4:]
    return markup[:match.start()] + tag + markup[match.end():]


def _load_cairosvg():
    try:
        import cairosvg
        from cairosvg import helpers, parser  # noqa: F401
    except (ImportError, OSError) as e:
        # OSError: cairocffi could not load the Cairo shared library
        raise RenderError(f"SVG renderer unavailable: {e}") from e
    return cairosvg


class _Viewport:
    """Unit context for resolving the root element's size.

    Stands in for a CairoSVG surface before one exists: no parent viewport,
    so percentage sizes resolve to zero and fall back to the viewBox.
    """

    def __init__(self, dpi: float):
        self.dpi = dpi
        self.context_width = None
        self.context_height = None
        self.font_size = 12 * dpi / 72


def board_size(markup: str, dpi: float) -> Tuple[float, float]:
    """Intrinsic (width, height) of the board in user units.

    Unrounded, unlike the pixel size of a rendered PNG.

    Raises:
        RenderError: if the markup cannot be parsed
    """
    cairosvg = _load_cairosvg()
    try:
        tree = cairosvg.parser.Tree(bytestring=markup.encode("utf-8"), unsafe=False)
        width, height, _ = cairosvg.helpers.node_format(_Viewport(dpi), tree)
    except Exception as e:
        raise RenderError(f"Board markup could not be parsed: {e}") from e
    return float(width), float(height)


def _svg_to_image(markup: str, dpi: float, scale: float) -> Image.Image:
    """Render SVG markup with CairoSVG at a uniform scale."""
    cairosvg = _load_cairosvg()
    try:
        png = cairosvg.svg2png(bytestring=markup.encode("utf-8"), dpi=dpi, scale=scale)
        return Image.open(BytesIO(png)).convert("RGBA")
    except Exception as e:
        raise RenderError(f"Board markup could not be rendered: {e}") from e


def render_board(markup: str, target_width: int, dpi: float) -> Bitmap:
    """Rasterize board markup to a printer-width monochrome bitmap.

    Args:
        markup: SVG document
        target_width: Printer width in dots
        dpi: Resolution used to resolve physical units in the markup

    Returns:
        Bitmap exactly target_width dots wide

    Raises:
        RenderError: if the markup cannot be parsed or rendered, or the
            canvas cannot be allocated
    """
    markup = _crisp_edges(markup)

    intrinsic = board_size(markup, dpi)
    width, height, scale = canvas_size(intrinsic, target_width)
    logger.debug(f"Board intrinsic size {intrinsic[0]}x{intrinsic[1]}, scale {scale}")

    rendered = _svg_to_image(markup, dpi, scale)

    try:
        canvas = Image.new("RGBA", (width, height), (255, 255, 255, 255))
    except (MemoryError, ValueError) as e:
        raise RenderError(f"Cannot allocate {width}x{height} canvas: {e}") from e

    # Anchor at the origin; overflow is clipped, uncovered area stays white
    overlay = rendered.crop((0, 0, width, height))
    composed = Image.alpha_composite(canvas, overlay)

    mono = composed.convert("L").convert("1", dither=Image.Dither.NONE)

    buf = BytesIO()
    mono.save(buf, format="PNG")

    logger.info(f"Rendered board {width}x{height} at scale {scale}")
    return Bitmap(width=width, height=height, scale=scale, png=buf.getvalue())
