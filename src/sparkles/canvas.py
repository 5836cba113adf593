"""Raster overlay the sparkle particles are drawn on.

SparkleCanvas mirrors a 2D drawing surface placed over a host element: it is
padded by the overlap on every side and offset by -overlap so the padding
extends past the element's box. Pixels live in a Pillow RGBA image that
hosts can blit however they like (see sparkles.arcade_host).
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING

from PIL import Image, ImageColor

from sparkles.constants import CANVAS_CLASS

if TYPE_CHECKING:
    from sparkles.effect.applicator import EffectHandle

TRANSPARENT = (0, 0, 0, 0)


@functools.lru_cache(maxsize=256)
def parse_color(color: str) -> tuple[int, int, int]:
    """Convert any CSS-style color string Pillow understands to an RGB tuple.

    Raises:
        ValueError: If the color string is not recognised.
    """
    return ImageColor.getrgb(color)[:3]


class SparkleCanvas:
    """Overlay surface sized to a host element plus padding.

    Attributes:
        width: Canvas width in pixels (element width + 2 * overlap).
        height: Canvas height in pixels (element height + 2 * overlap).
        top: Vertical offset relative to the host element (-overlap).
        left: Horizontal offset relative to the host element (-overlap).
        position: Always "absolute"; the canvas floats over the element.
        pointer_events: Always "none"; the overlay never takes input.
        classes: Style classes carried by the overlay node.
        image: The RGBA pixel buffer.
        effect: Handle of the effect drawing on this canvas, if any.
    """

    def __init__(self, width: float, height: float, overlap: float = 0) -> None:
        """Create a transparent canvas.

        Args:
            width: Host element width in pixels.
            height: Host element height in pixels.
            overlap: Padding added on every side.
        """
        self.width = int(width + overlap * 2)
        self.height = int(height + overlap * 2)
        self.top = -overlap
        self.left = -overlap
        self.position = "absolute"
        self.pointer_events = "none"
        self.classes = {CANVAS_CLASS}
        self.image = Image.new("RGBA", (max(self.width, 1), max(self.height, 1)), TRANSPARENT)
        self.effect: EffectHandle | None = None

    @property
    def size(self) -> tuple[int, int]:
        """Canvas size as (width, height)."""
        return self.width, self.height

    def clear(self) -> None:
        """Reset every pixel to fully transparent."""
        self.image.paste(TRANSPARENT, (0, 0, self.image.width, self.image.height))

    def draw_sprite(self, frame: Image.Image, x: float, y: float, alpha: float = 1.0) -> None:
        """Composite frame at (x, y) with its alpha scaled by alpha.

        Parts of the frame that fall outside the canvas are clipped.
        """
        if alpha <= 0:
            return
        sprite = frame
        if alpha < 1:
            sprite = frame.copy()
            sprite.putalpha(frame.getchannel("A").point(lambda value: round(value * alpha)))

        left, top = round(x), round(y)
        source = (max(0, -left), max(0, -top))
        dest = (max(0, left), max(0, top))
        if source[0] >= sprite.width or source[1] >= sprite.height:
            return
        if dest[0] >= self.image.width or dest[1] >= self.image.height:
            return
        self.image.alpha_composite(sprite, dest=dest, source=source)

    def tint(self, x: float, y: float, size: int, color: str, alpha: float) -> None:
        """Fill a size x size box with color using source-atop compositing.

        Source-atop keeps the destination alpha and mixes the color into what
        is already drawn, so transparent pixels stay transparent and sprite
        pixels take on the tint without being replaced.
        """
        left, top = round(x), round(y)
        box = (
            max(0, left),
            max(0, top),
            min(self.image.width, left + size),
            min(self.image.height, top + size),
        )
        if box[0] >= box[2] or box[1] >= box[3]:
            return

        region = self.image.crop(box)
        coverage = region.getchannel("A")
        solid = Image.new("RGB", region.size, parse_color(color))
        mixed = Image.blend(region.convert("RGB"), solid, alpha)
        mixed.putalpha(coverage)
        self.image.paste(mixed, box[:2])

    def __repr__(self) -> str:
        return f"SparkleCanvas({self.width}x{self.height}, top={self.top}, left={self.left})"
