"""Particle state and particle field construction."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sparkles.constants import DELTA_OFFSET, DELTA_RANGE, FRAME_OFFSETS, MAX_SIZE

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sparkles.canvas import SparkleCanvas
    from sparkles.effect.config import EffectConfig
    from sparkles.sprites.atlas import SpriteAtlas


@dataclass
class Particle:
    """Individual sparkle state.

    Position and opacity change every tick; the deltas, size and color are
    fixed when the particle is created. The vertical delta is never negative,
    so the vertical motion always rises.

    Attributes:
        x: Horizontal position in canvas pixels.
        y: Vertical position in canvas pixels (0 is the top edge).
        delta_x: Horizontal motion term, in [-500, 500).
        delta_y: Vertical rise term, in [0, 500].
        frame: X-offset of the current sprite frame in the atlas.
        size: Cosmetic size in [0, 2]; not used when drawing.
        color: Concrete tint color.
        opacity: Alpha in [0, 1].
    """

    x: float
    y: float
    delta_x: float
    delta_y: float
    frame: int
    size: float
    color: str
    opacity: float


def create_particles(
    width: float,
    height: float,
    config: EffectConfig,
    rng: random.Random | None = None,
    offsets: Sequence[int] = FRAME_OFFSETS,
) -> list[Particle]:
    """Create config.count particles spread over a width x height area.

    Args:
        width: Width of the spawn area; x is drawn from [0, width).
        height: Height of the spawn area; y is drawn from [0, height).
        config: Effect configuration (count and color are used).
        rng: Random source. Defaults to a fresh random.Random.
        offsets: Sprite frame offsets to pick from.

    Returns:
        The new particles.
    """
    rng = rng or random.Random()  # noqa: S311
    particles = []
    for _ in range(config.count):
        particles.append(
            Particle(
                x=rng.random() * width,
                y=rng.random() * height,
                delta_x=rng.random() * DELTA_RANGE - DELTA_OFFSET,
                delta_y=abs(rng.random() * DELTA_RANGE - DELTA_OFFSET),
                frame=rng.choice(offsets),
                size=round(rng.random() * MAX_SIZE, 2),
                color=config.resolve_color(rng),
                opacity=rng.random(),
            )
        )
    return particles


class ParticleField:
    """Owns the particles of one effect and the canvas they are drawn on.

    The particle count never changes: particles are created once and only
    their position, opacity and frame are updated afterwards.

    Attributes:
        canvas: Overlay the particles are drawn on.
        config: Effect configuration.
        atlas: Sprite atlas providing the frames.
        rng: Random source shared by creation and updates.
        particles: The particles, in creation order.
    """

    def __init__(
        self,
        canvas: SparkleCanvas,
        config: EffectConfig,
        atlas: SpriteAtlas,
        *,
        rng: random.Random | None = None,
        spawn_size: tuple[float, float] | None = None,
    ) -> None:
        """Create the field and its particles.

        Args:
            canvas: Overlay to draw on; its size bounds the wrap-around.
            config: Effect configuration.
            atlas: Sprite atlas.
            rng: Random source. Defaults to a fresh random.Random.
            spawn_size: Area particles start in. Defaults to the canvas size.
        """
        self.canvas = canvas
        self.config = config
        self.atlas = atlas
        self.rng = rng or random.Random()  # noqa: S311
        spawn_width, spawn_height = spawn_size or canvas.size
        self.particles = create_particles(spawn_width, spawn_height, config, self.rng, atlas.frame_offsets())

    @property
    def width(self) -> int:
        """Horizontal wrap-around bound."""
        return self.canvas.width

    @property
    def height(self) -> int:
        """Vertical wrap-around bound."""
        return self.canvas.height

    def random_frame(self) -> int:
        """Pick a sprite frame offset uniformly."""
        return self.rng.choice(self.atlas.frame_offsets())

    def randomize_opacity(self) -> None:
        """Give every particle a fresh random opacity."""
        for particle in self.particles:
            particle.opacity = self.rng.random()
