"""Effect configuration and validation."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields, replace
from numbers import Real
from typing import TYPE_CHECKING, Any

from sparkles.canvas import parse_color
from sparkles.conf import settings
from sparkles.constants import RANDOM_COLOR, RANDOM_COLOR_ALIASES
from sparkles.errors import ConfigurationError

if TYPE_CHECKING:
    import random

    from sparkles.types import ColorSpec


@dataclass(frozen=True)
class EffectConfig:
    """Settings for one sparkle effect.

    Unset fields take their defaults from settings (SPARKLE_DEFAULT_*) at
    construction time. The instance is validated on creation and never
    changes afterwards.

    Attributes:
        count: Number of particles, fixed for the life of the effect.
        color: A single color, a list of candidate colors (one picked per
               particle), or "random-per-particle" ("rainbow" also accepted).
        speed: Motion multiplier.
        overlap: Canvas padding in pixels on every side of the element.
    """

    count: int = field(default_factory=lambda: settings.SPARKLE_DEFAULT_COUNT)
    color: ColorSpec = field(default_factory=lambda: settings.SPARKLE_DEFAULT_COLOR)
    speed: float = field(default_factory=lambda: settings.SPARKLE_DEFAULT_SPEED)
    overlap: float = field(default_factory=lambda: settings.SPARKLE_DEFAULT_OVERLAP)

    def __post_init__(self) -> None:
        """Normalize the color option and validate every field."""
        if not isinstance(self.color, str) and isinstance(self.color, Sequence):
            object.__setattr__(self, "color", tuple(self.color))
        self.validate()

    def validate(self) -> None:
        """Check every field.

        Raises:
            ConfigurationError: If any field is out of range or a color is unknown.
        """
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count <= 0:
            msg = f"count must be a positive integer, got {self.count!r}"
            raise ConfigurationError(msg)
        if not _is_number(self.speed) or self.speed <= 0:
            msg = f"speed must be a positive number, got {self.speed!r}"
            raise ConfigurationError(msg)
        if not _is_number(self.overlap) or self.overlap < 0:
            msg = f"overlap must be a non-negative number, got {self.overlap!r}"
            raise ConfigurationError(msg)
        self._validate_color()

    @property
    def random_colors(self) -> bool:
        """Whether every particle gets its own random color."""
        return isinstance(self.color, str) and self.color.lower() in RANDOM_COLOR_ALIASES

    def resolve_color(self, rng: random.Random) -> str:
        """Pick the concrete color for one new particle."""
        if self.random_colors:
            return f"#{rng.randrange(0x1000000):06x}"
        if isinstance(self.color, tuple):
            return rng.choice(self.color)
        return self.color

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None, **overrides: Any) -> EffectConfig:  # noqa: ANN401
        """Build a config from a mapping such as a preset, plus keyword overrides.

        Unknown keys are rejected so typos don't silently fall back to defaults.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        merged = {**(options or {}), **overrides}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(merged) - known)
        if unknown:
            msg = f"Unknown effect option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        return cls(**merged)

    def with_options(self, **overrides: Any) -> EffectConfig:  # noqa: ANN401
        """Return a copy with some fields replaced, validated again."""
        return replace(self, **overrides)

    def _validate_color(self) -> None:
        color = self.color
        if isinstance(color, str):
            if self.random_colors:
                return
            candidates: tuple[Any, ...] = (color,)
        elif isinstance(color, tuple):
            if not color:
                msg = "color list must not be empty"
                raise ConfigurationError(msg)
            candidates = color
        else:
            msg = f"color must be a color string, a list of colors or {RANDOM_COLOR!r}, got {color!r}"
            raise ConfigurationError(msg)

        for candidate in candidates:
            if not isinstance(candidate, str):
                msg = f"colors must be strings, got {candidate!r}"
                raise ConfigurationError(msg)
            try:
                parse_color(candidate)
            except ValueError as e:
                msg = f"Unknown color {candidate!r}"
                raise ConfigurationError(msg) from e


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)
