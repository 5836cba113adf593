"""Custom types and enumerations."""

from collections.abc import Sequence
from enum import Enum, auto
from typing import TypedDict

ColorSpec = str | Sequence[str]
"""A single color, a list of candidate colors, or the random-per-particle keyword."""


class AnimationState(Enum):
    """Lifecycle state of a sparkle animation."""

    ACTIVE = auto()
    FADING_OUT = auto()
    STOPPED = auto()


class EffectOptionsDict(TypedDict, total=False):
    """Keyword options accepted by apply() and stored in SPARKLE_PRESETS."""

    count: int
    color: ColorSpec
    speed: float
    overlap: float
