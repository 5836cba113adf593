"""Exceptions raised by the sparkle engine.

Only ConfigurationError ever reaches callers of apply(). The other kinds are
raised internally and handled where the effect can degrade instead:
- ResourceLoadError: the sprite atlas could not be loaded; drawing falls back
  to tint-only rendering.
- SchedulingUnavailable: no paint-synchronized scheduler exists for the host;
  resolve_scheduler() falls back to a fixed-interval clock.
"""


class SparkleError(Exception):
    """Base class for all sparkle engine errors."""


class ConfigurationError(SparkleError, ValueError):
    """Invalid effect configuration (count, speed, overlap or color)."""


class ResourceLoadError(SparkleError):
    """The sprite atlas could not be read or is too small."""


class SchedulingUnavailable(SparkleError):
    """The host offers no paint-synchronized frame callback."""


class ImageSizeError(SparkleError):
    """The dimensions of an image could not be determined."""
