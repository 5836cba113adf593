"""Helper functions for applying sparkle effects.

This module provides the high-level entry points: setting up logging and
applying effects to every element matching a class selector, either with
explicit options or from the presets in settings.SPARKLE_PRESETS.
"""

import logging
from typing import Any

from rich.logging import RichHandler

from sparkles.conf import settings
from sparkles.effect.applicator import EffectHandle, apply
from sparkles.element import Element, query_selector_all
from sparkles.types import ColorSpec

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "DEBUG") -> None:
    """Configure logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def apply_sparkle_effect(
    root: Element,
    selector: str,
    count: int | None = None,
    color: ColorSpec | None = None,
    speed: float | None = None,
    overlap: float | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> list[EffectHandle]:
    """Apply a sparkle effect to every element under root matching selector.

    Options left as None take their defaults from settings.

    Args:
        root: Element whose subtree is searched (root included).
        selector: Class selector such as ".sparkle".
        count: Particles per element.
        color: Single color, list of colors, or "random-per-particle".
        speed: Motion multiplier.
        overlap: Canvas padding in pixels.
        **kwargs: Passed through to apply() (atlas, scheduler, window, rng).

    Returns:
        One handle per matching element, in document order.

    Raises:
        ConfigurationError: If the options are invalid.
        ValueError: If selector is not a ".class" selector.
    """
    options = {
        name: value
        for name, value in (("count", count), ("color", color), ("speed", speed), ("overlap", overlap))
        if value is not None
    }
    handles = [
        apply(element, options, **kwargs)
        for element in query_selector_all(root, selector)
    ]
    logger.debug("Applied %s to %d element(s)", selector, len(handles))
    return handles


def apply_presets(
    root: Element,
    presets: dict[str, dict[str, Any]] | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> dict[str, list[EffectHandle]]:
    """Apply every preset to the elements matching its selector.

    Args:
        root: Element whose subtree is searched.
        presets: Selector to options mapping. Defaults to settings.SPARKLE_PRESETS.
        **kwargs: Passed through to apply() (atlas, scheduler, window, rng).

    Returns:
        Handles per selector.

    Example:
        >>> page = Element(800, 600, children=[Element(120, 30, classes={"sparkle"})])
        >>> handles = apply_presets(page, scheduler=ManualFrameScheduler())
        >>> len(handles[".sparkle"])
        1
    """
    if presets is None:
        presets = settings.SPARKLE_PRESETS
    return {
        selector: apply_sparkle_effect(root, selector, **options, **kwargs)
        for selector, options in presets.items()
    }
