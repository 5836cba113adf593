"""Public entry point that attaches sparkle effects to elements.

Example usage:
    from sparkles import Element, apply

    button = Element(width=100, height=20)
    handle = apply(button, count=5, color="#ff0080", speed=1, overlap=10)

    handle.fade_out()   # decay and stop
    handle.restart()    # back to full sparkle
    handle.stop()       # stop right away
    handle.remove()     # stop and detach the canvas from the element
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sparkles.canvas import SparkleCanvas
from sparkles.effect.animation import SparkleAnimation
from sparkles.effect.config import EffectConfig
from sparkles.effect.particle import ParticleField
from sparkles.scheduling import resolve_scheduler
from sparkles.sprites.atlas import atlas_from_settings

if TYPE_CHECKING:
    import random
    from collections.abc import Mapping

    from sparkles.effect.particle import Particle
    from sparkles.element import HostElement
    from sparkles.scheduling import ClockFrameScheduler, FrameScheduler, WindowFrameScheduler
    from sparkles.sprites.atlas import SpriteAtlas
    from sparkles.types import AnimationState

logger = logging.getLogger(__name__)


class EffectHandle:
    """Controls one running sparkle effect.

    Attributes:
        element: Element the effect is attached to.
        canvas: Overlay canvas appended to the element.
        field: Particle field being animated.
        animation: Animation loop driving the field.
        owned_scheduler: Scheduler created for this effect alone, closed by remove().
    """

    def __init__(
        self,
        element: HostElement,
        canvas: SparkleCanvas,
        field: ParticleField,
        animation: SparkleAnimation,
        owned_scheduler: WindowFrameScheduler | ClockFrameScheduler | None = None,
    ) -> None:
        """Bundle the parts of an applied effect."""
        self.element = element
        self.canvas = canvas
        self.field = field
        self.animation = animation
        self.owned_scheduler = owned_scheduler
        self.removed = False

    @property
    def state(self) -> AnimationState:
        """Current lifecycle state of the animation."""
        return self.animation.state

    @property
    def particles(self) -> list[Particle]:
        """The effect's particles."""
        return self.field.particles

    @property
    def config(self) -> EffectConfig:
        """The validated configuration the effect runs with."""
        return self.field.config

    def fade_out(self) -> None:
        """Fade the particles out, then stop."""
        self.animation.out()

    def stop(self) -> None:
        """Stop immediately. Calling it again does nothing."""
        self.animation.cancel()

    def restart(self) -> None:
        """Return to full sparkle from any state."""
        if self.removed:
            logger.warning("Ignoring restart of a removed sparkle effect on %r", self.element)
            return
        self.animation.over()

    def remove(self) -> None:
        """Stop the effect, detach its canvas and close the scheduler apply() made for it."""
        self.stop()
        if self.removed:
            return
        self.element.remove_child(self.canvas)
        self.canvas.effect = None
        if self.owned_scheduler is not None:
            self.owned_scheduler.close()
        self.removed = True
        logger.debug("Removed sparkle effect from %r", self.element)


def apply(
    element: HostElement,
    config: EffectConfig | Mapping[str, Any] | None = None,
    *,
    atlas: SpriteAtlas | None = None,
    scheduler: FrameScheduler | None = None,
    window: Any = None,  # noqa: ANN401
    rng: random.Random | None = None,
    **options: Any,  # noqa: ANN401
) -> EffectHandle:
    """Attach a sparkle effect to element and start it.

    The element's width and height are read once. A canvas padded by the
    overlap is appended to the element and the particles are spread over the
    element's own area. If the element already carries a sparkle effect, that
    effect is removed first so overlays never pile up.

    Args:
        element: Target element (width, height, append_child, remove_child).
        config: An EffectConfig or a mapping of options. Defaults come from settings.
        atlas: Sprite atlas. Defaults to settings.SPARKLE_SPRITE or the built-in atlas.
        scheduler: Frame scheduler. Defaults to resolve_scheduler(window), which the
            handle then owns and closes on remove().
        window: Host window used to pick a paint-synchronized scheduler.
        rng: Random source for the effect.
        **options: Individual config fields (count, color, speed, overlap)
                   overriding those in config.

    Returns:
        Handle controlling the running effect.

    Raises:
        ConfigurationError: If the configuration is invalid. Nothing is
            attached or started in that case.
    """
    if isinstance(config, EffectConfig):
        config = config.with_options(**options) if options else config
    else:
        config = EffectConfig.from_options(config, **options)

    _remove_existing(element)

    width, height = element.width, element.height
    canvas = SparkleCanvas(width, height, config.overlap)
    element.append_child(canvas)

    field = ParticleField(
        canvas,
        config,
        atlas or atlas_from_settings(),
        rng=rng,
        spawn_size=(width, height),
    )
    owned_scheduler = None
    if scheduler is None:
        scheduler = owned_scheduler = resolve_scheduler(window)
    animation = SparkleAnimation(field, scheduler)
    handle = EffectHandle(element, canvas, field, animation, owned_scheduler)
    canvas.effect = handle

    animation.over()
    logger.debug("Applied sparkle effect to %r with %s", element, config)
    return handle


def _remove_existing(element: HostElement) -> None:
    for child in list(getattr(element, "children", ())):
        if isinstance(child, SparkleCanvas) and child.effect is not None:
            logger.debug("Replacing existing sparkle effect on %r", element)
            child.effect.remove()
