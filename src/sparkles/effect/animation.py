"""Sparkle animation loop.

SparkleAnimation drives one ParticleField. Each tick moves every particle,
decays its opacity, redraws the canvas and then asks the scheduler for the
next frame. Only one tick is ever pending per animation, and each animation
keeps its own handle, so any number of effects can run side by side.

Lifecycle:
    over()   -> ACTIVE: cancel any pending tick, re-randomize opacities,
                clear the fade flag and start ticking. Works from any state.
    out()    -> FADING_OUT: opacities decay faster and a countdown of
                SPARKLE_FADE_TICKS starts. Once it drops below zero the loop
                stops scheduling.
    cancel() -> STOPPED immediately, without fading. Safe to call repeatedly.

State changes made between ticks apply from the next tick on.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from sparkles.conf import settings
from sparkles.constants import (
    FADE_DECAY,
    FRAME_MODULUS_RANGE,
    FRAME_SIZE,
    HORIZONTAL_DIVISOR,
    HORIZONTAL_GATE_SCALE,
    STEADY_DECAY,
    TINT_ALPHA,
    VERTICAL_DIVISOR,
    VERTICAL_GATE_SCALE,
)
from sparkles.types import AnimationState

if TYPE_CHECKING:
    from collections.abc import Callable

    from sparkles.effect.particle import Particle, ParticleField
    from sparkles.scheduling import FrameScheduler

logger = logging.getLogger(__name__)


class SparkleAnimation:
    """Self-rescheduling update and draw loop for one particle field.

    Attributes:
        field: The particles and canvas being animated.
        scheduler: Frame scheduler that runs the ticks.
        handle: Handle of the pending tick, or None when nothing is scheduled.
        fade: Whether the loop is fading out.
        fade_count: Ticks left before a fade-out stops the loop.
        fade_ticks: Countdown armed by out().
        tick_count: Ticks run since the animation was created.
        on_stopped: Called with the animation whenever it stops.
    """

    def __init__(
        self,
        field: ParticleField,
        scheduler: FrameScheduler,
        *,
        fade_ticks: int | None = None,
        on_stopped: Callable[[SparkleAnimation], None] | None = None,
    ) -> None:
        """Initialize a stopped animation.

        Args:
            field: Particle field to animate.
            scheduler: Scheduler providing frame callbacks.
            fade_ticks: Fade-out countdown. Defaults to settings.SPARKLE_FADE_TICKS.
            on_stopped: Optional callback run when the loop stops.
        """
        self.field = field
        self.scheduler = scheduler
        self.handle: int | None = None
        self.fade = False
        self.fade_count = 0
        self.fade_ticks = settings.SPARKLE_FADE_TICKS if fade_ticks is None else fade_ticks
        self.tick_count = 0
        self.on_stopped = on_stopped

    @property
    def state(self) -> AnimationState:
        """Current lifecycle state."""
        if self.handle is None:
            return AnimationState.STOPPED
        if self.fade:
            return AnimationState.FADING_OUT
        return AnimationState.ACTIVE

    def over(self) -> None:
        """(Re)start the loop in the ACTIVE state."""
        self._cancel_pending()
        self.field.randomize_opacity()
        self.fade = False
        self._schedule()
        logger.debug("Sparkle animation active (%d particles)", len(self.field.particles))

    def out(self) -> None:
        """Start fading out."""
        self.fade = True
        self.fade_count = self.fade_ticks
        logger.debug("Sparkle animation fading out over %d ticks", self.fade_ticks)

    def cancel(self) -> None:
        """Stop immediately without fading. Does nothing if already stopped."""
        if self._cancel_pending():
            logger.debug("Sparkle animation cancelled")
            self._notify_stopped()

    def tick(self, timestamp: float) -> None:
        """Run one update and draw cycle, then schedule the next one.

        Args:
            timestamp: Frame time in milliseconds from the scheduler.
        """
        self.handle = None
        self.update(timestamp)
        self.draw()
        self.tick_count += 1

        if self.fade:
            self.fade_count -= 1
            if self.fade_count < 0:
                logger.debug("Sparkle animation faded out after %d ticks", self.tick_count)
                self._notify_stopped()
                return
        self._schedule()

    def update(self, timestamp: float) -> None:
        """Move every particle and decay its opacity."""
        for particle in self.field.particles:
            self._update_particle(particle, timestamp)

    def draw(self) -> None:
        """Redraw every particle onto a cleared canvas.

        Sprite frames are skipped while the atlas is unavailable; the color
        tint is applied either way.
        """
        canvas = self.field.canvas
        atlas = self.field.atlas
        canvas.clear()
        for particle in self.field.particles:
            frame = atlas.frame(particle.frame)
            if frame is not None:
                canvas.draw_sprite(frame, particle.x, particle.y, particle.opacity)
            if particle.color:
                canvas.tint(particle.x, particle.y, FRAME_SIZE, particle.color, TINT_ALPHA)

    def _update_particle(self, particle: Particle, timestamp: float) -> None:
        rng = self.field.rng
        speed = self.field.config.speed

        modulus = rng.randrange(*FRAME_MODULUS_RANGE)
        if math.floor(timestamp) % modulus == 0:
            particle.frame = self.field.random_frame()

        # Both gates compare two fresh draws; the vertical one moves when its gate fails.
        move_x = rng.random() > rng.random() * HORIZONTAL_GATE_SCALE
        move_y = rng.random() > rng.random() * VERTICAL_GATE_SCALE
        if move_x:
            particle.x += particle.delta_x * speed / HORIZONTAL_DIVISOR
        if not move_y:
            particle.y -= particle.delta_y * speed / VERTICAL_DIVISOR

        width, height = self.field.width, self.field.height
        if particle.x > width:
            particle.x = -FRAME_SIZE
        if particle.x < -FRAME_SIZE:
            particle.x = width
        if particle.y > height:
            particle.y = -FRAME_SIZE
        if particle.y < -FRAME_SIZE:
            particle.y = height

        particle.opacity -= FADE_DECAY if self.fade else STEADY_DECAY
        if particle.opacity <= 0:
            particle.opacity = 0 if self.fade else 1

    def _schedule(self) -> None:
        self.handle = self.scheduler.request_frame(self.tick)

    def _cancel_pending(self) -> bool:
        if self.handle is None:
            return False
        self.scheduler.cancel_frame(self.handle)
        self.handle = None
        return True

    def _notify_stopped(self) -> None:
        if self.on_stopped is not None:
            self.on_stopped(self)
