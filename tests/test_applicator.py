"""Unit tests for apply() and EffectHandle."""

import random
import unittest
from unittest.mock import MagicMock, patch

from sparkles.canvas import SparkleCanvas
from sparkles.conf import global_settings, settings
from sparkles.effect.applicator import apply
from sparkles.effect.config import EffectConfig
from sparkles.element import Element
from sparkles.errors import ConfigurationError
from sparkles.scheduling import ClockFrameScheduler, ManualFrameScheduler
from sparkles.sprites import default_atlas
from sparkles.types import AnimationState


class ApplyTestCase(unittest.TestCase):
    """Base class with a 100x20 element and a manual scheduler."""

    def setUp(self) -> None:
        """Create the element and scheduler."""
        self.element = Element(100, 20, name="button")
        self.scheduler = ManualFrameScheduler()

    def apply(self, **options: object):  # noqa: ANN201
        return apply(self.element, scheduler=self.scheduler, rng=random.Random(1), **options)


class TestApply(ApplyTestCase):
    """Test apply()."""

    def test_canvas_and_particles(self) -> None:
        """Test the reference example: 120x40 canvas, 5 pink particles inside the element box."""
        handle = self.apply(count=5, overlap=10, speed=1, color="#ff0080")

        assert handle.canvas.size == (120, 40)
        assert (handle.canvas.top, handle.canvas.left) == (-10, -10)
        assert len(handle.particles) == 5
        for particle in handle.particles:
            assert 0 <= particle.x < 100
            assert 0 <= particle.y < 20
            assert particle.color == "#ff0080"

    def test_canvas_appended_to_element(self) -> None:
        """Test that the overlay becomes a child of the element."""
        handle = self.apply(count=3)

        assert self.element.children == [handle.canvas]
        assert handle.canvas.effect is handle

    def test_starts_active(self) -> None:
        """Test that the effect is running right away."""
        handle = self.apply(count=3)

        assert handle.state is AnimationState.ACTIVE
        assert self.scheduler.pending_count == 1

    def test_list_colors(self) -> None:
        """Test that list colors only produce listed values, all of them."""
        handle = self.apply(count=50, color=["#aa0000", "#00aa00"])

        assert {p.color for p in handle.particles} == {"#aa0000", "#00aa00"}

    def test_accepts_config_object(self) -> None:
        """Test passing an EffectConfig, with keyword overrides."""
        config = EffectConfig(count=4, color="#123456")

        handle = apply(self.element, config, scheduler=self.scheduler, count=6)

        assert len(handle.particles) == 6
        assert handle.config.color == "#123456"

    def test_accepts_mapping(self) -> None:
        """Test passing a preset-style mapping."""
        handle = apply(self.element, {"count": 2, "overlap": 5}, scheduler=self.scheduler)

        assert len(handle.particles) == 2
        assert handle.canvas.size == (110, 30)

    def test_defaults_from_settings(self) -> None:
        """Test that missing options come from settings."""
        handle = apply(self.element, scheduler=self.scheduler)

        assert len(handle.particles) == 30
        assert all(p.color == "#FFFFFF" for p in handle.particles)

    def test_uses_default_atlas(self) -> None:
        """Test that the built-in atlas is used when none is configured."""
        handle = self.apply(count=1)
        assert handle.field.atlas is default_atlas()

    def test_falls_back_to_clock_scheduler(self) -> None:
        """Test that without scheduler or window the fixed-interval clock is used."""
        with patch("sparkles.scheduling.pyglet.clock") as clock:
            handle = apply(self.element, count=1)

        assert isinstance(handle.animation.scheduler, ClockFrameScheduler)
        clock.schedule_once.assert_called_once()

    def test_window_gives_paint_synced_scheduler(self) -> None:
        """Test that passing a window ties ticks to its draw event."""
        window = MagicMock()

        handle = apply(self.element, count=2, window=window)
        on_draw = window.push_handlers.call_args.kwargs["on_draw"]
        on_draw()

        assert handle.animation.tick_count == 1

    def test_settings_loaded_lazily(self) -> None:
        """Test apply() when settings come from the lazy loader, not configure()."""
        settings.reset()

        with patch.dict("os.environ", {"SPARKLES_SETTINGS_MODULE": "no_such_sparkle_settings"}):
            handle = apply(self.element, scheduler=self.scheduler)

        assert settings.is_configured() is True
        assert len(handle.particles) == global_settings.SPARKLE_DEFAULT_COUNT
        assert handle.animation.fade_ticks == global_settings.SPARKLE_FADE_TICKS
        assert handle.state is AnimationState.ACTIVE

    def test_invalid_config_attaches_nothing(self) -> None:
        """Test that bad configs raise before anything is created."""
        for options in ({"count": 0}, {"speed": 0}, {"overlap": -2}, {"color": "nope"}):
            with self.subTest(options=options), self.assertRaises(ConfigurationError):
                self.apply(**options)

        assert self.element.children == []
        assert self.scheduler.pending_count == 0


class TestEffectHandle(ApplyTestCase):
    """Test EffectHandle lifecycle controls."""

    def test_fade_out_stops(self) -> None:
        """Test that fade_out() ends in STOPPED within 101 ticks."""
        handle = self.apply(count=5)
        self.scheduler.run(3)

        handle.fade_out()

        assert handle.state is AnimationState.FADING_OUT
        assert self.scheduler.run(1000) <= 101
        assert handle.state is AnimationState.STOPPED
        assert handle.animation.handle is None
        assert all(p.opacity >= 0 for p in handle.particles)

    def test_stop_twice(self) -> None:
        """Test that stop() is idempotent."""
        handle = self.apply(count=5)

        handle.stop()
        assert handle.state is AnimationState.STOPPED
        handle.stop()
        assert handle.state is AnimationState.STOPPED
        assert self.scheduler.pending_count == 0

    def test_restart(self) -> None:
        """Test restart() from stopped and from fading."""
        handle = self.apply(count=5)
        handle.stop()

        handle.restart()
        assert handle.state is AnimationState.ACTIVE

        handle.fade_out()
        handle.restart()
        assert handle.state is AnimationState.ACTIVE
        assert self.scheduler.pending_count == 1

    def test_canvas_kept_after_stop(self) -> None:
        """Test that stopping leaves the overlay in place."""
        handle = self.apply(count=5)
        handle.stop()

        assert self.element.children == [handle.canvas]

    def test_remove_detaches_canvas(self) -> None:
        """Test that remove() stops and detaches the overlay."""
        handle = self.apply(count=5)

        handle.remove()
        handle.remove()

        assert handle.state is AnimationState.STOPPED
        assert self.element.children == []
        assert handle.canvas.effect is None

    def test_restart_after_remove_ignored(self) -> None:
        """Test that a removed effect can't be restarted."""
        handle = self.apply(count=5)
        handle.remove()

        with self.assertLogs("sparkles.effect.applicator", level="WARNING"):
            handle.restart()

        assert handle.state is AnimationState.STOPPED

    def test_reapply_replaces_previous_effect(self) -> None:
        """Test that applying twice to one element keeps a single overlay."""
        first = self.apply(count=5)
        second = self.apply(count=3)

        canvases = [child for child in self.element.children if isinstance(child, SparkleCanvas)]
        assert canvases == [second.canvas]
        assert first.removed is True
        assert first.state is AnimationState.STOPPED
        assert second.state is AnimationState.ACTIVE
        assert self.scheduler.pending_count == 1

    def test_remove_closes_window_scheduler(self) -> None:
        """Test that each window scheduler made by apply() detaches from the window again."""
        window = MagicMock()

        for _ in range(5):
            handle = apply(self.element, count=2, window=window)
        handle.remove()

        assert window.push_handlers.call_count == 5
        assert window.remove_handlers.call_count == 5
        assert self.element.children == []

    def test_remove_closes_clock_scheduler(self) -> None:
        """Test that removing a clock-driven effect unschedules its pending tick."""
        with patch("sparkles.scheduling.pyglet.clock") as clock:
            handle = apply(self.element, count=2)
            handle.remove()

        fire = clock.schedule_once.call_args.args[0]
        clock.unschedule.assert_called_with(fire)
        assert handle.owned_scheduler._pending == {}

    def test_remove_leaves_given_scheduler_open(self) -> None:
        """Test that a scheduler passed to apply() is not closed by remove()."""
        scheduler = MagicMock()

        handle = apply(self.element, count=2, scheduler=scheduler)
        handle.remove()

        assert handle.owned_scheduler is None
        scheduler.close.assert_not_called()

    def test_effects_are_independent(self) -> None:
        """Test that effects on different elements don't affect each other."""
        other = Element(50, 50)
        first = self.apply(count=5)
        second = apply(other, count=5, scheduler=self.scheduler)

        first.stop()
        self.scheduler.advance()

        assert first.state is AnimationState.STOPPED
        assert second.state is AnimationState.ACTIVE
        assert second.animation.tick_count == 1
        assert first.animation.tick_count == 0


if __name__ == "__main__":
    unittest.main()
