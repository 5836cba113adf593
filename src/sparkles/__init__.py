"""Sparkles - sprite-based sparkle particle overlays for arcade and Pillow.

This package renders a decorative sparkle animation over any element:
- Particle field with per-particle color, drift and twinkle
- Self-rescheduling animation loop with fade-out and instant stop
- Paint-synchronized scheduling with a fixed-interval fallback
- Pillow canvas overlays that any host can blit
- Arcade sprite hosts and asset resolution
- Class-selector presets

Quick start:
    from sparkles import Element, ManualFrameScheduler, apply

    button = Element(width=100, height=20)
    scheduler = ManualFrameScheduler()
    handle = apply(button, count=5, color="#ff0080", overlap=10, scheduler=scheduler)

    scheduler.run(60)             # animate one second offline
    handle.canvas.image.save("frame.png")

    handle.fade_out()
    scheduler.run(200)            # stops on its own after the fade

Settings:
    from sparkles.conf import settings

    settings.configure(SPARKLE_DEFAULT_COUNT=40, SPARKLE_FADE_TICKS=60)
"""

__version__ = "0.1.0"

from sparkles.canvas import SparkleCanvas
from sparkles.conf import settings
from sparkles.effect import (
    EffectConfig,
    EffectHandle,
    Particle,
    ParticleField,
    SparkleAnimation,
    apply,
    create_particles,
)
from sparkles.element import Element, HostElement, query_selector_all
from sparkles.errors import (
    ConfigurationError,
    ImageSizeError,
    ResourceLoadError,
    SchedulingUnavailable,
    SparkleError,
)
from sparkles.helpers import apply_presets, apply_sparkle_effect, setup_logging
from sparkles.imagesize import image_size
from sparkles.scheduling import (
    ClockFrameScheduler,
    FrameScheduler,
    ManualFrameScheduler,
    WindowFrameScheduler,
    resolve_scheduler,
)
from sparkles.sprites import SpriteAtlas, default_atlas
from sparkles.types import AnimationState

__all__ = [
    "AnimationState",
    "ClockFrameScheduler",
    "ConfigurationError",
    "EffectConfig",
    "EffectHandle",
    "Element",
    "FrameScheduler",
    "HostElement",
    "ImageSizeError",
    "ManualFrameScheduler",
    "Particle",
    "ParticleField",
    "ResourceLoadError",
    "SchedulingUnavailable",
    "SparkleAnimation",
    "SparkleCanvas",
    "SparkleError",
    "SpriteAtlas",
    "WindowFrameScheduler",
    "__version__",
    "apply",
    "apply_presets",
    "apply_sparkle_effect",
    "create_particles",
    "default_atlas",
    "image_size",
    "query_selector_all",
    "resolve_scheduler",
    "settings",
    "setup_logging",
]
