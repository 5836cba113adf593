"""Default settings for Sparkles.

Users can override these in their project's settings.py file.

Example:
    # In your project's settings.py:
    from sparkles.conf import global_settings

    SPARKLE_DEFAULT_COLOR = "#ff0080"
    SPARKLE_PRESETS = {
        **global_settings.SPARKLE_PRESETS,
        ".sparkle-huge": {"count": 80, "color": "random-per-particle", "speed": 4, "overlap": 40},
    }
"""

# Effect defaults
SPARKLE_DEFAULT_COUNT = 30
"""Number of particles when no count is given."""

SPARKLE_DEFAULT_COLOR = "#FFFFFF"
"""Tint color when no color is given."""

SPARKLE_DEFAULT_SPEED = 1
"""Motion speed multiplier when no speed is given."""

SPARKLE_DEFAULT_OVERLAP = 0
"""Canvas padding in pixels when no overlap is given."""

# Animation settings
SPARKLE_FADE_TICKS = 100
"""Number of ticks a fade-out runs before the loop stops."""

SPARKLE_FALLBACK_FRAME_INTERVAL = 1 / 60
"""Seconds between ticks when no paint-synchronized scheduler is available."""

# Asset settings
SPARKLE_SPRITE = ""
"""Sprite atlas source (path, URL or data URI). Empty string uses the built-in atlas."""

ASSETS_HANDLE = "sparkle_assets"
"""Arcade resource handle name used to resolve asset paths."""

SITE_DIR = "_site"
"""Directory that local image paths are resolved against by image_size()."""

# Presets applied by sparkles.helpers.apply_presets(), keyed by class selector
SPARKLE_PRESETS = {
    ".sparkle": {"count": 40, "color": ["#ff0080", "#ff0080", "#0000FF"], "speed": 3, "overlap": 30},
    ".sparkle-more": {"count": 30, "color": ["#ff0080", "#ff0080", "#0000FF"], "speed": 10, "overlap": 10},
    ".sparkle-less": {"count": 5, "color": ["#ff0080", "#ff0080", "#0000FF"], "speed": 2, "overlap": 5},
}
"""Effect options applied to every element matching the selector.

Users can add presets in their settings.py:

Example:
    SPARKLE_PRESETS = {
        **global_settings.SPARKLE_PRESETS,
        ".sparkle-gold": {"count": 20, "color": "#ffd700", "speed": 1, "overlap": 8},
    }
"""
