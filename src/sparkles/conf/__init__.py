"""Django-like settings system for Sparkles.

Usage:
    # In your project's settings.py
    from sparkles.conf import global_settings

    # Override defaults
    SPARKLE_DEFAULT_COUNT = 40
    SPARKLE_FADE_TICKS = 60

    # In your code
    from sparkles.conf import settings

    print(settings.SPARKLE_DEFAULT_COUNT)  # 40
"""

import importlib
import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sparkles.conf import global_settings

logger = logging.getLogger(__name__)


class LazySettings:
    """Lazy settings proxy that loads user settings on first access.

    Settings are loaded from:
    1. global_settings (library defaults)
    2. User's settings module (overrides)

    The settings module location is determined by:
    - SPARKLES_SETTINGS_MODULE environment variable, or
    - Convention: "settings" module in current directory

    Only uppercase names are treated as settings.
    """

    def __init__(self) -> None:
        """Initialize the lazy settings proxy."""
        self._wrapped: Settings | None = None

    def _setup(self) -> None:
        """Load settings from global_settings and user's settings module."""
        settings_module = os.environ.get("SPARKLES_SETTINGS_MODULE", "settings")

        self._wrapped = Settings()

        try:
            mod = importlib.import_module(settings_module)
            for setting in dir(mod):
                if setting.isupper():
                    setattr(self._wrapped, setting, getattr(mod, setting))
            logger.debug("Loaded sparkle settings from %s", settings_module)
        except ImportError:
            # No user settings module found, use defaults only
            logger.debug("No settings module %r, using defaults", settings_module)

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Get a setting value, loading settings if not yet loaded."""
        if self._wrapped is None:
            self._setup()
        if self._wrapped is None:
            msg = "Settings could not be loaded"
            raise RuntimeError(msg)
        return getattr(self._wrapped, name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Set a setting value."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
        else:
            if self._wrapped is None:
                self._setup()
            if self._wrapped is None:
                msg = "Settings could not be loaded"
                raise RuntimeError(msg)
            setattr(self._wrapped, name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Manually configure settings (useful for testing).

        Example:
            settings.configure(
                SPARKLE_DEFAULT_COUNT=10,
                SPARKLE_FADE_TICKS=20,
            )
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)

    def is_configured(self) -> bool:
        """Check if settings have been loaded."""
        return self._wrapped is not None

    def reset(self) -> None:
        """Forget every loaded or configured value; the next access loads again."""
        self._wrapped = None

    @contextmanager
    def override(self, **options: Any) -> Iterator[None]:  # noqa: ANN401
        """Temporarily replace some settings.

        Example:
            with settings.override(SPARKLE_FADE_TICKS=10):
                handle.fade_out()
        """
        missing = object()
        previous = {name: getattr(self, name, missing) for name in options}
        self.configure(**options)
        try:
            yield
        finally:
            for name, value in previous.items():
                if value is missing:
                    delattr(self._wrapped, name)
                else:
                    setattr(self._wrapped, name, value)


class Settings:
    """Container for all settings with attribute access."""

    def __init__(self) -> None:
        """Initialize settings with defaults from global_settings."""
        for setting in dir(global_settings):
            if setting.isupper():
                setattr(self, setting, getattr(global_settings, setting))


# Global singleton instance
settings = LazySettings()

__all__ = ["LazySettings", "Settings", "global_settings", "settings"]
