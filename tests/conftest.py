"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sparkles.conf import global_settings, settings

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings for each test and reset them afterwards.

    Yields:
        None
    """
    settings.configure(
        SPARKLE_DEFAULT_COUNT=30,
        SPARKLE_DEFAULT_COLOR="#FFFFFF",
        SPARKLE_DEFAULT_SPEED=1,
        SPARKLE_DEFAULT_OVERLAP=0,
        SPARKLE_FADE_TICKS=100,
        SPARKLE_FALLBACK_FRAME_INTERVAL=1 / 60,
        SPARKLE_SPRITE="",
        ASSETS_HANDLE="sparkle_assets",
        SITE_DIR="_site",
        SPARKLE_PRESETS=global_settings.SPARKLE_PRESETS,
    )
    yield
    settings.reset()
