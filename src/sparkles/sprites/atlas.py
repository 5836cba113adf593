"""Sprite atlas holding the sparkle animation frames.

The atlas is a single image with four 7x7 frames laid out horizontally at
fixed x-offsets. It loads lazily on first use. A load failure is logged once
and remembered: image() then returns None and the draw pass skips sprite
compositing, keeping only the color tint. Failed loads are not retried
unless reload() is called.

One atlas can be shared by any number of effects; nothing mutates it after
loading.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING

from sparkles.conf import settings
from sparkles.constants import FRAME_OFFSETS, FRAME_SIZE
from sparkles.errors import ResourceLoadError
from sparkles.sprites.helpers import build_default_atlas, check_atlas_size, describe_source, load_image

if TYPE_CHECKING:
    from pathlib import Path
    from typing import TypeAlias

    from PIL import Image

    AtlasSource: TypeAlias = str | Path | bytes | Image.Image

logger = logging.getLogger(__name__)


class SpriteAtlas:
    """Lazily loaded sprite atlas.

    Attributes:
        source: Where the atlas image comes from (path, URL, data URI, bytes or image).
    """

    def __init__(self, source: AtlasSource) -> None:
        """Initialize the atlas without loading it.

        Args:
            source: Path, http(s) URL, base64 data URI, encoded bytes, or a PIL image.
        """
        self.source = source
        self._image: Image.Image | None = None
        self._frames: dict[int, Image.Image] = {}
        self._failed = False

    @property
    def loaded(self) -> bool:
        """Whether the atlas image is available."""
        return self._image is not None

    @property
    def failed(self) -> bool:
        """Whether the last load attempt failed."""
        return self._failed

    def frame_offsets(self) -> tuple[int, ...]:
        """Return the x-offsets of the frames, in atlas order."""
        return FRAME_OFFSETS

    def image(self) -> Image.Image | None:
        """Return the atlas image, loading it on first call.

        Returns:
            The RGBA atlas, or None if loading failed.
        """
        if self._image is None and not self._failed:
            self._load()
        return self._image

    def frame(self, offset: int) -> Image.Image | None:
        """Return the 7x7 frame starting at offset, or None if the atlas is unavailable."""
        cached = self._frames.get(offset)
        if cached is not None:
            return cached
        image = self.image()
        if image is None:
            return None
        frame = image.crop((offset, 0, offset + FRAME_SIZE, FRAME_SIZE))
        self._frames[offset] = frame
        return frame

    def reload(self) -> bool:
        """Forget any previous result and try loading again.

        Returns:
            True if the atlas is now available.
        """
        self._image = None
        self._frames.clear()
        self._failed = False
        return self.image() is not None

    def _load(self) -> None:
        try:
            image = load_image(self.source)
            check_atlas_size(image)
        except ResourceLoadError as e:
            self._failed = True
            logger.warning("Sprite atlas unavailable, drawing tint only: %s", e)
            return
        self._image = image
        logger.debug("Loaded sprite atlas %s (%dx%d)", describe_source(self.source), image.width, image.height)


@functools.cache
def default_atlas() -> SpriteAtlas:
    """Return the shared built-in atlas."""
    return SpriteAtlas(build_default_atlas())


def atlas_from_settings() -> SpriteAtlas:
    """Return the atlas named by settings.SPARKLE_SPRITE, or the built-in one."""
    source = settings.SPARKLE_SPRITE
    if not source:
        return default_atlas()
    return _shared_atlas(source)


@functools.cache
def _shared_atlas(source: str) -> SpriteAtlas:
    return SpriteAtlas(source)
