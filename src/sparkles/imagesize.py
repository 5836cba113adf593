"""Image dimension lookup for page templates.

image_size() reports the width and height of an image referenced by a
page, so templates can emit explicit dimensions. Remote images are fetched;
local paths are resolved against the generated site directory.
"""

from __future__ import annotations

import io
import logging
import urllib.error
from pathlib import Path
from typing import Literal, overload

from PIL import Image, UnidentifiedImageError

from sparkles.conf import settings
from sparkles.errors import ImageSizeError
from sparkles.sprites.helpers import is_url, read_url

logger = logging.getLogger(__name__)


@overload
def image_size(source: str, dimension: Literal["w", "h"]) -> int: ...


@overload
def image_size(source: str, dimension: None = None) -> tuple[int, int]: ...


@overload
def image_size(source: str, dimension: str) -> int | None: ...


def image_size(source: str, dimension: str | None = None) -> int | tuple[int, int] | None:
    """Return the size of an image.

    Args:
        source: http(s) URL, or a site-relative path such as "/assets/images/logo.png".
        dimension: "w" for the width, "h" for the height, None for both.

    Returns:
        The width, the height, or a (width, height) tuple. None for any
        other dimension.

    Raises:
        ImageSizeError: If the image can't be fetched or decoded.

    Example:
        >>> image_size("/assets/images/sparkle.png")
        (27, 7)
        >>> image_size("/assets/images/sparkle.png", "w")
        27
    """
    if not is_url(source):
        source = str(Path.cwd() / settings.SITE_DIR / source.lstrip("/"))

    try:
        if is_url(source):
            with Image.open(io.BytesIO(read_url(source))) as image:
                size = image.size
        else:
            with Image.open(source) as image:
                size = image.size
    except (FileNotFoundError, urllib.error.URLError, UnidentifiedImageError) as e:
        msg = f"Unable to fetch image size for: {source}. Error: {e}"
        raise ImageSizeError(msg) from e
    except (OSError, ValueError) as e:
        msg = f"An error occurred while fetching image size for: {source}. Error: {e}"
        raise ImageSizeError(msg) from e

    logger.debug("Image size for %s: %dx%d", source, *size)
    if dimension == "w":
        return size[0]
    if dimension == "h":
        return size[1]
    if dimension is None:
        return size
    return None
