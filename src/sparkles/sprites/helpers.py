"""Helper functions for sprite atlas loading."""

from __future__ import annotations

import base64
import binascii
import io
import urllib.request
from pathlib import Path
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from sparkles.constants import ATLAS_MIN_WIDTH, FRAME_OFFSETS, FRAME_SIZE
from sparkles.errors import ResourceLoadError

if TYPE_CHECKING:
    from sparkles.sprites.atlas import AtlasSource

URL_PREFIXES = ("http://", "https://")
DATA_URI_PREFIX = "data:"
FETCH_TIMEOUT = 10


def is_url(source: str) -> bool:
    """Return True if source is an http(s) URL."""
    return source.startswith(URL_PREFIXES)


def read_url(url: str) -> bytes:
    """Fetch the raw bytes behind an http(s) URL."""
    with urllib.request.urlopen(url, timeout=FETCH_TIMEOUT) as response:  # noqa: S310
        return response.read()


def decode_data_uri(uri: str) -> bytes:
    """Decode a base64 ``data:`` URI into raw bytes.

    Args:
        uri: URI of the form ``data:image/png;base64,<payload>``.

    Returns:
        The decoded payload.

    Raises:
        ValueError: If the URI has no payload or is not base64 encoded.
    """
    header, sep, payload = uri.partition(",")
    if not sep or ";base64" not in header:
        msg = "Only base64 data URIs are supported"
        raise ValueError(msg)
    return base64.b64decode(payload, validate=True)


def load_image(source: AtlasSource) -> Image.Image:
    """Load an RGBA image from any supported atlas source.

    Args:
        source: A PIL image, encoded image bytes, a base64 data URI,
                an http(s) URL, or a filesystem path.

    Returns:
        Fully loaded RGBA image.

    Raises:
        ResourceLoadError: If the source can't be read or decoded.
    """
    try:
        if isinstance(source, Image.Image):
            return source.convert("RGBA")
        if isinstance(source, bytes):
            data = source
        elif isinstance(source, str) and source.startswith(DATA_URI_PREFIX):
            data = decode_data_uri(source)
        elif isinstance(source, str) and is_url(source):
            data = read_url(source)
        else:
            with Image.open(Path(source)) as image:
                return image.convert("RGBA")
        with Image.open(io.BytesIO(data)) as image:
            return image.convert("RGBA")
    except (OSError, ValueError, binascii.Error) as e:
        msg = f"Unable to load sprite atlas from {describe_source(source)}: {e}"
        raise ResourceLoadError(msg) from e


def check_atlas_size(image: Image.Image) -> None:
    """Raise ResourceLoadError if image is too small to hold every frame."""
    if image.width < ATLAS_MIN_WIDTH or image.height < FRAME_SIZE:
        msg = (
            f"Sprite atlas is {image.width}x{image.height}, "
            f"needs at least {ATLAS_MIN_WIDTH}x{FRAME_SIZE}"
        )
        raise ResourceLoadError(msg)


def describe_source(source: AtlasSource) -> str:
    """Short human-readable label for an atlas source, used in log messages."""
    if isinstance(source, Image.Image):
        return f"<image {source.width}x{source.height}>"
    if isinstance(source, bytes):
        return f"<{len(source)} bytes>"
    text = str(source)
    if text.startswith(DATA_URI_PREFIX):
        return "<data uri>"
    return text


def build_default_atlas() -> Image.Image:
    """Draw the built-in four-frame sparkle atlas.

    Each frame is a small white star centred in its 7x7 cell. The arms are
    drawn half transparent so the tint pass shows through.

    Returns:
        A 27x7 RGBA image with frames at the standard offsets.
    """
    image = Image.new("RGBA", (ATLAS_MIN_WIDTH, FRAME_SIZE), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    core = (255, 255, 255, 255)
    arm = (255, 255, 255, 160)
    mid = FRAME_SIZE // 2

    # (horizontal arm, vertical arm, diagonal arm) per frame
    shapes = ((1, 1, 0), (2, 2, 0), (1, 1, 1), (2, 3, 0))
    for offset, (horizontal, vertical, diagonal) in zip(FRAME_OFFSETS, shapes, strict=True):
        cx = offset + mid
        if horizontal:
            draw.line([(cx - horizontal, mid), (cx + horizontal, mid)], fill=arm)
        if vertical:
            draw.line([(cx, mid - vertical), (cx, mid + vertical)], fill=arm)
        for step in range(1, diagonal + 1):
            draw.point(
                [(cx - step, mid - step), (cx + step, mid - step), (cx - step, mid + step), (cx + step, mid + step)],
                fill=arm,
            )
        draw.point((cx, mid), fill=core)
    return image
