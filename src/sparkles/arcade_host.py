"""Arcade integration for sparkle overlays.

SpriteElement lets an arcade.Sprite act as a sparkle host: apply() appends
its canvases to the element, and draw() blits them around the sprite every
frame. Pair it with a WindowFrameScheduler (apply(..., window=window)) so
ticks run in step with the window's draws.

Example usage:
    class TitleView(arcade.View):
        def on_show_view(self):
            self.logo = arcade.Sprite(asset_path("images/logo.png"), center_x=400, center_y=300)
            self.logo_host = SpriteElement(self.logo)
            self.sparkle = apply(
                self.logo_host, atlas=asset_atlas("images/sparkle.png"), window=self.window, count=40, overlap=30
            )

        def on_draw(self):
            self.clear()
            arcade.draw_sprite(self.logo)
            self.logo_host.draw()
"""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from typing import Any

import arcade

from sparkles.canvas import SparkleCanvas
from sparkles.conf import settings
from sparkles.sprites.atlas import SpriteAtlas

logger = logging.getLogger(__name__)

_texture_ids = itertools.count(1)


def setup_resources(assets_handle: str | None = None, assets_dir: Path | None = None) -> None:
    """Register an arcade resource handle for sparkle assets.

    Args:
        assets_handle: Name of the resource handle. If None, uses settings.ASSETS_HANDLE.
        assets_dir: Directory the handle points at. Defaults to ./assets.

    Side effects:
        - Adds resource handle to arcade.resources
    """
    if assets_handle is None:
        assets_handle = settings.ASSETS_HANDLE
    if assets_dir is None:
        assets_dir = Path.cwd() / "assets"
    arcade.resources.add_resource_handle(assets_handle, assets_dir.resolve())


def asset_path(relative_path: str, assets_handle: str | None = None) -> str:
    """Get the resolved absolute path for an asset file.

    Uses Arcade's resource handle system, which works in both development and
    PyInstaller bundled environments.

    Args:
        relative_path: Path relative to the assets directory (e.g., "images/sparkle.png").
        assets_handle: Name of the resource handle. If None, uses settings.ASSETS_HANDLE.

    Returns:
        Absolute file path as string.

    Example:
        >>> asset_path("images/sparkle.png")
        "/absolute/path/to/assets/images/sparkle.png"
    """
    if assets_handle is None:
        assets_handle = settings.ASSETS_HANDLE

    relative_path = relative_path.lstrip("/")
    handle_path = f":{assets_handle}:/{relative_path}"
    return str(arcade.resources.resolve(handle_path))


def asset_atlas(relative_path: str, assets_handle: str | None = None) -> SpriteAtlas:
    """Sprite atlas for an image in the registered assets directory.

    Example:
        setup_resources()
        handle = apply(logo_host, atlas=asset_atlas("images/sparkle.png"), window=window)
    """
    return SpriteAtlas(asset_path(relative_path, assets_handle))


class SpriteElement:
    """Sparkle host backed by an arcade sprite.

    The element's size is the sprite's current width and height. Sparkle
    canvases appended to it are drawn centred on the sprite, padded by their
    overlap. Each canvas gets one texture wrapping its image; ticks rewrite
    that texture's atlas region in place.

    Attributes:
        sprite: The sprite the overlays surround.
        children: Appended nodes, in append order.
    """

    def __init__(self, sprite: arcade.Sprite) -> None:
        """Wrap sprite."""
        self.sprite = sprite
        self.children: list[Any] = []
        self._overlays = arcade.SpriteList(lazy=True)
        self._overlay_sprites: dict[int, arcade.Sprite] = {}
        self._textures: dict[int, arcade.Texture] = {}
        self._drawn_ticks: dict[int, int] = {}

    @property
    def width(self) -> float:
        """Rendered sprite width."""
        return self.sprite.width

    @property
    def height(self) -> float:
        """Rendered sprite height."""
        return self.sprite.height

    def append_child(self, node: Any) -> None:  # noqa: ANN401
        """Append node; sparkle canvases also get an overlay sprite and texture."""
        self.children.append(node)
        if isinstance(node, SparkleCanvas):
            texture = arcade.Texture(
                node.image,
                hash=f"sparkle-canvas-{next(_texture_ids)}",
                hit_box_algorithm=arcade.hitbox.algo_bounding_box,
            )
            overlay = arcade.Sprite(texture)
            self._textures[id(node)] = texture
            self._overlay_sprites[id(node)] = overlay
            self._overlays.append(overlay)
            logger.debug("Attached sparkle overlay %r to %r", node, self.sprite)

    def remove_child(self, node: Any) -> None:  # noqa: ANN401
        """Remove node with its overlay sprite and texture, if present."""
        if node not in self.children:
            return
        self.children.remove(node)
        overlay = self._overlay_sprites.pop(id(node), None)
        self._textures.pop(id(node), None)
        self._drawn_ticks.pop(id(node), None)
        if overlay is not None:
            self._overlays.remove(overlay)

    def overlay_center(self, canvas: SparkleCanvas) -> tuple[float, float]:
        """Centre of canvas in window coordinates.

        Canvas offsets are measured from the sprite's top-left corner with y
        pointing down; arcade's y axis points up.
        """
        center_x = self.sprite.left + canvas.left + canvas.width / 2
        center_y = self.sprite.top - canvas.top - canvas.height / 2
        return center_x, center_y

    def draw(self) -> None:
        """Push changed canvases to the texture atlas and draw every overlay."""
        for canvas in self.canvases():
            self._overlay_sprites[id(canvas)].position = self.overlay_center(canvas)
            tick = canvas.effect.animation.tick_count if canvas.effect is not None else 0
            if self._drawn_ticks.get(id(canvas)) != tick:
                self._upload(canvas)
                self._drawn_ticks[id(canvas)] = tick
        self._overlays.draw()

    def canvases(self) -> list[SparkleCanvas]:
        """Sparkle canvases attached to this element."""
        return [child for child in self.children if isinstance(child, SparkleCanvas)]

    def _upload(self, canvas: SparkleCanvas) -> None:
        # Textures not yet in the atlas are added with current pixels on the next draw.
        texture = self._textures[id(canvas)]
        atlas = self._overlays.atlas
        if atlas is not None and atlas.has_texture(texture):
            atlas.update_texture_image(texture)
