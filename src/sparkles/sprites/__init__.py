"""Sprite atlas loading for sparkle frames."""

from sparkles.sprites.atlas import SpriteAtlas, atlas_from_settings, default_atlas

__all__ = ["SpriteAtlas", "atlas_from_settings", "default_atlas"]
