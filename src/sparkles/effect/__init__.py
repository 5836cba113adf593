"""Sparkle effect: particle field, animation loop and the apply() entry point."""

from sparkles.effect.animation import SparkleAnimation
from sparkles.effect.applicator import EffectHandle, apply
from sparkles.effect.config import EffectConfig
from sparkles.effect.particle import Particle, ParticleField, create_particles

__all__ = [
    "EffectConfig",
    "EffectHandle",
    "Particle",
    "ParticleField",
    "SparkleAnimation",
    "apply",
    "create_particles",
]
