"""Fixed numbers of the sparkle simulation.

These values define how the effect looks and moves. They are not settings:
changing them changes the animation itself.
"""

# Sprite atlas geometry
FRAME_SIZE = 7
FRAME_OFFSETS = (0, 6, 13, 20)
ATLAS_MIN_WIDTH = FRAME_OFFSETS[-1] + FRAME_SIZE

# Particle creation ranges
DELTA_RANGE = 1000
DELTA_OFFSET = 500
MAX_SIZE = 2

# Per-tick motion
HORIZONTAL_DIVISOR = 1500
VERTICAL_DIVISOR = 800
HORIZONTAL_GATE_SCALE = 2
VERTICAL_GATE_SCALE = 3
FRAME_MODULUS_RANGE = (1, 7)

# Opacity decay per tick
STEADY_DECAY = 0.005
FADE_DECAY = 0.02

# Draw pass
TINT_ALPHA = 0.5

# Color keywords that give every particle its own random color
RANDOM_COLOR = "random-per-particle"
RANDOM_COLOR_ALIASES = frozenset({RANDOM_COLOR, "rainbow"})

CANVAS_CLASS = "sparkle-canvas"
