"""Game configuration constants for Sky Bird.

All speeds and accelerations are per tick (one rendered frame); spawn periods
are in milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass

# Field
FIELD_WIDTH = 480
FIELD_HEIGHT = 640
FPS = 60

# Bird
BIRD_X = 50
BIRD_SIZE = 30
BIRD_JUMP = -7.0  # px/tick, negative is up
GRAVITY = 0.4  # px/tick^2
MAX_FALL_SPEED = 10.0  # px/tick

# Pipes
PIPE_WIDTH = 50
PIPE_GAP = 150
PIPE_MIN_HEIGHT = 50
SCROLL_SPEED = 3.0  # px/tick

# Decoration (parallax fractions of SCROLL_SPEED)
CLOUD_SPEED_FACTOR = 0.5
TREE_SPEED_FACTOR = 0.8
CLOUD_MIN_WIDTH = 60
CLOUD_MAX_WIDTH = 100
CLOUD_ASPECT = 0.6
CLOUD_TOP_MARGIN = 20
TREE_MIN_HEIGHT = 50
TREE_MAX_HEIGHT = 100
TREE_TRUNK_WIDTH = 15
TREE_CANOPY_RADIUS = 30
TREE_FOOTPRINT = 50  # horizontal extent used for off-screen removal

# Spawn periods
PIPE_SPAWN_MS = 1500
CLOUD_SPAWN_MS = 3000
TREE_SPAWN_MS = 2000

# Palette
COL_SKY_TOP = (92, 172, 238)
COL_SKY_BOTTOM = (178, 224, 250)
COL_CLOUD = (255, 255, 255)
COL_TRUNK = (139, 69, 19)
COL_CANOPY = (34, 139, 34)
COL_CANOPY_EDGE = (20, 90, 50)
COL_PIPE = (0, 128, 0)
COL_PIPE_EDGE = (51, 51, 51)
COL_BIRD = (255, 255, 0)
COL_BIRD_EYE = (0, 0, 0)
COL_HUD = (255, 255, 255)
COL_GAME_OVER = (255, 0, 0)


class ConfigError(ValueError):
    """Raised when a set of tunables cannot produce a playable session."""


@dataclass(frozen=True)
class Settings:
    """Immutable bundle of the tunables a session runs with."""

    field_width: int = FIELD_WIDTH
    field_height: int = FIELD_HEIGHT
    bird_x: float = BIRD_X
    bird_size: float = BIRD_SIZE
    jump_impulse: float = BIRD_JUMP
    gravity: float = GRAVITY
    max_fall_speed: float = MAX_FALL_SPEED
    pipe_width: float = PIPE_WIDTH
    pipe_gap: int = PIPE_GAP
    pipe_min_height: int = PIPE_MIN_HEIGHT
    scroll_speed: float = SCROLL_SPEED
    cloud_speed_factor: float = CLOUD_SPEED_FACTOR
    tree_speed_factor: float = TREE_SPEED_FACTOR
    pipe_spawn_ms: float = PIPE_SPAWN_MS
    cloud_spawn_ms: float = CLOUD_SPAWN_MS
    tree_spawn_ms: float = TREE_SPAWN_MS

    @property
    def pipe_max_height(self) -> int:
        """Tallest top obstacle that still leaves the gap and a minimum bottom obstacle."""
        return self.field_height - self.pipe_gap - self.pipe_min_height

    def validate(self) -> "Settings":
        """Raise ConfigError if the tunables are inconsistent; return self otherwise."""
        positive = {
            "field_width": self.field_width,
            "field_height": self.field_height,
            "bird_size": self.bird_size,
            "gravity": self.gravity,
            "max_fall_speed": self.max_fall_speed,
            "pipe_width": self.pipe_width,
            "pipe_gap": self.pipe_gap,
            "scroll_speed": self.scroll_speed,
            "pipe_spawn_ms": self.pipe_spawn_ms,
            "cloud_spawn_ms": self.cloud_spawn_ms,
            "tree_spawn_ms": self.tree_spawn_ms,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")
        for name in ("field_width", "field_height", "pipe_gap", "pipe_min_height"):
            value = getattr(self, name)
            if int(value) != value:
                raise ConfigError(f"{name} must be a whole number of pixels, got {value}")
        if self.pipe_min_height < 0:
            raise ConfigError(f"pipe_min_height must not be negative, got {self.pipe_min_height}")
        if self.jump_impulse >= 0:
            raise ConfigError(f"jump_impulse must point upward (negative), got {self.jump_impulse}")
        if self.pipe_max_height < self.pipe_min_height:
            raise ConfigError(
                f"pipe_gap {self.pipe_gap} plus two obstacles of {self.pipe_min_height} "
                f"do not fit a field {self.field_height} high"
            )
        # The bird starts at mid-field and must fit below that line.
        if self.field_height / 2 + self.bird_size > self.field_height:
            raise ConfigError(
                f"bird_size {self.bird_size} does not fit below the start line of a field {self.field_height} high"
            )
        if self.bird_x < 0 or self.bird_x + self.bird_size > self.field_width:
            raise ConfigError(f"bird_x {self.bird_x} places the bird outside the field")
        if not 0 < self.cloud_speed_factor < self.tree_speed_factor < 1:
            raise ConfigError(
                "parallax factors must satisfy 0 < cloud < tree < 1, got "
                f"{self.cloud_speed_factor} and {self.tree_speed_factor}"
            )
        # A pipe must not be able to skip over the bird between two ticks.
        if self.scroll_speed >= self.pipe_width + self.bird_size:
            raise ConfigError(
                f"scroll_speed {self.scroll_speed} lets pipes pass the bird without overlapping it"
            )
        return self
