"""Game entities: the player bird, pipes, and decorative scenery.

Entities hold simulation state only. Drawing lives in the pygame front end,
which receives the frozen ``*View`` records below.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import (
    BIRD_JUMP,
    BIRD_SIZE,
    BIRD_X,
    CLOUD_ASPECT,
    CLOUD_SPEED_FACTOR,
    GRAVITY,
    MAX_FALL_SPEED,
    PIPE_GAP,
    PIPE_WIDTH,
    SCROLL_SPEED,
    TREE_CANOPY_RADIUS,
    TREE_FOOTPRINT,
    TREE_SPEED_FACTOR,
    TREE_TRUNK_WIDTH,
)
from .utils import clamp, spans_overlap


@dataclass(frozen=True)
class BirdView:
    x: float
    y: float
    size: float
    velocity_y: float


@dataclass(frozen=True)
class PipeView:
    x: float
    top_height: float
    bottom_y: float
    width: float


@dataclass(frozen=True)
class CloudView:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TreeView:
    x: float
    y: float
    height: float
    trunk_width: float
    canopy_radius: float


class Bird:
    """The player avatar: a square box with a fixed x that falls and jumps."""

    def __init__(
        self,
        x: float = BIRD_X,
        y: float = 0.0,
        *,
        size: float = BIRD_SIZE,
        gravity: float = GRAVITY,
        jump_impulse: float = BIRD_JUMP,
        max_fall_speed: float = MAX_FALL_SPEED,
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.velocity_y = 0.0
        self.size = size
        self.gravity = gravity
        self.jump_impulse = jump_impulse
        self.max_fall_speed = max_fall_speed

    def reset(self, y: float) -> None:
        self.y = float(y)
        self.velocity_y = 0.0

    def jump(self) -> None:
        self.velocity_y = self.jump_impulse

    def apply_gravity(self) -> None:
        """Integrate one tick. Only the fall speed is clamped, never the climb."""
        self.velocity_y += self.gravity
        self.y += self.velocity_y
        self.velocity_y = clamp(self.velocity_y, -math.inf, self.max_fall_speed)

    def out_of_bounds(self, field_height: float) -> bool:
        return self.y < 0 or self.y + self.size > field_height

    def view(self) -> BirdView:
        return BirdView(self.x, self.y, self.size, self.velocity_y)


class Scroller:
    """Base for entities drifting left at a constant per-tick speed."""

    def __init__(self, x: float, y: float, width: float, height: float, speed: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.width = width
        self.height = height
        self.speed = speed

    def advance(self) -> None:
        self.x -= self.speed

    def offscreen(self) -> bool:
        return self.x + self.width < 0

    def view(self) -> PipeView | CloudView | TreeView:
        raise NotImplementedError


class Pipe(Scroller):
    """A top and a bottom obstacle separated by a fixed vertical gap."""

    def __init__(
        self,
        x: float,
        top_height: float,
        *,
        gap: float = PIPE_GAP,
        width: float = PIPE_WIDTH,
        speed: float = SCROLL_SPEED,
    ) -> None:
        super().__init__(x, 0.0, width, top_height, speed)
        self.top_height = top_height
        self.gap = gap
        self.counted = False

    @property
    def bottom_y(self) -> float:
        return self.top_height + self.gap

    def collides_with(self, bird: Bird) -> bool:
        """True if the bird box overlaps the top or bottom obstacle.

        The top obstacle hangs from above ``top_height`` and the bottom one rises
        from ``bottom_y``, so leaving the field vertically next to a pipe also hits it.
        """
        if not spans_overlap(bird.x, bird.x + bird.size, self.x, self.x + self.width):
            return False
        return bird.y < self.top_height or bird.y + bird.size > self.bottom_y

    def passed(self, bird: Bird) -> bool:
        return self.x + self.width < bird.x

    def maybe_score(self, bird: Bird) -> bool:
        """Mark the pipe counted the first time it is behind the bird."""
        if self.counted or not self.passed(bird):
            return False
        self.counted = True
        return True

    def view(self) -> PipeView:
        return PipeView(self.x, self.top_height, self.bottom_y, self.width)


class Cloud(Scroller):
    def __init__(self, x: float, y: float, width: float, *, speed: float = SCROLL_SPEED * CLOUD_SPEED_FACTOR) -> None:
        super().__init__(x, y, width, width * CLOUD_ASPECT, speed)

    def view(self) -> CloudView:
        return CloudView(self.x, self.y, self.width, self.height)


class Tree(Scroller):
    """Trunk standing on ``y`` (the ground line) topped by a round canopy."""

    def __init__(self, x: float, y: float, height: float, *, speed: float = SCROLL_SPEED * TREE_SPEED_FACTOR) -> None:
        super().__init__(x, y, TREE_FOOTPRINT, height, speed)
        self.trunk_width = TREE_TRUNK_WIDTH
        self.canopy_radius = TREE_CANOPY_RADIUS

    def view(self) -> TreeView:
        return TreeView(self.x, self.y, self.height, self.trunk_width, self.canopy_radius)
