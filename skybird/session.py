"""Session state, spawning, per-tick simulation, and start/end/restart transitions."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Protocol

from .config import (
    CLOUD_MAX_WIDTH,
    CLOUD_MIN_WIDTH,
    CLOUD_TOP_MARGIN,
    TREE_MAX_HEIGHT,
    TREE_MIN_HEIGHT,
    Settings,
)
from .entities import (
    Bird,
    BirdView,
    Cloud,
    CloudView,
    Pipe,
    PipeView,
    Scroller,
    Tree,
    TreeView,
)
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only picture of the world handed to the renderer once per tick."""

    bird: BirdView
    pipes: tuple[PipeView, ...]
    clouds: tuple[CloudView, ...]
    trees: tuple[TreeView, ...]
    score: int
    best: int
    game_over: bool
    field_width: int
    field_height: int


class Renderer(Protocol):
    def render(self, frame: FrameSnapshot) -> None: ...


class NullRenderer:
    """Renderer that discards frames, for headless runs and tests."""

    def render(self, frame: FrameSnapshot) -> None:
        pass


class Session:
    """Owns the world and drives it from scheduler callbacks.

    Spawn timers and the frame callback all run on the scheduler's thread, one
    at a time, so the state needs no locking.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
        renderer: Renderer | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = (settings or Settings()).validate()
        self.scheduler = scheduler or Scheduler()
        self.renderer = renderer or NullRenderer()
        self.rng = rng or random.Random()
        s = self.settings
        self.bird = Bird(
            s.bird_x,
            s.field_height / 2,
            size=s.bird_size,
            gravity=s.gravity,
            jump_impulse=s.jump_impulse,
            max_fall_speed=s.max_fall_speed,
        )
        self.pipes: list[Pipe] = []
        self.clouds: list[Cloud] = []
        self.trees: list[Tree] = []
        self.score = 0
        self.best = 0
        self.game_over = False
        self.ticks = 0
        self.last_frame: FrameSnapshot | None = None
        self._timers: dict[str, int] = {}
        self._in_tick = False

        self.start()

    # Lifecycle

    def start(self) -> None:
        self._cancel_timers()
        self.bird.reset(self.settings.field_height / 2)
        self.pipes.clear()
        self.clouds.clear()
        self.trees.clear()
        self.score = 0
        self.game_over = False
        self.ticks = 0

        s = self.settings
        self._timers = {
            "pipe": self.scheduler.set_interval(s.pipe_spawn_ms, self.spawn_pipe),
            "cloud": self.scheduler.set_interval(s.cloud_spawn_ms, self.spawn_cloud),
            "tree": self.scheduler.set_interval(s.tree_spawn_ms, self.spawn_tree),
        }
        self.scheduler.request_frame(self.tick)
        logger.info("Session started (best so far: %d)", self.best)

    def end(self) -> None:
        if self.game_over:
            return
        self.game_over = True
        self._cancel_timers()
        self.best = max(self.best, self.score)
        logger.info("Game over after %d ticks with score %d", self.ticks, self.score)
        # Inside a tick the frame is rendered once the tick completes.
        if not self._in_tick:
            self._render(self.snapshot())

    def restart_if_over(self) -> bool:
        """Start a fresh session if the current one is over. Returns whether it restarted."""
        if not self.game_over:
            return False
        self.start()
        return True

    def jump(self) -> None:
        if self.game_over:
            return
        self.bird.jump()

    def _cancel_timers(self) -> None:
        for handle in self._timers.values():
            self.scheduler.clear_interval(handle)
        self._timers = {}

    # Spawning

    def spawn_pipe(self) -> Pipe:
        s = self.settings
        top_height = self.rng.randint(int(s.pipe_min_height), int(s.pipe_max_height))
        pipe = Pipe(s.field_width, top_height, gap=s.pipe_gap, width=s.pipe_width, speed=s.scroll_speed)
        self.pipes.append(pipe)
        logger.debug("Spawned pipe with top height %d", top_height)
        return pipe

    def spawn_cloud(self) -> Cloud:
        s = self.settings
        y = self.rng.uniform(CLOUD_TOP_MARGIN, s.field_height / 2 - 30)
        width = self.rng.uniform(CLOUD_MIN_WIDTH, CLOUD_MAX_WIDTH)
        cloud = Cloud(s.field_width, y, width, speed=s.scroll_speed * s.cloud_speed_factor)
        self.clouds.append(cloud)
        return cloud

    def spawn_tree(self) -> Tree:
        s = self.settings
        height = self.rng.uniform(TREE_MIN_HEIGHT, TREE_MAX_HEIGHT)
        tree = Tree(s.field_width, s.field_height, height, speed=s.scroll_speed * s.tree_speed_factor)
        self.trees.append(tree)
        return tree

    # Simulation

    def tick(self) -> None:
        """Advance the world by one frame, render it, and schedule the next frame."""
        if self.game_over:
            return
        self._in_tick = True
        self.ticks += 1

        clouds = self._step_layer(self.clouds)
        trees = self._step_layer(self.trees)

        pipes: list[PipeView] = []
        # Reverse index order keeps removal from skipping the next pipe.
        for i in range(len(self.pipes) - 1, -1, -1):
            pipe = self.pipes[i]
            pipe.advance()
            pipes.append(pipe.view())
            if pipe.collides_with(self.bird):
                self.end()
            if pipe.maybe_score(self.bird):
                self.score += 1
            if pipe.offscreen():
                del self.pipes[i]

        self.bird.apply_gravity()
        if self.bird.out_of_bounds(self.settings.field_height):
            self.end()
        self._in_tick = False
        if self.game_over:
            # Pipes scored after the collision in this tick still count.
            self.best = max(self.best, self.score)

        self._render(self._frame(pipes[::-1], clouds, trees))
        if not self.game_over:
            self.scheduler.request_frame(self.tick)

    def _step_layer(self, layer: list[Scroller]) -> list[CloudView | TreeView]:
        views: list[CloudView | TreeView] = []
        for i in range(len(layer) - 1, -1, -1):
            entity = layer[i]
            entity.advance()
            views.append(entity.view())
            if entity.offscreen():
                del layer[i]
        return views[::-1]

    # Rendering

    def snapshot(self) -> FrameSnapshot:
        return self._frame(
            [p.view() for p in self.pipes],
            [c.view() for c in self.clouds],
            [t.view() for t in self.trees],
        )

    def _frame(
        self,
        pipes: list[PipeView],
        clouds: list[CloudView],
        trees: list[TreeView],
    ) -> FrameSnapshot:
        return FrameSnapshot(
            bird=self.bird.view(),
            pipes=tuple(pipes),
            clouds=tuple(clouds),
            trees=tuple(trees),
            score=self.score,
            best=self.best,
            game_over=self.game_over,
            field_width=self.settings.field_width,
            field_height=self.settings.field_height,
        )

    def _render(self, frame: FrameSnapshot) -> None:
        self.last_frame = frame
        self.renderer.render(frame)
