"""pygame front end: window, renderer, input wiring, and the frame loop for Sky Bird."""

from __future__ import annotations

import logging
import sys

import pygame

from .config import (
    COL_BIRD,
    COL_BIRD_EYE,
    COL_CANOPY,
    COL_CANOPY_EDGE,
    COL_CLOUD,
    COL_GAME_OVER,
    COL_HUD,
    COL_PIPE,
    COL_PIPE_EDGE,
    COL_SKY_BOTTOM,
    COL_SKY_TOP,
    COL_TRUNK,
    FPS,
    ConfigError,
    Settings,
)
from .entities import BirdView, CloudView, PipeView, TreeView
from .scheduler import Scheduler
from .session import FrameSnapshot, Session
from .utils import vertical_gradient

logger = logging.getLogger(__name__)


class PygameRenderer:
    """Draws frame snapshots onto a pygame surface, back to front."""

    def __init__(self, screen: pygame.Surface, settings: Settings) -> None:
        self.screen = screen
        self.font_big = pygame.font.SysFont(None, 50)
        self.font = pygame.font.SysFont(None, 30)
        self.font_small = pygame.font.SysFont(None, 22)
        self.sky = pygame.surfarray.make_surface(
            vertical_gradient(settings.field_width, settings.field_height, COL_SKY_TOP, COL_SKY_BOTTOM)
        )
        self.frames = 0

    def render(self, frame: FrameSnapshot) -> None:
        surf = self.screen
        surf.blit(self.sky, (0, 0))
        for cloud in frame.clouds:
            self._draw_cloud(surf, cloud)
        for tree in frame.trees:
            self._draw_tree(surf, tree)
        for pipe in frame.pipes:
            self._draw_pipe(surf, pipe, frame.field_height)
        self._draw_bird(surf, frame.bird)
        self._draw_hud(surf, frame)
        pygame.display.flip()
        self.frames += 1

    def _draw_cloud(self, surf: pygame.Surface, cloud: CloudView) -> None:
        # Three overlapping ellipses, given as (centre x, centre y, radius x, radius y)
        puffs = (
            (cloud.x, cloud.y, cloud.width / 2, cloud.height / 2),
            (cloud.x + cloud.width * 0.6, cloud.y + cloud.height * 0.2, cloud.width * 0.4, cloud.height * 0.4),
            (cloud.x - cloud.width * 0.4, cloud.y + cloud.height * 0.1, cloud.width * 0.3, cloud.height * 0.3),
        )
        for cx, cy, rx, ry in puffs:
            rect = pygame.Rect(int(cx - rx), int(cy - ry), int(rx * 2), int(ry * 2))
            pygame.draw.ellipse(surf, COL_CLOUD, rect)

    def _draw_tree(self, surf: pygame.Surface, tree: TreeView) -> None:
        trunk_top = tree.y - tree.height
        pygame.draw.rect(surf, COL_TRUNK, pygame.Rect(int(tree.x), int(trunk_top), int(tree.trunk_width), int(tree.height)))
        mid = tree.x + tree.trunk_width / 2
        r = int(tree.canopy_radius)
        for dx, dy in ((-15, 5), (0, -10), (15, 5), (0, 20)):
            centre = (int(mid + dx), int(trunk_top + dy))
            pygame.draw.circle(surf, COL_CANOPY, centre, r)
            pygame.draw.circle(surf, COL_CANOPY_EDGE, centre, r, 3)

    def _draw_pipe(self, surf: pygame.Surface, pipe: PipeView, field_height: int) -> None:
        top = pygame.Rect(int(pipe.x), 0, int(pipe.width), int(pipe.top_height))
        bottom = pygame.Rect(int(pipe.x), int(pipe.bottom_y), int(pipe.width), int(field_height - pipe.bottom_y))
        for rect in (top, bottom):
            pygame.draw.rect(surf, COL_PIPE, rect)
            pygame.draw.rect(surf, COL_PIPE_EDGE, rect, 3)

    def _draw_bird(self, surf: pygame.Surface, bird: BirdView) -> None:
        size = int(bird.size)
        pygame.draw.rect(surf, COL_BIRD, pygame.Rect(int(bird.x), int(bird.y), size, size))
        pygame.draw.rect(surf, COL_BIRD_EYE, pygame.Rect(int(bird.x) + size - 5, int(bird.y) + 5, 3, 3))

    def _draw_hud(self, surf: pygame.Surface, frame: FrameSnapshot) -> None:
        score = self.font.render(f"Score: {frame.score}", True, COL_HUD)
        surf.blit(score, (10, 20))
        if not frame.game_over:
            return
        cx, cy = frame.field_width // 2, frame.field_height // 2
        title = self.font_big.render("GAME OVER!", True, COL_GAME_OVER)
        retry = self.font_small.render("Click or Space to Restart", True, COL_GAME_OVER)
        best = self.font_small.render(f"Best: {frame.best}", True, COL_HUD)
        surf.blit(title, title.get_rect(center=(cx, cy)))
        surf.blit(retry, retry.get_rect(center=(cx, cy + 40)))
        surf.blit(best, best.get_rect(center=(cx, cy + 68)))


class Game:
    """Top-level application: owns the window and feeds input and time into the session."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = (settings or Settings()).validate()
        pygame.init()
        self.screen = pygame.display.set_mode((settings.field_width, settings.field_height))
        pygame.display.set_caption("Sky Bird")
        self.clock = pygame.time.Clock()
        self.scheduler = Scheduler()
        self.renderer = PygameRenderer(self.screen, settings)
        self.session = Session(settings, self.scheduler, self.renderer)

    def primary_action(self) -> None:
        if self.session.game_over:
            self.session.restart_if_over()
        else:
            self.session.jump()

    def handle_input(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_SPACE, pygame.K_UP, pygame.K_w):
                self.primary_action()
            elif event.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self.primary_action()

    def step(self, elapsed_ms: float) -> None:
        """Fire spawn timers that came due, then run the pending frame."""
        self.scheduler.advance(elapsed_ms)
        self.scheduler.run_frame()

    def run(self) -> None:
        while True:
            elapsed_ms = self.clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    pygame.quit()
                    return
                self.handle_input(event)
            # At most four frames of timer catch-up after a stall.
            self.step(min(elapsed_ms, 4 * 1000 // FPS))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        game = Game()
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        sys.exit(2)
    game.run()
