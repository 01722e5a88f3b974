"""Headless 32x32 Flappy Bird simulation.

One call to advance() is one frame of the lowrez-jam game: tubes slide
one pixel left, the bird moves by its speed and gravity accelerates it, then
scoring and collisions are checked. Coordinates are screen pixels with Y
growing downward.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .config import FlappyGameConfig
from .utils import round_half_up

WIDTH = HEIGHT = 32

BIRD_X = 5
BIRD_WIDTH, BIRD_HEIGHT = 5, 3
BIRD_START_Y = 14
BIRD_FLOOR_Y = HEIGHT - 4  # bird rests on the ground row

# Tube sprite: a 6x44 column with a 12px gap starting 17px below its top
TUBE_WIDTH, TUBE_HEIGHT = 6, 44
GAP_TOP, GAP_HEIGHT = 17, 12
GAP_CENTER = GAP_TOP + GAP_HEIGHT // 2
TUBE_START_X, TUBE_SPACING = 48, 19
TUBE_RESPAWN_X = WIDTH
TUBE_DESPAWN_X = -TUBE_WIDTH

STATIC_TUBE_Y_FRACTION = 0.639


@dataclass
class Tube:
    x: int
    y: int

    def solid_rows(self) -> List[range]:
        return [
            range(self.y, self.y + GAP_TOP),
            range(self.y + GAP_TOP + GAP_HEIGHT, self.y + TUBE_HEIGHT),
        ]


def _overlaps(a0: int, a1: int, b0: int, b1: int) -> bool:
    return a0 < b1 and b0 < a1


class FlappyBirdGame:
    """Bird physics, tube scrolling, scoring and collision detection."""

    def __init__(self, cfg: FlappyGameConfig, rng: Optional[np.random.Generator] = None):
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng()
        self.static_environment = cfg.static_environment
        self.hi_score = 0
        self.reset()

    # ------------------------------ Lifecycle ------------------------------ #

    def reset(self) -> None:
        self.bird_y = BIRD_START_Y
        self.bird_speed = 0.0
        self.score = 0
        self.game_over = False
        self.tubes = [Tube(x=TUBE_START_X + i * TUBE_SPACING, y=self._tube_y()) for i in range(2)]

    def set_static_environment(self, static: bool) -> None:
        """Takes effect on the next tube (re)spawn."""
        self.static_environment = bool(static)

    def _tube_y(self) -> int:
        if self.static_environment:
            return math.floor(STATIC_TUBE_Y_FRACTION * (HEIGHT - TUBE_HEIGHT))
        return math.floor(self.rng.random() * (HEIGHT - TUBE_HEIGHT + 2))

    # ----------------------------- Observation ----------------------------- #

    def target_tube_index(self) -> int:
        """Index of the tube the bird has to clear next."""
        t0, t1 = self.tubes
        if BIRD_X < t0.x + 3 and (t0.x < t1.x or t1.x + 3 < BIRD_X):
            return 0
        return 1

    @staticmethod
    def ideal_passage_y(tube: Tube) -> int:
        return tube.y + GAP_CENTER

    def bird_center_y(self) -> int:
        return self.bird_y + 1

    # -------------------------------- Step --------------------------------- #

    def jump(self) -> None:
        self.bird_speed = self.cfg.jump_speed

    def advance(self) -> bool:
        """Run one frame. Returns True when the bird hit a tube."""
        active = 0 if self.tubes[0].x < self.tubes[1].x else 1
        self._move_tubes()
        self._move_bird()

        if BIRD_X == self.tubes[active].x + TUBE_WIDTH:
            self.score += 1

        if self.collides():
            self.game_over = True
            self.hi_score = max(self.hi_score, self.score)
        return self.game_over

    def _move_tubes(self) -> None:
        for tube in self.tubes:
            tube.x -= 1
            if tube.x <= TUBE_DESPAWN_X:
                tube.x = TUBE_RESPAWN_X
                tube.y = self._tube_y()

    def _move_bird(self) -> None:
        self.bird_y = round_half_up(self.bird_y + self.bird_speed)
        self.bird_speed += self.cfg.gravity
        if self.bird_y < 0:
            self.bird_y = 0
            self.bird_speed = 0.0
        if self.bird_y >= BIRD_FLOOR_Y:
            self.bird_y = BIRD_FLOOR_Y
            self.bird_speed = 0.0

    def collides(self) -> bool:
        bird_top, bird_bottom = self.bird_y, self.bird_y + BIRD_HEIGHT
        for tube in self.tubes:
            if not _overlaps(BIRD_X, BIRD_X + BIRD_WIDTH, tube.x, tube.x + TUBE_WIDTH):
                continue
            for rows in tube.solid_rows():
                if _overlaps(bird_top, bird_bottom, rows.start, rows.stop):
                    return True
        return False
