"""Configuration loading from .env and environment variables for the game layer."""
from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv
from .utils import clamp, parse_bool

MAX_SPEED = 99


@dataclass(frozen=True)
class FlappyGameConfig:
    speed: int = 60                 # tick interval is 100 - speed ms
    static_environment: bool = True # every tube gap at the same height
    scale: int = 12                 # preview pixels per game pixel
    headless: bool = False
    max_observation_distance: int = 28  # px; farther tubes get no decision
    gravity: float = 0.25
    jump_speed: float = -1.4

    @property
    def tick_interval_ms(self) -> int:
        return int(100 - clamp(self.speed, 0, MAX_SPEED))

    def with_speed(self, speed: int) -> "FlappyGameConfig":
        return replace(self, speed=int(clamp(speed, 0, MAX_SPEED)))

    @staticmethod
    def from_env() -> "FlappyGameConfig":
        load_dotenv()

        return FlappyGameConfig(
            speed=int(clamp(int(os.getenv("GAME_SPEED", "60")), 0, MAX_SPEED)),
            static_environment=parse_bool(os.getenv("STATIC_ENVIRONMENT"), True),
            scale=int(os.getenv("RENDER_SCALE", "12")),
            headless=parse_bool(os.getenv("HEADLESS"), False),
            max_observation_distance=int(os.getenv("MAX_OBSERVATION_DISTANCE", "28")),
            gravity=float(os.getenv("GRAVITY", "0.25")),
            jump_speed=float(os.getenv("JUMP_SPEED", "-1.4")),
        )
