# -*- coding: utf-8 -*-
"""Simulation driver that connects the 32x32 game to the Q-learning agent.

Each step() is one game tick:
    1. restart the game if the previous tick ended it
    2. find the tube to clear next; a change of target means the previous
       tube was passed, which closes a successful episode
    3. when that tube is close enough, observe, ask the agent, apply the action
    4. advance the physics; a collision closes a failed episode

Usage (sketch):
    env = FlappyBirdEnv(FlappyBirdGame(game_cfg), QLearningAgent(cfg))
    for _ in range(100_000):
        outcome = env.step()
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from src.app.flappy_game.game import BIRD_X, FlappyBirdGame

from .agent import QLearningAgent
from .state import Action, Observation

# --------------------------------------------------------------------------- #
# Logging
# --------------------------------------------------------------------------- #

logger = logging.getLogger(__name__)
if not logger.handlers:
    # Default console handler (library-friendly: INFO by default; let apps override)
    _h = logging.StreamHandler()
    _h.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(_h)
    logger.setLevel(logging.INFO)

NO_TARGET = -1

EVENT_TUBE_CLEARED = "tube_cleared"
EVENT_COLLISION = "collision"


@dataclass(frozen=True)
class TickOutcome:
    action: Optional[Action]  # None when the target tube was too far to decide
    event: Optional[str]      # EVENT_TUBE_CLEARED / EVENT_COLLISION / None
    score: int
    game_over: bool


class FlappyBirdEnv:
    """Tick driver. Owns no learning state; everything learned lives in the agent."""

    def __init__(self, game: FlappyBirdGame, agent: QLearningAgent):
        self.game = game
        self.agent = agent
        self.target_index = NO_TARGET
        self.trials = 0
        self.ticks = 0

    # ------------------------------ Public API ----------------------------- #

    def reset(self) -> None:
        """Start a fresh game; the agent's frame tail is kept on purpose."""
        self.game.reset()
        self.target_index = NO_TARGET

    def observe(self) -> Observation:
        tube = self.game.tubes[self.target_index]
        return Observation(
            vertical_speed=self.game.bird_speed,
            obstacle_distance=tube.x - BIRD_X,
            vertical_deviation=self.game.ideal_passage_y(tube) - self.game.bird_center_y(),
        )

    def step(self) -> TickOutcome:
        if self.game.game_over:
            self.reset()

        self.ticks += 1
        event = self._track_target()

        action = None
        tube = self.game.tubes[self.target_index]
        if tube.x - BIRD_X <= self.game.cfg.max_observation_distance:
            action = self.agent.on_tick(self.observe())
            if action == Action.JUMP:
                self.game.jump()

        if self.game.advance():
            event = EVENT_COLLISION
            self._game_over()

        return TickOutcome(action=action, event=event, score=self.game.score, game_over=self.game.game_over)

    # ------------------------------ Internals ------------------------------ #

    def _track_target(self) -> Optional[str]:
        new_index = self.game.target_tube_index()
        previous, self.target_index = self.target_index, new_index
        if previous != NO_TARGET and previous != new_index:
            self.agent.on_episode_boundary(self.agent.cfg.success_reward, True)
            return EVENT_TUBE_CLEARED
        return None

    def _game_over(self) -> None:
        self.agent.on_episode_boundary(self.agent.cfg.failure_reward, False)
        logger.info("GameOver: score=%d rules=%d trials=%d",
                    self.game.score, len(self.agent.q_table), self.trials)
        self.target_index = NO_TARGET
        self.trials += 1
