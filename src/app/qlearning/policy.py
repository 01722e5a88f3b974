"""Greedy action selection over the Q-table with rare exploration.

Both random branches lean toward STAY: the bird should mostly let gravity
act, and an untrained agent must not jump on every tick.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import QLearningConfig
from .q_table import QTable
from .state import Action, State

logger = logging.getLogger(__name__)


class ActionSelector:
    def __init__(self, q_table: QTable, cfg: QLearningConfig, rng: Optional[np.random.Generator] = None):
        self.q_table = q_table
        self.cfg = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.exploration_count = 0

    def _coin(self, p: float) -> bool:
        return self.rng.random() < p

    def select_action(self, state: State) -> Action:
        # Once in a while ignore the table entirely
        if self._coin(self.cfg.exploration_probability):
            self.exploration_count += 1
            action = Action.JUMP if self._coin(self.cfg.exploration_jump_probability) else Action.STAY
            logger.debug("Exploring: %s in %s", action.name, state)
            return action

        reward_for_stay = self.q_table.get(state, Action.STAY)
        reward_for_jump = self.q_table.get(state, Action.JUMP)
        if reward_for_stay > reward_for_jump:
            return Action.STAY
        if reward_for_jump > reward_for_stay:
            return Action.JUMP

        # Tie (includes unvisited states)
        return Action.JUMP if self._coin(self.cfg.tie_break_jump_probability) else Action.STAY
