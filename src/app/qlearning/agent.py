# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .config import QLearningConfig
from .memory import EpisodeMemory
from .policy import ActionSelector
from .q_table import QTable
from .state import Action, Observation

logger = logging.getLogger(__name__)


class QLearningAgent():
  """
  Tabular Q-learning agent for the 32x32 Flappy Bird.
  Owns the Q-table, the episode frame buffer and the action selector; the
  simulation driver calls on_tick() once per active tick and
  on_episode_boundary() once per cleared tube or collision.
  """
  def __init__(self, cfg: QLearningConfig, q_table: Optional[QTable] = None,
               rng: Optional[np.random.Generator] = None):
    self.cfg = cfg
    self.q_table = q_table if q_table is not None else QTable()
    self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
    self.memory = EpisodeMemory(self.q_table, cfg)
    self.policy = ActionSelector(self.q_table, cfg, self.rng)
    self.episodes = 0

    if cfg.model:
      self.load_model(cfg.model)

  # Acts on a single observation and remembers the decision for later credit
  def on_tick(self, observation: Observation) -> Action:
    state = observation.to_state()
    action = self.policy.select_action(state)
    self.memory.record_step(state, action)
    return action

  def on_episode_boundary(self, base_reward: float, was_successful: bool) -> dict:
    self.episodes += 1
    stats = self.memory.assign_credit(base_reward, was_successful)
    stats["q_table_len"] = len(self.q_table)
    return stats

  # ---- Model persistence: the table object is kept, its entries swapped

  def save_model(self, path: str) -> None:
    self.q_table.save(path)

  def load_model(self, path: str) -> None:
    self.q_table.replace_with(QTable.load(path))

  def load_preset(self, url: Optional[str] = None) -> None:
    url = url or self.cfg.preset_url
    if not url:
      raise ValueError("No preset model URL configured (PRESET_MODEL_URL).")
    self.q_table.replace_with(QTable.from_url(url, timeout=self.cfg.request_timeout_s))
