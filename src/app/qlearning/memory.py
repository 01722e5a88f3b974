# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import List, NamedTuple

import numpy as np

from .config import QLearningConfig
from .q_table import QTable
from .state import Action, State


# ---------------------------------------------------------------------
# Reward shaping
# ---------------------------------------------------------------------

def shaped_reward(base_reward: float, state: State, action: Action, was_successful: bool,
                  tolerance: float = 1.0, failure_nudge: float = 0.5) -> float:
  """
  Reward credited to one (state, action) frame at an episode boundary.
  States closer to the ideal passage point earn more. In a failed episode a
  frame is punished only when its action pushed the bird the wrong way:
    - above the line by more than `tolerance` and jumped
    - below the line by more than `tolerance` and stayed
  Any other frame gets the small `failure_nudge`.
  """
  reward = base_reward - abs(state.vertical_deviation)
  if was_successful:
    return reward
  if state.vertical_deviation > tolerance and action == Action.JUMP:
    return -reward
  if state.vertical_deviation < -tolerance and action == Action.STAY:
    return -reward
  return failure_nudge


# ---------------------------------------------------------------------
# Episode frame buffer with deferred (backward) TD updates
# ---------------------------------------------------------------------

class Frame(NamedTuple):
  state: State
  action: Action


class EpisodeMemory():
  """
  Holds the (state, action) frames of the running episode. Reward is only
  known once the episode resolves, so assign_credit() walks the frames from
  newest to oldest and applies the one-step TD update to each, bootstrapping
  from the frame recorded right after it. The newest frame only serves as the
  future reference for its predecessor.

  The last `min_tail_length` frames survive a boundary: the bird's momentum
  from those actions carries into the next episode.
  """
  def __init__(self, q_table: QTable, cfg: QLearningConfig):
    self.q_table = q_table
    self.cfg = cfg
    self.frames: List[Frame] = []
    self.episode_steps = 0

  def record_step(self, state: State, action: Action) -> None:
    self.frames.append(Frame(state, action))
    self.episode_steps += 1

  def assign_credit(self, base_reward: float, was_successful: bool) -> dict:
    """
    Credit the buffered frames for the episode that just ended.
    Returns a small dict of aggregate stats.
    """
    alpha, gamma = self.cfg.alpha, self.cfg.gamma
    window = max(self.cfg.min_tail_length, self.episode_steps)

    td_errors = []
    i = len(self.frames) - 2
    while i >= 0 and window > 0:
      state, action = self.frames[i]
      future_state = self.frames[i + 1].state

      reward = shaped_reward(base_reward, state, action, was_successful,
                             tolerance=self.cfg.tolerance, failure_nudge=self.cfg.failure_nudge)
      optimal_future = self.q_table.best_value(future_state)
      td = reward + gamma * optimal_future - self.q_table.get(state, action)
      self.q_table.add(state, action, alpha * td)

      td_errors.append(td)
      window -= 1
      i -= 1

    self._trim()
    self.episode_steps = 0

    stats = {
      "updates":    len(td_errors),
      "td_mean":    float(np.mean(td_errors)) if td_errors else 0.0,
      "td_abs_max": float(np.max(np.abs(td_errors))) if td_errors else 0.0,
      "buffer_len": len(self.frames),
    }
    return stats

  def _trim(self) -> None:
    tail = self.cfg.min_tail_length
    self.frames = self.frames[-tail:] if tail > 0 else []

  def clear(self) -> None:
    self.frames = []
    self.episode_steps = 0

  def __len__(self) -> int:
    return len(self.frames)
