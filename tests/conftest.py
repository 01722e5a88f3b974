"""Shared fixtures for the Q-learning and game test-suite."""

from __future__ import annotations

from typing import Iterable, List

import numpy as np
import pytest

from src.app.flappy_game import FlappyBirdGame, FlappyGameConfig
from src.app.qlearning import QLearningAgent, QLearningConfig, QTable


class ScriptedRng:
    """Random source that replays fixed draws in order."""

    def __init__(self, draws: Iterable[float]) -> None:
        self.draws: List[float] = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self.draws[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def cfg() -> QLearningConfig:
    return QLearningConfig()


@pytest.fixture
def greedy_cfg() -> QLearningConfig:
    """No exploration and ties always resolve to STAY."""
    return QLearningConfig(exploration_probability=0.0, tie_break_jump_probability=0.0)


@pytest.fixture
def q_table() -> QTable:
    return QTable()


@pytest.fixture
def game_cfg() -> FlappyGameConfig:
    return FlappyGameConfig(headless=True)


@pytest.fixture
def game(game_cfg: FlappyGameConfig) -> FlappyBirdGame:
    return FlappyBirdGame(game_cfg, rng=np.random.default_rng(0))


@pytest.fixture
def greedy_agent(greedy_cfg: QLearningConfig) -> QLearningAgent:
    return QLearningAgent(greedy_cfg, rng=np.random.default_rng(0))


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRng instances."""
    return ScriptedRng
