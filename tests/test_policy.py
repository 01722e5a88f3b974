"""Tests for the greedy action selector with exploration and biased tie-breaks."""

from __future__ import annotations

import numpy as np
import pytest

from src.app.qlearning import Action, ActionSelector, QLearningConfig, QTable, State

STATE = State(vertical_speed=0, obstacle_distance=10, vertical_deviation=0)
NO_EXPLORE = 0.99  # first draw above the exploration probability


def _table(stay: float = 0.0, jump: float = 0.0) -> QTable:
    table = QTable()
    if stay:
        table.add(STATE, Action.STAY, stay)
    if jump:
        table.add(STATE, Action.JUMP, jump)
    return table


class TestGreedyBranch:
    def test_higher_jump_value_wins(self, cfg, scripted_rng):
        selector = ActionSelector(_table(stay=1.0, jump=2.0), cfg, scripted_rng([NO_EXPLORE]))
        assert selector.select_action(STATE) is Action.JUMP

    def test_higher_stay_value_wins(self, cfg, scripted_rng):
        selector = ActionSelector(_table(stay=0.5, jump=-2.0), cfg, scripted_rng([NO_EXPLORE]))
        assert selector.select_action(STATE) is Action.STAY

    def test_selection_does_not_mutate_table(self, cfg):
        table = _table()
        selector = ActionSelector(table, cfg, np.random.default_rng(1))
        for _ in range(100):
            selector.select_action(STATE)
        assert len(table) == 0


class TestTieBreak:
    @pytest.mark.parametrize("draw, expected", [(0.01, Action.JUMP), (0.5, Action.STAY)])
    def test_tie_uses_second_draw(self, cfg, scripted_rng, draw, expected):
        rng = scripted_rng([NO_EXPLORE, draw])
        selector = ActionSelector(_table(stay=1.5, jump=1.5), cfg, rng)
        assert selector.select_action(STATE) is expected
        assert rng.calls == 2

    def test_tie_jumps_about_one_in_twenty_five(self):
        cfg = QLearningConfig(exploration_probability=0.0)
        selector = ActionSelector(QTable(), cfg, np.random.default_rng(1234))
        trials = 50_000
        jumps = sum(selector.select_action(STATE) is Action.JUMP for _ in range(trials))
        assert jumps / trials == pytest.approx(1 / 25, abs=0.005)


class TestExploration:
    @pytest.mark.parametrize("draw, expected", [(0.1, Action.JUMP), (0.5, Action.STAY)])
    def test_override_ignores_table(self, cfg, scripted_rng, draw, expected):
        # Table prefers the opposite of what the exploration draw picks
        table = _table(stay=5.0) if expected is Action.JUMP else _table(jump=5.0)
        selector = ActionSelector(table, cfg, scripted_rng([0.0, draw]))
        assert selector.select_action(STATE) is expected
        assert selector.exploration_count == 1

    def test_exploration_branch_jumps_a_quarter_of_the_time(self):
        cfg = QLearningConfig(exploration_probability=1.0)
        selector = ActionSelector(QTable(), cfg, np.random.default_rng(99))
        trials = 20_000
        jumps = sum(selector.select_action(STATE) is Action.JUMP for _ in range(trials))
        assert selector.exploration_count == trials
        # Clearly distinct from the 4% tie-break split
        assert jumps / trials == pytest.approx(0.25, abs=0.02)

    def test_default_exploration_is_rare(self, cfg):
        selector = ActionSelector(QTable(), cfg, np.random.default_rng(2024))
        trials = 180_000
        for _ in range(trials):
            selector.select_action(STATE)
        # Expected trials / 9000 = 20
        assert 3 <= selector.exploration_count <= 45
