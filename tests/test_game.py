"""Tests for the headless 32x32 game simulation."""

from __future__ import annotations

import numpy as np
import pytest

from src.app.flappy_game import FlappyBirdGame, FlappyGameConfig, Tube
from src.app.flappy_game import game as game_module


class TestReset:
    def test_initial_layout(self, game):
        assert game.bird_y == game_module.BIRD_START_Y
        assert game.bird_speed == 0.0
        assert [t.x for t in game.tubes] == [48, 67]
        # floor(0.639 * (32 - 44))
        assert [t.y for t in game.tubes] == [-8, -8]
        assert game.score == 0 and not game.game_over

    def test_ideal_passage_is_gap_center(self, game):
        assert game.ideal_passage_y(Tube(x=0, y=-8)) == 15


class TestBirdPhysics:
    def test_gravity_and_browser_rounding(self, game):
        game.advance()
        assert (game.bird_y, game.bird_speed) == (14, 0.25)
        game.advance()
        assert (game.bird_y, game.bird_speed) == (14, 0.5)
        game.advance()  # 14.5 rounds up
        assert (game.bird_y, game.bird_speed) == (15, 0.75)

    def test_jump(self, game):
        game.jump()
        assert game.bird_speed == pytest.approx(-1.4)
        game.advance()
        assert game.bird_y == 13
        assert game.bird_speed == pytest.approx(-1.15)

    def test_ceiling_clamp(self, game):
        game.bird_y, game.bird_speed = 0, -1.4
        game.advance()
        assert (game.bird_y, game.bird_speed) == (0, 0.0)

    def test_floor_clamp(self, game):
        game.bird_y, game.bird_speed = 28, 1.0
        game.advance()
        assert (game.bird_y, game.bird_speed) == (game_module.BIRD_FLOOR_Y, 0.0)


class TestTubes:
    def test_tubes_scroll_and_respawn(self, game):
        game.tubes = [Tube(x=-5, y=-8), Tube(x=14, y=-8)]
        game.advance()
        assert [t.x for t in game.tubes] == [32, 13]

    def test_dynamic_heights_stay_in_range(self, game_cfg):
        game = FlappyBirdGame(game_cfg, rng=np.random.default_rng(5))
        game.set_static_environment(False)
        heights = {game._tube_y() for _ in range(500)}
        assert min(heights) >= -10 and max(heights) <= 0
        assert len(heights) > 1

    def test_target_is_nearest_uncleared_tube(self, game):
        game.tubes = [Tube(x=10, y=-8), Tube(x=29, y=-8)]
        assert game.target_tube_index() == 0
        game.tubes = [Tube(x=2, y=-8), Tube(x=21, y=-8)]
        assert game.target_tube_index() == 1
        # tube 1 respawned behind tube 0
        game.tubes = [Tube(x=20, y=-8), Tube(x=1, y=-8)]
        assert game.target_tube_index() == 0


class TestScoringAndCollision:
    def test_score_when_trailing_edge_passes_bird(self, game):
        game.tubes = [Tube(x=0, y=-8), Tube(x=19, y=-8)]
        game.advance()
        assert game.score == 1
        assert not game.game_over

    def test_bird_inside_gap_does_not_collide(self, game):
        game.tubes = [Tube(x=5, y=-8), Tube(x=24, y=-8)]
        game.bird_y = 14
        assert not game.collides()

    @pytest.mark.parametrize("bird_y", [5, 19, 25])
    def test_bird_touching_tube_collides(self, game, bird_y):
        game.tubes = [Tube(x=5, y=-8), Tube(x=24, y=-8)]
        game.bird_y = bird_y
        assert game.collides()

    def test_collision_ends_game_and_keeps_hi_score(self, game):
        game.tubes = [Tube(x=8, y=-8), Tube(x=27, y=-8)]
        game.bird_y, game.score = 26, 3
        assert game.advance() is True
        assert game.game_over
        assert game.hi_score == 3
        game.reset()
        assert game.hi_score == 3 and game.score == 0


class TestGameConfig:
    def test_speed_maps_to_tick_interval(self):
        cfg = FlappyGameConfig()
        assert cfg.tick_interval_ms == 40
        assert cfg.with_speed(150).speed == 99
        assert cfg.with_speed(-3).tick_interval_ms == 100

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GAME_SPEED", "90")
        monkeypatch.setenv("STATIC_ENVIRONMENT", "no")
        monkeypatch.setenv("HEADLESS", "true")
        cfg = FlappyGameConfig.from_env()
        assert cfg.tick_interval_ms == 10
        assert cfg.static_environment is False
        assert cfg.headless is True
