"""
Watch the Q-learning agent play in a pixel-scaled window. The agent keeps
learning while it plays, exactly as during training.

Configure via .env or environment variables:

Useful:
    MODEL_TEST=results/flappy-qlearning/qtable.json  # table to start from
    # (falls back to MODEL if MODEL_TEST is not set)
    PRESET_MODEL_URL=...   # fetched with the 'p' key
    GAME_SPEED=60          # tick interval is 100 - GAME_SPEED ms
    STATIC_ENVIRONMENT=true

Keys:
    +/-  faster/slower      e  toggle static/dynamic tube heights
    s    save the table     l  reload the table from MODEL_TEST
    p    load preset model  ESC quit

To run:
    python -m src.scripts.run_agent
"""
from __future__ import annotations

import os
from dataclasses import replace
from datetime import datetime

import numpy as np

from src.app.flappy_game import FlappyBirdGame, FlappyGameConfig, PreviewWindow
from src.app.qlearning import (
    FlappyBirdEnv, QLearningAgent, QLearningConfig, QTableError,
)

SPEED_STEP = 10
KEY_ESC = 27


def log(s: str) -> None:
    print("[" + datetime.now().strftime("%Y-%m-%dT%H:%M:%S") + "] " + s)


def handle_key(key: int, env: FlappyBirdEnv, game_cfg: FlappyGameConfig, table_path: str) -> FlappyGameConfig:
    """Apply a preview hot key. Returns the (possibly updated) game config."""
    agent, game = env.agent, env.game
    ch = chr(key & 0xFF) if key >= 0 else ""

    if ch in ("+", "="):
        game_cfg = game_cfg.with_speed(game_cfg.speed + SPEED_STEP)
        log(f"Speed {game_cfg.speed} ({game_cfg.tick_interval_ms} ms/tick)")
    elif ch == "-":
        game_cfg = game_cfg.with_speed(game_cfg.speed - SPEED_STEP)
        log(f"Speed {game_cfg.speed} ({game_cfg.tick_interval_ms} ms/tick)")
    elif ch == "e":
        game.set_static_environment(not game.static_environment)
        log("Environment: " + ("static" if game.static_environment else "dynamic"))
    elif ch == "s":
        agent.save_model(table_path)
        log(f"Model was saved successfully to {table_path}")
    elif ch == "l":
        try:
            agent.load_model(table_path)
            log(f"Model was loaded successfully ({len(agent.q_table)} rules)")
        except QTableError as e:
            log(f"⚠️  {e}")
    elif ch == "p":
        try:
            agent.load_preset()
            log(f"Preset model loaded successfully ({len(agent.q_table)} rules)")
        except (QTableError, ValueError) as e:
            log(f"⚠️  {e}")
    return game_cfg


def main():
    cfg = QLearningConfig.from_env(mode="test")
    game_cfg = FlappyGameConfig.from_env()
    rng = np.random.default_rng(cfg.seed)

    table_path = cfg.model or os.path.join(cfg.results_dir, cfg.id, "qtable.json")
    agent = QLearningAgent(replace(cfg, model=None), rng=rng)
    try:
        agent.load_model(table_path)
        log(f"Loaded model from {table_path} ({len(agent.q_table)} rules)")
    except QTableError as e:
        log(f"{e}; starting with an empty table.")

    env = FlappyBirdEnv(FlappyBirdGame(game_cfg, rng=rng), agent)
    window = None if game_cfg.headless else PreviewWindow(game_cfg.scale)

    try:
        while True:
            outcome = env.step()
            if window is None:
                continue
            hud = f"{outcome.score}  hi {env.game.hi_score}  trials {env.trials}  rules {len(agent.q_table)}"
            key = window.show(env.game, hud=hud, wait_ms=game_cfg.tick_interval_ms)
            if key >= 0 and (key & 0xFF) == KEY_ESC:
                break
            game_cfg = handle_key(key, env, game_cfg, table_path)
    except KeyboardInterrupt:
        print("\nStopped by user.")
    finally:
        if window is not None:
            window.close()


if __name__ == "__main__":
    main()
