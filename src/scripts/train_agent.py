"""
Train the tabular Q-learning agent on the headless 32x32 Flappy Bird.

Setup (from project root):
    pip install -e .

Run (uses .env or environment variables):
    python -m src.scripts.train_agent

Warm-start:
    # set MODEL in .env to point at a saved Q-table, or leave blank to train from scratch
    MODEL=results/flappy-qlearning/qtable.json python -m src.scripts.train_agent

    # or start from a published preset
    PRESET_MODEL_URL=https://example.org/model/qtable-x3-y6.json python -m src.scripts.train_agent

View training:
    tensorboard --logdir results/flappy-qlearning/tb
"""
from __future__ import annotations

import os
from dataclasses import replace
from datetime import datetime

import numpy as np
from torch.utils.tensorboard import SummaryWriter
from tqdm import trange

from src.app.flappy_game import FlappyBirdGame, FlappyGameConfig
from src.app.qlearning import (
    FlappyBirdEnv, QLearningAgent, QLearningConfig, QTableError,
)


def log(s: str) -> None:
    print("[" + datetime.now().strftime("%Y-%m-%dT%H:%M:%S") + "] " + s)


def build_agent(cfg: QLearningConfig, rng: np.random.Generator) -> QLearningAgent:
    """Create the agent, warm-starting from MODEL or PRESET_MODEL_URL when they load."""
    try:
        agent = QLearningAgent(cfg, rng=rng)
    except QTableError as e:
        log(f"⚠️  Could not load MODEL '{cfg.model}' ({e}). Will train from scratch.")
        agent = QLearningAgent(replace(cfg, model=None), rng=rng)

    if cfg.preset_url and not cfg.model:
        try:
            agent.load_preset()
            log(f"Loaded preset model ({len(agent.q_table)} rules) from {cfg.preset_url}")
        except QTableError as e:
            log(f"⚠️  Preset model not loaded: {e}")
    return agent


def main():
    # ---- Load env-driven training config ----
    cfg = QLearningConfig.from_env(mode="train")
    game_cfg = FlappyGameConfig.from_env()

    # ---- Seeds ----
    rng = np.random.default_rng(cfg.seed)

    # ---- Results dir & TensorBoard ----
    results_dir = os.path.join(cfg.results_dir, cfg.id)
    os.makedirs(results_dir, exist_ok=True)
    tb_dir = cfg.tb_dir or os.path.join(results_dir, "tb")
    os.makedirs(tb_dir, exist_ok=True)
    writer = SummaryWriter(log_dir=tb_dir)
    log(f"TensorBoard logging to: {tb_dir}")

    # ---- Game + agent ----
    agent = build_agent(cfg, rng)
    game = FlappyBirdGame(game_cfg, rng=rng)
    env = FlappyBirdEnv(game, agent)
    table_path = os.path.join(results_dir, "qtable.json")

    # ---- Training loop ----
    game_ticks = 0
    best_score = 0
    try:
        for T in trange(1, 1 + int(cfg.train_ticks)):
            outcome = env.step()
            game_ticks += 1

            if outcome.game_over:
                trial = env.trials
                best_score = max(best_score, outcome.score)
                writer.add_scalar("game/score", outcome.score, trial)
                writer.add_scalar("game/ticks", game_ticks, trial)
                writer.add_scalar("agent/q_table_len", len(agent.q_table), trial)
                writer.add_scalar("agent/explorations", agent.policy.exploration_count, trial)
                game_ticks = 0

                # Checkpoint
                if cfg.checkpoint_interval and (trial % cfg.checkpoint_interval == 0):
                    agent.save_model(os.path.join(results_dir, "checkpoint.json"))

    except KeyboardInterrupt:
        log("Stopped by user.")
    finally:
        writer.close()
        agent.save_model(table_path)
        log(f"Games played: {env.trials}, best score: {best_score}, rules learned: {len(agent.q_table)}")
        log(f"Saved final Q-table to {table_path}")
        log(f"TensorBoard logs in {tb_dir}")


if __name__ == "__main__":
    main()
