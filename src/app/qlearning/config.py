from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Literal

from dotenv import load_dotenv


def _parse_optional_int(val: Optional[str]) -> Optional[int]:
    if val is None or not str(val).strip():
        return None
    return int(val)


@dataclass(frozen=True)
class QLearningConfig:
    # ---- Experiment ----
    id: str = "flappy-qlearning"
    seed: Optional[int] = None

    # ---- Q-learning hyperparams ----
    alpha: float = 0.1   # learning rate
    gamma: float = 0.8   # discount on the best future value

    # ---- Action selection ----
    exploration_probability: float = 1 / 9000
    exploration_jump_probability: float = 0.25
    tie_break_jump_probability: float = 1 / 25

    # ---- Credit assignment ----
    min_tail_length: int = 5    # frames kept across an episode boundary
    tolerance: float = 1.0      # px around the ideal passage point
    failure_nudge: float = 0.5  # reward for a defensible action in a failed episode
    success_reward: float = 5.0
    failure_reward: float = 100.0

    # Model path (depends on mode)
    model: Optional[str] = None
    preset_url: Optional[str] = None
    request_timeout_s: float = 10.0

    # ---- Training/runtime ----
    results_dir: str = "results"
    checkpoint_interval: int = 100  # games between table checkpoints
    train_ticks: int = 500_000

    # ---- TensorBoard ----
    tb_dir: Optional[str] = None  # default: results/<id>/tb

    @staticmethod
    def from_env(mode: Literal["train", "test"] = "train") -> "QLearningConfig":
        """
        Load QLearningConfig from .env/environment variables.
        Mode determines which MODEL_* variable to prefer:
          - train: MODEL_TRAIN -> MODEL
          - test:  MODEL_TEST  -> MODEL
        """
        load_dotenv()

        def _get(k: str, default: Optional[str] = None) -> Optional[str]:
            v = os.getenv(k)
            return v if v is not None else default

        # --- Select model var based on mode ---
        model = None
        if mode == "train":
            model = _get("MODEL_TRAIN") or _get("MODEL")
        elif mode == "test":
            model = _get("MODEL_TEST") or _get("MODEL")

        return QLearningConfig(
            id=_get("QLEARNING_ID", "flappy-qlearning"),
            seed=_parse_optional_int(_get("SEED")),

            alpha=float(_get("ALPHA", "0.1")),
            gamma=float(_get("GAMMA", "0.8")),

            exploration_probability=float(_get("EXPLORATION_PROBABILITY", str(1 / 9000))),
            exploration_jump_probability=float(_get("EXPLORATION_JUMP_PROBABILITY", "0.25")),
            tie_break_jump_probability=float(_get("TIE_BREAK_JUMP_PROBABILITY", "0.04")),

            min_tail_length=int(_get("MIN_TAIL_LENGTH", "5")),
            tolerance=float(_get("TOLERANCE", "1")),
            failure_nudge=float(_get("FAILURE_NUDGE", "0.5")),
            success_reward=float(_get("SUCCESS_REWARD", "5")),
            failure_reward=float(_get("FAILURE_REWARD", "100")),

            model=model,
            preset_url=_get("PRESET_MODEL_URL") or None,
            request_timeout_s=float(_get("REQUEST_TIMEOUT_S", "10")),

            results_dir=_get("RESULTS_DIR", "results"),
            checkpoint_interval=int(_get("CHECKPOINT_INTERVAL", "100")),
            train_ticks=int(_get("TRAIN_TICKS", "500000")),

            tb_dir=_get("TB_DIR"),  # will fallback to results/<id>/tb in train
        )
