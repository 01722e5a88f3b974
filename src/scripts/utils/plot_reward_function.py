"""
Plot the per-frame reward credited at an episode boundary against the bird's
deviation from the ideal passage point.

Run from the project root:
    python -m src.scripts.utils.plot_reward_function

Prereqs:
    pip install -e .
"""

import numpy as np
import matplotlib.pyplot as plt
from src.app.qlearning import Action, QLearningConfig, State, shaped_reward


def main() -> None:
    cfg = QLearningConfig()
    deviations = np.arange(-16, 17)

    cases = [
        ("success", cfg.success_reward, True, Action.STAY),
        ("failure, jumped", cfg.failure_reward, False, Action.JUMP),
        ("failure, stayed", cfg.failure_reward, False, Action.STAY),
    ]

    plt.figure(figsize=(8, 5))
    for label, base, ok, action in cases:
        y_vals = [
            shaped_reward(base, State(0, 0, int(d)), action, ok,
                          tolerance=cfg.tolerance, failure_nudge=cfg.failure_nudge)
            for d in deviations
        ]
        plt.plot(deviations, y_vals, marker=".", label=label)

    plt.axhline(0, color="gray", linestyle="--", linewidth=0.8)
    plt.axvline(0, color="red", linestyle=":", linewidth=1)
    plt.xlabel("vertical deviation (px, positive = bird above the gap center)")
    plt.ylabel("Reward")
    plt.title("Credit per frame at an episode boundary")
    plt.legend()
    plt.grid(True, linestyle="--", alpha=0.6)
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
