"""
Tabular Q-learning components for the 32x32 Flappy Bird:
- QLearningAgent: Q-table + episode frame buffer + action selector
- QTable: sparse (state, action) -> estimate mapping with JSON persistence
- EpisodeMemory: per-episode frames and backward TD credit assignment
- QLearningConfig: load .env config
- FlappyBirdEnv: tick driver connecting the game simulation to the agent

"""

from .agent import QLearningAgent
from .config import QLearningConfig
from .env import FlappyBirdEnv, TickOutcome
from .errors import FormatError, NotFoundError, QTableError, TransferError
from .memory import EpisodeMemory, shaped_reward
from .policy import ActionSelector
from .q_table import QTable
from .state import Action, Observation, State, encode_state

__all__ = [
    "QLearningAgent",
    "QLearningConfig",
    "FlappyBirdEnv",
    "TickOutcome",
    "QTable",
    "EpisodeMemory",
    "shaped_reward",
    "ActionSelector",
    "Action",
    "Observation",
    "State",
    "encode_state",
    "QTableError",
    "FormatError",
    "NotFoundError",
    "TransferError",
]
