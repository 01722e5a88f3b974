"""Discrete state encoding for the Q-table.

The state of the game seen by the agent is:
    vertical_speed:     bird speed on the Y axis, scaled by 100 and rounded
    obstacle_distance:  horizontal distance from the bird to the targeted tube
    vertical_deviation: ideal passage Y minus bird Y (positive = bird above it)
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum

SPEED_SCALE = 100


class Action(IntEnum):
    STAY = 0  # let gravity act
    JUMP = 1


@dataclass(frozen=True, order=True)
class State:
    vertical_speed: int
    obstacle_distance: int
    vertical_deviation: int


@dataclass(frozen=True)
class Observation:
    """Raw per-tick readout produced by the simulation driver."""
    vertical_speed: float
    obstacle_distance: int
    vertical_deviation: int

    def to_state(self) -> State:
        return encode_state(self.vertical_speed, self.obstacle_distance, self.vertical_deviation)


def encode_state(vertical_speed: float, obstacle_distance: int, vertical_deviation: int) -> State:
    """Collapse a raw observation into a hashable State.

    Speeds are bucketed at 1/SPEED_SCALE resolution; distance and deviation
    are already integral pixel values.
    """
    return State(
        vertical_speed=int(math.floor(vertical_speed * SPEED_SCALE + 0.5)),  # halves round up, like Math.round
        obstacle_distance=int(obstacle_distance),
        vertical_deviation=int(vertical_deviation),
    )
