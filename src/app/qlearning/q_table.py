"""Sparse Q-table: (State, Action) -> expected reward.

Serialized form is a flat JSON object whose keys are the composite
"deviation,speed,distance,action" and whose values are the estimates, e.g.

    {"-3,25,20,0": 1.52, "-3,25,20,1": -0.4}

Loading always parses into a new table; the caller swaps it in only after
the parse succeeded.
"""
from __future__ import annotations

import json
import logging
import math
import os
from typing import Dict, Iterator, Tuple

import requests

from .errors import FormatError, NotFoundError, TransferError
from .state import Action, State

logger = logging.getLogger(__name__)

QKey = Tuple[State, Action]


def _format_key(state: State, action: Action) -> str:
    return f"{state.vertical_deviation},{state.vertical_speed},{state.obstacle_distance},{int(action)}"


def _parse_key(raw: str) -> QKey:
    parts = raw.split(",")
    if len(parts) != 4:
        raise FormatError(f"Expected 4 comma separated integers in key {raw!r}")
    try:
        deviation, speed, distance, action = (int(p) for p in parts)
    except ValueError:
        raise FormatError(f"Non-integer component in key {raw!r}") from None
    try:
        act = Action(action)
    except ValueError:
        raise FormatError(f"Unknown action {action} in key {raw!r}") from None
    return State(vertical_speed=speed, obstacle_distance=distance, vertical_deviation=deviation), act


def _parse_value(raw_key: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatError(f"Value for key {raw_key!r} is not a number: {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise FormatError(f"Value for key {raw_key!r} is not finite: {value!r}")
    return value


class QTable:
    """Mapping from (State, Action) to a float estimate, 0.0 when absent."""

    def __init__(self, entries: Dict[QKey, float] | None = None):
        self._q: Dict[QKey, float] = dict(entries or {})

    # ------------------------------ Learning API --------------------------- #

    def get(self, state: State, action: Action) -> float:
        """Estimated reward for `action` in `state`. Never creates an entry."""
        return self._q.get((state, action), 0.0)

    def add(self, state: State, action: Action, delta: float) -> None:
        key = (state, action)
        if key not in self._q:
            self._q[key] = 0.0
        self._q[key] += delta

    def best_value(self, state: State) -> float:
        return max(self.get(state, Action.STAY), self.get(state, Action.JUMP))

    # ------------------------------ Inspection ----------------------------- #

    def __len__(self) -> int:
        return len(self._q)

    def __contains__(self, key: object) -> bool:
        return key in self._q

    def items(self) -> Iterator[Tuple[QKey, float]]:
        return iter(self._q.items())

    def replace_with(self, other: "QTable") -> None:
        """Take over every entry of `other`, dropping the current ones."""
        self._q = dict(other._q)

    # ---------------------------- Serialization ---------------------------- #

    def serialize(self) -> str:
        return json.dumps({_format_key(s, a): v for (s, a), v in self._q.items()})

    @classmethod
    def deserialize(cls, blob: str | bytes) -> "QTable":
        """Parse a serialized table strictly as data.

        Raises:
            FormatError: the document is not a JSON object of composite
                integer keys to finite numbers.
        """
        try:
            doc = json.loads(blob)
        except (TypeError, ValueError) as e:
            raise FormatError(f"Q-table is not valid JSON: {e}") from e
        if not isinstance(doc, dict):
            raise FormatError(f"Q-table must be a JSON object, got {type(doc).__name__}")

        entries: Dict[QKey, float] = {}
        for raw_key, value in doc.items():
            entries[_parse_key(raw_key)] = _parse_value(raw_key, value)
        return cls(entries)

    # ------------------------------ Persistence ---------------------------- #

    def save(self, path: str) -> None:
        parent = os.path.dirname(os.path.abspath(path))
        os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.serialize())
        logger.info("Saved Q-table (%d entries) to %s", len(self), path)

    @classmethod
    def load(cls, path: str) -> "QTable":
        if not os.path.isfile(path):
            raise NotFoundError(f"No Q-table at {path}")
        with open(path, "r", encoding="utf-8") as f:
            table = cls.deserialize(f.read())
        logger.info("Loaded Q-table (%d entries) from %s", len(table), path)
        return table

    @classmethod
    def from_url(cls, url: str, timeout: float = 10.0) -> "QTable":
        """Fetch a preset model. Network problems raise TransferError."""
        try:
            resp = requests.get(url, timeout=timeout)
        except requests.RequestException as e:
            raise TransferError(url, str(e)) from e
        if resp.status_code != 200:
            raise TransferError(url, f"HTTP {resp.status_code}")
        table = cls.deserialize(resp.text)
        logger.info("Fetched preset Q-table (%d entries) from %s", len(table), url)
        return table
