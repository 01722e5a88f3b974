"""Errors raised by the Q-table persistence paths.

Every load path parses into a fresh table first, so when one of these is
raised the agent's current table has not been touched.
"""
from __future__ import annotations


class QTableError(Exception):
    """Base class for Q-table persistence failures."""


class FormatError(QTableError):
    """The serialized document is not a valid Q-table mapping."""


class NotFoundError(QTableError):
    """No persisted Q-table exists at the requested location."""


class TransferError(QTableError):
    """Fetching a preset Q-table over the network failed."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Could not fetch Q-table from {url}: {reason}")
        self.url = url
        self.reason = reason
