"""Exception types raised by the rebalancing engine."""
from __future__ import annotations


class RebalanceError(Exception):
    """Base class for errors raised by value_rotation."""


class ConfigurationError(RebalanceError, ValueError):
    """Raised when the static strategy configuration is invalid or unreadable."""


__all__ = ["ConfigurationError", "RebalanceError"]
