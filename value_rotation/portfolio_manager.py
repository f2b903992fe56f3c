"""Reconciliation of current holdings against the target portfolio."""
from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Sequence

from .models import RebalanceDiff, Symbol

logger = logging.getLogger(__name__)


def invested_symbols(positions: Mapping[Symbol, float]) -> List[Symbol]:
    """Return symbols with a non-zero position, in mapping order."""
    return [symbol for symbol, quantity in positions.items() if quantity]


def _minus(left: Iterable[Symbol], right: Iterable[Symbol]) -> List[Symbol]:
    excluded = set(right)
    return [symbol for symbol in left if symbol not in excluded]


class PortfolioDiffer:
    def diff(self, holdings: Iterable[Symbol], target: Sequence[Symbol]) -> RebalanceDiff:
        """Compute the sells and buys that move ``holdings`` toward ``target``.

        When there are more sells than buys, sells are dropped from the front
        until both lists have the same length. Surplus buys are never dropped.
        """
        holdings = list(holdings)
        sells = _minus(holdings, target)
        buys = _minus(target, holdings)

        surplus = len(sells) - len(buys)
        if surplus > 0:
            logger.debug("Keeping %d surplus positions: %s", surplus, " ".join(sells[:surplus]))
            sells = sells[surplus:]
        return RebalanceDiff(sells=sells, buys=buys)


__all__ = ["PortfolioDiffer", "invested_symbols"]
