"""Two-stage universe selection: liquidity screen, then value/quality ranking."""
from __future__ import annotations

import logging
from collections import deque
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple, Union

import numpy as np

from .config import UniverseConfig
from .models import CoarseSelection, FundamentalRecord, SecurityDescriptor, Symbol, TickContext

logger = logging.getLogger(__name__)


def _is_positive(value: Optional[float]) -> bool:
    return value is not None and bool(np.isfinite(value)) and value > 0


def _roic_rank(record: FundamentalRecord) -> Tuple[bool, float]:
    """Missing ROIC ranks after every finite value."""
    finite = record.roic is not None and bool(np.isfinite(record.roic))
    return finite, record.roic if finite else 0.0


class UniverseFilter:
    """Turns a broad candidate list into the target portfolio on rebalancing dates.

    The filter owns the queue of remaining rebalancing dates and the last target
    portfolio it produced. Whether a tick is a rebalancing event travels in the
    :class:`TickContext` returned by the coarse stage.
    """

    def __init__(self, config: UniverseConfig, rebalance_dates: Iterable[date]):
        self.config = config
        self._pending_dates = deque(sorted(rebalance_dates))
        self._target: List[Symbol] = []

    @property
    def target(self) -> List[Symbol]:
        return list(self._target)

    @property
    def remaining_dates(self) -> List[date]:
        return list(self._pending_dates)

    def evaluate_coarse(
        self, now: Union[date, datetime], candidates: Iterable[SecurityDescriptor]
    ) -> CoarseSelection:
        context = TickContext()
        if not self._pending_dates or not self._is_after(now, self._pending_dates[0]):
            logger.debug("No rebalancing event at %s, holding %d symbols", now, len(self._target))
            return CoarseSelection(self.target, context)

        rebalance_date = self._pending_dates.popleft()
        context = TickContext(rebalancing=True, placing_orders=True, rebalance_date=rebalance_date)
        logger.info("Rebalancing event for %s fired at %s", rebalance_date, now)

        cfg = self.config
        selected = [
            c.symbol
            for c in candidates
            if c.market == cfg.market and c.dollar_volume > cfg.min_dollar_volume and c.price > cfg.min_price
        ]
        logger.debug("Coarse screen kept %d candidates", len(selected))
        return CoarseSelection(selected, context)

    def evaluate_fine(self, records: Iterable[FundamentalRecord], context: TickContext) -> List[Symbol]:
        if not context.rebalancing:
            return self.target

        ranked = []
        for record in records:
            if not (_is_positive(record.pe_ratio) and _is_positive(record.pe_ratio_5y_avg)):
                logger.debug("Skipping %s: non-positive PE inputs", record.symbol)
                continue
            if record.value_score < self.config.max_value_ratio:
                ranked.append(record)

        # sorted() is stable, so equal ROIC keeps input order.
        ranked = sorted(ranked, key=_roic_rank, reverse=True)
        size = max(self.config.portfolio_size, 0)
        self._target = [r.symbol for r in ranked[:size]]
        logger.info("New target portfolio (%d): %s", len(self._target), " ".join(self._target))
        return self.target

    @staticmethod
    def _is_after(now: Union[date, datetime], rebalance_date: date) -> bool:
        if isinstance(now, datetime):
            return now > datetime.combine(rebalance_date, time.min, tzinfo=now.tzinfo)
        return now > rebalance_date


__all__ = ["UniverseFilter"]
