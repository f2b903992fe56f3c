"""Conversion of sell/buy lists into deferred orders at the next market open."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import List, Mapping, Optional, Sequence, Union

from .config import OrderConfig
from .data_loader import OrderSink, SecurityHandle
from .models import BUY, SELL, PendingOrder, Symbol

logger = logging.getLogger(__name__)


class OrderScheduler:
    def __init__(self, config: OrderConfig, sink: Optional[OrderSink] = None):
        self.cfg = config
        self.sink = sink

    def schedule(
        self,
        sells: Sequence[Symbol],
        buys: Sequence[Symbol],
        target_size: int,
        as_of: Union[date, datetime],
        securities: Mapping[Symbol, SecurityHandle],
    ) -> List[PendingOrder]:
        """Register sells at open + sell offset and equal-weight buys at open + buy offset.

        Each buy is sized to ``allocation_fraction / target_size`` of equity. With a
        non-positive ``target_size`` no buys are produced.
        """
        day = as_of.date() if isinstance(as_of, datetime) else as_of
        orders: List[PendingOrder] = []

        for symbol in sells:
            order = self._deferred(symbol, SELL, self.cfg.sell_offset_minutes, None, day, securities)
            if order is not None:
                orders.append(order)

        if target_size <= 0:
            if buys:
                logger.warning("Target size is %s, skipping %d buy orders", target_size, len(buys))
        else:
            fraction = self.cfg.allocation_fraction / target_size
            for symbol in buys:
                order = self._deferred(symbol, BUY, self.cfg.buy_offset_minutes, fraction, day, securities)
                if order is not None:
                    orders.append(order)

        if self.sink is not None:
            for order in orders:
                self.sink.submit(order)
        logger.info(
            "Scheduled %d sells and %d buys",
            sum(1 for o in orders if o.action == SELL),
            sum(1 for o in orders if o.action == BUY),
        )
        return orders

    def _deferred(
        self,
        symbol: Symbol,
        action: str,
        offset: int,
        fraction: Optional[float],
        day: date,
        securities: Mapping[Symbol, SecurityHandle],
    ) -> Optional[PendingOrder]:
        security = securities.get(symbol)
        if security is None:
            logger.warning("No security handle for %s, cannot schedule %s", symbol, action)
            return None
        market_open = security.next_market_open(day)
        return PendingOrder(
            symbol=symbol,
            action=action,
            trigger_date=market_open.date(),
            minutes_after_open=offset,
            sizing_fraction=fraction,
            market_open=market_open,
            security=security,
        )


__all__ = ["OrderScheduler"]
