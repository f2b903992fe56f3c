"""Core data structures shared across modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any, List, Optional, Tuple

Symbol = str

SELL = "SELL"
BUY = "BUY"


@dataclass(frozen=True)
class SecurityDescriptor:
    symbol: Symbol
    market: str
    dollar_volume: float
    price: float


@dataclass(frozen=True)
class FundamentalRecord:
    symbol: Symbol
    pe_ratio: Optional[float]
    pe_ratio_5y_avg: Optional[float]
    roic: Optional[float]

    @property
    def value_score(self) -> Optional[float]:
        """PE relative to its own 5-year average, or None when either input is non-positive."""
        if self.pe_ratio is None or self.pe_ratio_5y_avg is None:
            return None
        if self.pe_ratio <= 0 or self.pe_ratio_5y_avg <= 0:
            return None
        return self.pe_ratio / self.pe_ratio_5y_avg


@dataclass(frozen=True)
class TickContext:
    rebalancing: bool = False
    placing_orders: bool = False
    rebalance_date: Optional[date] = None


@dataclass(frozen=True)
class CoarseSelection:
    symbols: List[Symbol]
    context: TickContext = field(default_factory=TickContext)


@dataclass(frozen=True)
class RebalanceDiff:
    sells: List[Symbol]
    buys: List[Symbol]

    def __iter__(self):
        return iter((self.sells, self.buys))


@dataclass(frozen=True)
class SecurityChanges:
    added: Tuple[Symbol, ...] = ()
    removed: Tuple[Symbol, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.added or self.removed)


@dataclass(frozen=True)
class PendingOrder:
    symbol: Symbol
    action: str  # BUY or SELL
    trigger_date: date
    minutes_after_open: int
    sizing_fraction: Optional[float] = None
    market_open: Optional[datetime] = None
    security: Any = field(default=None, compare=False, repr=False)

    @property
    def trigger_at(self) -> Optional[datetime]:
        if self.market_open is None:
            return None
        return self.market_open + timedelta(minutes=self.minutes_after_open)


__all__ = [
    "BUY",
    "SELL",
    "CoarseSelection",
    "FundamentalRecord",
    "PendingOrder",
    "RebalanceDiff",
    "SecurityChanges",
    "SecurityDescriptor",
    "Symbol",
    "TickContext",
]
