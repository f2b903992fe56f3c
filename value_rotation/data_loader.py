"""Collaborator interfaces and pandas adapters for hosts feeding the engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Protocol, Union

import pandas as pd

from .models import FundamentalRecord, PendingOrder, SecurityDescriptor

CANDIDATE_COLUMNS = ["symbol", "market", "dollar_volume", "price"]
FUNDAMENTAL_COLUMNS = ["symbol", "pe_ratio", "pe_ratio_5y_avg", "roic"]


class CandidateSource(Protocol):
    def candidates(self, now: Union[date, datetime]) -> List[SecurityDescriptor]:
        ...


class FundamentalsSource(Protocol):
    def fundamentals(self, symbols: List[str]) -> List[FundamentalRecord]:
        """Return records only for the requested symbols."""
        ...


class SecurityHandle(Protocol):
    def next_market_open(self, day: date) -> datetime:
        ...


class OrderSink(Protocol):
    def submit(self, order: PendingOrder) -> None:
        ...


def _require_columns(frame: pd.DataFrame, columns: List[str]) -> None:
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise KeyError(f"missing columns: {missing}")


def _optional_float(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def candidates_from_frame(frame: pd.DataFrame) -> List[SecurityDescriptor]:
    _require_columns(frame, CANDIDATE_COLUMNS)
    return [
        SecurityDescriptor(
            symbol=row.symbol,
            market=row.market,
            dollar_volume=float(row.dollar_volume),
            price=float(row.price),
        )
        for row in frame[CANDIDATE_COLUMNS].itertuples(index=False)
    ]


def fundamentals_from_frame(frame: pd.DataFrame) -> List[FundamentalRecord]:
    _require_columns(frame, FUNDAMENTAL_COLUMNS)
    return [
        FundamentalRecord(
            symbol=row.symbol,
            pe_ratio=_optional_float(row.pe_ratio),
            pe_ratio_5y_avg=_optional_float(row.pe_ratio_5y_avg),
            roic=_optional_float(row.roic),
        )
        for row in frame[FUNDAMENTAL_COLUMNS].itertuples(index=False)
    ]


@dataclass
class InMemoryOrderSink(OrderSink):
    """Collects submitted orders, useful for tests or research runs."""

    orders: List[PendingOrder] = field(default_factory=list)

    def submit(self, order: PendingOrder) -> None:
        self.orders.append(order)

    def to_frame(self) -> pd.DataFrame:
        columns = [
            "symbol",
            "action",
            "trigger_date",
            "minutes_after_open",
            "sizing_fraction",
            "market_open",
            "trigger_at",
        ]
        rows = [{col: getattr(order, col) for col in columns} for order in self.orders]
        return pd.DataFrame(rows, columns=columns)


__all__ = [
    "CANDIDATE_COLUMNS",
    "FUNDAMENTAL_COLUMNS",
    "CandidateSource",
    "FundamentalsSource",
    "InMemoryOrderSink",
    "OrderSink",
    "SecurityHandle",
    "candidates_from_frame",
    "fundamentals_from_frame",
]
