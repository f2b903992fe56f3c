"""Rebalancing date generation."""
from __future__ import annotations

from datetime import date
from typing import List

import pandas as pd

from .errors import ConfigurationError


def generate_rebalance_dates(start: date, end: date, period_months: int = 12) -> List[date]:
    """Return start, start + period, start + 2 periods, ... while strictly before ``end``.

    Each date is derived from the previous one, so a 29 February start rolls to
    28 February and stays there. ``start > end`` yields an empty list.
    """
    if period_months <= 0:
        raise ConfigurationError(f"period_months must be positive, got {period_months}")
    step = pd.DateOffset(months=period_months)
    dates: List[date] = []
    current = pd.Timestamp(start)
    stop = pd.Timestamp(end)
    while current < stop:
        dates.append(current.date())
        current = current + step
    return dates


__all__ = ["generate_rebalance_dates"]
