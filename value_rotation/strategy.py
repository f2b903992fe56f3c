"""Facade wiring the rebalancing components to the host's callbacks."""
from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Mapping, Optional, Union

from .config import StrategyConfig
from .data_loader import CandidateSource, FundamentalsSource, OrderSink, SecurityHandle
from .models import (
    CoarseSelection,
    FundamentalRecord,
    PendingOrder,
    SecurityChanges,
    SecurityDescriptor,
    Symbol,
    TickContext,
)
from .order_scheduler import OrderScheduler
from .portfolio_manager import PortfolioDiffer
from .rebalance_schedule import generate_rebalance_dates
from .universe_filter import UniverseFilter


class RebalanceController:
    """Drives coarse/fine selection and turns membership changes into deferred orders.

    Ticks must be delivered serially: the context produced by :meth:`on_coarse`
    is consumed by the following :meth:`on_fine` call.
    """

    def __init__(self, config: Optional[StrategyConfig] = None, sink: Optional[OrderSink] = None):
        self.config = config or StrategyConfig()
        schedule = self.config.schedule
        dates = generate_rebalance_dates(schedule.start_date, schedule.end_date, schedule.period_months)
        self.universe = UniverseFilter(self.config.universe, dates)
        self.differ = PortfolioDiffer()
        self.scheduler = OrderScheduler(self.config.orders, sink)
        self.context = TickContext()

    @property
    def target(self) -> List[Symbol]:
        return self.universe.target

    def on_coarse(self, now: Union[date, datetime], candidates: Iterable[SecurityDescriptor]) -> List[Symbol]:
        selection: CoarseSelection = self.universe.evaluate_coarse(now, candidates)
        self.context = selection.context
        return selection.symbols

    def on_fine(self, records: Iterable[FundamentalRecord]) -> List[Symbol]:
        return self.universe.evaluate_fine(records, self.context)

    def run_tick(
        self,
        now: Union[date, datetime],
        candidates: CandidateSource,
        fundamentals: FundamentalsSource,
    ) -> List[Symbol]:
        """Pull one coarse/fine cycle from the host's sources.

        Fundamentals are only requested when the coarse stage fired.
        """
        selected = self.on_coarse(now, candidates.candidates(now))
        if not self.context.rebalancing:
            return selected
        return self.on_fine(fundamentals.fundamentals(selected))

    def on_membership_changed(
        self,
        changes: SecurityChanges,
        holdings: Iterable[Symbol],
        universe_members: Mapping[Symbol, SecurityHandle],
        now: Union[date, datetime],
    ) -> List[PendingOrder]:
        if not changes:
            return []
        target = self.universe.target
        diff = self.differ.diff(holdings, target)
        return self.scheduler.schedule(diff.sells, diff.buys, len(target), now, universe_members)


__all__ = ["RebalanceController"]
