"""Strategy configuration dataclasses and defaults."""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from datetime import date
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .errors import ConfigurationError


@dataclass
class ScheduleConfig:
    start_date: date = date(2006, 2, 4)
    end_date: date = date(2018, 9, 10)
    period_months: int = 12

    def __post_init__(self) -> None:
        self.start_date = _parse_date(self.start_date, "start_date")
        self.end_date = _parse_date(self.end_date, "end_date")
        if self.period_months <= 0:
            raise ConfigurationError(f"period_months must be positive, got {self.period_months}")


@dataclass
class UniverseConfig:
    market: str = "usa"
    min_dollar_volume: float = 1_000_000.0
    min_price: float = 5.0
    max_value_ratio: float = 0.7
    # Not validated here: a non-positive size is guarded when buys are sized.
    portfolio_size: int = 10

    def __post_init__(self) -> None:
        if self.min_dollar_volume < 0 or self.min_price < 0:
            raise ConfigurationError("liquidity and price floors must be non-negative")
        if self.max_value_ratio <= 0:
            raise ConfigurationError(f"max_value_ratio must be positive, got {self.max_value_ratio}")


@dataclass
class OrderConfig:
    allocation_fraction: float = 0.95
    sell_offset_minutes: int = 60
    buy_offset_minutes: int = 90

    def __post_init__(self) -> None:
        if not 0 < self.allocation_fraction <= 1:
            raise ConfigurationError(
                f"allocation_fraction must be in (0, 1], got {self.allocation_fraction}"
            )
        if self.sell_offset_minutes < 0 or self.buy_offset_minutes < 0:
            raise ConfigurationError("execution offsets must be non-negative")
        if self.sell_offset_minutes >= self.buy_offset_minutes:
            raise ConfigurationError("sell orders must trigger before buy orders")


@dataclass
class StrategyConfig:
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)
    universe: UniverseConfig = field(default_factory=UniverseConfig)
    orders: OrderConfig = field(default_factory=OrderConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StrategyConfig":
        """Build a configuration from a nested mapping such as parsed JSON."""
        sections = {"schedule": ScheduleConfig, "universe": UniverseConfig, "orders": OrderConfig}
        unknown = set(data) - set(sections)
        if unknown:
            raise ConfigurationError(f"unknown configuration sections: {sorted(unknown)}")
        kwargs: Dict[str, Any] = {}
        for name, section_cls in sections.items():
            values = data.get(name) or {}
            allowed = {f.name for f in fields(section_cls)}
            extra = set(values) - allowed
            if extra:
                raise ConfigurationError(f"unknown keys in '{name}': {sorted(extra)}")
            kwargs[name] = section_cls(**values)
        return cls(**kwargs)


def load_config(path: Union[str, Path]) -> StrategyConfig:
    """Load a :class:`StrategyConfig` from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except OSError as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {path} must contain a JSON object")
    return StrategyConfig.from_dict(data)


def _parse_date(value: Union[date, str], name: str) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an ISO date, got {value!r}") from exc


__all__ = ["OrderConfig", "ScheduleConfig", "StrategyConfig", "UniverseConfig", "load_config"]
