"""Configuration defaults, validation and JSON loading."""

import json
from datetime import date

import pytest

from value_rotation.config import OrderConfig, ScheduleConfig, StrategyConfig, UniverseConfig, load_config
from value_rotation.errors import ConfigurationError


def test_defaults_match_strategy_parameters():
    cfg = StrategyConfig()

    assert cfg.schedule.start_date == date(2006, 2, 4)
    assert cfg.schedule.end_date == date(2018, 9, 10)
    assert cfg.schedule.period_months == 12
    assert cfg.universe.min_dollar_volume == 1_000_000.0
    assert cfg.universe.min_price == 5.0
    assert cfg.universe.max_value_ratio == 0.7
    assert cfg.universe.portfolio_size == 10
    assert cfg.orders.allocation_fraction == 0.95
    assert (cfg.orders.sell_offset_minutes, cfg.orders.buy_offset_minutes) == (60, 90)


def test_from_dict_parses_iso_dates_and_overrides():
    cfg = StrategyConfig.from_dict(
        {
            "schedule": {"start_date": "2012-01-03", "end_date": "2015-01-01", "period_months": 6},
            "universe": {"portfolio_size": 5},
        }
    )

    assert cfg.schedule.start_date == date(2012, 1, 3)
    assert cfg.schedule.period_months == 6
    assert cfg.universe.portfolio_size == 5
    assert cfg.orders == OrderConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"execution": {}},
        {"universe": {"top_n": 3}},
        {"schedule": {"start_date": "not-a-date"}},
    ],
)
def test_from_dict_rejects_bad_input(data):
    with pytest.raises(ConfigurationError):
        StrategyConfig.from_dict(data)


def test_sell_offset_must_precede_buy_offset():
    with pytest.raises(ConfigurationError):
        OrderConfig(sell_offset_minutes=90, buy_offset_minutes=60)


def test_invalid_sections_raise():
    with pytest.raises(ConfigurationError):
        ScheduleConfig(period_months=0)
    with pytest.raises(ConfigurationError):
        UniverseConfig(min_price=-1.0)
    with pytest.raises(ConfigurationError):
        OrderConfig(allocation_fraction=1.5)


def test_portfolio_size_is_not_validated_at_construction():
    assert UniverseConfig(portfolio_size=0).portfolio_size == 0


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "strategy.json"
    path.write_text(json.dumps({"universe": {"market": "usa", "min_price": 10}}))

    cfg = load_config(path)

    assert cfg.universe.min_price == 10


def test_load_config_wraps_io_and_parse_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_config(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[]")
    with pytest.raises(ConfigurationError):
        load_config(listing)
