# tests/test_models.py
"""Tests for bot models and strategy configs."""

from dataclasses import fields

import pytest

from cryptodeck.backend.data.seed import seed_bots
from cryptodeck.domain.errors import BotValidationError, ConfigMismatchError
from cryptodeck.domain.models import (
    ArbitrageConfig,
    Bot,
    BotStatus,
    BotStrategy,
    DCAConfig,
    GridConfig,
    RSIConfig,
    ScalpingConfig,
    config_from_fields,
    config_to_dict,
    default_config,
    ensure_config_matches,
)


class TestDefaultConfig:
    def test_defaults_per_strategy(self):
        assert default_config(BotStrategy.DCA) == DCAConfig(50, "freq_1d")
        assert default_config(BotStrategy.GRID) == GridConfig(2000, 4000, 10)
        assert default_config(BotStrategy.RSI) == RSIConfig(30, 70, 1)
        assert default_config(BotStrategy.ARBITRAGE) == ArbitrageConfig()
        assert default_config(BotStrategy.SCALPING) == ScalpingConfig(0.5, 0.3)

    def test_arbitrage_has_no_fields(self):
        assert config_to_dict(ArbitrageConfig()) == {}

    def test_numeric_fields_hold_declared_types(self):
        grid = GridConfig(lower_price=2800, upper_price=3500, grids=20.0)
        assert type(grid.lower_price) is float and type(grid.upper_price) is float
        assert type(grid.grids) is int
        rsi = RSIConfig(oversold=30, overbought=70, order_size=5)
        assert (type(rsi.oversold), type(rsi.overbought), type(rsi.order_size)) == (float, float, float)
        assert type(DCAConfig(investment=100).investment) is float

    def test_seed_configs_hold_declared_types(self):
        for bot in seed_bots():
            for f in fields(bot.config):
                if f.type in (int, float):
                    assert type(getattr(bot.config, f.name)) is f.type, (bot.id, f.name)

    def test_non_numeric_value_rejected(self):
        with pytest.raises(BotValidationError):
            ScalpingConfig(take_profit="wide")

    def test_invalid_dca_frequency(self):
        with pytest.raises(BotValidationError):
            DCAConfig(frequency="freq_5m")


class TestBotInvariant:
    def test_mismatched_config_rejected(self):
        with pytest.raises(ConfigMismatchError):
            Bot("x", "Bad", BotStrategy.GRID, "ETH/USDT", BotStatus.ACTIVE, 0.0, 0.0, DCAConfig())

    def test_matching_config_accepted(self):
        bot = Bot("x", "Ok", BotStrategy.RSI, "SOL/USDT", BotStatus.ACTIVE, 0.0, 0.0, RSIConfig())
        assert bot.is_active

    def test_ensure_config_matches_accepts_string_strategy(self):
        ensure_config_matches("SCALPING", ScalpingConfig())
        with pytest.raises(ConfigMismatchError):
            ensure_config_matches("DCA", ScalpingConfig())


class TestConfigFromFields:
    def test_coerces_form_values(self):
        cfg = config_from_fields(BotStrategy.GRID, {"lower_price": "1500", "upper_price": 2500.5, "grids": "12.0"})
        assert cfg == GridConfig(lower_price=1500.0, upper_price=2500.5, grids=12)
        assert isinstance(cfg.grids, int)

    def test_missing_fields_keep_base(self):
        base = GridConfig(lower_price=2800, upper_price=3500, grids=20)
        cfg = config_from_fields(BotStrategy.GRID, {"grids": 25}, base=base)
        assert cfg == GridConfig(lower_price=2800, upper_price=3500, grids=25)

    def test_base_of_other_strategy_ignored(self):
        cfg = config_from_fields(BotStrategy.RSI, {"order_size": 3}, base=DCAConfig(100, "freq_1h"))
        assert cfg == RSIConfig(oversold=30, overbought=70, order_size=3)

    def test_unknown_keys_ignored(self):
        cfg = config_from_fields(BotStrategy.SCALPING, {"take_profit": 1.2, "leverage": 10})
        assert cfg == ScalpingConfig(take_profit=1.2, stop_loss=0.3)

    def test_invalid_number(self):
        with pytest.raises(BotValidationError):
            config_from_fields(BotStrategy.DCA, {"investment": "abc"})

    def test_invalid_frequency(self):
        with pytest.raises(BotValidationError):
            config_from_fields(BotStrategy.DCA, {"frequency": "weekly"})
