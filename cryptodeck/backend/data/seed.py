# cryptodeck/backend/data/seed.py
"""
Dane startowe (mock) dla dashboardu: lista botów, komponenty systemu,
podział kapitału w AI Brain. Nic tu nie handluje, to tylko stan prezentacyjny.
"""
from __future__ import annotations

from typing import List

from cryptodeck.domain.dto import AllocationSlice, SystemComponent, SystemStatus
from cryptodeck.domain.models import (
    ArbitrageConfig,
    Bot,
    BotStatus,
    BotStrategy,
    DCAConfig,
    GridConfig,
    RSIConfig,
    ScalpingConfig,
)

INITIAL_TOTAL_PNL = 1256.78

# kafelki dashboardu, które nie mają jeszcze źródła danych
ALLOCATED_CAPITAL = 8500.00
WIN_RATE_24H = 68
WIN_RATE_CHANGE = "+1.2%"
TOTAL_PNL_CHANGE = "+2.5%"
TOTAL_PNL_POSITIVE_ABOVE = 1200.0


def seed_bots() -> List[Bot]:
    return [
        Bot("1", "DCA Master", BotStrategy.DCA, "BTC/USDT", BotStatus.ACTIVE, 450.21, 30.0,
            DCAConfig(investment=100.0, frequency="freq_1d")),
        Bot("2", "Grid Runner", BotStrategy.GRID, "ETH/USDT", BotStatus.ACTIVE, 731.55, 45.0,
            GridConfig(lower_price=2800.0, upper_price=3500.0, grids=20)),
        Bot("3", "RSI Momentum", BotStrategy.RSI, "SOL/USDT", BotStatus.ACTIVE, 75.02, 15.0,
            RSIConfig(oversold=30.0, overbought=70.0, order_size=5.0)),
        Bot("4", "Arbitrage Finder", BotStrategy.ARBITRAGE, "Multiple", BotStatus.INACTIVE, 0.0, 0.0,
            ArbitrageConfig()),
        Bot("5", "Scalp Pro", BotStrategy.SCALPING, "BNB/USDT", BotStatus.ERROR, -120.80, 10.0,
            ScalpingConfig(take_profit=0.5, stop_loss=0.3)),
    ]


# opisy to klucze tłumaczeń (data/locales/*.yaml)
SYSTEM_COMPONENTS: tuple[SystemComponent, ...] = (
    SystemComponent("1", "Data Layer (Market Ingest)", SystemStatus.ONLINE, "component_desc_data_layer"),
    SystemComponent("2", "AI Brain (Decision Engine)", SystemStatus.ONLINE, "component_desc_ai_brain"),
    SystemComponent("3", "Orchestrator", SystemStatus.ONLINE, "component_desc_orchestrator"),
    SystemComponent("4", "Bot Workers", SystemStatus.ONLINE, "component_desc_bot_workers"),
    SystemComponent("5", "Execution Layer (Binance)", SystemStatus.DEGRADED, "component_desc_execution"),
    SystemComponent("6", "Risk & Compliance Module", SystemStatus.ONLINE, "component_desc_risk"),
    SystemComponent("7", "Secure Vault", SystemStatus.ONLINE, "component_desc_vault"),
    SystemComponent("8", "Monitoring & Alerting", SystemStatus.OFFLINE, "component_desc_monitoring"),
)


def capital_allocation(reserved_label: str = "reserved") -> List[AllocationSlice]:
    return [
        AllocationSlice("Grid Runner (ETH)", 45),
        AllocationSlice("DCA Master (BTC)", 30),
        AllocationSlice("RSI Momentum (SOL)", 15),
        AllocationSlice(reserved_label, 10),
    ]
