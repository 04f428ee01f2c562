# cryptodeck/app/state.py
"""Stan jednej sesji dashboardu (Streamlit trzyma go w st.session_state)."""

from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from cryptodeck.app import bot_service
from cryptodeck.app.advisor_service import AnalysisPanel, ChatSession
from cryptodeck.app.scheduler import PeriodicTask
from cryptodeck.backend.data.seed import INITIAL_TOTAL_PNL, seed_bots
from cryptodeck.domain.interfaces import RandomSource
from cryptodeck.domain.models import Bot, BotConfig, BotStrategy


def _default_rand() -> RandomSource:
    return np.random.default_rng().random


@dataclass
class DashboardState:
    """
    Centralny stan dashboardu.

    Wszystkie strony czytają/zapisują ten obiekt; zmiany botów idą przez
    czyste funkcje z bot_service (zwracają nową listę).
    """

    bots: List[Bot] = field(default_factory=seed_bots)
    total_pnl: float = INITIAL_TOTAL_PNL
    language: str = "vi"

    bot_tick_seconds: float = 2.0
    dashboard_tick_seconds: float = 3.0
    rand: RandomSource = field(default_factory=_default_rand, repr=False)

    chat: ChatSession = field(default_factory=ChatSession)
    analysis: AnalysisPanel = field(default_factory=AnalysisPanel)

    bot_task: PeriodicTask = field(init=False, repr=False)
    total_task: PeriodicTask = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.bot_task = PeriodicTask("bot-pnl", self.bot_tick_seconds, self.tick_bots)
        self.total_task = PeriodicTask("total-pnl", self.dashboard_tick_seconds, self.tick_total)

    # ---------- Mutatory ----------

    def tick_bots(self) -> None:
        self.bots = bot_service.tick_bots(self.bots, self.rand)

    def tick_total(self) -> None:
        self.total_pnl = bot_service.tick_total_pnl(self.total_pnl, self.rand)

    def start(self, now: float) -> None:
        self.bot_task.start(now)
        self.total_task.start(now)

    def advance(self, now: float) -> Dict[str, int]:
        """Nadrabia ticki obu zadań do chwili `now` (każde niezależnie)."""
        return {
            self.bot_task.name: self.bot_task.poll(now),
            self.total_task.name: self.total_task.poll(now),
        }

    # ---------- Edycje użytkownika ----------

    def add_bot(self, name: str, symbol: str, strategy: BotStrategy) -> Bot:
        self.bots = bot_service.add_bot(self.bots, name, symbol, strategy)
        return self.bots[-1]

    def toggle_status(self, bot_id: str) -> None:
        self.bots = bot_service.toggle_status(self.bots, bot_id)

    def save_config(self, bot_id: str, config: BotConfig) -> None:
        self.bots = bot_service.save_config(self.bots, bot_id, config)

    def get_bot(self, bot_id: str) -> Bot:
        return bot_service.get_bot(self.bots, bot_id)

    @property
    def active_count(self) -> int:
        return bot_service.count_active(self.bots)

    def summary(self) -> Dict[str, Any]:
        return {
            "total_pnl": round(self.total_pnl, 2),
            "active_bots": self.active_count,
            "bots": len(self.bots),
        }
