import time
from dataclasses import replace
from typing import Callable, List, Sequence

from loguru import logger

from cryptodeck.domain.errors import BotNotFoundError, BotValidationError
from cryptodeck.domain.interfaces import RandomSource
from cryptodeck.domain.models import (
    Bot,
    BotConfig,
    BotStatus,
    BotStrategy,
    default_config,
    ensure_config_matches,
)

# dryf losowego spaceru PnL: (r - 0.45) * 5  ->  krok z [-2.25, 2.75)
BOT_PNL_BIAS = 0.45
BOT_PNL_SCALE = 5.0

# agregat na dashboardzie: (r - 0.5) * 50, niezależny od PnL botów
TOTAL_PNL_BIAS = 0.5
TOTAL_PNL_SCALE = 50.0


def _epoch_id() -> str:
    return f"bot-{int(time.time() * 1000)}"


def _index_of(bots: Sequence[Bot], bot_id: str) -> int:
    for i, b in enumerate(bots):
        if b.id == bot_id:
            return i
    raise BotNotFoundError(f"Nie znaleziono bota id={bot_id!r}")


def get_bot(bots: Sequence[Bot], bot_id: str) -> Bot:
    return bots[_index_of(bots, bot_id)]


def add_bot(
    bots: Sequence[Bot],
    name: str,
    symbol: str,
    strategy: BotStrategy,
    id_factory: Callable[[], str] = _epoch_id,
) -> List[Bot]:
    """
    Dodaje nowego bota (INACTIVE, pnl=0, alokacja=0, domyślna konfiguracja strategii).
    Puste name/symbol -> BotValidationError, rejestr bez zmian.
    """
    name = (name or "").strip()
    symbol = (symbol or "").strip()
    if not name or not symbol:
        raise BotValidationError("name i symbol nie mogą być puste")

    strategy = BotStrategy(strategy)
    taken = {b.id for b in bots}
    bot_id = id_factory()
    # dwa kliknięcia w tej samej milisekundzie
    suffix = 1
    candidate = bot_id
    while candidate in taken:
        candidate = f"{bot_id}-{suffix}"
        suffix += 1

    new_bot = Bot(
        id=candidate,
        name=name,
        strategy=strategy,
        symbol=symbol,
        status=BotStatus.INACTIVE,
        pnl=0.0,
        capital_allocation=0.0,
        config=default_config(strategy),
    )
    logger.info(f"[{candidate}] Dodano bota '{name}' ({strategy.value} {symbol}).")
    return [*bots, new_bot]


def toggle_status(bots: Sequence[Bot], bot_id: str) -> List[Bot]:
    """ACTIVE -> INACTIVE, każdy inny status (także ERROR) -> ACTIVE."""
    idx = _index_of(bots, bot_id)
    bot = bots[idx]
    new_status = BotStatus.INACTIVE if bot.status is BotStatus.ACTIVE else BotStatus.ACTIVE
    out = list(bots)
    out[idx] = replace(bot, status=new_status)
    logger.info(f"[{bot_id}] Status {bot.status.value} -> {new_status.value}")
    return out


def tick_bots(bots: Sequence[Bot], rand: RandomSource) -> List[Bot]:
    out: List[Bot] = []
    for bot in bots:
        if bot.status is BotStatus.ACTIVE:
            bot = replace(bot, pnl=bot.pnl + (rand() - BOT_PNL_BIAS) * BOT_PNL_SCALE)
        out.append(bot)
    return out


def tick_total_pnl(pnl: float, rand: RandomSource) -> float:
    return pnl + (rand() - TOTAL_PNL_BIAS) * TOTAL_PNL_SCALE


def save_config(bots: Sequence[Bot], bot_id: str, config: BotConfig) -> List[Bot]:
    """Podmienia całą konfigurację wskazanego bota; tag konfiguracji musi pasować do strategii."""
    idx = _index_of(bots, bot_id)
    bot = bots[idx]
    ensure_config_matches(bot.strategy, config)
    out = list(bots)
    out[idx] = replace(bot, config=config)
    logger.info(f"[{bot_id}] Zapisano konfigurację {type(config).__name__}.")
    return out


def count_active(bots: Sequence[Bot]) -> int:
    return sum(1 for b in bots if b.status is BotStatus.ACTIVE)
