import argparse
import sys
import time
from typing import Callable, List, Optional

import pandas as pd
from dotenv import load_dotenv
from loguru import logger

from cryptodeck.app.advisor_service import AdvisorService
from cryptodeck.app.state import DashboardState
from cryptodeck.backend.ai.gemini_client import GeminiClient, GeminiConfig
from cryptodeck.backend.data.seed import SYSTEM_COMPONENTS
from cryptodeck.backend.i18n.translator import Translator
from cryptodeck.config import Settings
from cryptodeck.domain.interfaces import Clock
from cryptodeck.domain.models import SUPPORTED_LANGUAGES, Bot
from cryptodeck.infra.logging import setup_logging


def build_parser(default_lang: str = "vi") -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="cryptodeck",
        description="CryptoDeck: mutatory PnL i zapytania AI bez interfejsu Streamlit.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sim = sub.add_parser("simulate", help="Uruchom ticki PnL botów i agregatu przez zadany czas.")
    sim.add_argument("--duration", type=float, default=10.0, help="Ile sekund symulować (domyślnie 10).")
    sim.add_argument("--poll", type=float, default=0.5, help="Co ile sekund sprawdzać zaległe ticki.")

    an = sub.add_parser("analyze", help="Analiza rynku dla tematu (Gemini).")
    an.add_argument("topic", type=str)
    an.add_argument("--lang", choices=SUPPORTED_LANGUAGES, default=default_lang)

    ask = sub.add_parser("ask", help="Pytanie do AI Brain (Gemini).")
    ask.add_argument("query", type=str)
    ask.add_argument("--lang", choices=SUPPORTED_LANGUAGES, default=default_lang)

    sub.add_parser("bots", help="Pokaż startową listę botów.")

    health = sub.add_parser("health", help="Pokaż status komponentów systemu.")
    health.add_argument("--lang", choices=SUPPORTED_LANGUAGES, default=default_lang)
    return p


def bots_table(bots: List[Bot]) -> str:
    df = pd.DataFrame(
        [
            {
                "id": b.id,
                "name": b.name,
                "strategy": b.strategy.value,
                "symbol": b.symbol,
                "status": b.status.value,
                "pnl": round(b.pnl, 2),
                "alloc%": b.capital_allocation,
            }
            for b in bots
        ]
    )
    return df.to_string(index=False)


def run_simulation(
    state: DashboardState,
    duration: float,
    poll: float,
    clock: Clock = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> DashboardState:
    start = clock()
    state.start(start)
    logger.info(f"Start symulacji na {duration:.0f}s (bot tick {state.bot_tick_seconds}s, "
                f"agregat {state.dashboard_tick_seconds}s). Przerwij Ctrl+C")
    while True:
        now = clock()
        ran = state.advance(now)
        if any(ran.values()):
            logger.info(f"ticki={ran} | total_pnl={state.total_pnl:.2f} | aktywne={state.active_count}")
        if now - start >= duration:
            break
        sleep(poll)
    return state


def make_advisor(s: Settings) -> AdvisorService:
    client = GeminiClient(GeminiConfig.from_settings(s))
    return AdvisorService(client, client.has_api_key, model=s.GEMINI_MODEL)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    s = Settings()
    setup_logging(s.LOG_FILE, s.LOG_LEVEL)
    args = build_parser(s.DEFAULT_LANGUAGE).parse_args(argv)

    try:
        if args.cmd == "simulate":
            state = DashboardState(
                language=s.DEFAULT_LANGUAGE,
                bot_tick_seconds=s.BOT_TICK_SECONDS,
                dashboard_tick_seconds=s.DASHBOARD_TICK_SECONDS,
            )
            run_simulation(state, args.duration, args.poll)
            print("\n=== BOTS ===")
            print(bots_table(state.bots))
            print(f"\nTotal PnL: {state.total_pnl:.2f}")
            return 0

        if args.cmd == "analyze":
            print(make_advisor(s).request_analysis(args.topic, args.lang))
            return 0

        if args.cmd == "ask":
            print(make_advisor(s).request_advice(args.query, args.lang))
            return 0

        if args.cmd == "bots":
            print(bots_table(DashboardState().bots))
            return 0

        if args.cmd == "health":
            t = Translator.from_dir(s.LOCALES_DIR).bind(args.lang)
            for comp in SYSTEM_COMPONENTS:
                print(f"{comp.name:<28} {t(comp.status.value):<14} {t(comp.description)}")
            return 0

        print("Nieznana komenda.")
        return 2

    except KeyboardInterrupt:
        logger.info("Zatrzymano.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
