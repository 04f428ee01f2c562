# cryptodeck/backend/data/mock_market.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Optional

import numpy as np
import pandas as pd

from cryptodeck.domain.interfaces import RandomSource

VOLATILITY_PCT = 0.03  # dzienna zmienność jako % ceny
DRIFT_BIAS = 0.48      # < 0.5 => lekki trend wzrostowy

# para -> (cena startowa, kolor linii)
MARKET_PAIRS: Dict[str, tuple[float, str]] = {
    "BTC/USDT": (68000.0, "#f7931a"),
    "ETH/USDT": (3500.0, "#8884d8"),
    "SOL/USDT": (150.0, "#00e676"),
}

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass
class MarketSeries:
    data: pd.DataFrame
    color: str


def _label(d: date) -> str:
    # format 'Jan 5' niezależnie od locale systemu
    return f"{_MONTHS[d.month - 1]} {d.day}"


def generate_price_series(
    start_price: float,
    num_points: int,
    rand: Optional[RandomSource] = None,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """
    Losowy spacer ceny: jeden punkt dziennie, kończy się dzień przed `today`.
    Zwraca DataFrame z kolumnami: timestamp, date, price (2 miejsca po przecinku).
    """
    rand = rand or np.random.default_rng().random
    today = today or date.today()
    start = today - timedelta(days=num_points)

    rows = []
    price = float(start_price)
    for i in range(num_points):
        day = start + timedelta(days=i)
        rows.append({"timestamp": pd.Timestamp(day), "date": _label(day), "price": round(price, 2)})
        vol = price * VOLATILITY_PCT
        price += (rand() - DRIFT_BIAS) * vol
        if price <= 0:
            price = vol
    return pd.DataFrame(rows, columns=["timestamp", "date", "price"])


def build_market_data(
    rand: Optional[RandomSource] = None,
    today: Optional[date] = None,
    num_points: int = 30,
) -> Dict[str, MarketSeries]:
    return {
        pair: MarketSeries(generate_price_series(start, num_points, rand=rand, today=today), color)
        for pair, (start, color) in MARKET_PAIRS.items()
    }
