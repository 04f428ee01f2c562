# cryptodeck/frontend/streamlit_app.py

from __future__ import annotations

import streamlit as st

# --- Streamlit page config MUST be first Streamlit call ---
st.set_page_config(page_title="CryptoDeck — Dashboard", page_icon="🤖", layout="wide")
# ----------------------------------------------------------

# --- add project root to sys.path so "cryptodeck" is importable when running via `streamlit run` ---
import os, sys
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
# -------------------------------------------------------------------------------------------

from cryptodeck.app.state import DashboardState
from cryptodeck.backend.data.seed import (
    ALLOCATED_CAPITAL,
    TOTAL_PNL_CHANGE,
    TOTAL_PNL_POSITIVE_ABOVE,
    WIN_RATE_24H,
    WIN_RATE_CHANGE,
)
from cryptodeck.frontend.common import (
    LIVE_REFRESH_SECONDS,
    advance,
    fmt_money,
    get_state,
    get_t,
    render_sidebar,
)


@st.fragment(run_every=LIVE_REFRESH_SECONDS)
def render_stats(state: DashboardState):
    advance(state)
    t = get_t(state)
    c1, c2, c3, c4 = st.columns(4)
    positive = state.total_pnl > TOTAL_PNL_POSITIVE_ABOVE
    c1.metric(
        t("totalPnl"),
        fmt_money(state.total_pnl),
        delta=TOTAL_PNL_CHANGE,
        delta_color="normal" if positive else "inverse",
    )
    c2.metric(t("allocatedCapital"), fmt_money(ALLOCATED_CAPITAL))
    c3.metric(t("activeBots"), f"{state.active_count} / {len(state.bots)}")
    c4.metric(t("winRate24h"), f"{WIN_RATE_24H}%", delta=WIN_RATE_CHANGE)


def render_recent_activity(state: DashboardState):
    t = get_t(state)
    st.subheader(t("recentActivity"))
    rows = [
        (":blue[**[AI Brain]**]", t("activity_ai_brain_increase", botName="Grid Bot (ETH/USDT)", percentage=15), 2),
        (":green[**[DCA Bot]**]", t("activity_dca_buy", amount=0.001, coin="BTC", pair="BTC/USDT"), 15),
        (":red[**[Risk]**]", t("activity_risk_pause", botName="Scalping Bot"), 45),
    ]
    for tag, text, minutes in rows:
        left, right = st.columns([5, 1])
        left.markdown(f"{tag} {text}")
        right.caption(t("minutesAgo", count=minutes))


def main():
    state = get_state()
    render_sidebar(state)
    t = get_t(state)

    st.title(t("dashboardTitle"))
    render_stats(state)
    st.divider()
    render_recent_activity(state)


if __name__ == "__main__":
    main()
