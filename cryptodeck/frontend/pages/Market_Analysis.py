# --- make 'cryptodeck' importable ---
import os, sys
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
# -----------------------------

from typing import Dict

import altair as alt
import streamlit as st

from cryptodeck.backend.data.mock_market import MarketSeries, build_market_data
from cryptodeck.frontend.common import get_advisor, get_state, get_t, render_sidebar

st.set_page_config(page_title="Market Analysis — CryptoDeck", page_icon="📈", layout="wide")

state = get_state()
render_sidebar(state)
t = get_t(state)
advisor = get_advisor()


def get_market_data() -> Dict[str, MarketSeries]:
    # serie generowane raz na sesję, jak w pierwotnym widoku
    if "market_data" not in st.session_state:
        st.session_state["market_data"] = build_market_data()
    return st.session_state["market_data"]


def render_price_chart(pair: str, series: MarketSeries):
    df = series.data
    line = (
        alt.Chart(df)
        .mark_line(color=series.color, strokeWidth=2)
        .encode(
            x=alt.X("timestamp:T", title=None, axis=alt.Axis(format="%b %d")),
            y=alt.Y("price:Q", title=None, scale=alt.Scale(zero=False), axis=alt.Axis(format="$,.0f")),
            tooltip=[alt.Tooltip("date:N", title=pair), alt.Tooltip("price:Q", format="$,.2f", title=t("price"))],
        )
        .properties(height=400)
    )
    st.altair_chart(line, use_container_width=True)


# ---------- Analiza AI ----------
st.title(t("marketAnalysisTitle"))
st.caption(t("marketAnalysisDescription"))

panel = state.analysis
c1, c2 = st.columns([4, 1])
topic = c1.text_input(
    t("marketAnalysisTitle"),
    value=panel.topic,
    placeholder=t("marketAnalysisPlaceholder"),
    key="analysis_topic",
    label_visibility="collapsed",
)
if c2.button(t("analyze"), key="analyze", type="primary", disabled=panel.loading, use_container_width=True):
    with st.spinner(t("processing")):
        panel.run(topic, state.language, advisor)

if panel.error:
    st.error(t(panel.error))
if panel.result:
    st.subheader(t("analysisResult"))
    st.markdown(panel.result)

st.divider()

# ---------- Wykres cen (mock) ----------
st.subheader(t("priceChart"))
market = get_market_data()
pair = st.radio("pair", list(market.keys()), horizontal=True, label_visibility="collapsed")
render_price_chart(pair, market[pair])
