# --- make 'cryptodeck' importable ---
import os, sys
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
# -----------------------------

import altair as alt
import pandas as pd
import streamlit as st

from cryptodeck.backend.data.seed import capital_allocation
from cryptodeck.frontend.common import get_advisor, get_state, get_t, render_sidebar

st.set_page_config(page_title="AI Brain — CryptoDeck", page_icon="🧠", layout="wide")

COLORS = ["#00aaff", "#00e676", "#ffc400", "#4a4a4a"]

state = get_state()
render_sidebar(state)
t = get_t(state)
advisor = get_advisor()

st.title(t("aiBrainTitle"))
left, right = st.columns([1, 1])

with left:
    st.subheader(t("capitalAllocationByStrategy"))
    slices = capital_allocation(t("reserved"))
    df = pd.DataFrame([{"name": s.name, "value": s.value} for s in slices])
    pie = (
        alt.Chart(df)
        .mark_arc(outerRadius=150)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color(
                "name:N",
                scale=alt.Scale(domain=df["name"].tolist(), range=COLORS),
                legend=alt.Legend(title=None, orient="bottom"),
            ),
            tooltip=["name:N", alt.Tooltip("value:Q", format=".0f", title="%")],
        )
        .properties(height=400)
    )
    st.altair_chart(pie, use_container_width=True)

with right:
    st.subheader(t("aiBrainChatTitle"))
    st.caption(t("aiBrainChatDescription"))

    history = st.container(height=420)
    with history:
        for msg in state.chat.messages:
            with st.chat_message("user" if msg.sender == "user" else "assistant",
                                 avatar="👤" if msg.sender == "user" else "🧠"):
                st.markdown(msg.text)

    query = st.chat_input(t("askPlaceholder"), disabled=state.chat.loading)
    if query:
        with history:
            with st.chat_message("user", avatar="👤"):
                st.markdown(query)
            with st.spinner(t("thinking")):
                state.chat.send(query, state.language, advisor)
        st.rerun()
