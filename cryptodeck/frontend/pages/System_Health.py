# --- make 'cryptodeck' importable ---
import os, sys
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
# -----------------------------

import streamlit as st

from cryptodeck.backend.data.seed import SYSTEM_COMPONENTS
from cryptodeck.domain.dto import SystemStatus
from cryptodeck.frontend.common import get_state, get_t, render_sidebar

st.set_page_config(page_title="System Health — CryptoDeck", page_icon="🩺", layout="wide")

STATUS_ICON = {SystemStatus.ONLINE: "🟢", SystemStatus.DEGRADED: "🟡", SystemStatus.OFFLINE: "🔴"}

state = get_state()
render_sidebar(state)
t = get_t(state)

st.title(t("systemHealthTitle"))

for comp in SYSTEM_COMPONENTS:
    with st.container(border=True):
        left, right = st.columns([5, 1])
        left.markdown(f"**{comp.name}**")
        left.caption(t(comp.description))
        right.markdown(f"{STATUS_ICON[comp.status]} **{t(comp.status.value)}**")
