# --- make 'cryptodeck' importable ---
import os, sys
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
# -----------------------------

from dataclasses import fields
from typing import Any, Dict, List, Tuple

import pandas as pd
import streamlit as st

from cryptodeck.app.state import DashboardState
from cryptodeck.domain.errors import BotValidationError, ConfigMismatchError
from cryptodeck.domain.models import (
    CONFIG_TYPES,
    DCA_FREQUENCIES,
    Bot,
    BotStatus,
    BotStrategy,
    config_from_fields,
    config_to_dict,
)
from cryptodeck.frontend.common import LIVE_REFRESH_SECONDS, advance, get_state, get_t, render_sidebar

st.set_page_config(page_title="Bots — CryptoDeck", page_icon="🤖", layout="wide")

EDITING_KEY = "editing_bot"
FLASH_KEY = "_flash"

state = get_state()
render_sidebar(state)
t = get_t(state)

STATUS_ICON = {BotStatus.ACTIVE: "🟢", BotStatus.INACTIVE: "⚪", BotStatus.ERROR: "🔴"}

# pole -> (klucz etykiety, granice number_input; typ liczby bierzemy z pola dataclass)
NUMBER_FIELDS: Dict[BotStrategy, List[Tuple[str, str, Dict[str, Any]]]] = {
    BotStrategy.DCA: [("investment", "investmentAmount", {"min_value": 0})],
    BotStrategy.GRID: [
        ("lower_price", "lowerPrice", {"min_value": 0}),
        ("upper_price", "upperPrice", {"min_value": 0}),
        ("grids", "gridCount", {"min_value": 2, "step": 1}),
    ],
    BotStrategy.RSI: [
        ("oversold", "rsiOversold", {"min_value": 0, "max_value": 100}),
        ("overbought", "rsiOverbought", {"min_value": 0, "max_value": 100}),
        ("order_size", "orderSize", {"min_value": 0}),
    ],
    BotStrategy.SCALPING: [
        ("take_profit", "takeProfit", {"min_value": 0, "step": 0.1}),
        ("stop_loss", "stopLoss", {"min_value": 0, "step": 0.1}),
    ],
    BotStrategy.ARBITRAGE: [],
}


def number_input_args(field_type: type, value: Any, bounds: Dict[str, Any]) -> Dict[str, Any]:
    # Streamlit wymaga jednego typu dla value/min/max/step
    cast = int if field_type is int else float
    return {"value": cast(value), **{k: cast(v) for k, v in bounds.items()}}


def bots_frame(bots: List[Bot]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                t("botName"): b.name,
                t("strategy"): t(b.strategy.value),
                t("tradingPair"): b.symbol,
                t("status"): f"{STATUS_ICON[b.status]} {t(b.status.value)}",
                t("pnl"): round(b.pnl, 2),
                t("capitalAllocation"): f"{b.capital_allocation:g}%",
            }
            for b in bots
        ]
    )


@st.fragment(run_every=LIVE_REFRESH_SECONDS)
def render_table(state: DashboardState):
    advance(state)
    df = bots_frame(state.bots)
    st.dataframe(
        df.style.map(lambda v: "color: #00e676" if v >= 0 else "color: #ff5252", subset=[t("pnl")])
        .format({t("pnl"): "${:,.2f}"}),
        use_container_width=True,
        hide_index=True,
    )


def open_editor(bot_id: str) -> None:
    st.session_state[EDITING_KEY] = bot_id


def render_add_bot():
    with st.expander(f"➕ {t('addNewBot')}"):
        with st.form("add_bot_form", clear_on_submit=True):
            name = st.text_input(t("botName"), placeholder=t("botNamePlaceholder"), key="new_bot_name")
            symbol = st.text_input(t("tradingPair"), placeholder=t("tradingPairPlaceholder"), key="new_bot_symbol")
            strategy = st.selectbox(
                t("strategy"), list(BotStrategy), format_func=lambda s: t(s.value), key="new_bot_strategy"
            )
            submit = st.form_submit_button(t("createBot"), type="primary")

    if submit:
        try:
            bot = state.add_bot(name, symbol, strategy)
        except BotValidationError:
            st.error(t("error_fillFields"))
            return
        st.session_state[FLASH_KEY] = t("botAdded", botName=bot.name)
        st.rerun()


def render_config_editor(bot_id: str):
    bot = state.get_bot(bot_id)
    current = config_to_dict(bot.config)
    field_types = {f.name: f.type for f in fields(CONFIG_TYPES[bot.strategy])}
    values: Dict[str, Any] = {}

    with st.container(border=True):
        st.subheader(t("settingsFor", botName=bot.name, strategy=t(bot.strategy.value)))
        with st.form(f"config_form_{bot.id}"):
            for field_name, label_key, bounds in NUMBER_FIELDS[bot.strategy]:
                values[field_name] = st.number_input(
                    t(label_key),
                    key=f"cfg_{bot.id}_{field_name}",
                    **number_input_args(field_types[field_name], current[field_name], bounds),
                )
            if bot.strategy is BotStrategy.DCA:
                values["frequency"] = st.selectbox(
                    t("frequency"),
                    DCA_FREQUENCIES,
                    index=DCA_FREQUENCIES.index(current["frequency"]),
                    format_func=t,
                    key=f"cfg_{bot.id}_frequency",
                )
            if not field_types:
                st.info(t("noConfig"))
            c1, c2 = st.columns(2)
            save = c1.form_submit_button(t("saveChanges"), type="primary", use_container_width=True)
            cancel = c2.form_submit_button(t("cancel"), use_container_width=True)

    if cancel:
        st.session_state.pop(EDITING_KEY, None)
        st.rerun()
    if save:
        try:
            state.save_config(bot.id, config_from_fields(bot.strategy, values, base=bot.config))
        except ConfigMismatchError:
            st.error(t("error_configMismatch"))
            return
        except BotValidationError as e:
            st.error(t("error_invalidValue", message=str(e)))
            return
        st.session_state.pop(EDITING_KEY, None)
        st.session_state[FLASH_KEY] = t("configSaved")
        st.rerun()


# ---------- Layout ----------

st.title(t("botsTitle"))
render_add_bot()

flash = st.session_state.pop(FLASH_KEY, None)
if flash:
    st.success(flash)

editing = st.session_state.get(EDITING_KEY)
if editing is not None:
    render_config_editor(editing)

render_table(state)

st.subheader(t("actions"))
for bot in state.bots:
    c1, c2, c3, c4 = st.columns([3, 2, 1, 1])
    c1.markdown(f"**{bot.name}** · {bot.symbol}")
    c2.caption(f"{STATUS_ICON[bot.status]} {t(bot.status.value)}")
    c3.button(t("settings"), key=f"settings_{bot.id}", use_container_width=True,
              on_click=open_editor, args=(bot.id,))
    label = t("stop") if bot.status is BotStatus.ACTIVE else t("start")
    c4.button(label, key=f"toggle_{bot.id}", use_container_width=True,
              type="secondary" if bot.status is BotStatus.ACTIVE else "primary",
              on_click=state.toggle_status, args=(bot.id,))
