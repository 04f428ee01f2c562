# cryptodeck/frontend/common.py
"""Wspólne zasoby stron Streamlit: stan sesji, tłumacz, advisor, sidebar."""
from __future__ import annotations

import time
from typing import Callable

import streamlit as st

from cryptodeck.app.advisor_service import AdvisorService
from cryptodeck.app.state import DashboardState
from cryptodeck.backend.ai.gemini_client import GeminiClient, GeminiConfig
from cryptodeck.backend.i18n.translator import Translator
from cryptodeck.config import settings
from cryptodeck.domain.models import SUPPORTED_LANGUAGES
from cryptodeck.infra.logging import setup_logging

STATE_KEY = "dashboard_state"
LIVE_REFRESH_SECONDS = 1.0  # jak często fragmenty "live" nadrabiają ticki


@st.cache_resource
def init_logging():
    # cache_resource: konfiguracja loguru raz na proces
    return setup_logging(settings.LOG_FILE, settings.LOG_LEVEL)


@st.cache_resource
def get_translator() -> Translator:
    return Translator.from_dir(settings.LOCALES_DIR)


@st.cache_resource
def get_advisor() -> AdvisorService:
    client = GeminiClient(GeminiConfig.from_settings(settings))
    return AdvisorService(client, client.has_api_key, model=settings.GEMINI_MODEL)


def get_state() -> DashboardState:
    """Jeden DashboardState na sesję przeglądarki."""
    init_logging()
    if STATE_KEY not in st.session_state:
        state = DashboardState(
            language=settings.DEFAULT_LANGUAGE,
            bot_tick_seconds=settings.BOT_TICK_SECONDS,
            dashboard_tick_seconds=settings.DASHBOARD_TICK_SECONDS,
        )
        state.start(time.monotonic())
        st.session_state[STATE_KEY] = state
    return st.session_state[STATE_KEY]


def advance(state: DashboardState) -> None:
    state.advance(time.monotonic())


def get_t(state: DashboardState) -> Callable[..., str]:
    return get_translator().bind(state.language)


def render_sidebar(state: DashboardState) -> None:
    t = get_t(state)
    st.sidebar.title(f"🤖 {t('tagline')}")
    st.sidebar.caption(t("headerTitle"))

    labels = {"vi": t("vietnamese"), "en": t("english")}
    lang = st.sidebar.selectbox(
        t("language"),
        SUPPORTED_LANGUAGES,
        index=SUPPORTED_LANGUAGES.index(state.language),
        format_func=lambda code: labels[code],
        key="language_select",
    )
    if lang != state.language:
        state.language = lang
        st.rerun()

    st.sidebar.success(f"● {t('paperTrading')}")
    if not get_advisor().has_api_key:
        st.sidebar.warning(t("apiKeyMissing"))


def fmt_money(value: float) -> str:
    return f"${value:,.2f}"
