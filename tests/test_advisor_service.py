# tests/test_advisor_service.py
"""
Tests for the AI advisor façade, chat transcript and analysis panel.

Tests:
- missing API key short-circuits without calling the generator
- prompts / system instruction per language
- error text mapping
- loading latch of ChatSession and AnalysisPanel
"""

from typing import List, Optional, Tuple

import pytest

from cryptodeck.app.advisor_service import (
    AI_BRAIN_SYSTEM_INSTRUCTION,
    AdvisorService,
    AnalysisPanel,
    ChatSession,
    market_analysis_prompt,
)
from cryptodeck.backend.ai.gemini_client import GeminiRateLimitError
from cryptodeck.domain.interfaces import TextGenerator


class FakeGenerator(TextGenerator):
    def __init__(self, answer: str = "ok", error: Optional[BaseException] = None):
        self.answer = answer
        self.error = error
        self.calls: List[Tuple[str, str, Optional[str]]] = []

    def generate(self, prompt, model, system_instruction=None):
        self.calls.append((prompt, model, system_instruction))
        if self.error is not None:
            raise self.error
        return self.answer


class TestMissingKey:
    @pytest.mark.parametrize(
        "language,expected",
        [
            ("en", "Error: API key for Gemini is not configured. Please check."),
            ("vi", "Lỗi: API key cho Gemini chưa được cấu hình. Vui lòng kiểm tra lại."),
        ],
    )
    def test_returns_fixed_message_without_call(self, language, expected):
        gen = FakeGenerator()
        advisor = AdvisorService(gen, has_api_key=False)

        assert advisor.request_analysis("BTC Halving", language) == expected
        assert advisor.request_advice("Should I stop the grid bot?", language) == expected
        assert gen.calls == []

    def test_no_generator_counts_as_missing_key(self):
        advisor = AdvisorService(None, has_api_key=True)
        assert advisor.request_advice("hi", "en").startswith("Error: API key")


class TestCalls:
    def test_analysis_uses_prompt_without_system_instruction(self):
        gen = FakeGenerator("bullish")
        advisor = AdvisorService(gen, has_api_key=True, model="gemini-test")

        assert advisor.request_analysis("ETH ETF", "en") == "bullish"
        prompt, model, system = gen.calls[0]
        assert prompt == market_analysis_prompt("ETH ETF", "en")
        assert '"ETH ETF"' in prompt
        assert "Use English language." in prompt
        assert model == "gemini-test"
        assert system is None

    def test_vietnamese_prompt(self):
        assert "Sử dụng ngôn ngữ Tiếng Việt." in market_analysis_prompt("BTC", "vi")

    def test_advice_passes_system_instruction(self):
        gen = FakeGenerator("hold")
        advisor = AdvisorService(gen, has_api_key=True)

        assert advisor.request_advice("What now?", "vi") == "hold"
        assert gen.calls[0][0] == "What now?"
        assert gen.calls[0][2] == AI_BRAIN_SYSTEM_INSTRUCTION["vi"]

    def test_gemini_error_mapped_to_text(self):
        gen = FakeGenerator(error=GeminiRateLimitError("Rate limit: quota exceeded"))
        advisor = AdvisorService(gen, has_api_key=True)

        assert advisor.request_advice("q", "en") == (
            "An error occurred while calling the Gemini API: Rate limit: quota exceeded"
        )
        assert advisor.request_advice("q", "vi") == (
            "Đã xảy ra lỗi khi gọi Gemini API: Rate limit: quota exceeded"
        )

    def test_unexpected_error_without_message(self):
        advisor = AdvisorService(FakeGenerator(error=RuntimeError()), has_api_key=True)
        assert advisor.request_analysis("x", "en") == "An unknown error occurred while calling the Gemini API."

    def test_unknown_language_falls_back_to_vietnamese(self):
        advisor = AdvisorService(FakeGenerator(), has_api_key=False)
        assert advisor.request_advice("q", "de").startswith("Lỗi:")


class TestChatSession:
    def test_send_appends_user_and_ai(self):
        chat = ChatSession()
        advisor = AdvisorService(FakeGenerator("buy the dip"), has_api_key=True)

        assert chat.send("  what to do?  ", "en", advisor) is True
        assert [(m.sender, m.text) for m in chat.messages] == [("user", "what to do?"), ("ai", "buy the dip")]
        assert chat.loading is False

    def test_empty_query_ignored(self):
        gen = FakeGenerator()
        chat = ChatSession()
        assert chat.send("   ", "en", AdvisorService(gen, has_api_key=True)) is False
        assert chat.messages == []
        assert gen.calls == []

    def test_send_while_loading_ignored(self):
        gen = FakeGenerator()
        chat = ChatSession(loading=True)
        assert chat.send("hello", "en", AdvisorService(gen, has_api_key=True)) is False
        assert chat.messages == []
        assert gen.calls == []

    def test_error_text_becomes_ai_message(self):
        chat = ChatSession()
        chat.send("hello", "en", AdvisorService(FakeGenerator(), has_api_key=False))
        assert chat.messages[-1].sender == "ai"
        assert chat.messages[-1].text.startswith("Error: API key")

    def test_transcript_is_append_only(self):
        chat = ChatSession()
        advisor = AdvisorService(FakeGenerator("a"), has_api_key=True)
        chat.send("one", "en", advisor)
        first = list(chat.messages)
        chat.send("two", "en", advisor)
        assert chat.messages[:2] == first
        assert len(chat.messages) == 4


class TestAnalysisPanel:
    def test_default_topic(self):
        assert AnalysisPanel().topic == "BTC Halving"

    def test_empty_topic_sets_error_key(self):
        gen = FakeGenerator()
        panel = AnalysisPanel()
        assert panel.run("  ", "en", AdvisorService(gen, has_api_key=True)) is False
        assert panel.error == "error_enterTopic"
        assert gen.calls == []

    def test_run_stores_result_and_clears_error(self):
        panel = AnalysisPanel(error="error_enterTopic", result="old")
        assert panel.run("SOL", "en", AdvisorService(FakeGenerator("sideways"), has_api_key=True)) is True
        assert panel.result == "sideways"
        assert panel.error is None
        assert panel.loading is False

    def test_loading_blocks_second_run(self):
        gen = FakeGenerator()
        panel = AnalysisPanel(loading=True)
        assert panel.run("BTC", "en", AdvisorService(gen, has_api_key=True)) is False
        assert gen.calls == []
