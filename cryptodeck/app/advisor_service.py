from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from loguru import logger

from cryptodeck.backend.ai.gemini_client import GeminiError
from cryptodeck.domain.dto import ChatMessage
from cryptodeck.domain.interfaces import TextGenerator

DEFAULT_MODEL = "gemini-2.5-flash"

_MARKET_ANALYSIS_PROMPTS: Dict[str, Callable[[str], str]] = {
    "vi": lambda topic: (
        f'Phân tích thị trường crypto hiện tại về chủ đề sau: "{topic}". \n'
        "      Tập trung vào các xu hướng gần đây, tin tức quan trọng và tâm lý thị trường. \n"
        "      Cung cấp một bản tóm tắt ngắn gọn, dễ hiểu cho một nhà giao dịch.\n"
        "      Sử dụng ngôn ngữ Tiếng Việt."
    ),
    "en": lambda topic: (
        f'Analyze the current crypto market on the following topic: "{topic}". \n'
        "      Focus on recent trends, important news, and market sentiment. \n"
        "      Provide a concise, easy-to-understand summary for a trader.\n"
        "      Use English language."
    ),
}

AI_BRAIN_SYSTEM_INSTRUCTION: Dict[str, str] = {
    "vi": (
        "Bạn là AI Brain, hệ thống ra quyết định cho một dàn bot giao dịch crypto. "
        "Mục tiêu của bạn là cung cấp lời khuyên chiến lược cho người vận hành. "
        "Phân tích câu hỏi của họ dựa trên điều kiện thị trường, hiệu suất bot và các nguyên tắc quản lý rủi ro. "
        "Giữ câu trả lời của bạn ngắn gọn, có thể hành động và dựa trên dữ liệu. "
        "Giọng điệu của bạn phải chuyên nghiệp và tự tin."
    ),
    "en": (
        "You are the AI Brain for a sophisticated crypto trading bot system. "
        "Your goal is to provide strategic advice to the human operator. "
        "Analyze their questions based on market conditions, bot performance, and risk management principles. "
        "Keep your answers concise, actionable, and data-driven. "
        "Your tone should be professional and confident."
    ),
}

MISSING_KEY_MESSAGES: Dict[str, str] = {
    "vi": "Lỗi: API key cho Gemini chưa được cấu hình. Vui lòng kiểm tra lại.",
    "en": "Error: API key for Gemini is not configured. Please check.",
}

_CALL_ERROR_MESSAGES: Dict[str, Callable[[str], str]] = {
    "vi": lambda msg: f"Đã xảy ra lỗi khi gọi Gemini API: {msg}",
    "en": lambda msg: f"An error occurred while calling the Gemini API: {msg}",
}

UNKNOWN_ERROR_MESSAGES: Dict[str, str] = {
    "vi": "Đã xảy ra lỗi không xác định khi gọi Gemini API.",
    "en": "An unknown error occurred while calling the Gemini API.",
}


def _lang(language: str) -> str:
    # nieznany język -> wersja wietnamska (domyślna w UI)
    return language if language in MISSING_KEY_MESSAGES else "vi"


def market_analysis_prompt(topic: str, language: str) -> str:
    return _MARKET_ANALYSIS_PROMPTS[_lang(language)](topic)


def call_error_message(error: BaseException, language: str) -> str:
    msg = str(error)
    if not msg:
        return UNKNOWN_ERROR_MESSAGES[_lang(language)]
    return _CALL_ERROR_MESSAGES[_lang(language)](msg)


class AdvisorService:
    """
    Analiza rynku i czat "AI Brain" na bazie zewnętrznego generatora tekstu.

    Kontrakt: zawsze zwraca tekst. Brak klucza -> stały komunikat (bez wywołania),
    błąd wywołania -> przetłumaczony komunikat z treścią błędu.
    """

    def __init__(self, generator: Optional[TextGenerator], has_api_key: bool, model: str = DEFAULT_MODEL) -> None:
        self.generator = generator
        self.has_api_key = has_api_key and generator is not None
        self.model = model

    def request_analysis(self, topic: str, language: str) -> str:
        return self._call(market_analysis_prompt(topic, language), language, system_instruction=None)

    def request_advice(self, query: str, language: str) -> str:
        return self._call(query, language, system_instruction=AI_BRAIN_SYSTEM_INSTRUCTION[_lang(language)])

    def _call(self, prompt: str, language: str, system_instruction: Optional[str]) -> str:
        if not self.has_api_key:
            return MISSING_KEY_MESSAGES[_lang(language)]
        try:
            return self.generator.generate(prompt, self.model, system_instruction=system_instruction)
        except GeminiError as e:
            logger.error(f"Błąd wywołania Gemini API: {e}")
            return call_error_message(e, language)
        except Exception as e:
            logger.exception(f"Nieoczekiwany błąd generatora: {e!r}")
            return call_error_message(e, language)


@dataclass
class ChatSession:
    """Transkrypt czatu AI Brain (tylko dopisywanie) + flaga loading blokująca ponowne wysłanie."""
    messages: List[ChatMessage] = field(default_factory=list)
    loading: bool = False

    def send(self, query: str, language: str, advisor: AdvisorService) -> bool:
        text = (query or "").strip()
        if not text or self.loading:
            return False

        self.messages.append(ChatMessage("user", text))
        self.loading = True
        try:
            answer = advisor.request_advice(text, language)
        finally:
            self.loading = False
        self.messages.append(ChatMessage("ai", answer))
        return True


@dataclass
class AnalysisPanel:
    """Stan widoku analizy rynku: temat, wynik, błąd (klucz tłumaczenia) i loading."""
    topic: str = "BTC Halving"
    result: str = ""
    error: Optional[str] = None
    loading: bool = False

    def run(self, topic: str, language: str, advisor: AdvisorService) -> bool:
        self.topic = topic
        if not (topic or "").strip():
            self.error = "error_enterTopic"
            return False
        if self.loading:
            return False

        self.loading = True
        self.error = None
        self.result = ""
        try:
            self.result = advisor.request_analysis(topic, language)
        finally:
            self.loading = False
        return True
