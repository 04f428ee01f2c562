# cryptodeck/backend/ai/gemini_client.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from dotenv import load_dotenv

from cryptodeck.config import Settings
from cryptodeck.domain.interfaces import TextGenerator


# ===== Wyjątki specyficzne dla warstwy Gemini =====
class GeminiError(Exception):
    """Ogólny błąd wywołania Gemini API."""


class GeminiAuthError(GeminiError):
    """Brak klucza, błędny klucz albo brak uprawnień."""


class GeminiRateLimitError(GeminiError):
    """Przekroczony limit zapytań API."""


class GeminiNetworkError(GeminiError):
    """Błąd sieci/połączenia."""


class GeminiResponseError(GeminiError):
    """Odpowiedź bez tekstu (np. zablokowana przez filtry)."""


@dataclass
class GeminiConfig:
    api_key: Optional[str]
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-2.5-flash"
    timeout: Optional[float] = None  # None = bez limitu czasu

    @staticmethod
    def from_settings(s: Settings) -> "GeminiConfig":
        return GeminiConfig(
            api_key=s.GEMINI_API_KEY,
            base_url=s.GEMINI_BASE_URL.rstrip("/"),
            model=s.GEMINI_MODEL,
            timeout=s.GEMINI_TIMEOUT,
        )

    @staticmethod
    def from_env() -> "GeminiConfig":
        """
        Ładuje konfigurację z .env. Brak klucza nie jest błędem:
        funkcje AI zwracają wtedy komunikat zamiast wywołania.
        """
        load_dotenv()
        return GeminiConfig.from_settings(Settings())


class GeminiClient(TextGenerator):
    """
    Cienki klient REST dla Generative Language API (generateContent).

    Jedno zapytanie = jedno wywołanie: bez retry i backoffu.
    Błędy HTTP/sieci mapowane są na wyjątki GeminiError*, które warstwa
    advisor_service zamienia na komunikaty dla użytkownika.
    """

    def __init__(
        self,
        cfg: Optional[GeminiConfig] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.cfg = cfg or GeminiConfig.from_env()
        self.log = logger or logging.getLogger(self.__class__.__name__)
        self._http = session or requests.Session()

        if not self.cfg.api_key:
            self.log.warning("Brak klucza Gemini API (GEMINI_API_KEY/API_KEY). Funkcje AI będą wyłączone.")
        else:
            self.log.info("GeminiClient zainicjalizowany (model=%s, base_url=%s)", self.cfg.model, self.cfg.base_url)

    @property
    def has_api_key(self) -> bool:
        return bool(self.cfg.api_key)

    # ---------- PUBLIC API ----------

    def generate(self, prompt: str, model: Optional[str] = None, system_instruction: Optional[str] = None) -> str:
        """Wysyła prompt (opcjonalnie z system instruction) i zwraca wygenerowany tekst."""
        if not self.cfg.api_key:
            raise GeminiAuthError("Gemini API key is not configured")

        model = model or self.cfg.model
        url = f"{self.cfg.base_url}/models/{model}:generateContent"
        body = self._build_body(prompt, system_instruction)

        try:
            resp = self._http.post(
                url,
                json=body,
                headers={"x-goog-api-key": self.cfg.api_key, "Content-Type": "application/json"},
                timeout=self.cfg.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise GeminiNetworkError(f"Network error: {e}") from e
        except requests.RequestException as e:
            raise GeminiError(f"Request error: {e}") from e

        if resp.status_code >= 400:
            msg = self._error_message(resp)
            if resp.status_code in (401, 403):
                raise GeminiAuthError(f"Auth error: {msg}")
            if resp.status_code == 429:
                raise GeminiRateLimitError(f"Rate limit: {msg}")
            raise GeminiError(f"API error {resp.status_code}: {msg}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise GeminiResponseError("Response is not valid JSON") from e
        return self._extract_text(payload)

    # ---------- HELPERS ----------

    @staticmethod
    def _build_body(prompt: str, system_instruction: Optional[str]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if system_instruction:
            body["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        return body

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        try:
            err = resp.json().get("error", {})
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
        except (ValueError, AttributeError):
            pass
        return resp.text or resp.reason or f"HTTP {resp.status_code}"

    @staticmethod
    def _extract_text(payload: Dict[str, Any]) -> str:
        candidates = payload.get("candidates") or []
        if not candidates:
            reason = (payload.get("promptFeedback") or {}).get("blockReason")
            raise GeminiResponseError(f"No candidates in response (blockReason={reason})")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts = [p["text"] for p in parts if isinstance(p, dict) and "text" in p]
        if not texts:
            finish = candidates[0].get("finishReason")
            raise GeminiResponseError(f"Empty candidate (finishReason={finish})")
        return "".join(texts)
