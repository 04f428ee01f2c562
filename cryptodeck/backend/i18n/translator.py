# cryptodeck/backend/i18n/translator.py
from __future__ import annotations

import os
import re
from typing import Dict, Iterable, Optional

import yaml
from loguru import logger

from cryptodeck.domain.models import SUPPORTED_LANGUAGES

Table = Dict[str, str]

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class Translator:
    """
    Tłumaczenia UI: klucz -> tekst dla języka, z podstawieniami {{nazwa}}.
    - brak tabeli dla języka (nie wczytana) -> zwracamy sam klucz,
    - brak klucza w tabeli albo pusty tekst -> zwracamy sam klucz,
    - podstawiane są wszystkie wystąpienia {{nazwa}}.
    """

    def __init__(self, tables: Optional[Dict[str, Table]] = None) -> None:
        self.tables: Dict[str, Table] = dict(tables or {})

    @classmethod
    def from_dir(cls, locales_dir: str, languages: Iterable[str] = SUPPORTED_LANGUAGES) -> "Translator":
        """Czyta <locales_dir>/<lang>.yaml. Błąd odczytu -> puste tabele (UI pokaże klucze)."""
        languages = list(languages)
        tables: Dict[str, Table] = {}
        try:
            for lang in languages:
                tables[lang] = cls._load_table(os.path.join(locales_dir, f"{lang}.yaml"))
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.error(f"Nie udało się wczytać tłumaczeń z {locales_dir}: {e}")
            tables = {lang: {} for lang in languages}
        return cls(tables)

    @staticmethod
    def _load_table(path: str) -> Table:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: oczekiwano mapy klucz -> tekst")
        return {str(k): "" if v is None else str(v) for k, v in data.items()}

    def is_loaded(self, language: str) -> bool:
        return language in self.tables

    def t(self, key: str, language: str, **subs: object) -> str:
        table = self.tables.get(language)
        if table is None:
            return key
        # pusty tekst w tabeli traktujemy jak brak tłumaczenia
        text = table.get(key) or key
        if subs:
            text = _PLACEHOLDER.sub(lambda m: str(subs[m.group(1)]) if m.group(1) in subs else m.group(0), text)
        return text

    def bind(self, language: str):
        """Zwraca t(key, **subs) przypięte do języka (wygodne na stronach Streamlit)."""
        def _t(key: str, **subs: object) -> str:
            return self.t(key, language, **subs)
        return _t
