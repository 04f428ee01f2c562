from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # API_KEY is the name the hosted dashboard used; GEMINI_API_KEY wins when both are set
    GEMINI_API_KEY: str | None = Field(
        default=None, validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT: float | None = None


    DEFAULT_LANGUAGE: str = "vi"
    LOCALES_DIR: str = str(PACKAGE_DIR / "data" / "locales")


    BOT_TICK_SECONDS: float = 2.0
    DASHBOARD_TICK_SECONDS: float = 3.0


    LOG_FILE: str = "logs/runtime.log"
    LOG_LEVEL: str = "INFO"


    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


    @field_validator("GEMINI_API_KEY")
    @classmethod
    def _blank_key(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("DEFAULT_LANGUAGE")
    @classmethod
    def _language(cls, v: str) -> str:
        allowed = {"vi", "en"}
        if v.lower() not in allowed:
            raise ValueError("DEFAULT_LANGUAGE must be 'vi' or 'en'")
        return v.lower()

    @field_validator("BOT_TICK_SECONDS", "DASHBOARD_TICK_SECONDS")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("tick interval must be > 0")
        return v

    @property
    def has_api_key(self) -> bool:
        return self.GEMINI_API_KEY is not None


settings = Settings()
