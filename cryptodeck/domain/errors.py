class CryptoDeckError(Exception):
    """Ogólny błąd warstwy domeny dashboardu."""


class BotValidationError(CryptoDeckError):
    """Nieprawidłowe dane wejściowe bota (puste name/symbol, zła wartość pola)."""


class BotNotFoundError(CryptoDeckError):
    """Brak bota o podanym id w rejestrze."""


class ConfigMismatchError(CryptoDeckError):
    """Konfiguracja nie pasuje do strategii bota."""
