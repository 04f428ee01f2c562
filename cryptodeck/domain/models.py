from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Literal, Mapping, Optional, Union

from cryptodeck.domain.errors import BotValidationError, ConfigMismatchError

Language = Literal["vi", "en"]
SUPPORTED_LANGUAGES: tuple[str, ...] = ("vi", "en")


class BotStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ERROR = "ERROR"


class BotStrategy(str, Enum):
    DCA = "DCA"
    GRID = "GRID"
    RSI = "RSI"
    ARBITRAGE = "ARBITRAGE"
    SCALPING = "SCALPING"


# wartości są jednocześnie kluczami tłumaczeń
DCA_FREQUENCIES: tuple[str, ...] = ("freq_1h", "freq_4h", "freq_1d", "freq_1w")


def _coerce_numbers(config: Any) -> None:
    """Rzutuje pola liczbowe na zadeklarowany typ (30 -> 30.0, 12.0 -> 12)."""
    for f in fields(config):
        if f.type not in (int, float):
            continue
        value = getattr(config, f.name)
        if type(value) is f.type:
            continue
        try:
            coerced = int(float(value)) if f.type is int else float(value)
        except (TypeError, ValueError) as e:
            raise BotValidationError(f"Nieprawidłowa wartość pola {f.name}: {value!r}") from e
        object.__setattr__(config, f.name, coerced)


# ===== Konfiguracje per strategia (tagged union: tag = ClassVar `strategy`) =====
# Wartości domyślne = konfiguracja nowo dodanego bota.

@dataclass(frozen=True)
class DCAConfig:
    strategy: ClassVar[BotStrategy] = BotStrategy.DCA
    investment: float = 50.0
    frequency: str = "freq_1d"

    def __post_init__(self) -> None:
        _coerce_numbers(self)
        if self.frequency not in DCA_FREQUENCIES:
            raise BotValidationError(f"frequency musi być jednym z {DCA_FREQUENCIES}, jest {self.frequency!r}")


@dataclass(frozen=True)
class GridConfig:
    strategy: ClassVar[BotStrategy] = BotStrategy.GRID
    lower_price: float = 2000.0
    upper_price: float = 4000.0
    grids: int = 10

    def __post_init__(self) -> None:
        _coerce_numbers(self)


@dataclass(frozen=True)
class RSIConfig:
    strategy: ClassVar[BotStrategy] = BotStrategy.RSI
    oversold: float = 30.0
    overbought: float = 70.0
    order_size: float = 1.0

    def __post_init__(self) -> None:
        _coerce_numbers(self)


@dataclass(frozen=True)
class ArbitrageConfig:
    strategy: ClassVar[BotStrategy] = BotStrategy.ARBITRAGE


@dataclass(frozen=True)
class ScalpingConfig:
    strategy: ClassVar[BotStrategy] = BotStrategy.SCALPING
    take_profit: float = 0.5  # %
    stop_loss: float = 0.3    # %

    def __post_init__(self) -> None:
        _coerce_numbers(self)


BotConfig = Union[DCAConfig, GridConfig, RSIConfig, ArbitrageConfig, ScalpingConfig]

CONFIG_TYPES: Dict[BotStrategy, type] = {
    BotStrategy.DCA: DCAConfig,
    BotStrategy.GRID: GridConfig,
    BotStrategy.RSI: RSIConfig,
    BotStrategy.ARBITRAGE: ArbitrageConfig,
    BotStrategy.SCALPING: ScalpingConfig,
}


def default_config(strategy: BotStrategy) -> BotConfig:
    return CONFIG_TYPES[BotStrategy(strategy)]()


def ensure_config_matches(strategy: BotStrategy, config: BotConfig) -> None:
    """Pilnuje niezmiennika: tag konfiguracji == strategia bota."""
    tag = getattr(config, "strategy", None)
    if tag is not BotStrategy(strategy):
        raise ConfigMismatchError(
            f"Konfiguracja {type(config).__name__} nie pasuje do strategii {BotStrategy(strategy).value}"
        )


def config_from_fields(
    strategy: BotStrategy,
    values: Mapping[str, Any],
    base: Optional[BotConfig] = None,
) -> BotConfig:
    """
    Buduje konfigurację strategii z wartości formularza.
    - nieznane klucze są ignorowane,
    - brakujące pola biorą wartość z `base` (jeśli pasuje do strategii) albo domyślną,
    - liczby są rzutowane zgodnie z typem pola (grids -> int).
    """
    cls = CONFIG_TYPES[BotStrategy(strategy)]
    current = base if base is not None and getattr(base, "strategy", None) is cls.strategy else cls()

    updates: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in values or values[f.name] is None:
            continue
        raw = values[f.name]
        try:
            if f.type is int:
                updates[f.name] = int(float(raw))
            elif f.type is float:
                updates[f.name] = float(raw)
            else:
                updates[f.name] = str(raw)
        except (TypeError, ValueError) as e:
            raise BotValidationError(f"Nieprawidłowa wartość pola {f.name}: {raw!r}") from e
    return replace(current, **updates)


def config_to_dict(config: BotConfig) -> Dict[str, Any]:
    return asdict(config)


@dataclass(frozen=True)
class Bot:
    id: str
    name: str
    strategy: BotStrategy
    symbol: str
    status: BotStatus
    pnl: float
    capital_allocation: float  # % kapitału, 0..100
    config: BotConfig

    def __post_init__(self) -> None:
        ensure_config_matches(self.strategy, self.config)

    @property
    def is_active(self) -> bool:
        return self.status is BotStatus.ACTIVE
