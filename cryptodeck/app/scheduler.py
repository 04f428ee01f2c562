from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger


@dataclass
class PeriodicTask:
    """
    Zadanie okresowe sterowane z zewnątrz (poll), bez wątków.

    poll(now) wykonuje akcję raz za każdy pełny interwał od ostatniego
    uruchomienia, więc po "uśpieniu" strony nadrabia zaległe ticki.
    Dwa zadania nie są ze sobą synchronizowane.
    """
    name: str
    interval: float # sekundy
    action: Callable[[], None]
    last_run: Optional[float] = None

    def __post_init__(self) -> None:
        if self.interval <= 0:
            raise ValueError("interval musi być > 0")

    def start(self, now: float) -> None:
        self.last_run = now

    def poll(self, now: float) -> int:
        if self.last_run is None:
            self.start(now)
            return 0
        due = int((now - self.last_run) // self.interval)
        if due <= 0:
            return 0
        for _ in range(due):
            self.action()
        self.last_run += due * self.interval
        logger.debug(f"[{self.name}] wykonano {due} tick(ów)")
        return due
