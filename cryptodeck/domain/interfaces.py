from abc import ABC, abstractmethod
from typing import Callable, Optional

# źródło losowości: float z [0, 1)
RandomSource = Callable[[], float]

# zegar monotoniczny w sekundach
Clock = Callable[[], float]


class TextGenerator(ABC):
    @abstractmethod
    def generate(self, prompt: str, model: str, system_instruction: Optional[str] = None) -> str: ...
