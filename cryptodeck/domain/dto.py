from dataclasses import dataclass
from enum import Enum
from typing import Literal

Sender = Literal["user", "ai"]


class SystemStatus(str, Enum):
    ONLINE = "ONLINE"
    DEGRADED = "DEGRADED"
    OFFLINE = "OFFLINE"


@dataclass(frozen=True)
class SystemComponent:
    id: str
    name: str
    status: SystemStatus
    description: str


@dataclass(frozen=True)
class ChatMessage:
    sender: Sender
    text: str


@dataclass(frozen=True)
class AllocationSlice:
    name: str
    value: float # %
