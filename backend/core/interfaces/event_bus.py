# core/interfaces/event_bus.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Any


@dataclass
class Event:
    event_type: str     # e.g. "gate.state_changed", "workshop.record_added"
    source_module: str  # e.g. "gate", "workshop"
    data: dict = field(default_factory=dict)


class EventBus(ABC):
    """In-process pub/sub between modules."""

    @abstractmethod
    def publish(self, event: Event) -> None: ...

    @abstractmethod
    def subscribe(self, event_type: str, handler: Callable[[Event], Any]) -> None: ...

    @abstractmethod
    def unsubscribe(self, event_type: str, handler: Callable) -> None: ...
