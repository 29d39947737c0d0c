from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Any, Optional


class EventType(Enum):
    NEW_PROCESS = auto()
    SWITCH_PROCESS = auto()      # time quantum expired
    END_PROCESS = auto()
    IO_REQUEST = auto()
    END_IO = auto()


@dataclass(order=True)
class Event:
    time: int
    type: EventType = field(compare=False)
    process: Optional[Any] = field(compare=False, default=None)
    # tie-breaker stamped by System.push_event: equal times pop in push order
    order: int = 0

    def __repr__(self):
        return f"Event(time={self.time}, type={self.type.name}, pid={getattr(self.process, 'pid', None)})"
