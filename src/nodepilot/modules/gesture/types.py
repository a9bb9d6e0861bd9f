from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

from ...core.logger import logger
from ..tree.types import Point


@dataclass(frozen=True)
class Stroke:
    path: Tuple[Point, ...]  # one point = press in place
    start_delay_ms: int = 0
    duration_ms: int = 1

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("stroke path must contain at least one point")
        if self.duration_ms <= 0:
            raise ValueError("stroke duration must be positive")

    @property
    def start(self) -> Point:
        return self.path[0]

    @property
    def end(self) -> Point:
        return self.path[-1]

    @property
    def is_press(self) -> bool:
        return self.start == self.end


@dataclass(frozen=True)
class Gesture:
    strokes: Tuple[Stroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("gesture must contain at least one stroke")


class GestureCallback(Protocol):
    def on_completed(self, gesture: Gesture) -> None: ...

    def on_cancelled(self, gesture: Gesture) -> None: ...


class LoggingGestureCallback:
    """Completion sink: logs only, nothing flows back to the caller."""

    def __init__(self, label: str) -> None:
        self.label = label

    def on_completed(self, gesture: Gesture) -> None:
        logger.trace("{} ok onCompleted", self.label)

    def on_cancelled(self, gesture: Gesture) -> None:
        logger.debug("{} onCancelled", self.label)


__all__ = ["Stroke", "Gesture", "GestureCallback", "LoggingGestureCallback"]
