from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List, Optional


class GameEvent(Enum):
    GAME_STARTED = "game-started"
    GAME_PAUSED = "game-paused"
    GAME_RESUMED = "game-resumed"
    PIECE_MOVED = "piece-moved"
    PIECE_ROTATED = "piece-rotated"
    PIECE_HELD = "piece-held"
    SOFT_DROPPED = "soft-dropped"
    HARD_DROPPED = "hard-dropped"
    PIECE_LOCKED = "piece-locked"
    LINES_CLEARED = "lines-cleared"
    LEVEL_UP = "level-up"
    GAME_OVER = "game-over"


Listener = Callable[..., None]


class EventBus:
    """Synchronous publish/subscribe hub between the engine and its collaborators.

    Listeners subscribed to a specific event receive its payload as keyword
    arguments. Listeners subscribed with ``event=None`` receive every event,
    with the event itself as the first positional argument.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[Optional[GameEvent], List[Listener]] = defaultdict(list)

    def subscribe(self, listener: Listener, event: Optional[GameEvent] = None) -> Callable[[], None]:
        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners[event]:
                self._listeners[event].remove(listener)

        return unsubscribe

    def emit(self, event: GameEvent, **payload: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(**payload)
        for listener in list(self._listeners[None]):
            listener(event, **payload)
