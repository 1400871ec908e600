from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, DefaultDict, List

logger = logging.getLogger(__name__)


class GameEvent(str, Enum):
    BOARD_CHANGED = "board_changed"  # (grid: np.ndarray)
    PIECE_CHANGED = "piece_changed"  # (piece: Piece | None)
    LINES_PENDING_CLEAR = "lines_pending_clear"  # (rows: tuple[int, ...])
    LINES_CLEARED = "lines_cleared"  # (count: int, points: int)
    SCORE_CHANGED = "score_changed"  # (score: int)
    LEVEL_CHANGED = "level_changed"  # (level: int, drop_interval_ms: float)
    GAME_OVER = "game_over"  # ()
    PAUSED = "paused"  # (paused: bool)


Handler = Callable[..., Any]


class EventEmitter:
    """Synchronous publish/subscribe used by renderers, audio and env hooks.

    A failing subscriber is logged and skipped; it never aborts the engine
    command that emitted the event.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[GameEvent, List[Handler]] = defaultdict(list)

    def subscribe(self, event: GameEvent, handler: Handler) -> Callable[[], None]:
        self._handlers[event].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event]:
                self._handlers[event].remove(handler)

        return unsubscribe

    def emit(self, event: GameEvent, *args: Any) -> None:
        for handler in list(self._handlers[event]):
            try:
                handler(*args)
            except Exception:
                logger.exception("%s handler %r failed", event.value, handler)
