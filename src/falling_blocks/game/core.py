from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .cascade import LineClearCascade
from .clock import ManualClock
from .events import EventEmitter, GameEvent
from .grid import GameGrid
from .pieces import Piece, PieceSpawner, rotate_cw
from .rules import ScoringRules
from .scheduler import DropScheduler

logger = logging.getLogger(__name__)

# Tried in order after a rotation; the first offset that fits wins.
ROTATION_KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (-1, 0), (1, 0), (0, -1))


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5
    PAUSE = 6
    RESET = 7


class Phase(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    clear_hold_ms: float = 500.0
    cascade_settle_ms: float = 50.0


@dataclass
class GameState:
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    drop_interval_ms: float = 560.0
    phase: Phase = Phase.RUNNING
    pending_clear_rows: Tuple[int, ...] = ()


class FallingBlockGame:
    """Headless game engine.

    Commands return True when they changed state and never raise on illegal
    moves. Everything observable is published through `events`; delayed work
    (gravity, the line-clear cascade) runs on `clock`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        clock: Optional[ManualClock] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.clock = clock or ManualClock()
        self.rng = random.Random(self.config.random_seed)
        self.spawner = PieceSpawner(self.rng)
        self.events = EventEmitter()
        self.scheduler = DropScheduler(self.clock, self.tick)
        self.cascade = LineClearCascade(
            self.clock,
            self.rules,
            on_pending=self._on_rows_pending,
            on_pass=self._on_rows_removed,
            on_complete=self._on_cascade_complete,
            hold_ms=self.config.clear_hold_ms,
            settle_ms=self.config.cascade_settle_ms,
        )
        self.grid = GameGrid(self.config.width, self.config.height)
        self.state = GameState(drop_interval_ms=self.rules.drop_interval_ms(1))
        self.current_piece: Optional[Piece] = None
        self.reset()

    def reset(self) -> bool:
        self.cascade.cancel()
        self.scheduler.stop()
        self.grid = GameGrid(self.config.width, self.config.height)
        self.current_piece = None
        self.state = GameState(drop_interval_ms=self.rules.drop_interval_ms(1))
        logger.info("game reset")

        self.events.emit(GameEvent.BOARD_CHANGED, self.grid.clone_state())
        self.events.emit(GameEvent.SCORE_CHANGED, self.state.score)
        self.events.emit(GameEvent.LEVEL_CHANGED, self.state.level, self.state.drop_interval_ms)
        self.events.emit(GameEvent.PAUSED, False)

        self._spawn_piece()
        if self.state.phase is Phase.RUNNING:
            self.scheduler.start(self.state.drop_interval_ms)
        return True

    def toggle_pause(self) -> bool:
        if self.state.phase is Phase.GAME_OVER:
            return False
        if self.state.phase is Phase.RUNNING:
            self.state.phase = Phase.PAUSED
            self.scheduler.stop()
            self.events.emit(GameEvent.PAUSED, True)
        else:
            self.state.phase = Phase.RUNNING
            self.scheduler.start(self.state.drop_interval_ms)
            self.events.emit(GameEvent.PAUSED, False)
        return True

    @property
    def game_over(self) -> bool:
        return self.state.phase is Phase.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.state.phase is Phase.PAUSED

    def _accepts_input(self) -> bool:
        return (
            self.state.phase is Phase.RUNNING
            and self.current_piece is not None
            and not self.cascade.active
        )

    def _fits(self, piece: Piece) -> bool:
        return not self.grid.collides(piece.x, piece.y, piece.shape)

    def _set_piece(self, piece: Optional[Piece]) -> None:
        self.current_piece = piece
        self.events.emit(GameEvent.PIECE_CHANGED, piece)

    def _shift(self, dx: int) -> bool:
        if not self._accepts_input():
            return False
        moved = self.current_piece.moved(dx, 0)
        if not self._fits(moved):
            return False
        self._set_piece(moved)
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def move_down(self) -> bool:
        """Drop one row, or land the piece if the row below is blocked."""
        if not self._accepts_input():
            return False
        moved = self.current_piece.moved(0, 1)
        if self._fits(moved):
            self._set_piece(moved)
        else:
            self._place_piece()
        return True

    def soft_drop(self) -> bool:
        return self.move_down()

    def tick(self) -> bool:
        return self.move_down()

    def hard_drop(self) -> bool:
        if not self._accepts_input():
            return False
        piece = self.current_piece
        while self._fits(piece.moved(0, 1)):
            piece = piece.moved(0, 1)
        if piece is not self.current_piece:
            self._set_piece(piece)
        self._place_piece()
        return True

    def rotate_clockwise(self) -> bool:
        if not self._accepts_input():
            return False
        piece = self.current_piece
        rotated = rotate_cw(piece.shape)
        for dx, dy in ROTATION_KICKS:
            candidate = piece.with_shape(rotated, piece.x + dx, piece.y + dy)
            if self._fits(candidate):
                self._set_piece(candidate)
                return True
        return False

    def step(self, action: Action) -> bool:
        action = Action(action)
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE_CW:
            return self.rotate_clockwise()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.PAUSE:
            return self.toggle_pause()
        if action == Action.RESET:
            return self.reset()
        return False

    def can_move(self, dx: int, dy: int) -> bool:
        if not self._accepts_input():
            return False
        return self._fits(self.current_piece.moved(dx, dy))

    def can_rotate(self) -> bool:
        if not self._accepts_input():
            return False
        piece = self.current_piece
        rotated = rotate_cw(piece.shape)
        return any(
            self._fits(piece.with_shape(rotated, piece.x + dx, piece.y + dy))
            for dx, dy in ROTATION_KICKS
        )

    def settle(self) -> None:
        """Run the clock until no line-clear cascade is in flight."""
        while self.cascade.active and self.clock.advance_to_next():
            pass

    def _place_piece(self) -> None:
        piece = self.current_piece
        assert piece is not None
        logger.debug("placing %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        self.grid = self.grid.merged(piece)
        self.current_piece = None
        self.events.emit(GameEvent.BOARD_CHANGED, self.grid.clone_state())
        self.events.emit(GameEvent.PIECE_CHANGED, None)
        self.cascade.begin(self.grid)

    def _on_rows_pending(self, rows: Tuple[int, ...]) -> None:
        self.state.pending_clear_rows = rows
        self.events.emit(GameEvent.LINES_PENDING_CLEAR, rows)

    def _on_rows_removed(self, grid: GameGrid, count: int, points: int) -> None:
        self.grid = grid
        self.state.pending_clear_rows = ()
        self.events.emit(GameEvent.BOARD_CHANGED, self.grid.clone_state())
        self.events.emit(GameEvent.LINES_CLEARED, count, points)

    def _on_cascade_complete(self, points: int, rows_removed: int) -> None:
        if rows_removed:
            self._commit(points, rows_removed)
        self._spawn_piece()

    def _commit(self, points: int, rows_removed: int) -> None:
        self.state.score += points
        self.state.lines_cleared += rows_removed
        new_level = self.rules.level_for_score(self.state.score)
        leveled_up = new_level > self.state.level
        if leveled_up:
            self.state.level = new_level
            self.state.drop_interval_ms = self.rules.drop_interval_ms(new_level)
            logger.info("level %d, drop interval %.1f ms", new_level, self.state.drop_interval_ms)
            if self.state.phase is Phase.RUNNING:
                self.scheduler.restart(self.state.drop_interval_ms)

        self.events.emit(GameEvent.SCORE_CHANGED, self.state.score)
        if leveled_up:
            self.events.emit(GameEvent.LEVEL_CHANGED, new_level, self.state.drop_interval_ms)

    def _spawn_piece(self) -> None:
        if self.state.phase is Phase.GAME_OVER:
            return
        piece = self.spawner.spawn(self.grid.width)
        if not self._fits(piece):
            self.state.phase = Phase.GAME_OVER
            self.scheduler.stop()
            self.cascade.cancel()
            logger.info("game over: score=%d level=%d lines=%d",
                        self.state.score, self.state.level, self.state.lines_cleared)
            self.events.emit(GameEvent.GAME_OVER)
            return
        logger.debug("spawned %s", piece.kind.name)
        self._set_piece(piece)

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells_at():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -self.current_piece.color_id
        return state

    def get_game_stats(self) -> dict:
        return {
            "score": self.state.score,
            "level": self.state.level,
            "lines_cleared": self.state.lines_cleared,
            "drop_interval_ms": self.state.drop_interval_ms,
            "phase": self.state.phase.value,
            "pending_clear_rows": list(self.state.pending_clear_rows),
        }
