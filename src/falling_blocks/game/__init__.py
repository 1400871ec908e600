"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board representation, collision and row removal
- Piece / TetrominoType / PieceSpawner: Tetromino catalog and random spawning
- ScoringRules: Points table, level thresholds and drop speed curve
- ManualClock / DropScheduler: Cooperative timers driving gravity
- LineClearCascade: Scan / hold / remove / rescan state machine
- FallingBlockGame: Command API, event stream and phase management
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, Piece, PieceSpawner, TetrominoType, rotate_cw
from .rules import ScoringRules
from .clock import ManualClock
from .scheduler import DropScheduler
from .cascade import ClearPhase, LineClearCascade
from .events import EventEmitter, GameEvent
from .core import Action, FallingBlockGame, GameConfig, GameState, Phase, ROTATION_KICKS

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "Piece",
    "PieceSpawner",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "ManualClock",
    "DropScheduler",
    "ClearPhase",
    "LineClearCascade",
    "EventEmitter",
    "GameEvent",
    "Action",
    "FallingBlockGame",
    "GameConfig",
    "GameState",
    "Phase",
    "ROTATION_KICKS",
]
