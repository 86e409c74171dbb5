"""Game module for Tetris RL.

Exports the rules engine and supporting classes:
- GameGrid: Playfield, collision testing, merge and line clearing
- TetrominoType / ActivePiece: Piece catalog and the falling piece
- SevenBag: Bag-based piece sequencing
- PieceController: Movement, SRS rotation with wall kicks, hold
- ScoringRules: Line, drop and gravity tables
- TetrisGame: Session state machine, timers and scoring
- EventBus / GameEvent: Notifications for rendering, audio and persistence
"""

from .controller import PieceController, PiecePhase
from .core import Action, GameConfig, GameState, PlayPhase, TetrisGame
from .errors import InvariantViolation
from .events import EventBus, GameEvent
from .grid import GameGrid
from .kicks import kick_offsets
from .pieces import ActivePiece, TetrominoType
from .randomizer import SevenBag
from .rules import ScoringRules

__all__ = [
    "GameGrid",
    "ActivePiece",
    "TetrominoType",
    "kick_offsets",
    "SevenBag",
    "PieceController",
    "PiecePhase",
    "ScoringRules",
    "TetrisGame",
    "GameConfig",
    "GameState",
    "PlayPhase",
    "Action",
    "EventBus",
    "GameEvent",
    "InvariantViolation",
]
