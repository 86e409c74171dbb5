from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Optional

import numpy as np

from .controller import PieceController
from .events import EventBus, GameEvent
from .grid import GameGrid
from .pieces import ActivePiece, TetrominoType
from .randomizer import SevenBag
from .rules import FRAME_MS, ScoringRules
from .timing import ClearAnimation, GravityTimer, LockDelay

logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    SOFT_DROP = 5
    HARD_DROP = 6
    HOLD = 7


class GameState(Enum):
    MENU = "MENU"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAMEOVER = "GAMEOVER"


class PlayPhase(Enum):
    ACTIVE = "active"  # a piece is falling or locking
    CLEARING = "clearing"  # line-clear animation, no piece in play


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    start_level: int = 1
    lock_delay_ms: float = 500.0
    max_lock_moves: int = 15
    clear_animation_frames: int = 18
    frame_ms: float = FRAME_MS


class TetrisGame:
    """A single-player session: state machine, timers, scoring and events.

    Drive it with :meth:`tick` once per rendered frame and feed player input
    through :meth:`move`, :meth:`rotate`, :meth:`soft_drop`,
    :meth:`hard_drop` and :meth:`hold`. Inputs outside active play are
    ignored and return False. Presentation layers observe the session through
    :attr:`events`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        high_score: int = 0,
        events: Optional[EventBus] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.events = events or EventBus()
        self.grid = GameGrid(self.config.width, self.config.height)
        self.bag = SevenBag(self.config.random_seed)
        self.controller = PieceController(
            self.grid,
            LockDelay(delay_ms=self.config.lock_delay_ms, max_move_resets=self.config.max_lock_moves),
        )
        self.gravity = GravityTimer(self.rules.drop_interval_ms(self.config.start_level))
        self.animation = ClearAnimation(self.config.clear_animation_frames)
        self.high_score = int(high_score)
        self.state = GameState.MENU
        self.phase = PlayPhase.ACTIVE
        self.score = 0
        self.lines = 0
        self.level = self.config.start_level
        self.next_kind: Optional[TetrominoType] = None
        self.clearing_rows: List[int] = []

    # ---------- Lifecycle ----------
    def start(self, start_level: Optional[int] = None) -> bool:
        if self.state != GameState.MENU:
            return False
        self.grid.reset()
        self.controller.reset()
        self.score = 0
        self.lines = 0
        self.level = self.config.start_level if start_level is None else int(start_level)
        self.gravity = GravityTimer(self.rules.drop_interval_ms(self.level))
        self.animation.start()
        self.clearing_rows = []
        self.phase = PlayPhase.ACTIVE
        self.next_kind = self.bag.next()
        self.state = GameState.PLAYING
        logger.info("game started at level %d", self.level)
        self.events.emit(GameEvent.GAME_STARTED, level=self.level)
        self.spawn_next()
        return True

    def reset(self) -> None:
        """Discard the session unconditionally and return to the menu."""
        self.grid.reset()
        self.controller.reset()
        self.bag.reset()
        self.score = 0
        self.lines = 0
        self.level = self.config.start_level
        self.gravity = GravityTimer(self.rules.drop_interval_ms(self.level))
        self.animation.start()
        self.clearing_rows = []
        self.phase = PlayPhase.ACTIVE
        self.next_kind = None
        self.state = GameState.MENU

    def toggle_pause(self) -> bool:
        if self.state == GameState.PLAYING:
            self.state = GameState.PAUSED
            self.events.emit(GameEvent.GAME_PAUSED)
            return True
        if self.state == GameState.PAUSED:
            self.state = GameState.PLAYING
            self.events.emit(GameEvent.GAME_RESUMED)
            return True
        return False

    def spawn_next(self) -> bool:
        """Bring the lookahead piece into play and draw a new lookahead."""
        if self.state != GameState.PLAYING or self.phase != PlayPhase.ACTIVE:
            return False
        if self.controller.live:
            return False
        kind = self._draw_lookahead()
        if not self.controller.spawn(kind):
            self._game_over()
            return False
        logger.debug("spawned %s, next %s", kind.name, self.next_kind.name)
        return True

    def _draw_lookahead(self) -> TetrominoType:
        assert self.next_kind is not None
        kind = self.next_kind
        self.next_kind = self.bag.next()
        return kind

    def _game_over(self) -> None:
        self.state = GameState.GAMEOVER
        self.high_score = max(self.high_score, self.score)
        logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
        self.events.emit(
            GameEvent.GAME_OVER,
            score=self.score,
            lines=self.lines,
            level=self.level,
            high_score=self.high_score,
        )

    # ---------- Player input ----------
    def _accepting_input(self) -> bool:
        return self.state == GameState.PLAYING and self.phase == PlayPhase.ACTIVE

    def move(self, direction: int) -> bool:
        if not self._accepting_input() or not self.controller.move(direction):
            return False
        self.events.emit(GameEvent.PIECE_MOVED, direction=direction)
        return True

    def rotate(self, direction: int) -> bool:
        if not self._accepting_input() or not self.controller.rotate(direction):
            return False
        self.events.emit(GameEvent.PIECE_ROTATED, direction=direction, rotation=self.controller.piece.rotation)
        return True

    def soft_drop(self) -> bool:
        if not self._accepting_input() or not self.controller.live:
            return False
        moved = self.controller.step_down()
        self.gravity.restart()
        if moved:
            self.score += self.rules.soft_drop_points
            self.events.emit(GameEvent.SOFT_DROPPED)
        return moved

    def hard_drop(self) -> bool:
        if not self._accepting_input() or not self.controller.live:
            return False
        rows = self.controller.hard_drop()
        self.score += self.rules.score_for_hard_drop(rows)
        self.events.emit(GameEvent.HARD_DROPPED, rows=rows)
        self._lock_piece()
        return True

    def hold(self) -> bool:
        if not self._accepting_input():
            return False
        if not self.controller.hold(self._draw_lookahead):
            return False
        self.events.emit(GameEvent.PIECE_HELD, kind=self.controller.hold_kind)
        if self.controller.blocked:
            self._game_over()
        return True

    def apply(self, action: Action) -> bool:
        """Dispatch a single discrete action; returns whether it changed anything."""
        if action == Action.LEFT:
            return self.move(-1)
        if action == Action.RIGHT:
            return self.move(1)
        if action == Action.ROTATE_CW:
            return self.rotate(1)
        if action == Action.ROTATE_CCW:
            return self.rotate(-1)
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.HOLD:
            return self.hold()
        return False

    # ---------- Timing ----------
    def tick(self, elapsed_ms: float) -> None:
        """Advance the session by one frame that took ``elapsed_ms``."""
        if self.state != GameState.PLAYING:
            return
        if self.phase == PlayPhase.CLEARING:
            if self.animation.advance():
                self._complete_clear()
            return
        if self.gravity.advance(elapsed_ms):
            self.controller.step_down()
            self.gravity.restart()
        if self.controller.advance_lock(elapsed_ms):
            self._lock_piece()

    def _lock_piece(self) -> None:
        """Merge the piece, then start a clear or spawn the next one.

        A piece that locks with any cell above row 0 (lock out) ends the game.
        """
        piece = self.controller.finish()
        if any(y < 0 for _, y in piece.cells()):
            logger.debug("%s locked above the visible field", piece.kind.name)
            self._game_over()
            return
        self.grid.merge(piece.matrix, piece.x, piece.y, int(piece.kind))
        self.events.emit(GameEvent.PIECE_LOCKED, kind=piece.kind, x=piece.x, y=piece.y)
        rows = self.grid.full_rows()
        if rows:
            logger.debug("clearing rows %s", rows)
            self.clearing_rows = rows
            self.phase = PlayPhase.CLEARING
            self.animation.start()
        else:
            self.spawn_next()

    def _complete_clear(self) -> None:
        count = self.grid.clear_rows(self.clearing_rows)
        self.clearing_rows = []
        self.lines += count
        gained = self.rules.score_for_lines(count, self.level)
        self.score += gained
        self.events.emit(GameEvent.LINES_CLEARED, count=count, points=gained)
        new_level = self.rules.level_for_lines(self.lines)
        if new_level > self.level:
            self.level = new_level
            self.gravity.interval_ms = self.rules.drop_interval_ms(self.level)
            logger.info("level up: %d (drop interval %.2f ms)", self.level, self.gravity.interval_ms)
            self.events.emit(GameEvent.LEVEL_UP, level=self.level)
        self.phase = PlayPhase.ACTIVE
        self.spawn_next()

    # ---------- Queries ----------
    @property
    def drop_interval_ms(self) -> float:
        return self.gravity.interval_ms

    @property
    def hold_kind(self) -> Optional[TetrominoType]:
        return self.controller.hold_kind

    @property
    def can_hold(self) -> bool:
        return self.controller.can_hold and self.controller.live

    @property
    def active_piece(self) -> Optional[ActivePiece]:
        p = self.controller.piece
        if p is None or self.phase == PlayPhase.CLEARING:
            return None
        return ActivePiece(kind=p.kind, matrix=p.matrix.copy(), x=p.x, y=p.y, rotation=p.rotation)

    def ghost_y(self) -> Optional[int]:
        if not self.controller.live:
            return None
        return self.controller.ghost_y()

    def grid_snapshot(self) -> np.ndarray:
        return self.grid.clone_state()

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        piece = self.active_piece
        if piece is not None and self.state != GameState.GAMEOVER:
            for x, y in piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(piece.kind)
        return state

    def get_game_stats(self) -> dict:
        return {
            "state": self.state.value,
            "score": self.score,
            "lines": self.lines,
            "level": self.level,
            "high_score": self.high_score,
            "drop_interval_ms": self.gravity.interval_ms,
            "next": self.next_kind.name if self.next_kind is not None else None,
            "hold": self.hold_kind.name if self.hold_kind is not None else None,
            "can_hold": self.can_hold,
            "max_height": self.grid.get_max_height(),
            "holes": self.grid.count_holes(),
        }

