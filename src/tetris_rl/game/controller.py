from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional

from .errors import InvariantViolation
from .grid import GameGrid
from .kicks import kick_offsets, next_rotation
from .pieces import ActivePiece, TetrominoType, rotate_shape, spawn_shape
from .timing import LockDelay

logger = logging.getLogger(__name__)


class PiecePhase(Enum):
    SPAWNED = "spawned"
    FALLING = "falling"
    LOCKING = "locking"
    LOCKED = "locked"


class PieceController:
    """Owns the active piece, the hold slot and the piece's lock-delay state.

    Every operation is a silent no-op (returning False) when there is no live
    piece, so callers never need to check preconditions first.
    """

    def __init__(self, grid: GameGrid, lock: Optional[LockDelay] = None) -> None:
        self.grid = grid
        self.lock = lock or LockDelay()
        self.piece: Optional[ActivePiece] = None
        self.phase = PiecePhase.LOCKED
        self.hold_kind: Optional[TetrominoType] = None
        self.can_hold = True
        self.blocked = False

    def reset(self) -> None:
        self.piece = None
        self.phase = PiecePhase.LOCKED
        self.hold_kind = None
        self.can_hold = True
        self.blocked = False
        self.lock.reset()

    @property
    def live(self) -> bool:
        return self.piece is not None and self.phase != PiecePhase.LOCKED

    def spawn(self, kind: TetrominoType) -> bool:
        """Place a fresh ``kind`` at the top centre; False if the spot is taken."""
        matrix = spawn_shape(kind)
        width = matrix.shape[1]
        x = self.grid.width // 2 - width // 2
        self.piece = ActivePiece(kind=TetrominoType(kind), matrix=matrix, x=x, y=0, rotation=0)
        self.lock.reset()
        self.can_hold = True
        self.blocked = self.grid.collides(matrix, x, 0)
        if self.blocked:
            self.phase = PiecePhase.LOCKED
            logger.debug("spawn of %s blocked at x=%d", self.piece.kind.name, x)
            return False
        self.phase = PiecePhase.SPAWNED
        return True

    def _fits(self, matrix, x: int, y: int) -> bool:
        return not self.grid.collides(matrix, x, y)

    def _after_lateral_success(self) -> bool:
        """Shared bookkeeping for a successful move or rotation.

        Returns True when the lock timer was postponed.
        """
        postponed = self.lock.postpone()
        if self.phase == PiecePhase.SPAWNED:
            self.phase = PiecePhase.FALLING
        return postponed

    def move(self, dx: int) -> bool:
        if not self.live or dx not in (-1, 1):
            return False
        p = self.piece
        if not self._fits(p.matrix, p.x + dx, p.y):
            return False
        p.x += dx
        self._after_lateral_success()
        return True

    def rotate(self, direction: int) -> bool:
        if not self.live or direction not in (-1, 1):
            return False
        p = self.piece
        rotated = rotate_shape(p.matrix, direction)
        for dx, dy in kick_offsets(p.kind, p.rotation, direction):
            # kick offsets are y-up, grid rows are y-down
            x, y = p.x + dx, p.y - dy
            if self._fits(rotated, x, y):
                p.matrix = rotated
                p.x, p.y = x, y
                p.rotation = next_rotation(p.rotation, direction)
                self._after_lateral_success()
                return True
        return False

    def step_down(self) -> bool:
        """Move one row down. On failure the lock delay is armed."""
        if not self.live:
            return False
        p = self.piece
        if self._fits(p.matrix, p.x, p.y + 1):
            p.y += 1
            self.lock.disarm()
            self.phase = PiecePhase.FALLING
            return True
        self.lock.arm()
        self.phase = PiecePhase.LOCKING
        return False

    def ghost_y(self) -> Optional[int]:
        if self.piece is None:
            return None
        p = self.piece
        y = p.y
        while self._fits(p.matrix, p.x, y + 1):
            y += 1
        return y

    def hard_drop(self) -> int:
        """Drop to the resting row; returns the number of rows moved."""
        if not self.live:
            return 0
        landing = self.ghost_y()
        assert landing is not None
        rows = landing - self.piece.y
        self.piece.y = landing
        return rows

    def advance_lock(self, elapsed_ms: float) -> bool:
        if not self.live:
            return False
        return self.lock.advance(elapsed_ms)

    def finish(self) -> ActivePiece:
        """Hand the piece over for merging and forget it."""
        if self.piece is None:
            raise InvariantViolation("no active piece to lock")
        piece = self.piece
        self.phase = PiecePhase.LOCKED
        self.piece = None
        self.lock.reset()
        return piece

    def hold(self, draw_next: Callable[[], TetrominoType]) -> bool:
        """Swap the active kind into the hold slot, at most once per piece.

        The held piece is kept only as a kind: position and rotation reset
        when it comes back. Check ``blocked`` afterwards for a top out.
        """
        if not self.live or not self.can_hold:
            return False
        current = self.piece.kind
        if self.hold_kind is None:
            self.hold_kind = current
            self.spawn(draw_next())
        else:
            swapped_in = self.hold_kind
            self.hold_kind = current
            self.spawn(swapped_in)
        self.can_hold = False
        return True
