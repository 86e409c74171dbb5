from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np

from .errors import InvariantViolation


class TetrominoType(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.flags.writeable = False
    return arr


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
    TetrominoType.O: "#f0f000",
    TetrominoType.S: "#00f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.Z: "#f00000",
}


def spawn_shape(kind: TetrominoType) -> Shape:
    """Return a private, writable copy of the base shape for ``kind``."""
    try:
        base = BASE_SHAPES[kind]
    except KeyError:
        raise InvariantViolation(f"unknown piece kind: {kind!r}") from None
    return base.copy()


def rotate_shape(shape: Shape, direction: int) -> Shape:
    """Quarter-turn ``shape``: clockwise for +1, counter-clockwise for -1."""
    if direction not in (-1, 1):
        raise InvariantViolation(f"rotation direction must be +1 or -1, got {direction}")
    # np.rot90 turns counter-clockwise for positive k
    return np.rot90(shape, -direction).copy()


def color_of(kind: TetrominoType) -> str:
    return COLORS[TetrominoType(kind)]


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


@dataclass
class ActivePiece:
    kind: TetrominoType
    matrix: Shape
    x: int
    y: int
    rotation: int = 0  # 0..3

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    @property
    def color(self) -> str:
        return color_of(self.kind)

    def cells(self) -> List[Tuple[int, int]]:
        """Board coordinates ``(x, y)`` of every occupied cell."""
        ys, xs = np.nonzero(self.matrix)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]
