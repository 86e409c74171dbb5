"""Super Rotation System wall-kick tables.

Offsets use the SRS convention: +x is right and +y is up. Grid rows grow
downwards, so callers apply an offset as ``(x + dx, y - dy)``.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .errors import InvariantViolation
from .pieces import TetrominoType


Offset = Tuple[int, int]
Transition = Tuple[int, int]

JLSTZ_KICKS: Dict[Transition, List[Offset]] = {
    (0, 1): [(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)],
    (1, 0): [(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)],
    (1, 2): [(0, 0), (1, 0), (1, -1), (0, 2), (1, 2)],
    (2, 1): [(0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2)],
    (2, 3): [(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)],
    (3, 2): [(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)],
    (3, 0): [(0, 0), (-1, 0), (-1, -1), (0, 2), (-1, 2)],
    (0, 3): [(0, 0), (1, 0), (1, 1), (0, -2), (1, -2)],
}

I_KICKS: Dict[Transition, List[Offset]] = {
    (0, 1): [(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)],
    (1, 0): [(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)],
    (1, 2): [(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)],
    (2, 1): [(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)],
    (2, 3): [(0, 0), (2, 0), (-1, 0), (2, 1), (-1, -2)],
    (3, 2): [(0, 0), (-2, 0), (1, 0), (-2, -1), (1, 2)],
    (3, 0): [(0, 0), (1, 0), (-2, 0), (1, -2), (-2, 1)],
    (0, 3): [(0, 0), (-1, 0), (2, 0), (-1, 2), (2, -1)],
}

O_KICKS: List[Offset] = [(0, 0)]


def next_rotation(rotation: int, direction: int) -> int:
    return (rotation + direction + 4) % 4


def kick_offsets(kind: TetrominoType, from_rotation: int, direction: int) -> List[Offset]:
    """Ordered kick candidates for rotating ``kind`` out of ``from_rotation``.

    The first candidate is always ``(0, 0)``, the unkicked rotation.
    """
    if direction not in (-1, 1) or not 0 <= from_rotation < 4:
        raise InvariantViolation(f"bad rotation transition: {from_rotation} by {direction}")
    if kind == TetrominoType.O:
        return list(O_KICKS)
    table = I_KICKS if kind == TetrominoType.I else JLSTZ_KICKS
    return list(table[(from_rotation, next_rotation(from_rotation, direction))])
