from __future__ import annotations

import random
from typing import List, Optional

from .pieces import TetrominoType


class SevenBag:
    """7-bag randomizer: every bag is an independent shuffle of all seven kinds."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random(seed)
        self.bag: List[TetrominoType] = []
        self.bags_dealt = 0

    def refill(self) -> None:
        pieces = list(TetrominoType)
        self.rng.shuffle(pieces)
        self.bag = pieces
        self.bags_dealt += 1

    def next(self) -> TetrominoType:
        if not self.bag:
            self.refill()
        return self.bag.pop()

    def remaining(self) -> int:
        return len(self.bag)

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.bag = []
        self.bags_dealt = 0
