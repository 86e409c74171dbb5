from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

FRAME_MS = 1000.0 / 60.0

# NES gravity: frames per row for levels 0-19
NES_GRAVITY_FRAMES: Dict[int, int] = {
    0: 48, 1: 48, 2: 43, 3: 38, 4: 33, 5: 28,
    6: 23, 7: 18, 8: 13, 9: 8, 10: 6, 11: 5,
    12: 5, 13: 5, 14: 4, 15: 4, 16: 4, 17: 3,
    18: 3, 19: 3,
}


def _default_line_scores() -> Dict[int, int]:
    return {1: 100, 2: 300, 3: 500, 4: 800}


@dataclass
class ScoringRules:
    line_clear_scores: Dict[int, int] = field(default_factory=_default_line_scores)
    default_line_score: int = 100
    soft_drop_points: int = 1
    hard_drop_points: int = 2
    lines_per_level: int = 10
    gravity_frames: Dict[int, int] = field(default_factory=lambda: dict(NES_GRAVITY_FRAMES))
    max_level_frames: int = 2
    fallback_frames: int = 4

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return self.line_clear_scores.get(lines, self.default_line_score) * level

    def score_for_hard_drop(self, rows: int) -> int:
        return self.hard_drop_points * max(0, rows)

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def frames_for_level(self, level: int) -> int:
        frames = self.gravity_frames.get(level)
        if frames is not None:
            return frames
        if level > max(self.gravity_frames):
            return self.max_level_frames
        # Negative levels, or gaps in a custom table
        return self.fallback_frames

    def drop_interval_ms(self, level: int) -> float:
        return self.frames_for_level(level) * FRAME_MS
