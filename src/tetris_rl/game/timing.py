"""Accumulated-time counters for gravity, lock delay and line-clear animation.

None of these block: the session feeds elapsed time in on every tick and
checks the counters against their thresholds.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class LockDelay:
    delay_ms: float = 500.0
    max_move_resets: int = 15
    elapsed_ms: float = 0.0
    armed: bool = False
    move_resets: int = 0

    def reset(self) -> None:
        """Fresh state for a newly spawned piece."""
        self.elapsed_ms = 0.0
        self.armed = False
        self.move_resets = 0

    def arm(self) -> None:
        if not self.armed:
            self.armed = True
            self.elapsed_ms = 0.0

    def disarm(self) -> None:
        """The piece fell again; the move-reset budget is kept."""
        self.armed = False
        self.elapsed_ms = 0.0

    def postpone(self) -> bool:
        """Restart the timer after a successful move or rotation.

        Returns False once the move-reset cap is spent, in which case the
        original deadline stands.
        """
        if not self.armed or self.move_resets >= self.max_move_resets:
            return False
        self.elapsed_ms = 0.0
        self.move_resets += 1
        return True

    def advance(self, elapsed_ms: float) -> bool:
        """Accumulate time; True when the piece must lock now."""
        if not self.armed:
            return False
        self.elapsed_ms += elapsed_ms
        return self.elapsed_ms >= self.delay_ms


@dataclass
class GravityTimer:
    interval_ms: float
    elapsed_ms: float = 0.0

    def advance(self, elapsed_ms: float) -> bool:
        """Accumulate time; True when a gravity drop is due."""
        self.elapsed_ms += elapsed_ms
        return self.elapsed_ms > self.interval_ms

    def restart(self) -> None:
        self.elapsed_ms = 0.0


@dataclass
class ClearAnimation:
    duration_frames: int = 18
    frame: int = 0

    def start(self) -> None:
        self.frame = 0

    def advance(self) -> bool:
        """One rendered frame; True once the animation has run its course."""
        self.frame += 1
        return self.frame >= self.duration_frames
