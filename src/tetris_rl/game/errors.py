from __future__ import annotations


class InvariantViolation(RuntimeError):
    """Raised when the engine finds itself in a state its rules forbid.

    These are programming errors (an off-grid merge, a bad row index, an
    unknown piece kind), never gameplay outcomes. Topping out is a normal
    transition to game over and does not raise.
    """
