from __future__ import annotations

import pytest

from tetris_rl.game import GameConfig, TetrisGame, TetrominoType
from tetris_rl.game.grid import GameGrid


FRAME = 1000.0 / 60.0


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid(10, 20)


@pytest.fixture
def game() -> TetrisGame:
    g = TetrisGame(GameConfig(random_seed=7))
    g.start()
    return g


def force_piece(game: TetrisGame, kind: TetrominoType) -> None:
    """Replace the active piece with a freshly spawned ``kind``."""
    assert game.controller.spawn(kind)


def fill_row(game: TetrisGame, row: int, skip=()) -> None:
    for x in range(game.grid.width):
        if x not in skip:
            game.grid.grid[row, x] = int(TetrominoType.Z)


def run_clear_animation(game: TetrisGame) -> None:
    for _ in range(game.config.clear_animation_frames):
        game.tick(FRAME)
