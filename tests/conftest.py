from __future__ import annotations

from typing import Callable, List

import pytest

from falling_blocks.game import FallingBlockGame, GameConfig, GameEvent


@pytest.fixture
def game() -> FallingBlockGame:
    return FallingBlockGame(GameConfig(random_seed=1234))


@pytest.fixture
def recorder(game: FallingBlockGame) -> Callable[[GameEvent], List[tuple]]:
    """Collect the argument tuples of every `event` the game emits from now on."""

    def record(event: GameEvent) -> List[tuple]:
        seen: List[tuple] = []
        game.events.subscribe(event, lambda *args: seen.append(args))
        return seen

    return record
