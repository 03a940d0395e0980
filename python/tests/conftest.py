"""Shared fixtures: a controllable clock and small fixed deals."""

from __future__ import annotations

import pytest

from backend.engine.gameplay import GamePlay
from backend.models.deck import Deck


class FakeClock:
    """Stands in for ``time.monotonic``; only moves when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def deck() -> Deck:
    # 0 1 0 1
    # 2 3 2 3
    return Deck.from_pair_ids([0, 1, 0, 1, 2, 3, 2, 3], columns=4)


@pytest.fixture
def game(deck: Deck, clock: FakeClock) -> GamePlay:
    return GamePlay.from_deck(deck, clock=clock, preview=0)
