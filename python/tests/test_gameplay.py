"""Gameplay rules: flipping, matching, flip-back timing, and game over.

All games run on a fake clock so the one-second flip-back delay and the
preview window are tested without sleeping.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gameplay import FLIP_DELAY, FlipResult, GamePlay
from backend.models.deck import Deck
from backend.models.layout import GridLayout

# Pair layout of the ``deck`` fixture (row-major, 4 columns):
#   0 1 0 1
#   2 3 2 3
_PAIRS = [(0, 2), (1, 3), (4, 6), (5, 7)]


def _solve(game: GamePlay) -> None:
    for a, b in _PAIRS:
        assert game.flip(a) is FlipResult.FIRST
        assert game.flip(b) is FlipResult.MATCH


# -- single flips -------------------------------------------------------------


def test_first_flip_reveals_card_and_counts_a_move(game: GamePlay) -> None:
    assert game.flip(0) is FlipResult.FIRST
    assert game.deck.cards[0].is_flipped
    assert game.first == 0
    assert game.second is None
    assert game.moves == 1


def test_flipping_a_face_up_card_is_ignored(game: GamePlay) -> None:
    game.flip(0)
    assert game.flip(0) is FlipResult.IGNORED
    assert game.moves == 1
    assert game.pending == [0]


@pytest.mark.parametrize("index", [-1, 8, 100])
def test_flip_outside_the_deck_raises(game: GamePlay, index: int) -> None:
    with pytest.raises(IndexError):
        game.flip(index)


# -- matching -----------------------------------------------------------------


def test_equal_pair_ids_match_immediately(game: GamePlay) -> None:
    game.flip(0)
    assert game.flip(2) is FlipResult.MATCH
    assert game.deck.cards[0].is_matched
    assert game.deck.cards[2].is_matched
    assert game.pending == []
    assert not game.is_waiting


def test_match_compares_pair_id_not_face() -> None:
    deck = Deck.from_pair_ids([0, 0, 1, 1], columns=2, faces={0: "Sun", 1: "Sun"})
    game = GamePlay.from_deck(deck, preview=0)
    game.flip(0)
    assert game.flip(2) is FlipResult.MISMATCH
    assert not game.deck.cards[0].is_matched


def test_matched_cards_stay_matched(game: GamePlay, clock) -> None:
    game.flip(0)
    game.flip(2)
    game.flip(1)
    game.flip(4)
    clock.advance(FLIP_DELAY)
    assert game.update()
    assert game.deck.cards[0].is_matched and game.deck.cards[0].is_face_up
    assert game.deck.cards[2].is_matched and game.deck.cards[2].is_face_up
    assert game.flip(0) is FlipResult.IGNORED


# -- flip-back ----------------------------------------------------------------


def test_mismatch_waits_then_hides_both_cards(game: GamePlay, clock) -> None:
    game.flip(0)
    assert game.flip(1) is FlipResult.MISMATCH
    assert game.is_waiting
    assert game.deck.unconfirmed() == [0, 1]

    clock.advance(FLIP_DELAY / 2)
    assert not game.update()
    assert game.deck.cards[0].is_flipped

    clock.advance(FLIP_DELAY / 2)
    assert game.update()
    assert not game.deck.cards[0].is_flipped
    assert not game.deck.cards[1].is_flipped
    assert game.pending == []
    assert not game.is_waiting


def test_third_card_is_blocked_while_mismatch_is_shown(game: GamePlay, clock) -> None:
    game.flip(0)
    game.flip(1)
    assert game.flip(4) is FlipResult.IGNORED
    assert not game.deck.cards[4].is_flipped
    assert game.moves == 2

    clock.advance(FLIP_DELAY)
    game.update()
    assert game.flip(4) is FlipResult.FIRST


def test_update_without_pending_pair_is_a_no_op(game: GamePlay, clock) -> None:
    assert not game.update()
    game.flip(0)
    clock.advance(5)
    assert not game.update()
    assert game.deck.cards[0].is_flipped


def test_custom_flip_delay(deck: Deck, clock) -> None:
    game = GamePlay.from_deck(deck, clock=clock, flip_delay=0.25, preview=0)
    game.flip(0)
    game.flip(1)
    clock.advance(0.25)
    assert game.update()


# -- preview ------------------------------------------------------------------


def test_preview_shows_everything_and_blocks_clicks(deck: Deck, clock) -> None:
    game = GamePlay.from_deck(deck, clock=clock, preview=3.0)
    assert game.state.is_previewing
    assert all(game.is_face_up(i) for i in range(len(deck)))
    assert game.flip(0) is FlipResult.IGNORED
    assert game.moves == 0

    clock.advance(3.0)
    assert not game.state.is_previewing
    assert not game.is_face_up(0)
    assert game.flip(0) is FlipResult.FIRST


def test_stopwatch_starts_after_preview(deck: Deck, clock) -> None:
    game = GamePlay.from_deck(deck, clock=clock, preview=3.0)
    clock.advance(2.0)
    assert game.elapsed_time == 0.0
    clock.advance(5.0)
    assert game.elapsed_time == pytest.approx(4.0)


# -- game over ----------------------------------------------------------------


def test_game_is_won_only_when_every_card_matches(game: GamePlay) -> None:
    for a, b in _PAIRS[:-1]:
        game.flip(a)
        game.flip(b)
        assert not game.is_won
    a, b = _PAIRS[-1]
    game.flip(a)
    game.flip(b)
    assert game.is_won
    assert game.deck.all_matched()


def test_win_freezes_the_clock_and_further_flips(game: GamePlay, clock) -> None:
    clock.advance(12.5)
    _solve(game)
    assert game.is_won
    finished = game.elapsed_time
    assert finished == pytest.approx(12.5)
    assert game.moves == 8

    clock.advance(60)
    assert game.elapsed_time == finished
    assert game.flip(0) is FlipResult.IGNORED
    game.update()
    assert game.is_won


# -- pixel clicks -------------------------------------------------------------


def test_flip_at_maps_pixels_to_cards(game: GamePlay) -> None:
    layout = GridLayout(columns=4, rows=2, card_size=110, gap=20)
    assert game.flip_at(5, 5, layout) is FlipResult.FIRST
    assert game.first == 0
    # gap between column 0 and 1
    assert game.flip_at(115, 5, layout) is FlipResult.IGNORED
    # row 0, column 2 → same pair as card 0
    assert game.flip_at(265, 60, layout) is FlipResult.MATCH


def test_flip_at_outside_the_grid_is_ignored(game: GamePlay) -> None:
    layout = GridLayout(columns=4, rows=2, origin_x=50, origin_y=50)
    assert game.flip_at(10, 10, layout) is FlipResult.IGNORED
    assert game.moves == 0


# -- invariants over random play ----------------------------------------------


@pytest.mark.parametrize("seed", range(20))
def test_random_play_keeps_invariants(seed: int, clock) -> None:
    rng = random.Random(seed)
    game = GamePlay(pairs=rng.randint(2, 8), seed=seed, clock=clock, preview=0)
    matched: set[int] = set()
    won = False

    for _ in range(400):
        if rng.random() < 0.3:
            clock.advance(rng.choice([0.2, 0.5, FLIP_DELAY]))
            game.update()
        else:
            game.flip(rng.randrange(len(game.deck)))

        assert len(game.deck.unconfirmed()) <= 2
        now_matched = {i for i, c in enumerate(game.deck.cards) if c.is_matched}
        assert matched <= now_matched
        matched = now_matched
        assert game.is_won == game.deck.all_matched()
        assert game.is_won or not won
        won = game.is_won


def test_pause_and_resume_bank_elapsed_time(game: GamePlay, clock) -> None:
    clock.advance(2.0)
    game.state.pause()
    clock.advance(10.0)
    assert game.elapsed_time == pytest.approx(2.0)
    game.state.resume()
    clock.advance(1.5)
    assert game.elapsed_time == pytest.approx(3.5)
