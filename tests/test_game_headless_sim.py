from __future__ import annotations

import pytest

from wavelength_coop.deck import DEFAULT_CATEGORIES, Category, shuffle
from wavelength_coop.game_core import Phase, WavelengthGame
from wavelength_coop.random_source import SeededRandom
from wavelength_coop.scoring import compute_points


def _play_round(game: WavelengthGame, *, offset: float, clue: str = "") -> None:
    assert game.reveal_target() is True
    seen = game.snapshot().target
    assert seen is not None
    assert game.hide_and_clue() is True
    game.set_clue(clue)
    game.set_guess(seen + offset)
    assert game.reveal_and_score() is True


def test_headless_perfect_game_with_default_deck() -> None:
    seed = 2024
    game = WavelengthGame(rng=SeededRandom(seed))
    mirror = SeededRandom(seed)

    assert game.start_game() is True
    expected_deck = shuffle(DEFAULT_CATEGORIES, mirror)
    assert list(game.deck) == expected_deck
    assert game.rounds_count == 5

    for i in range(5):
        assert game.round == i + 1
        assert game.category == expected_deck[i]
        assert game.target == pytest.approx(mirror.random())
        _play_round(game, offset=0.0, clue=f"clue {i + 1}")
        assert game.snapshot().last_points == 4
        game.next_round()

    assert game.phase is Phase.SUMMARY
    assert game.score == 20
    history = game.history()
    assert len(history) == 5
    assert [r.round_index for r in history] == [1, 2, 3, 4, 5]
    assert [r.clue for r in history] == [f"clue {i}" for i in range(1, 6)]
    assert len({r.category for r in history}) == 5


def test_headless_mixed_offsets_score_matches_rule() -> None:
    game = WavelengthGame(rng=SeededRandom(7))
    game.start_game()

    offsets = [0.0, 0.07, 0.15, 0.2, 0.4]
    for off in offsets:
        _play_round(game, offset=off)
        game.next_round()

    history = game.history()
    assert game.phase is Phase.SUMMARY
    # Guesses are clamped at the dial ends, so recompute from the records.
    assert [r.points for r in history] == [compute_points(r.diff) for r in history]
    assert game.score == sum(r.points for r in history)
    assert 0.0 <= min(r.guess for r in history) <= max(r.guess for r in history) <= 1.0


def test_headless_two_category_game_ends_after_two_rounds() -> None:
    game = WavelengthGame(
        rng=SeededRandom(11),
        categories=[Category("Hot", "Cold"), Category("Quiet", "Loud"), Category("", "")],
    )
    game.start_game()
    assert game.rounds_count == 2

    _play_round(game, offset=0.5)
    game.next_round()
    assert game.phase is Phase.SEER_READY
    _play_round(game, offset=-0.5)
    game.next_round()

    assert game.phase is Phase.SUMMARY
    assert len(game.history()) == 2
