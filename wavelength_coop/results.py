from __future__ import annotations

from dataclasses import dataclass

from .game_core import RoundRecord, WavelengthGame
from .scoring import MAX_POINTS


@dataclass(frozen=True, slots=True)
class GameResult:
    """End-of-game summary built from a game's round history."""

    total_score: int
    max_score: int
    rounds_played: int
    rounds_planned: int
    bullseyes: int
    mean_error: float | None
    best_round: RoundRecord | None

    rounds: tuple[RoundRecord, ...]

    @property
    def score_ratio(self) -> float:
        return 0.0 if self.max_score == 0 else self.total_score / self.max_score


def game_result_from_game(game: WavelengthGame) -> GameResult:
    """Build a GameResult from a game's current history.

    Works mid-game too; ``rounds_played`` then trails ``rounds_planned``.
    """

    rounds = tuple(game.history())
    errors = [r.diff for r in rounds]
    mean_error = None if not errors else sum(errors) / len(errors)
    # Earliest round wins ties.
    best = None if not rounds else min(rounds, key=lambda r: (r.diff, r.round_index))

    return GameResult(
        total_score=int(game.score),
        max_score=MAX_POINTS * len(rounds),
        rounds_played=len(rounds),
        rounds_planned=int(game.rounds_count),
        bullseyes=sum(1 for r in rounds if r.points == MAX_POINTS),
        mean_error=mean_error,
        best_round=best,
        rounds=rounds,
    )
