from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .deck import DEFAULT_CATEGORIES, Category, playable_deck, shuffle
from .dial_geometry import (
    DEFAULT_BAND_WIDTH_FRAC,
    DEFAULT_SLIDER_RESOLUTION,
    DialLayout,
    clamp01,
    pointer_to_value,
    slider_to_value,
)
from .random_source import RandomSource
from .scoring import compute_points, result_label

logger = logging.getLogger(__name__)


class Phase(StrEnum):
    START = "start"
    SEER_READY = "seer_ready"
    SEER_VIEW = "seer_view"
    GUESS = "guess"
    RESULT = "result"
    SUMMARY = "summary"


# Phases in which the target may be shown on screen.
TARGET_VISIBLE_PHASES = (Phase.SEER_VIEW, Phase.RESULT)
# The Seer must look, hide, then speak: no typing while the target is shown.
CLUE_EDITABLE_PHASES = (Phase.SEER_READY, Phase.GUESS)
ROUND_PHASES = (Phase.SEER_READY, Phase.SEER_VIEW, Phase.GUESS, Phase.RESULT)


@dataclass(frozen=True, slots=True)
class WavelengthConfig:
    max_rounds: int = 5
    band_width_frac: float = DEFAULT_BAND_WIDTH_FRAC
    slider_resolution: int = DEFAULT_SLIDER_RESOLUTION

    def __post_init__(self) -> None:
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be >= 1")
        if not (0.0 < self.band_width_frac <= 0.25):
            raise ValueError("band_width_frac must be in (0.0, 0.25]")
        if self.slider_resolution < 1:
            raise ValueError("slider_resolution must be >= 1")


@dataclass(frozen=True, slots=True)
class RoundRecord:
    round_index: int
    category: Category
    guess: float
    target: float
    points: int
    clue: str = ""

    @property
    def diff(self) -> float:
        return abs(self.guess - self.target)


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """View model for the UI (pure data)."""

    phase: Phase
    round: int
    rounds_count: int
    score: int
    category: Category | None
    guess: float
    target: float | None
    clue: str
    show_target: bool
    interactive: bool
    hidden_overlay: bool
    clue_enabled: bool
    last_points: int | None
    last_label: str | None
    history: tuple[RoundRecord, ...]


class WavelengthGame:
    """Round state machine: start -> seer_ready -> seer_view -> guess -> result.

    From ``result`` play continues with the next ``seer_ready`` or ends in
    ``summary``; ``restart`` returns to ``start``. Every action returns True
    when applied and False when it does not fit the current phase.

    - Randomness (deck order, targets) comes only from the injected source.
    - ``target`` and ``guess`` stay in [0, 1].
    """

    def __init__(
        self,
        *,
        rng: RandomSource,
        categories: Iterable[Category] | None = None,
        config: WavelengthConfig | None = None,
    ) -> None:
        self._rng = rng
        self._config = config or WavelengthConfig()
        self._categories: tuple[Category, ...] = tuple(
            DEFAULT_CATEGORIES if categories is None else categories
        )

        self._phase: Phase = Phase.START
        self._deck: tuple[Category, ...] = ()
        self._rounds_count = min(self._config.max_rounds, len(self._categories))
        self._round = 1
        self._score = 0
        self._guess = 0.5
        self._target = 0.5
        self._clue = ""
        self._history: list[RoundRecord] = []

    @property
    def config(self) -> WavelengthConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def round(self) -> int:
        return self._round

    @property
    def rounds_count(self) -> int:
        return self._rounds_count

    @property
    def score(self) -> int:
        return self._score

    @property
    def guess(self) -> float:
        return self._guess

    @property
    def target(self) -> float:
        """Raw target, regardless of phase. The UI reads it via ``snapshot``."""
        return self._target

    @property
    def clue(self) -> str:
        return self._clue

    @property
    def deck(self) -> tuple[Category, ...]:
        return self._deck

    @property
    def category(self) -> Category | None:
        if self._phase is Phase.START or not self._deck:
            return None
        return self._deck[min(self._round, len(self._deck)) - 1]

    def history(self) -> list[RoundRecord]:
        return list(self._history)

    # -- Actions -----------------------------------------------------------
    def start_game(self, categories: Iterable[Category] | None = None) -> bool:
        if self._phase is not Phase.START:
            return False
        if categories is not None:
            self._categories = tuple(categories)

        self._deck = tuple(shuffle(playable_deck(self._categories), self._rng))
        self._rounds_count = min(self._config.max_rounds, len(self._deck))
        self._round = 1
        self._score = 0
        self._history = []
        self._begin_round()
        logger.info("Game started: %d rounds from a deck of %d", self._rounds_count, len(self._deck))
        return True

    def reveal_target(self) -> bool:
        return self._transition(Phase.SEER_READY, Phase.SEER_VIEW)

    def hide_and_clue(self) -> bool:
        return self._transition(Phase.SEER_VIEW, Phase.GUESS)

    def set_guess(self, value: float) -> bool:
        if self._phase is not Phase.GUESS:
            return False
        self._guess = clamp01(value)
        return True

    def set_guess_from_slider(self, position: int) -> bool:
        return self.set_guess(slider_to_value(position, self._config.slider_resolution))

    def drag_to(self, x: float, y: float, layout: DialLayout) -> bool:
        return self.set_guess(pointer_to_value(x, y, layout.cx, layout.cy))

    def set_clue(self, text: str) -> bool:
        if self._phase not in CLUE_EDITABLE_PHASES:
            return False
        self._clue = str(text)
        return True

    def reveal_and_score(self) -> bool:
        if self._phase is not Phase.GUESS:
            return False
        category = self.category
        assert category is not None

        points = compute_points(abs(self._guess - self._target))
        record = RoundRecord(
            round_index=self._round,
            category=category,
            guess=self._guess,
            target=self._target,
            points=points,
            clue=self._clue,
        )
        self._history.append(record)
        self._score += points
        self._phase = Phase.RESULT
        logger.info(
            "Round %d scored %d (guess=%.3f target=%.3f)",
            self._round,
            points,
            self._guess,
            self._target,
        )
        return True

    def next_round(self) -> bool:
        if self._phase is not Phase.RESULT:
            return False
        if self._round + 1 > self._rounds_count:
            self._phase = Phase.SUMMARY
            logger.info("Game over: %d points over %d rounds", self._score, len(self._history))
            return True
        self._round += 1
        self._begin_round()
        return True

    def go_to_summary(self) -> bool:
        return self._transition(Phase.RESULT, Phase.SUMMARY)

    def restart(self) -> bool:
        # State is reset by the next start_game, not here.
        return self._transition(Phase.SUMMARY, Phase.START)

    # -- Views -------------------------------------------------------------
    def last_record(self) -> RoundRecord | None:
        if self._phase is not Phase.RESULT or not self._history:
            return None
        return self._history[-1]

    def snapshot(self) -> GameSnapshot:
        show_target = self._phase in TARGET_VISIBLE_PHASES
        last = self.last_record()
        return GameSnapshot(
            phase=self._phase,
            round=min(self._round, self._rounds_count),
            rounds_count=self._rounds_count,
            score=self._score,
            category=self.category,
            guess=self._guess,
            target=self._target if show_target else None,
            clue=self._clue,
            show_target=show_target,
            interactive=self._phase is Phase.GUESS,
            hidden_overlay=self._phase is Phase.SEER_READY,
            clue_enabled=self._phase in CLUE_EDITABLE_PHASES,
            last_points=None if last is None else last.points,
            last_label=None if last is None else result_label(last.points),
            history=tuple(self._history),
        )

    def _begin_round(self) -> None:
        self._guess = 0.5
        self._target = clamp01(self._rng.random())
        self._clue = ""
        self._phase = Phase.SEER_READY
        logger.debug("Round %d/%d ready", self._round, self._rounds_count)

    def _transition(self, src: Phase, dst: Phase) -> bool:
        if self._phase is not src:
            return False
        self._phase = dst
        logger.debug("Phase %s -> %s", src, dst)
        return True
