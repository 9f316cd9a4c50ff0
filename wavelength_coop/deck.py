from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from .random_source import RandomSource, RealRandom

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Category:
    """A spectrum between two opposing concepts."""

    left: str
    right: str

    def __post_init__(self) -> None:
        if not isinstance(self.left, str) or not isinstance(self.right, str):
            raise ValueError("category labels must be strings")

    @property
    def is_valid(self) -> bool:
        return bool(self.left.strip()) and bool(self.right.strip())

    def label(self) -> str:
        return f"{self.left} <-> {self.right}"


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category("Classic", "Modern"),
    Category("Sweet", "Savory"),
    Category("Natural", "Artificial"),
    Category("Risky", "Safe"),
    Category("Minimalist", "Ornate"),
    Category("Fast", "Slow"),
    Category("Mainstream", "Niche"),
    Category("Realistic", "Abstract"),
    Category("Quiet", "Loud"),
    Category("Cheap", "Expensive"),
    Category("Vintage", "Futuristic"),
    Category("Work", "Leisure"),
    Category("Hot", "Cold"),
    Category("Land", "Sea"),
    Category("Introvert", "Extrovert"),
    Category("Simple", "Complex"),
    Category("Mountain", "Beach"),
    Category("Science", "Art"),
    Category("Optimistic", "Pessimistic"),
    Category("Spontaneous", "Planned"),
)

_default_rng = RealRandom()


def shuffle(items: Sequence[T], rng: RandomSource | None = None) -> list[T]:
    """Return a shuffled copy of ``items`` (Fisher-Yates); the input is untouched."""

    src = _default_rng if rng is None else rng
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = src.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


def valid_categories(categories: Iterable[Category]) -> list[Category]:
    return [c for c in categories if c.is_valid]


def playable_deck(categories: Iterable[Category]) -> list[Category]:
    """Valid entries, or the built-in deck when none survive filtering."""

    filtered = valid_categories(categories)
    if not filtered:
        logger.info("No usable categories; falling back to the %d built-ins", len(DEFAULT_CATEGORIES))
        return list(DEFAULT_CATEGORIES)
    return filtered


class CategoryEditor:
    """Mutable pre-game category list."""

    def __init__(self, categories: Iterable[Category] | None = None) -> None:
        self._items: list[Category] = list(DEFAULT_CATEGORIES if categories is None else categories)

    @property
    def categories(self) -> tuple[Category, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, left: str, right: str) -> bool:
        ll = left.strip()
        rr = right.strip()
        if not ll or not rr:
            return False
        self._items.append(Category(ll, rr))
        return True

    def remove_at(self, index: int) -> bool:
        if not (0 <= index < len(self._items)):
            return False
        del self._items[index]
        return True

    def reset_defaults(self) -> None:
        self._items = list(DEFAULT_CATEGORIES)

    def shuffle_now(self, rng: RandomSource | None = None) -> None:
        self._items = shuffle(self._items, rng)

    def planned_rounds(self, max_rounds: int) -> int:
        return min(int(max_rounds), len(self._items))
