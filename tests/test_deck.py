from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

import pytest

from wavelength_coop.deck import (
    DEFAULT_CATEGORIES,
    Category,
    CategoryEditor,
    playable_deck,
    shuffle,
    valid_categories,
)
from wavelength_coop.random_source import SeededRandom


@dataclass
class FirstIndexRandom:
    """randrange always picks 0; random() is unused by shuffle."""

    def random(self) -> float:
        return 0.0

    def randrange(self, stop: int) -> int:
        return 0


def test_shuffle_is_a_permutation_and_does_not_mutate_input() -> None:
    original = [1, 2, 3, 4, 5, 5, 6]
    copy = list(original)
    out = shuffle(original, SeededRandom(3))
    assert original == copy
    assert Counter(out) == Counter(original)
    assert len(out) == len(original)
    assert out is not original


@pytest.mark.parametrize("items", [[], ["only"]])
def test_shuffle_short_lists_are_unchanged(items: list[str]) -> None:
    assert shuffle(items) == items


def test_shuffle_follows_fisher_yates_with_injected_source() -> None:
    # i=3 swaps with 0, then i=2, then i=1.
    assert shuffle([1, 2, 3, 4], FirstIndexRandom()) == [2, 3, 4, 1]


def test_shuffle_same_seed_same_order() -> None:
    a = shuffle(DEFAULT_CATEGORIES, SeededRandom(42))
    b = shuffle(DEFAULT_CATEGORIES, SeededRandom(42))
    assert a == b
    assert Counter(a) == Counter(DEFAULT_CATEGORIES)


def test_shuffle_accepts_tuples() -> None:
    out = shuffle(("a", "b", "c"), SeededRandom(1))
    assert sorted(out) == ["a", "b", "c"]


def test_default_deck_has_twenty_distinct_valid_pairs() -> None:
    assert len(DEFAULT_CATEGORIES) == 20
    assert len(set(DEFAULT_CATEGORIES)) == 20
    assert all(c.is_valid for c in DEFAULT_CATEGORIES)


def test_category_rejects_non_string_labels() -> None:
    with pytest.raises(ValueError):
        Category(None, "Right")  # type: ignore[arg-type]


def test_valid_categories_drop_blank_labels() -> None:
    cats = [Category("Hot", "Cold"), Category("  ", "Cold"), Category("Hot", ""), Category("Up", "Down")]
    assert valid_categories(cats) == [Category("Hot", "Cold"), Category("Up", "Down")]


def test_playable_deck_falls_back_to_defaults() -> None:
    assert playable_deck([Category(" ", " ")]) == list(DEFAULT_CATEGORIES)
    assert playable_deck([]) == list(DEFAULT_CATEGORIES)
    assert playable_deck([Category("A", "B")]) == [Category("A", "B")]


def test_editor_add_trims_and_rejects_blank_sides() -> None:
    editor = CategoryEditor([])
    assert editor.add("  Sweet ", " Savory") is True
    assert editor.categories == (Category("Sweet", "Savory"),)
    assert editor.add("", "Savory") is False
    assert editor.add("Sweet", "   ") is False
    assert len(editor) == 1


def test_editor_remove_reset_and_planned_rounds() -> None:
    editor = CategoryEditor()
    assert len(editor) == 20
    assert editor.planned_rounds(5) == 5

    assert editor.remove_at(0) is True
    assert editor.categories[0] == DEFAULT_CATEGORIES[1]
    assert editor.remove_at(99) is False
    assert editor.remove_at(-1) is False

    while len(editor) > 2:
        editor.remove_at(0)
    assert editor.planned_rounds(5) == 2

    editor.reset_defaults()
    assert editor.categories == DEFAULT_CATEGORIES


def test_editor_shuffle_keeps_entries() -> None:
    editor = CategoryEditor()
    editor.shuffle_now(SeededRandom(9))
    assert Counter(editor.categories) == Counter(DEFAULT_CATEGORIES)
