from __future__ import annotations

import pytest

from wavelength_coop.scoring import compute_points, percent, points_text, result_label


@pytest.mark.parametrize(
    ("diff", "points"),
    [
        (0.00, 4),
        (0.05, 4),
        (0.051, 3),
        (0.10, 3),
        (0.1001, 2),
        (0.18, 2),
        (0.1801, 1),
        (0.25, 1),
        (0.2501, 0),
        (1.0, 0),
    ],
)
def test_compute_points_band_boundaries(diff: float, points: int) -> None:
    assert compute_points(diff) == points


def test_compute_points_never_increases_with_distance() -> None:
    diffs = [i / 1000 for i in range(1001)]
    pts = [compute_points(d) for d in diffs]
    assert all(a >= b for a, b in zip(pts, pts[1:]))
    assert set(pts) == {0, 1, 2, 3, 4}


def test_labels_and_display_helpers() -> None:
    assert result_label(4) == "Bullseye!"
    assert result_label(3) == "Excellent"
    assert result_label(2) == "Very good"
    assert result_label(1) == "Close"
    assert result_label(0) == "Far off"

    assert points_text(1) == "+1 point"
    assert points_text(3) == "+3 points"

    assert percent(0.0) == 0
    assert percent(0.125) == 13
    assert percent(0.994) == 99
    assert percent(1.0) == 100
