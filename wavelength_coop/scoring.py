from __future__ import annotations

import math

# (max diff inclusive, points), closest band first.
POINT_THRESHOLDS: tuple[tuple[float, int], ...] = (
    (0.05, 4),
    (0.10, 3),
    (0.18, 2),
    (0.25, 1),
)
MAX_POINTS = 4

_LABELS = {
    4: "Bullseye!",
    3: "Excellent",
    2: "Very good",
    1: "Close",
    0: "Far off",
}


def compute_points(diff: float) -> int:
    """Points for an absolute guess/target distance on the [0, 1] spectrum."""

    d = abs(float(diff))
    for limit, points in POINT_THRESHOLDS:
        if d <= limit:
            return points
    return 0


def result_label(points: int) -> str:
    return _LABELS.get(int(points), _LABELS[0])


def points_text(points: int) -> str:
    return f"+{points} {'point' if points == 1 else 'points'}"


def percent(x: float) -> int:
    # Half-up: 0.125 -> 13.
    return int(math.floor(float(x) * 100.0 + 0.5))
