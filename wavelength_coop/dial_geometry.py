"""Pure geometry for the semicircular dial.

Values live on the [0, 1] spectrum (0 = left concept, 1 = right concept) and
map onto angles in [0, pi], measured counter-clockwise from the positive x
axis with screen y growing downward. Shapes are returned as tuples of drawing
commands so the same description can be rasterized by pygame or rendered as
an SVG path string.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_BAND_WIDTH_FRAC = 0.08
DEFAULT_SLIDER_RESOLUTION = 1000

# Band points -> radius inset from the dial rim (outermost band drawn first).
BAND_INSETS: dict[int, int] = {1: 10, 2: 14, 3: 18, 4: 22}


@dataclass(frozen=True, slots=True)
class MoveTo:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class LineTo:
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ArcTo:
    """Circular arc ending at (x, y).

    The center and angles are kept alongside the SVG flags so the arc can be
    rasterized without re-deriving the center from the endpoint form.
    """

    x: float
    y: float
    radius: float
    large_arc: int
    sweep: int
    center_x: float
    center_y: float
    start_angle: float
    end_angle: float


@dataclass(frozen=True, slots=True)
class ClosePath:
    pass


PathCommand = MoveTo | LineTo | ArcTo | ClosePath
Path = tuple[PathCommand, ...]


@dataclass(frozen=True, slots=True)
class Band:
    """One confidence sector around the target, between two dial angles."""

    points: int
    start_angle: float
    end_angle: float


@dataclass(frozen=True, slots=True)
class DialLayout:
    cx: int
    cy: int
    radius: int

    @classmethod
    def fit(cls, available_width: int, *, left: int = 0, top: int = 0) -> "DialLayout":
        """Size the dial for a container, centering it horizontally."""

        width = min(720, max(340, int(available_width) - 64))
        radius = int(width * 0.48)
        offset = max(0, (int(available_width) - width) // 2)
        return cls(cx=left + offset + width // 2, cy=top + radius + 8, radius=radius)

    @property
    def width(self) -> int:
        return self.radius * 2 + 16

    @property
    def height(self) -> int:
        return self.radius + 16

    def bounds(self) -> tuple[int, int, int, int]:
        """Return (x, y, w, h) of the dial's interactive area."""

        return (self.cx - self.radius - 8, self.cy - self.radius - 8, self.width, self.height)

    def contains(self, x: float, y: float) -> bool:
        bx, by, bw, bh = self.bounds()
        return bx <= x < bx + bw and by <= y < by + bh


def clamp01(x: float) -> float:
    return 0.0 if x <= 0.0 else 1.0 if x >= 1.0 else float(x)


def value_to_angle_radians(value: float) -> float:
    return math.pi * (1.0 - value)


def polar_to_cartesian(cx: float, cy: float, radius: float, angle: float) -> tuple[float, float]:
    return (cx + radius * math.cos(angle), cy - radius * math.sin(angle))


def wedge_path(cx: float, cy: float, radius: float, a1: float, a2: float) -> Path:
    """Pie slice from the center, out to ``a1``, along the rim to ``a2``."""

    x1, y1 = polar_to_cartesian(cx, cy, radius, a1)
    x2, y2 = polar_to_cartesian(cx, cy, radius, a2)
    large_arc = 1 if abs(a1 - a2) > math.pi else 0
    return (
        MoveTo(cx, cy),
        LineTo(x1, y1),
        ArcTo(
            x=x2,
            y=y2,
            radius=radius,
            large_arc=large_arc,
            sweep=0,
            center_x=cx,
            center_y=cy,
            start_angle=a1,
            end_angle=a2,
        ),
        ClosePath(),
    )


def triangle_chord_path(cx: float, cy: float, radius: float, a1: float, a2: float) -> Path:
    """Flat-edged sector: the rim is replaced by the chord between the edges."""

    x1, y1 = polar_to_cartesian(cx, cy, radius, a1)
    x2, y2 = polar_to_cartesian(cx, cy, radius, a2)
    return (MoveTo(cx, cy), LineTo(x1, y1), LineTo(x2, y2), ClosePath())


def base_arc_path(cx: float, cy: float, radius: float) -> Path:
    """Open upper semicircle, left end to right end."""

    x1, y1 = polar_to_cartesian(cx, cy, radius, math.pi)
    x2, y2 = polar_to_cartesian(cx, cy, radius, 0.0)
    return (
        MoveTo(x1, y1),
        ArcTo(
            x=x2,
            y=y2,
            radius=radius,
            large_arc=0,
            sweep=1,
            center_x=cx,
            center_y=cy,
            start_angle=math.pi,
            end_angle=0.0,
        ),
    )


def _fmt(v: float) -> str:
    f = float(v)
    if f.is_integer():
        return str(int(f))
    return repr(f)


def to_svg(path: Path) -> str:
    parts: list[str] = []
    for cmd in path:
        if isinstance(cmd, MoveTo):
            parts.append(f"M {_fmt(cmd.x)} {_fmt(cmd.y)}")
        elif isinstance(cmd, LineTo):
            parts.append(f"L {_fmt(cmd.x)} {_fmt(cmd.y)}")
        elif isinstance(cmd, ArcTo):
            r = _fmt(cmd.radius)
            parts.append(f"A {r} {r} 0 {cmd.large_arc} {cmd.sweep} {_fmt(cmd.x)} {_fmt(cmd.y)}")
        else:
            parts.append("Z")
    return " ".join(parts)


def path_points(path: Path, *, arc_segments: int = 32) -> list[tuple[float, float]]:
    """Flatten a path into a polyline/polygon vertex list."""

    if arc_segments < 1:
        raise ValueError("arc_segments must be >= 1")

    points: list[tuple[float, float]] = []
    for cmd in path:
        if isinstance(cmd, (MoveTo, LineTo)):
            points.append((cmd.x, cmd.y))
        elif isinstance(cmd, ArcTo):
            span = cmd.end_angle - cmd.start_angle
            for i in range(1, arc_segments + 1):
                a = cmd.start_angle + span * (i / arc_segments)
                points.append(polar_to_cartesian(cmd.center_x, cmd.center_y, cmd.radius, a))
    return points


def derive_wedges(target: float, band_width_frac: float = DEFAULT_BAND_WIDTH_FRAC) -> dict[int, Band]:
    """Nested scoring bands around ``target``, keyed by the points they award.

    The 1-point band is the widest (4 band widths across), the 4-point band
    the narrowest. Edges are clamped to the dial's [0, pi] span.
    """

    center = value_to_angle_radians(clamp01(target))
    bands: dict[int, Band] = {}
    for points in (1, 2, 3, 4):
        widths = 5 - points
        half = (widths * band_width_frac * math.pi) / 2.0
        a1 = min(math.pi, max(0.0, center + half))
        a2 = min(math.pi, max(0.0, center - half))
        bands[points] = Band(points=points, start_angle=a1, end_angle=a2)
    return bands


def band_shapes(
    layout: DialLayout,
    target: float,
    band_width_frac: float = DEFAULT_BAND_WIDTH_FRAC,
) -> list[tuple[int, Path]]:
    """Chord-edged band shapes in draw order (outermost first)."""

    wedges = derive_wedges(target, band_width_frac)
    shapes: list[tuple[int, Path]] = []
    for points in (1, 2, 3, 4):
        band = wedges[points]
        r = layout.radius - BAND_INSETS[points]
        shapes.append(
            (points, triangle_chord_path(layout.cx, layout.cy, r, band.start_angle, band.end_angle))
        )
    return shapes


def pointer_to_value(x: float, y: float, cx: float, cy: float) -> float:
    """Map a pointer position to a spectrum value.

    Positions below the baseline snap to whichever end of the dial is nearer.
    """

    angle = math.atan2(cy - y, x - cx)
    if angle < 0.0:
        angle = math.pi if angle < -math.pi / 2.0 else 0.0
    angle = max(0.0, min(math.pi, angle))
    return clamp01(1.0 - angle / math.pi)


def slider_to_value(position: int, resolution: int = DEFAULT_SLIDER_RESOLUTION) -> float:
    if resolution < 1:
        raise ValueError("resolution must be >= 1")
    return clamp01(int(position) / float(resolution))


def value_to_slider(value: float, resolution: int = DEFAULT_SLIDER_RESOLUTION) -> int:
    if resolution < 1:
        raise ValueError("resolution must be >= 1")
    return int(round(clamp01(value) * resolution))
