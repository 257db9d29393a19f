"""Hand-rolled renderer for the 30-day mood line chart.

`render_chart` is a pure function of the series and the surface size. A
day without an entry ends the current sub-path; the next plotted day
starts a new one, so gaps are never bridged.
"""
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..models.dashboard import ChartPoint
from .metrics import mood_label

DEFAULT_PADDING = 40
MARKER_RADIUS = 3
MIN_MOOD = 1
MAX_MOOD = 5

AXIS_COLOR = "#ddd"
LINE_COLOR = "#c61919"
LABEL_COLOR = "#666"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Marker:
    center: Point
    radius: float
    index: int
    mood: int


@dataclass(frozen=True)
class Label:
    position: Point
    text: str
    value: int


@dataclass
class ChartDrawing:
    """Drawing instructions for one chart."""

    width: int
    height: int
    axes: list[Point] = field(default_factory=list)
    sub_paths: list[list[Point]] = field(default_factory=list)
    path_indices: list[list[int]] = field(default_factory=list)
    markers: list[Marker] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "width": self.width,
            "height": self.height,
            "axes": [[p.x, p.y] for p in self.axes],
            "subPaths": [[[p.x, p.y] for p in path] for path in self.sub_paths],
            "markers": [{"x": m.center.x, "y": m.center.y, "r": m.radius, "mood": m.mood} for m in self.markers],
            "labels": [{"x": lb.position.x, "y": lb.position.y, "text": lb.text} for lb in self.labels],
        }


def _y_for(mood: float, height: int, padding: int) -> float:
    chart_height = height - padding * 2
    return height - padding - ((mood - MIN_MOOD) / (MAX_MOOD - MIN_MOOD)) * chart_height


def render_chart(
    series: Sequence[ChartPoint],
    width: int,
    height: int,
    padding: int = DEFAULT_PADDING,
) -> ChartDrawing:
    """Lay out axes, line sub-paths, point markers and value-axis labels."""
    drawing = ChartDrawing(width=width, height=height)
    chart_width = width - padding * 2

    drawing.axes = [
        Point(padding, padding),
        Point(padding, height - padding),
        Point(width - padding, height - padding),
    ]

    span = max(len(series) - 1, 1)
    current: Optional[list[Point]] = None
    current_indices: list[int] = []
    for index, point in enumerate(series):
        if point.mood is None:
            current = None
            continue
        xy = Point(padding + (index / span) * chart_width, _y_for(point.mood, height, padding))
        if current is None:
            current = []
            current_indices = []
            drawing.sub_paths.append(current)
            drawing.path_indices.append(current_indices)
        current.append(xy)
        current_indices.append(index)
        drawing.markers.append(Marker(center=xy, radius=MARKER_RADIUS, index=index, mood=point.mood))

    for level in range(MIN_MOOD, MAX_MOOD + 1):
        drawing.labels.append(
            Label(position=Point(padding - 20, _y_for(level, height, padding) + 3), text=mood_label(level), value=level)
        )

    return drawing


def _fmt(value: float) -> str:
    return f"{value:.1f}".rstrip("0").rstrip(".")


def to_svg(drawing: ChartDrawing) -> str:
    """Serialise a drawing as a standalone SVG document."""
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{drawing.width}" height="{drawing.height}" '
        f'viewBox="0 0 {drawing.width} {drawing.height}">'
    ]

    axis = " ".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in drawing.axes)
    parts.append(f'<polyline points="{axis}" fill="none" stroke="{AXIS_COLOR}" stroke-width="1"/>')

    for path in drawing.sub_paths:
        d = " ".join(
            ("M" if i == 0 else "L") + f"{_fmt(p.x)} {_fmt(p.y)}" for i, p in enumerate(path)
        )
        parts.append(f'<path d="{d}" fill="none" stroke="{LINE_COLOR}" stroke-width="2"/>')

    for marker in drawing.markers:
        parts.append(
            f'<circle cx="{_fmt(marker.center.x)}" cy="{_fmt(marker.center.y)}" r="{_fmt(marker.radius)}" fill="{LINE_COLOR}"/>'
        )

    for label in drawing.labels:
        parts.append(
            f'<text x="{_fmt(label.position.x)}" y="{_fmt(label.position.y)}" fill="{LABEL_COLOR}" '
            f'font-family="Arial" font-size="12" text-anchor="middle">{label.text}</text>'
        )

    parts.append("</svg>")
    return "\n".join(parts)
