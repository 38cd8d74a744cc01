"""
Coordinate math for the radial graph editor.

Categories store their position as polar offsets (angle in degrees, radius
in canvas units) from the center node. Everything on screen is derived:
- to_cartesian / to_polar convert between the model and canvas space
- ViewTransform maps pointer (screen) coordinates back into canvas space,
  undoing zoom and viewport offsets, so drag math never sees zoomed pixels
"""

import math
from dataclasses import dataclass
from typing import List

from orbit.constants import (
    CANVAS_WIDTH,
    CANVAS_HEIGHT,
    CENTER_X,
    CENTER_Y,
    DEFAULT_ZOOM,
    MIN_ZOOM,
    SATELLITE_ORBIT,
    ZOOM_STEP,
)


@dataclass(frozen=True)
class Point:
    x: float
    y: float


ORIGIN = Point(CENTER_X, CENTER_Y)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_angle(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = angle % 360
    # -1e-20 % 360 == 360.0 in floating point
    if wrapped >= 360:
        return 0.0
    return wrapped


@dataclass(frozen=True)
class PolarCoord:
    """Angle (degrees, [0, 360)) and radius (>= 0) relative to an origin."""
    angle: float
    radius: float

    def rounded(self) -> "PolarCoord":
        """Snap to whole degrees/units; 359.5 rounds to 360 which wraps to 0."""
        angle = _round_half_up(self.angle) % 360
        return PolarCoord(angle=angle, radius=_round_half_up(self.radius))


def to_cartesian(origin: Point, angle_deg: float, radius: float) -> Point:
    rad = angle_deg * math.pi / 180
    return Point(
        x=origin.x + radius * math.cos(rad),
        y=origin.y + radius * math.sin(rad),
    )


def to_polar(origin: Point, p: Point) -> PolarCoord:
    """
    Convert a canvas point to polar coordinates around origin.

    Screen space has y pointing down, so a point directly above the origin
    yields 270 degrees (atan2 gives -90, which is wrapped).
    """
    dx = p.x - origin.x
    dy = p.y - origin.y
    angle = math.atan2(dy, dx) * 180 / math.pi
    if angle < 0:
        angle += 360
    return PolarCoord(angle=normalize_angle(angle), radius=math.sqrt(dx * dx + dy * dy))


def satellite_positions(center: Point, count: int, orbit: float = SATELLITE_ORBIT) -> List[Point]:
    """
    Evenly spaced satellite points around center, satellite i at i/count of a turn.

    A category without tools has no satellites; the early return keeps the
    division below from ever seeing zero.
    """
    if count <= 0:
        return []
    positions = []
    for i in range(count):
        theta = (i / count) * math.pi * 2
        positions.append(Point(
            x=center.x + math.cos(theta) * orbit,
            y=center.y + math.sin(theta) * orbit,
        ))
    return positions


@dataclass(frozen=True)
class ViewTransform:
    """
    Canvas-to-screen affine transform: screen = canvas * scale + offset.

    The inverse (to_canvas) is what pointer handlers must use before doing
    any polar math, otherwise a drag at zoom 2 moves nodes twice as far.
    """
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def to_screen(self, p: Point) -> Point:
        return Point(p.x * self.scale + self.offset_x, p.y * self.scale + self.offset_y)

    def to_canvas(self, p: Point) -> Point:
        return Point((p.x - self.offset_x) / self.scale, (p.y - self.offset_y) / self.scale)

    @classmethod
    def zoomed(cls, zoom: float, about: Point = Point(0.0, 0.0)) -> "ViewTransform":
        """Uniform zoom that keeps the screen point ``about`` fixed."""
        return cls(scale=zoom, offset_x=about.x * (1 - zoom), offset_y=about.y * (1 - zoom))

    @classmethod
    def fit(cls, viewport_width: float, viewport_height: float,
            zoom: float = DEFAULT_ZOOM,
            canvas_width: float = CANVAS_WIDTH,
            canvas_height: float = CANVAS_HEIGHT) -> "ViewTransform":
        """
        Letterbox the canvas into a viewport (like an SVG viewBox with
        preserveAspectRatio="xMidYMid meet"), then zoom about the viewport center.
        """
        base = min(viewport_width / canvas_width, viewport_height / canvas_height)
        offset_x = (viewport_width - canvas_width * base) / 2
        offset_y = (viewport_height - canvas_height * base) / 2
        cx, cy = viewport_width / 2, viewport_height / 2
        return cls(
            scale=base * zoom,
            offset_x=cx + (offset_x - cx) * zoom,
            offset_y=cy + (offset_y - cy) * zoom,
        )


def zoom_in(zoom: float) -> float:
    return round(zoom + ZOOM_STEP, 2)


def zoom_out(zoom: float) -> float:
    return max(MIN_ZOOM, round(zoom - ZOOM_STEP, 2))
