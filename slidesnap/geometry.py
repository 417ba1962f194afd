"""
Geometry module for slide-n-snap profile generation.

Holds the connector parameter set and every 2D profile of the connector as
plain vertex lists. Solids are built from these in solids.py.

Coordinate frame shared by both parts:
  X - width axis (profiles are symmetric about x = 0)
  Y - slide axis (female channel closed at y = 0, entrance at female_length)
  Z - height axis (mating plane between the two printed parts at z = 0)
"""

from dataclasses import dataclass, asdict
from typing import Tuple, List, Optional, Sequence
import logging
import math

from shapely.geometry import LinearRing, Polygon

from .dimensions import (
    DIAGONAL_GAP_FACTOR,
    dovetail_height,
    clip_height,
    channel_width,
    female_length,
    latch_length,
)

logger = logging.getLogger(__name__)

Point2D = Tuple[float, float]
Point3D = Tuple[float, float, float]

# Boolean fudge factor; shared faces are pushed apart by this much
DEFAULT_EPSILON = 0.001
# The upside-down variant overlaps its faces a little more
UPSIDE_DOWN_EPSILON = 0.01


class ConfigurationError(ValueError):
    """Raised when a parameter set violates the connector invariants."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("Invalid connector parameters: " + "; ".join(self.errors))


@dataclass(frozen=True)
class SnapParams:
    """
    Parameters defining the slide-n-snap connector.

    All lengths in mm. Defaults are the "small" preset.
    """
    t: float = 1.75      # stem (waist) width of the male clip
    w: float = 5.25      # full width of the male clip
    l: float = 7.0       # clip length along the slide axis
    g: float = 0.3       # clearance per mating face
    j: float = 0.6       # gap cut around the living spring
    h: float = 1.0       # latch base length
    s: float = 1.0       # spring thickness
    a: float = 7.0       # spring length
    c: float = 1.0       # channel run-out past the entrance face
    epsilon: Optional[float] = None  # None: builder default

    # --- derived dimensions ---

    @property
    def dovetail_height(self) -> float:
        return dovetail_height(self.t, self.w)

    @property
    def clip_height(self) -> float:
        return clip_height(self.t, self.w, self.s)

    @property
    def channel_width(self) -> float:
        return channel_width(self.w, self.g)

    @property
    def female_length(self) -> float:
        return female_length(self.w, self.t, self.g, self.j, self.h, self.l, self.s)

    @property
    def latch_length(self) -> float:
        return latch_length(self.t, self.w, self.h, self.s)

    @property
    def latch_y(self) -> float:
        """Y of the latch locking face (end of the male seat plus gap)."""
        return self.l + self.g

    @property
    def spring_start_y(self) -> float:
        """Y of the spring hinge edge."""
        return self.female_length - self.j - self.a

    # --- validation ---

    def validate(self) -> Tuple[bool, List[str]]:
        """Check the hard invariants. Returns (is_valid, errors)."""
        errors = []

        for name in ('t', 'w', 'l', 'g', 'j', 'h', 's', 'a', 'c', 'epsilon'):
            value = getattr(self, name)
            if value is not None and not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value}")
        if errors:
            return False, errors

        for name in ('t', 'w', 'l', 'j', 's', 'a'):
            value = getattr(self, name)
            if value <= 0:
                errors.append(f"{name} must be positive, got {value}")
        if self.g < 0:
            errors.append(f"g must be >= 0, got {self.g}")
        if self.h <= 0:
            errors.append(f"h must be positive (latch base), got {self.h}")
        if self.c <= 0:
            errors.append(f"c must be positive (channel run-out), got {self.c}")
        if self.epsilon is not None and self.epsilon <= 0:
            errors.append(f"epsilon must be positive, got {self.epsilon}")

        if self.w <= self.t + 2 * self.g:
            errors.append(
                f"w must exceed t + 2g ({self.w} <= {self.t + 2 * self.g})"
            )
        if self.l < self.w:
            errors.append(f"l must be at least w ({self.l} < {self.w})")
        if self.a > self.l:
            errors.append(f"a must not exceed l ({self.a} > {self.l})")

        return len(errors) == 0, errors

    def advisories(self) -> List[str]:
        """Soft checks that still produce usable geometry."""
        notes = []
        if not (2 * self.g <= self.j <= 3 * self.g):
            notes.append(
                f"j={self.j} outside recommended range [2g, 3g] = "
                f"[{2 * self.g:.3f}, {3 * self.g:.3f}]"
            )
        if self.a < self.latch_length:
            notes.append(
                f"spring length a={self.a} shorter than latch length "
                f"{self.latch_length:.3f}; latch overhangs the hinge"
            )
        return notes

    def require_valid(self) -> 'SnapParams':
        """Raise ConfigurationError on invalid parameters, log advisories."""
        is_valid, errors = self.validate()
        if not is_valid:
            raise ConfigurationError(errors)
        for note in self.advisories():
            logger.warning(note)
        return self

    def resolve_epsilon(self, default: float = DEFAULT_EPSILON) -> float:
        return self.epsilon if self.epsilon is not None else default

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> 'SnapParams':
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in d.items() if k in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Envelope:
    """Axis-aligned box a built solid is expected to fill exactly."""
    min: Point3D
    max: Point3D

    @property
    def size(self) -> Point3D:
        return tuple(hi - lo for lo, hi in zip(self.min, self.max))


# --- profiles ---

def male_profile_points(t: float, w: float) -> List[Point2D]:
    """
    Male clip cross-section (X, Z), counter-clockwise.

    The stem of width t reaches t/2 below the mating plane so the clip
    fuses into its part; above the plane it flares at 45 degrees to w.
    """
    top = dovetail_height(t, w)
    return [
        (0.0, -t / 2),
        (t / 2, -t / 2),
        (t / 2, 0.0),
        (w / 2, top),
        (0.0, top),
        (-w / 2, top),
        (-t / 2, 0.0),
        (-t / 2, -t / 2),
    ]


def channel_profile_points(t: float, w: float, g: float,
                           epsilon: float = DEFAULT_EPSILON) -> List[Point2D]:
    """
    Female channel cross-section (X, Z).

    Flanks sit g*(1+sqrt 2) outside the male flanks. The bottom edge is
    pushed epsilon below the mating plane along the flank.
    """
    gap = g * DIAGONAL_GAP_FACTOR
    top = dovetail_height(t, w)
    bottom_half = t / 2 + gap - epsilon
    top_half = w / 2 + gap
    return [
        (-bottom_half, -epsilon),
        (bottom_half, -epsilon),
        (top_half, top),
        (-top_half, top),
    ]


def relief_profile_points(params: SnapParams) -> List[Point2D]:
    """
    Spring relief outline (X, Y): a C cut j wide around the spring tongue.

    The hinge edge at y1 stays uncut; the free end faces the entrance.
    """
    x2 = params.channel_width / 2
    x1 = -x2
    y1 = params.spring_start_y
    y2 = params.female_length
    j = params.j
    return [
        (x1, y1),
        (x1, y2),
        (x2, y2),
        (x2, y1),
        (x2 - j, y1),
        (x2 - j, y2 - j),
        (x1 + j, y2 - j),
        (x1 + j, y1),
    ]


def latch_profile_points(params: SnapParams,
                         epsilon: float = DEFAULT_EPSILON) -> List[Point2D]:
    """
    Latch wedge (Y, Z).

    Vertical locking face toward the closed end, 45 degree ramp toward
    the entrance so the incoming clip lifts the spring. The base sits
    2*epsilon below the mating plane, clear of the channel floor.
    """
    y0 = params.latch_y
    top = params.clip_height
    drop = 2 * epsilon
    return [
        (y0, -drop),
        (y0 + params.h, -drop),
        (y0 + params.h + top + drop, top),
        (y0, top),
    ]


def latch_pocket_box(params: SnapParams,
                     epsilon: float = DEFAULT_EPSILON) -> Tuple[Point3D, Point3D]:
    """(origin corner, extents) of the pocket that frees the latch."""
    half = params.channel_width / 2
    origin = (-half, params.l, -epsilon)
    extents = (
        params.channel_width,
        params.female_length - params.l,
        params.dovetail_height + epsilon,
    )
    return origin, extents


def spring_cavity_box(params: SnapParams,
                      epsilon: float = DEFAULT_EPSILON) -> Tuple[Point3D, Point3D]:
    """(origin corner, extents) of the room the spring flexes into."""
    half = params.channel_width / 2
    y1 = params.spring_start_y
    origin = (-half, y1, params.clip_height - epsilon)
    extents = (
        params.channel_width,
        params.female_length - y1,
        params.dovetail_height + epsilon,
    )
    return origin, extents


# --- polygon helpers ---

def polygon_bounds(points: Sequence[Point2D]) -> Tuple[Point2D, Point2D]:
    """((min_x, min_y), (max_x, max_y)) of a vertex list."""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (min(xs), min(ys)), (max(xs), max(ys))


def is_simple_polygon(points: Sequence[Point2D]) -> bool:
    """True when the closed loop neither crosses nor touches itself."""
    if len(points) < 3:
        return False
    ring = LinearRing(points)
    return ring.is_simple and Polygon(ring).is_valid


def polygon_area(points: Sequence[Point2D]) -> float:
    """Signed area; positive for counter-clockwise loops."""
    ring = LinearRing(points)
    area = Polygon(ring).area
    return area if ring.is_ccw else -area


# --- envelopes ---

def male_envelope(t: float, w: float, l: float) -> Envelope:
    return Envelope(
        min=(-w / 2, 0.0, -t / 2),
        max=(w / 2, l, dovetail_height(t, w)),
    )


def female_envelope(params: SnapParams,
                    include_cavity: bool = True,
                    upside_down: bool = False,
                    epsilon: float = DEFAULT_EPSILON) -> Envelope:
    """
    Expected bounding box of the female negative.

    Z tops out at clip_height (the cavity adds the latch travel above it).
    Y spans female_length plus the channel run-out c.
    """
    half = params.channel_width / 2
    length = params.female_length + params.c
    z_min = -epsilon
    z_max = params.clip_height
    if include_cavity and not upside_down:
        z_max += params.dovetail_height

    if upside_down:
        mirror_z = params.clip_height
        z_min, z_max = 2 * mirror_z - z_max, 2 * mirror_z - z_min

    return Envelope(min=(-half, 0.0, z_min), max=(half, length, z_max))
