"""
Solid construction for the slide-n-snap connector using build123d.

Every profile from geometry.py is placed on its plane, extruded, and the
female negative is assembled as (channel + pocket + relief [+ cavity]) - latch.
"""

from typing import Iterable, Optional, Tuple
import logging

from build123d import (
    Align,
    Box,
    Face,
    Part,
    Plane,
    Pos,
    Vector,
    Wire,
    extrude,
    mirror,
)

from .geometry import (
    SnapParams,
    ConfigurationError,
    Point3D,
    DEFAULT_EPSILON,
    UPSIDE_DOWN_EPSILON,
    male_profile_points,
    channel_profile_points,
    relief_profile_points,
    latch_profile_points,
    latch_pocket_box,
    spring_cavity_box,
)

logger = logging.getLogger(__name__)

X_DIR = (1, 0, 0)
Y_DIR = (0, 1, 0)
Z_DIR = (0, 0, 1)


def _polygon_face(points: Iterable[Point3D]) -> Face:
    """Planar face bounded by a closed polyline through 3D points."""
    wire = Wire.make_polygon([Vector(*p) for p in points], close=True)
    return Face(wire)


def _box(origin: Point3D, extents: Point3D) -> Part:
    """Box from its minimum corner and three extents."""
    return Pos(*origin) * Box(*extents, align=(Align.MIN, Align.MIN, Align.MIN))


def _check_male(t: float, w: float, l: float) -> None:
    errors = []
    if t <= 0:
        errors.append(f"t must be positive, got {t}")
    if w <= t:
        errors.append(f"w must exceed t ({w} <= {t})")
    if l <= 0:
        errors.append(f"l must be positive, got {l}")
    if errors:
        raise ConfigurationError(errors)


def make_male_clip(t: float, w: float, l: float) -> Part:
    """Male clip: the dovetail profile extruded along +Y by l."""
    _check_male(t, w, l)
    points = [(x, 0.0, z) for x, z in male_profile_points(t, w)]
    return extrude(_polygon_face(points), amount=l, dir=Y_DIR)


def make_female_channel(params: SnapParams, epsilon: float = DEFAULT_EPSILON) -> Part:
    """Slide channel from the closed end through the entrance plus run-out c."""
    profile = channel_profile_points(params.t, params.w, params.g, epsilon)
    points = [(x, 0.0, z) for x, z in profile]
    length = params.female_length + params.c
    return extrude(_polygon_face(points), amount=length, dir=Y_DIR)


def make_spring_relief(params: SnapParams, epsilon: float = DEFAULT_EPSILON) -> Part:
    """C-shaped cut through the spring layer, dipping epsilon into the channel."""
    z0 = params.dovetail_height - epsilon
    points = [(x, y, z0) for x, y in relief_profile_points(params)]
    return extrude(_polygon_face(points), amount=params.s + epsilon, dir=Z_DIR)


def make_latch(params: SnapParams, epsilon: float = DEFAULT_EPSILON) -> Part:
    """Latch wedge spanning the spring tongue width (channel width - 2j)."""
    width = params.channel_width - 2 * params.j
    x0 = -width / 2
    points = [(x0, y, z) for y, z in latch_profile_points(params, epsilon)]
    return extrude(_polygon_face(points), amount=width, dir=X_DIR)


def make_latch_pocket(params: SnapParams, epsilon: float = DEFAULT_EPSILON) -> Part:
    return _box(*latch_pocket_box(params, epsilon))


def make_spring_cavity(params: SnapParams, epsilon: float = DEFAULT_EPSILON) -> Part:
    """Room above the spring for the latch travel."""
    return _box(*spring_cavity_box(params, epsilon))


def _assemble_female(params: SnapParams, include_cavity: bool, epsilon: float) -> Part:
    negative = (
        make_female_channel(params, epsilon)
        + make_latch_pocket(params, epsilon)
        + make_spring_relief(params, epsilon)
    )
    if include_cavity:
        negative = negative + make_spring_cavity(params, epsilon)
    return negative - make_latch(params, epsilon)


def make_female_clip_negative(params: SnapParams,
                              include_cavity: bool = True,
                              epsilon: Optional[float] = None) -> Part:
    """
    Negative space to subtract from the female part.

    The channel opens downward at z = 0; the spring sits above the channel
    ceiling and the optional cavity above the spring.
    """
    params.require_valid()
    eps = epsilon if epsilon is not None else params.resolve_epsilon(DEFAULT_EPSILON)
    logger.debug(
        f"Female negative: width={params.channel_width:.4f} "
        f"height={params.clip_height:.4f} length={params.female_length:.4f} "
        f"cavity={include_cavity} eps={eps}"
    )
    return _assemble_female(params, include_cavity, eps)


def make_upside_down_female_clip_negative(params: SnapParams,
                                          epsilon: Optional[float] = None) -> Part:
    """
    Female negative for printing with the spring against the bed.

    Same assembly without the cavity, mirrored about z = clip_height.
    """
    params.require_valid()
    eps = epsilon if epsilon is not None else params.resolve_epsilon(UPSIDE_DOWN_EPSILON)
    negative = _assemble_female(params, include_cavity=False, epsilon=eps)
    return mirror(negative, about=Plane.XY.offset(params.clip_height))


def make_connector(params: SnapParams,
                   upside_down: bool = False,
                   include_cavity: bool = True) -> Tuple[Part, Part]:
    """(male clip, female negative) for one parameter set."""
    if upside_down:
        female = make_upside_down_female_clip_negative(params)
    else:
        female = make_female_clip_negative(params, include_cavity=include_cavity)
    male = make_male_clip(params.t, params.w, params.l)
    return male, female
