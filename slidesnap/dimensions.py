"""
Derived dimensions of the slide-n-snap connector.

These are the sizes a part designer needs to leave enough material around
the female negative. They must stay in step with the profile formulas in
geometry.py: the female negative spans exactly channel_width() in X,
clip_height() in Z and female_length() in Y (plus the channel run-out).
"""

import math


# Clearance measured square to a 45 degree flank needs g*sqrt(2) along the
# axes, on top of the straight gap g.
DIAGONAL_GAP_FACTOR: float = 1.0 + math.sqrt(2.0)


def dovetail_height(t: float, w: float) -> float:
    """Height of the male dovetail above the mating plane (45 degree flare)."""
    return w / 2 - t / 2


def clip_height(t: float, w: float, s: float) -> float:
    """Total height from the mating plane to the top of the spring relief."""
    return dovetail_height(t, w) + s


def channel_width(w: float, g: float) -> float:
    """Widest extent of the female channel, gap included on both sides."""
    return 2 * g * DIAGONAL_GAP_FACTOR + w


def latch_length(t: float, w: float, h: float, s: float) -> float:
    """Length of the latch along the channel: base h plus its 45 degree ramp."""
    return clip_height(t, w, s) + h


def female_length(w: float, t: float, g: float, j: float,
                  h: float, l: float, s: float) -> float:
    """Length of the female part along the channel axis, latch included."""
    return latch_length(t, w, h, s) + g + j + l
