"""
Grid interval selection.

The overlay measures how many map units a fixed screen distance covers at
the current zoom and rounds that to a human-friendly spacing from a fixed
ladder: {0.1, 0.2, 0.5, 1} x 10^k for fine spans, or 30/45/60/90 for coarse
ones. All rounding is done in decimal arithmetic so that boundary values
like exactly 0.2 or 0.5 select the same step on every platform.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from .constants import (
    COARSE_LADDER,
    COARSE_LADDER_MAX,
    COARSEST_INTERVAL,
    FINE_LADDER,
    FINE_LADDER_LIMIT,
    FINEST_INTERVAL,
    INTERVAL_PRECISION,
    MAX_DETAIL_ZOOM,
    REFERENCE_SPAN_PX,
)
from .exceptions import InvalidIntervalError
from .geometry import Bounds, Point

logger = logging.getLogger("simple_graticule.interval")

Number = Union[int, float, Decimal]

_TEN = Decimal(10)
_LADDER = tuple(Decimal(str(step)) for step in FINE_LADDER)


def _to_decimal(value: Number) -> Decimal:
    # str() of a float is its shortest round-tripping decimal form.
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number, places: int) -> float:
    """
    Round to ``places`` decimal digits, halves away from zero.

    Example:
        >>> round_half_up(0.00015, 4)
        0.0002
        >>> round_half_up(-2.5, 0)
        -3.0
    """
    if not isinstance(value, Decimal) and not math.isfinite(value):
        return float(value)
    quantum = Decimal(1).scaleb(-places)
    return float(_to_decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_for_interval(number: Number) -> float:
    """
    Snap a reference span to the interval ladder.

    Spans above 10 map to 30, 45, 60 or 90. Smaller spans are normalized
    into (0.1, 1] by powers of ten and rounded up to the next of 0.2, 0.5
    or 1 before being scaled back.

    Args:
        number: Map-unit width of the reference screen span

    Returns:
        Grid interval

    Raises:
        InvalidIntervalError: If the span is not a positive finite number,
            or is too small to yield a non-zero interval at the working
            precision

    Example:
        >>> round_for_interval(0.3)
        0.5
        >>> round_for_interval(40)
        45.0
    """
    if isinstance(number, bool) or not isinstance(number, (int, float, Decimal)):
        raise InvalidIntervalError(f"Reference span must be a number, got {number!r}")
    if not math.isfinite(number) or number <= 0:
        raise InvalidIntervalError(f"Reference span must be positive and finite, got {number}")

    if number > FINE_LADDER_LIMIT:
        for limit, interval in COARSE_LADDER:
            if number <= limit:
                return interval
        return COARSE_LADDER_MAX

    value = _to_decimal(number)
    fac = Decimal(1)
    while value > 1:
        fac *= _TEN
        value /= _TEN
    while value <= _LADDER[0]:
        fac /= _TEN
        value *= _TEN

    if value == _LADDER[0]:
        step = _LADDER[0]
    elif value <= _LADDER[1]:
        step = _LADDER[1]
    elif value <= _LADDER[2]:
        step = _LADDER[2]
    else:
        step = _LADDER[3]

    interval = round_half_up(step * fac, INTERVAL_PRECISION)
    if interval <= 0:
        raise InvalidIntervalError(
            f"Reference span {number} is below the {INTERVAL_PRECISION}-digit interval precision"
        )
    return interval


def reference_span(host, bounds: Bounds, zoom: float, pixels: int = REFERENCE_SPAN_PX) -> float:
    """
    Measure the map-unit width of ``2 * pixels`` screen pixels.

    The bounds centre is projected to pixel space at ``zoom``, offset by
    ``pixels`` in both directions along x and unprojected again.

    Args:
        host: Object providing ``project``/``unproject`` (see MapHost)
        bounds: Current viewport
        zoom: Current zoom
        pixels: Offset either side of the centre

    Returns:
        Absolute x distance, rounded to 4 decimal places
    """
    center = host.project(bounds.center, zoom)
    plus = host.unproject(center + Point(pixels, 0), zoom).x
    minus = host.unproject(center + Point(-pixels, 0), zoom).x
    return round_half_up(abs(plus - minus), INTERVAL_PRECISION)


def select_interval(zoom: float, span: Optional[Number] = None) -> float:
    """
    Choose the grid interval for a zoom level.

    Zoom 0 always shows the coarsest grid and zoom 18 or deeper the finest.
    Anything in between is derived from the measured reference span.

    Raises:
        InvalidIntervalError: If zoom is not finite, or a span is required
            and missing or invalid
    """
    if not math.isfinite(zoom):
        raise InvalidIntervalError(f"Zoom must be finite, got {zoom}")
    if zoom == 0:
        interval = COARSEST_INTERVAL
    elif zoom >= MAX_DETAIL_ZOOM:
        interval = FINEST_INTERVAL
    elif span is None:
        raise InvalidIntervalError(f"A reference span is required at zoom {zoom}")
    else:
        interval = round_for_interval(span)
    logger.debug(f"Selected interval {interval} (zoom={zoom}, span={span})")
    return interval


def compute_interval(
    host,
    bounds: Bounds,
    zoom: float,
    pixels: int = REFERENCE_SPAN_PX
) -> float:
    """Select the interval for the host's current view."""
    span = None
    if math.isfinite(zoom) and zoom != 0 and zoom < MAX_DETAIL_ZOOM:
        span = reference_span(host, bounds, zoom, pixels)
    return select_interval(zoom, span)
