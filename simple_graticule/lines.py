"""
Grid line and label generation.

This module turns a viewport and an interval into the lines and labels of
one graticule frame. It is pure: nothing here touches the host renderer, so
a layout can be built, inspected and compared without a figure.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .constants import (
    AXIS_LATITUDE,
    AXIS_LONGITUDE,
    DEGREE_SUFFIX,
    INTERVAL_PRECISION,
    LABEL_HORIZONTAL,
    LABEL_ORIGIN,
    LABEL_PADDING,
    LABEL_PRECISION,
    LABEL_VERTICAL,
    LINE_PADDING,
    MAX_LATITUDE,
    MAX_LINES_PER_AXIS,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
    ORIGIN_LABEL_TEXT,
)
from .exceptions import InvalidIntervalError
from .geometry import Bounds, Point
from .interval import round_half_up

logger = logging.getLogger("simple_graticule.lines")

# Relative slack on the inclusive end of a run of positions.
END_TOLERANCE = 1e-9


@dataclass(frozen=True)
class GridLine:
    """A single grid line between two map positions."""

    start: Point
    end: Point
    axis: str
    value: float


@dataclass(frozen=True)
class GridLabel:
    """A text label anchored at a map position."""

    position: Point
    text: str
    axis: str
    value: Optional[float] = None


@dataclass
class GraticuleLayout:
    """Lines and labels for one redraw, with the inputs used to build them."""

    interval: float
    bounds: Bounds
    lines: List[GridLine] = field(default_factory=list)
    labels: List[GridLabel] = field(default_factory=list)

    @property
    def longitudes(self) -> List[float]:
        return [line.value for line in self.lines if line.axis == AXIS_LONGITUDE]

    @property
    def latitudes(self) -> List[float]:
        return [line.value for line in self.lines if line.axis == AXIS_LATITUDE]

    @property
    def label_texts(self) -> List[str]:
        return [label.text for label in self.labels]


def _check_interval(interval: float) -> None:
    if isinstance(interval, bool) or not isinstance(interval, (int, float)):
        raise InvalidIntervalError(f"Interval must be a number, got {interval!r}")
    if not math.isfinite(interval) or interval <= 0:
        raise InvalidIntervalError(f"Interval must be positive and finite, got {interval}")


def grid_positions(start: float, stop: float, interval: float) -> List[float]:
    """
    Positions ``start + k * interval`` up to and including ``stop``.

    Positions are computed from the index rather than accumulated, so the
    same inputs always give bit-identical values.

    Args:
        start: First position
        stop: Inclusive upper limit
        interval: Spacing between positions

    Returns:
        Ascending positions; empty when ``start`` lies beyond ``stop``

    Raises:
        InvalidIntervalError: If interval is not positive and finite, or the
            run would exceed MAX_LINES_PER_AXIS positions

    Example:
        >>> grid_positions(-10.0, 10.0, 5)
        [-10.0, -5.0, 0.0, 5.0, 10.0]
    """
    _check_interval(interval)
    if not (math.isfinite(start) and math.isfinite(stop)):
        return []

    tolerance = interval * END_TOLERANCE
    if start > stop + tolerance:
        return []

    count = math.floor((stop - start + tolerance) / interval) + 1
    if count > MAX_LINES_PER_AXIS:
        raise InvalidIntervalError(
            f"Interval {interval} over [{start}, {stop}] would produce {count} lines "
            f"(limit {MAX_LINES_PER_AXIS})"
        )

    values = start + np.arange(count, dtype=float) * interval
    return values.tolist()


def aligned_start(edge: float, interval: float) -> float:
    """First multiple of ``interval`` at or above ``edge``."""
    return math.ceil(round_half_up(edge / interval, INTERVAL_PRECISION)) * interval


def longitude_positions(bounds: Bounds, interval: float) -> List[float]:
    """Vertical line positions across the view, clamped to [-180, 180]."""
    _check_interval(interval)
    view = bounds.clamp(MIN_LONGITUDE, MAX_LONGITUDE, MIN_LATITUDE, MAX_LATITUDE)
    if not math.isfinite(view.west):
        return []
    return grid_positions(aligned_start(view.west, interval), view.east, interval)


def latitude_positions(bounds: Bounds, interval: float, align: bool = False) -> List[float]:
    """
    Horizontal line positions across the view, clamped to [-85, 85].

    Without ``align`` the run starts at the clamped south edge itself, so
    latitude lines follow the view rather than round values.
    """
    _check_interval(interval)
    view = bounds.clamp(MIN_LONGITUDE, MAX_LONGITUDE, MIN_LATITUDE, MAX_LATITUDE)
    if not math.isfinite(view.south):
        return []
    logger.debug(f"Latitude range: south={view.south}, north={view.north}")
    start = aligned_start(view.south, interval) if align else view.south
    return grid_positions(start, view.north, interval)


def format_coordinate(value: float) -> str:
    """
    Shortest positional text for a coordinate.

    Whole numbers drop the fractional part and negative zero prints as 0.

    Example:
        >>> format_coordinate(5.0)
        '5'
        >>> format_coordinate(-2.5)
        '-2.5'
    """
    if value == 0:
        return "0"
    return np.format_float_positional(float(value), trim='-')


def label_text(value: float) -> str:
    return f"{format_coordinate(value)}{DEGREE_SUFFIX}"


def origin_label() -> GridLabel:
    return GridLabel(position=Point(0.0, 0.0), text=ORIGIN_LABEL_TEXT, axis=LABEL_ORIGIN)


def build_layout(
    bounds: Bounds,
    interval: float,
    *,
    show_origin_label: bool = True,
    line_padding: float = LINE_PADDING,
    label_padding: float = LABEL_PADDING,
    align_latitude: bool = False
) -> GraticuleLayout:
    """
    Build every line and label for a viewport.

    Lines span the viewport padded outward by ``line_padding`` so panning
    does not reveal their ends. Labels sit on the north edge (longitude) and
    west edge (latitude) of the viewport padded by ``label_padding``.

    Args:
        bounds: Current viewport
        interval: Grid spacing on both axes
        show_origin_label: Add the "[0,0]" label at the origin
        line_padding: Outward padding ratio for line extents
        label_padding: Padding ratio for label placement (negative insets)
        align_latitude: Snap the first latitude to a multiple of interval

    Returns:
        GraticuleLayout for the viewport

    Raises:
        InvalidIntervalError: If interval is not positive and finite
    """
    _check_interval(interval)
    layout = GraticuleLayout(interval=interval, bounds=bounds)

    if bounds.is_degenerate:
        logger.warning(f"Skipping grid lines for degenerate bounds {bounds}")
    else:
        line_bounds = bounds.pad(line_padding)
        label_bounds = bounds.pad(label_padding)

        for x in longitude_positions(bounds, interval):
            layout.lines.append(GridLine(
                start=Point(x, line_bounds.south),
                end=Point(x, line_bounds.north),
                axis=AXIS_LONGITUDE,
                value=x,
            ))
            shown = round_half_up(x, LABEL_PRECISION)
            layout.labels.append(GridLabel(
                position=Point(x, label_bounds.north),
                text=label_text(shown),
                axis=LABEL_HORIZONTAL,
                value=shown,
            ))

        for y in latitude_positions(bounds, interval, align=align_latitude):
            layout.lines.append(GridLine(
                start=Point(line_bounds.west, y),
                end=Point(line_bounds.east, y),
                axis=AXIS_LATITUDE,
                value=y,
            ))
            layout.labels.append(GridLabel(
                position=Point(label_bounds.west, y),
                text=label_text(y),
                axis=LABEL_VERTICAL,
                value=y,
            ))

    if show_origin_label:
        layout.labels.append(origin_label())

    return layout
