"""
Host renderer integration.

The graticule never draws by itself. It asks a host for the current view,
converts between map units and pixels through it, subscribes to its view
change events, and hands it line and label primitives to display. Any object
implementing ``MapHost`` can host the overlay; ``AxesMapHost`` adapts a
Matplotlib Axes with a planar data space.

Zoom follows the simple planar CRS convention: at zoom ``z`` one map unit
spans ``2 ** z`` pixels, and pixel y grows downwards.
"""

import logging
import math
from typing import Any, Callable, Dict, List, Protocol, Tuple, runtime_checkable

import matplotlib.pyplot as plt
from matplotlib.backend_bases import TimerBase
from matplotlib.lines import Line2D
from matplotlib.text import Text

from .config import LabelStyle, LineStyle
from .constants import (
    LABEL_HORIZONTAL,
    LABEL_VERTICAL,
    LABEL_ZORDER,
    LINE_ZORDER,
)
from .exceptions import InvalidParameterError
from .geometry import Bounds, Point
from .lines import GridLabel, GridLine

logger = logging.getLogger("simple_graticule.host")

# Overlay event name -> Axes callback signals. A pan emits both limit signals;
# CoalescedCallback folds them into one overlay callback.
AXES_EVENTS = {
    "move": ("xlim_changed", "ylim_changed"),
}

# Overlay event name -> canvas events
CANVAS_EVENTS = {
    "viewreset": ("resize_event",),
    "resize": ("resize_event",),
    "moveend": ("button_release_event", "scroll_event"),
    "zoomend": ("button_release_event", "scroll_event"),
}

# Text anchoring per label axis: (horizontal alignment, vertical alignment)
LABEL_ANCHORS = {
    LABEL_HORIZONTAL: ("center", "top"),
    LABEL_VERTICAL: ("left", "center"),
}
ORIGIN_ANCHOR = ("left", "bottom")


@runtime_checkable
class MapHost(Protocol):
    """Capabilities the graticule overlay needs from a map renderer."""

    def get_bounds(self) -> Bounds: ...

    def get_zoom(self) -> float: ...

    def project(self, point: Point, zoom: float) -> Point: ...

    def unproject(self, point: Point, zoom: float) -> Point: ...

    def on(self, event: str, callback: Callable[[], None]) -> None: ...

    def off(self, event: str, callback: Callable[[], None]) -> None: ...

    def add_primitive(self, primitive: Any) -> None: ...

    def remove_primitive(self, primitive: Any) -> None: ...

    def make_line(self, line: GridLine, style: LineStyle) -> Any: ...

    def make_label(self, label: GridLabel, style: LabelStyle) -> Any: ...

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def request_redraw(self) -> None: ...


def simple_scale(zoom: float) -> float:
    """Pixels per map unit at ``zoom``."""
    return 2.0 ** zoom


def simple_project(point: Point, zoom: float) -> Point:
    scale = simple_scale(zoom)
    return Point(point.x * scale, -point.y * scale)


def simple_unproject(point: Point, zoom: float) -> Point:
    scale = simple_scale(zoom)
    return Point(point.x / scale, -point.y / scale)


class TimerHandle:
    """Cancellable handle around a Matplotlib canvas timer."""

    def __init__(self, timer: TimerBase):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class CoalescedCallback:
    """
    Matplotlib callback that runs an overlay callback once per burst.

    A pan updates the x and y limits in two separate calls, each emitting
    its own signal. The first signal schedules the callback on the canvas
    event loop and later signals are dropped until it has run, so the grid
    is rebuilt once, against both new limits. Canvases without an event
    loop run the callback straight away.
    """

    def __init__(self, host: "AxesMapHost", callback: Callable[[], None]):
        self._host = host
        self._callback = callback
        self._pending = False
        self._handle = None

    def __call__(self, *_args) -> None:
        if self._pending:
            return
        self._pending = True
        handle = self._host.call_later(0, self._fire)
        if self._pending:
            self._handle = handle

    def _fire(self) -> None:
        self._pending = False
        self._handle = None
        self._callback()

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._pending = False
        self._handle = None


class AxesMapHost:
    """
    Host a graticule on a Matplotlib Axes.

    The x axis is the longitude-like axis and the y axis the latitude-like
    axis. Primitives are added with ``Axes.add_artist`` so they never change
    the data limits, which keeps autoscaling from reacting to the padded
    grid lines.

    Attributes:
        ax: The Axes being decorated
        zoom_snap: Zoom is rounded to a multiple of this value (0 disables)

    Example:
        >>> fig, ax = plt.subplots()
        >>> ax.set_xlim(-100, 100)
        >>> host = AxesMapHost(ax)
        >>> graticule = SimpleGraticule().attach(host)
    """

    def __init__(self, ax: plt.Axes, zoom_snap: float = 1.0):
        if zoom_snap < 0:
            raise InvalidParameterError(f"zoom_snap must be non-negative, got {zoom_snap}")
        self.ax = ax
        self.zoom_snap = zoom_snap
        self._connections: Dict[
            Tuple[str, Callable], Tuple[CoalescedCallback, List[Tuple[str, int]]]
        ] = {}

    # ------------------------------------------------------------------
    # View
    # ------------------------------------------------------------------

    def get_bounds(self) -> Bounds:
        x0, x1 = self.ax.get_xlim()
        y0, y1 = self.ax.get_ylim()
        return Bounds(
            south=min(y0, y1),
            west=min(x0, x1),
            north=max(y0, y1),
            east=max(x0, x1),
        )

    def get_zoom(self) -> float:
        """
        Zoom level implied by the Axes' pixel width and x range.

        Raises:
            InvalidParameterError: If the Axes has no width on screen or in
                data units
        """
        bounds = self.get_bounds()
        width_px = self.ax.get_window_extent().width
        if bounds.width <= 0 or width_px <= 0:
            raise InvalidParameterError(
                f"Cannot derive zoom from {width_px}px over {bounds.width} map units"
            )
        zoom = math.log2(width_px / bounds.width)
        if self.zoom_snap:
            zoom = math.floor(zoom / self.zoom_snap + 0.5) * self.zoom_snap
        return zoom

    def project(self, point: Point, zoom: float) -> Point:
        return simple_project(point, zoom)

    def unproject(self, point: Point, zoom: float) -> Point:
        return simple_unproject(point, zoom)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, event: str, callback: Callable[[], None]) -> None:
        if event not in AXES_EVENTS and event not in CANVAS_EVENTS:
            known = ", ".join(sorted(set(AXES_EVENTS) | set(CANVAS_EVENTS)))
            raise InvalidParameterError(f"Unknown redraw event '{event}'. Known events: {known}")

        if (event, callback) in self._connections:
            self.off(event, callback)

        handler = CoalescedCallback(self, callback)
        connections = []
        for signal in AXES_EVENTS.get(event, ()):
            connections.append(("axes", self.ax.callbacks.connect(signal, handler)))
        for signal in CANVAS_EVENTS.get(event, ()):
            connections.append(("canvas", self.ax.figure.canvas.mpl_connect(signal, handler)))
        self._connections[(event, callback)] = (handler, connections)
        logger.debug(f"Subscribed to '{event}' ({len(connections)} connection(s))")

    def off(self, event: str, callback: Callable[[], None]) -> None:
        handler, connections = self._connections.pop((event, callback), (None, []))
        if handler is not None:
            handler.cancel()
        for source, cid in connections:
            if source == "axes":
                self.ax.callbacks.disconnect(cid)
            else:
                self.ax.figure.canvas.mpl_disconnect(cid)
        logger.debug(f"Unsubscribed from '{event}'")

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def add_primitive(self, primitive: Any) -> None:
        self.ax.add_artist(primitive)

    def remove_primitive(self, primitive: Any) -> None:
        if primitive.axes is None:
            return
        primitive.remove()

    def make_line(self, line: GridLine, style: LineStyle) -> Line2D:
        artist = Line2D(
            [line.start.x, line.end.x],
            [line.start.y, line.end.y],
            color=style.color,
            alpha=style.opacity,
            linewidth=style.weight,
            linestyle='-' if style.stroke else 'None',
            zorder=LINE_ZORDER,
        )
        artist.set_gid(f"graticule-{line.axis}")
        if style.interactive:
            artist.set_picker(True)
        artist.set_in_layout(False)
        return artist

    def make_label(self, label: GridLabel, style: LabelStyle) -> Text:
        ha, va = LABEL_ANCHORS.get(label.axis, ORIGIN_ANCHOR)
        artist = Text(
            label.position.x,
            label.position.y,
            label.text,
            color=style.color,
            fontsize=style.font_size,
            ha=ha,
            va=va,
            zorder=LABEL_ZORDER,
            clip_on=True,
        )
        artist.set_gid(f"gridlabel-{label.axis}")
        if style.interactive:
            artist.set_picker(True)
        artist.set_in_layout(False)
        return artist

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """
        Run ``callback`` once after ``delay_ms`` on the canvas event loop.

        Canvases without an event loop (Agg, PDF, ...) only offer the
        inert base timer, so the callback runs immediately there.
        """
        timer = self.ax.figure.canvas.new_timer(interval=delay_ms)
        if type(timer) is TimerBase:
            callback()
            return TimerHandle(timer)
        timer.single_shot = True
        timer.add_callback(callback)
        timer.start()
        return TimerHandle(timer)

    def request_redraw(self) -> None:
        self.ax.figure.canvas.draw_idle()
