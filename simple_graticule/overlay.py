"""
Graticule overlay lifecycle and redraw orchestration.

This module provides the SimpleGraticule class, which binds to a host map,
redraws on view changes, and owns every primitive it puts on the host.
"""

import logging
from dataclasses import asdict, replace
from enum import Enum
from typing import Any, List, Mapping, Optional, Union

from .config import GraticuleConfig
from .constants import VIEWRESET_EVENT
from .exceptions import GraticuleError, NotAttachedError
from .host import MapHost
from .interval import compute_interval
from .lines import GraticuleLayout, GridLabel, GridLine, build_layout

logger = logging.getLogger("simple_graticule.overlay")


class OverlayState(Enum):
    DETACHED = "detached"
    VISIBLE = "visible"
    HIDDEN = "hidden"


class SimpleGraticule:
    """
    Coordinate grid overlay for a planar map.

    On every view change the overlay discards all of its primitives and
    rebuilds them from the host's current bounds and zoom, so what is shown
    never lags behind the view.

    Lifecycle:
    1. ``attach(host)`` draws immediately and subscribes to "viewreset"
       plus the configured redraw event
    2. ``hide()``/``show()`` toggle drawing while staying subscribed
    3. ``detach()`` unsubscribes and removes every primitive

    Attributes:
        config: GraticuleConfig controlling events, labels and styling
        layout: Lines and labels of the last redraw (None before the first,
            and while hidden)

    Example:
        >>> from simple_graticule import SimpleGraticule, AxesMapHost
        >>> fig, ax = plt.subplots()
        >>> ax.set_xlim(-50, 50); ax.set_ylim(-40, 40)
        >>> graticule = SimpleGraticule(showOriginLabel=False)
        >>> graticule.attach(AxesMapHost(ax))
        >>> graticule.interval
        30.0
    """

    def __init__(
        self,
        config: Optional[Union[GraticuleConfig, Mapping[str, Any]]] = None,
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any
    ):
        """
        Initialize the overlay.

        Args:
            config: Configuration object, or an option bag in its place
                (default: built from options). The overlay keeps its own copy.
            options: Option bag, e.g. {"showOriginLabel": False, "redraw": "moveend"}
            **kwargs: Further options, merged over ``options``

        Raises:
            InvalidParameterError: If an option is unknown or invalid
        """
        if isinstance(config, Mapping):
            options = {**config, **(options or {})}
            config = None

        if config is None:
            config = GraticuleConfig.from_options(options, **kwargs)
        elif options or kwargs:
            merged = dict(options or {})
            merged.update(kwargs)
            config = GraticuleConfig.from_options({**asdict(config), **merged})
        else:
            config.validate()
            config = replace(config)
        self.config = config

        self.layout: Optional[GraticuleLayout] = None
        self._host: Optional[MapHost] = None
        self._primitives: List[Any] = []
        self._pending = None
        self._bound_events: List[str] = []

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def host(self) -> Optional[MapHost]:
        return self._host

    @property
    def hidden(self) -> bool:
        return self.config.hidden

    @property
    def state(self) -> OverlayState:
        if self._host is None:
            return OverlayState.DETACHED
        return OverlayState.HIDDEN if self.config.hidden else OverlayState.VISIBLE

    @property
    def interval(self) -> Optional[float]:
        return self.layout.interval if self.layout is not None else None

    @property
    def lines(self) -> List[GridLine]:
        return list(self.layout.lines) if self.layout is not None else []

    @property
    def labels(self) -> List[GridLabel]:
        return list(self.layout.labels) if self.layout is not None else []

    @property
    def primitives(self) -> List[Any]:
        """Host primitives currently displayed by the overlay."""
        return list(self._primitives)

    @property
    def events(self) -> List[str]:
        """Host events that trigger a redraw (those bound at attach time, once attached)."""
        if self._host is not None:
            return list(self._bound_events)
        events = [VIEWRESET_EVENT]
        if self.config.redraw_event != VIEWRESET_EVENT:
            events.append(self.config.redraw_event)
        return events

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def attach(self, host: MapHost) -> "SimpleGraticule":
        """
        Bind to a host, draw, and subscribe to its view change events.

        Attaching an overlay that is already attached first detaches it from
        its current host.
        """
        if self._host is not None:
            logger.warning("Graticule is already attached; detaching from previous host")
            self.detach()

        events = self.events
        self._host = host
        self._bound_events = events
        logger.info(f"Attaching graticule (events={events}, hidden={self.config.hidden})")
        try:
            self.redraw()
            for event in events:
                host.on(event, self._on_view_change)
        except Exception:
            # Leave the host as it was before attach().
            logger.error("Attaching graticule failed; rolling back")
            for event in events:
                host.off(event, self._on_view_change)
            self._clear(host)
            self._host = None
            self._bound_events = []
            self.layout = None
            raise
        return self

    def detach(self, host: Optional[MapHost] = None) -> "SimpleGraticule":
        """
        Unsubscribe from the host and remove every owned primitive.

        Args:
            host: Optional host the caller believes the overlay is bound
                to; a mismatch is logged and the bound host is detached
        """
        current = self._host
        if current is None:
            logger.debug("Graticule is not attached; nothing to detach")
            return self
        if host is not None and host is not current:
            logger.warning("detach() called with a different host than the one attached")

        for event in self._bound_events:
            current.off(event, self._on_view_change)
        self._cancel_pending()
        self._clear(current)
        current.request_redraw()
        self._host = None
        self._bound_events = []
        self.layout = None
        logger.info("Detached graticule")
        return self

    def hide(self) -> "SimpleGraticule":
        self.config.hidden = True
        logger.info("Hiding graticule")
        if self._host is not None:
            self.redraw()
        return self

    def show(self) -> "SimpleGraticule":
        self.config.hidden = False
        logger.info("Showing graticule")
        if self._host is not None:
            self.redraw()
        return self

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def redraw(self) -> "SimpleGraticule":
        """
        Replace all primitives with a fresh grid for the current view.

        Returns:
            Self for method chaining

        Raises:
            NotAttachedError: If the overlay has no host
            GraticuleError: If the host view cannot produce a grid; the
                previous primitives have already been cleared
        """
        host = self._host
        if host is None:
            raise NotAttachedError("Graticule must be attached to a host before redrawing")

        self._cancel_pending()
        self._clear(host)
        self.layout = None

        if self.config.hidden:
            host.request_redraw()
            return self

        bounds = host.get_bounds()
        zoom = host.get_zoom()
        interval = compute_interval(host, bounds, zoom, self.config.reference_span_px)
        layout = build_layout(
            bounds,
            interval,
            show_origin_label=self.config.show_origin_label,
            line_padding=self.config.line_padding,
            label_padding=self.config.label_padding,
            align_latitude=self.config.align_latitude,
        )

        line_style = self.config.line_style()
        label_style = self.config.label_style()
        for line in layout.lines:
            self._add(host, host.make_line(line, line_style))
        for label in layout.labels:
            self._add(host, host.make_label(label, label_style))

        self.layout = layout
        host.request_redraw()
        logger.debug(
            f"Redrew graticule: zoom={zoom}, interval={interval}, "
            f"lines={len(layout.lines)}, labels={len(layout.labels)}"
        )
        return self

    def _add(self, host: MapHost, primitive: Any) -> None:
        host.add_primitive(primitive)
        self._primitives.append(primitive)

    def _clear(self, host: MapHost) -> None:
        for primitive in self._primitives:
            host.remove_primitive(primitive)
        self._primitives = []

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _on_view_change(self) -> None:
        if self._host is None:
            return
        if self.config.debounce_ms > 0:
            self._cancel_pending()
            self._pending = self._host.call_later(self.config.debounce_ms, self._redraw_from_event)
        else:
            self._redraw_from_event()

    def _redraw_from_event(self) -> None:
        self._pending = None
        if self._host is None:
            return
        try:
            self.redraw()
        except GraticuleError as e:
            logger.error(f"Graticule redraw failed: {e}")

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
