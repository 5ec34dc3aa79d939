"""Shared fixtures and configuration for SimpleGraticule tests."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import matplotlib
matplotlib.use("Agg")

import pytest

from simple_graticule.config import GraticuleConfig
from simple_graticule.geometry import Bounds, Point
from simple_graticule.host import simple_project, simple_unproject
from simple_graticule.logging_config import LOGGER_NAME, MODULE_LOGGERS


@dataclass
class FakePrimitive:
    """Stand-in for a host drawing object."""

    kind: str
    item: Any
    style: Any


@dataclass
class FakeTimer:
    delay_ms: int
    callback: Callable[[], None]
    cancelled: bool = False
    fired: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeHost:
    """
    In-memory MapHost using planar CRS math.

    Events fire only when a test calls ``fire``; timers run only when a test
    calls ``run_timers``.
    """

    bounds: Bounds
    zoom: float
    displayed: List[FakePrimitive] = field(default_factory=list)
    subscriptions: Dict[str, List[Callable[[], None]]] = field(default_factory=dict)
    timers: List[FakeTimer] = field(default_factory=list)
    bounds_reads: int = 0
    redraw_requests: int = 0

    def get_bounds(self) -> Bounds:
        self.bounds_reads += 1
        return self.bounds

    def get_zoom(self) -> float:
        return self.zoom

    def project(self, point: Point, zoom: float) -> Point:
        return simple_project(point, zoom)

    def unproject(self, point: Point, zoom: float) -> Point:
        return simple_unproject(point, zoom)

    def on(self, event: str, callback: Callable[[], None]) -> None:
        self.subscriptions.setdefault(event, []).append(callback)

    def off(self, event: str, callback: Callable[[], None]) -> None:
        callbacks = self.subscriptions.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)
        if not callbacks:
            self.subscriptions.pop(event, None)

    def add_primitive(self, primitive: FakePrimitive) -> None:
        self.displayed.append(primitive)

    def remove_primitive(self, primitive: FakePrimitive) -> None:
        self.displayed.remove(primitive)

    def make_line(self, line, style) -> FakePrimitive:
        return FakePrimitive("line", line, style)

    def make_label(self, label, style) -> FakePrimitive:
        return FakePrimitive("label", label, style)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay_ms, callback)
        self.timers.append(timer)
        return timer

    def request_redraw(self) -> None:
        self.redraw_requests += 1

    # Test helpers

    def fire(self, event: str) -> None:
        for callback in list(self.subscriptions.get(event, [])):
            callback()

    def run_timers(self) -> None:
        pending, self.timers = self.timers, []
        for timer in pending:
            if not timer.cancelled:
                timer.fired = True
                timer.callback()

    def set_view(self, bounds: Bounds = None, zoom: float = None) -> None:
        if bounds is not None:
            self.bounds = bounds
        if zoom is not None:
            self.zoom = zoom

    @property
    def lines(self) -> List[Any]:
        return [p.item for p in self.displayed if p.kind == "line"]

    @property
    def labels(self) -> List[Any]:
        return [p.item for p in self.displayed if p.kind == "label"]


@pytest.fixture
def square_bounds() -> Bounds:
    """A 20 x 10 viewport centred on the origin."""
    return Bounds(south=-5.0, west=-10.0, north=5.0, east=10.0)


@pytest.fixture
def fake_host(square_bounds: Bounds) -> FakeHost:
    """Host showing ``square_bounds`` at zoom 4 (interval 10)."""
    return FakeHost(bounds=square_bounds, zoom=4)


@pytest.fixture
def default_config() -> GraticuleConfig:
    return GraticuleConfig()


@pytest.fixture(autouse=True)
def _reset_package_logging():
    """Let caplog see package records and drop handlers bound to capture streams."""
    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.propagate = True
    yield
    package_logger.handlers.clear()
    package_logger.propagate = False
    package_logger.setLevel(logging.INFO)
    for name in MODULE_LOGGERS.values():
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def make_host() -> Callable[..., FakeHost]:
    """Factory for FakeHost instances with custom bounds and zoom."""
    return FakeHost
