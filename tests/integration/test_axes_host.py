"""Integration tests driving the overlay through a real Matplotlib Axes (Agg)."""

import math

import pytest
from matplotlib.backend_bases import TimerBase
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.text import Text

from simple_graticule import (
    AxesMapHost,
    GraticuleConfig,
    InvalidParameterError,
    MapHost,
    SimpleGraticule,
    add_graticule,
    render_graticule,
)
from simple_graticule.config import LabelStyle, LineStyle
from simple_graticule.geometry import Bounds, Point
from simple_graticule.lines import GridLabel, GridLine


@pytest.fixture
def ax():
    """800 x 600 px Axes filling an Agg figure, one map unit per pixel."""
    fig = Figure(figsize=(8, 6), dpi=100)
    FigureCanvasAgg(fig)
    axes = fig.add_axes([0, 0, 1, 1])
    axes.set_xlim(-400, 400)
    axes.set_ylim(-300, 300)
    return axes


class ManualTimer(TimerBase):
    """Canvas timer that only fires when a test says so."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.running = False

    def _timer_start(self):
        self.running = True

    def _timer_stop(self):
        self.running = False

    def fire(self):
        if self.running:
            self.running = False
            self._on_timer()


@pytest.fixture
def event_loop_timers(ax, monkeypatch):
    """Give the Agg canvas timers that behave like a GUI event loop."""
    timers = []

    def new_timer(interval=None, callbacks=None):
        timer = ManualTimer(interval=interval, callbacks=callbacks)
        timers.append(timer)
        return timer

    monkeypatch.setattr(ax.figure.canvas, "new_timer", new_timer)
    return timers


def run_timers(timers):
    for timer in list(timers):
        timer.fire()


def grid_lines(ax):
    return [a for a in ax.get_children()
            if isinstance(a, Line2D) and (a.get_gid() or "").startswith("graticule-")]


def grid_labels(ax):
    return [a for a in ax.get_children()
            if isinstance(a, Text) and (a.get_gid() or "").startswith("gridlabel-")]


class TestAxesMapHost:
    """Test the Matplotlib host adapter on its own."""

    def test_satisfies_protocol(self, ax):
        assert isinstance(AxesMapHost(ax), MapHost)

    def test_bounds_from_limits(self, ax):
        ax.set_ylim(300, -300)
        assert AxesMapHost(ax).get_bounds() == Bounds(
            south=-300.0, west=-400.0, north=300.0, east=400.0
        )

    def test_zoom_from_pixel_width(self, ax):
        host = AxesMapHost(ax)
        assert host.get_zoom() == 0
        ax.set_xlim(0, 100)
        assert host.get_zoom() == 3

    def test_zoom_snap(self, ax):
        ax.set_xlim(0, 300)
        assert AxesMapHost(ax).get_zoom() == 1.0
        assert AxesMapHost(ax, zoom_snap=0.5).get_zoom() == 1.5
        assert AxesMapHost(ax, zoom_snap=0).get_zoom() == pytest.approx(math.log2(800 / 300))

    def test_negative_zoom_snap_rejected(self, ax):
        with pytest.raises(InvalidParameterError):
            AxesMapHost(ax, zoom_snap=-1)

    def test_project_round_trip(self, ax):
        host = AxesMapHost(ax)
        projected = host.project(Point(1.5, 2.0), 3)
        assert projected == Point(12.0, -16.0)
        assert host.unproject(projected, 3) == Point(1.5, 2.0)

    def test_unknown_event_rejected(self, ax):
        with pytest.raises(InvalidParameterError, match="Unknown redraw event"):
            AxesMapHost(ax).on("click", lambda: None)

    def test_move_callback_fires_on_limit_change(self, ax):
        host = AxesMapHost(ax)
        calls = []
        host.on("move", lambda: calls.append(1))

        ax.set_xlim(-10, 10)
        assert len(calls) == 1
        ax.set_ylim(-5, 5)
        assert len(calls) == 2

    def test_off_disconnects(self, ax):
        host = AxesMapHost(ax)
        calls = []

        def callback():
            calls.append(1)

        host.on("move", callback)
        host.off("move", callback)
        ax.set_xlim(-10, 10)
        assert calls == []

    def test_call_later_runs_immediately_without_event_loop(self, ax):
        calls = []
        handle = AxesMapHost(ax).call_later(50, lambda: calls.append(1))
        assert calls == [1]
        handle.cancel()

    def test_primitives_not_pickable_by_default(self, ax):
        add_graticule(ax)
        assert all(a.get_picker() is None for a in grid_lines(ax) + grid_labels(ax))

    def test_interactive_styles_are_pickable(self, ax):
        host = AxesMapHost(ax)
        line = host.make_line(
            GridLine(start=Point(0.0, -1.0), end=Point(0.0, 1.0), axis="longitude", value=0.0),
            LineStyle(interactive=True),
        )
        label = host.make_label(
            GridLabel(position=Point(0.0, 1.0), text="0", axis="horizontal"),
            LabelStyle(interactive=True),
        )
        assert line.get_picker() is True
        assert label.get_picker() is True


class TestEventCoalescing:
    """Test folding the x and y limit signals of one pan into one callback."""

    def test_pan_fires_once_with_final_limits(self, ax, event_loop_timers):
        host = AxesMapHost(ax)
        seen = []
        host.on("move", lambda: seen.append((ax.get_xlim(), ax.get_ylim())))

        ax.set_xlim(-10, 10)
        ax.set_ylim(-5, 5)
        assert seen == []

        run_timers(event_loop_timers)
        assert seen == [((-10.0, 10.0), (-5.0, 5.0))]

    def test_next_pan_fires_again(self, ax, event_loop_timers):
        host = AxesMapHost(ax)
        seen = []
        host.on("move", lambda: seen.append(1))

        ax.set_xlim(-10, 10)
        run_timers(event_loop_timers)
        ax.set_xlim(-20, 20)
        run_timers(event_loop_timers)
        assert seen == [1, 1]

    def test_off_cancels_scheduled_callback(self, ax, event_loop_timers):
        host = AxesMapHost(ax)
        seen = []

        def callback():
            seen.append(1)

        host.on("move", callback)
        ax.set_xlim(-10, 10)
        host.off("move", callback)
        run_timers(event_loop_timers)
        assert seen == []

    def test_overlay_rebuilt_once_per_pan(self, ax, event_loop_timers):
        graticule = add_graticule(ax)
        first_layout = graticule.layout

        ax.set_xlim(0, 100)
        ax.set_ylim(-40, 40)
        assert graticule.layout is first_layout

        run_timers(event_loop_timers)
        assert graticule.interval == 30.0
        assert graticule.layout.bounds == Bounds(south=-40.0, west=0.0, north=40.0, east=100.0)
        assert len(grid_lines(ax)) == len(graticule.lines)


class TestOverlayOnAxes:
    """Test the full overlay lifecycle on a Matplotlib Axes."""

    def test_world_view(self, ax):
        graticule = add_graticule(ax)

        assert graticule.interval == 90.0
        assert len(grid_lines(ax)) == 7
        assert len(grid_labels(ax)) == 8
        assert "[0,0]" in [t.get_text() for t in grid_labels(ax)]

    def test_pan_and_zoom_redraws(self, ax):
        graticule = add_graticule(ax)
        ax.set_xlim(0, 100)

        assert graticule.interval == 30.0
        assert len(grid_lines(ax)) == len(graticule.lines)
        assert len(grid_labels(ax)) == len(graticule.labels)

    def test_limits_unchanged_by_overlay(self, ax):
        add_graticule(ax)
        assert ax.get_xlim() == (-400.0, 400.0)
        assert ax.get_ylim() == (-300.0, 300.0)

    def test_line_style(self, ax):
        add_graticule(ax, showOriginLabel=False)
        for line in grid_lines(ax):
            assert line.get_alpha() == 0.6
            assert line.get_linewidth() == 1.0
            assert line.get_zorder() == 50

    def test_hide_and_show(self, ax):
        graticule = add_graticule(ax)
        graticule.hide()
        assert grid_lines(ax) == []
        assert grid_labels(ax) == []

        graticule.show()
        assert len(grid_lines(ax)) == 7

    def test_detach_removes_artists_and_disconnects(self, ax):
        graticule = add_graticule(ax)
        graticule.detach()

        assert grid_lines(ax) == []
        ax.set_xlim(0, 100)
        assert grid_lines(ax) == []
        assert graticule.host is None

    def test_unknown_redraw_event_rolls_back(self, ax):
        graticule = SimpleGraticule(redraw="click")
        with pytest.raises(InvalidParameterError):
            graticule.attach(AxesMapHost(ax))

        assert graticule.host is None
        assert grid_lines(ax) == []
        ax.set_xlim(0, 100)
        assert grid_lines(ax) == []

    def test_draws_after_figure_render(self, ax):
        graticule = add_graticule(ax, config=GraticuleConfig(debounce_ms=20))
        ax.figure.canvas.draw()
        ax.set_xlim(0, 100)
        assert graticule.interval == 30.0


class TestRenderGraticule:

    def test_writes_png(self, tmp_path):
        output = render_graticule([-10, 10, -7.5, 7.5], tmp_path / "out" / "grid.png")
        assert output.exists()
        assert output.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"

    def test_accepts_bounds_and_config(self, tmp_path):
        output = render_graticule(
            Bounds(south=-5.0, west=-10.0, north=5.0, east=10.0),
            tmp_path / "grid.svg",
            config=GraticuleConfig(show_origin_label=False, line_color="tab:blue"),
        )
        assert "graticule-longitude" in output.read_text()

    @pytest.mark.parametrize("bounds", [[1, 2, 3], [10, -10, -5, 5], [0, 0, -5, 5]])
    def test_rejects_bad_bounds(self, tmp_path, bounds):
        with pytest.raises(InvalidParameterError):
            render_graticule(bounds, tmp_path / "grid.png")

    def test_rejects_bad_size(self, tmp_path):
        with pytest.raises(InvalidParameterError):
            render_graticule([-10, 10, -5, 5], tmp_path / "grid.png", width_px=0)
