"""
SimpleGraticule - Coordinate grid overlay for planar maps.

This package draws a graticule (grid lines plus coordinate labels) over a map
rendered in a simple planar coordinate system. The overlay listens to the
host's view changes, picks a human-friendly grid interval for the current
zoom, and replaces its lines and labels on every redraw.

Quick Start:
    >>> import matplotlib.pyplot as plt
    >>> from simple_graticule import add_graticule
    >>>
    >>> fig, ax = plt.subplots()
    >>> ax.set_xlim(0, 1024); ax.set_ylim(-768, 0)
    >>> graticule = add_graticule(ax)
    >>> plt.show()

    >>> # Render a preview image without an interactive figure
    >>> from simple_graticule import render_graticule
    >>> render_graticule([-180, 180, -90, 90], "world_grid.png")

Advanced Usage:
    >>> # Any object implementing MapHost can host the overlay
    >>> from simple_graticule import SimpleGraticule, GraticuleConfig
    >>>
    >>> config = GraticuleConfig(show_origin_label=False, debounce_ms=50)
    >>> graticule = SimpleGraticule(config).attach(my_host)
    >>> graticule.hide()
    >>> graticule.show()
    >>> graticule.detach()
"""

__version__ = "0.1.0"

# Initialize logging with default settings
from .logging_config import setup_logging
setup_logging()

# Configuration
from .config import GraticuleConfig, LineStyle, LabelStyle

# Geometry and generation
from .geometry import Bounds, Point
from .interval import round_half_up, round_for_interval, select_interval, compute_interval
from .lines import GraticuleLayout, GridLine, GridLabel, build_layout

# Host integration
from .host import MapHost, AxesMapHost

# Overlay
from .overlay import SimpleGraticule, OverlayState

# User-facing API
from .api import add_graticule, render_graticule

# Exceptions
from .exceptions import (
    GraticuleError,
    InvalidParameterError,
    InvalidIntervalError,
    NotAttachedError,
    RenderError
)

__all__ = [
    # Version info
    "__version__",
    "setup_logging",

    # Configuration
    "GraticuleConfig",
    "LineStyle",
    "LabelStyle",

    # Geometry and generation
    "Bounds",
    "Point",
    "round_half_up",
    "round_for_interval",
    "select_interval",
    "compute_interval",
    "GraticuleLayout",
    "GridLine",
    "GridLabel",
    "build_layout",

    # Host and overlay
    "MapHost",
    "AxesMapHost",
    "SimpleGraticule",
    "OverlayState",

    # User-facing API
    "add_graticule",
    "render_graticule",

    # Exceptions
    "GraticuleError",
    "InvalidParameterError",
    "InvalidIntervalError",
    "NotAttachedError",
    "RenderError",
]
