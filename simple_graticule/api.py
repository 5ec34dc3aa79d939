"""
Main API module for SimpleGraticule package.

This module provides simplified user-facing functions that hide the host
adapter. ``add_graticule()`` decorates an existing Matplotlib Axes, and
``render_graticule()`` draws a standalone preview of the grid for a viewport
and writes it to an image file.

Example:
    >>> import matplotlib.pyplot as plt
    >>> from simple_graticule import add_graticule
    >>>
    >>> fig, ax = plt.subplots()
    >>> ax.imshow(image, extent=(0, 1024, -768, 0))
    >>> graticule = add_graticule(ax, showOriginLabel=False)
    >>> plt.show()  # panning and zooming redraws the grid
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
import matplotlib.pyplot as plt

from .config import GraticuleConfig
from .exceptions import GraticuleError, InvalidParameterError, RenderError
from .geometry import Bounds
from .host import AxesMapHost
from .overlay import SimpleGraticule

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "white"


def add_graticule(
    ax: plt.Axes,
    config: Optional[GraticuleConfig] = None,
    zoom_snap: float = 1.0,
    **options: Any
) -> SimpleGraticule:
    """
    Attach a graticule to a Matplotlib Axes.

    Args:
        ax: Axes whose data space is the planar map
        config: Configuration object (default: built from options)
        zoom_snap: Zoom rounding step passed to AxesMapHost
        **options: Option bag entries, e.g. showOriginLabel=False

    Returns:
        The attached SimpleGraticule

    Example:
        >>> graticule = add_graticule(ax, redraw="moveend", debounce_ms=50)
        >>> graticule.hide()
    """
    graticule = SimpleGraticule(config=config, **options)
    return graticule.attach(AxesMapHost(ax, zoom_snap=zoom_snap))


def render_graticule(
    bounds: Union[Bounds, list, tuple],
    output_path: Union[str, Path],
    width_px: int = 800,
    height_px: int = 600,
    dpi: int = 100,
    config: Optional[GraticuleConfig] = None,
    background_color: str = DEFAULT_BACKGROUND,
    zoom_snap: float = 1.0
) -> Path:
    """
    Render the graticule for a viewport to an image file.

    Args:
        bounds: Viewport as Bounds or [west, east, south, north]
        output_path: Destination image path (format from suffix)
        width_px: Image width in pixels
        height_px: Image height in pixels
        dpi: Output resolution
        config: Graticule configuration (default: GraticuleConfig())
        background_color: Figure background (any Matplotlib color spec)
        zoom_snap: Zoom rounding step passed to AxesMapHost

    Returns:
        Path to the written image

    Raises:
        InvalidParameterError: If bounds or image size are invalid
        RenderError: If drawing or saving fails

    Example:
        >>> render_graticule([-10, 10, -7.5, 7.5], "grid.png")
        PosixPath('grid.png')
    """
    if not isinstance(bounds, Bounds):
        if len(bounds) != 4:
            raise InvalidParameterError("bounds must be [west, east, south, north]")
        bounds = Bounds.from_extent(bounds)
    if bounds.is_degenerate or bounds.width == 0 or bounds.height == 0:
        raise InvalidParameterError(f"Cannot render degenerate bounds {bounds}")
    if width_px <= 0 or height_px <= 0 or dpi <= 0:
        raise InvalidParameterError("width_px, height_px and dpi must be positive")

    output_path = Path(output_path)
    logger.info(
        f"Rendering graticule preview {width_px}x{height_px}px "
        f"for extent {bounds.to_extent()} -> {output_path}"
    )

    # Previews are always rendered off-screen.
    fig = Figure(figsize=(width_px / dpi, height_px / dpi), dpi=dpi)
    try:
        FigureCanvasAgg(fig)
        fig.patch.set_facecolor(background_color)
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_facecolor(background_color)
        ax.set_xlim(bounds.west, bounds.east)
        ax.set_ylim(bounds.south, bounds.north)
        ax.set_axis_off()

        graticule = add_graticule(ax, config=config, zoom_snap=zoom_snap)
        logger.debug(
            f"Preview interval={graticule.interval}, "
            f"lines={len(graticule.lines)}, labels={len(graticule.labels)}"
        )

        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, dpi=dpi, facecolor=fig.get_facecolor())
    except GraticuleError:
        raise
    except (OSError, ValueError, RuntimeError) as e:
        raise RenderError(f"Failed to render graticule to {output_path}: {e}") from e

    logger.info(f"Graticule preview saved to {output_path}")
    return output_path
