"""
Interactive Graticule Example

This example demonstrates how to decorate a planar map image with a
graticule that follows panning and zooming. The image is placed in map units
the same way a tiled planar map would be: x grows to the right and y grows
upwards, with the image occupying [0, 1024] x [-768, 0].

Use the toolbar's pan/zoom tools; the grid interval changes as the zoom
level crosses each step of the ladder. Press "h" to toggle the grid.

Output: An interactive Matplotlib window.
"""

import logging

import matplotlib.pyplot as plt
import numpy as np

from simple_graticule import add_graticule, setup_logging


setup_logging(verbosity=1)
logger = logging.getLogger("simple_graticule.examples")

# ============================================================================
# Synthetic planar "map"
# ============================================================================

x = np.linspace(0, 8 * np.pi, 1024)
y = np.linspace(0, 6 * np.pi, 768)
xx, yy = np.meshgrid(x, y)
terrain = np.sin(xx) * np.cos(yy) + 0.3 * np.sin(0.3 * xx * yy / np.pi)

fig, ax = plt.subplots(figsize=(10, 7.5))
ax.imshow(terrain, extent=(0, 1024, -768, 0), cmap="terrain", origin="upper")
ax.set_aspect("equal")
ax.set_title("Planar map with graticule (pan/zoom to redraw, 'h' toggles)")

# ============================================================================
# Graticule
# ============================================================================

# Collapse the burst of limit changes produced while dragging.
graticule = add_graticule(ax, redraw="move", debounce_ms=40)
logger.info(f"Initial interval: {graticule.interval}")


def _toggle(event):
    if event.key != "h":
        return
    if graticule.hidden:
        graticule.show()
    else:
        graticule.hide()


fig.canvas.mpl_connect("key_press_event", _toggle)

plt.show()
