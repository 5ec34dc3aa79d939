"""
Zoom Sequence Example

This example renders the same planar viewport centre at a series of zoom
levels and prints the interval chosen at each one, writing one preview
image per zoom. It is a quick way to see the interval ladder in action:
90 at zoom 0, then 30/45/60 for coarse views and {0.1, 0.2, 0.5} x 10^k as
the view narrows.

Output: PNG previews in ./output/zoom_sequence/
"""

import logging
from pathlib import Path

from simple_graticule import Bounds, GraticuleConfig, render_graticule
from simple_graticule.exceptions import GraticuleError


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

WIDTH_PX = 800
HEIGHT_PX = 600
CENTER = (12.5, -3.75)
OUTPUT_DIR = Path("./output/zoom_sequence")

config = GraticuleConfig(show_origin_label=True, align_latitude=True)

print("Zoom  Width (map units)  Output")
print("=" * 60)

for zoom in range(0, 19, 2):
    # At zoom z a map unit spans 2**z pixels.
    half_width = WIDTH_PX / 2 / 2 ** zoom
    half_height = HEIGHT_PX / 2 / 2 ** zoom
    bounds = Bounds(
        south=CENTER[1] - half_height,
        west=CENTER[0] - half_width,
        north=CENTER[1] + half_height,
        east=CENTER[0] + half_width,
    )
    output = OUTPUT_DIR / f"zoom_{zoom:02d}.png"
    try:
        render_graticule(bounds, output, width_px=WIDTH_PX, height_px=HEIGHT_PX, config=config)
    except GraticuleError as e:
        print(f"{zoom:>4}  {2 * half_width:>17.6g}  FAILED: {e}")
        continue
    print(f"{zoom:>4}  {2 * half_width:>17.6g}  {output}")
