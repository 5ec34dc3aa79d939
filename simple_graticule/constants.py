"""
Constants and fixed parameters for SimpleGraticule package.

This module defines the interval ladder, coordinate clamp limits, padding
fractions, default styling and label templates used by the overlay.
"""

# ============================================================================
# Interval Selection
# ============================================================================

# Interval used when the whole plane is in view (zoom 0).
COARSEST_INTERVAL = 90.0

# Interval used from MAX_DETAIL_ZOOM upwards.
FINEST_INTERVAL = 0.001
MAX_DETAIL_ZOOM = 18

# Normalized steps for spans <= FINE_LADDER_LIMIT, scaled by a power of ten.
FINE_LADDER = (0.1, 0.2, 0.5, 1.0)
FINE_LADDER_LIMIT = 10

# Fixed steps for spans above FINE_LADDER_LIMIT: (upper bound, interval).
COARSE_LADDER = (
    (30, 30.0),
    (45, 45.0),
    (60, 60.0),
)
COARSE_LADDER_MAX = 90.0

# Screen span (pixels) measured either side of the view centre.
REFERENCE_SPAN_PX = 50

# Decimal places used when rounding spans, intervals and start indices.
INTERVAL_PRECISION = 4

# Decimal places shown on longitude labels.
LABEL_PRECISION = 3

# ============================================================================
# Coordinate Limits
# ============================================================================

MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MIN_LATITUDE = -85.0
MAX_LATITUDE = 85.0

# Hard cap on generated positions per axis.
MAX_LINES_PER_AXIS = 10000

# ============================================================================
# Padding
# ============================================================================

# Lines extend half a viewport beyond each edge so panning never shows ends.
LINE_PADDING = 0.5

# Labels sit just inside the visible edge.
LABEL_PADDING = -0.003

# ============================================================================
# Styling Constants
# ============================================================================

LINE_COLOR = "#111"
LINE_OPACITY = 0.6
LINE_WEIGHT = 1.0

LABEL_COLOR = "#111"
LABEL_FONT_SIZE = 8.0

# Grid overlays draw above map content.
LINE_ZORDER = 50
LABEL_ZORDER = 51

# ============================================================================
# Labels
# ============================================================================

AXIS_LONGITUDE = "longitude"
AXIS_LATITUDE = "latitude"

LABEL_HORIZONTAL = "horizontal"
LABEL_VERTICAL = "vertical"
LABEL_ORIGIN = "origin"

# Narrow no-break space then degree sign.
DEGREE_SUFFIX = "\u202f°"
ORIGIN_LABEL_TEXT = "[0,0]"

# ============================================================================
# Events
# ============================================================================

VIEWRESET_EVENT = "viewreset"
DEFAULT_REDRAW_EVENT = "move"
