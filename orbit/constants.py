"""
Shared constants for the radial graph editor.

These values are used by the geometry helpers, the drag controller and
the ECharts option builder. Keep them in sync with the public page.
"""

# Canvas size in canvas units (the editor's native coordinate system)
CANVAS_WIDTH = 1000.0
CANVAS_HEIGHT = 800.0

# The implicit "center" node every category orbits
CENTER_X = 500.0
CENTER_Y = 400.0
CENTER_NODE_RADIUS = 40
CENTER_LABEL = "ME"

# Dashed guide rings drawn around the center
ORBIT_RINGS = (200, 350, 500)

# Category node discs; selected nodes are drawn (and hit-tested) larger
NODE_RADIUS = 25
SELECTED_NODE_RADIUS = 35

# Tool satellites sit on a small ring around their category
SATELLITE_ORBIT = 45
SATELLITE_RADIUS = 4

# Defaults for newly created entities
DEFAULT_RADIUS = 200
DEFAULT_LABEL = "New Node"
DEFAULT_ICON_TYPE = "code"
DEFAULT_TOOL_NAME = "New Tool"
DEFAULT_TOOL_COLOR = "bg-white"
DEFAULT_TITLE = "My Creative Universe"
DEFAULT_SUBTITLE = "Drag the icons to explore the connections."

PALETTE = ("#F2A7A7", "#9999FF", "#15C39A", "#E69595", "#FFD700", "#A68B7E")
DEFAULT_COLOR = PALETTE[0]

# Ink colors used by the chart
INK_COLOR = "#3B241A"
PAPER_COLOR = "#FAF0E6"
HIGHLIGHT_COLOR = "#F2A7A7"

# Zoom buttons
ZOOM_STEP = 0.1
MIN_ZOOM = 0.5
DEFAULT_ZOOM = 1.0
