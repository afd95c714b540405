"""Global constants for the schematic router."""

# Grid Router Constants
GRID_SIZE_DEFAULT = 10.0
"""Default spacing of the routing grid in diagram units."""

MAX_ITERATIONS_DEFAULT = 60_000
"""Default maximum A* node expansions before falling back to a manhattan path."""

CORRIDOR_PENALTY_DEFAULT = 0.08
"""Default cost per diagram unit of distance beyond the corridor snap zone."""

CORRIDOR_SNAP_DEFAULT = 40.0
"""Distance from a corridor line within which no corridor penalty applies."""

EDGE_MARGIN_DEFAULT = 30.0
"""Inset of the synthetic corridors added when ``prefer_edges`` is set."""

# Orchestration Constants
STUB_LENGTH_DEFAULT = 16.0
"""Length of the straight segment leaving each port before routing starts."""

OBSTACLE_PADDING_DEFAULT = 18.0
"""Padding added around each component footprint when routing a connection."""

AABB_PADDING_DEFAULT = 12.0
"""Default padding for a single instance bounding box."""

VIEWPORT_MARGIN_DEFAULT = 40.0
"""Margin added around the diagram content when no view box is declared."""

ROUTE_MODES = ("auto", "manhattan")
"""Accepted connection route modes."""
