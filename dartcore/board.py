"""Standard dartboard dimensions and fixed geometric constants.

All lengths in millimeters, all angles in radians.
Board frame: origin at the bull, +x to the right, +y toward the bottom,
angle 0 straight up (segment 20) and increasing clockwise.
"""

import math

# Segment numbers clockwise from 12 o'clock
SEGMENTS = (20, 1, 18, 4, 13, 6, 10, 15, 2, 17, 3, 19, 7, 16, 8, 11, 14, 9, 12, 5)
SEGMENT_COUNT = len(SEGMENTS)
SEGMENT_ANGLE = 2 * math.pi / SEGMENT_COUNT  # 18 degrees
MIN_SEGMENT_NUMBER = 1
MAX_SEGMENT_NUMBER = 20

# Ring outer radii, strictly increasing
INNER_BULL_RADIUS = 6.35  # 12.7mm diameter
OUTER_BULL_RADIUS = 16.0
TRIPLE_INNER_RADIUS = 99.0
TRIPLE_OUTER_RADIUS = 107.0
DOUBLE_INNER_RADIUS = 162.0
DOUBLE_OUTER_RADIUS = 170.0
BOARD_EDGE_RADIUS = 225.0  # soft-tip playable edge

RING_RADII = (
    INNER_BULL_RADIUS,
    OUTER_BULL_RADIUS,
    TRIPLE_INNER_RADIUS,
    TRIPLE_OUTER_RADIUS,
    DOUBLE_INNER_RADIUS,
    DOUBLE_OUTER_RADIUS,
)

# Representative aim radius per ring: midpoint of its inner and outer edge
TARGET_RADII = {
    "INNER_BULL": 0.0,
    "OUTER_BULL": (INNER_BULL_RADIUS + OUTER_BULL_RADIUS) / 2,    # 11.175
    "INNER_SINGLE": (OUTER_BULL_RADIUS + TRIPLE_INNER_RADIUS) / 2,  # 57.5
    "TRIPLE": (TRIPLE_INNER_RADIUS + TRIPLE_OUTER_RADIUS) / 2,      # 103
    "OUTER_SINGLE": (TRIPLE_OUTER_RADIUS + DOUBLE_INNER_RADIUS) / 2,  # 134.5
    "DOUBLE": (DOUBLE_INNER_RADIUS + DOUBLE_OUTER_RADIUS) / 2,      # 166
}

# Spider wire tie-breaking
SPIDER_TOLERANCE = 0.001  # mm radially, rad angularly
SPIDER_RADIAL_NUDGE_MM = 1.0
SPIDER_ANGULAR_NUDGE_RAD = 1.0 / 100
