"""
Sample point set shipped with the demo.

13 points; peels into layers of 6, 3 and 4 vertices.
"""

from typing import Tuple

SAMPLE_POINTS: Tuple[Tuple[float, float], ...] = (
    (113.0, 54.56666564941406),
    (348.0, 93.56666564941406),
    (230.0, 317.566650390625),
    (72.0, 317.566650390625),
    (265.0, 492.566650390625),
    (402.0, 275.566650390625),
    (352.0, 270.566650390625),
    (120.0, 504.566650390625),
    (495.0, 548.566650390625),
    (335.0, 343.566650390625),
    (103.0, 167.56666564941406),
    (253.0, 452.566650390625),
    (480.0, 174.56666564941406),
)

# (name, start, end)
SAMPLE_QUERIES = (
    ("horizontal", (0.0, 300.0), (600.0, 300.0)),
    ("diagonal", (0.0, 0.0), (600.0, 600.0)),
    ("steep", (250.0, 0.0), (300.0, 600.0)),
)
