# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2026 Darkmine Pty Ltd

# This file is part of coreorient.

# coreorient is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# coreorient is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with coreorient.  If not, see <https://www.gnu.org/licenses/>.

"""Default geometry settings for the virtual core and the trio manager."""

# Virtual cylinder (HQ-sized core), centimetres
CYLINDER_RADIUS = 3.175
CYLINDER_HEIGHT = 30.0

# BOH lines: line 1 covers 0-15 cm, line 2 covers 15-30 cm
BOH_DEFAULT_ANGLE = 90.0
BOH_DISPLACEMENT_RANGE = 20.0
BOH_INTERVAL = 30.0

MAX_TRIOS = 100
POINTS_PER_TRIO = 3

TRIO_COLORS = (
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # yellow
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#EC4899",  # pink
)

# Manual depth bounds, centimetres (5000 m hole)
MIN_DEPTH = 0.0
MAX_DEPTH = 500000.0

# |n| / (|v1| |v2|) below this means collinear points
DEGENERATE_TOLERANCE = 1e-9
# |c| below this means the plane never meets the core axis
AXIS_PARALLEL_TOLERANCE = 1e-9

OUTLINE_POINTS = 64
VALIDATION_AZIMUTHS = (0.0, 120.0, 240.0)


class CoreConfig:
    def __init__(self, radius=CYLINDER_RADIUS, height=CYLINDER_HEIGHT, max_trios=MAX_TRIOS,
                 max_depth=MAX_DEPTH, palette=TRIO_COLORS, outline_points=OUTLINE_POINTS, metadata=None):
        self.radius = radius
        self.height = height
        self.max_trios = max_trios
        self.max_depth = max_depth
        self.palette = tuple(palette)
        self.outline_points = outline_points
        self.metadata = metadata or {}
        if not self.palette:
            raise ValueError("palette must contain at least one colour")

    def update(self, **kwargs):
        for key, val in kwargs.items():
            if not hasattr(self, key):
                raise KeyError(key)
            setattr(self, key, val)
        return self

    def to_dict(self):
        return {
            "radius": self.radius,
            "height": self.height,
            "max_trios": self.max_trios,
            "max_depth": self.max_depth,
            "palette": list(self.palette),
            "outline_points": self.outline_points,
            "metadata": self.metadata,
        }
