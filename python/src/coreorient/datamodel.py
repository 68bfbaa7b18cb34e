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

"""
Coreorient Data Model

Column names used for tabular output, plus the small immutable value types that
flow between the geometry functions and the trio manager.

Units: core-frame points and trio depths are in centimetres, map coordinates and
depths along hole in metres, all angles in degrees.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from coreorient.config import BOH_DEFAULT_ANGLE, BOH_DISPLACEMENT_RANGE, BOH_INTERVAL
from coreorient.errors import InvalidNumericInput

HOLE_ID = "hole_id"
ELEVATION = "elevation"
AZIMUTH = "azimuth"
DIP = "dip"
DEPTH = "depth"
EASTING = "easting"
NORTHING = "northing"
STRIKE = "strike"
STRUCTURE_TYPE = "structure_type"
ALPHA = "alpha"
BETA = "beta"
DEPTH_CM = "depth_cm"
BOH_ANGLE = "boh_angle"
BOH_LINE = "boh_line"
TRIO_ID = "trio_id"
PLANE_ID = "plane_id"
COLOR = "color"
STEREO_X = "stereo_x"
STEREO_Y = "stereo_y"

CM_PER_M = 100.0

BOH_MIN_ANGLE = BOH_DEFAULT_ANGLE - BOH_DISPLACEMENT_RANGE
BOH_MAX_ANGLE = BOH_DEFAULT_ANGLE + BOH_DISPLACEMENT_RANGE


def wrap_degrees(angle):
    """Wrap an angle into [0, 360)."""
    wrapped = angle % 360.0
    # tiny negative inputs round up to exactly 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return wrapped


def require_finite(**values):
    for name, value in values.items():
        try:
            ok = math.isfinite(value)
        except TypeError:
            ok = False
        if not ok:
            raise InvalidNumericInput(f"{name} must be a finite number (got {value!r})")


@dataclass(frozen=True)
class Point3D:
    """A point in the core frame: Z runs along the core axis, X/Y across it."""
    x: float
    y: float
    z: float
    id: Optional[str] = None

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class PlaneEquation:
    """Plane ``a*x + b*y + c*z + d = 0`` with (a, b, c) equal to the unit normal."""
    a: float
    b: float
    c: float
    d: float
    normal: Tuple[float, float, float]


@dataclass(frozen=True)
class DrillHoleOrientation:
    """Hole azimuth clockwise from North and dip from horizontal (negative = down)."""
    azimuth: float
    dip: float

    def __post_init__(self):
        require_finite(azimuth=self.azimuth, dip=self.dip)
        if self.dip < -90 or self.dip > 90:
            raise InvalidNumericInput(f"Dip must be -90 to 90 degrees (got {self.dip})")
        object.__setattr__(self, "azimuth", wrap_degrees(float(self.azimuth)))


@dataclass(frozen=True)
class Collar:
    easting: float
    northing: float
    elevation: float

    def __post_init__(self):
        require_finite(easting=self.easting, northing=self.northing, elevation=self.elevation)


@dataclass(frozen=True)
class BOHReference:
    """Two bottom-of-hole reference lines marking beta = 0 on the core surface.

    The first half of every ``interval`` (cm) of depth is measured against line 1,
    the second half against line 2.
    """
    line1_angle: float = BOH_DEFAULT_ANGLE
    line2_angle: float = BOH_DEFAULT_ANGLE
    interval: float = BOH_INTERVAL

    def __post_init__(self):
        require_finite(line1_angle=self.line1_angle, line2_angle=self.line2_angle, interval=self.interval)
        for name in ("line1_angle", "line2_angle"):
            angle = getattr(self, name)
            if angle < BOH_MIN_ANGLE or angle > BOH_MAX_ANGLE:
                raise ValueError(f"{name} must be within [{BOH_MIN_ANGLE}, {BOH_MAX_ANGLE}] (got {angle})")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive (got {self.interval})")

    @classmethod
    def clamped(cls, line1_angle, line2_angle, interval=BOH_INTERVAL):
        """Build a reference with both angles clamped into the allowed displacement range."""
        def clamp(angle):
            return max(BOH_MIN_ANGLE, min(BOH_MAX_ANGLE, angle))
        require_finite(line1_angle=line1_angle, line2_angle=line2_angle)
        return cls(clamp(line1_angle), clamp(line2_angle), interval)

    def line_for_depth(self, depth):
        require_finite(depth=depth)
        position = depth % self.interval
        return 1 if position < 0.5 * self.interval else 2

    def angle_for_depth(self, depth):
        return self.line1_angle if self.line_for_depth(depth) == 1 else self.line2_angle

    @property
    def ac_angle(self):
        """Angle de calce: angular separation between the two lines."""
        return abs(self.line2_angle - self.line1_angle)


@dataclass(frozen=True)
class LocalAngles:
    alpha: float
    beta: float


@dataclass(frozen=True)
class RealOrientation:
    dip: float
    dip_direction: float

    def __str__(self):
        return f"{self.dip:.1f}/{self.dip_direction:.1f}"


@dataclass(frozen=True)
class SpatialCoordinates:
    east: float
    north: float
    elevation: float

    def __str__(self):
        return f"E: {self.east:.2f}m, N: {self.north:.2f}m, Z: {self.elevation:.2f}m"
