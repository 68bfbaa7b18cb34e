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

"""Plane geometry in the core frame.

The virtual core is a cylinder of fixed radius whose axis is the Z axis
(x = 0, y = 0). Coordinates are in centimetres. All functions are pure.
"""

import logging
import math

import numpy as np

from coreorient.config import AXIS_PARALLEL_TOLERANCE, DEGENERATE_TOLERANCE, OUTLINE_POINTS
from coreorient.datamodel import PlaneEquation, Point3D, require_finite
from coreorient.errors import DegeneratePlane, NoAxisIntersection

logger = logging.getLogger(__name__)


def as_vector(point):
    """Return a float numpy vector for a Point3D or any (x, y, z) sequence."""
    if isinstance(point, Point3D):
        coords = point.as_tuple()
    else:
        coords = tuple(point)
        if len(coords) != 3:
            raise ValueError(f"Expected 3 coordinates, got {len(coords)}")
    require_finite(x=coords[0], y=coords[1], z=coords[2])
    return np.asarray(coords, dtype=float)


def fit_plane(p1, p2, p3, tolerance=DEGENERATE_TOLERANCE):
    """Plane through three points.

    The normal is ``(p2 - p1) x (p3 - p1)`` scaled to unit length, so the sign
    follows the point order. Collinear or repeated points raise DegeneratePlane.

    Examples
    --------
    Three points at z = 5 → horizontal plane z = 5: (0, 0, 1, -5)
    """
    v0 = as_vector(p1)
    v1 = as_vector(p2) - v0
    v2 = as_vector(p3) - v0
    normal = np.cross(v1, v2)
    magnitude = float(np.linalg.norm(normal))
    scale = float(np.linalg.norm(v1) * np.linalg.norm(v2))
    if scale == 0.0 or magnitude <= tolerance * scale:
        raise DegeneratePlane(
            f"Points {tuple(v0)}, {tuple(v0 + v1)}, {tuple(v0 + v2)} are collinear and do not define a plane"
        )
    unit = normal / magnitude
    d = -float(np.dot(unit, v0))
    a, b, c = (float(v) for v in unit)
    logger.debug("Plane equation: %.3fx + %.3fy + %.3fz + %.3f = 0", a, b, c, d)
    return PlaneEquation(a=a, b=b, c=c, d=d, normal=(a, b, c))


def resolve_depth(equation, tolerance=AXIS_PARALLEL_TOLERANCE):
    """Z where the plane crosses the core axis (x = 0, y = 0)."""
    if abs(equation.c) < tolerance:
        raise NoAxisIntersection("Plane is parallel to the core axis, no unique depth")
    depth = -equation.d / equation.c
    # avoid reporting -0.0
    return depth + 0.0


def plane_through_axis(normal, depth):
    """Plane with the given normal crossing the core axis at ``depth``."""
    n = np.asarray(normal, dtype=float)
    magnitude = float(np.linalg.norm(n))
    if magnitude == 0.0 or not math.isfinite(magnitude):
        raise DegeneratePlane("Normal vector must be non-zero")
    require_finite(depth=depth)
    a, b, c = (float(v) for v in n / magnitude)
    return PlaneEquation(a=a, b=b, c=c, d=-c * depth, normal=(a, b, c))


def cylinder_intersection(equation, radius, num_points=OUTLINE_POINTS):
    """Sample the curve where the plane cuts the cylinder surface.

    Returns an ``(num_points, 3)`` array ordered by angle around the core, or an
    empty ``(0, 3)`` array when the plane is nearly parallel to the axis (the cut
    is then a pair of lines, not an ellipse).
    """
    if abs(equation.c) < 1e-4:
        logger.debug("Plane nearly parallel to the core axis, no outline")
        return np.empty((0, 3))
    theta = np.linspace(0.0, 2.0 * np.pi, num_points, endpoint=False)
    x = radius * np.cos(theta)
    y = radius * np.sin(theta)
    z = -(equation.a * x + equation.b * y + equation.d) / equation.c
    return np.column_stack([x, y, z])


def surface_point(radius, azimuth, z):
    """Point on the cylinder surface at an azimuth (degrees from +X towards +Y)."""
    az_rad = math.radians(azimuth)
    return radius * math.cos(az_rad), radius * math.sin(az_rad), z
