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

"""Stereonet projection of dip/dip-direction sets.

Produces plain coordinates for a plotting layer: North is +y, East is +x and the
disk has radius ``radius``. Two projections are supported:

- equal-area (Schmidt): r = R * sqrt(2) * sin(theta / 2)
- equal-angle (Wulff):  r = R * tan(theta / 2)

where theta is the angular distance from the centre of the net. A measurement
plots along its dip direction at theta = 90 - plunge, with plunge = 90 - dip, so
horizontal planes sit at the centre and vertical planes on the primitive circle.
"""

import math

import numpy as np

from coreorient.datamodel import AZIMUTH, DIP, STEREO_X, STEREO_Y, RealOrientation, require_finite
from coreorient.drill.validate import report_missing_columns

EQUAL_AREA = "equal-area"
EQUAL_ANGLE = "equal-angle"

_PROJECTION_ALIASES = {
    EQUAL_AREA: EQUAL_AREA,
    "schmidt": EQUAL_AREA,
    EQUAL_ANGLE: EQUAL_ANGLE,
    "wulff": EQUAL_ANGLE,
}


def _projection(name):
    key = str(name).lower().strip()
    if key not in _PROJECTION_ALIASES:
        raise ValueError(f"Unsupported projection: {name}")
    return _PROJECTION_ALIASES[key]


def radial_distance(angle, radius=1.0, projection=EQUAL_AREA):
    """Distance from the net centre for a direction ``angle`` degrees off the centre.

    Accepts scalars or numpy arrays.
    """
    half = np.radians(angle) / 2.0
    if _projection(projection) == EQUAL_AREA:
        return radius * math.sqrt(2.0) * np.sin(half)
    return radius * np.tan(half)


def project_orientation(dip, dip_direction, radius=1.0, projection=EQUAL_AREA):
    """(x, y) of one dip/dip-direction measurement."""
    require_finite(dip=dip, dip_direction=dip_direction)
    plunge = 90.0 - dip
    r = float(radial_distance(90.0 - plunge, radius, projection))
    dd_rad = math.radians(dip_direction)
    return (r * math.sin(dd_rad), r * math.cos(dd_rad))


def _dip_pairs(orientations):
    pairs = []
    for item in orientations:
        if isinstance(item, RealOrientation):
            pairs.append((item.dip, item.dip_direction))
        else:
            dip, dip_direction = item
            pairs.append((dip, dip_direction))
    return pairs


def project_orientations(orientations, radius=1.0, projection=EQUAL_AREA):
    """Project RealOrientation objects or (dip, dip_direction) pairs to an ``(n, 2)`` array."""
    points = [project_orientation(dip, dd, radius, projection) for dip, dd in _dip_pairs(orientations)]
    if not points:
        return np.empty((0, 2))
    return np.asarray(points, dtype=float)


def project_structures(structures, dip_col=DIP, az_col=AZIMUTH, radius=1.0, projection=EQUAL_AREA):
    """Add stereo_x / stereo_y columns to a structure table (dip direction in ``az_col``)."""
    if structures.empty:
        return structures.copy()
    missing = report_missing_columns(structures, [dip_col, az_col])
    if missing:
        raise ValueError(f"Structure table is missing column(s): {', '.join(missing)}")
    out = structures.copy()
    dip = out[dip_col].astype(float)
    r = radial_distance(dip, radius, projection)
    dd_rad = np.radians(out[az_col].astype(float))
    out[STEREO_X] = r * np.sin(dd_rad)
    out[STEREO_Y] = r * np.cos(dd_rad)
    return out


def stereonet_grid(radius=1.0, projection=EQUAL_AREA, step=10):
    """Static net: concentric circles every ``step`` degrees and radial spokes every ``step`` degrees."""
    circles = [
        {"angle": angle, "radius": float(radial_distance(angle, radius, projection))}
        for angle in range(step, 90 + 1, step)
    ]
    radials = []
    for azimuth in range(0, 360, step):
        az_rad = math.radians(azimuth)
        radials.append({"azimuth": azimuth, "x": radius * math.sin(az_rad), "y": radius * math.cos(az_rad)})
    return {"circles": circles, "radials": radials}


def great_circle(dip, dip_direction, radius=1.0, projection=EQUAL_AREA, samples=100):
    """Sampled outline for a plane, as ``(samples + 1, 2)`` points (closed path).

    This is a display approximation: points are swept around the dip direction at
    the plane's dip rather than traced along the true spherical great circle, so
    the outline must not be used for angular measurement. It uses the same radial
    convention as :func:`project_orientation`, so the first sample is the plane's
    own projected point.
    """
    require_finite(dip=dip, dip_direction=dip_direction)
    dip_rad = math.radians(dip)
    t = np.linspace(0.0, 2.0 * np.pi, samples + 1)
    x = np.cos(t) * math.cos(dip_rad)
    y = np.sin(t) * math.cos(dip_rad)
    z = np.full_like(t, math.sin(dip_rad))
    angle = np.degrees(np.arcsin(z))
    trend = np.arctan2(y, x) + math.radians(dip_direction)
    r = radial_distance(angle, radius, projection)
    return np.column_stack([r * np.sin(trend), r * np.cos(trend)])


def group_by_structure_type(points, structure_types):
    """Split projected points by structure type, keeping first-seen type order.

    Untyped measurements (``None``) form their own group.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    structure_types = list(structure_types)
    if len(structure_types) != len(points):
        raise ValueError(f"Got {len(structure_types)} structure types for {len(points)} points")
    groups = {}
    for point, kind in zip(points, structure_types):
        groups.setdefault(kind, []).append(point)
    return {kind: np.asarray(members, dtype=float) for kind, members in groups.items()}


def stereonet_payload(orientations, radius=1.0, projection=EQUAL_AREA, with_great_circles=False, grid_step=10,
                      structure_types=None):
    """Everything a plotting layer needs for one net.

    When ``structure_types`` is given (one entry per orientation) the points are
    also returned grouped by type under ``groups``.
    """
    pairs = _dip_pairs(orientations)
    points = project_orientations(pairs, radius, projection)
    payload = {
        "projection": _projection(projection),
        "radius": radius,
        "points": points,
        "grid": stereonet_grid(radius, projection, grid_step),
        "great_circles": [],
        "groups": {},
    }
    if with_great_circles:
        payload["great_circles"] = [great_circle(dip, dd, radius, projection) for dip, dd in pairs]
    if structure_types is not None:
        payload["groups"] = group_by_structure_type(points, structure_types)
    return payload
