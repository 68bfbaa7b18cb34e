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

"""Along-hole positioning for straight drillholes.

A hole is described by its collar and a single azimuth/dip, so positions follow
from the direction cosines of that orientation. Depths along hole are in metres.
Dip is negative downward, so a -90 hole loses elevation one metre per metre.
"""

import math

import numpy as np
import pandas as pd

from coreorient.datamodel import (
    AZIMUTH, DEPTH, DIP, EASTING, ELEVATION, HOLE_ID, NORTHING,
    SpatialCoordinates, require_finite,
)


def _direction_cosines(azimuth, dip):
    az_rad = math.radians(azimuth)
    dip_rad = math.radians(dip)
    ca = math.cos(dip_rad) * math.sin(az_rad)
    cb = math.cos(dip_rad) * math.cos(az_rad)
    cc = math.sin(dip_rad)
    return ca, cb, cc


def project_along_hole(collar, orientation, depth_along_hole):
    """Map position of a point ``depth_along_hole`` metres down a straight hole.

    Examples
    --------
    Vertical hole (dip=-90), 100 m → 100 m below the collar.
    Az=60, dip=-60, 100 m → 43.3 m East, 25.0 m North, 86.6 m down.
    """
    require_finite(depth_along_hole=depth_along_hole)
    ca, cb, cc = _direction_cosines(orientation.azimuth, orientation.dip)
    return SpatialCoordinates(
        east=collar.easting + depth_along_hole * ca,
        north=collar.northing + depth_along_hole * cb,
        elevation=collar.elevation + depth_along_hole * cc,
    )


def hole_trace(collar, orientation, total_depth, step=10.0, hole_id=None):
    """Trace table from the collar to ``total_depth`` with vertices every ``step`` metres.

    The last vertex always sits at ``total_depth``.
    """
    require_finite(total_depth=total_depth, step=step)
    if step <= 0:
        raise ValueError("step must be positive")
    if total_depth < 0:
        raise ValueError("total_depth must not be negative")
    segment_steps = max(1, int(math.ceil(total_depth / step)))
    mds = np.minimum(np.arange(segment_steps + 1) * step, total_depth)
    if total_depth == 0:
        mds = np.array([0.0])
    ca, cb, cc = _direction_cosines(orientation.azimuth, orientation.dip)
    return pd.DataFrame({
        HOLE_ID: hole_id,
        "md": mds,
        EASTING: collar.easting + mds * ca,
        NORTHING: collar.northing + mds * cb,
        ELEVATION: collar.elevation + mds * cc,
        AZIMUTH: orientation.azimuth,
        DIP: orientation.dip,
    })


def attach_structure_positions(structures, collar, orientation, depth_col=DEPTH):
    """Add easting, northing, elevation columns for each structure's depth (metres).

    Rows with a missing depth get NaN coordinates.
    """
    if structures.empty:
        return structures.copy()
    out = structures.copy()
    depths = pd.to_numeric(out[depth_col], errors="coerce")
    ca, cb, cc = _direction_cosines(orientation.azimuth, orientation.dip)
    out[EASTING] = collar.easting + depths * ca
    out[NORTHING] = collar.northing + depths * cb
    out[ELEVATION] = collar.elevation + depths * cc
    return out
