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

"""Structural orientation: local core angles and true dip/dip direction.

Local frame: Z along the core axis, azimuths on the core surface measured from
+X towards +Y. Alpha is the angle between the plane normal and the core axis,
beta the angle from the applicable BOH line to the normal's horizontal
projection, in [0, 360).

Global frame: ENU (East-North-Up), azimuths clockwise from North.
"""

import logging
import math

import numpy as np

from coreorient.config import CYLINDER_RADIUS, VALIDATION_AZIMUTHS
from coreorient.datamodel import (
    ALPHA, AZIMUTH, BETA, BOH_ANGLE, DEPTH_CM, DIP,
    LocalAngles, RealOrientation, require_finite, wrap_degrees,
)
from coreorient.drill.geometry import surface_point
from coreorient.drill.validate import report_missing_columns
from coreorient.errors import NoAxisIntersection

logger = logging.getLogger(__name__)


def normalize_dip_azimuth(df, dip_col=DIP, az_col=AZIMUTH):
    """Clamp dip to [0, 90] and azimuth to [0, 360)."""
    out = df.copy()
    if dip_col in out.columns:
        out[dip_col] = out[dip_col].clip(lower=0, upper=90)
    if az_col in out.columns:
        out[az_col] = (out[az_col] % 360).where(lambda s: s < 360, 0.0)
    return out


def compute_strike(az_series):
    """Compute strike from dip-direction azimuth. Strike = (azimuth - 90) % 360."""
    return (az_series - 90) % 360


def local_normal(alpha, beta, boh_angle):
    """Unit plane normal in the core frame for local angles alpha/beta."""
    require_finite(alpha=alpha, beta=beta, boh_angle=boh_angle)
    alpha_rad = math.radians(alpha)
    az_rad = math.radians(boh_angle + beta)
    return np.array([
        math.sin(alpha_rad) * math.cos(az_rad),
        math.sin(alpha_rad) * math.sin(az_rad),
        math.cos(alpha_rad),
    ])


def local_angles(normal, boh_angle):
    """Alpha and beta of a plane normal relative to a BOH line.

    The normal is flipped to point along +Z first, so either orientation of a
    fitted plane gives the same angles. Beta is 0 for planes square to the axis.
    """
    n = np.asarray(normal, dtype=float)
    require_finite(nx=n[0], ny=n[1], nz=n[2], boh_angle=boh_angle)
    magnitude = float(np.linalg.norm(n))
    if magnitude == 0.0:
        raise ValueError("Normal vector must be non-zero")
    n = n / magnitude
    if n[2] < 0:
        n = -n
    alpha = math.degrees(math.acos(min(1.0, abs(float(n[2])))))
    horizontal = math.hypot(n[0], n[1])
    if horizontal < 1e-12:
        beta = 0.0
    else:
        beta = wrap_degrees(math.degrees(math.atan2(n[1], n[0])) - boh_angle)
    return LocalAngles(alpha=alpha, beta=beta)


def validation_points(alpha, beta, depth, boh_angle, radius=CYLINDER_RADIUS, z_range=None,
                      azimuths=VALIDATION_AZIMUTHS):
    """Surface points of the plane with local angles alpha/beta crossing the axis at ``depth``.

    Inverse of :func:`local_angles`: fitting a plane to the returned points and
    extracting its angles against the same BOH gives back alpha and beta. When
    ``z_range`` is given each z is clamped into it, which tilts the plane if any
    point had to move.
    """
    require_finite(alpha=alpha, beta=beta, depth=depth, boh_angle=boh_angle, radius=radius)
    if alpha < 0 or alpha > 90:
        raise ValueError(f"alpha must be within [0, 90] (got {alpha})")
    nx, ny, nz = local_normal(alpha, beta, boh_angle)
    if abs(nz) < 1e-12:
        raise NoAxisIntersection(f"alpha={alpha} gives a plane parallel to the core axis")
    d = nz * depth
    points = []
    for az in azimuths:
        x, y, _ = surface_point(radius, az, 0.0)
        z = (d - nx * x - ny * y) / nz
        if z_range is not None:
            lo, hi = z_range
            clamped = min(max(z, lo), hi)
            if clamped != z:
                logger.warning("Validation point at %.0f deg clamped from z=%.3f to z=%.3f", az, z, clamped)
            z = clamped
        points.append((x, y, z))
    return points


def drillhole_rotation_matrix(azimuth, dip):
    """Rotation taking core-frame vectors into ENU for a hole of given azimuth/dip.

    Rz(azimuth) combined with a tilt of -dip about the horizontal axis
    perpendicular to the hole (dip negative = hole points down).
    """
    az_rad = math.radians(azimuth)
    tilt_rad = math.radians(-dip)
    cos_az, sin_az = math.cos(az_rad), math.sin(az_rad)
    cos_t, sin_t = math.cos(tilt_rad), math.sin(tilt_rad)
    return np.array([
        [cos_az * cos_t, -sin_az, cos_az * sin_t],
        [sin_az * cos_t, cos_az, sin_az * sin_t],
        [-sin_t, 0.0, cos_t],
    ])


def real_orientation(alpha, beta, boh_angle, orientation):
    """True dip and dip direction of a structure measured on an oriented core.

    Parameters
    ----------
    alpha, beta : float
        Local angles from :func:`local_angles`.
    boh_angle : float
        Angle of the BOH line the measurement refers to.
    orientation : DrillHoleOrientation
        Hole azimuth/dip at the measurement.

    The dip direction always points to the downward side of the plane.
    """
    require_finite(azimuth=orientation.azimuth, dip=orientation.dip)
    normal_local = local_normal(alpha, beta, boh_angle)
    nx, ny, nz = drillhole_rotation_matrix(orientation.azimuth, orientation.dip) @ normal_local
    dip = math.degrees(math.asin(min(1.0, abs(float(nz)))))
    dip_direction = math.degrees(math.atan2(nx, ny))
    if nz > 0:
        dip_direction += 180.0
    dip_direction = wrap_degrees(dip_direction)
    logger.debug(
        "alpha=%.2f beta=%.2f boh=%.1f hole=%.2f/%.2f -> dip=%.2f dipdir=%.2f",
        alpha, beta, boh_angle, orientation.azimuth, orientation.dip, dip, dip_direction,
    )
    return RealOrientation(dip=dip, dip_direction=dip_direction)


def apply_real_orientation(structures, orientation, boh=None, alpha_col=ALPHA, beta_col=BETA,
                           boh_col=BOH_ANGLE, depth_col=DEPTH_CM):
    """Add true ``dip`` and ``azimuth`` (dip direction) columns to a table of local measurements.

    The BOH angle comes from ``boh_col`` when present, otherwise from ``boh``
    (a BOHReference) using each row's depth in centimetres.
    """
    if structures.empty:
        return structures.copy()
    missing = report_missing_columns(structures, [alpha_col, beta_col])
    if missing:
        raise ValueError(f"Structure table is missing column(s): {', '.join(missing)}")
    out = structures.copy()
    if boh_col not in out.columns:
        if boh is None:
            raise ValueError(f"Provide a BOHReference or a '{boh_col}' column")
        out[boh_col] = out[depth_col].apply(boh.angle_for_depth)
    results = [
        real_orientation(row[alpha_col], row[beta_col], row[boh_col], orientation)
        for _, row in out.iterrows()
    ]
    out[DIP] = [r.dip for r in results]
    out[AZIMUTH] = [r.dip_direction for r in results]
    return normalize_dip_azimuth(out)
