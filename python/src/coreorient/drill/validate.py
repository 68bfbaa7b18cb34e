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

"""QA/QC helpers for drillhole setup and structure tables."""

import math

import pandas as pd

from coreorient.datamodel import ALPHA, AZIMUTH, BETA, DEPTH, DIP, HOLE_ID


def _is_number(value):
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_drillhole_orientation(azimuth, dip):
    """Check a hole azimuth/dip pair before it is used for true orientation."""
    issues = []
    if not _is_number(azimuth):
        issues.append({"field": "azimuth", "type": "not_a_number", "value": azimuth})
    elif azimuth < 0 or azimuth >= 360:
        issues.append({"field": "azimuth", "type": "azimuth_out_of_range", "value": azimuth})
    if not _is_number(dip):
        issues.append({"field": "dip", "type": "not_a_number", "value": dip})
    elif dip < -90 or dip > 90:
        issues.append({"field": "dip", "type": "dip_out_of_range", "value": dip})
    return issues


def validate_ac_angle(ac_angle, min_ac=0.0, max_ac=40.0):
    """Angle de calce between the BOH lines; values outside the range usually mean a mislabelled line."""
    issues = []
    if not _is_number(ac_angle):
        issues.append({"field": "ac_angle", "type": "not_a_number", "value": ac_angle})
    elif ac_angle < min_ac or ac_angle > max_ac:
        issues.append({"field": "ac_angle", "type": "ac_angle_out_of_range", "value": ac_angle,
                       "min": min_ac, "max": max_ac})
    return issues


def report_missing_columns(df, required):
    missing = [col for col in required if col not in df.columns]
    return missing


def validate_structural_points(df, dip_col=DIP, az_col=AZIMUTH, hole_col=HOLE_ID, depth_col=DEPTH,
                               alpha_col=ALPHA, beta_col=BETA):
    """Validate structural point measurements.

    Returns a list of issue dicts: missing depth, dip out of [0, 90], azimuth out
    of [0, 360), and, where the table carries them, alpha out of [0, 90] and beta
    out of [0, 360).
    """
    issues = []
    for idx, row in df.iterrows():
        hole_id = row.get(hole_col)
        depth = row.get(depth_col)

        if pd.isna(depth):
            issues.append({"hole_id": hole_id, "row_index": idx, "type": "missing_depth", "row": row.to_dict()})
            continue

        checks = (
            (dip_col, 0, 90, True, "dip_out_of_range"),
            (az_col, 0, 360, False, "azimuth_out_of_range"),
            (alpha_col, 0, 90, True, "alpha_out_of_range"),
            (beta_col, 0, 360, False, "beta_out_of_range"),
        )
        for col, low, high, inclusive, kind in checks:
            value = row.get(col)
            if value is None or pd.isna(value):
                continue
            above = value > high if inclusive else value >= high
            if value < low or above:
                issues.append({"hole_id": hole_id, "row_index": idx, "type": kind,
                               "value": value, "row": row.to_dict()})

    return issues
