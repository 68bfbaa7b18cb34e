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

"""Container objects for one core logging session.

A session ties the picked trios to the drillhole they came from and to the BOH
reference lines, and turns them into reporting tables for downstream use.
"""

import logging
import math

import numpy as np
import pandas as pd

from coreorient.datamodel import (
    ALPHA, AZIMUTH, BETA, BOH_ANGLE, BOH_LINE, CM_PER_M, COLOR, DEPTH, DEPTH_CM, DIP,
    EASTING, ELEVATION, HOLE_ID, NORTHING, PLANE_ID, STRIKE, STRUCTURE_TYPE, TRIO_ID, BOHReference,
    wrap_degrees,
)
from coreorient.drill import desurvey, stereonet, structural
from coreorient.drill.trios import TrioManager

logger = logging.getLogger(__name__)

STRUCTURE_COLUMNS = [
    HOLE_ID, TRIO_ID, PLANE_ID, STRUCTURE_TYPE, DEPTH, DEPTH_CM, ALPHA, BETA, BOH_LINE, BOH_ANGLE,
    DIP, AZIMUTH, STRIKE, EASTING, NORTHING, ELEVATION, COLOR,
]

UNCLASSIFIED = "unclassified"

SUMMARY_COLUMNS = [STRUCTURE_TYPE, "count", "percentage", "mean_depth", "mean_dip", "mean_dip_direction"]


def _mean_direction(angles):
    """Mean of compass directions in degrees (350 and 10 average to 0)."""
    radians = np.radians(pd.to_numeric(pd.Series(angles), errors="coerce").dropna())
    if radians.empty:
        return np.nan
    return wrap_degrees(math.degrees(math.atan2(np.sin(radians).mean(), np.cos(radians).mean())))


class DrillholeInfo:
    def __init__(self, hole_id, collar=None, orientation=None, length_m=None, metadata=None):
        self.hole_id = hole_id
        self.collar = collar
        self.orientation = orientation
        self.length_m = length_m
        self.metadata = metadata or {}

    @property
    def max_depth_cm(self):
        return None if self.length_m is None else self.length_m * CM_PER_M

    def update(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)
        return self

    def to_dict(self):
        return {
            "hole_id": self.hole_id,
            "collar": self.collar,
            "orientation": self.orientation,
            "length_m": self.length_m,
            "metadata": self.metadata,
        }


class CoreLogSession:
    def __init__(self, drillhole=None, manager=None, boh=None):
        self.drillhole = drillhole
        self.manager = manager or TrioManager()
        self.boh = boh or BOHReference()

    def set_boh_lines(self, line1_angle, line2_angle):
        """Move the BOH lines, clamping both into the allowed displacement range."""
        self.boh = BOHReference.clamped(line1_angle, line2_angle, self.boh.interval)
        logger.info("BOH lines set to %.1f / %.1f (AC %.1f)", self.boh.line1_angle, self.boh.line2_angle,
                    self.boh.ac_angle)
        return self.boh

    def set_trio_depth(self, trio_id, depth):
        """Manual depth in cm, bounded by the hole length when it is known."""
        max_depth = self.drillhole.max_depth_cm if self.drillhole is not None else None
        return self.manager.set_trio_depth(trio_id, depth, max_depth=max_depth)

    def _orientation(self):
        return self.drillhole.orientation if self.drillhole is not None else None

    def _collar(self):
        return self.drillhole.collar if self.drillhole is not None else None

    def geospatial_data(self):
        """One record per measured plane (validation trios excluded).

        Fields that cannot be computed yet, because the trio has no depth or the
        hole has no orientation or collar, are ``None``.
        """
        orientation = self._orientation()
        collar = self._collar()
        records = []
        for trio in self.manager.normal_trios:
            if trio.plane is None:
                continue
            record = {
                "plane_id": f"plane-{trio.id}",
                "trio_id": trio.id,
                "structure_type": trio.structure_type,
                "alpha": None,
                "beta": None,
                "depth_cm": trio.depth,
                "boh_angle": None,
                "boh_line": None,
                "real_orientation": None,
                "spatial_coords": None,
            }
            angles = self.manager.local_angles(trio.id, self.boh)
            if angles is None:
                logger.debug("Trio %s has no depth yet, skipping orientation", trio.id)
                records.append(record)
                continue
            boh_angle = self.boh.angle_for_depth(trio.depth)
            record.update(
                alpha=angles.alpha,
                beta=angles.beta,
                boh_angle=boh_angle,
                boh_line=self.boh.line_for_depth(trio.depth),
            )
            if orientation is not None:
                record["real_orientation"] = structural.real_orientation(
                    angles.alpha, angles.beta, boh_angle, orientation
                )
                if collar is not None:
                    record["spatial_coords"] = desurvey.project_along_hole(
                        collar, orientation, trio.depth / CM_PER_M
                    )
            records.append(record)
        return records

    def structures(self):
        """Structure table in the open data model, one row per plane with local angles.

        ``depth`` is metres along hole, ``azimuth`` holds the dip direction.
        """
        rows = []
        hole_id = self.drillhole.hole_id if self.drillhole is not None else None
        for trio in self.manager.normal_trios:
            angles = self.manager.local_angles(trio.id, self.boh)
            if angles is None:
                continue
            rows.append({
                HOLE_ID: hole_id,
                TRIO_ID: trio.id,
                PLANE_ID: f"plane-{trio.id}",
                STRUCTURE_TYPE: trio.structure_type,
                DEPTH: trio.depth / CM_PER_M,
                DEPTH_CM: trio.depth,
                ALPHA: angles.alpha,
                BETA: angles.beta,
                BOH_LINE: self.boh.line_for_depth(trio.depth),
                BOH_ANGLE: self.boh.angle_for_depth(trio.depth),
                COLOR: trio.color,
            })
        if not rows:
            return pd.DataFrame(columns=STRUCTURE_COLUMNS)

        df = pd.DataFrame(rows)
        orientation = self._orientation()
        if orientation is not None:
            df = structural.apply_real_orientation(df, orientation)
            df[STRIKE] = structural.compute_strike(df[AZIMUTH])
            collar = self._collar()
            if collar is not None:
                df = desurvey.attach_structure_positions(df, collar, orientation)
        return df.reindex(columns=STRUCTURE_COLUMNS)

    def structure_summary(self):
        """Per structure type: count, share of all structures, mean depth (m), mean dip and dip direction.

        Untyped structures are grouped as ``unclassified``. Dip directions are
        averaged as directions, not as plain numbers.
        """
        df = self.structures()
        if df.empty:
            return pd.DataFrame(columns=SUMMARY_COLUMNS)
        df = df.assign(**{
            STRUCTURE_TYPE: df[STRUCTURE_TYPE].fillna(UNCLASSIFIED),
            DIP: pd.to_numeric(df[DIP], errors="coerce"),
            DEPTH: pd.to_numeric(df[DEPTH], errors="coerce"),
        })
        grouped = df.groupby(STRUCTURE_TYPE, sort=False)
        summary = pd.DataFrame({
            "count": grouped.size(),
            "mean_depth": grouped[DEPTH].mean(),
            "mean_dip": grouped[DIP].mean(),
            "mean_dip_direction": grouped[AZIMUTH].apply(_mean_direction),
        })
        summary["percentage"] = summary["count"] / len(df) * 100.0
        summary = summary.reset_index().sort_values("count", ascending=False, kind="stable")
        return summary.reindex(columns=SUMMARY_COLUMNS).reset_index(drop=True)

    def stereonet(self, radius=1.0, projection=stereonet.EQUAL_AREA, with_great_circles=False):
        """Stereonet payload for every oriented plane, grouped by structure type."""
        measured = [
            record for record in self.geospatial_data()
            if record["real_orientation"] is not None
        ]
        return stereonet.stereonet_payload(
            [record["real_orientation"] for record in measured],
            radius,
            projection,
            with_great_circles,
            structure_types=[record["structure_type"] for record in measured],
        )
