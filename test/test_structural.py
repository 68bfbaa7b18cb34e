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

"""Tests for local angles, the validation forward map and true orientation."""

import itertools
import math

import numpy as np
import pandas as pd
import pytest

from coreorient.datamodel import BOHReference, DrillHoleOrientation
from coreorient.drill import geometry, structural
from coreorient.errors import InvalidNumericInput, NoAxisIntersection


def _angle_diff(a, b):
    diff = abs(a - b) % 360.0
    return min(diff, 360.0 - diff)


# ---------------------------------------------------------------------------
# Local angles
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "alpha, beta, boh, depth",
    list(itertools.product([5.0, 30.0, 45.0, 60.0, 85.0], [0.0, 45.0, 135.0, 200.0, 315.0],
                           [80.0, 90.0, 110.0], [7.5, 22.0, 140.0])),
)
def test_validation_points_round_trip(alpha, beta, boh, depth):
    points = structural.validation_points(alpha, beta, depth, boh)
    plane = geometry.fit_plane(*points)
    angles = structural.local_angles(plane.normal, boh)
    assert angles.alpha == pytest.approx(alpha, abs=1e-3)
    assert _angle_diff(angles.beta, beta) < 1e-3
    assert 0.0 <= angles.beta < 360.0
    assert geometry.resolve_depth(plane) == pytest.approx(depth, abs=1e-6)


def test_validation_points_lie_on_cylinder():
    points = structural.validation_points(40.0, 10.0, 12.0, 90.0, radius=3.175)
    assert len(points) == 3
    for x, y, _ in points:
        assert math.hypot(x, y) == pytest.approx(3.175)


def test_validation_points_square_plane_has_zero_beta():
    points = structural.validation_points(0.0, 123.0, 12.0, 90.0)
    assert [p[2] for p in points] == pytest.approx([12.0, 12.0, 12.0])
    angles = structural.local_angles(geometry.fit_plane(*points).normal, 90.0)
    assert angles.alpha == pytest.approx(0.0, abs=1e-6)
    assert angles.beta == 0.0


def test_validation_points_clamped_into_range():
    points = structural.validation_points(60.0, 0.0, 1.0, 90.0, z_range=(0.0, 30.0))
    zs = [p[2] for p in points]
    assert min(zs) == 0.0
    assert all(0.0 <= z <= 30.0 for z in zs)


def test_validation_points_rejects_bad_alpha():
    with pytest.raises(ValueError):
        structural.validation_points(95.0, 0.0, 10.0, 90.0)
    with pytest.raises(NoAxisIntersection):
        structural.validation_points(90.0, 0.0, 10.0, 90.0)


def test_local_angles_ignores_normal_sign():
    normal = np.array([0.2, -0.4, 0.8])
    assert structural.local_angles(normal, 90.0) == structural.local_angles(-normal, 90.0)


def test_local_angles_axis_parallel_normal():
    angles = structural.local_angles((0.0, 0.0, -1.0), 95.0)
    assert angles.alpha == 0.0
    assert angles.beta == 0.0


def test_local_angles_beta_measured_from_boh():
    # normal horizontal part points to +X (0 deg); BOH line at 90 deg
    angles = structural.local_angles((1.0, 0.0, 1.0), 90.0)
    assert angles.alpha == pytest.approx(45.0)
    assert angles.beta == pytest.approx(270.0)


def test_local_angles_rejects_zero_normal():
    with pytest.raises(ValueError):
        structural.local_angles((0.0, 0.0, 0.0), 90.0)


# ---------------------------------------------------------------------------
# True orientation
# ---------------------------------------------------------------------------

def _scenario_normal():
    """ENU normal for hole 45/-65, alpha 30, beta 15, BOH 90, written out by hand."""
    s15, c15 = math.sin(math.radians(15.0)), math.cos(math.radians(15.0))
    s65, c65 = math.sin(math.radians(65.0)), math.cos(math.radians(65.0))
    c30 = math.cos(math.radians(30.0))
    half_root2 = math.sqrt(2.0) / 2.0
    common = -0.5 * c65 * s15 + s65 * c30
    east = half_root2 * (common - 0.5 * c15)
    north = half_root2 * (common + 0.5 * c15)
    up = 0.5 * s65 * s15 + c65 * c30
    return east, north, up


def test_real_orientation_regression_fixture():
    hole = DrillHoleOrientation(azimuth=45.0, dip=-65.0)
    result = structural.real_orientation(30.0, 15.0, 90.0, hole)
    east, north, up = _scenario_normal()
    assert result.dip == pytest.approx(math.degrees(math.asin(up)), abs=1e-9)
    assert result.dip_direction == pytest.approx(math.degrees(math.atan2(east, north)) + 180.0, abs=1e-9)
    assert result.dip == pytest.approx(28.9000, abs=1e-3)
    assert result.dip_direction == pytest.approx(191.5187, abs=1e-3)
    again = structural.real_orientation(30.0, 15.0, 90.0, hole)
    assert again.dip == result.dip
    assert again.dip_direction == result.dip_direction


def test_real_orientation_vertical_hole():
    hole = DrillHoleOrientation(azimuth=0.0, dip=-90.0)
    result = structural.real_orientation(30.0, 45.0, 90.0, hole)
    assert result.dip == pytest.approx(math.degrees(math.asin(0.5 * math.sin(math.radians(45.0)))))
    assert result.dip_direction == pytest.approx(math.degrees(math.atan(math.sqrt(6.0))) + 180.0)


def test_real_orientation_horizontal_hole():
    hole = DrillHoleOrientation(azimuth=90.0, dip=0.0)
    result = structural.real_orientation(45.0, 0.0, 90.0, hole)
    assert result.dip == pytest.approx(45.0)
    assert result.dip_direction == pytest.approx(90.0)


@pytest.mark.parametrize(
    "alpha, beta, azimuth, dip",
    list(itertools.product([0.0, 15.0, 45.0, 75.0, 90.0], [0.0, 90.0, 225.0, 345.0],
                           [0.0, 137.0, 359.5], [-90.0, -45.0, 0.0, 30.0])),
)
def test_real_orientation_ranges(alpha, beta, azimuth, dip):
    result = structural.real_orientation(alpha, beta, 90.0, DrillHoleOrientation(azimuth, dip))
    assert 0.0 <= result.dip <= 90.0
    assert 0.0 <= result.dip_direction < 360.0


def test_real_orientation_rejects_non_finite():
    hole = DrillHoleOrientation(azimuth=45.0, dip=-65.0)
    with pytest.raises(InvalidNumericInput):
        structural.real_orientation(float("nan"), 15.0, 90.0, hole)
    with pytest.raises(InvalidNumericInput):
        structural.real_orientation(30.0, 15.0, float("inf"), hole)


def test_rotation_matrix_is_orthonormal():
    matrix = structural.drillhole_rotation_matrix(137.0, -58.0)
    assert np.allclose(matrix @ matrix.T, np.eye(3))
    assert np.linalg.det(matrix) == pytest.approx(1.0)


def test_apply_real_orientation_uses_boh_lines():
    df = pd.DataFrame({
        "alpha": [30.0, 30.0],
        "beta": [15.0, 15.0],
        "depth_cm": [5.0, 20.0],
    })
    hole = DrillHoleOrientation(azimuth=45.0, dip=-65.0)
    out = structural.apply_real_orientation(df, hole, boh=BOHReference(80.0, 100.0))
    assert out["boh_angle"].tolist() == [80.0, 100.0]
    expected = structural.real_orientation(30.0, 15.0, 100.0, hole)
    assert out["dip"].iloc[1] == pytest.approx(expected.dip)
    assert out["azimuth"].iloc[1] == pytest.approx(expected.dip_direction)
    assert "dip" not in df.columns


def test_apply_real_orientation_requires_angle_columns():
    df = pd.DataFrame({"alpha": [30.0], "depth_cm": [5.0]})
    with pytest.raises(ValueError, match="missing column.*beta"):
        structural.apply_real_orientation(df, DrillHoleOrientation(45.0, -65.0), boh=BOHReference())


def test_apply_real_orientation_needs_boh():
    df = pd.DataFrame({"alpha": [30.0], "beta": [15.0], "depth_cm": [5.0]})
    with pytest.raises(ValueError, match="BOHReference"):
        structural.apply_real_orientation(df, DrillHoleOrientation(45.0, -65.0))


def test_apply_real_orientation_empty():
    out = structural.apply_real_orientation(pd.DataFrame(), DrillHoleOrientation(45.0, -65.0))
    assert out.empty


# ---------------------------------------------------------------------------
# Table helpers
# ---------------------------------------------------------------------------

def test_compute_strike():
    az = pd.Series([90, 180, 270, 0])
    strike = structural.compute_strike(az)
    assert list(strike) == [0, 90, 180, 270]


def test_normalize_dip_azimuth():
    df = pd.DataFrame({
        "dip": [-5.0, 45.0, 95.0],
        "azimuth": [370.0, 180.0, -10.0],
    })
    out = structural.normalize_dip_azimuth(df)
    # Dip clipped to [0, 90]
    assert out["dip"].tolist() == [0.0, 45.0, 90.0]
    # Azimuth modulo 360
    assert out["azimuth"].tolist() == [10.0, 180.0, 350.0]
