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

"""Tests for straight-hole positioning."""

import pandas as pd
import pytest

from coreorient.datamodel import Collar, DrillHoleOrientation
from coreorient.drill import desurvey
from coreorient.errors import InvalidNumericInput


def test_project_along_hole_inclined():
    coords = desurvey.project_along_hole(Collar(0.0, 0.0, 0.0), DrillHoleOrientation(60.0, -60.0), 100.0)
    assert coords.east == pytest.approx(43.30, abs=1e-2)
    assert coords.north == pytest.approx(25.0, abs=1e-2)
    assert coords.elevation == pytest.approx(-86.60, abs=1e-2)


def test_project_along_hole_vertical():
    collar = Collar(500000.0, 6900000.0, 300.0)
    coords = desurvey.project_along_hole(collar, DrillHoleOrientation(0.0, -90.0), 100.0)
    assert coords.east == pytest.approx(500000.0, abs=1e-6)
    assert coords.north == pytest.approx(6900000.0, abs=1e-6)
    assert coords.elevation == pytest.approx(200.0)


def test_project_along_hole_collar_at_zero_depth():
    collar = Collar(10.0, 20.0, 30.0)
    coords = desurvey.project_along_hole(collar, DrillHoleOrientation(123.0, -45.0), 0.0)
    assert (coords.east, coords.north, coords.elevation) == (10.0, 20.0, 30.0)
    assert str(coords) == "E: 10.00m, N: 20.00m, Z: 30.00m"


def test_project_along_hole_rejects_nan():
    with pytest.raises(InvalidNumericInput):
        desurvey.project_along_hole(Collar(0.0, 0.0, 0.0), DrillHoleOrientation(0.0, -90.0), float("nan"))


def test_hole_trace_ends_at_total_depth():
    trace = desurvey.hole_trace(Collar(0.0, 0.0, 100.0), DrillHoleOrientation(0.0, -90.0), 25.0,
                                step=10.0, hole_id="DH001")
    assert trace["md"].tolist() == [0.0, 10.0, 20.0, 25.0]
    assert trace["elevation"].tolist() == pytest.approx([100.0, 90.0, 80.0, 75.0])
    assert (trace["hole_id"] == "DH001").all()


def test_hole_trace_zero_length():
    trace = desurvey.hole_trace(Collar(0.0, 0.0, 0.0), DrillHoleOrientation(0.0, -90.0), 0.0)
    assert len(trace) == 1


def test_hole_trace_rejects_bad_step():
    with pytest.raises(ValueError):
        desurvey.hole_trace(Collar(0.0, 0.0, 0.0), DrillHoleOrientation(0.0, -90.0), 50.0, step=0.0)


def test_attach_structure_positions():
    structures = pd.DataFrame({"hole_id": ["DH001", "DH001", "DH001"], "depth": [0.0, 100.0, None]})
    collar = Collar(0.0, 0.0, 0.0)
    out = desurvey.attach_structure_positions(structures, collar, DrillHoleOrientation(60.0, -60.0))
    assert out["easting"].iloc[0] == pytest.approx(0.0)
    assert out["easting"].iloc[1] == pytest.approx(43.30, abs=1e-2)
    assert out["elevation"].iloc[1] == pytest.approx(-86.60, abs=1e-2)
    assert pd.isna(out["northing"].iloc[2])
    assert "easting" not in structures.columns
