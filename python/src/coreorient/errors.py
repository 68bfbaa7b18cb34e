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

"""Exception types raised by the orientation core.

Geometry failures are recorded on the affected trio by the trio manager;
``OperationRejected`` subclasses mean the requested mutation did not happen.
"""


class CoreOrientError(Exception):
    """Base class for all coreorient errors."""


class InvalidNumericInput(CoreOrientError, ValueError):
    """A coordinate or angle was NaN, infinite or not a number."""


class GeometryError(CoreOrientError, ValueError):
    """Points or planes do not admit the requested construction."""


class DegeneratePlane(GeometryError):
    """The three points are collinear (or coincide) and define no plane."""


class NoAxisIntersection(GeometryError):
    """The plane is parallel to the core axis and never crosses it."""


class OperationRejected(CoreOrientError):
    """A gating rule blocked a trio manager mutation."""


class SceneNotCaptured(OperationRejected):
    """Points cannot be picked before the scene photo is captured."""


class FirstTrioDepthMissing(OperationRejected):
    """The first trio needs a manual depth before any further picking."""


class TrioLimitReached(OperationRejected):
    """The maximum number of structural trios is already in use."""


class DepthOutOfRange(CoreOrientError, ValueError):
    def __init__(self, depth, min_depth, max_depth):
        self.depth = depth
        self.min_depth = min_depth
        self.max_depth = max_depth
        super().__init__(
            f"Depth {depth}cm is outside the valid range "
            f"{min_depth}cm - {max_depth}cm ({min_depth / 100:g}m - {max_depth / 100:g}m)"
        )


class TrioNotFound(CoreOrientError, KeyError):
    def __init__(self, trio_id):
        self.trio_id = trio_id
        super().__init__(trio_id)

    def __str__(self):
        return f"No trio with id {self.trio_id!r}"
