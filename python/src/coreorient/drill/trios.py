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

"""Point trios picked on the virtual core and the planes they define.

A trio grows point by point until it holds three points, at which point it is
sealed into the trio list and its plane is fitted. Every trio except the first
gets its depth from the plane's crossing with the core axis; the first one waits
for a depth typed in by the operator, and no further points can be picked until
it has one.

Validation trios are generated from known alpha/beta values to check the maths.
They live in the same list but never count towards the trio limit, never block
picking and are left out of reporting.
"""

import enum
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from coreorient.config import MIN_DEPTH, POINTS_PER_TRIO, CoreConfig
from coreorient.datamodel import PlaneEquation, Point3D, require_finite
from coreorient.drill import geometry, structural
from coreorient.errors import (
    DepthOutOfRange, FirstTrioDepthMissing, GeometryError, SceneNotCaptured,
    TrioLimitReached, TrioNotFound,
)

logger = logging.getLogger(__name__)


class TrioState(enum.Enum):
    EMPTY = "empty"
    BUILDING = "building"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PointTrio:
    id: str
    points: Tuple[Point3D, ...]
    color: str
    created_at: datetime
    depth: Optional[float] = None
    is_validation: bool = False
    plane: Optional[PlaneEquation] = None
    # geometry failure that left plane or depth unset
    error: Optional[GeometryError] = None
    # depth typed in by the operator; never overwritten by a refit
    manual_depth: bool = False
    structure_type: Optional[str] = None

    @property
    def state(self):
        if not self.points:
            return TrioState.EMPTY
        if len(self.points) < POINTS_PER_TRIO:
            return TrioState.BUILDING
        return TrioState.COMPLETE

    @property
    def is_complete(self):
        return self.state is TrioState.COMPLETE


@dataclass(frozen=True)
class Plane:
    id: str
    trio_id: str
    equation: PlaneEquation
    color: str
    visible: bool
    outline: np.ndarray = field(compare=False, repr=False)
    is_validation: bool = False


class TrioManager:
    """Owns the trio list for one core session.

    Parameters
    ----------
    config : CoreConfig, optional
        Cylinder size, trio limit, depth bound and colour palette.
    scene_captured : bool or callable
        Gate for point picking; a callable is evaluated on every ``add_point``.
    """

    def __init__(self, config=None, scene_captured=True):
        self.config = config or CoreConfig()
        self._scene_captured = scene_captured
        self._trios = []
        self._current = None
        self._selected_id = None
        self._hidden_planes = set()
        self.validation_visible = True
        self._trio_seq = 0
        self._point_seq = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def trios(self):
        return tuple(self._trios)

    @property
    def normal_trios(self):
        return tuple(t for t in self._trios if not t.is_validation)

    @property
    def validation_trios(self):
        return tuple(t for t in self._trios if t.is_validation)

    @property
    def current_trio(self):
        return self._current

    @property
    def trio_count(self):
        return len(self.normal_trios)

    @property
    def validation_count(self):
        return len(self.validation_trios)

    @property
    def current_point_count(self):
        return len(self._current.points) if self._current is not None else 0

    @property
    def can_add_more_trios(self):
        return self.trio_count < self.config.max_trios

    @property
    def first_depth_pending(self):
        normal = self.normal_trios
        return bool(normal) and normal[0].depth is None

    @property
    def selected_trio_id(self):
        return self._selected_id

    def set_scene_captured(self, captured):
        self._scene_captured = captured

    def scene_is_captured(self):
        gate = self._scene_captured
        return bool(gate() if callable(gate) else gate)

    def get_trio(self, trio_id):
        if self._current is not None and self._current.id == trio_id:
            return self._current
        return self._trios[self._index_of(trio_id)]

    def select_trio(self, trio_id):
        if trio_id is not None:
            self._index_of(trio_id)
        self._selected_id = trio_id

    # ------------------------------------------------------------------
    # Picking
    # ------------------------------------------------------------------

    def add_point(self, point):
        """Append a picked point to the trio being built and return that trio.

        Raises SceneNotCaptured, FirstTrioDepthMissing or TrioLimitReached without
        touching any state when picking is not allowed.
        """
        if not self.scene_is_captured():
            raise SceneNotCaptured("Capture the scene photo before picking points")
        x, y, z = (float(v) for v in geometry.as_vector(point))
        if self.first_depth_pending:
            first = self.normal_trios[0]
            raise FirstTrioDepthMissing(f"Set the depth of the first trio ({first.id}) before picking more points")
        if self._current is None and not self.can_add_more_trios:
            raise TrioLimitReached(f"Maximum number of trios ({self.config.max_trios}) reached")

        point_id = point.id if isinstance(point, Point3D) and point.id else self._next_point_id()
        if self._current is None:
            self._current = PointTrio(
                id=self._next_trio_id(),
                points=(),
                color=self._color_for(self.trio_count),
                created_at=datetime.now(),
            )
        trio = replace(self._current, points=self._current.points + (Point3D(x, y, z, id=point_id),))
        logger.info("Point added (%d/%d): (%.2f, %.2f, %.2f)", len(trio.points), POINTS_PER_TRIO, x, y, z)

        if not trio.is_complete:
            self._current = trio
            return trio

        is_first = self.trio_count == 0
        trio = self._fit(trio, resolve_depth=not is_first)
        self._trios.append(trio)
        self._current = None
        if is_first:
            logger.info("Trio %s completed; waiting for its manual depth", trio.id)
        else:
            logger.info("Trio %s completed at depth %s", trio.id, _fmt_depth(trio.depth))
        return trio

    def remove_last_point(self):
        """Undo the last picked point; returns the in-progress trio or None once it is empty."""
        if self._current is None:
            return None
        points = self._current.points[:-1]
        if not points:
            logger.info("Trio %s discarded", self._current.id)
            self._current = None
            return None
        self._current = replace(self._current, points=points)
        return self._current

    def cancel_current_trio(self):
        cancelled = self._current
        self._current = None
        if cancelled is not None:
            logger.info("Current trio %s cancelled", cancelled.id)
        return cancelled

    def update_point_position(self, trio_id, point_id, new_position):
        """Move one point and recompute the trio's plane, and its depth unless that was typed in."""
        x, y, z = (float(v) for v in geometry.as_vector(new_position))
        in_progress = self._current is not None and self._current.id == trio_id
        if in_progress:
            trio = self._current
        else:
            index = self._index_of(trio_id)
            trio = self._trios[index]

        points = list(trio.points)
        for i, existing in enumerate(points):
            if existing.id == point_id:
                points[i] = Point3D(x, y, z, id=point_id)
                break
        else:
            raise KeyError(f"No point {point_id!r} in trio {trio_id!r}")

        updated = replace(trio, points=tuple(points))
        if in_progress:
            self._current = updated
            return updated
        updated = self._fit(updated, resolve_depth=not self._keeps_depth(trio))
        self._trios[index] = updated
        logger.debug("Point %s of %s moved to (%.2f, %.2f, %.2f)", point_id, trio_id, x, y, z)
        return updated

    # ------------------------------------------------------------------
    # Depth
    # ------------------------------------------------------------------

    def set_trio_depth(self, trio_id, depth, max_depth=None):
        """Set a depth (cm) by hand; required for the first trio.

        ``max_depth`` defaults to the configured hole length in centimetres.
        """
        require_finite(depth=depth)
        index = self._index_of(trio_id)
        limit = self.config.max_depth if max_depth is None else max_depth
        if depth < MIN_DEPTH or depth > limit:
            raise DepthOutOfRange(depth, MIN_DEPTH, limit)
        self._trios[index] = replace(self._trios[index], depth=float(depth), manual_depth=True)
        logger.info("Depth set for trio %s: %.2fcm", trio_id, depth)
        return self._trios[index]

    def set_trio_structure_type(self, trio_id, structure_type):
        """Tag a trio with a structure type (fault, vein, ...); ``None`` or a blank name clears it."""
        index = self._index_of(trio_id)
        name = structure_type.strip() if structure_type is not None else None
        self._trios[index] = replace(self._trios[index], structure_type=name or None)
        logger.info("Structure type of trio %s set to %s", trio_id, name or "none")
        return self._trios[index]

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def remove_trio(self, trio_id):
        if self._current is not None and self._current.id == trio_id:
            return self.cancel_current_trio()
        removed = self._trios.pop(self._index_of(trio_id))
        self._hidden_planes.discard(_plane_id(trio_id))
        if self._selected_id == trio_id:
            self._selected_id = None
        logger.info("Trio %s removed", trio_id)
        return removed

    def clear_all_trios(self):
        self._trios = []
        self._current = None
        self._selected_id = None
        self._hidden_planes.clear()
        logger.info("All trios cleared")

    def clear_validation_trios(self):
        removed = [t.id for t in self._trios if t.is_validation]
        self._trios = [t for t in self._trios if not t.is_validation]
        for trio_id in removed:
            self._hidden_planes.discard(_plane_id(trio_id))
        if self._selected_id in removed:
            self._selected_id = None
        logger.info("%d validation trio(s) cleared", len(removed))

    # ------------------------------------------------------------------
    # Validation trios
    # ------------------------------------------------------------------

    def create_validation_trio(self, alpha, beta, depth, boh_angle):
        """Add a trio whose points lie on the plane with the given local angles at ``depth``."""
        coords = structural.validation_points(
            alpha, beta, depth, boh_angle,
            radius=self.config.radius,
            z_range=(0.0, self.config.height),
        )
        trio = PointTrio(
            id=self._next_trio_id(prefix="validation"),
            points=tuple(Point3D(x, y, z, id=self._next_point_id()) for x, y, z in coords),
            color=self._color_for(self.validation_count),
            created_at=datetime.now(),
            depth=float(depth),
            is_validation=True,
        )
        trio = self._fit(trio, resolve_depth=False)
        self._trios.append(trio)
        logger.info("Validation trio %s created: alpha=%.2f beta=%.2f depth=%.2f BOH=%.1f",
                    trio.id, alpha, beta, depth, boh_angle)
        return trio

    def set_validation_visible(self, visible):
        self.validation_visible = bool(visible)

    # ------------------------------------------------------------------
    # Planes
    # ------------------------------------------------------------------

    def toggle_plane_visibility(self, plane_id):
        if not any(_plane_id(t.id) == plane_id for t in self._trios):
            raise KeyError(f"No plane with id {plane_id!r}")
        if plane_id in self._hidden_planes:
            self._hidden_planes.remove(plane_id)
            return True
        self._hidden_planes.add(plane_id)
        return False

    def planes(self, include_hidden=True):
        """Plane snapshots for every complete trio that has an equation."""
        planes = []
        for trio in self._trios:
            if trio.plane is None:
                continue
            plane_id = _plane_id(trio.id)
            visible = plane_id not in self._hidden_planes and (self.validation_visible or not trio.is_validation)
            if not visible and not include_hidden:
                continue
            planes.append(Plane(
                id=plane_id,
                trio_id=trio.id,
                equation=trio.plane,
                color=trio.color,
                visible=visible,
                outline=geometry.cylinder_intersection(trio.plane, self.config.radius, self.config.outline_points),
                is_validation=trio.is_validation,
            ))
        return planes

    def local_angles(self, trio_id, boh):
        """Alpha/beta of a trio's plane against the BOH line chosen by its depth, or None."""
        trio = self.get_trio(trio_id)
        if trio.plane is None or trio.depth is None:
            return None
        return structural.local_angles(trio.plane.normal, boh.angle_for_depth(trio.depth))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fit(self, trio, resolve_depth):
        try:
            plane = geometry.fit_plane(*trio.points)
        except GeometryError as exc:
            logger.warning("Trio %s: %s", trio.id, exc)
            depth = None if resolve_depth else trio.depth
            return replace(trio, plane=None, depth=depth, error=exc)
        if not resolve_depth:
            return replace(trio, plane=plane, error=None)
        try:
            depth = geometry.resolve_depth(plane)
        except GeometryError as exc:
            logger.warning("Trio %s: %s", trio.id, exc)
            return replace(trio, plane=plane, depth=None, error=exc)
        return replace(trio, plane=plane, depth=depth, error=None)

    def _keeps_depth(self, trio):
        if trio.manual_depth:
            return True
        # the first trio never gets a fitted depth, it waits for a typed one
        return trio.depth is None and self._is_first(trio)

    def _is_first(self, trio):
        if trio.is_validation:
            return False
        normal = self.normal_trios
        return bool(normal) and normal[0].id == trio.id

    def _index_of(self, trio_id):
        for index, trio in enumerate(self._trios):
            if trio.id == trio_id:
                return index
        raise TrioNotFound(trio_id)

    def _color_for(self, count):
        palette = self.config.palette
        return palette[count % len(palette)]

    def _next_trio_id(self, prefix="trio"):
        self._trio_seq += 1
        return f"{prefix}-{self._trio_seq}"

    def _next_point_id(self):
        self._point_seq += 1
        return f"point-{self._point_seq}"


def _plane_id(trio_id):
    return f"plane-{trio_id}"


def _fmt_depth(depth):
    return "n/a" if depth is None else f"{depth:.2f}cm"
