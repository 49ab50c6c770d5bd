"""
Tie points and tie-point set maintenance.

A tie point pairs a work point (image space, "x_y") with a reference point
(map or reference-image space, "u_v"). Tie points compare on the composite
key (work_point, reference_point); the role is metadata.

Maintenance routines operate on caller-owned lists:
- remove_duplicate_points: drop repeated or ambiguous reference locations
- compute_origins: centroids of the control tie points in both systems
- change_origins: shift both systems to new origins, in place
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, MutableSequence, Tuple

from ..errors import NoControlPointsError
from .point import Point

logger = logging.getLogger(__name__)


class TiePointRole(Enum):
    """
    Role of a tie point in a registration.

    - CONTROL_CHECK: used both to compute and to check the transformation
    - CONTROL: used to compute the transformation
    - CHECK: used only to check the transformation
    - NONE: ignored
    """
    CONTROL_CHECK = "control_check"
    CONTROL = "control"
    CHECK = "check"
    NONE = "none"

    @property
    def is_control(self) -> bool:
        """True for roles that take part in origin computation."""
        return self in (TiePointRole.CONTROL, TiePointRole.CONTROL_CHECK)


@dataclass(order=True, unsafe_hash=True)
class TiePoint:
    """
    Correspondence between a work point and a reference point.

    Attributes:
        work_point: coordinate in the work (image) system
        reference_point: coordinate in the reference system
        role: how the tie point takes part in a registration
    """

    work_point: Point = field(default_factory=Point)
    reference_point: Point = field(default_factory=Point)
    role: TiePointRole = field(default=TiePointRole.CONTROL_CHECK, compare=False)

    def __post_init__(self):
        """Convert string roles to the enum."""
        if isinstance(self.role, str):
            self.role = TiePointRole(self.role.lower())

    def set(self, work_point: Point, reference_point: Point,
            role: TiePointRole = TiePointRole.CONTROL_CHECK) -> None:
        self.work_point = work_point
        self.reference_point = reference_point
        self.role = role

    def get(self) -> Tuple[Point, Point]:
        """Return (work_point, reference_point)."""
        return self.work_point, self.reference_point

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tie point to dictionary."""
        return {
            "work_point": self.work_point.to_dict(),
            "reference_point": self.reference_point.to_dict(),
            "role": self.role.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TiePoint':
        """
        Create a TiePoint from a dictionary.

        Raises:
            KeyError: If a point is missing
            ValueError: If the role is unknown
        """
        return cls(
            work_point=Point.from_dict(data["work_point"]),
            reference_point=Point.from_dict(data["reference_point"]),
            role=TiePointRole(data.get("role", TiePointRole.CONTROL_CHECK.value)),
        )

    def __str__(self) -> str:
        return f"Work Point:{self.work_point} Reference Point:{self.reference_point}"

    @staticmethod
    def remove_duplicate_points(points: MutableSequence['TiePoint'], max_dif: float) -> int:
        """
        Remove tie points that share a reference point, in place.

        For each position i, every later entry with an equal reference point
        is removed. If any of those entries has a work point farther than
        max_dif from entry i in x or in y, the correspondence is ambiguous
        and entry i is removed as well.

        Args:
            points: tie points, modified in place
            max_dif: per-axis tolerance for work points of a duplicate

        Returns:
            Number of removed tie points
        """
        if max_dif < 0:
            raise ValueError("max_dif cannot be negative")

        initial = len(points)
        i = 0
        while i + 1 < len(points):
            work_i, ref_i = points[i].get()
            work_coord_equal = True

            j = i + 1
            while j < len(points):
                work_j, ref_j = points[j].get()
                if ref_i == ref_j:
                    if abs(work_i.x - work_j.x) > max_dif or abs(work_i.y - work_j.y) > max_dif:
                        work_coord_equal = False
                    del points[j]
                else:
                    j += 1

            if work_coord_equal:
                i += 1
            else:
                logger.debug("Removing ambiguous tie point %s", points[i])
                del points[i]

        removed = initial - len(points)
        if removed:
            logger.debug("Removed %d duplicate tie points, %d remain", removed, len(points))
        return removed

    @staticmethod
    def compute_origins(points: Iterable['TiePoint']) -> Tuple[Point, Point]:
        """
        Centroids of the control tie points in both coordinate systems.

        Only CONTROL and CONTROL_CHECK tie points are averaged.

        Returns:
            (work_origin, reference_origin)

        Raises:
            NoControlPointsError: If no tie point has a control role
        """
        x0 = y0 = u0 = v0 = 0.0
        n = 0
        for tp in points:
            if tp.role.is_control:
                x0 += tp.work_point.x
                y0 += tp.work_point.y
                u0 += tp.reference_point.x
                v0 += tp.reference_point.y
                n += 1

        if n == 0:
            raise NoControlPointsError("No CONTROL or CONTROL_CHECK tie points to compute origins from")

        return Point(x0 / n, y0 / n), Point(u0 / n, v0 / n)

    @staticmethod
    def change_origins(points: Iterable['TiePoint'], work_origin: Point, reference_origin: Point) -> None:
        """
        Shift every tie point to new origins, in place, whatever its role.

        Args:
            points: tie points to shift
            work_origin: subtracted from each work point
            reference_origin: subtracted from each reference point
        """
        for tp in points:
            tp.work_point = _shifted(tp.work_point, work_origin)
            tp.reference_point = _shifted(tp.reference_point, reference_origin)


remove_duplicate_points = TiePoint.remove_duplicate_points
compute_origins = TiePoint.compute_origins
change_origins = TiePoint.change_origins


def _shifted(point: Point, origin: Point) -> Point:
    # Tie points may share Point objects, so shift a copy
    moved = copy.copy(point)
    moved -= origin
    return moved


def copy_tie_points(points: Iterable[TiePoint]) -> List[TiePoint]:
    """Copy a tie-point collection so maintenance leaves the caller's points alone."""
    return [
        TiePoint(copy.copy(tp.work_point), copy.copy(tp.reference_point), tp.role)
        for tp in points
    ]
