"""Oriented triangles, quads and extruded boxes.

Every solid produced by monotile is a ``Box``: a bottom and a top quad
joined by four derived side quads.  All faces are emitted as ``Facet``
triangles whose vertex order gives an outward normal by the right-hand
rule, which is what STL consumers expect.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from monotile.errors import ErrorKind, InvariantViolation
from monotile.geom import Point, centroid, cross, normalize


@dataclass(frozen=True)
class Facet:
    """Immutable oriented triangle."""

    v0: Point
    v1: Point
    v2: Point

    def normal(self) -> Point:
        """Return the unit normal of ``(v1 - v0) x (v2 - v0)``.

        Collinear vertices are not a handled case; no code path in
        monotile produces them.
        """

        u = self.v1.sub(self.v0)
        v = self.v2.sub(self.v0)
        return normalize(cross(u, v))

    def centroid(self) -> Point:
        return centroid(self.vertices)

    @property
    def vertices(self) -> Tuple[Point, Point, Point]:
        return (self.v0, self.v1, self.v2)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)


@dataclass(frozen=True)
class Quad:
    """Planar, consistently wound four-vertex polygon."""

    v0: Point
    v1: Point
    v2: Point
    v3: Point

    @property
    def vertices(self) -> Tuple[Point, Point, Point, Point]:
        return (self.v0, self.v1, self.v2, self.v3)

    def __getitem__(self, i: int) -> Point:
        return self.vertices[i]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.vertices)

    def facets(self) -> Tuple[Facet, Facet]:
        """Split along the v2-v0 diagonal.

        The split is fixed; callers supply vertices in winding order.
        """

        return (Facet(self.v0, self.v1, self.v2),
                Facet(self.v2, self.v3, self.v0))

    def normal(self) -> Point:
        return self.facets()[0].normal()


@dataclass(frozen=True)
class Box:
    """Extruded solid bounded by a bottom and a top quad.

    The bottom quad must be wound so that its normal faces -Z and the
    top quad so that its normal faces +Z; a violation raises
    ``InvariantViolation``.  Side faces are derived on demand.
    """

    bottom: Quad
    top: Quad

    def __post_init__(self) -> None:
        bz = self.bottom.normal().z
        if bz >= 0:
            raise InvariantViolation(ErrorKind.BAD_BOTTOM_NORMAL,
                                     f"normal z = {bz:.6e}")
        tz = self.top.normal().z
        if tz <= 0:
            raise InvariantViolation(ErrorKind.BAD_TOP_NORMAL,
                                     f"normal z = {tz:.6e}")

    def sides(self) -> List[Quad]:
        """The four side quads, one per footprint edge.

        With ``bottom = (p0, p1, p2, p3)`` the top is stored as
        ``(p0', p3', p2', p1')``, so the quad over edge ``p[i] p[i+1]``
        is ``(p'[i], p'[i+1], p[i+1], p[i])``.
        """

        b = self.bottom
        t = self.top
        return [
            Quad(t[0], t[3], b[1], b[0]),
            Quad(t[3], t[2], b[2], b[1]),
            Quad(t[2], t[1], b[3], b[2]),
            Quad(t[1], t[0], b[0], b[3]),
        ]

    def facets(self) -> List[Facet]:
        """Return the 12 outward-facing triangles of the solid.

        Order: two bottom-cap facets, two top-cap facets, then two per
        side quad.
        """

        result: List[Facet] = []
        result.extend(self.bottom.facets())
        result.extend(self.top.facets())
        for side in self.sides():
            result.extend(side.facets())
        return result

    def vertices(self) -> List[Point]:
        return list(self.bottom) + list(self.top)

    def centroid(self) -> Point:
        return centroid(self.vertices())


__all__ = ['Facet', 'Quad', 'Box']
