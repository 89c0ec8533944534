## foundational point and vector operations for monotile
## Copyright (c) 2023 monotile contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""foundational point and vector operations for **monotile**

Points are immutable ``Point`` values with ``x``, ``y`` and ``z``
coordinates.  Vectors are represented by the same type; a normal is
simply a ``Point`` of unit magnitude.

When a point has to pass through a ``monotile.xform.Matrix`` it is
lifted into a homogeneous coordinates 4 vector ``[x, y, z, 1]`` with
``vect()``, and brought back down with ``Point.from_vect()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import cos, pi, radians, sin, sqrt
from typing import List, Sequence

## constants
## ------------------------

epsilon = 5e-6

## these come up a lot
sqrt3 = sqrt(3)
cos30 = cos(radians(30))
sin30 = sin(radians(30))
pi2 = 2.0 * pi


def close(a: float, b: float) -> bool:
    """ are two scalars the same within epsilon
    """
    return abs(a - b) < epsilon


@dataclass(frozen=True)
class Point:
    """Immutable 3D coordinate triple."""

    x: float
    y: float
    z: float = 0.0

    def sub(self, q: "Point") -> "Point":
        """ 3 vector, `self - q`"""
        return Point(self.x - q.x, self.y - q.y, self.z - q.z)

    def add(self, q: "Point") -> "Point":
        """ 3 vector, `self + q`"""
        return Point(self.x + q.x, self.y + q.y, self.z + q.z)

    def scale(self, c: float) -> "Point":
        return Point(self.x * c, self.y * c, self.z * c)

    def lift(self, z: float) -> "Point":
        """Return the same XY position at height ``z``."""
        return Point(self.x, self.y, z)

    def __str__(self) -> str:
        return f"{self.x:.6e} {self.y:.6e} {self.z:.6e}"

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    @classmethod
    def from_vect(cls, v: Sequence[float]) -> "Point":
        """Project a homogeneous 4 vector back to a point."""
        w = v[3] if len(v) > 3 else 1.0
        if w == 1.0:
            return cls(v[0], v[1], v[2])
        return cls(v[0] / w, v[1] / w, v[2] / w)


def vect(p: Point) -> List[float]:
    """Lift a point into homogeneous coordinates, ``[x, y, z, 1]``."""
    return [p.x, p.y, p.z, 1.0]


## R^3 -> R^3 functions
## ------------------------------------------------

def cross(a: Point, b: Point) -> Point:
    """Compute the right-handed cross product a x b"""
    return Point(a.y * b.z - a.z * b.y,
                 a.z * b.x - a.x * b.z,
                 a.x * b.y - a.y * b.x)


def normalize(a: Point) -> Point:
    """ scale vector ``a`` to unit length"""
    m = mag(a)
    return Point(a.x / m, a.y / m, a.z / m)


## R^3 -> R functions
## ----------------------------------------

def dot(a: Point, b: Point) -> float:
    """ 3 vector ``a`` dot ``b`` """
    return a.x * b.x + a.y * b.y + a.z * b.z


def mag(a: Point) -> float:
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a.x * a.x + a.y * a.y + a.z * a.z)


def dist(a: Point, b: Point) -> float:
    """ compute the euclidean distance between points ``a`` and ``b``"""
    return mag(a.sub(b))


def vclose(a: Point, b: Point) -> bool:
    """determine if two points are the same, to within epsilon"""
    return close(dist(a, b), 0.0)


## operations on polygons in the XY plane
## ----------------------------------------

def polygon_area(points: Sequence[Point]) -> float:
    """Signed shoelace area of an XY polygon.

    The polygon is implicitly closed.  The result is positive for a
    counter-clockwise vertex order and negative for a clockwise one.
    """
    n = len(points)
    acc = 0.0
    for i in range(n):
        p = points[i]
        q = points[(i + 1) % n]
        acc += p.x * q.y - q.x * p.y
    return 0.5 * acc


def centroid(points: Sequence[Point]) -> Point:
    """Average of the vertices of a point list."""
    n = len(points)
    if n == 0:
        raise ValueError('centroid of an empty point list')
    return Point(sum(p.x for p in points) / n,
                 sum(p.y for p in points) / n,
                 sum(p.z for p in points) / n)


__all__ = [
    'epsilon',
    'sqrt3',
    'cos30',
    'sin30',
    'pi2',
    'close',
    'Point',
    'vect',
    'cross',
    'normalize',
    'dot',
    'mag',
    'dist',
    'vclose',
    'polygon_area',
    'centroid',
]
