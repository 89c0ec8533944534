"""Kite placement and the transform pipeline for the "hat" monotile.

The hat is made of eight congruent kites.  Each kite is described by a
destination position and a rotation, both applied to one canonical kite
footprint.  Building a kite runs its four footprint vertices through
deflate, scale, rotate, translate and (optionally) reflect, then
extrudes the result into a ``Box``.

To draw lines between the kites of a printed tile we build each kite
twice: once at full size, and once slightly inset and slightly taller.
The taller inset kite leaves a groove around its outline.

See https://arxiv.org/abs/2303.10798 for the tile itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from monotile import xform
from monotile.config import DEFAULT, TileConfig
from monotile.geom import Point, cos30, sin30, sqrt3
from monotile.mesh import Box, Quad

logger = logging.getLogger(__name__)

Z_AXIS = Point(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class KitePlacement:
    """Position (in kite units) and rotation (in degrees) of one kite."""

    pos: Tuple[float, float]
    rot: float


KITES: Tuple[KitePlacement, ...] = (
    KitePlacement(pos=(0.0, 0.0), rot=-60),
    KitePlacement(pos=(0.0, 0.0), rot=-120),
    KitePlacement(pos=(0.0, 0.0), rot=-180),
    KitePlacement(pos=(0.0, 0.0), rot=-240),
    KitePlacement(pos=(0.0, -2 * sqrt3), rot=60),
    KitePlacement(pos=(0.0, -2 * sqrt3), rot=120),
    KitePlacement(pos=(-3.0, -sqrt3), rot=-60),
    KitePlacement(pos=(-3.0, -sqrt3), rot=0),
)

## canonical kite, v0 is its bottom point.  Wound clockwise seen from
## +Z, which is what the bottom cap of a Box needs.
FOOTPRINT: Tuple[Point, Point, Point, Point] = (
    Point(0.0, 0.0),
    Point(0.0, sqrt3),
    Point(1.0, sqrt3),
    Point(sqrt3 * cos30, sqrt3 * sin30),
)


## transform stages, each maps a vertex list to a new one
## ---------------------------------------------------------

def deflate(points: Sequence[Point], inset: float) -> List[Point]:
    """Shrink toward the origin by ``1 - inset``, then shift by
    ``(inset*sin30, inset*cos30)`` so the inset kite stays inside the
    original.  A non-positive inset leaves the points unchanged.
    """

    if inset <= 0:
        return list(points)
    m = xform.Translation(Point(inset * sin30, inset * cos30, 0.0)).mul(
        xform.Scale(1 - inset))
    return m.apply(points)


def scale(points: Sequence[Point], unit: float) -> List[Point]:
    return xform.Scale(unit).apply(points)


def rotate(points: Sequence[Point], degrees: float) -> List[Point]:
    """Rotate counter-clockwise about the Z axis through the origin."""
    return xform.Rotation(Z_AXIS, degrees).apply(points)


def translate(points: Sequence[Point], dx: float, dy: float) -> List[Point]:
    return xform.Translation(Point(dx, dy, 0.0)).apply(points)


def reflect(points: Sequence[Point]) -> List[Point]:
    """Mirror across the Y axis.

    Negating X alone would invert the winding, so the vertex order is
    reversed as well: ``(v0, v1, v2, v3) -> (v3', v2', v1', v0')``.
    """

    return list(reversed(xform.Mirror().apply(points)))


## the builders below take a `reflect` flag that shadows the stage
_reflect = reflect


## kites
## ---------------------------------------------------------

def kite_outline(loc: Sequence[float], rotation: float, inset: float = 0.0,
                 reflect: bool = False,
                 config: TileConfig = DEFAULT) -> List[Point]:
    """Return the transformed footprint of one kite at z = 0.

    ``inset`` must be non-negative; a negative inset would grow the kite
    and sink the top of its solid below the bottom.
    """

    if inset < 0:
        raise ValueError(f"inset must be non-negative, got {inset}")

    pts = deflate(FOOTPRINT, inset)
    pts = scale(pts, config.unit)
    pts = rotate(pts, rotation)
    pts = translate(pts, loc[0] * config.unit, loc[1] * config.unit)
    if reflect:
        pts = _reflect(pts)
    return pts


def kite(loc: Sequence[float], rotation: float, inset: float = 0.0,
         reflect: bool = False, config: TileConfig = DEFAULT) -> Box:
    """Extrude one kite into a ``Box``.

    The top sits at ``(config.height + inset) * config.unit``, so an
    inset kite stands proud of its full-size twin.
    """

    p0, p1, p2, p3 = kite_outline(loc, rotation, inset, reflect, config)
    height = (config.height + inset) * config.unit
    bottom = Quad(p0, p1, p2, p3)
    top = Quad(p0.lift(height), p3.lift(height), p2.lift(height), p1.lift(height))
    return Box(bottom, top)


def placement_kite(placement: KitePlacement, inset: float = 0.0,
                   reflect: bool = False, config: TileConfig = DEFAULT) -> Box:
    return kite(placement.pos, placement.rot, inset, reflect, config)


def monotile(reflect: bool = False, config: TileConfig = DEFAULT,
             placements: Sequence[KitePlacement] = KITES) -> Iterator[Tuple[str, Box]]:
    """Yield ``(name, box)`` for the full tile.

    Each placement gives ``kite<i>`` followed by ``kite-inset<i>``.
    """

    for i, placement in enumerate(placements):
        logger.debug("kite %d: pos=%s rot=%s reflect=%s", i,
                     placement.pos, placement.rot, reflect)
        yield f"kite{i}", placement_kite(placement, 0.0, reflect, config)
        yield f"kite-inset{i}", placement_kite(placement, config.inset, reflect, config)


def monotile_outlines(reflect: bool = False, config: TileConfig = DEFAULT,
                      placements: Sequence[KitePlacement] = KITES
                      ) -> Iterator[Tuple[str, List[Point]]]:
    """Yield ``(layer, outline)`` for every kite and groove outline."""

    for placement in placements:
        yield "KITES", kite_outline(placement.pos, placement.rot, 0.0, reflect, config)
        yield "GROOVES", kite_outline(placement.pos, placement.rot,
                                      config.inset, reflect, config)


__all__ = [
    'KitePlacement',
    'KITES',
    'FOOTPRINT',
    'deflate',
    'scale',
    'rotate',
    'translate',
    'reflect',
    'kite_outline',
    'kite',
    'placement_kite',
    'monotile',
    'monotile_outlines',
]
