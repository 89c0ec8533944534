"""Validation helpers for monotile facet lists."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from monotile.geom import Point, centroid, dot, epsilon, mag
from monotile.mesh import Facet

_VERTEX_TOL = 1e-9

VertexKey = Tuple[int, int, int]


def unit_normals(facets: Sequence[Facet], tol: float = 1e-9) -> "CheckResult":
    """Every facet normal has magnitude ``1 +/- tol``."""

    bad = []
    for idx, facet in enumerate(facets):
        m = mag(facet.normal())
        if abs(m - 1.0) > tol:
            bad.append(idx)
    if bad:
        return CheckResult(False, [f'non-unit normals at indices: {bad}'])
    return CheckResult(True, [])


def normals_outward(facets: Sequence[Facet]) -> "CheckResult":
    """Every normal points away from the centroid of the solid.

    Only meaningful for convex solids, which is all monotile builds.
    """

    if not facets:
        return CheckResult(True, ['no facets'])

    center = centroid([v for f in facets for v in f])
    inward = []
    for idx, facet in enumerate(facets):
        if dot(facet.normal(), facet.centroid().sub(center)) <= epsilon:
            inward.append(idx)
    if inward:
        return CheckResult(False, [f'inward-facing normals at indices: {inward}'])
    return CheckResult(True, [])


def edges_closed(facets: Sequence[Facet]) -> "CheckResult":
    """Every undirected edge is shared by exactly two facets."""

    edges = Counter()
    for facet in facets:
        for a, b in _facet_edges(facet):
            edges[_edge_key(a, b)] += 1

    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = [edge for edge, count in edges.items() if count > 2]

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'{len(invalid)} edges with multiplicity >2')

    return CheckResult(ok, warnings)


def edges_consistent(facets: Sequence[Facet]) -> "CheckResult":
    """Neighbouring facets walk their shared edge in opposite directions.

    A directed edge used twice means two adjacent faces disagree about
    which side is out.
    """

    directed = Counter()
    for facet in facets:
        for a, b in _facet_edges(facet):
            directed[(a, b)] += 1

    repeated = [edge for edge, count in directed.items() if count > 1]
    if repeated:
        return CheckResult(False, [f'{len(repeated)} directed edges used more than once'])
    return CheckResult(True, [])


def check_solid(facets: Sequence[Facet]) -> "CheckResult":
    """Run every check and merge the results."""

    ok = True
    warnings: List[str] = []
    for check in (unit_normals, normals_outward, edges_closed, edges_consistent):
        result = check(facets)
        ok = ok and result.ok
        warnings.extend(result.warnings)
    return CheckResult(ok, warnings)


def _vertex_key(v: Point, tol: float = _VERTEX_TOL) -> VertexKey:
    scale = 1.0 / tol
    return (int(round(v.x * scale)), int(round(v.y * scale)), int(round(v.z * scale)))


def _facet_edges(facet: Facet) -> List[Tuple[VertexKey, VertexKey]]:
    a, b, c = (_vertex_key(v) for v in facet)
    return [(a, b), (b, c), (c, a)]


def _edge_key(a: VertexKey, b: VertexKey) -> Tuple[VertexKey, VertexKey]:
    return (a, b) if a < b else (b, a)


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'unit_normals',
    'normals_outward',
    'edges_closed',
    'edges_consistent',
    'check_solid',
]
