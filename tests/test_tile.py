import math

import pytest

from monotile.config import TileConfig
from monotile.geom import Point, centroid, cos30, mag, normalize, polygon_area, sin30, sqrt3
from monotile.geometry_checks import check_solid
from monotile.tile import (
    FOOTPRINT,
    KITES,
    deflate,
    kite,
    kite_outline,
    monotile,
    monotile_outlines,
    placement_kite,
    reflect,
    rotate,
    scale,
    translate,
)


def _inside_convex(pt, polygon):
    """True if ``pt`` is strictly inside a clockwise convex polygon."""
    n = len(polygon)
    for i in range(n):
        a = polygon[i]
        b = polygon[(i + 1) % n]
        side = (b.x - a.x) * (pt.y - a.y) - (b.y - a.y) * (pt.x - a.x)
        if side >= 0:
            return False
    return True


def test_kite_table():
    assert len(KITES) == 8
    assert KITES[0].pos == (0.0, 0.0) and KITES[0].rot == -60
    assert KITES[4].pos == (0.0, -2 * sqrt3) and KITES[4].rot == 60
    assert KITES[7].pos == (-3.0, -sqrt3) and KITES[7].rot == 0
    with pytest.raises(Exception):
        KITES[0].rot = 10


def test_footprint_is_clockwise():
    assert polygon_area(FOOTPRINT) < 0
    assert math.isclose(FOOTPRINT[3].x, 1.5)
    assert math.isclose(FOOTPRINT[3].y, sqrt3 / 2)


def test_identity_transform_reproduces_scaled_footprint():
    outline = kite_outline((0, 0), 0, inset=0.0, reflect=False)
    assert outline == [p.scale(12.0) for p in FOOTPRINT]


def test_stages():
    pts = [Point(1.0, 0.0), Point(0.0, 2.0)]
    assert scale(pts, 3.0) == [Point(3.0, 0.0), Point(0.0, 6.0)]
    assert translate(pts, 1.0, -1.0) == [Point(2.0, -1.0), Point(1.0, 1.0)]
    rotated = rotate(pts, 90)
    assert rotated[0].x == pytest.approx(0.0, abs=1e-12)
    assert rotated[0].y == pytest.approx(1.0)
    assert rotated[1].x == pytest.approx(-2.0)


def test_deflate_formula():
    inset = 0.03
    pts = deflate(FOOTPRINT, inset)
    for orig, new in zip(FOOTPRINT, pts):
        assert new.x == pytest.approx(orig.x * (1 - inset) + inset * sin30)
        assert new.y == pytest.approx(orig.y * (1 - inset) + inset * cos30)
    assert deflate(FOOTPRINT, 0) == list(FOOTPRINT)


def test_deflate_shrinks_area_monotonically():
    areas = [abs(polygon_area(deflate(FOOTPRINT, inset))) for inset in (0.0, 0.01, 0.03, 0.1, 0.2)]
    assert all(a > b for a, b in zip(areas, areas[1:]))


def test_deflated_kite_stays_inside():
    for inset in (0.01, 0.03, 0.1):
        inner = deflate(FOOTPRINT, inset)
        for p in inner:
            assert _inside_convex(p, FOOTPRINT)
        assert _inside_convex(centroid(inner), FOOTPRINT)


def test_deflate_keeps_centroid_direction_from_anchor_edge():
    ## offset of the centroid from the midpoint of edge v0-v1
    def offset(pts):
        mid = pts[0].add(pts[1]).scale(0.5)
        return centroid(pts).sub(mid)

    base = offset(FOOTPRINT)
    base_dir = normalize(base)
    lengths = []
    for inset in (0.0, 0.01, 0.03, 0.1, 0.2):
        inner = deflate(FOOTPRINT, inset)
        edge = inner[1].sub(inner[0])
        off = offset(inner)
        ## centroid stays on the interior (right-hand) side of the edge
        assert edge.x * off.y - edge.y * off.x < 0
        direction = normalize(off)
        assert direction.x == pytest.approx(base_dir.x, abs=1e-12)
        assert direction.y == pytest.approx(base_dir.y, abs=1e-12)
        lengths.append(mag(off))
    assert all(a > b for a, b in zip(lengths, lengths[1:]))


def test_reflect_reverses_and_mirrors():
    pts = list(FOOTPRINT)
    mirrored = reflect(pts)
    assert mirrored[0] == Point(-pts[3].x, pts[3].y, 0.0)
    assert mirrored[3] == Point(-pts[0].x, pts[0].y, 0.0)
    ## winding survives the mirror
    assert polygon_area(mirrored) < 0


def test_reflect_twice_is_identity():
    outline = kite_outline((-3, -sqrt3), -60, inset=0.03)
    assert reflect(reflect(outline)) == outline


def test_kite_zero_end_to_end():
    box = placement_kite(KITES[0])
    facets = box.facets()
    assert len(facets) == 12
    for f in facets:
        assert abs(mag(f.normal()) - 1.0) <= 1e-9
    for f in facets[0:2]:
        assert f.normal().z < 0
    for f in facets[2:4]:
        assert f.normal().z > 0
    for f in facets[4:]:
        assert f.normal().z == pytest.approx(0.0, abs=1e-12)


def test_kite_heights():
    base = kite((0, 0), -60)
    groove = kite((0, 0), -60, inset=0.03)
    assert all(p.z == pytest.approx(0.2 * 12) for p in base.top)
    assert all(p.z == pytest.approx(0.23 * 12) for p in groove.top)
    assert all(p.z == 0 for p in groove.bottom)


def test_kite_respects_config():
    config = TileConfig(unit=10.0, inset=0.05, height=0.5)
    box = kite((1, 0), 0, config=config)
    assert box.bottom.v0 == Point(10.0, 0.0, 0.0)
    assert box.top.v0.z == pytest.approx(5.0)


def test_reflect_keyword():
    plain = kite((0, 0), -60)
    flipped = kite((0, 0), -60, reflect=True)
    assert flipped.bottom.v0 == Point(-plain.bottom.v3.x, plain.bottom.v3.y, 0.0)
    outline = kite_outline((0, 0), -60, reflect=True)
    assert outline == list(flipped.bottom)
    names = [name for name, _ in monotile(reflect=True)]
    assert len(names) == 16


def test_negative_inset_is_rejected():
    with pytest.raises(ValueError, match="inset"):
        kite((0, 0), 0, inset=-0.5)
    with pytest.raises(ValueError):
        kite_outline((0, 0), 0, inset=-0.01)


@pytest.mark.parametrize("reflected", [False, True])
def test_every_kite_is_a_valid_solid(reflected):
    for placement in KITES:
        for inset in (0.0, 0.03):
            box = placement_kite(placement, inset, reflected)
            result = check_solid(box.facets())
            assert result, result.warnings


def test_monotile_names_and_count():
    solids = list(monotile())
    assert len(solids) == 16
    names = [name for name, _ in solids]
    assert names[:4] == ["kite0", "kite-inset0", "kite1", "kite-inset1"]
    assert names[-1] == "kite-inset7"
    assert sum(len(box.facets()) for _, box in solids) == 192


def test_monotile_is_lazy():
    gen = monotile()
    name, _ = next(gen)
    assert name == "kite0"


def test_mirrored_monotile_is_mirror_image():
    plain = dict(monotile(False))
    mirrored = dict(monotile(True))
    for name in plain:
        xs = sorted(-p.x for p in plain[name].bottom)
        mxs = sorted(p.x for p in mirrored[name].bottom)
        assert xs == pytest.approx(mxs)


def test_monotile_outlines():
    outlines = list(monotile_outlines())
    assert len(outlines) == 16
    assert [layer for layer, _ in outlines[:2]] == ["KITES", "GROOVES"]
    assert all(len(outline) == 4 for _, outline in outlines)
