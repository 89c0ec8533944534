import io
import math
import re
import struct

import pytest

from monotile.geom import Point
from monotile.io.stl import facet_record, read_stl, render, write_stl
from monotile.mesh import Facet
from monotile.tile import KITES, monotile, placement_kite


_FLOAT = re.compile(r'[-+]?\d\.\d{6}e[-+]\d{2}')


def test_facet_record_format():
    f = Facet(Point(0, 0, 0), Point(1, 0, 0), Point(0, 1, 0))
    assert facet_record(f) == (
        "  facet normal 0.000000e+00 0.000000e+00 1.000000e+00\n"
        "    outer loop\n"
        "      vertex 0.000000e+00 0.000000e+00 0.000000e+00\n"
        "      vertex 1.000000e+00 0.000000e+00 0.000000e+00\n"
        "      vertex 0.000000e+00 1.000000e+00 0.000000e+00\n"
        "    endloop\n"
        "  endfacet\n"
    )


def test_render_is_lazy_and_complete():
    box = placement_kite(KITES[0])
    chunks = render("kite0", box)
    assert next(chunks) == "solid kite0\n"
    rest = list(chunks)
    assert len(rest) == 13
    assert rest[-1] == "endsolid kite0\n"
    ## exhausted, not restartable
    assert list(chunks) == []


@pytest.mark.parametrize("reflect", [False, True])
def test_write_stl_ascii_full_tile(reflect):
    buf = io.StringIO()
    count = write_stl(monotile(reflect), buf)
    assert count == 192

    text = buf.getvalue()
    assert text.count("endsolid") == 16
    assert text.count("endfacet") == 192

    for line in text.splitlines():
        line = line.strip()
        if line.startswith("vertex") or line.startswith("facet normal"):
            values = line.split()[-3:]
            assert len(values) == 3
            for v in values:
                assert _FLOAT.fullmatch(v)
                assert math.isfinite(float(v))


def test_ascii_roundtrip(tmp_path):
    path = tmp_path / 'hat.stl'
    write_stl(monotile(), path)

    solids = read_stl(path)
    assert len(solids) == 16
    assert solids[0][0] == "kite0"
    assert solids[1][0] == "kite-inset0"
    assert all(len(triangles) == 12 for _, triangles in solids)

    expected = placement_kite(KITES[0]).facets()
    for tri, facet in zip(solids[0][1], expected):
        assert tri.v0.x == pytest.approx(facet.v0.x, abs=1e-5)
        assert tri.normal.z == pytest.approx(facet.normal().z, abs=1e-6)


def test_read_stl_from_text_stream():
    buf = io.StringIO()
    write_stl([("one", placement_kite(KITES[1]))], buf)
    buf.seek(0)
    solids = read_stl(buf)
    assert [name for name, _ in solids] == ["one"]


def test_write_stl_binary(tmp_path):
    path = tmp_path / 'hat.stl'
    count = write_stl(monotile(), path, binary=True, name='hat')
    assert count == 192

    data = path.read_bytes()
    assert len(data) == 80 + 4 + 50 * 192
    assert data[0:3] == b'hat'
    assert struct.unpack('<I', data[80:84])[0] == 192

    solids = read_stl(path)
    assert len(solids) == 1
    name, triangles = solids[0]
    assert name == 'hat'
    assert len(triangles) == 192
    assert triangles[0].normal.z < 0


def test_write_stl_binary_to_stream():
    buf = io.BytesIO()
    write_stl([("k", placement_kite(KITES[2]))], buf, binary=True)
    assert len(buf.getvalue()) == 84 + 12 * 50


def test_truncated_binary_is_rejected():
    buf = io.BytesIO()
    write_stl([("k", placement_kite(KITES[2]))], buf, binary=True)
    data = buf.getvalue()
    # keep the claimed count but drop the last record
    with pytest.raises(ValueError):
        read_stl(io.BytesIO(data[:-50]))


def test_read_empty():
    assert read_stl(io.BytesIO(b'')) == []
