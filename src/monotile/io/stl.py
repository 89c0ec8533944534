"""STL export and import for monotile solids.

Output is produced lazily: ``render()`` yields the text of one solid a
chunk at a time and ``write_stl()`` streams those chunks to a file.
Nothing is buffered beyond a single facet record.
"""

from __future__ import annotations

import logging
import re
import struct
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple, Union

from monotile.geom import Point
from monotile.mesh import Box, Facet

logger = logging.getLogger(__name__)

_HEADER_SIZE = 80
_STRUCT_TRIANGLE = struct.Struct('<12fH')

Solid = Union[Box, Sequence[Facet]]


@dataclass(frozen=True)
class Triangle:
    """A facet as stored in an STL file, normal included."""

    normal: Point
    v0: Point
    v1: Point
    v2: Point


def _facets_of(solid: Solid) -> List[Facet]:
    if isinstance(solid, Box):
        return solid.facets()
    return list(solid)


def facet_record(facet: Facet) -> str:
    """Format one facet as an ASCII STL ``facet ... endfacet`` block."""

    return (
        f"  facet normal {facet.normal()}\n"
        "    outer loop\n"
        f"      vertex {facet.v0}\n"
        f"      vertex {facet.v1}\n"
        f"      vertex {facet.v2}\n"
        "    endloop\n"
        "  endfacet\n"
    )


def render(name: str, solid: Solid) -> Iterator[str]:
    """Yield the ASCII STL text of one named solid."""

    yield f"solid {name}\n"
    for facet in _facets_of(solid):
        yield facet_record(facet)
    yield f"endsolid {name}\n"


def write_stl(solids: Iterable[Tuple[str, Solid]], path_or_file, *,
              binary: bool = False, name: str = 'monotile') -> int:
    """Write named solids to STL and return the number of facets written.

    ``path_or_file`` can be a filesystem path or an open stream (text
    for ASCII, binary for ``binary=True``).  ASCII output keeps each
    solid as its own block.  Binary STL has no notion of multiple
    solids, so all facets go into one body headed by ``name``.
    """

    if binary:
        return _write_binary(solids, path_or_file, name)
    return _write_ascii(solids, path_or_file)


def _write_ascii(solids: Iterable[Tuple[str, Solid]], path_or_file) -> int:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='ascii')
        close_when_done = True

    count = 0
    try:
        for solid_name, solid in solids:
            facets = _facets_of(solid)
            for chunk in render(solid_name, facets):
                stream.write(chunk)
            count += len(facets)
            logger.debug("wrote solid %s (%d facets)", solid_name, len(facets))
    finally:
        if close_when_done:
            stream.close()
    return count


def _write_binary(solids: Iterable[Tuple[str, Solid]], path_or_file, name: str) -> int:
    # the triangle count precedes the records, so collect them first
    facets = [f for _, solid in solids for f in _facets_of(solid)]

    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'wb')
        close_when_done = True

    try:
        header = (name[:_HEADER_SIZE]).encode('ascii', errors='replace')
        header = header.ljust(_HEADER_SIZE, b' ')
        stream.write(header)
        stream.write(struct.pack('<I', len(facets)))

        for facet in facets:
            data = _STRUCT_TRIANGLE.pack(
                *facet.normal(),
                *facet.v0,
                *facet.v1,
                *facet.v2,
                0,
            )
            stream.write(data)
    finally:
        if close_when_done:
            stream.close()
    logger.debug("wrote binary STL %s (%d facets)", name, len(facets))
    return len(facets)


# ---------------------------------------------------------------------------
# STL Import
# ---------------------------------------------------------------------------

_NUM = r'([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?|[-+]?(?:inf|nan))'

_SOLID_PATTERN = re.compile(
    r'solid[ \t]*([^\n]*)\n(.*?)endsolid',
    re.IGNORECASE | re.DOTALL,
)

_FACET_PATTERN = re.compile(
    r'facet\s+normal\s+' + r'\s+'.join([_NUM] * 3) + r'\s+'
    r'outer\s+loop\s+'
    r'vertex\s+' + r'\s+'.join([_NUM] * 3) + r'\s+'
    r'vertex\s+' + r'\s+'.join([_NUM] * 3) + r'\s+'
    r'vertex\s+' + r'\s+'.join([_NUM] * 3) + r'\s+'
    r'endloop\s+endfacet',
    re.IGNORECASE,
)


def _is_binary_stl(data: bytes) -> bool:
    """Binary STL has an 80-byte header, a 4-byte count, then 50 bytes
    per triangle.  ASCII STL starts with the ``solid`` keyword.
    """
    if len(data) < 84:
        return False

    header = data[:80].decode('ascii', errors='ignore').strip().lower()
    if not header.startswith('solid'):
        return True
    tri_count = struct.unpack('<I', data[80:84])[0]
    if len(data) != 84 + tri_count * 50:
        return False
    rest = data[84:min(200, len(data))]
    return not (b'facet' in rest or b'vertex' in rest)


def _parse_binary_stl(data: bytes) -> List[Tuple[str, List[Triangle]]]:
    tri_count = struct.unpack('<I', data[80:84])[0]
    name = data[:_HEADER_SIZE].decode('ascii', errors='replace').strip()
    triangles = []
    offset = 84

    for _ in range(tri_count):
        if offset + 50 > len(data):
            raise ValueError("truncated binary STL")
        values = _STRUCT_TRIANGLE.unpack(data[offset:offset + 50])
        triangles.append(Triangle(normal=Point(*values[0:3]),
                                  v0=Point(*values[3:6]),
                                  v1=Point(*values[6:9]),
                                  v2=Point(*values[9:12])))
        offset += 50

    return [(name, triangles)]


def _parse_ascii_stl(text: str) -> List[Tuple[str, List[Triangle]]]:
    solids = []
    for solid_match in _SOLID_PATTERN.finditer(text):
        name = solid_match.group(1).strip()
        triangles = []
        for match in _FACET_PATTERN.finditer(solid_match.group(2)):
            v = [float(g) for g in match.groups()]
            triangles.append(Triangle(normal=Point(*v[0:3]),
                                      v0=Point(*v[3:6]),
                                      v1=Point(*v[6:9]),
                                      v2=Point(*v[9:12])))
        solids.append((name, triangles))
    return solids


def read_stl(path_or_file) -> List[Tuple[str, List[Triangle]]]:
    """Read an ASCII or binary STL file.

    Returns a list of ``(name, triangles)`` pairs, one per ``solid``
    block for ASCII input and a single pair for binary input.
    """

    if hasattr(path_or_file, 'read'):
        data = path_or_file.read()
        if isinstance(data, str):
            data = data.encode('utf-8')
    else:
        with open(path_or_file, 'rb') as f:
            data = f.read()

    if _is_binary_stl(data):
        return _parse_binary_stl(data)
    return _parse_ascii_stl(data.decode('utf-8', errors='replace'))


__all__ = ['Triangle', 'facet_record', 'render', 'write_stl', 'read_stl']
