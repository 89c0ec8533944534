"""
DXF export of monotile outlines.

Writes the 2D footprint of every kite as a closed LWPOLYLINE using the
ezdxf library.  Base outlines and groove outlines go to separate
layers so a laser cutter or drawing program can treat them apart.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import ezdxf

from monotile.geom import Point

logger = logging.getLogger(__name__)

## layer name -> ACI colour
LAYERS = {
    'KITES': 7,    # white
    'GROOVES': 1,  # red
}


def new_document():
    """Create an empty millimetre DXF document with the monotile layers."""

    # setup=False avoids creating default blocks (like _CLOSEDFILLED) that
    # contain SOLID entities unsupported by some CAD programs
    doc = ezdxf.new(dxfversion='R2010', setup=False)
    doc.header['$MEASUREMENT'] = 1  # metric
    doc.header['$INSUNITS'] = 4  # millimeters
    for name, color in LAYERS.items():
        doc.layers.new(name, dxfattribs={'color': color})
    return doc


def add_outline(msp, outline: Sequence[Point], layer: str = 'KITES') -> None:
    if len(outline) < 3:
        raise ValueError(f'outline needs at least three points, got {len(outline)}')
    msp.add_lwpolyline([(p.x, p.y) for p in outline],
                       close=True,
                       dxfattribs={'layer': layer})


def write_dxf(outlines: Iterable[Tuple[str, Sequence[Point]]], output_path) -> int:
    """Write ``(layer, outline)`` pairs to a DXF file.

    Returns the number of outlines written.  Unknown layer names are
    created on the fly with the default colour.
    """

    path = Path(output_path)
    if path.suffix.lower() != '.dxf':
        path = path.with_suffix('.dxf')

    doc = new_document()
    msp = doc.modelspace()
    count = 0
    for layer, outline in outlines:
        if not doc.layers.has_entry(layer):
            doc.layers.new(layer)
        add_outline(msp, outline, layer)
        count += 1
    doc.saveas(path)
    logger.debug("wrote %d outlines to %s", count, path)
    return count


def read_outlines(path) -> List[Tuple[str, List[Point]]]:
    """Read back closed LWPOLYLINE outlines as ``(layer, points)``."""

    doc = ezdxf.readfile(str(path))
    result = []
    for entity in doc.modelspace().query('LWPOLYLINE'):
        pts = [Point(x, y) for x, y in entity.get_points('xy')]
        result.append((entity.dxf.layer, pts))
    return result


__all__ = ['LAYERS', 'new_document', 'add_outline', 'write_dxf', 'read_outlines']
