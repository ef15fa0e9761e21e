"""
Grid container and cell coordinates for PyDEMGrid.

This submodule provides the 2D raster container holding a DEM (or any derived
raster: flow directions, labels, masks) together with its georeferencing
metadata, and the coordinate pair used to address its cells.

Core Classes:
- Grid: Dense 2D grid of one element type plus cellsize, lower left corner,
  no-data value and data cell count
- Coordinate: Immutable (x, y) cell index
- ElementType: Element type policy (storage dtype, size, sentinel, ASCII width)

Element Types:
- F32, U32, I8, BOOL: storable, with an ASCII output size estimate
- F64, I32: storable, no output size estimate

Usage:
    import taichi as ti
    import pydemgrid as pdg

    ti.init(ti.cpu)

    dem = pdg.grid.Grid('f32')
    dem.resize(4, 3)
    dem.fill(7.)
    dem.cellsize = 30.
    dem.no_data = -9999.

    # Same shape and georeferencing, different element type
    flowdirs = pdg.grid.Grid('i8', copyfrom = dem)
    flowdirs.fill(0)

    for y in range(dem.height()):
        for x in range(dem.width()):
            if dem.interior_grid(x, y):
                ...

Author: B.G.
"""

from .coordinate import Coordinate
from .element_types import ElementType, resolve_element_type, ELEMENT_TYPES, F32, F64, U32, I8, I32, BOOL
from .gridfields import Grid

__all__ = [
    "Grid",
    "Coordinate",
    "ElementType",
    "resolve_element_type",
    "ELEMENT_TYPES",
    "F32",
    "F64",
    "U32",
    "I8",
    "I32",
    "BOOL"
]
