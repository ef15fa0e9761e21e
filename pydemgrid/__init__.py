"""
PyDEMGrid - Taichi-backed raster container for digital elevation models.

Storage primitive for terrain analysis on digital elevation models: a dense 2D
grid of a chosen element type carrying the metadata needed to georeference it
(cell size, lower left corner, no-data value, number of data cells). Flow
routing, watershed delineation and similar algorithms are meant to be built on
top of it.

Key Features:
- Flat, cache friendly storage in pooled Taichi fields (CPU or GPU)
- Parallel fill through a Taichi kernel
- Metadata-preserving construction of same-shaped grids of another type
- Bounds, interior and edge predicates
- Cell-wise equality and ASCII output size estimation
- numpy import/export

Core Components:
- grid: Grid container, Coordinate, element type policies
- pool: Taichi field pooling used for grid storage
- constants: Runtime configuration

Basic Usage:
    import taichi as ti
    import numpy as np
    import pydemgrid as pdg

    ti.init(ti.cpu)

    dem = pdg.grid.Grid('f32')
    dem.from_numpy(np.random.rand(300, 400) * 1000)
    dem.cellsize, dem.xllcorner, dem.yllcorner = 30., 500000., 4100000.
    dem.no_data = -9999.

    mask = pdg.grid.Grid('bool', copyfrom = dem)
    mask.fill(False)
    print(mask.estimated_output_size())  # 2 * 400 * 300

Author: B.G.
"""

__version__ = "0.1.0"
__author__ = "B.G."

# Import all submodules in alphabetical order
from . import constants
from . import grid
from . import pool

# Export all submodules
__all__ = [
    "constants",
    "grid",
    "pool"
]
