"""
Taichi field pooling for PyDEMGrid.

Every Grid buffer is a pooled field: resize() takes a field of the right
dtype and size from the pool and clear() gives it back. Fields handed back are
reused by the next request of the same dtype and shape; clear_pool() destroys
the unused ones and frees their device memory.

Core Classes:
- TPField: Taichi field with its own snode tree and an in-use flag
- TaiPool: Fields organised by (dtype, shape)

Pool Management Functions:
- get_temp_field / release_temp_field: manual acquisition on the global pool
- temp_field: context manager releasing the field on exit
- pool_stats: total, in_use and available counts
- clear_pool: destroy unused fields

Usage:
    import taichi as ti
    import pydemgrid as pdg

    ti.init(ti.cpu)

    dem = pdg.grid.Grid('f32')
    dem.resize(512, 512)         # one (ti.f32, (262144,)) field in use
    dem.clear()                  # back to the pool
    print(pdg.pool.pool_stats()) # {'total': 1, 'in_use': 0, 'available': 1}
    pdg.pool.clear_pool()        # device memory freed

Author: B.G.
"""

from .pool import (
    TPField,
    TaiPool,
    get_temp_field,
    release_temp_field,
    pool_stats,
    clear_pool,
    temp_field,
    taipool
)

__all__ = [
    "TPField",
    "TaiPool",
    "get_temp_field",
    "release_temp_field",
    "pool_stats",
    "clear_pool",
    "temp_field",
    "taipool"
]
