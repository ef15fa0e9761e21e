"""
Taichi Field Pool Module

Storage allocator for PyDEMGrid. Grid buffers and the scratch scalars used by
the grid kernels are Taichi fields built with the FieldsBuilder pattern, so
that each one can be destroyed on its own. Released fields are kept and handed
out again to the next request with the same dtype and shape, which makes
repeated resize() calls and per-call scratch scalars cheap.

Fields are organised by (dtype, shape) key:
- 0D fields: single scalars, indexed with [None]
- 1D fields: flat grid buffers, ti.i indexing
- 2D fields: ti.ij indexing

Author: B.G.
"""

import taichi as ti
from typing import Tuple, Any


def _normalise_shape(shape) -> Tuple[int, ...]:
    """Return shape as a tuple; an int, () or (0,) mean a 0D scalar field."""
    if isinstance(shape, int):
        shape = (shape,) if shape > 0 else ()
    elif not isinstance(shape, tuple):
        shape = tuple(shape) if hasattr(shape, '__iter__') else (shape,)

    if not shape or (len(shape) == 1 and shape[0] == 0):
        shape = ()
    return shape


class TPField:
    """
    Pooled Taichi field with its own snode tree.

    Attributes:
        id: Unique field identifier
        field: Underlying Taichi field
        in_use: True while a grid or a kernel call holds the field
        dtype: Taichi data type
        shape: Field dimensions, () for scalars
        snodetree: Finalised structure, destroyed to free device memory

    Author: B.G.
    """

    _next_id = 0

    def __init__(self, dtype: Any, shape: Tuple[int, ...]):
        """
        Allocate a field of the given dtype and shape.

        Args:
            dtype: Taichi data type (ti.f32, ti.u8, ...)
            shape: (), (n,) or (n, m); an int is accepted for 1D

        Raises:
            ValueError: For fields of more than 2 dimensions

        Author: B.G.
        """
        shape = _normalise_shape(shape)
        if len(shape) > 2:
            raise ValueError(f"Unsupported field dimensionality: {len(shape)}D. Only 0D, 1D and 2D fields supported.")

        TPField._next_id += 1
        self.id = TPField._next_id
        self.in_use = False
        self.dtype = dtype
        self.shape = shape

        self.fb = ti.FieldsBuilder()
        self.field = ti.field(dtype)

        if len(shape) == 0:
            self.fb.place(self.field)
        elif len(shape) == 1:
            self.fb.dense(ti.i, shape).place(self.field)
        else:
            self.fb.dense(ti.ij, shape).place(self.field)

        self.snodetree = self.fb.finalize()

    def acquire(self):
        self.in_use = True

    def release(self):
        """Mark the field as available again. Its memory is kept for reuse."""
        self.in_use = False

    def destroy(self):
        """Destroy the snode tree and free the device memory of the field."""
        if getattr(self, 'snodetree', None) is not None:
            self.snodetree.destroy()
            self.snodetree = None

    def to_numpy(self):
        return self.field.to_numpy()

    def from_numpy(self, val):
        return self.field.from_numpy(val)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

    def __str__(self):
        return f"Taichi field from the pool id:{self.id} - in_use:{self.in_use} - dtype:{self.dtype} - shape:{self.shape}"


class TaiPool:
    """
    Pool of TPField objects keyed by (dtype, shape).

    Usage:
        pool = TaiPool()
        buf = pool.get_tpfield(ti.f32, (nx*ny,))
        scalar = pool.get_tpfield(ti.i32, ())
        ...
        pool.release_field(buf)
        pool.release_field(scalar)

    Author: B.G.
    """

    def __init__(self):
        self._pools = {}  # (dtype, shape) -> [TPField]

    def get_tpfield(self, dtype: Any, shape: Tuple[int, ...]) -> TPField:
        """
        Get an unused field of matching dtype and shape, creating one if needed.

        Args:
            dtype: Taichi data type
            shape: (), (n,) or (n, m)

        Returns:
            TPField: Field marked as in use. Its values are whatever the previous
                user left, or zeros for a new field

        Author: B.G.
        """
        shape = _normalise_shape(shape)
        pool = self._pools.setdefault((dtype, shape), [])

        for tpfield in pool:
            if not tpfield.in_use:
                tpfield.acquire()
                return tpfield

        tpfield = TPField(dtype, shape)
        pool.append(tpfield)
        tpfield.acquire()
        return tpfield

    def release_field(self, tpfield: TPField):
        tpfield.release()

    def clear_unused(self):
        """Destroy every field not in use and drop it from the pool."""
        for pool in self._pools.values():
            for tpfield in pool[:]:
                if not tpfield.in_use:
                    tpfield.destroy()
                    pool.remove(tpfield)

    def stats(self) -> dict:
        """
        Pool usage statistics.

        Returns:
            dict: total, in_use and available number of fields

        Author: B.G.
        """
        total = sum(len(pool) for pool in self._pools.values())
        in_use = sum(1 for pool in self._pools.values() for tpf in pool if tpf.in_use)
        return {"total": total, "in_use": in_use, "available": total - in_use}


# Global pool instance
taipool = TaiPool()


def get_temp_field(dtype: Any, shape: Tuple[int, ...]) -> TPField:
    return taipool.get_tpfield(dtype, shape)


def release_temp_field(tpfield: TPField):
    taipool.release_field(tpfield)


def pool_stats() -> dict:
    return taipool.stats()


def clear_pool():
    """Free the device memory of all unused fields of the global pool."""
    taipool.clear_unused()


def temp_field(dtype: Any, shape: Tuple[int, ...]) -> TPField:
    """
    Get a field from the global pool as a context manager, released on exit.

    with temp_field(ti.i32, ()) as count:
        count.field[None] = 0
        some_kernel(count.field)

    Author: B.G.
    """
    return taipool.get_tpfield(dtype, shape)
