"""
Element type policies for PyDEMGrid grids.

A grid is parameterised by the type of its cells. Each supported type is
described by an ElementType policy giving everything the container needs to
know about it: the Taichi dtype used for storage, the numpy dtype used when
exchanging data, the size of one element in bytes, the sentinel used for an
unset no-data value and the printed width of one value in an ASCII raster.

Supported element types:
- F32:  single precision float (typical DEM elevations)
- F64:  double precision float
- U32:  unsigned 32 bit integer (labels, accumulation counts)
- I8:   signed byte (flow directions)
- I32:  signed 32 bit integer
- BOOL: boolean flags, stored on one byte

Output size estimates only exist for F32, U32, I8 and BOOL. The other types
can be stored but estimated_output_size() refuses them.

Author: B.G.
"""

import numpy as np
import taichi as ti
from .. import constants as cte


class ElementType:
	"""
	Policy object describing one cell type of a Grid.

	Attributes:
		name (str): Short identifier ('f32', 'u32', ...)
		ti_dtype: Taichi dtype of the storage field
		np_dtype (np.dtype): numpy dtype used by to_numpy/from_numpy
		itemsize (int): Size of one element in bytes (drives the RAM advisory)
		unset: No-data value of a freshly constructed grid, None if the type cannot
			represent the -1 sentinel (unsigned and boolean types)
		chars_per_cell (int or None): Characters per value in an ASCII raster, None
			when no estimate is defined

	Author: B.G.
	"""

	def __init__(self, name, ti_dtype, np_dtype, itemsize, unset, chars_per_cell):
		self.name = name
		self.ti_dtype = ti_dtype
		self.np_dtype = np.dtype(np_dtype)
		self.itemsize = itemsize
		self.unset = unset
		self.chars_per_cell = chars_per_cell

	@property
	def is_bool(self):
		return self.np_dtype == np.bool_

	def convert(self, value):
		"""
		Cast a scalar to this element type using numpy casting rules.

		Args:
			value: Any scalar, or None

		Returns:
			Python scalar of the element type, None stays None

		Author: B.G.
		"""
		if value is None:
			return None
		return np.asarray(value).astype(self.np_dtype).item()

	def to_storage(self, value):
		"""Value as written in the storage field (booleans are stored as 0/1 bytes)."""
		value = self.convert(value)
		return int(value) if self.is_bool else value

	def from_storage(self, raw):
		"""Value read from the storage field, as seen by the caller."""
		return bool(raw) if self.is_bool else raw

	def __repr__(self):
		return f"ElementType({self.name})"


F32  = ElementType('f32',  ti.f32, np.float32, 4, float(cte.UNSET), 9)
F64  = ElementType('f64',  ti.f64, np.float64, 8, float(cte.UNSET), None)
U32  = ElementType('u32',  ti.u32, np.uint32,  4, None,             9)
I8   = ElementType('i8',   ti.i8,  np.int8,    1, cte.UNSET,        4)
I32  = ElementType('i32',  ti.i32, np.int32,   4, cte.UNSET,        None)
BOOL = ElementType('bool', ti.u8,  np.bool_,   1, None,             2)

ELEMENT_TYPES = (F32, F64, U32, I8, I32, BOOL)

# Python builtins map to the closest numpy type
_PYTHON_TYPES = {bool: BOOL, int: I32, float: F64}


def resolve_element_type(spec):
	"""
	Find the ElementType matching a user supplied type specification.

	Args:
		spec: ElementType, name ('f32', 'bool', ...), Taichi dtype (ti.f32, ti.u1, ...),
			numpy dtype or scalar type, or one of the builtins bool/int/float

	Returns:
		ElementType: The matching policy

	Raises:
		TypeError: If the specification does not name a supported element type

	Author: B.G.
	"""
	if isinstance(spec, ElementType):
		return spec

	if isinstance(spec, str):
		for et in ELEMENT_TYPES:
			if et.name == spec:
				return et
		raise TypeError(f"Unsupported element type '{spec}'. Available: {[et.name for et in ELEMENT_TYPES]}")

	if isinstance(spec, np.dtype) or (isinstance(spec, type) and issubclass(spec, np.generic)):
		npdt = np.dtype(spec)
		for et in ELEMENT_TYPES:
			if et.np_dtype == npdt:
				return et
		raise TypeError(f"Unsupported numpy element type {npdt}")

	if spec in _PYTHON_TYPES:
		return _PYTHON_TYPES[spec]

	# Taichi dtypes, ti.u1 being the Taichi boolean
	if spec == ti.u1:
		return BOOL
	for et in ELEMENT_TYPES:
		if et is not BOOL and spec == et.ti_dtype:
			return et

	raise TypeError(f"Unsupported element type {spec!r}")
