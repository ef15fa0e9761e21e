import operator
import sys
import taichi as ti
import numpy as np
from .. import constants as cte
from . import kernels as kn
from .element_types import F32, resolve_element_type
import pydemgrid as pdg

class Grid:
	"""
	Dense 2D raster container with the geospatial metadata of a DEM.

	Cells are stored in a single flat Taichi field allocated from the pool and
	addressed as (x, y), x being the column and y the row (flat index y*nx + x).
	The grid owns its field until clear() hands it back to the pool.

	Metadata is public and maintained by callers; the container never recomputes it.

	Attributes:
		dtype (ElementType): Element type policy of the cells
		cellsize (float): Edge length of one square cell in map units
		xllcorner (float): Map x-coordinate of the lower left corner
		yllcorner (float): Map y-coordinate of the lower left corner
		data_cells (int): Number of cells holding data (excludes no-data cells)
		no_data: No-data value, in the element type. Cells equal to it should not be processed

	Unset metadata is -1 (cte.UNSET). The no-data value of unsigned and boolean
	grids cannot hold -1 and is None until set.

	Warning:
		Accessors do not check bounds: guard with in_grid(). resize() does not
		preserve cell values. Neither is safe for concurrent use from several threads.

	Author: B.G.
	"""

	def __init__(self, dtype = F32, copyfrom = None):
		"""
		Create an empty grid, or a grid shaped like another one.

		Args:
			dtype: Element type (ElementType, name, Taichi/numpy dtype or bool/int/float). Default: F32
			copyfrom (Grid, optional): Grid of any element type whose metadata and
				dimensions are copied (not its cell values)

		Raises:
			TypeError: If dtype is not a supported element type

		Example:
			dem = Grid('f32')
			dem.resize(100, 80)
			flowdirs = Grid('i8', copyfrom = dem)  # same shape and georeferencing

		Author: B.G.
		"""

		self.dtype = resolve_element_type(dtype)

		# Metadata, unset until a reader or copy_metadata_from() fills it
		self.cellsize = float(cte.UNSET)
		self.xllcorner = float(cte.UNSET)
		self.yllcorner = float(cte.UNSET)
		self.data_cells = cte.UNSET
		self.no_data = self.dtype.unset

		# Storage record: flat pooled field plus its shape, only touched by resize() and clear()
		self._buffer = None
		self._nx = 0
		self._ny = 0

		if copyfrom is not None:
			self.copy_metadata_from(copyfrom)

	def width(self):
		return self._nx

	def height(self):
		return self._ny

	@property
	def rshp(self):
		"""Reshape tuple (height, width) for converting the flat storage to 2D arrays."""
		return (self._ny, self._nx)

	def copy_metadata_from(self, copyfrom):
		"""
		Copy everything but the cell values from another grid, then resize to its shape.

		Args:
			copyfrom (Grid): Source grid, of any element type. Its no-data value is
				cast to this grid's element type

		Note:
			Cell values are left in whatever state resize() produces.
			An unset no-data value (None, as on u32 and bool grids) stays None,
			even when this grid's element type could hold the -1 sentinel

		Author: B.G.
		"""
		self.cellsize = copyfrom.cellsize
		self.xllcorner = copyfrom.xllcorner
		self.yllcorner = copyfrom.yllcorner
		self.data_cells = copyfrom.data_cells
		self.no_data = self.dtype.convert(copyfrom.no_data)
		self.resize(copyfrom.width(), copyfrom.height())

	def resize(self, width, height):
		"""
		Reallocate the storage to width x height cells.

		Prints an estimate of the RAM requirement to stderr first (see cte.REPORT_RAM).

		Args:
			width (int): Number of columns
			height (int): Number of rows

		Raises:
			TypeError: If a dimension is not an integer (floats are not truncated)
			ValueError: If a dimension is negative

		Warning:
			Destructive: cell values are unspecified after a resize, fill() them if needed.

		Author: B.G.
		"""
		width, height = operator.index(width), operator.index(height)
		if width < 0 or height < 0:
			raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

		if cte.REPORT_RAM:
			print(f"\n\tApprox RAM requirement: {width * height * self.dtype.itemsize // cte.BYTES_PER_MB}MB", file=sys.stderr)

		self._release_buffer()

		# No field for empty grids, the shape is still recorded
		if width * height > 0:
			self._buffer = pdg.pool.taipool.get_tpfield(dtype = self.dtype.ti_dtype, shape = (width * height,))

		self._nx = width
		self._ny = height

	def clear(self):
		"""Give the storage back to the pool. Dimensions become 0, metadata is kept."""
		self._release_buffer()
		self._nx = 0
		self._ny = 0

	def release(self):
		self.clear()

	def _release_buffer(self):
		if self._buffer is not None:
			pdg.pool.taipool.release_field(self._buffer)
			self._buffer = None

	#########################################
	###### BOUNDS PREDICATES ################
	#########################################

	def in_grid(self, x, y):
		"""True if (x, y) is within the bounds of the grid."""
		return 0 <= x < self._nx and 0 <= y < self._ny

	def interior_grid(self, x, y):
		"""True if (x, y) is not an edge cell. Grids smaller than 3 in a dimension have no interior."""
		return 1 <= x < self._nx - 1 and 1 <= y < self._ny - 1

	def edge_grid(self, x, y):
		"""True if (x, y) lies on the outermost ring. Only meaningful for in_grid() cells."""
		return x == 0 or y == 0 or x == self._nx - 1 or y == self._ny - 1

	#########################################
	###### CELL ACCESS ######################
	#########################################

	def at(self, x, y):
		"""Value of cell (x, y). No bounds checking."""
		return self.dtype.from_storage(self._buffer.field[y * self._nx + x])

	def set(self, x, y, value):
		"""Write value (cast to the element type) in cell (x, y). No bounds checking."""
		self._buffer.field[y * self._nx + x] = self.dtype.to_storage(value)

	def __getitem__(self, key):
		x, y = key
		return self.at(x, y)

	def __setitem__(self, key, value):
		x, y = key
		self.set(x, y, value)

	def fill(self, value):
		"""
		Set every cell of the grid to value.

		Rows are written in parallel by a Taichi kernel; the call returns once all
		cells are written.

		Args:
			value: Fill value, cast to the element type

		Author: B.G.
		"""
		if self._buffer is None:
			return

		with pdg.pool.temp_field(self.dtype.ti_dtype, ()) as val:
			val.field[None] = self.dtype.to_storage(value)
			kn.fill_rows(self._buffer.field, val.field, self._nx, self._ny)
		ti.sync()

	#########################################
	###### COMPARISON #######################
	#########################################

	def equals(self, other):
		"""
		True if both grids have the same dimensions and every cell equals its counterpart.

		Metadata (cellsize, corners, no-data, data cells) is not compared.

		Args:
			other (Grid): Grid of the same element type

		Returns:
			bool: False on dimension mismatch

		Raises:
			TypeError: If other has a different element type

		Author: B.G.
		"""
		if other.dtype is not self.dtype:
			raise TypeError(f"Cannot compare a {self.dtype.name} grid with a {other.dtype.name} grid")

		if self._nx != other._nx or self._ny != other._ny:
			return False

		if self._buffer is None:
			return True

		with pdg.pool.temp_field(ti.i32, ()) as count:
			count.field[None] = 0
			kn.count_mismatches(self._buffer.field, other._buffer.field, count.field)
			return count.field[None] == 0

	def __eq__(self, other):
		if not isinstance(other, Grid) or other.dtype is not self.dtype:
			return NotImplemented
		return self.equals(other)

	__hash__ = None

	#########################################
	###### OUTPUT HELPERS ###################
	#########################################

	def estimated_output_size(self):
		"""
		Estimate, in bytes, the size of the grid printed as an ASCII raster.

		Fixed number of characters per cell for the element type times the number of cells:
		9 for f32 and u32, 4 for i8, 2 for bool.

		Returns:
			int: Estimated number of bytes

		Raises:
			TypeError: If the element type has no estimate (f64, i32)

		Author: B.G.
		"""
		if self.dtype.chars_per_cell is None:
			raise TypeError(f"No output size estimate for {self.dtype.name} grids")
		return self.dtype.chars_per_cell * self._nx * self._ny

	def to_numpy(self):
		"""
		Copy the cells into a numpy array of shape (height, width), indexed [y, x].

		Author: B.G.
		"""
		if self._buffer is None:
			return np.zeros(self.rshp, dtype = self.dtype.np_dtype)
		return self._buffer.to_numpy().reshape(self.rshp).astype(self.dtype.np_dtype)

	def from_numpy(self, z):
		"""
		Resize the grid to the shape of a 2D array and load its values.

		Args:
			z (np.ndarray): Array of shape (height, width), indexed [y, x]. Values are
				cast to the element type

		Raises:
			ValueError: If z is not 2D

		Author: B.G.
		"""
		z = np.asarray(z)
		if z.ndim != 2:
			raise ValueError("z must be a 2D array")

		self.resize(z.shape[1], z.shape[0])
		if self._buffer is None:
			return

		flat = z.astype(self.dtype.np_dtype).ravel()
		if self.dtype.is_bool:
			flat = flat.astype(np.uint8)
		self._buffer.from_numpy(np.ascontiguousarray(flat))

	def __enter__(self):
		return self

	def __exit__(self, exc_type, exc_val, exc_tb):
		self.release()
		return False

	def __repr__(self):
		return (f"Grid(dtype={self.dtype.name}, width={self._nx}, height={self._ny}, cellsize={self.cellsize}, "
			f"xllcorner={self.xllcorner}, yllcorner={self.yllcorner}, no_data={self.no_data}, data_cells={self.data_cells})")
