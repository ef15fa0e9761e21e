"""
Taichi kernels operating on the flat storage of a Grid.

Grid cells live in a 1D field indexed as row * nx + col. Kernels here are
the only parallel code paths of the container.

Author: B.G.
"""

import taichi as ti


#########################################
###### INITIALISATION ###################
#########################################

@ti.kernel
def fill_rows(arr: ti.template(), val: ti.template(), nx: ti.i32, ny: ti.i32):
	"""
	Set every cell of a flat grid to a single value, one row per parallel task.

	Args:
		arr: Flat storage field of size nx*ny
		val: 0D field holding the value to write
		nx: Number of columns (row stride)
		ny: Number of rows

	Note:
		The outermost loop is parallelised by Taichi, rows are written in no particular order

	Author: B.G.
	"""
	for row in range(ny):
		for col in range(nx):
			arr[row * nx + col] = val[None]


#########################################
###### COMPARISON #######################
#########################################

@ti.kernel
def count_mismatches(arr1: ti.template(), arr2: ti.template(), count: ti.template()):
	"""
	Count cells that differ between two flat fields of identical shape.

	Args:
		arr1: First flat field
		arr2: Second flat field
		count: 0D i32 field receiving the number of differing cells (must be zeroed first)

	Author: B.G.
	"""
	for i in arr1:
		if arr1[i] != arr2[i]:
			ti.atomic_add(count[None], 1)
