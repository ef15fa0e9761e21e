"""
Grid cell coordinates.

Author: B.G.
"""

from typing import NamedTuple


class Coordinate(NamedTuple):
	"""
	Immutable (x, y) index pair of a grid cell.

	x is the column and y the row. Coordinate() without arguments gives (-1, -1),
	which should generally be avoided and never relied upon. Being a tuple, a
	Coordinate unpacks as x, y = cell and can index a Grid directly: grid[cell].

	Author: B.G.
	"""
	x: int = -1
	y: int = -1
