import taichi as ti
import numpy as np
import pydemgrid as pdg
import time

ti.init(ti.cpu, debug = False)

nx, ny = 2048, 1024

# Random landscape with a no-data border
z = np.random.rand(ny, nx).astype(np.float32) * 1000
z[0, :] = z[-1, :] = z[:, 0] = z[:, -1] = -9999.

dem = pdg.grid.Grid('f32')
dem.from_numpy(z)
dem.cellsize = 30.
dem.xllcorner, dem.yllcorner = 500000., 4100000.
dem.no_data = -9999.
dem.data_cells = int(np.sum(z != dem.no_data))

# Same shape and georeferencing for the auxiliary grids
flowdirs = pdg.grid.Grid('i8', copyfrom = dem)
labels = pdg.grid.Grid('u32', copyfrom = dem)
visited = pdg.grid.Grid(bool, copyfrom = dem)

st = time.time()
for i in range(10):
	flowdirs.fill(0)
	labels.fill(0)
	visited.fill(False)
print('Timing parallel fill of 3 grids:', (time.time() - st)/10)

print(dem)
print(flowdirs)
print('Interior cells:', sum(1 for y in range(0, ny, 64) for x in range(0, nx, 64) if dem.interior_grid(x, y)), '(sampled)')

for g in (dem, flowdirs, labels, visited):
	print(g.dtype.name, 'ASCII output ~', g.estimated_output_size() / 1024**2, 'MB')

print(pdg.pool.pool_stats())
