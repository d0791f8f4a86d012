"""Mask SST outside of a few regions.

Regions are read from a shapefile containing one polygon per
region, with their name in the 'NAME' attribute.
Each region is masked separately to compute its average SST,
and all regions together for a map.

The SST file is an L3 product on a regular 0..360 grid,
which is flipped to -180..180 to match the shapefile.
"""

import numpy as np

import polymask
from polymask.netcdf import read_grid


polymask.set_logging('debug')

regions = ['Gulf Stream', 'Labrador Sea', 'Sargasso Sea']

grid, sst = read_grid('/Data/SST/A_2007001_2007008.L3m_8D_sst.nc', 'sst')
grid, order = grid.flip_lon()
sst = sst[..., order]

# Each region separately
masker = polymask.GridMasker(method='geodesic')
masks = []
for name in regions:
    fc = polymask.read_shapefile('/Data/regions.shp', field='NAME',
                                 values=[name])
    result = masker.compute(grid, fc)
    if not result.ok:
        print("%s: %s" % (name, result.error))
        continue
    masks.append(result.mask)
    avg = np.ma.mean(polymask.apply_mask(sst, result))
    print("%s: %.1f%% of grid, mean SST %.2f"
          % (name, result.coverage(), avg))

# All regions, slightly enlarged to include the coasts
mask = polymask.merge_masks(*masks)
mask = polymask.enlarge_mask(mask, 2)
sst_regions = polymask.apply_mask(sst, mask, keep='inside')
