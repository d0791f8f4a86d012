"""Mask a netCDF file.

Chlorophyll values over land and inland waters are discarded,
using a shapefile of land polygons.
The output file contains the masked variable, its coordinates, and
the mask itself.

If the shapefile cannot be read, the output file is still written
but all values are masked: check the returned result.
"""

from polymask import set_file_log
from polymask.netcdf import mask_file


set_file_log('mask_chl.log', level='debug')

result = mask_file('/Data/CHL/A2007001.L3m_DAY_CHL.nc', 'chlor_a',
                   '/Data/coastlines/land_polygons.shp',
                   '/Data/CHL/A2007001.L3m_DAY_CHL_ocean.nc',
                   keep='outside', method='planar')

print(result)
if not result.ok:
    raise SystemExit(1)
