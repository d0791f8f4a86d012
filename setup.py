
import re

from setuptools import setup, find_packages


with open('README.rst') as file:
    long_description = file.read()

with open('polymask/__init__.py') as file:
    version = re.search(r'__version__ = "(.*)"', file.read()).group(1)


required = ['numpy', 'matplotlib', 'netCDF4', 'pyshp>=2.1']

extras = {
    "Mask": ["scipy"],
    "Shapely": ["shapely>=1.8"],
    "tests": ["pytest", "scipy", "shapely>=1.8"]
}


setup(name='polymask',
      version=version,
      description='Rasterize polygons on latitude/longitude grids',

      long_description=long_description,
      long_description_content_type='text/x-rst',
      keywords='mask polygon shapefile grid netcdf rasterize',

      classifiers=[
          'Development Status :: 4 - Beta',
          'Intended Audience :: Science/Research',
          'License :: OSI Approved :: MIT License',
          'Programming Language :: Python :: 3.7',
          'Programming Language :: Python :: 3.8',
      ],

      author='Clément HAËCK',
      author_email='clement.haeck@posteo.net',

      python_requires='>=3.7',
      install_requires=required,
      extras_require=extras,
      packages=find_packages(exclude=['tests', 'tests.*']),
      )
