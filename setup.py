from setuptools import setup, find_packages
import re

# read the version without importing the package, which needs numpy
with open('simplicial/__init__.py') as init:
	version = re.search(r"__version__ = '([^']+)'", init.read()).group(1)

with open('README.md') as readme:
	long_description = readme.read()

setup(name='simplicial',
	version=version,
	description='Simplex reflection primitives for piecewise-linear continuation on the Freudenthal triangulation',
	long_description=long_description,
	long_description_content_type='text/markdown',
	license='BSD',
	packages=[x for x in find_packages() if 'tests' not in x],
	python_requires='>=3.8',
	install_requires=['pytest', 'numpy'],
	extras_require={'test': ['pytest']})
