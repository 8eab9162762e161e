"""Primitives for piecewise-linear (simplicial) continuation: a Simplex value type, geometric reflection of a simplex
across one of its facets, and combinatorial walking across the Freudenthal triangulation of the integer lattice.
"""
from .errors import (SimplexError, InvalidArgumentError, UnsupportedTypeError, InvalidFacetError,
	InconsistentDimensionError, EmptyInputError, NotFullDimensionalError, DegenerateSimplexError,
	InvalidFreudenthalStructureError)
from .simplex import Simplex, simplex_dimension, space_dimension, element_type, sort, shared_vertices
from .reflection import reflect, default_rtol, RANK_RTOL, RTOL_EPS_FACTOR
from .freudenthal import (freudenthal_initial_simplex, is_freudenthal, freudenthal_increment_order,
	freudenthal_simplex, freudenthal_reflect)

__version__ = '0.1.0'
