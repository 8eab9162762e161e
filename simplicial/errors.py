class SimplexError(ValueError):
	"""Base class for everything this package raises on bad input."""


class InvalidArgumentError(SimplexError):
	"""A dimension, element type or index is outside what the operation accepts."""


class UnsupportedTypeError(InvalidArgumentError, TypeError):
	"""The element type is not from the numeric family the operation needs (e.g. floats handed to the lattice
	routines, which only make sense over the integers)."""


class InvalidFacetError(InvalidArgumentError, IndexError):
	"""Facet index outside [1, n+1]."""


class InconsistentDimensionError(SimplexError):
	"""Vertices of unequal length."""


class EmptyInputError(SimplexError):
	"""No vertices supplied."""


class NotFullDimensionalError(SimplexError):
	"""The operation needs n == dims."""


class DegenerateSimplexError(SimplexError):
	"""The vertices are affinely dependent, so there is no hyperplane to reflect across."""


class InvalidFreudenthalStructureError(SimplexError):
	"""The vertices do not decode as a staircase cell of the Freudenthal triangulation."""
