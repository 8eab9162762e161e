import numbers
import numpy
from typing import Iterable, Sequence, Union
from .errors import (EmptyInputError, InconsistentDimensionError, InvalidArgumentError, InvalidFacetError,
	NotFullDimensionalError, UnsupportedTypeError)


# numpy knows these by name; anything else that comes in as a class (Fraction, Decimal, mpmath.mpf...) gets stored
# elementwise in an object array
_NATIVE_TYPES = (int, float, complex, bool, object)


class Simplex:
	"""An n-simplex living in dims-dimensional space, stored as an ordered tuple of n+1 vertices. The coordinates sit
	in a 2D numpy array with one row per vertex, so vertex i (1-based, the way facets are numbered) is row i-1.

	The element type is whatever numeric ring the coordinates come from: numpy integer and float dtypes are stored
	natively, exact or arbitrary-precision types like fractions.Fraction live in an object array. Vertex order is the
	caller's: nothing here reorders vertices except an explicit call to sort().

	Instances are values. Nothing in the package writes into a Simplex it did not just create, apart from sort().
	"""

	def __init__(self, vertices: Union['Simplex', Iterable[Sequence]], dtype=None):
		"""Constructor

		:param vertices: either an iterable of n+1 points, each a sequence of dims coordinates, or another Simplex to
			copy (and convert, when dtype is given)
		:param dtype: pin the element type. Leave as None to promote over all supplied coordinates, so that
			[[0, 0], [1.0, 0]] ends up float64.
		"""
		if isinstance(vertices, Simplex):
			rows = vertices._vertices
			if dtype is None:
				dtype = vertices._vertices.dtype
		else:
			rows = [list(vertex) for vertex in vertices]
			if len(rows) == 0:
				raise EmptyInputError('A simplex needs at least one vertex.')
			dims = len(rows[0])
			for i, row in enumerate(rows):
				if len(row) != dims:
					raise InconsistentDimensionError('All vertices must have the same dimension: vertex 1 has ' +
						str(dims) + ' coordinates but vertex ' + str(i+1) + ' has ' + str(len(row)))

		self._vertices = _as_coordinates(rows, dtype)

		n, dims = self._vertices.shape[0] - 1, self._vertices.shape[1]
		if n < 1: raise InvalidArgumentError('This class is intended to work only for the 1-simplex and above.')
		if dims < 1: raise InvalidArgumentError('Vertices need at least one coordinate.')

	@classmethod
	def empty(cls, n: int, dims: int=None, dtype=float) -> 'Simplex':
		"""Build an n-simplex in dims dimensions with uninitialized coordinates, for callers that fill in the vertex
		array themselves.

		:param n: simplex dimension, so there will be n+1 vertices
		:param dims: dimension of the embedding space, defaulting to n
		:param dtype: element type of the storage
		"""
		if dims is None: dims = n
		if not isinstance(n, numbers.Integral) or not isinstance(dims, numbers.Integral) or n < 1 or dims < 1:
			raise InvalidArgumentError('Need integers n >= 1 and dims >= 1, got n=' + str(n) + ', dims=' + str(dims))

		simplex = cls.__new__(cls)
		simplex._vertices = numpy.empty((n+1, dims), dtype=_storage_dtype(dtype))
		return simplex

	@property
	def vertices(self) -> numpy.ndarray:
		"""The (n+1, dims) coordinate array. Row i-1 is vertex i."""
		return self._vertices

	@property
	def n(self) -> int:
		return self._vertices.shape[0] - 1

	@property
	def dims(self) -> int:
		return self._vertices.shape[1]

	@property
	def dtype(self) -> numpy.dtype:
		return self._vertices.dtype

	def element_type(self) -> type:
		"""The scalar type of the coordinates: the numpy scalar type for native dtypes, and for object arrays the one
		Python type every coordinate shares. Construction already promotes mixes like Fraction and int to a single
		type, so object only comes back for mixes that have none (Fraction with Decimal, say).
		"""
		if self._vertices.dtype != object:
			return self._vertices.dtype.type
		types = {type(x) for x in self._vertices.flat}
		return types.pop() if len(types) == 1 else object

	def is_integral(self) -> bool:
		"""Whether the coordinates come from an integer type, which is what the lattice routines require."""
		if numpy.issubdtype(self._vertices.dtype, numpy.integer):
			return True
		if self._vertices.dtype == object:
			return all(isinstance(x, numbers.Integral) and not isinstance(x, bool) for x in self._vertices.flat)
		return False

	def vertex(self, i: int) -> numpy.ndarray:
		"""Return vertex i, counting from 1 the same way facets are counted."""
		check_facet_index(self, i)
		return self._vertices[i-1]

	def astype(self, dtype) -> 'Simplex':
		"""Copy into a new element type. Conversion is elementwise; any rounding is the caller's business."""
		return Simplex(self, dtype=dtype)

	def copy(self) -> 'Simplex':
		return Simplex(self)

	def sort(self) -> 'Simplex':
		"""Put the vertices in lexicographic order. This is the only operation that mutates a Simplex, and it returns
		the same object so calls can be chained.
		"""
		# tuples of coordinates compare for every element type, object arrays included
		order = sorted(range(len(self._vertices)), key=lambda i: tuple(self._vertices[i]))
		self._vertices = self._vertices[order]
		return self

	def __len__(self) -> int:
		return len(self._vertices)

	def __iter__(self):
		return iter(self._vertices)

	def __eq__(self, other) -> bool:
		if not isinstance(other, Simplex):
			return NotImplemented
		return self._vertices.shape == other._vertices.shape and bool(numpy.all(self._vertices == other._vertices))

	__hash__ = None # mutable through sort(), so not hashable

	def __repr__(self) -> str:
		return 'Simplex(' + str(self._vertices.tolist()) + ', dtype=' + self.element_type().__name__ + ')'


def _storage_dtype(dtype) -> numpy.dtype:
	"""numpy dtype to allocate for a requested element type."""
	if _is_python_ring(dtype):
		return numpy.dtype(object)
	try:
		return numpy.dtype(dtype)
	except TypeError:
		raise InvalidArgumentError('Cannot store coordinates of type ' + repr(dtype))


def _is_python_ring(dtype) -> bool:
	"""Whether dtype is a Python class numpy has no native dtype for, e.g. fractions.Fraction."""
	return isinstance(dtype, type) and not issubclass(dtype, numpy.generic) and dtype not in _NATIVE_TYPES


def _as_coordinates(rows, dtype) -> numpy.ndarray:
	"""Turn rows of coordinates into a fresh (n+1, dims) array of the requested type."""
	if _is_python_ring(dtype): # numpy won't call the constructor for us, so convert each coordinate by hand
		array = numpy.empty((len(rows), len(rows[0])), dtype=object)
		for i, row in enumerate(rows):
			for j, x in enumerate(row):
				array[i, j] = dtype(x.item() if isinstance(x, numpy.generic) else x) # Decimal won't take numpy.int64
		return array

	array = numpy.array(rows, dtype=_storage_dtype(dtype) if dtype is not None else None)
	if array.ndim != 2: # e.g. vertices given as bare scalars
		raise InconsistentDimensionError('Vertices must be sequences of coordinates, got array of shape ' +
			str(array.shape))
	if dtype is None and array.dtype == object:
		ring = _promoted_ring(array)
		if ring is not None:
			return _as_coordinates(rows, ring)
	return array


def _promoted_ring(array: numpy.ndarray):
	"""The type a mix of Python numbers promotes to, the way their arithmetic would: ints join whatever else is
	there, and rationals mixed with floats become floats. None when there is no such type, e.g. Fraction and Decimal.
	"""
	types = {type(x) for x in array.flat if not isinstance(x, numbers.Integral)}
	if len(types) == 1:
		return types.pop()
	if types and all(issubclass(t, (numbers.Rational, float)) for t in types):
		return float
	return None


def check_representable(values, dtype: numpy.dtype):
	"""Raise unless every integer in values fits in dtype, when dtype is a fixed-width integer type."""
	if not numpy.issubdtype(dtype, numpy.integer):
		return
	info = numpy.iinfo(dtype)
	for x in values:
		if x < info.min or x > info.max:
			raise UnsupportedTypeError('Coordinate ' + str(x) + ' does not fit in ' + str(dtype) + ', which holds ' +
				str(info.min) + '..' + str(info.max))


def check_facet_index(simplex: Simplex, facet_index: int):
	"""Raise unless facet_index names one of the simplex's n+1 facets."""
	if isinstance(facet_index, bool) or not isinstance(facet_index, numbers.Integral):
		raise InvalidArgumentError('Facet index must be an integer, got ' + repr(facet_index))
	if facet_index < 1 or facet_index > simplex.n + 1:
		raise InvalidFacetError('Facet index must be between 1 and ' + str(simplex.n + 1) + ', got ' +
			str(facet_index))


def check_full_dimensional(simplex: Simplex):
	if simplex.n != simplex.dims:
		raise NotFullDimensionalError('Reflection is only defined for full-dimensional simplices, got a ' +
			str(simplex.n) + '-simplex in ' + str(simplex.dims) + ' dimensions')


def simplex_dimension(simplex: Simplex) -> int:
	"""The n of an n-simplex, which has n+1 vertices."""
	return simplex.n


def space_dimension(simplex: Simplex) -> int:
	"""The dimension of the space the simplex lives in."""
	return simplex.dims


def element_type(simplex: Simplex) -> type:
	return simplex.element_type()


def sort(simplex: Simplex) -> Simplex:
	"""In-place lexicographic sort of the vertices. Returns the same simplex."""
	return simplex.sort()


def shared_vertices(a: Simplex, b: Simplex) -> int:
	"""Count the vertices of a that are also vertices of b. Two full-dimensional n-simplices are neighbors across a
	facet exactly when this is n.
	"""
	if a.dims != b.dims:
		return 0
	others = {tuple(vertex) for vertex in b.vertices}
	return sum(tuple(vertex) in others for vertex in a.vertices)
