"""The Freudenthal (Kuhn) triangulation of the integer lattice, handled purely combinatorially.

The lattice is cut into unit hypercubes and each hypercube into n! simplices, one per permutation of the coordinates:
starting at the cube's corner, the permutation says which coordinate to bump by one to get from each vertex to the
next. The triangulation itself is never built. A simplex's place in it is read back off its own vertices (the base
vertex and that increment order) whenever it is needed, which is all a reflection has to know to find its neighbor.
"""
import logging
import numbers
import numpy
from typing import List, Sequence, Tuple
from .errors import InvalidArgumentError, InvalidFreudenthalStructureError, UnsupportedTypeError
from .simplex import Simplex, check_facet_index, check_full_dimensional, check_representable

logger = logging.getLogger(__name__)


def freudenthal_initial_simplex(n: int, dtype=int) -> Simplex:
	"""Return the canonical staircase cell of the Freudenthal triangulation of Z^n:
	(0,0,...,0), (1,0,...,0), (1,1,0,...,0), ..., (1,1,...,1). Vertex j has its first j-1 coordinates set to one.

	:param n: lattice dimension, at least 1
	:param dtype: an integer type for the coordinates, machine int by default
	"""
	_check_lattice_dtype(dtype)
	if isinstance(n, bool) or not isinstance(n, numbers.Integral) or n < 1:
		raise InvalidArgumentError('Dimension must be an integer of at least 1, got ' + repr(n))

	# row r is vertex r+1, which has ones strictly left of the diagonal
	return Simplex(numpy.tril(numpy.ones((n+1, n), dtype=int), -1).tolist(), dtype=dtype)


def is_freudenthal(simplex: Simplex) -> bool:
	"""Decide whether an integer simplex is a cell of the Freudenthal triangulation, i.e. the staircase cell up to an
	integer translation and a permutation of the coordinates. The vertices must come in staircase order (which
	lexicographic sorting preserves).

	Simplices that are not full-dimensional are never Freudenthal. Non-integer coordinates are rejected outright
	with UnsupportedTypeError rather than answered with False.
	"""
	_check_lattice_simplex(simplex)
	if simplex.n != simplex.dims:
		return False

	rows = _lattice_rows(simplex)
	base = rows[0]
	previous = [0]*simplex.dims
	for i, row in enumerate(rows[1:], 1):
		translated = [x - b for x, b in zip(row, base)] # so that vertex 1 sits at the origin
		if any(x != 0 and x != 1 for x in translated) or sum(translated) != i:
			return False
		step = [x - p for x, p in zip(translated, previous)]
		if sorted(step) != [0]*(simplex.dims - 1) + [1]: # must be a single unit vector
			return False
		previous = translated
	return True


def freudenthal_increment_order(simplex: Simplex) -> Tuple[List[int], List[int]]:
	"""Decode a Freudenthal simplex into its base vertex and its increment order: order[k] is the (0-based) coordinate
	that goes up by one between vertex k+1 and vertex k+2. Together these pin down the simplex exactly, and
	freudenthal_simplex() turns them back into vertices.

	:raises InvalidFreudenthalStructureError: if the vertices aren't a staircase
	:returns: (base vertex as a list of Python ints, increment order as a list of coordinate indices)
	"""
	_check_lattice_simplex(simplex)
	check_full_dimensional(simplex)

	rows = _lattice_rows(simplex)
	return rows[0], _increment_order(rows)


def freudenthal_simplex(base: Sequence[int], order: Sequence[int], dtype=None) -> Simplex:
	"""Build the Freudenthal cell with the given base vertex and increment order, by starting at base and bumping
	coordinate order[0], then order[1], and so on.

	:param base: integer coordinates of vertex 1
	:param order: a permutation of range(len(base))
	:param dtype: integer element type of the result, inferred from base when None
	:raises UnsupportedTypeError: if a coordinate falls outside what a fixed-width dtype holds
	"""
	base = list(base)
	if sorted(order) != list(range(len(base))):
		raise InvalidArgumentError('Increment order must be a permutation of the ' + str(len(base)) +
			' coordinate indices, got ' + str(list(order)))

	vertices = [[int(x) for x in base]]
	for coordinate in order:
		vertex = list(vertices[-1])
		vertex[coordinate] += 1
		vertices.append(vertex)

	if dtype is None:
		dtype = numpy.asarray(base).dtype if base else int
	_check_lattice_dtype(dtype)
	check_representable([x for vertex in vertices for x in vertex], numpy.dtype(dtype))
	return Simplex(vertices, dtype=dtype)


def freudenthal_reflect(simplex: Simplex, facet_index: int) -> Simplex:
	"""Step to the neighboring cell of the Freudenthal triangulation across facet facet_index (the facet opposite
	vertex facet_index). Nothing geometric happens here, only bookkeeping on the increment order, so the result is
	exact for any integer type. A step that leaves the range of a fixed-width dtype raises UnsupportedTypeError.

	Three cases:
	- an internal facet (1 < facet_index < n+1) swaps two neighboring entries of the increment order. The new cell is in
	  the same hypercube and reflecting across the same facet again gives back the original.
	- facet 1 drops the base vertex: the new base is vertex 2, one step along order[0], and that coordinate moves to
	  the end of the order, which puts the new cell in the next hypercube along it.
	- facet n+1 drops the last vertex: the base takes one step back along order[-1] and that coordinate moves to the
	  front of the order. This undoes facet 1 and vice versa.

	In every case the result shares the n vertices of the facet with the input, and the vertices come back in
	staircase order.

	:param simplex: a full-dimensional integer simplex that is_freudenthal() accepts
	:param facet_index: 1..n+1
	:raises InvalidFreudenthalStructureError: if the simplex doesn't decode as a staircase
	"""
	check_facet_index(simplex, facet_index)
	base, order = freudenthal_increment_order(simplex)
	n = simplex.n

	if facet_index == 1:
		base[order[0]] += 1
		order = order[1:] + order[:1]
		logger.debug('facet 1: stepping up along coordinate %d into the next hypercube', order[-1])
	elif facet_index == n + 1:
		base[order[-1]] -= 1
		order = order[-1:] + order[:-1]
		logger.debug('facet %d: stepping back along coordinate %d into the previous hypercube', facet_index, order[0])
	else:
		# vertex facet_index sits between increments facet_index-1 and facet_index (1-based), so swapping those two
		# replaces it and nothing else
		k = facet_index - 1
		order[k-1], order[k] = order[k], order[k-1]
		logger.debug('facet %d: swapping increments %d and %d within the hypercube', facet_index, order[k], order[k-1])

	return freudenthal_simplex(base, order, dtype=simplex.dtype)


def _increment_order(rows: List[List[int]]) -> List[int]:
	"""Recover which coordinate increases between each pair of consecutive vertices. Every step has to be a unit
	vector, and no coordinate can be used twice, otherwise the vertices aren't a staircase."""
	order = []
	for i in range(1, len(rows)):
		step = [x - p for x, p in zip(rows[i], rows[i-1])]
		changed = [j for j, d in enumerate(step) if d != 0]
		if len(changed) != 1 or step[changed[0]] != 1:
			raise InvalidFreudenthalStructureError('Going from vertex ' + str(i) + ' to vertex ' + str(i+1) +
				' is not a single unit step: ' + str(step))
		if changed[0] in order:
			raise InvalidFreudenthalStructureError('Coordinate ' + str(changed[0]) + ' is incremented twice.')
		order.append(changed[0])
	return order


def _lattice_rows(simplex: Simplex) -> List[List[int]]:
	# Python ints, so that differences of unsigned or narrow coordinates can't wrap around
	return [[int(x) for x in vertex] for vertex in simplex.vertices]


def _check_lattice_simplex(simplex: Simplex):
	if not simplex.is_integral():
		raise UnsupportedTypeError('Freudenthal simplices live on the integer lattice, got ' +
			simplex.element_type().__name__ + ' coordinates')


def _check_lattice_dtype(dtype):
	try:
		# object means Python ints, for coordinates that outgrow 64 bits
		integral = numpy.issubdtype(numpy.dtype(dtype), numpy.integer) or numpy.dtype(dtype) == object
	except TypeError:
		integral = False
	if not integral:
		raise UnsupportedTypeError('Freudenthal simplices need an integer element type, got ' + repr(dtype))
