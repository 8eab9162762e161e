import logging
import numbers
import numpy
from fractions import Fraction
from typing import List
from .errors import DegenerateSimplexError, InvalidArgumentError, UnsupportedTypeError
from .simplex import Simplex, check_facet_index, check_full_dimensional, check_representable

logger = logging.getLogger(__name__)

# Relative size below which a pivot of the edge-vector factorization counts as zero, i.e. the facet's edge vectors are
# taken to be linearly dependent. Used as is for inexact Python rings (Decimal, mpmath floats); numpy float dtypes get
# RTOL_EPS_FACTOR machine epsilons per dimension instead, like the cutoff numpy.linalg.matrix_rank uses. Exact types
# are tested against zero.
RANK_RTOL = 1e-12
RTOL_EPS_FACTOR = 10

# dtypes numpy.linalg.qr can factor. Everything else goes through the elementwise Gram-Schmidt path.
_LAPACK_DTYPES = (numpy.dtype(numpy.float32), numpy.dtype(numpy.float64))


def default_rtol(simplex: Simplex) -> float:
	"""Degeneracy tolerance for the simplex's element type: a few machine epsilons of its numpy float dtype scaled by
	the dimension, or RANK_RTOL when numpy doesn't know the precision."""
	if numpy.issubdtype(simplex.dtype, numpy.floating):
		return float(numpy.finfo(simplex.dtype).eps) * max(simplex.n, simplex.dims) * RTOL_EPS_FACTOR
	return RANK_RTOL


def reflect(simplex: Simplex, facet_index: int, rtol: float=None) -> Simplex:
	"""Geometrically reflect a simplex across one of its facets: vertex facet_index is replaced by its mirror image
	in the hyperplane through the other n vertices, and those n vertices are carried over untouched.

	For float32/float64 coordinates the normal of the facet hyperplane comes from a complete QR factorization of the
	edge vectors. Every other ring (integers, fractions.Fraction, Decimal, mpmath floats, long doubles) is handled by
	Gram-Schmidt in the ring's own arithmetic, which keeps rationals exact. Integer coordinates are computed as
	Fractions and rounded to the nearest integer at the end, since the mirror image of a lattice point usually isn't
	one.

	:param simplex: a full-dimensional simplex (n == dims)
	:param facet_index: which facet to reflect across, 1..n+1. Facet i is the one opposite vertex i.
	:param rtol: relative tolerance for deciding the simplex is degenerate, for inexact element types. None picks
		default_rtol(simplex), which follows the precision of the dtype.
	:returns: a new Simplex; the input is left alone
	:raises UnsupportedTypeError: for element types without an ordering, or when the rounded mirror image doesn't fit
		in a fixed-width integer dtype (a negative coordinate in an unsigned one, say)
	"""
	check_facet_index(simplex, facet_index)
	check_full_dimensional(simplex)
	if rtol is None:
		rtol = default_rtol(simplex)
	if isinstance(rtol, bool) or not isinstance(rtol, numbers.Real) or rtol < 0:
		raise InvalidArgumentError('rtol must be a non-negative real number, got ' + repr(rtol))
	if simplex.dtype.kind in 'bcmMSUV': # no ordering, or not numbers at all
		raise UnsupportedTypeError('Cannot reflect a simplex with ' + str(simplex.dtype) + ' coordinates')
	if numpy.issubdtype(simplex.dtype, numpy.floating) and not numpy.all(numpy.isfinite(simplex.vertices)):
		raise InvalidArgumentError('Cannot reflect a simplex with inf or nan coordinates')

	# Any vertex other than the one being reflected will do as the origin of the facet's hyperplane. Which one only
	# changes the intermediate numbers, not the answer.
	origin_index = 2 if facet_index == 1 else 1
	origin = simplex.vertex(origin_index)
	target = simplex.vertex(facet_index)
	others = [simplex.vertex(i) for i in range(1, simplex.n + 2) if i != origin_index and i != facet_index]

	if simplex.dtype in _LAPACK_DTYPES:
		reflected = _reflect_qr(origin, target, others, rtol)
	else:
		integral = simplex.is_integral()
		reflected = _reflect_gram_schmidt(origin, target, others, rtol, lift=_to_fraction if integral else None)
		if integral:
			reflected = [round(x) for x in reflected]
			logger.debug('rounded reflected vertex %d to the lattice: %s', facet_index, reflected)
			check_representable(reflected, simplex.dtype)

	new_simplex = simplex.copy()
	new_simplex.vertices[facet_index - 1] = reflected
	logger.debug('reflected %d-simplex across facet %d', simplex.n, facet_index)
	return new_simplex


def _reflect_qr(origin: numpy.ndarray, target: numpy.ndarray, others: List[numpy.ndarray], rtol: float) -> numpy.ndarray:
	"""Mirror target across the hyperplane through origin and others, using LAPACK."""
	w = target - origin
	if others:
		edge_vectors = numpy.array([vertex - origin for vertex in others]).T # dims x (n-1), one edge per column
		scale = numpy.max(numpy.linalg.norm(edge_vectors, axis=0))

		# The first n-1 columns of Q span the facet's hyperplane, so the last one is its unit normal. R tells us
		# whether the edges really spanned n-1 dimensions.
		try:
			Q, R = numpy.linalg.qr(edge_vectors, mode='complete')
		except numpy.linalg.LinAlgError as e: # LAPACK did not converge
			logger.warning('QR factorization of the edge vectors failed: %s', e)
			raise DegenerateSimplexError('Could not factor the edge vectors of the facet: ' + str(e)) from e
		pivots = numpy.abs(numpy.diag(R))
		if numpy.any(pivots <= rtol*scale):
			logger.warning('edge vectors are rank deficient, pivots %s', pivots)
			raise DegenerateSimplexError('The facet vertices are affinely dependent, so they do not define a hyperplane.')
		normal = Q[:, -1]
	else: # 1-simplex: the facet is a single point and the "hyperplane" is that point, with normal along the line
		scale = numpy.linalg.norm(w)
		normal = numpy.ones(1, dtype=w.dtype)

	if numpy.dot(normal, w) < 0: # point the normal toward the vertex being reflected
		normal = -normal

	distance = numpy.dot(w, normal)
	if distance <= rtol*max(scale, numpy.linalg.norm(w)):
		logger.warning('vertex lies in the hyperplane of its opposite facet, distance %s', distance)
		raise DegenerateSimplexError('The reflected vertex lies in the hyperplane of the facet, so the simplex is flat.')

	return target - 2*distance*normal


def _reflect_gram_schmidt(origin, target, others, rtol: float, lift=None) -> list:
	"""Mirror target across the hyperplane through origin and others, with nothing but +, -, * and / on the
	coordinates. The normal is never normalized: the component of (target - origin) orthogonal to the facet is the
	signed distance times the unit normal already, so the answer is target minus twice that component.

	:param lift: optional conversion applied to every coordinate first, e.g. Fraction to do integer input exactly
	"""
	if lift is not None:
		origin, target = [lift(x) for x in origin], [lift(x) for x in target]
		others = [[lift(x) for x in vertex] for vertex in others]
	origin, target = list(origin), list(target)
	exact = all(isinstance(x, numbers.Rational) for x in origin + target)

	def negligible(squared, reference):
		return squared == 0 if exact else float(squared) <= rtol*rtol*float(reference)

	basis = [] # orthogonal (not orthonormal) basis of the facet directions, paired with each vector's squared length
	for vertex in others:
		edge = [v - o for v, o in zip(vertex, origin)]
		u = _project_out(edge, basis)
		uu = _dot(u, u)
		if negligible(uu, _dot(edge, edge)):
			logger.warning('edge vectors are linearly dependent')
			raise DegenerateSimplexError('The facet vertices are affinely dependent, so they do not define a hyperplane.')
		basis.append((u, uu))

	w = [t - o for t, o in zip(target, origin)]
	r = _project_out(w, basis)
	if negligible(_dot(r, r), _dot(w, w)):
		logger.warning('vertex lies in the hyperplane of its opposite facet')
		raise DegenerateSimplexError('The reflected vertex lies in the hyperplane of the facet, so the simplex is flat.')

	return [t - 2*ri for t, ri in zip(target, r)]


def _project_out(v: list, basis: list) -> list:
	"""Subtract from v its projection on each (already orthogonal) basis vector in turn (modified Gram-Schmidt)."""
	for b, bb in basis:
		c = _dot(v, b)/bb
		v = [vi - c*bi for vi, bi in zip(v, b)]
	return v


def _dot(a: list, b: list):
	total = a[0]*b[0]
	for x, y in zip(a[1:], b[1:]):
		total = total + x*y
	return total


def _to_fraction(x) -> Fraction:
	return Fraction(int(x))
