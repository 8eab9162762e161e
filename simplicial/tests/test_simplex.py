# run with python3 -m pytest

import pytest
import numpy
from decimal import Decimal
from fractions import Fraction
from ..simplex import Simplex, simplex_dimension, space_dimension, element_type, sort, shared_vertices
from ..errors import (SimplexError, InvalidArgumentError, InvalidFacetError, InconsistentDimensionError,
	EmptyInputError)


def test_construction_from_vertices():
	s = Simplex([[0, 0], [1, 0], [0, 1]])
	assert s.n == 2
	assert s.dims == 2
	assert len(s) == 3
	assert s.vertices.tolist() == [[0, 0], [1, 0], [0, 1]] # caller's order, not sorted
	assert element_type(s) is numpy.dtype(int).type

	s3d = Simplex([[0, 0, 0], [1, 0, 0], [0, 1, 0], [0, 0, 1]])
	assert simplex_dimension(s3d) == 3
	assert space_dimension(s3d) == 3

	# a triangle sitting in 3-space
	s_embedded = Simplex([[0, 0, 0], [1, 0, 0], [0, 1, 0]])
	assert simplex_dimension(s_embedded) == 2
	assert space_dimension(s_embedded) == 3

	# any iterable of sequences will do, including an array
	s_array = Simplex(numpy.eye(3)[:, :2])
	assert s_array.n == 2 and s_array.dims == 2


def test_element_type_is_promoted():
	s = Simplex([[0, 0], [1.0, 0], [0, 1]])
	assert element_type(s) is numpy.float64

	s_fraction = Simplex([[Fraction(0), Fraction(0)], [Fraction(1, 2), Fraction(0)], [Fraction(0), Fraction(1)]])
	assert element_type(s_fraction) is Fraction

	# plain ints mixed in join the Fraction ring
	s_mixed = Simplex([[Fraction(0), 0], [Fraction(1, 2), 0], [0, 1]])
	assert element_type(s_mixed) is Fraction
	assert all(isinstance(x, Fraction) for x in s_mixed.vertices.flat)
	assert s_mixed == s_fraction

	s_decimal = Simplex([[Decimal('0.5'), 0], [1, 0], [0, 1]])
	assert element_type(s_decimal) is Decimal
	assert all(isinstance(x, Decimal) for x in s_decimal.vertices.flat)

	# rationals and floats promote to float, as their arithmetic does
	s_float = Simplex([[Fraction(1, 2), 0.25], [1, 0], [0, 1]])
	assert element_type(s_float) is numpy.float64
	assert s_float.vertex(1).tolist() == [0.5, 0.25]

	# Fraction and Decimal have no common type, so they stay as they came
	s_unpromoted = Simplex([[Fraction(1, 2), Decimal(0)], [1, 0], [0, 1]])
	assert element_type(s_unpromoted) is object


def test_element_type_can_be_pinned():
	vertices = [[0, 0], [1, 0], [0, 1]]

	s_int32 = Simplex(vertices, dtype=numpy.int32)
	assert element_type(s_int32) is numpy.int32

	s_float = Simplex(vertices, dtype=float)
	assert element_type(s_float) is numpy.float64
	assert s_float.vertex(1).tolist() == [0.0, 0.0]

	s_fraction = Simplex(vertices, dtype=Fraction)
	assert element_type(s_fraction) is Fraction
	assert all(isinstance(x, Fraction) for x in s_fraction.vertices.flat)


def test_uninitialized_construction():
	s = Simplex.empty(2)
	assert s.n == 2
	assert s.dims == 2
	assert s.vertices.shape == (3, 2)
	assert element_type(s) is numpy.float64

	s_rect = Simplex.empty(2, 3, dtype=int)
	assert simplex_dimension(s_rect) == 2
	assert space_dimension(s_rect) == 3
	assert s_rect.vertices.shape == (3, 3)

	# the storage is the caller's to fill
	s_rect.vertices[:] = [[0, 0, 0], [1, 0, 0], [0, 1, 0]]
	assert s_rect == Simplex([[0, 0, 0], [1, 0, 0], [0, 1, 0]])

	with pytest.raises(InvalidArgumentError):
		Simplex.empty(0)
	with pytest.raises(InvalidArgumentError):
		Simplex.empty(2, 0)


def test_copy_and_conversion():
	original = Simplex([[1, 2], [3, 4], [5, 6]])
	copied = Simplex(original)
	assert copied == original
	assert copied is not original
	assert copied.vertices is not original.vertices
	assert element_type(copied) == element_type(original)

	copied.vertices[0, 0] = 100 # copies don't share storage
	assert original.vertex(1).tolist() == [1, 2]

	s_float = original.astype(float)
	assert element_type(s_float) is numpy.float64
	assert s_float.vertices.tolist() == [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]

	s_fraction = Simplex(original, dtype=Fraction)
	assert element_type(s_fraction) is Fraction
	assert s_fraction.vertex(3).tolist() == [Fraction(5), Fraction(6)]

	# and back again, with numpy doing the conversion
	assert Simplex(s_fraction, dtype=numpy.int16).vertices.tolist() == [[1, 2], [3, 4], [5, 6]]


def test_construction_errors():
	with pytest.raises(InconsistentDimensionError):
		Simplex([[0, 0], [1, 0, 0], [0, 1]])

	with pytest.raises(EmptyInputError):
		Simplex([])

	with pytest.raises(InvalidArgumentError): # a single point is a 0-simplex, which isn't supported
		Simplex([[0, 0]])

	# everything is a ValueError to callers that don't care which
	with pytest.raises(ValueError):
		Simplex([[0], [1, 2]])
	assert issubclass(EmptyInputError, SimplexError)


def test_sort_is_in_place():
	s = Simplex([[2, 1], [0, 0], [1, 2]])
	result = sort(s)
	assert result is s
	assert s.vertices.tolist() == [[0, 0], [1, 2], [2, 1]]

	s_float = Simplex([[2.5, 1.0], [0.0, 0.0], [1.0, 2.5]])
	s_float.sort()
	assert s_float.vertices.tolist() == [[0.0, 0.0], [1.0, 2.5], [2.5, 1.0]]

	s_neg = Simplex([[-1, -2], [-3, 0], [1, 1]])
	sort(s_neg)
	assert s_neg.vertices.tolist() == [[-3, 0], [-1, -2], [1, 1]]

	s_dup = Simplex([[1, 1], [0, 0], [1, 1]])
	sort(s_dup)
	assert s_dup.vertices.tolist() == [[0, 0], [1, 1], [1, 1]]

	s_fraction = Simplex([[Fraction(1, 2), 0], [Fraction(1, 3), 1], [0, 0]], dtype=Fraction)
	sort(s_fraction)
	assert s_fraction.vertices.tolist() == [[0, 0], [Fraction(1, 3), 1], [Fraction(1, 2), 0]]


def test_sort_preserves_type():
	for T in [numpy.int8, numpy.int16, numpy.int32, numpy.int64, numpy.float32, numpy.float64]:
		s = Simplex([[0, 1], [1, 0], [0, 0]], dtype=T)
		assert element_type(s) is T
		sort(s)
		assert element_type(s) is T
		assert s.vertices.tolist() == [[0, 0], [0, 1], [1, 0]]


def test_queries_do_not_mutate():
	vertices = [[0, 0], [1, 0], [0, 1]]
	s = Simplex(vertices)
	simplex_dimension(s)
	space_dimension(s)
	element_type(s)
	assert s.vertices.tolist() == vertices


def test_vertex_accessor_is_one_based():
	s = Simplex([[0, 0], [1, 0], [0, 1]])
	assert s.vertex(1).tolist() == [0, 0]
	assert s.vertex(3).tolist() == [0, 1]
	assert [v.tolist() for v in s] == [[0, 0], [1, 0], [0, 1]]

	for bad in [0, 4, -1]:
		with pytest.raises(InvalidFacetError):
			s.vertex(bad)
	with pytest.raises(IndexError):
		s.vertex(4)


def test_equality_is_order_sensitive():
	a = Simplex([[0, 0], [1, 0], [1, 1]])
	assert a == Simplex([[0, 0], [1, 0], [1, 1]])
	assert a != Simplex([[1, 0], [0, 0], [1, 1]])
	assert a != Simplex([[0, 0, 0], [1, 0, 0], [1, 1, 0]])
	assert a != [[0, 0], [1, 0], [1, 1]]
	assert 'Simplex(' in repr(a)


def test_shared_vertices():
	a = Simplex([[0, 0], [1, 0], [1, 1]])
	assert shared_vertices(a, a) == 3
	assert shared_vertices(a, Simplex([[1, 1], [0, 0], [0, 1]])) == 2
	assert shared_vertices(a, Simplex([[5, 5], [6, 5], [6, 6]])) == 0
	assert shared_vertices(a, Simplex([[0, 0, 0], [1, 0, 0], [1, 1, 0]])) == 0
