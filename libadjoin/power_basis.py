#!/usr/bin/env python3
#
#   The power basis 1, root, ..., root^{d-1} of R[X]/(f) for f monic of degree d
#

import logging

import numpy as np

from libadjoin.adjoin_root import AdjoinRoot
from libadjoin.errors import DegenerateModulusError, NotMonicError
from libadjoin.linalg import Matrix
from libadjoin.polynomial import DEFAULT_VAR_NAME, Polynomial, PolynomialRing

logger = logging.getLogger(__name__)

class PowerBasis:
    """
    R[X]/(f) as a free R-module of rank d = deg(f) with basis the powers of the root.

    Coordinates of an element are the coefficients of its canonical representative, so f must have a unit leading
    coefficient (in particular monic f, or any f over a field).
    """

    def __init__(self, ring : AdjoinRoot):
        if ring.degree() < 1:
            raise DegenerateModulusError(f"{ring.modulus} is constant, {ring} has no power basis")
        if not ring.is_canonical():
            raise NotMonicError(f"{ring.modulus} has no monic associate, the powers of the root are not a basis")

        self.ring = ring
        self.dim = ring.degree()
        self.gen = ring.root()
        self.basis = tuple(ring.mk(ring.poly_ring.monomial(i)) for i in range(self.dim))
        logger.debug("Power basis of %s with dimension %d", ring, self.dim)

    def __repr__(self):
        return f"PowerBasis({repr(self.ring)})"

    def coordinates_of(self, x):
        """
        [c_0, ..., c_{d-1}] with x == sum c_i root^i
        """
        return self.ring(x).rep.coeffs(self.dim)

    def from_coordinates(self, coords):
        coords = list(coords)
        if len(coords) != self.dim:
            raise ValueError(f"Expected {self.dim} coordinates, got {len(coords)}")
        return self.ring.mk(Polynomial(self.ring.poly_ring, coords))

    def left_mul_matrix(self, x):
        """
        Matrix of y -> x * y, column j holding the coordinates of x * root^j
        """
        x = self.ring(x)
        M = Matrix(self.dim, self.dim, ring=self.ring.base_ring)
        for j,b in enumerate(self.basis):
            for i,c in enumerate(self.coordinates_of(x * b)):
                M[i,j] = c
        return M

    def trace(self, x):
        return self.left_mul_matrix(x).trace()

    def norm(self, x):
        return self.left_mul_matrix(x).det()

    def charpoly(self, x, var_name : str = DEFAULT_VAR_NAME):
        """
        det(X * I - M) for M the matrix of multiplication by x. Requires an integral domain as base ring.
        """
        M = self.left_mul_matrix(x)
        R = PolynomialRing(self.ring.base_ring, var_name)
        X = R.gen()
        entries = [(X if i == j else R.zero()) - R(M[i,j]) for i in range(self.dim) for j in range(self.dim)]
        return Matrix(self.dim, self.dim, entries, R).det()

    def coordinate_array(self, xs):
        """
        numpy object array with one row of coordinates per element of xs
        """
        xs = list(xs)
        arr = np.empty((len(xs), self.dim), dtype=object)
        for i,x in enumerate(xs):
            arr[i,:] = self.coordinates_of(x)
        return arr

    def from_coordinate_array(self, arr):
        # numpy scalars are unwrapped so integer arrays are accepted too
        return [self.from_coordinates(c.item() if isinstance(c, np.generic) else c for c in row) for row in arr]

########################################################################################################################
#   Unit Tests
########################################################################################################################

import itertools
import random
import unittest
from libadjoin.basic_types import GF, QQ, ZZ
from libadjoin.linalg import np_mul_mod

class TestPowerBasis(unittest.TestCase):

    def setUp(self):
        self.RZ = PolynomialRing(ZZ)
        self.RQ = PolynomialRing(QQ)

    def test_gaussian_rationals(self):
        X = self.RQ.gen()
        A = AdjoinRoot(X**2 + 1)
        pb = PowerBasis(A)
        self.assertEqual(pb.dim, 2)
        self.assertEqual(pb.coordinates_of(A.root() * A.root()), [-1, 0])
        self.assertEqual(pb.from_coordinates([1, 0]), A.embed(1))
        self.assertEqual(pb.basis, (A.one(), A.root()))

    def test_round_trip_exhaustive(self):
        for p, f in ((3, [1, 0, 1]), (2, [1, 1, 0, 1]), (5, [2, 0, 0, 1])):
            F = GF(p)
            A = AdjoinRoot(Polynomial(PolynomialRing(F), f))
            pb = PowerBasis(A)
            seen = set()
            for coords in itertools.product(F.elements(), repeat=pb.dim):
                x = pb.from_coordinates(coords)
                self.assertEqual(pb.coordinates_of(x), list(coords))
                self.assertEqual(pb.from_coordinates(pb.coordinates_of(x)), x)
                seen.add(x)
            self.assertEqual(len(seen), p ** pb.dim)

    def test_round_trip_random(self):
        for d in range(1, 6):
            f = self.RQ.monomial(d) + Polynomial(self.RQ, [QQ.rand_elem() for _ in range(d)])
            A = AdjoinRoot(f)
            pb = PowerBasis(A)
            for _ in range(10):
                coords = [QQ.rand_elem() for _ in range(d)]
                self.assertEqual(pb.coordinates_of(pb.from_coordinates(coords)), coords)
                x = A.mk(self.RQ.rand_elem(random.randint(0, 2 * d)))
                self.assertEqual(pb.from_coordinates(pb.coordinates_of(x)), x)
            for i,b in enumerate(pb.basis):
                self.assertEqual(b, pb.gen ** i)

    def test_preconditions(self):
        X = self.RZ.gen()
        with self.assertRaises(NotMonicError):
            PowerBasis(AdjoinRoot(2*X - 1))
        with self.assertRaises(DegenerateModulusError):
            PowerBasis(AdjoinRoot(self.RZ(1)))
        # constant modulus without a monic associate is still degenerate
        with self.assertRaises(DegenerateModulusError):
            PowerBasis(AdjoinRoot(self.RZ(2)))
        pb = PowerBasis(AdjoinRoot(X**2 + 1))
        with self.assertRaises(ValueError):
            pb.from_coordinates([1, 2, 3])

    def test_left_mul_matrix(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**3 - 2*X + 7)
        pb = PowerBasis(A)
        self.assertEqual(pb.left_mul_matrix(A.root()), Matrix(3, 3, [
            0, 0, -7,
            1, 0,  2,
            0, 1,  0
        ]))
        for _ in range(10):
            x, y = A.rand_elem(), A.rand_elem()
            self.assertEqual(pb.left_mul_matrix(x * y), pb.left_mul_matrix(x) * pb.left_mul_matrix(y))
            self.assertEqual(pb.left_mul_matrix(x + y), pb.left_mul_matrix(x) + pb.left_mul_matrix(y))
            self.assertEqual(pb.left_mul_matrix(x) * pb.coordinates_of(y), pb.coordinates_of(x * y))

    def test_left_mul_matrix_numpy(self):
        F = GF(7)
        X = PolynomialRing(F).gen()
        A = AdjoinRoot(X**3 + 3*X + 2)
        pb = PowerBasis(A)
        for _ in range(10):
            x, y = A.rand_elem(), A.rand_elem()
            Mx, My = pb.left_mul_matrix(x).to_numpy(), pb.left_mul_matrix(y).to_numpy()
            self.assertEqual(np_mul_mod(Mx, My, 7).tolist(), pb.left_mul_matrix(x * y).to_numpy().tolist())

    def test_trace_norm(self):
        X = self.RQ.gen()
        K = AdjoinRoot(X**2 - 2)
        pb = PowerBasis(K)
        for _ in range(10):
            a, b = QQ.rand_elem(), QQ.rand_elem()
            x = a + b * K.root()
            self.assertEqual(pb.trace(x), 2 * a)
            self.assertEqual(pb.norm(x), a * a - 2 * b * b)

        Y = self.RZ.gen()
        G = AdjoinRoot(Y**2 + 1)
        self.assertEqual(PowerBasis(G).norm(3 + 4 * G.root()), 25)
        self.assertEqual(PowerBasis(G).trace(G.root()), 0)

    def test_charpoly(self):
        X = self.RZ.gen()
        for f in (X**2 + 1, X**3 - 2*X + 7, X**4 + X + 1):
            A = AdjoinRoot(f)
            pb = PowerBasis(A)
            self.assertEqual(pb.charpoly(A.root()), f)
            for _ in range(5):
                x = A.rand_elem()
                chi = pb.charpoly(x)
                self.assertTrue(chi.is_monic())
                self.assertEqual(chi.degree(), pb.dim)
                # Cayley-Hamilton
                self.assertTrue(chi.evaluate(A.of_hom(), x).is_zero())

        # unit leading coefficient, the characteristic polynomial is the monic associate
        B = AdjoinRoot(3 - X**2)
        self.assertEqual(PowerBasis(B).charpoly(B.root()), X**2 - 3)

    def test_coordinate_array(self):
        X = self.RQ.gen()
        A = AdjoinRoot(X**3 - 5)
        pb = PowerBasis(A)
        xs = [A.rand_elem() for _ in range(4)]
        arr = pb.coordinate_array(xs)
        self.assertEqual(arr.shape, (4, 3))
        self.assertEqual(arr[2,:].tolist(), pb.coordinates_of(xs[2]))
        self.assertEqual(pb.from_coordinate_array(arr), xs)
        self.assertEqual(pb.from_coordinate_array(np.array([[1, 2, 3]])), [1 + 2 * A.root() + 3 * A.root()**2])
        self.assertEqual(pb.coordinate_array([]).shape, (0, 3))
