#!/usr/bin/env python3

import numpy as np

from libadjoin.basic_types import GF, ZZ, CoefficientRing

class Matrix:
    """
    Dense row-major matrix with entries in a coefficient ring
    """

    def __init__(self, rows : int, cols : int, entries=None, ring : CoefficientRing = ZZ):
        self.rows = rows
        self.cols = cols
        self.ring = ring
        if entries is None:
            entries = [ring.zero() for _ in range(rows * cols)]
        assert len(entries) == rows * cols , "Entry count does not match the shape"
        self.entries = [ring(e) for e in entries]

    @staticmethod
    def zeros(n, m=None, ring=ZZ):
        """
        n x m matrix of zeros
        """
        return Matrix(n, m or n, None, ring)

    @staticmethod
    def ident(n, ring=ZZ):
        """
        n x n identity matrix
        """
        return Matrix(n, n, [ring.one() if i == j else ring.zero() for i in range(n) for j in range(n)], ring)

    def copy(self):
        return Matrix(self.rows, self.cols, self.entries.copy(), self.ring)

    def is_zero(self):
        return all(self.ring.is_zero(e) for e in self.entries)

    def __str__(self):
        return str([str(e) for e in self.entries])

    def __repr__(self):
        return f"Matrix({self.rows}, {self.cols}, {repr(self.entries)}, {repr(self.ring)})"

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return False
        if self.rows == other.rows and self.cols == other.cols:
            return all(self.ring.eq(a, b) for a,b in zip(self.entries, other.entries))
        return False

    def __setitem__(self, i, v):
        r,c = i
        if r >= self.rows: raise IndexError("Row too large")
        if c >= self.cols: raise IndexError("Column too large")
        self.entries[r * self.cols + c] = v

    def __getitem__(self, i):
        r,c = i
        if r >= self.rows: raise IndexError("Row too large")
        if c >= self.cols: raise IndexError("Column too large")
        return self.entries[r * self.cols + c]

    def col(self, i):
        return [self[j,i] for j in range(self.rows)]

    def row(self, i):
        return [self[i,j] for j in range(self.cols)]

    def __add__(self, other):
        assert self.rows == other.rows and self.cols == other.cols
        R = self.ring
        return Matrix(self.rows, self.cols, [R.add(a, b) for a,b in zip(self.entries, other.entries)], R)

    def __neg__(self):
        return Matrix(self.rows, self.cols, [self.ring.neg(e) for e in self.entries], self.ring)

    def __sub__(self, other):
        return self + (-other)

    def __mul__(self, other):
        R = self.ring
        if isinstance(other, (list, tuple)):
            # Multiply vector
            assert self.cols == len(other)
            return [self._dot(self.row(i), other) for i in range(self.rows)]
        elif isinstance(other, Matrix):
            # Multiply matrix
            assert self.cols == other.rows
            if isinstance(R, GF) and self.cols * (R.p - 1) ** 2 < 2**64:
                prod = np_mul_mod(self.to_numpy(), other.to_numpy(), R.p)
                return Matrix(self.rows, other.cols, [R(int(a)) for a in prod.flat], R)

            entries = [R.zero()] * self.rows * other.cols
            for i in range(self.rows):
                for j in range(other.cols):
                    entries[i * other.cols + j] = self._dot(self.row(i), other.col(j))

            return Matrix(self.rows, other.cols, entries, R)
        else:
            # Assumed scalar multiplier
            return Matrix(self.rows, self.cols, [R.mul(other, e) for e in self.entries], R)

    def _dot(self, a, b):
        R = self.ring
        acc = R.zero()
        for ai,bi in zip(a, b):
            acc = R.add(acc, R.mul(ai, bi))
        return acc

    def row_swap(self, i, j):
        # swaps rows i and j
        for c in range(self.cols):
            self[i,c], self[j,c] = self[j,c], self[i,c]

    def trace(self):
        assert self.rows == self.cols
        R = self.ring
        acc = R.zero()
        for i in range(self.rows):
            acc = R.add(acc, self[i,i])
        return acc

    def det(self):
        """
        Fraction-free (Bareiss) elimination. Every intermediate value is a minor of the input, so only exact
        divisions are performed and the entries may lie in any integral domain, e.g. ZZ or a polynomial ring.
        """
        assert self.rows == self.cols
        R = self.ring
        n = self.rows
        if n == 0:
            return R.one()

        A = self.copy()
        negate = False
        prev = R.one()
        for k in range(n - 1):
            if R.is_zero(A[k,k]):
                # find a nonzero pivot below
                for i in range(k + 1, n):
                    if not R.is_zero(A[i,k]):
                        A.row_swap(i, k)
                        negate = not negate
                        break
                else:
                    return R.zero() # Singular input

            for i in range(k + 1, n):
                for j in range(k + 1, n):
                    A[i,j] = R.divexact(R.sub(R.mul(A[i,j], A[k,k]), R.mul(A[i,k], A[k,j])), prev)
            prev = A[k,k]

        det = A[n - 1,n - 1]
        return R.neg(det) if negate else det

    def to_numpy(self):
        """
        Residues as uint64 for GF(p) entries, otherwise an object array of the entries themselves
        """
        if isinstance(self.ring, GF):
            return np.array([a.x for a in self.entries], dtype=np.uint64).reshape(self.rows, self.cols)
        arr = np.empty((self.rows, self.cols), dtype=object)
        for i in range(self.rows):
            for j in range(self.cols):
                arr[i,j] = self[i,j]
        return arr

def np_mul_mod(mtx1, mtx2, p):
    # every dot product of residues must fit in uint64
    return np.matmul(mtx1, mtx2) % p

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest
from libadjoin.basic_types import QQ, Mod, Rational
from libadjoin.polynomial import PolynomialRing

class TestMatrix(unittest.TestCase):
    def test_init(self):
        M = Matrix(2, 2, [
            1, 2,
            3, 4
        ])
        self.assertEqual(M[0,0], 1)
        self.assertEqual(M[0,1], 2)
        self.assertEqual(M[1,0], 3)
        self.assertEqual(M[1,1], 4)
        self.assertEqual(M.col(1), [2, 4])
        with self.assertRaises(IndexError):
            M[2,0]

    def test_mul(self):
        M = Matrix(2, 3, [
            1, 2, 3,
            4, 5, 6
        ])
        N = Matrix(3, 2, [
            1, 0,
            0, 1,
            1, 1
        ])
        self.assertEqual(M * N, Matrix(2, 2, [4, 5, 10, 11]))
        self.assertEqual(M * [1, 2, 3], [14, 32])
        self.assertEqual(Matrix.ident(3) * Matrix.ident(3), Matrix.ident(3))

    def test_mul_prime_field(self):
        # small primes go through numpy, 2^61 - 1 is too large for uint64 dot products
        for p in (7, 2**61 - 1):
            F = GF(p)
            M = Matrix(2, 3, [1, 2, 3, 4, 5, 6], F)
            N = Matrix(3, 2, [6, 5, 4, 3, 2, 1], F)
            MN = M * N
            self.assertEqual(MN, Matrix(2, 2, [20, 14, 56, 41], F))
            self.assertIsInstance(MN[1,1], Mod)
            self.assertEqual(MN[1,1].p, p)
        F = GF(5)
        M = Matrix(2, 2, [4, 4, 4, 4], F)
        self.assertEqual((M * M).to_numpy().tolist(), [[2, 2], [2, 2]])

    def test_det(self):
        M = Matrix(3, 3, [
            0, 1, 2,
            3, 4, 5,
            6, 7, 8
        ])
        self.assertEqual(M.det(), 0)

        M2 = Matrix(3,3, [
             2, -1, -2,
            -4,  6,  3,
            -4, -2,  8
        ])
        self.assertEqual(M2.det(), 24)
        self.assertEqual(M2.trace(), 16)

        # leading zero pivot forces a row swap
        M3 = Matrix(3, 3, [
            0, 2, 1,
            1, 0, 0,
            0, 0, 3
        ])
        self.assertEqual(M3.det(), -6)
        self.assertEqual(Matrix.zeros(0).det(), 1)

    def test_det_rational(self):
        M = Matrix(2, 2, [Rational(1, 2), Rational(1, 3), Rational(1, 4), Rational(1, 5)], QQ)
        self.assertEqual(M.det(), Rational(1, 10) - Rational(1, 12))

    def test_det_polynomial(self):
        R = PolynomialRing(ZZ)
        X = R.gen()
        # X*I - [[0, 1], [2, 0]]
        M = Matrix(2, 2, [X, -1, -2, X], R)
        self.assertEqual(M.det(), X**2 - 2)

    def test_to_numpy(self):
        F = GF(7)
        M = Matrix(2, 2, [1, 2, 3, 4], F)
        arr = M.to_numpy()
        self.assertEqual(arr.dtype, np.uint64)
        self.assertEqual(np_mul_mod(arr, arr, 7).tolist(), [[0, 3], [1, 1]])
        self.assertEqual((M * M).to_numpy().tolist(), [[0, 3], [1, 1]])
        self.assertEqual(Matrix(1, 1, [5]).to_numpy()[0,0], 5)
