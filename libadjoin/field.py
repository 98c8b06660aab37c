#!/usr/bin/env python3
#
#   K[X]/(f) as a field, for K a field and f irreducible over K
#

import logging

from libadjoin.adjoin_root import DEFAULT_ROOT_NAME, AdjoinRoot
from libadjoin.errors import DivisionByZeroError, InvalidModulusError
from libadjoin.polynomial import Polynomial

logger = logging.getLogger(__name__)

class AdjoinRootField(AdjoinRoot):
    """
    K[X]/(f) for K a field and f irreducible over K.

    Irreducibility is not verified, it is an obligation of the caller. Should inversion come across a nontrivial
    common factor of f and a representative, f is reported as reducible through InvalidModulusError.
    """

    def __init__(self, modulus : Polynomial, name : str = DEFAULT_ROOT_NAME):
        super().__init__(modulus, name)
        if not self.base_ring.is_field():
            raise InvalidModulusError(f"{self.base_ring} is not a field")
        if self.degree() < 1:
            raise InvalidModulusError(f"{modulus} is a unit, not an irreducible polynomial")

    def __repr__(self):
        return f"AdjoinRootField({repr(self.modulus)})"

    def is_field(self):
        return True

    def inv(self, a):
        if self.is_zero(a):
            raise DivisionByZeroError(f"0 has no inverse in {self}")

        # s * a + t * f == g with g monic, so s is the inverse of a whenever g == 1
        g, s, _ = a.rep.xgcd(self.modulus)
        if g.degree() != 0:
            logger.debug("gcd(%s, %s) = %s", a.rep, self.modulus, g)
            raise InvalidModulusError(f"{self.modulus} is reducible, it shares the factor {g} with {a.rep}")
        return self.mk(s)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import itertools
import unittest
from libadjoin.basic_types import GF, QQ, ZZ, Rational
from libadjoin.lift import lift_hom
from libadjoin.polynomial import PolynomialRing

class TestAdjoinRootField(unittest.TestCase):

    def setUp(self):
        self.RQ = PolynomialRing(QQ)

    def test_sqrt2(self):
        X = self.RQ.gen()
        K = AdjoinRootField(X**2 - 2)
        r = K.root()
        self.assertEqual(K.inv(r), K.embed(Rational(1, 2)) * r)
        self.assertEqual(r * K.inv(r), K.embed(1))
        self.assertEqual(~r, r / 2)
        self.assertEqual(r ** -2, Rational(1, 2))
        self.assertTrue(K.is_field())

    def test_inverses(self):
        X = self.RQ.gen()
        K = AdjoinRootField(X**3 - 2)
        for _ in range(20):
            x, y = K.rand_elem(), K.rand_elem()
            if not x.is_zero():
                self.assertEqual(x * ~x, 1)
                self.assertEqual(y / x * x, y)
                self.assertEqual(1 / (1 / x), x)

    def test_division_by_zero(self):
        K = AdjoinRootField(self.RQ.gen()**2 + 1)
        with self.assertRaises(DivisionByZeroError):
            K.inv(K.zero())
        with self.assertRaises(ZeroDivisionError):
            K.root() / 0
        with self.assertRaises(DivisionByZeroError):
            K.mk(self.RQ.gen()**2 + 1) ** -1

    def test_finite_fields(self):
        for p, f in ((2, [1, 1, 1]), (3, [1, 0, 1]), (5, [1, 1, 0, 1]), (7, [3, 1, 1])):
            F = GF(p)
            K = AdjoinRootField(Polynomial(PolynomialRing(F), f))
            d = K.degree()
            nonzero = 0
            for coeffs in itertools.product(F.elements(), repeat=d):
                x = K.mk(Polynomial(K.poly_ring, coeffs))
                if x.is_zero():
                    continue
                nonzero += 1
                self.assertEqual(x * K.inv(x), K.one())
                # Lagrange: the multiplicative group has order p^d - 1
                self.assertEqual(x ** (p ** d - 1), 1)
            self.assertEqual(nonzero, p ** d - 1)

    def test_preconditions(self):
        Y = PolynomialRing(ZZ).gen()
        with self.assertRaises(InvalidModulusError):
            AdjoinRootField(Y**2 + 1)
        with self.assertRaises(InvalidModulusError):
            AdjoinRootField(self.RQ(3))
        with self.assertRaises(InvalidModulusError):
            AdjoinRootField(Polynomial.ZERO(self.RQ))

    def test_reducible_modulus(self):
        X = self.RQ.gen()
        K = AdjoinRootField(X**2 - 1)
        self.assertEqual(~K.root(), K.root())
        with self.assertRaises(InvalidModulusError):
            ~(K.root() - 1)

    def test_tower(self):
        X = self.RQ.gen()
        K = AdjoinRootField(X**2 - 2, "s")
        Y = PolynomialRing(K, "Y").gen()
        L = AdjoinRootField(Y**2 - 3, "t")
        s, t = L.of(K.root()), L.root()
        # (t + s)(t - s) = 3 - 2
        self.assertEqual(~(s + t), t - s)
        for _ in range(5):
            x = L.rand_elem()
            if not x.is_zero():
                self.assertEqual(x * ~x, 1)

    def test_lift_preserves_inverses(self):
        X = self.RQ.gen()
        K = AdjoinRootField(X**2 - 2)
        sigma = lift_hom(K, K, -K.root())
        for _ in range(10):
            x = K.rand_elem()
            if not x.is_zero():
                self.assertEqual(sigma(~x), ~sigma(x))
