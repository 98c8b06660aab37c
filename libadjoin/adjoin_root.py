#!/usr/bin/env python3
#
#   R[X]/(f) : the ring obtained from R by adjoining a root of f
#

import logging

from libadjoin.basic_types import CoefficientRing, RingHom
from libadjoin.errors import InvalidModulusError
from libadjoin.polynomial import Polynomial, PolynomialRing

logger = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = "root"

class AdjoinRootElement:
    """
    The class of a polynomial modulo the modulus of `parent`, represented by a single polynomial `rep`.
    Elements are values, arithmetic always returns new elements.
    """

    def __init__(self, parent, rep : Polynomial):
        self.parent = parent
        self.rep = rep

    @property
    def representative(self):
        return self.rep

    def __str__(self):
        return str(Polynomial(self.parent.display_ring, self.rep.terms))

    def __repr__(self):
        return f"AdjoinRootElement({repr(self.parent)}, {repr(self.rep)})"

    def __hash__(self):
        if self.parent.is_canonical():
            return hash(self.rep)
        # a class has many representatives, only the ring is common to all of them
        return hash(self.parent)

    def __eq__(self, other):
        if isinstance(other, AdjoinRootElement) and other.parent != self.parent:
            return False
        try:
            other = self.parent(other)
        except ValueError:
            return NotImplemented
        return self.parent.eq(self, other)

    def is_zero(self):
        return self.parent.is_zero(self)

    def __add__(self, other):
        return self.parent.add(self, self.parent(other))

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        return self.parent.neg(self)

    def __sub__(self, other):
        return self.parent.sub(self, self.parent(other))

    def __rsub__(self, other):
        return self.parent.sub(self.parent(other), self)

    def __mul__(self, other):
        return self.parent.mul(self, self.parent(other))

    def __rmul__(self, other):
        return self.__mul__(other)

    def __pow__(self, n : int):
        if n < 0:
            return self.parent.pow(self.parent.inv(self), -n)
        return self.parent.pow(self, n)

    def __invert__(self):
        return self.parent.inv(self)

    def __truediv__(self, other):
        return self.parent.divexact(self, self.parent(other))

    def __rtruediv__(self, other):
        return self.parent.divexact(self.parent(other), self)

class AdjoinRoot(CoefficientRing):
    """
    The quotient ring R[X]/(f) for a nonzero polynomial f over the coefficient ring R.

    When the leading coefficient of f is a unit of R (always the case for monic f, or for any f over a field) the
    ideal (f) is also generated by a monic polynomial and every class has a unique representative of degree less
    than deg(f), the remainder of division. Elements are kept in that canonical form and compare structurally.

    Otherwise representatives are stored as given and two of them are equal when f divides their difference.
    That test is exact over integral domains such as ZZ, but over rings with zero divisors equality is only
    reliable for a monic f. Hashing is constant in this mode.
    """

    def __init__(self, modulus : Polynomial, name : str = DEFAULT_ROOT_NAME):
        assert isinstance(modulus, Polynomial) , "The modulus must be a polynomial"
        if modulus.is_zero():
            raise InvalidModulusError("The zero polynomial does not define a quotient ring")

        self.modulus = modulus
        self.poly_ring = modulus.ring
        self.base_ring = modulus.ring.coeff_ring
        self.name = name
        self.display_ring = PolynomialRing(self.base_ring, name)

        lc = modulus.leading_coeff()
        if modulus.is_monic():
            self.reducer = modulus
        elif self.base_ring.is_unit(lc):
            # the monic associate generates the same ideal
            self.reducer = modulus.scalar_mul(self.base_ring.inv(lc))
        else:
            self.reducer = None
            logger.debug("Leading coefficient %s of %s is not a unit of %s, representatives will not be reduced",
                         lc, modulus, self.base_ring)

        logger.debug("Constructed %s", self)

    def __str__(self):
        return f"{self.base_ring} with {self.name} adjoined, {self.name} a root of {self.modulus}"

    def __repr__(self):
        return f"AdjoinRoot({repr(self.modulus)})"

    def __eq__(self, other):
        if not isinstance(other, AdjoinRoot):
            return False
        return self.poly_ring == other.poly_ring and self.modulus == other.modulus

    def __hash__(self):
        return hash(self.modulus)

    def degree(self):
        return self.modulus.degree()

    def is_canonical(self):
        return self.reducer is not None

    def reduce(self, p : Polynomial):
        """
        The canonical representative of the class of p, or p itself when there is no canonical form
        """
        if self.reducer is None:
            return p
        return p.divmod_monic(self.reducer)[1]

    ####################################################################################################################
    #   Constructors
    ####################################################################################################################

    def mk(self, p):
        """
        The class of the polynomial p
        """
        return AdjoinRootElement(self, self.reduce(self.poly_ring(p)))

    from_polynomial = mk

    def of(self, r):
        """
        The class of the constant polynomial r, for r in the base ring
        """
        return AdjoinRootElement(self, self.reduce(Polynomial(self.poly_ring, {0 : self.base_ring(r)})))

    embed = of

    def root(self):
        return self.mk(self.poly_ring.gen())

    def __call__(self, element):
        if isinstance(element, AdjoinRootElement) and (element.parent is self or element.parent == self):
            return element
        if isinstance(element, Polynomial):
            return self.mk(element)
        return self.of(element)

    def of_hom(self):
        """
        The structure map R -> R[X]/(f)
        """
        return RingHom(self.base_ring, self, self.of)

    def mk_hom(self):
        """
        The quotient map R[X] -> R[X]/(f)
        """
        return RingHom(self.poly_ring, self, self.mk)

    ####################################################################################################################
    #   Ring operations
    ####################################################################################################################

    def add(self, a, b):
        return AdjoinRootElement(self, self.reduce(a.rep + b.rep))

    def neg(self, a):
        return AdjoinRootElement(self, -a.rep)

    def sub(self, a, b):
        return AdjoinRootElement(self, self.reduce(a.rep - b.rep))

    def mul(self, a, b):
        return AdjoinRootElement(self, self.reduce(a.rep * b.rep))

    def eq(self, a, b):
        if self.is_canonical():
            return a.rep == b.rep
        return self.modulus.divides(a.rep - b.rep)

    def is_zero(self, a):
        if self.is_canonical():
            return a.rep.is_zero()
        return self.modulus.divides(a.rep)

    def rand_elem(self):
        return self.mk(Polynomial(self.poly_ring, [self.base_ring.rand_elem() for _ in range(self.degree())]))

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest
from libadjoin.basic_types import GF, QQ, ZZ, Rational

class TestAdjoinRoot(unittest.TestCase):

    def setUp(self):
        self.RZ = PolynomialRing(ZZ)
        self.RQ = PolynomialRing(QQ)

    def test_zero_modulus(self):
        with self.assertRaises(InvalidModulusError):
            AdjoinRoot(Polynomial.ZERO(self.RZ))

    def test_root_relation(self):
        X = self.RQ.gen()
        A = AdjoinRoot(X**2 + 1)
        i = A.root()
        self.assertEqual(i * i, -1)
        self.assertEqual(i * i, A.of(-1))
        self.assertEqual(i**4, 1)
        self.assertEqual(A.mk(X**3 + X), 0)
        self.assertEqual(str(i), "root")
        self.assertEqual(str(i * i + i), "root + -1")
        self.assertEqual(A.embed(Rational(1, 2)).representative, self.RQ(Rational(1, 2)))

    def test_ring_axioms(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**3 - 2*X + 7)
        for _ in range(20):
            p, q, r = A.rand_elem(), A.rand_elem(), A.rand_elem()
            self.assertEqual((p + q) + r, p + (q + r))
            self.assertEqual((p * q) * r, p * (q * r))
            self.assertEqual(p + q, q + p)
            self.assertEqual(p * q, q * p)
            self.assertEqual(p * (q + r), p * q + p * r)
            self.assertEqual(p + 0, p)
            self.assertEqual(p * 1, p)
            self.assertEqual(p - p, A.zero())
            self.assertLess((p * q).representative.degree(), 3)

    def test_reduction(self):
        X = self.RZ.gen()
        f = X**3 - 2*X + 7
        A = AdjoinRoot(f)
        for _ in range(20):
            p = self.RZ.rand_elem(9)
            x = A.from_polynomial(p)
            self.assertEqual(A.from_polynomial(x.representative), x)
            self.assertEqual(A.mk(p + f * self.RZ.rand_elem(2)), x)
            self.assertEqual(hash(A.mk(p + f)), hash(x))

    def test_evaluate_at_root(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 - 3*X + 1)
        for _ in range(10):
            p = self.RZ.rand_elem(6)
            self.assertEqual(p.evaluate(A.of_hom(), A.root()), A.mk(p))
            self.assertEqual(A.mk_hom()(p), A.mk(p))

    def test_unit_leading_coefficient(self):
        X = self.RZ.gen()
        A = AdjoinRoot(3 - X**2)
        self.assertTrue(A.is_canonical())
        self.assertEqual(A.root() ** 2, 3)

        B = AdjoinRoot(2*X**2 - 4 + 0 * X)
        self.assertFalse(B.is_canonical())

        C = AdjoinRoot(self.RQ.gen()**2 * 2 - 4)
        self.assertTrue(C.is_canonical())
        self.assertEqual(C.root() ** 2, 2)

    def test_non_monic_integer_modulus(self):
        # ZZ[X]/(2X - 1) is ZZ[1/2], representatives are not reduced
        X = self.RZ.gen()
        A = AdjoinRoot(2*X - 1)
        self.assertFalse(A.is_canonical())
        self.assertEqual(A.mk(2*X), A.one())
        self.assertEqual(A.mk(4*X**2), 1)
        self.assertNotEqual(A.root(), A.one())
        self.assertTrue(A.mk(2*X - 1).is_zero())
        self.assertEqual(hash(A.mk(2*X)), hash(A.one()))
        self.assertEqual(A.root() * 2, 1)

    def test_zero_ring(self):
        A = AdjoinRoot(self.RZ(1))
        self.assertEqual(A.degree(), 0)
        self.assertEqual(A.one(), A.zero())
        self.assertEqual(A.root(), 0)

    def test_coercion(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 + 1)
        self.assertEqual(A(5), A.of(5))
        self.assertEqual(A(X), A.root())
        r = A.root()
        self.assertIs(A(r), r)
        self.assertNotEqual(A.root(), AdjoinRoot(X**2 + 2).root())
        self.assertEqual(A, AdjoinRoot(X**2 + 1))
        with self.assertRaises(ValueError):
            A(Rational(1, 2))

        # values outside the ring compare unequal
        self.assertFalse(r == Rational(1, 2))
        self.assertFalse(GF(5)(2) == r)
        self.assertNotEqual(r, "root")
        self.assertEqual(X, r)
        self.assertEqual(X + 1, r + 1)
        K = AdjoinRoot(PolynomialRing(QQ).gen()**2 - 2)
        self.assertTrue(Rational(3, 1) == K.of(3))
        self.assertTrue(Rational(1, 2) != K.root())

    def test_prime_field(self):
        F = GF(2)
        X = PolynomialRing(F).gen()
        A = AdjoinRoot(X**2 + X + 1)
        w = A.root()
        self.assertEqual(w**3, 1)
        self.assertEqual(w**2 + w + 1, 0)
        self.assertEqual(w + w, 0)

    def test_tower(self):
        X = self.RQ.gen()
        K = AdjoinRoot(X**2 - 2, "s")
        Y = PolynomialRing(K, "Y").gen()
        L = AdjoinRoot(Y**2 - 3, "t")
        s, t = L.of(K.root()), L.root()
        self.assertEqual((s * t)**2, 6)
        self.assertEqual((s + t)**2, L.of(K.of(5)) + 2 * s * t)
        self.assertTrue(L.is_canonical())
