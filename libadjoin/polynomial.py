#!/usr/bin/env python3
#
#   Univariate polynomials over a coefficient ring
#

import random
from typing import Dict, Sequence, Union

from libadjoin.basic_types import CoefficientRing, RingHom
from libadjoin.errors import DivisionByZeroError, NotMonicError

DEFAULT_VAR_NAME = "X"

########################################################################################################################
#   Polynomial Rings
########################################################################################################################

class PolynomialRing(CoefficientRing):
    """
    R[X] for R a coefficient ring. Polynomial rings are themselves coefficient rings, so they can be stacked or
    used as the target of a ring homomorphism.
    """

    def __init__(self, coeff_ring : CoefficientRing, var_name : str = DEFAULT_VAR_NAME):
        self.coeff_ring = coeff_ring
        self.var_name = var_name
        self.coeff_zero = self.coeff_ring.zero()
        self.coeff_one = self.coeff_ring.one()

    def __call__(self, element):
        if isinstance(element, Polynomial):
            if element.ring == self:
                return element
            elif element.ring == self.coeff_ring:
                return Polynomial(self, {0 : element})
            else:
                return Polynomial(self, {e : self.coeff_ring(c) for e,c in element.terms.items()})
        return Polynomial(self, {0 : self.coeff_ring(element)})

    def __eq__(self, other):
        if type(other) != PolynomialRing:
            return False
        return self.coeff_ring == other.coeff_ring and self.var_name == other.var_name

    def __hash__(self):
        return hash((self.var_name, self.coeff_ring))

    def __str__(self):
        return f"Univariate Polynomial Ring in {self.var_name} over {self.coeff_ring}"

    def __repr__(self):
        return f"PolynomialRing({repr(self.coeff_ring)}, {repr(self.var_name)})"

    def gen(self):
        return Polynomial(self, {1 : self.coeff_one})

    def variables(self):
        return (self.gen(),)

    def monomial(self, n : int, coeff=None):
        return Polynomial(self, {n : self.coeff_one if coeff is None else coeff})

    def is_zero(self, a):
        return a.is_zero()

    def divexact(self, a, b):
        return a.exact_quotient(b)

    def rand_elem(self, degree : int = 3):
        return Polynomial(self, [self.coeff_ring.rand_elem() for _ in range(degree + 1)])

########################################################################################################################
#   Polynomial
########################################################################################################################

class Polynomial:
    """
    A univariate polynomial, stored sparsely as {exponent : nonzero coefficient} with exponents in decreasing
    order. Polynomials are values, no operation modifies its operands.

    The zero polynomial has no terms and degree -1.
    """

    def __init__(self, ring : PolynomialRing, coeffs : Union[Dict[int, object], Sequence]):
        # A sequence is read densely, entry i being the coefficient of X^i
        if not isinstance(coeffs, dict):
            coeffs = dict(enumerate(coeffs))

        cr = ring.coeff_ring
        terms = {}
        for e,c in coeffs.items():
            assert e >= 0 , f"Exponents should be nonnegative, got {e}"
            # Promote to member of coefficient ring
            c = cr(c)
            # Strip terms with coefficient 0
            if not cr.is_zero(c):
                terms[e] = c

        self.ring = ring
        self.terms = {e : terms[e] for e in sorted(terms, reverse=True)}

    @staticmethod
    def ZERO(ring):
        return Polynomial(ring, {})

    def __hash__(self):
        return hash(tuple(self.terms.items()))

    def __getitem__(self, e : int):
        # return the coefficient of X^e, or 0 if not present
        return self.terms.get(e, self.ring.coeff_zero)

    def coeffs(self, n : int = 0):
        """
        Dense coefficient list [c_0, c_1, ...] padded with zeros to at least n entries
        """
        return [self[e] for e in range(max(n, self.degree() + 1))]

    def __str__(self):
        cr = self.ring.coeff_ring
        name = self.ring.var_name
        terms = []
        for e,c in self.terms.items():
            monomial = "" if e == 0 else (name if e == 1 else f"{name}^{e}")
            if e == 0:
                terms.append(f"{c}")
            elif cr.is_one(c):
                terms.append(monomial)
            elif cr.is_one(cr.neg(c)):
                terms.append(f"-{monomial}")
            else:
                coeff_str = f"{c}"
                if " " in coeff_str:
                    coeff_str = f"({coeff_str})"
                terms.append(f"{coeff_str}*{monomial}")

        if len(terms) == 0:
            return "0"

        return " + ".join(terms)

    def __repr__(self):
        return f"Polynomial({repr(self.ring)}, {repr(self.terms)})"

    def degree(self):
        return next(iter(self.terms), -1)

    def leading_coeff(self):
        if self.is_zero():
            return self.ring.coeff_zero
        return self.terms[self.degree()]

    def is_zero(self):
        return len(self.terms) == 0

    def is_constant(self):
        return self.degree() <= 0

    def is_monic(self):
        return not self.is_zero() and self.ring.coeff_ring.is_one(self.leading_coeff())

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            try:
                other = self.ring(other)
            except ValueError:
                return NotImplemented
        if self.terms.keys() != other.terms.keys():
            return False
        cr = self.ring.coeff_ring
        return all(cr.eq(c, other.terms[e]) for e,c in self.terms.items())

    ####################################################################################################################
    #   Arithmetic
    ####################################################################################################################

    def __add__(self, other):
        if not isinstance(other, Polynomial):
            other = self.ring(other)

        cr = self.ring.coeff_ring
        terms = dict(self.terms)
        for e,c in other.terms.items():
            terms[e] = cr.add(terms[e], c) if e in terms else c
        return Polynomial(self.ring, terms)

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        """
        Returns the additive inverse of this polynomial
        """
        cr = self.ring.coeff_ring
        return Polynomial(self.ring, {e : cr.neg(c) for e,c in self.terms.items()})

    def __sub__(self, other):
        if not isinstance(other, Polynomial):
            other = self.ring(other)
        return self + (-other)

    def __rsub__(self, other):
        return self.ring(other) - self

    def __mul__(self, other):
        if not isinstance(other, Polynomial):
            other = self.ring(other)

        cr = self.ring.coeff_ring
        terms = {}
        for e1,c1 in self.terms.items():
            for e2,c2 in other.terms.items():
                c = cr.mul(c1, c2)
                terms[e1 + e2] = cr.add(terms[e1 + e2], c) if e1 + e2 in terms else c
        return Polynomial(self.ring, terms)

    def __rmul__(self, other):
        # Polynomial rings are commutative
        return self * other

    def scalar_mul(self, c):
        cr = self.ring.coeff_ring
        c = cr(c)
        return Polynomial(self.ring, {e : cr.mul(c, ci) for e,ci in self.terms.items()})

    def shift(self, n : int):
        """
        Multiplication by X^n
        """
        return Polynomial(self.ring, {e + n : c for e,c in self.terms.items()})

    def __pow__(self, n : int):
        return self.ring.pow(self, n)

    ####################################################################################################################
    #   Evaluation
    ####################################################################################################################

    def evaluate(self, hom : RingHom, point):
        """
        Evaluates sum hom(c_i) * point^i in hom.target by Horner's rule, skipping over runs of zero coefficients
        """
        S = hom.target
        point = S(point)

        if self.is_zero():
            return S.zero()

        result = S.zero()
        prev = self.degree()
        for e,c in self.terms.items():
            result = S.add(S.mul(result, S.pow(point, prev - e)), hom(c))
            prev = e
        return S.mul(result, S.pow(point, prev))

    def __call__(self, x):
        return self.evaluate(RingHom.identity(self.ring.coeff_ring), x)

    def map_coeffs(self, hom : RingHom):
        """
        The image of this polynomial under hom applied coefficient-wise
        """
        if hom.source != self.ring.coeff_ring:
            raise ValueError(f"{hom} does not start at {self.ring.coeff_ring}")
        return Polynomial(PolynomialRing(hom.target, self.ring.var_name),
                          {e : hom(c) for e,c in self.terms.items()})

    ####################################################################################################################
    #   Division
    ####################################################################################################################

    def _divide(self, divisor, quot_coeff):
        # Schoolbook division. quot_coeff(c) must return q with q * lc(divisor) == c, so that every step cancels the
        # leading term of the running remainder
        d = divisor.degree()
        quot = {}
        rem = self
        while not rem.is_zero() and rem.degree() >= d:
            e = rem.degree() - d
            q = quot_coeff(rem.leading_coeff())
            quot[e] = q
            rem = rem - divisor.shift(e).scalar_mul(q)
        return Polynomial(self.ring, quot), rem

    def divmod_monic(self, divisor):
        """
        Returns (q, r) with self == q * divisor + r and deg(r) < deg(divisor). The divisor must be monic, this
        division is defined over any commutative ring.
        """
        divisor = self.ring(divisor)
        if not divisor.is_monic():
            raise NotMonicError(f"{divisor} is not monic")
        return self._divide(divisor, lambda c: c)

    def divmod(self, divisor):
        """
        Division with remainder by any divisor whose leading coefficient is a unit, in particular by any nonzero
        divisor when the coefficients lie in a field
        """
        divisor = self.ring(divisor)
        if divisor.is_zero():
            raise DivisionByZeroError("Polynomial division by zero")
        if divisor.is_monic():
            return self.divmod_monic(divisor)

        cr = self.ring.coeff_ring
        lc = divisor.leading_coeff()
        if not cr.is_unit(lc):
            raise NotMonicError(f"Leading coefficient {lc} of {divisor} is not a unit of {cr}")
        lc_inv = cr.inv(lc)
        return self._divide(divisor, lambda c: cr.mul(c, lc_inv))

    def __divmod__(self, other):
        return self.divmod(other)

    def __floordiv__(self, other):
        return self.divmod(other)[0]

    def __mod__(self, other):
        return self.divmod(other)[1]

    def exact_quotient(self, divisor):
        """
        Returns q with q * divisor == self, raising ArithmeticError if there is none.

        Only the leading coefficients are divided, using the exact division of the coefficient ring. Over an
        integral domain this decides divisibility even when lc(divisor) is not a unit (e.g. over ZZ).
        """
        divisor = self.ring(divisor)
        if divisor.is_zero():
            raise DivisionByZeroError("Polynomial division by zero")
        cr = self.ring.coeff_ring
        lc = divisor.leading_coeff()
        quot, rem = self._divide(divisor, lambda c: cr.divexact(c, lc))
        if not rem.is_zero():
            raise ArithmeticError(f"{divisor} does not divide {self}")
        return quot

    def divides(self, other):
        other = self.ring(other)
        if self.is_zero():
            return other.is_zero()
        try:
            other.exact_quotient(self)
        except ArithmeticError:
            return False
        return True

    def xgcd(self, other):
        """
        Extended Euclidean algorithm over a field. Returns (g, s, t) with s * self + t * other == g, g the monic
        gcd (or 0 if both inputs are 0).
        """
        cr = self.ring.coeff_ring
        if not cr.is_field():
            raise ArithmeticError(f"xgcd requires coefficients in a field, got {cr}")
        other = self.ring(other)

        zero, one = Polynomial.ZERO(self.ring), self.ring.one()
        old_r, r = self, other
        old_s, s = one, zero
        old_t, t = zero, one
        while not r.is_zero():
            q, rem = old_r.divmod(r)
            old_r, r = r, rem
            old_s, s = s, old_s - q * s
            old_t, t = t, old_t - q * t

        if old_r.is_zero():
            return old_r, old_s, old_t

        u = cr.inv(old_r.leading_coeff())
        return old_r.scalar_mul(u), old_s.scalar_mul(u), old_t.scalar_mul(u)

    def gcd(self, other):
        return self.xgcd(other)[0]

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest
from libadjoin.basic_types import GF, QQ, ZZ, Rational

class TestPolynomial(unittest.TestCase):

    def setUp(self):
        self.RZ = PolynomialRing(ZZ)
        self.RQ = PolynomialRing(QQ)

    def test_construction(self):
        R = self.RZ
        X = R.gen()
        self.assertEqual(Polynomial(R, [1, 2, 0, 0]), Polynomial(R, [1, 2]))
        self.assertEqual(Polynomial(R, {5 : 0, 1 : 2, 0 : 1}), 2 * X + 1)
        self.assertEqual(Polynomial(R, [0, 0]).degree(), -1)
        self.assertTrue(Polynomial.ZERO(R).is_zero())
        self.assertEqual((X**3 - 2*X).degree(), 3)
        self.assertEqual(list((X**3 - 2*X).terms), [3, 1])
        self.assertEqual((X**3 - 2*X).coeffs(), [0, -2, 0, 1])
        self.assertEqual(str(X**2 - X + 3), "X^2 + -X + 3")

    def test_predicates(self):
        X = self.RZ.gen()
        self.assertTrue((X**2 + 1).is_monic())
        self.assertFalse((2*X + 1).is_monic())
        self.assertFalse(Polynomial.ZERO(self.RZ).is_monic())
        self.assertEqual((2*X + 1).leading_coeff(), 2)
        self.assertTrue(self.RZ(5).is_constant())

    def test_equality(self):
        X = self.RZ.gen()
        self.assertTrue(self.RZ(3) == Rational(3, 1))
        self.assertFalse(X == Rational(1, 2))
        self.assertFalse(self.RZ(1) == Rational(1, 2))
        self.assertNotEqual(X, None)
        self.assertEqual(self.RQ.gen(), X)

    def test_ring_axioms(self):
        R = self.RQ
        for _ in range(20):
            p, q, r = R.rand_elem(3), R.rand_elem(2), R.rand_elem(4)
            self.assertEqual((p + q) + r, p + (q + r))
            self.assertEqual((p * q) * r, p * (q * r))
            self.assertEqual(p * q, q * p)
            self.assertEqual(p * (q + r), p * q + p * r)
            self.assertEqual(p - p, 0)
            self.assertEqual(p * 1, p)

    def test_evaluate(self):
        R = self.RZ
        X = R.gen()
        p = 3 * X**7 - X**2 + 5
        for x in range(-5, 6):
            self.assertEqual(p(x), 3 * x**7 - x**2 + 5)

        # coefficients mapped into GF(7) before evaluation
        F = GF(7)
        h = RingHom.coercion(ZZ, F)
        self.assertEqual(p.evaluate(h, F(3)), F(3 * 3**7 - 9 + 5))
        self.assertEqual(Polynomial.ZERO(R).evaluate(h, F(3)), F(0))

    def test_map_coeffs(self):
        X = self.RZ.gen()
        F = GF(3)
        p = (4*X**2 + 3*X + 2).map_coeffs(RingHom.coercion(ZZ, F))
        self.assertEqual(p.ring.coeff_ring, F)
        self.assertEqual(p.coeffs(), [F(2), F(0), F(1)])
        with self.assertRaises(ValueError):
            p.map_coeffs(RingHom.coercion(ZZ, F))

    def test_divmod_monic(self):
        R = self.RZ
        X = R.gen()
        f = X**3 - 2*X + 7
        for _ in range(50):
            p = R.rand_elem(random.randint(0, 8))
            q, r = p.divmod_monic(f)
            self.assertEqual(p, q * f + r)
            self.assertLess(r.degree(), f.degree())

        q, r = (X**2 + 1).divmod_monic(X**5 + 1)
        self.assertTrue(q.is_zero())
        self.assertEqual(r, X**2 + 1)

    def test_not_monic(self):
        X = self.RZ.gen()
        with self.assertRaises(NotMonicError):
            (X**3 + 1).divmod_monic(2*X + 1)
        with self.assertRaises(NotMonicError):
            (X**3 + 1).divmod(2*X + 1)
        with self.assertRaises(NotMonicError):
            (X**3 + 1).divmod_monic(Polynomial.ZERO(self.RZ))
        with self.assertRaises(DivisionByZeroError):
            (X**3 + 1).divmod(0)

    def test_divmod_field(self):
        R = self.RQ
        X = R.gen()
        f = 3*X**2 + Rational(1, 2)
        for _ in range(20):
            p = R.rand_elem(5)
            q, r = divmod(p, f)
            self.assertEqual(p, q * f + r)
            self.assertLess(r.degree(), 2)
        self.assertEqual((6*X**3 + X) // f, 2*X)

        # -X + 1 over ZZ has a unit leading coefficient
        Y = self.RZ.gen()
        q, r = (Y**2).divmod(1 - Y)
        self.assertEqual(q * (1 - Y) + r, Y**2)
        self.assertTrue(r.is_constant())

    def test_divides(self):
        X = self.RZ.gen()
        self.assertTrue((2*X + 2).divides(4*X**2 - 4))
        self.assertFalse((2*X + 1).divides(X**2))
        self.assertFalse((2*X).divides(X**2))
        self.assertTrue((3*X**2 + 1).divides((3*X**2 + 1) * (5*X - 7)))
        self.assertTrue(Polynomial.ZERO(self.RZ).divides(0))
        self.assertFalse(Polynomial.ZERO(self.RZ).divides(X))
        self.assertEqual((4*X**2 - 4).exact_quotient(2*X + 2), 2*X - 2)
        with self.assertRaises(ArithmeticError):
            (X**2).exact_quotient(2*X + 1)

    def test_xgcd(self):
        R = self.RQ
        X = R.gen()
        a = (X - 1) * (X + 2) * (X**2 + 1)
        b = (X - 1) * (X - 3)
        g, s, t = a.xgcd(b)
        self.assertEqual(g, X - 1)
        self.assertEqual(s * a + t * b, g)

        g, s, t = (X**2 - 2).xgcd(X)
        self.assertEqual(g, 1)
        self.assertEqual(s * (X**2 - 2) + t * X, 1)

        with self.assertRaises(ArithmeticError):
            self.RZ.gen().xgcd(self.RZ(2))

    def test_over_prime_field(self):
        F = GF(5)
        R = PolynomialRing(F)
        X = R.gen()
        self.assertEqual((X + 1)**5, X**5 + 1)
        q, r = divmod(X**4 + 3, 2*X + 1)
        self.assertEqual(q * (2*X + 1) + r, X**4 + 3)
