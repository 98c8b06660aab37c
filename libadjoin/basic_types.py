#!/usr/bin/env python3
#
#   libadjoin : LIBrary for ADJOINing roots of polynomials to commutative rings
#
#   Coefficient rings and the maps between them
#

import random
from typing import Union

from libadjoin.errors import DivisionByZeroError

########################################################################################################################
#   Integer Arithmetic
########################################################################################################################

def gcd(a, b):
    while b != 0:
        a %= b
        a,b = b,a
    return abs(a)

def xgcd(a, b):
    prevx, x = 1, 0
    prevy, y = 0, 1
    while b != 0:
        q, r = divmod(a, b)
        x, prevx = prevx - q * x, x
        y, prevy = prevy - q * y, y
        a, b = b, r
    return a, prevx, prevy

# Various useful primes
LARGEST_u16_PRIME = 65521
LARGEST_s16_PRIME = 32749

########################################################################################################################
#   Modular Arithmetic
########################################################################################################################

class Mod:
    """
    Arithmetic in GF(p)
    """

    def __init__(self, x : int, p : int):
        self.x = x % p
        self.p = p

    def __str__(self):
        return str(self.x)

    def __repr__(self):
        return f"Mod({self.x}, {self.p})"

    def __hash__(self):
        return hash((self.x, self.p))

    def cvt_other(self, other):
        if isinstance(other, int):
            other = Mod(other, self.p)
        elif isinstance(other, Rational):
            other = other.to_mod(self.p)
        return other if isinstance(other, Mod) else None

    def __add__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        assert self.p == other.p
        r = self.x + other.x
        if r >= self.p:
            r -= self.p
        return Mod(r, self.p)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        assert self.p == other.p
        r = self.x - other.x
        if r < 0:
            r += self.p
        return Mod(r, self.p)

    def __rsub__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        assert self.p == other.p
        return Mod(self.x * other.x, self.p)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __pow__(self, other):
        assert isinstance(other, int)
        if other < 0:
            return ~self ** -other
        return Mod(pow(self.x, other, self.p), self.p)

    def __invert__(self):
        """
        Multiplicative inverse
        """
        if self.x == 0:
            raise DivisionByZeroError(f"0 has no inverse modulo {self.p}")

        g,x,_ = xgcd(self.x, self.p)
        if g != 1:
            # only possible when p is not prime
            raise ArithmeticError(f"{self.x} is not invertible modulo {self.p}")
        return Mod(x, self.p)

    def __neg__(self):
        """
        Additive inverse
        """
        return Mod(self.p - self.x, self.p)

    def __truediv__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        assert self.p == other.p
        return self * ~other

    def __rtruediv__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return other / self

    def __eq__(self, other):
        if isinstance(other, Mod):
            # Same field
            assert self.p == other.p
            return self.x == other.x
        elif isinstance(other, int):
            # Test equality mod p
            return self.x == other % self.p
        elif isinstance(other, Rational):
            return self.x == other.to_mod(self.p).x
        return NotImplemented

########################################################################################################################
#   Rational Numbers
########################################################################################################################

class Rational:
    def __init__(self, num : int, dnm : int = 1):
        self.num = num
        self.dnm = dnm
        self.canonicalise()

    def tup(self):
        return self.num, self.dnm

    def __str__(self):
        if self.dnm == 1:
            return f"{self.num}"
        return f"{self.num}/{self.dnm}"

    def __repr__(self):
        return f"Rational({self.num}, {self.dnm})"

    def __hash__(self):
        return hash((self.num, self.dnm))

    def canonicalise(self):
        if self.dnm == 0:
            raise DivisionByZeroError(f"{self.num}/0 is not a rational number")
        # Move sign out of the denominator
        if self.dnm < 0:
            self.dnm = -self.dnm
            self.num = -self.num
        # Remove common factors, this also sends 0/n to 0/1
        g = gcd(self.num, self.dnm)
        self.num //= g
        self.dnm //= g

    def cvt_other(self, other):
        if isinstance(other, int):
            other = Rational(other, 1)
        return other if isinstance(other, Rational) else None

    def __add__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.dnm + self.dnm * other.num, self.dnm * other.dnm)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.dnm - self.dnm * other.num, self.dnm * other.dnm)

    def __rsub__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.num, self.dnm * other.dnm)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.dnm, self.dnm * other.num)

    def __rtruediv__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return other / self

    def __pow__(self, other):
        assert isinstance(other, int)
        if other < 0:
            return ~self ** -other
        return Rational(self.num ** other, self.dnm ** other)

    def __invert__(self):
        return Rational(self.dnm, self.num)

    def __neg__(self):
        return Rational(-self.num, self.dnm)

    def __abs__(self):
        return Rational(abs(self.num), self.dnm)

    def cmp(self, other, op):
        other = self.cvt_other(other)
        assert isinstance(other, Rational) , f"Comparing {type(self)} and {type(other)}"
        return op(self.num * other.dnm, other.num * self.dnm)

    def __eq__(self, other):
        if isinstance(other, (int, Rational)):
            other = self.cvt_other(other)
            return self.num == other.num and self.dnm == other.dnm
        return NotImplemented

    def __lt__(self, other):
        return self.cmp(other, lambda x,y : x < y)

    def __gt__(self, other):
        return self.cmp(other, lambda x,y : x > y)

    def to_mod(self, p):
        return Mod(self.num, p) * ~Mod(self.dnm, p)

########################################################################################################################
#   Coefficient Rings
########################################################################################################################

class CoefficientRing:
    """
    Exact arithmetic in a commutative ring with identity.

    Algorithms in this library never combine ring elements directly, every sum, product and comparison goes
    through the ring object so that integers, rationals, prime fields, polynomial rings and quotient rings can
    all serve as coefficients. The defaults below defer to the element operators and should be overridden
    where those are unavailable or differ.
    """

    def __call__(self, arg):
        raise NotImplementedError()

    def zero(self):
        return self(0)

    def one(self):
        return self(1)

    def add(self, a, b):
        return a + b

    def neg(self, a):
        return -a

    def sub(self, a, b):
        return self.add(a, self.neg(b))

    def mul(self, a, b):
        return a * b

    def pow(self, a, n : int):
        assert n >= 0 , "Negative powers require inv()"
        result = self.one()
        while n > 0:
            if n & 1:
                result = self.mul(result, a)
            a = self.mul(a, a)
            n >>= 1
        return result

    def eq(self, a, b):
        return a == b

    def is_zero(self, a):
        return self.eq(a, self.zero())

    def is_one(self, a):
        return self.eq(a, self.one())

    def is_field(self):
        return False

    def is_unit(self, a):
        if self.is_field():
            return not self.is_zero(a)
        # Outside of fields only the trivial units are recognised
        return self.is_one(a) or self.is_one(self.neg(a))

    def inv(self, a):
        if self.is_zero(a):
            raise DivisionByZeroError(f"0 has no inverse in {self}")
        if self.is_one(a) or self.is_one(self.neg(a)):
            return a
        raise ArithmeticError(f"{a} is not a unit of {self}")

    def divexact(self, a, b):
        """
        Returns q with q * b == a, raising ArithmeticError if there is none
        """
        return self.mul(a, self.inv(b))

    def rand_elem(self):
        raise NotImplementedError()

class IntegerRing(CoefficientRing):
    def __call__(self, arg : Union[Rational, int]):
        if isinstance(arg, int):
            return arg
        elif isinstance(arg, Rational) and arg.dnm == 1:
            return arg.num
        else:
            raise ValueError(f"{arg} cannot be a member of the integers")

    def __str__(self):
        return "The Integers"

    def __repr__(self):
        return "ZZ"

    def divexact(self, a, b):
        if b == 0:
            raise DivisionByZeroError(f"{a}/0 in {self}")
        q, r = divmod(a, b)
        if r != 0:
            raise ArithmeticError(f"{b} does not divide {a} in {self}")
        return q

    def rand_elem(self, bound : int = 100):
        return random.randint(-bound, bound)

ZZ = IntegerRing()

class RationalField(CoefficientRing):
    def __call__(self, arg : Union[Rational, int]):
        if isinstance(arg, Rational):
            return arg
        elif isinstance(arg, int):
            return Rational(arg, 1)
        else:
            raise ValueError(f"{arg} cannot be a member of a rational field")

    def __str__(self):
        return "The Rational Numbers"

    def __repr__(self):
        return "QQ"

    def is_field(self):
        return True

    def inv(self, a):
        if a == 0:
            raise DivisionByZeroError(f"0 has no inverse in {self}")
        return ~a

    def divexact(self, a, b):
        return a * self.inv(b)

    def rand_elem(self):
        # Bounds are arbitrary for testing purposes
        return Rational(random.randint(-100, 100), random.randint(1, 100))

QQ = RationalField()

class GF(CoefficientRing):
    def __init__(self, p : int):
        # primality is not verified
        assert p > 1
        self.p = p

    def __repr__(self):
        return f"GF({self.p})"

    def __str__(self):
        return repr(self)

    def __eq__(self, other):
        if isinstance(other, GF):
            return self.p == other.p
        return False

    def __hash__(self):
        return hash(("GF", self.p))

    def __call__(self, arg : Union[Mod, Rational, int]):
        if isinstance(arg, Mod):
            if arg.p != self.p:
                raise ValueError(f"{arg} is not a member of {self}")
            return arg
        elif isinstance(arg, int):
            return Mod(arg, self.p)
        elif isinstance(arg, Rational):
            return arg.to_mod(self.p)
        else:
            raise ValueError(f"{arg} cannot be a member of a prime field")

    def is_field(self):
        return True

    def inv(self, a):
        return ~a

    def divexact(self, a, b):
        return a * ~b

    def elements(self):
        return (Mod(x, self.p) for x in range(self.p))

    def rand_elem(self, min : int = 0):
        return Mod(random.randint(min, self.p - 1), self.p)

########################################################################################################################
#   Ring Homomorphisms
########################################################################################################################

def _identity(x):
    return x

class RingHom:
    """
    A ring homomorphism `source -> target`.

    `func` is trusted to respect addition, multiplication and the identity; nothing here checks it.
    """

    def __init__(self, source : CoefficientRing, target : CoefficientRing, func):
        self.source = source
        self.target = target
        self.func = func

    def __call__(self, x):
        return self.target(self.func(self.source(x)))

    def __repr__(self):
        return f"RingHom({repr(self.source)} -> {repr(self.target)})"

    def __eq__(self, other):
        # maps built from equal functions between the same rings, e.g. two coercions ZZ -> GF(p)
        if not isinstance(other, RingHom):
            return False
        return self.source == other.source and self.target == other.target and self.func == other.func

    def __hash__(self):
        return hash((self.source, self.target))

    @staticmethod
    def identity(ring : CoefficientRing):
        return RingHom(ring, ring, _identity)

    @staticmethod
    def coercion(source : CoefficientRing, target : CoefficientRing):
        """
        The map sending r to target(r), e.g. ZZ -> GF(p) or QQ -> GF(p)
        """
        return RingHom(source, target, target)

    def compose(self, other):
        """
        self o other
        """
        if other.target != self.source:
            raise ValueError(f"{self} and {other} are not composable")
        return RingHom(other.source, self.target, lambda x: self(other(x)))

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

class TestGCD(unittest.TestCase):

    def test_gcd(self):
        self.assertEqual(gcd(4, 3), 1)
        self.assertEqual(gcd(12, 3), 3)
        self.assertEqual(gcd(21, 9), 3)
        self.assertEqual(gcd(1, -2), gcd(1, 2))
        self.assertEqual(gcd(-1, -2), gcd(1, 2))
        self.assertEqual(gcd(0, 5), 5)

    def test_xgcd(self):
        self.assertEqual(xgcd(30, 18), (6, -1, 2))
        self.assertEqual(xgcd(18, 30), (6, 2, -1))
        for a,b in ((240, 46), (17, 5), (5, 17)):
            g,s,t = xgcd(a, b)
            self.assertEqual(s * a + t * b, g)

class TestMod(unittest.TestCase):

    def test_arith(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x1 = random.randint(2, 65525)
            x2 = random.randint(2, 65525)
            self.assertEqual(Mod(x1, p) + Mod(x2, p), (x1 + x2) % p)
            self.assertEqual(Mod(x1, p) - Mod(x2, p), (x1 - x2) % p)
            self.assertEqual(Mod(x1, p) * Mod(x2, p), (x1 * x2) % p)
            self.assertEqual(-Mod(x1, p), (-x1) % p)

    def test_inversion(self):
        ps = [65413, 65419, 65423, 65437, 65447, 65449, 65479, 65497, 65519, LARGEST_u16_PRIME]
        for p in ps:
            x = Mod(random.randint(2, p - 1), p)
            ix = ~x
            self.assertEqual(x * ix, 1)
            self.assertEqual(~ix, x)
            self.assertEqual(x ** -2, ix * ix)

    def test_invert_zero(self):
        with self.assertRaises(ZeroDivisionError):
            ~Mod(0, 7)
        with self.assertRaises(DivisionByZeroError):
            Mod(3, 7) / Mod(7, 7)

    def test_rational_conversion(self):
        self.assertEqual(Mod(4, 7), Rational(1, 2))
        self.assertEqual(Rational(1, 2).to_mod(7) * 2, 1)

class TestRational(unittest.TestCase):

    def test_canonical(self):
        self.assertEqual(Rational(0, 5).tup(), (0, 1))
        self.assertEqual(Rational(6, 3).tup(), (2, 1))
        self.assertEqual(Rational(7*4, -3*4).tup(), (-7, 3))
        self.assertEqual(hash(Rational(2, 4)), hash(Rational(1, 2)))

    def test_arith(self):
        self.assertEqual((Rational(1, 3) + Rational(1, 3)).tup(), (2, 3))
        self.assertEqual((Rational(7, 8) + Rational(5, 6)).tup(), (41, 24))
        self.assertEqual((Rational(3, 2) * Rational(-1, 2)).tup(), (-3, 4))
        self.assertEqual((Rational(2, 3) / Rational(3, 4)).tup(), (8, 9))
        self.assertEqual((1 - Rational(1, 4)).tup(), (3, 4))
        self.assertEqual((~Rational(2, -3)).tup(), (-3, 2))
        self.assertLess(Rational(5, 3), Rational(7, 4))

    def test_zero_denominator(self):
        with self.assertRaises(ZeroDivisionError):
            ~Rational(0, 1)

class TestCoefficientRings(unittest.TestCase):

    def test_integers(self):
        self.assertFalse(ZZ.is_field())
        self.assertEqual(ZZ.divexact(12, -4), -3)
        with self.assertRaises(ArithmeticError):
            ZZ.divexact(7, 2)
        self.assertTrue(ZZ.is_unit(-1))
        self.assertFalse(ZZ.is_unit(2))
        self.assertEqual(ZZ.inv(-1), -1)
        with self.assertRaises(ArithmeticError):
            ZZ.inv(2)
        with self.assertRaises(DivisionByZeroError):
            ZZ.inv(0)
        self.assertEqual(ZZ.pow(3, 4), 81)

    def test_rationals(self):
        self.assertTrue(QQ.is_field())
        self.assertEqual(QQ.inv(QQ(4)), Rational(1, 4))
        self.assertEqual(QQ.divexact(QQ(3), QQ(6)), Rational(1, 2))
        self.assertTrue(QQ.is_unit(Rational(-2, 7)))
        with self.assertRaises(DivisionByZeroError):
            QQ.inv(QQ.zero())

    def test_prime_field(self):
        F = GF(7)
        self.assertEqual(F, GF(7))
        self.assertNotEqual(F, GF(5))
        with self.assertRaises(ValueError):
            F(Mod(3, 5))
        self.assertEqual(len(list(F.elements())), 7)
        for a in F.elements():
            if not F.is_zero(a):
                self.assertTrue(F.is_one(F.mul(a, F.inv(a))))
        self.assertEqual(F(Rational(1, 3)), 5)
        self.assertEqual(F.pow(F(3), 6), 1)

class TestRingHom(unittest.TestCase):

    def test_coercion(self):
        F = GF(5)
        h = RingHom.coercion(ZZ, F)
        self.assertEqual(h(7), F(2))
        self.assertEqual(h(-1), F(4))

    def test_compose(self):
        F = GF(5)
        h = RingHom.coercion(QQ, F).compose(RingHom.coercion(ZZ, QQ))
        self.assertIs(h.source, ZZ)
        self.assertEqual(h.target, F)
        self.assertEqual(h(12), F(2))
        self.assertEqual(RingHom.identity(QQ)(Rational(1, 2)), Rational(1, 2))
        with self.assertRaises(ValueError):
            RingHom.coercion(ZZ, QQ).compose(RingHom.coercion(ZZ, F))

    def test_equality(self):
        F = GF(5)
        self.assertEqual(RingHom.coercion(ZZ, F), RingHom.coercion(ZZ, GF(5)))
        self.assertEqual(hash(RingHom.coercion(ZZ, F)), hash(RingHom.coercion(ZZ, GF(5))))
        self.assertEqual(RingHom.identity(QQ), RingHom.identity(QQ))
        self.assertNotEqual(RingHom.coercion(ZZ, F), RingHom.coercion(ZZ, GF(7)))
        self.assertNotEqual(RingHom.coercion(ZZ, F), RingHom.coercion(QQ, F))
        self.assertNotEqual(RingHom.identity(F), RingHom.coercion(F, F))
        self.assertEqual(len({RingHom.coercion(ZZ, F), RingHom.coercion(ZZ, F)}), 1)
