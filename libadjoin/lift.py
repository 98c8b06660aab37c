#!/usr/bin/env python3
#
#   Ring homomorphisms out of R[X]/(f), determined by the image of the root
#

import logging

from libadjoin.adjoin_root import AdjoinRoot
from libadjoin.basic_types import CoefficientRing, RingHom
from libadjoin.errors import RootConditionViolatedError

logger = logging.getLogger(__name__)

class Lift(RingHom):
    """
    The unique ring homomorphism R[X]/(f) -> S restricting to `hom` on R and sending the root to `image`.

    It exists exactly when f, with coefficients mapped through `hom`, vanishes at `image`; this is checked on
    construction. A class is mapped by evaluating any of its representatives, which is well defined since
    multiples of f evaluate to zero.
    """

    def __init__(self, source : AdjoinRoot, hom : RingHom, image):
        if hom.source != source.base_ring:
            raise ValueError(f"{hom} does not start at {source.base_ring}")
        target = hom.target
        image = target(image)

        value = source.modulus.evaluate(hom, image)
        if not target.is_zero(value):
            raise RootConditionViolatedError(f"{source.modulus} evaluates to {value}, not 0, at {image} in {target}")
        logger.debug("Lifting %s along %s, %s -> %s", source, hom, source.name, image)

        self.hom = hom
        self.image = image
        super().__init__(source, target, self._evaluate)

    def _evaluate(self, x):
        return x.rep.evaluate(self.hom, self.image)

    def __repr__(self):
        return f"Lift({repr(self.source)}, {repr(self.hom)}, {repr(self.image)})"

    def __eq__(self, other):
        # a homomorphism out of R[X]/(f) is determined by its restriction to R and the image of the root
        if not isinstance(other, Lift):
            return False
        return self.source == other.source and self.hom == other.hom and self.target.eq(self.image, other.image)

    def __hash__(self):
        return hash((self.source, self.hom))

def lift(source : AdjoinRoot, hom : RingHom, image):
    return Lift(source, hom, image)

def lift_hom(source : AdjoinRoot, target : CoefficientRing, image):
    """
    Lift for a target that is an algebra over the base ring, its coercion from the base ring being the structure
    map
    """
    return Lift(source, RingHom.coercion(source.base_ring, target), image)

def lifts(source : AdjoinRoot, hom : RingHom, candidates):
    """
    Every lift along hom whose image of the root is among `candidates`. Lifts correspond one-to-one with roots of f
    in the target, so exhausting the target (e.g. with GF(p).elements()) yields all homomorphisms.
    """
    result = []
    for a in candidates:
        a = hom.target(a)
        if hom.target.is_zero(source.modulus.evaluate(hom, a)):
            result.append(Lift(source, hom, a))
    logger.debug("Found %d lifts of %s along %s", len(result), source, hom)
    return result

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest
from libadjoin.basic_types import GF, QQ, ZZ, Rational
from libadjoin.polynomial import PolynomialRing

class TestLift(unittest.TestCase):

    def setUp(self):
        self.RZ = PolynomialRing(ZZ)
        self.RQ = PolynomialRing(QQ)

    def test_gaussian_integers_mod_5(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 + 1)
        F = GF(5)
        h = RingHom.coercion(ZZ, F)
        phi = lift(A, h, F(2))

        self.assertEqual(phi(A.root()), F(2))
        self.assertEqual(phi(A.of(7)), F(2))
        self.assertEqual(phi(3 + 4 * A.root()), F(1))
        for _ in range(20):
            p, q = A.rand_elem(), A.rand_elem()
            self.assertEqual(phi(p + q), phi(p) + phi(q))
            self.assertEqual(phi(p * q), phi(p) * phi(q))
        self.assertEqual(phi(A.one()), F(1))

    def test_root_condition(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 + 1)
        F = GF(5)
        with self.assertRaises(RootConditionViolatedError):
            lift(A, RingHom.coercion(ZZ, F), F(1))
        with self.assertRaises(RootConditionViolatedError):
            lift_hom(A, QQ, Rational(1, 2))
        # construction failure leaves the ring usable
        self.assertEqual(A.root()**2, -1)

    def test_conjugation(self):
        X = self.RQ.gen()
        K = AdjoinRoot(X**2 - 2)
        sigma = lift_hom(K, K, -K.root())
        for _ in range(20):
            p, q = K.rand_elem(), K.rand_elem()
            self.assertEqual(sigma(p * q), sigma(p) * sigma(q))
            self.assertEqual(sigma(sigma(p)), p)
        self.assertEqual(sigma(K.root()), -K.root())
        self.assertEqual(sigma(K.of(Rational(3, 7))), Rational(3, 7))

    def test_lift_of_representatives(self):
        X = self.RZ.gen()
        f = X**3 - X - 1
        A = AdjoinRoot(f)

        # y = x^2 is a root of f in ZZ[X]/(X^6 - X^2 - 1)
        B = AdjoinRoot(X**6 - X**2 - 1)
        phi = lift(A, B.of_hom(), B.root()**2)
        for _ in range(10):
            p, q = self.RZ.rand_elem(7), self.RZ.rand_elem(4)
            self.assertEqual(phi(A.mk(p)), B.mk(p.evaluate(RingHom.identity(self.RZ), X**2)))
            self.assertEqual(phi(A.mk(p) * A.mk(q)), phi(A.mk(p)) * phi(A.mk(q)))

        F = GF(5)
        h = RingHom.coercion(ZZ, F)
        found = lifts(A, h, F.elements())
        self.assertEqual(len(found), 1)
        for _ in range(10):
            p = self.RZ.rand_elem(7)
            self.assertEqual(found[0](A.mk(p)), p.evaluate(h, F(2)))

    def test_lifts_are_roots(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 + 1)
        F = GF(5)
        h = RingHom.coercion(ZZ, F)
        found = lifts(A, h, F.elements())
        self.assertEqual(sorted(phi.image.x for phi in found), [2, 3])
        self.assertEqual(lifts(A, RingHom.coercion(ZZ, GF(3)), GF(3).elements()), [])

    def test_uniqueness(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 + 1)
        F = GF(5)
        h = RingHom.coercion(ZZ, F)
        phi, psi = lift(A, h, 2), lift(A, h, F(7))
        self.assertEqual(phi, psi)
        self.assertNotEqual(phi, lift(A, h, 3))

        # agreeing on the root forces agreement on the basis, hence everywhere
        for x in (A.one(), A.root()):
            self.assertEqual(phi(x), psi(x))

        # separately built structure maps
        self.assertEqual(lift_hom(A, F, 2), lift_hom(A, GF(5), 2))
        self.assertEqual(lift(A, RingHom.coercion(ZZ, F), 2), lift_hom(A, F, 2))
        self.assertEqual(hash(lift_hom(A, F, 2)), hash(lift(A, h, 7)))
        self.assertEqual(len(set(lifts(A, h, F.elements())) | set(lifts(A, h, F.elements()))), 2)
        self.assertNotEqual(lift_hom(A, F, 2), lift_hom(A, GF(13), 5))

    def test_source_mismatch(self):
        A = AdjoinRoot(self.RZ.gen()**2 + 1)
        with self.assertRaises(ValueError):
            lift(A, RingHom.coercion(QQ, GF(5)), 2)

    def test_compose(self):
        X = self.RZ.gen()
        A = AdjoinRoot(X**2 + 1)
        F = GF(13)
        h = RingHom.coercion(ZZ, F)
        phi = lift(A, h, 5)
        chi = RingHom.coercion(F, F).compose(phi)
        self.assertEqual(chi(A.root() * 3), F(15))
