#
#   libadjoin : LIBrary for ADJOINing roots of polynomials to commutative rings
#

from libadjoin.adjoin_root import AdjoinRoot, AdjoinRootElement
from libadjoin.basic_types import GF, QQ, ZZ, CoefficientRing, Mod, Rational, RingHom
from libadjoin.errors import (AdjoinRootError, DegenerateModulusError, DivisionByZeroError, InvalidModulusError,
                              NotMonicError, RootConditionViolatedError)
from libadjoin.field import AdjoinRootField
from libadjoin.lift import Lift, lift, lift_hom, lifts
from libadjoin.polynomial import Polynomial, PolynomialRing
from libadjoin.power_basis import PowerBasis
