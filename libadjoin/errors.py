#!/usr/bin/env python3
#
#   Exceptions raised by libadjoin
#

class AdjoinRootError(ArithmeticError):
    """
    Base class for every error raised by this library
    """

class InvalidModulusError(AdjoinRootError):
    """
    The modulus cannot define the requested quotient ring (zero polynomial, or a modulus that is not fit for
    the field structure)
    """

class NotMonicError(AdjoinRootError):
    """
    Division with remainder was requested against a divisor whose leading coefficient is not a unit
    """

class RootConditionViolatedError(AdjoinRootError):
    """
    The image chosen for the root does not satisfy the defining polynomial in the target ring
    """

class DegenerateModulusError(AdjoinRootError):
    """
    A power basis was requested for a modulus of degree <= 0
    """

class DivisionByZeroError(AdjoinRootError, ZeroDivisionError):
    pass
