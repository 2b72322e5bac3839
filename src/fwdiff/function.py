"""
###############################################
Mathematical functions (:mod:`fwdiff.function`)
###############################################

.. currentmodule:: fwdiff.function

This module provides mathematical functions. They accept floats, integers,
:mod:`mpmath` numbers and :class:`~fwdiff.autodiff.Dual`, and propagate derivatives
through the latter.

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    log10
    pow
    sqrt
    hypot

Trigonometric and hyperbolic functions
======================================

.. autosummary::
    :toctree: generated/

    sin
    cos
    tan
    asin
    acos
    atan
    atan2
    sinh
    cosh
    tanh

Selection
=========

.. autosummary::
    :toctree: generated/

    fmax
    fmin

"""

import math
from collections.abc import Callable
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python

from fwdiff.autodiff.autodiff import _defderiv, _primitive
from fwdiff.autodiff.dual import Dual


def _unary(x: Any, mpfun: Callable, mathfun: Callable) -> Any:
    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpfun(x)

        case float() | int():
            return mathfun(x)

        case _:
            raise TypeError(f"unsupported operand type: '{type(x).__name__}'")


def _binary(x: Any, y: Any, mpfun: Callable, mathfun: Callable) -> Any:
    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, y:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpfun(x, y)

        case (float() | int(), float() | int()):
            return mathfun(x, y)

        case _:
            raise TypeError(
                f"unsupported operand types: '{type(x).__name__}' and "
                f"'{type(y).__name__}'"
            )


@overload
def exp(x: Dual, /) -> Dual: ...


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


@_primitive
def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    return _unary(x, mpmath.exp, math.exp)


@overload
def log(x: Dual, /) -> Dual: ...


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


@_primitive
def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    """
    return _unary(x, mpmath.log, math.log)


@overload
def log10(x: Dual, /) -> Dual: ...


@overload
def log10(x: float | int, /) -> float: ...


@overload
def log10(x: Any, /) -> Any: ...


@_primitive
def log10(x, /):
    """Common logarithm."""
    return _unary(x, mpmath.log10, math.log10)


@overload
def pow(x: Dual, y: Dual | float | int, /) -> Dual: ...


@overload
def pow(x: float | int, y: Dual, /) -> Dual: ...


@overload
def pow(x: float | int, y: float | int, /) -> float: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


@_primitive
def pow(x, y, /):
    """`x` raised to the power `y`.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    return _binary(x, y, mpmath.power, math.pow)


@overload
def sqrt(x: Dual, /) -> Dual: ...


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


@_primitive
def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    return _unary(x, mpmath.sqrt, math.sqrt)


@overload
def hypot(x: Dual, y: Dual | float | int, /) -> Dual: ...


@overload
def hypot(x: float | int, y: Dual, /) -> Dual: ...


@overload
def hypot(x: float | int, y: float | int, /) -> float: ...


@overload
def hypot(x: Any, y: Any, /) -> Any: ...


@_primitive
def hypot(x, y, /):
    """Euclidean norm of ``(x, y)``."""
    return _binary(x, y, mpmath.hypot, math.hypot)


@overload
def sin(x: Dual, /) -> Dual: ...


@overload
def sin(x: float | int, /) -> float: ...


@overload
def sin(x: Any, /) -> Any: ...


@_primitive
def sin(x, /):
    """Sine.

    Examples
    --------
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    """
    return _unary(x, mpmath.sin, math.sin)


@overload
def cos(x: Dual, /) -> Dual: ...


@overload
def cos(x: float | int, /) -> float: ...


@overload
def cos(x: Any, /) -> Any: ...


@_primitive
def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    return _unary(x, mpmath.cos, math.cos)


@overload
def tan(x: Dual, /) -> Dual: ...


@overload
def tan(x: float | int, /) -> float: ...


@overload
def tan(x: Any, /) -> Any: ...


@_primitive
def tan(x, /):
    """Tangent."""
    return _unary(x, mpmath.tan, math.tan)


@overload
def asin(x: Dual, /) -> Dual: ...


@overload
def asin(x: float | int, /) -> float: ...


@overload
def asin(x: Any, /) -> Any: ...


@_primitive
def asin(x, /):
    """Inverse sine."""
    return _unary(x, mpmath.asin, math.asin)


@overload
def acos(x: Dual, /) -> Dual: ...


@overload
def acos(x: float | int, /) -> float: ...


@overload
def acos(x: Any, /) -> Any: ...


@_primitive
def acos(x, /):
    """Inverse cosine."""
    return _unary(x, mpmath.acos, math.acos)


@overload
def atan(x: Dual, /) -> Dual: ...


@overload
def atan(x: float | int, /) -> float: ...


@overload
def atan(x: Any, /) -> Any: ...


@_primitive
def atan(x, /):
    """Inverse tangent."""
    return _unary(x, mpmath.atan, math.atan)


@overload
def atan2(y: Dual, x: Dual | float | int, /) -> Dual: ...


@overload
def atan2(y: float | int, x: Dual, /) -> Dual: ...


@overload
def atan2(y: float | int, x: float | int, /) -> float: ...


@overload
def atan2(y: Any, x: Any, /) -> Any: ...


@_primitive
def atan2(y, x, /):
    """Angle of the point ``(x, y)``, in the range :math:`(-\\pi, \\pi]`.

    Examples
    --------
    >>> print(format(atan2(1.0, -1.0), ".6f"))
    2.356194
    """
    return _binary(y, x, mpmath.atan2, math.atan2)


@overload
def sinh(x: Dual, /) -> Dual: ...


@overload
def sinh(x: float | int, /) -> float: ...


@overload
def sinh(x: Any, /) -> Any: ...


@_primitive
def sinh(x, /):
    """Hyperbolic sine."""
    return _unary(x, mpmath.sinh, math.sinh)


@overload
def cosh(x: Dual, /) -> Dual: ...


@overload
def cosh(x: float | int, /) -> float: ...


@overload
def cosh(x: Any, /) -> Any: ...


@_primitive
def cosh(x, /):
    """Hyperbolic cosine."""
    return _unary(x, mpmath.cosh, math.cosh)


@overload
def tanh(x: Dual, /) -> Dual: ...


@overload
def tanh(x: float | int, /) -> float: ...


@overload
def tanh(x: Any, /) -> Any: ...


@_primitive
def tanh(x, /):
    """Hyperbolic tangent."""
    return _unary(x, mpmath.tanh, math.tanh)


def fmax(x, y, /):
    """Larger of `x` and `y`.

    If `x` and `y` are equal, `x` is returned. The derivative of a dual is that of
    the selected operand.
    """
    return +x if _value(x) >= _value(y) else +y


def fmin(x, y, /):
    """Smaller of `x` and `y`.

    If `x` and `y` are equal, `x` is returned. The derivative of a dual is that of
    the selected operand.
    """
    return +x if _value(x) <= _value(y) else +y


def _value(x: Any) -> Any:
    return x.real if isinstance(x, Dual) else x


_defderiv(exp, exp)
_defderiv(log, lambda x: 1 / x)
_defderiv(log10, lambda x: 1 / (x * log(10)))
_defderiv(pow, lambda x, y: y * pow(x, y - 1), argnum=0)
_defderiv(pow, lambda x, y: log(x) * pow(x, y), argnum=1)
_defderiv(sqrt, lambda x: 1 / (2 * sqrt(x)))
_defderiv(hypot, lambda x, y: x / hypot(x, y), argnum=0)
_defderiv(hypot, lambda x, y: y / hypot(x, y), argnum=1)
_defderiv(sin, cos)
_defderiv(cos, lambda x: -sin(x))
_defderiv(tan, lambda x: 1 + tan(x) ** 2)
_defderiv(asin, lambda x: 1 / sqrt(1 - x**2))
_defderiv(acos, lambda x: -1 / sqrt(1 - x**2))
_defderiv(atan, lambda x: 1 / (1 + x**2))
_defderiv(atan2, lambda y, x: x / (x**2 + y**2), argnum=0)
_defderiv(atan2, lambda y, x: -y / (x**2 + y**2), argnum=1)
_defderiv(sinh, cosh)
_defderiv(cosh, sinh)
_defderiv(tanh, lambda x: 1 - tanh(x) ** 2)
