import math

import mpmath
import numpy as np
import pytest

from fwdiff.autodiff import Dual
from fwdiff.typing import ComparableScalar


def test_arithmetic():
    x = Dual(3.0, [1.0, 0.0])
    y = Dual(2.0, [0.0, 1.0])

    z = x + y
    assert z.real == 5.0
    assert z.imag.tolist() == [1.0, 1.0]

    z = x - y
    assert z.real == 1.0
    assert z.imag.tolist() == [1.0, -1.0]

    z = x * y
    assert z.real == 6.0
    assert z.imag.tolist() == [2.0, 3.0]

    z = x / y
    assert z.real == 1.5
    assert z.imag.tolist() == [0.5, -0.75]


def test_arithmetic_with_numbers():
    x = Dual(3.0, [1.0, 2.0])

    assert (x + 1).imag.tolist() == [1.0, 2.0]
    assert (1 + x).real == 4.0
    assert (x - 1).real == 2.0

    z = 1 - x
    assert z.real == -2.0
    assert z.imag.tolist() == [-1.0, -2.0]

    assert (2 * x).imag.tolist() == [2.0, 4.0]
    assert (x * 2).imag.tolist() == [2.0, 4.0]
    assert (x / 2).imag.tolist() == [0.5, 1.0]

    z = 6 / x
    assert z.real == 2.0
    assert z.imag.tolist() == pytest.approx([-6 / 9, -12 / 9])


def test_numpy_scalar_operands():
    x = Dual(3.0, [1.0])
    z = np.float64(2.0) * x
    assert isinstance(z, Dual)
    assert z.imag.tolist() == [2.0]

    z = np.float64(1.0) - x
    assert isinstance(z, Dual)
    assert z.real == -2.0


def test_mpmath_operands():
    x = Dual(3.0, [1.0, 2.0])

    z = x * mpmath.mpf(2)
    assert type(z.real) is float
    assert z.real == 6.0
    assert z.imag.dtype == np.float64
    assert z.imag.tolist() == [2.0, 4.0]

    z = mpmath.mpf("0.5") + x
    assert isinstance(z, Dual)
    assert z.real == 3.5

    z = mpmath.mpf(3) - x
    assert isinstance(z, Dual)
    assert z.real == 0.0
    assert z.imag.tolist() == [-1.0, -2.0]

    z = x ** mpmath.mpf(2)
    assert z.real == 9.0
    assert z.imag.tolist() == [6.0, 12.0]

    assert x > mpmath.mpf(2)


def test_power():
    x = Dual(3.0, [1.0, 0.0])

    z = x**2
    assert z.real == 9.0
    assert z.imag.tolist() == [6.0, 0.0]

    z = x**0
    assert z.real == 1.0
    assert z.imag.tolist() == [0.0, 0.0]

    z = x**-1
    assert z.real == pytest.approx(1 / 3)
    assert z.imag.tolist() == pytest.approx([-1 / 9, 0.0])

    z = x**0.5
    assert z.real == pytest.approx(math.sqrt(3))
    assert z.imag[0] == pytest.approx(0.5 / math.sqrt(3))


def test_power_with_dual_exponent():
    x, y = Dual.variable(2.0, 3.0)

    z = x**y
    assert z.real == pytest.approx(8.0)
    assert z.imag.tolist() == pytest.approx([12.0, math.log(2) * 8])

    z = 2**y
    assert z.real == pytest.approx(8.0)
    assert z.imag.tolist() == pytest.approx([0.0, math.log(2) * 8])


def test_unary():
    x = Dual(-2.0, [1.0, -3.0])

    assert (-x).imag.tolist() == [-1.0, 3.0]
    assert (+x).imag.tolist() == [1.0, -3.0]

    z = abs(x)
    assert z.real == 2.0
    assert z.imag.tolist() == [-1.0, 3.0]
    assert abs(-x).imag.tolist() == [-1.0, 3.0]


def test_comparison():
    x = Dual(1.0, [1.0])
    y = Dual(2.0, [0.0])

    assert x < y
    assert x <= y
    assert y > x
    assert y >= 2.0
    assert x == Dual(1.0, [5.0])
    assert x == 1
    assert x != y
    assert max(x, y) is y


def test_width_mismatch():
    x = Dual(1.0, [1.0, 0.0])
    y = Dual(1.0, [1.0, 0.0, 0.0])

    with pytest.raises(ValueError):
        x + y

    with pytest.raises(ValueError):
        x * y

    with pytest.raises(ValueError):
        x / y

    with pytest.raises(ValueError):
        x**y


def test_unsupported_operand():
    x = Dual(1.0, [1.0])

    with pytest.raises(TypeError):
        x + "a"  # type: ignore

    with pytest.raises(TypeError):
        [1.0] * x  # type: ignore


def test_independent_storage():
    x = Dual(1.0, [1.0, 0.0])
    y = x.copy()
    y.imag[0] = 5.0
    assert x.imag.tolist() == [1.0, 0.0]

    z = x + 1
    z.imag[1] = 7.0
    assert x.imag.tolist() == [1.0, 0.0]

    imag = np.array([1.0, 2.0])
    w = Dual(0.0, imag)
    imag[0] = 9.0
    assert w.imag.tolist() == [1.0, 2.0]


def test_construction():
    assert Dual(1, (v for v in [1.0, 2.0])).imag.tolist() == [1.0, 2.0]
    assert Dual.constant(3.0, 4).imag.tolist() == [0.0] * 4
    assert Dual.constant(3.0, 4).width == 4

    x, y, z = Dual.variable(1.0, 2.0, 3.0)
    assert y.real == 2.0
    assert y.imag.tolist() == [0.0, 1.0, 0.0]
    assert repr(z) == "Dual(real=3.0, imag=[0.0, 0.0, 1.0])"

    with pytest.raises(ValueError):
        Dual(1.0, [])

    with pytest.raises(ValueError):
        Dual(1.0, [[1.0], [2.0]])


def test_protocol():
    assert ComparableScalar in Dual.__mro__
    assert abs(Dual(-2.0, [1.0])) > Dual(1.0, [0.0])
