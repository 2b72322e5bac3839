import math

import mpmath
import pytest

from fwdiff import function as fdf
from fwdiff.autodiff import Dual, autodiff


@pytest.mark.parametrize(
    "fun, x, expected",
    [
        (fdf.exp, 0.5, math.exp(0.5)),
        (fdf.log, 2.0, 0.5),
        (fdf.log10, 10.0, 1 / (10 * math.log(10))),
        (fdf.sqrt, 4.0, 0.25),
        (fdf.sin, 1.0, math.cos(1.0)),
        (fdf.cos, 1.0, -math.sin(1.0)),
        (fdf.tan, 0.5, 1 / math.cos(0.5) ** 2),
        (fdf.asin, 0.5, 1 / math.sqrt(0.75)),
        (fdf.acos, 0.5, -1 / math.sqrt(0.75)),
        (fdf.atan, 2.0, 0.2),
        (fdf.sinh, 1.0, math.cosh(1.0)),
        (fdf.cosh, 1.0, math.sinh(1.0)),
        (fdf.tanh, 0.5, 1 / math.cosh(0.5) ** 2),
    ],
)
def test_unary_derivative(fun, x, expected):
    f, dfdx = autodiff.derivative(fun, x)
    assert f == pytest.approx(fun(x))
    assert dfdx == pytest.approx(expected)


def test_binary_gradient():
    _, dfdx = autodiff.gradient(lambda x: fdf.hypot(x[0], x[1]), [3.0, 4.0])
    assert tuple(dfdx) == pytest.approx((0.6, 0.8))

    _, dfdx = autodiff.gradient(lambda x: fdf.atan2(x[0], x[1]), [1.0, 2.0])
    assert tuple(dfdx) == pytest.approx((0.4, -0.2))

    _, dfdx = autodiff.gradient(lambda x: fdf.pow(x[0], 3.0) + fdf.pow(2.0, x[1]), [2.0, 3.0])
    assert tuple(dfdx) == pytest.approx((12.0, 8 * math.log(2)))


def test_chain_rule():
    f, dfdx = autodiff.derivative(lambda x: fdf.sin(fdf.exp(x) * x), 0.3)
    u = math.exp(0.3) * 0.3
    assert f == pytest.approx(math.sin(u))
    assert dfdx == pytest.approx(math.cos(u) * math.exp(0.3) * 1.3)


def test_selection():
    x, y = Dual.variable(1.0, 2.0)

    z = fdf.fmax(x, y)
    assert z.real == 2.0
    assert z.imag.tolist() == [0.0, 1.0]

    z = fdf.fmin(x, y)
    assert z.imag.tolist() == [1.0, 0.0]

    assert fdf.fmax(x, 5.0) == 5.0
    assert fdf.fmin(3.0, 4.0) == 3.0


def test_non_dual_arguments():
    assert fdf.exp(0) == 1.0
    assert isinstance(fdf.exp(mpmath.mpf(1)), mpmath.mpf)
    assert fdf.exp(mpmath.mpf(1)) == pytest.approx(math.e)
    assert fdf.pow(mpmath.mpf(2), 10) == 1024

    with pytest.raises(TypeError):
        fdf.exp("1")

    with pytest.raises(TypeError):
        fdf.atan2(1.0, "1")


def test_width_mismatch():
    x = Dual(1.0, [1.0, 0.0])
    y = Dual(2.0, [1.0])

    with pytest.raises(ValueError):
        fdf.hypot(x, y)
