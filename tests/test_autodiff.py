import numpy as np
import pytest

from fwdiff import function as fdf
from fwdiff.autodiff import Dual, ShapeMismatchError, autodiff


def test_derivative():
    f, dfdx = autodiff.derivative(lambda x: x**2, 3.0)
    assert f == 9.0
    assert dfdx == 6.0

    f, dfdx = autodiff.derivative(lambda x: (x + fdf.sin(x**2)) / x, 1.4)
    assert pytest.approx(f, 1e-5) == 1.66087
    assert pytest.approx(dfdx, 1e-5) == -1.23095


def test_derivative_of_constant():
    assert autodiff.derivative(lambda x: 2.5, 1.0) == (2.5, 0.0)


def test_gradient():
    f, dfdx = autodiff.gradient(lambda x: fdf.pow(x[0], x[1]), [4.5, -2.2])
    assert pytest.approx(f, 1e-5) == 0.0365537
    assert pytest.approx(tuple(dfdx), 1e-5) == (-0.0178707, 0.0549797)

    f, dfdx = autodiff.gradient(lambda x: fdf.exp(x[1] / x[0]) + 2, [1.2, 3.5])
    assert pytest.approx(tuple(dfdx), 1e-5) == (-44.9157, 15.3997)


def test_gradient_in_place():
    out = np.zeros(3)
    f, dfdx = autodiff.gradient(lambda x: x[0] * x[1] * x[2], [1.0, 2.0, 3.0], out)
    assert f == 6.0
    assert dfdx is out
    np.testing.assert_array_equal(out, [6.0, 3.0, 2.0])


def test_gradient_of_constant():
    f, dfdx = autodiff.gradient(lambda x: 5.0, [1.0, 2.0])
    assert f == 5.0
    np.testing.assert_array_equal(dfdx, [0.0, 0.0])


def test_gradient_size_mismatch():
    calls = []

    def fcn(x):
        calls.append(x)
        return x[0] + x[1]

    out = np.full(3, -1.0)

    with pytest.raises(ShapeMismatchError):
        autodiff.gradient(fcn, [1.0, 2.0], out)

    assert not calls
    np.testing.assert_array_equal(out, [-1.0, -1.0, -1.0])

    with pytest.raises(ShapeMismatchError):
        autodiff.gradient(fcn, [[1.0, 2.0]])

    with pytest.raises(ShapeMismatchError):
        autodiff.gradient(fcn, [])


def test_result_width_mismatch():
    with pytest.raises(ValueError):
        autodiff.gradient(lambda x: Dual(1.0, [7.0]), [1.0, 2.0, 3.0])

    with pytest.raises(ValueError):
        autodiff.derivative(lambda x: Dual(x.real, [1.0, 0.0]), 1.0)
