import functools
from collections.abc import Callable, Sequence
from typing import Any, ParamSpec, TypeVar

import numpy as np
import numpy.typing as npt

from fwdiff.autodiff.dual import Dual
from fwdiff.autodiff.errors import ShapeMismatchError
from fwdiff.autodiff.workmemory import JacobianWorkMemory

T = TypeVar("T")
P = ParamSpec("P")


def derivative(fcn: Callable[[Dual], Any], x: float) -> tuple[float, float]:
    """Evaluate the univariate scalar-valued function and its derivative.

    Parameters
    ----------
    fcn : Callable
        Differentiated function. It receives a single :class:`Dual` and must return
        a :class:`Dual` computed from it.
    x : float
        Point at which `fcn` is differentiated.

    Returns
    -------
    f : float
        Value of `fcn` at `x`.
    dfdx : float
        Derivative of `fcn` at `x`.

    Raises
    ------
    ValueError
        If the returned :class:`Dual` does not have exactly one derivative.

    Warnings
    --------
    `fcn` must not contain conditional branches depending on the value of its
    argument.

    Examples
    --------
    >>> from fwdiff import function as fdf
    >>> f, dfdx = derivative(lambda x: x**2 + fdf.sqrt(x + 3), 1.0)
    >>> print(format(f, ".6g"), format(dfdx, ".6g"))
    3 2.25
    """
    res = fcn(Dual(x, (1.0,)))

    if not isinstance(res, Dual):
        return float(res), 0.0

    if res.width != 1:
        raise ValueError(f"the result has {res.width} derivatives, expected 1")

    return res.real, float(res.imag[0])


def gradient(
    fcn: Callable[[list[Dual]], Any],
    x: npt.ArrayLike,
    dfdx: npt.NDArray[np.float64] | None = None,
) -> tuple[float, npt.NDArray[np.float64]]:
    """Evaluate the multivariate scalar-valued function and its gradient.

    Every variable is seeded along its own direction, so that the gradient is
    obtained from one evaluation of `fcn`.

    Parameters
    ----------
    fcn : Callable
        Differentiated function. It receives a list of :class:`Dual` and must
        return a :class:`Dual`.
    x : ArrayLike
        One-dimensional point at which `fcn` is differentiated.
    dfdx : ndarray, optional
        Array the gradient is written into. A new one is allocated if omitted.

    Returns
    -------
    f : float
        Value of `fcn` at `x`.
    dfdx : ndarray
        Gradient of `fcn` at `x`.

    Raises
    ------
    ShapeMismatchError
        If `x` is not a non-empty vector, or `dfdx` does not have the same length as
        `x`.
    ValueError
        If the returned :class:`Dual` does not carry one derivative per variable.

    Examples
    --------
    >>> from fwdiff import function as fdf
    >>> f, dfdx = gradient(lambda x: fdf.sqrt(x[0] * x[1] + 3), [0.5, 1.0])
    >>> print(format(dfdx[0], ".6g"), format(dfdx[1], ".6g"))
    0.267261 0.133631
    """
    x = _as_vector(x)
    n = len(x)

    if dfdx is None:
        dfdx = np.empty(n)
    else:
        _check_output("dfdx", dfdx, (n,))

    wrk = JacobianWorkMemory(n)
    res = fcn(wrk.seed(x))

    if not isinstance(res, Dual):
        dfdx[:] = 0.0
        return float(res), dfdx

    if res.width != n:
        raise ValueError(f"the result has {res.width} derivatives, expected {n}")

    dfdx[:] = res.imag
    return res.real, dfdx


def _as_vector(x: npt.ArrayLike) -> npt.NDArray[np.float64]:
    result = np.asarray(x, dtype=np.float64)

    if result.ndim != 1 or result.size == 0:
        raise ShapeMismatchError(
            f"input `x` must be a non-empty one-dimensional array, got shape {result.shape}"
        )

    return result


def _check_output(name: str, a: object, shape: Sequence[int]) -> None:
    if not isinstance(a, np.ndarray):
        raise ShapeMismatchError(f"output `{name}` must be a numpy array")

    if a.shape != tuple(shape):
        raise ShapeMismatchError(
            f"output `{name}` array is not the right size: expected shape "
            f"{tuple(shape)}, got {a.shape}"
        )

    if not np.issubdtype(a.dtype, np.floating):
        raise ShapeMismatchError(f"output `{name}` array must have a floating dtype")

    if not a.flags.writeable:
        raise ShapeMismatchError(f"output `{name}` array is read-only")


def _defderiv(
    fun: Callable[P, Any], deriv: Callable[P, Any], *, argnum: int = 0
) -> None:
    if "_fwdiff_is_primitive" not in fun.__dict__:
        raise ValueError(f"{fun.__name__} is not a primitive")

    fun.__dict__["_fwdiff_derivs"][argnum] = deriv


def _primitive(fun: Callable[P, T]) -> Callable[P, T]:
    derivs: dict[int, Callable] = {}

    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        if not any(isinstance(x, Dual) for x in args):
            return fun(*args, **kwargs)

        args_real = [x.real if isinstance(x, Dual) else x for x in args]
        args_dual = [(argnum, x) for argnum, x in enumerate(args) if isinstance(x, Dual)]
        head = args_dual[0][1]
        imag = np.zeros_like(head.imag)

        for argnum, arg in args_dual:
            head._check_width(arg)

            if argnum not in derivs:
                raise TypeError(
                    f"{fun.__name__} is not differentiable w.r.t. argument {argnum}"
                )

            imag += float(derivs[argnum](*args_real, **kwargs)) * arg.imag

        return Dual._make(float(fun(*args_real, **kwargs)), imag)  # type: ignore

    wrapper.__dict__["_fwdiff_is_primitive"] = True
    wrapper.__dict__["_fwdiff_derivs"] = derivs
    return wrapper  # type: ignore
