from collections.abc import Callable, Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from fwdiff.autodiff.autodiff import _as_vector, _check_output
from fwdiff.autodiff.dual import Dual
from fwdiff.autodiff.errors import (
    AutodiffError,
    ShapeMismatchError,
    SparsityError,
    WorkMemoryError,
)
from fwdiff.autodiff.sparsity import (
    Banded,
    BlockDiagonal,
    Dense,
    JacobianType,
    Sparsity,
    make_sparsity,
)
from fwdiff.autodiff.workmemory import JacobianWorkMemory
from fwdiff.logger import fwdiff_logger


def jacobian(
    fcn: Callable[[list[Dual], list[Dual]], Any],
    x: npt.ArrayLike,
    f: npt.NDArray[np.float64] | None = None,
    dfdx: npt.NDArray[np.float64] | None = None,
    *,
    wrk: JacobianWorkMemory | None = None,
    sparsity: Sparsity | JacobianType | str | None = None,
    bandwidth: int | None = None,
    blocksize: int | None = None,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Evaluate the function mapping a vector to a vector and its Jacobian.

    The inputs are seeded according to the sparsity pattern of the Jacobian and
    `fcn` is evaluated once. Only square Jacobians are supported.

    Parameters
    ----------
    fcn : Callable
        Differentiated function called as ``fcn(x, f)``, where `x` is a list of
        :class:`Dual` and `f` a list of the same length whose elements `fcn` must
        assign. If `fcn` returns a sequence instead of ``None``, it is used in place
        of `f`. Elements that are not duals are treated as constants.
    x : ArrayLike
        One-dimensional point at which `fcn` is differentiated.
    f : ndarray, optional
        Array of shape ``(n,)`` the value of `fcn` is written into.
    dfdx : ndarray, optional
        Array the Jacobian is written into. Its shape is given by
        :meth:`Sparsity.output_shape`: ``(n, n)`` for :class:`Dense`,
        ``(bandwidth, n)`` for :class:`Banded` and ``(blocksize, n)`` for
        :class:`BlockDiagonal`.
    wrk : JacobianWorkMemory, optional
        Work memory. It must have been created for the same sparsity pattern and
        number of variables. If omitted, temporary memory is allocated.
    sparsity : Sparsity | JacobianType | str, optional
        Sparsity pattern of the Jacobian (cf. :func:`make_sparsity`). Defaults to
        the pattern of `wrk`, or :class:`Dense` if `wrk` is omitted as well.
    bandwidth : int, optional
        Bandwidth of a banded Jacobian. If `sparsity` is omitted, this is a
        shorthand for ``sparsity=Banded(bandwidth)``.
    blocksize : int, optional
        Block size of a block-diagonal Jacobian. If `sparsity` is omitted, this is
        a shorthand for ``sparsity=BlockDiagonal(blocksize)``.

    Returns
    -------
    f : ndarray
        Value of `fcn` at `x`.
    dfdx : ndarray
        Jacobian of `fcn` at `x` in the storage of the sparsity pattern.

    Raises
    ------
    ShapeMismatchError
        If `x`, `f` or `dfdx` does not have the required shape.
    SparsityError
        If the sparsity pattern is unknown, or its parameter is missing or invalid
        for `n` variables.
    WorkMemoryError
        If `wrk` does not match the sparsity pattern or the number of variables.

    Warnings
    --------
    `fcn` must not contain conditional branches depending on the values of its
    arguments. The sparsity pattern is not checked against `fcn`; a pattern that
    is too narrow gives a wrong Jacobian.

    Notes
    -----
    All arguments are checked before `fcn` is called, and `f` and `dfdx` are left
    untouched if a check fails.

    Examples
    --------
    >>> def fcn(x, f):
    ...     f[0] = x[0] ** 2 + x[1]
    ...     f[1] = x[0] + x[1] ** 2
    ...     f[2] = x[2] ** 2 + x[3]
    ...     f[3] = x[2] + x[3] ** 2
    >>> f, dfdx = jacobian(fcn, [1.0, 2.0, 3.0, 4.0], blocksize=2)
    >>> dfdx
    array([[2., 1., 6., 1.],
           [1., 4., 1., 8.]])
    """
    try:
        x = _as_vector(x)
        n = len(x)
        sparsity = _resolve_sparsity(sparsity, wrk, bandwidth, blocksize)
        sparsity.validate(n)

        if f is None:
            f = np.empty(n)
        else:
            _check_output("f", f, (n,))

        if dfdx is None:
            dfdx = np.empty(sparsity.output_shape(n))
        else:
            _check_output("dfdx", dfdx, sparsity.output_shape(n))

        if wrk is None:
            fwdiff_logger.debug("allocating temporary work memory for n=%d", n)
            wrk = JacobianWorkMemory(n, sparsity)
        elif wrk.sparsity != sparsity:
            raise WorkMemoryError(
                f"the work memory was created for {wrk.sparsity!r}, not {sparsity!r}"
            )
        elif wrk.n != n:
            raise WorkMemoryError(
                f"the work memory was created for {wrk.n} variables, not {n}"
            )
    except AutodiffError as exc:
        fwdiff_logger.debug("jacobian rejected: %s", exc)
        raise

    fwdiff_logger.debug(
        "jacobian: sparsity=%r, n=%d, seed_width=%d", sparsity, n, wrk.seed_width
    )

    xx = wrk.seed(x)
    res = fcn(xx, wrk.outputs)

    if res is not None:
        _store_outputs(wrk, res)

    _normalize_outputs(wrk)
    sparsity.decompress(wrk.outputs, dfdx)
    f[:] = [y.real for y in wrk.outputs]
    return f, dfdx


def _resolve_sparsity(
    sparsity: Sparsity | JacobianType | str | None,
    wrk: JacobianWorkMemory | None,
    bandwidth: int | None,
    blocksize: int | None,
) -> Sparsity:
    if sparsity is not None:
        return make_sparsity(sparsity, bandwidth=bandwidth, blocksize=blocksize)

    if bandwidth is not None and blocksize is not None:
        raise SparsityError("`bandwidth` and `blocksize` can not be given together")

    if bandwidth is not None:
        return Banded(bandwidth)

    if blocksize is not None:
        return BlockDiagonal(blocksize)

    if wrk is not None:
        return wrk.sparsity

    return Dense()


def _store_outputs(wrk: JacobianWorkMemory, res: Sequence[Any]) -> None:
    if len(res) != wrk.n:
        raise ShapeMismatchError(
            f"the function returned {len(res)} values, expected {wrk.n}"
        )

    wrk.outputs[:] = res


def _normalize_outputs(wrk: JacobianWorkMemory) -> None:
    width = wrk.seed_width

    for i, y in enumerate(wrk.outputs):
        if not isinstance(y, Dual):
            wrk.outputs[i] = Dual.constant(y, width)
        elif y.width != width:
            raise ValueError(
                f"output {i} has {y.width} derivatives, expected {width}"
            )
