import math
from collections.abc import Iterable, Sequence
from typing import Self, final

import mpmath
import numpy as np
import numpy.typing as npt

from fwdiff.typing import ComparableScalar


def _is_real(value: object) -> bool:
    return isinstance(value, int | float | np.integer | np.floating | mpmath.mpf)


def _real(value: float) -> float:
    # mpmath numbers are rounded so that derivative arrays stay float64.
    return float(value) if isinstance(value, mpmath.mpf) else value


@final
class Dual(ComparableScalar):
    r"""Dual number with a vector of directional derivatives.

    Parameters
    ----------
    real : float
    imag : Iterable[float] | ndarray

    Attributes
    ----------
    real : float
        Value of the number.
    imag : ndarray
        Derivatives along each seed direction. Its length is fixed at construction.

    Warnings
    --------
    Arithmetic between duals of different widths raises :exc:`ValueError`.
    Real operands may be Python, numpy or :class:`mpmath.mpf` numbers; the last
    ones are rounded to float.

    Notes
    -----
    Instances of this class behave like elements of the dual number ring

    .. math::

        \mathbb{R}[\varepsilon_1,\varepsilon_2,\dotsc,\varepsilon_n]/
        (\varepsilon_i\varepsilon_j\mid i,j\in\{1,2,\dotsc,n\}),

    where :math:`n` is the length of `imag`. Comparison operators only look at
    `real`, so ``Dual(1.0, [2.0]) == 1.0`` holds.

    Examples
    --------
    >>> x = Dual(3.0, [1.0, 0.0])
    >>> y = Dual(2.0, [0.0, 1.0])
    >>> x * y
    Dual(real=6.0, imag=[2.0, 3.0])
    >>> x / y
    Dual(real=1.5, imag=[0.5, -0.75])
    """

    __slots__ = ("real", "imag")
    __array_ufunc__ = None
    __hash__ = None  # type: ignore
    real: float
    imag: npt.NDArray[np.float64]

    def __init__(self, real: float, imag: Iterable[float] | npt.ArrayLike):
        if not isinstance(imag, np.ndarray | Sequence):
            imag = list(imag)  # type: ignore

        self.real = float(real)
        self.imag = np.array(imag, dtype=np.float64)

        if self.imag.ndim != 1 or self.imag.size == 0:
            raise ValueError("imag must be a non-empty one-dimensional sequence")

    @classmethod
    def _make(cls, real: float, imag: npt.NDArray[np.float64]) -> Self:
        # `imag` is taken over without copying.
        result = object.__new__(cls)
        result.real = real
        result.imag = imag
        return result

    @classmethod
    def constant(cls, value: float, n: int) -> Self:
        """Return a dual of width `n` whose derivatives are all zero."""
        return cls._make(float(value), np.zeros(n))

    @classmethod
    def variable(cls, *args: float) -> tuple[Self, ...]:
        """Return duals seeded along mutually independent directions.

        Examples
        --------
        >>> x, y = Dual.variable(1.0, 2.0)
        >>> x * y
        Dual(real=2.0, imag=[2.0, 1.0])
        """
        result: list[Self] = []

        for argnum, arg in enumerate(args):
            imag = np.zeros(len(args))
            imag[argnum] = 1.0
            result.append(cls._make(float(arg), imag))

        return tuple(result)

    @property
    def width(self) -> int:
        """Number of seed directions."""
        return len(self.imag)

    def copy(self) -> Self:
        """Return a dual whose derivative vector is independent of this one."""
        return self._make(self.real, self.imag.copy())

    def _check_width(self, other: "Dual") -> None:
        if len(self.imag) != len(other.imag):
            raise ValueError(
                f"derivative widths do not match ({len(self.imag)} != {len(other.imag)})"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(real={self.real!r}, imag={self.imag.tolist()!r})"

    def __str__(self) -> str:
        imag = (", ").join(str(x) for x in self.imag)
        return f"{type(self).__name__}(real={self.real}, imag=[{imag}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dual) and not _is_real(other):
            return NotImplemented

        return self.real == (other.real if isinstance(other, Dual) else other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Dual) and not _is_real(other):
            return NotImplemented

        return self.real != (other.real if isinstance(other, Dual) else other)

    def __lt__(self, rhs: Self | float) -> bool:
        if not isinstance(rhs, Dual) and not _is_real(rhs):
            return NotImplemented

        return self.real < (rhs.real if isinstance(rhs, Dual) else rhs)

    def __le__(self, rhs: Self | float) -> bool:
        if not isinstance(rhs, Dual) and not _is_real(rhs):
            return NotImplemented

        return self.real <= (rhs.real if isinstance(rhs, Dual) else rhs)

    def __gt__(self, rhs: Self | float) -> bool:
        if not isinstance(rhs, Dual) and not _is_real(rhs):
            return NotImplemented

        return self.real > (rhs.real if isinstance(rhs, Dual) else rhs)

    def __ge__(self, rhs: Self | float) -> bool:
        if not isinstance(rhs, Dual) and not _is_real(rhs):
            return NotImplemented

        return self.real >= (rhs.real if isinstance(rhs, Dual) else rhs)

    def __add__(self, rhs: Self | float) -> Self:
        if isinstance(rhs, Dual):
            self._check_width(rhs)
            return self._make(self.real + rhs.real, self.imag + rhs.imag)

        if not _is_real(rhs):
            return NotImplemented

        rhs = _real(rhs)
        return self._make(self.real + rhs, self.imag.copy())

    def __sub__(self, rhs: Self | float) -> Self:
        if isinstance(rhs, Dual):
            self._check_width(rhs)
            return self._make(self.real - rhs.real, self.imag - rhs.imag)

        if not _is_real(rhs):
            return NotImplemented

        rhs = _real(rhs)
        return self._make(self.real - rhs, self.imag.copy())

    def __mul__(self, rhs: Self | float) -> Self:
        if isinstance(rhs, Dual):
            self._check_width(rhs)
            imag = self.real * rhs.imag + rhs.real * self.imag
            return self._make(self.real * rhs.real, imag)

        if not _is_real(rhs):
            return NotImplemented

        rhs = _real(rhs)
        return self._make(self.real * rhs, self.imag * rhs)

    def __truediv__(self, rhs: Self | float) -> Self:
        if isinstance(rhs, Dual):
            self._check_width(rhs)
            s = rhs.real**2
            imag = (self.imag * rhs.real - self.real * rhs.imag) / s
            return self._make(self.real / rhs.real, imag)

        if not _is_real(rhs):
            return NotImplemented

        rhs = _real(rhs)
        return self._make(self.real / rhs, self.imag / rhs)

    def __pow__(self, rhs: Self | float) -> Self:
        if isinstance(rhs, Dual):
            self._check_width(rhs)
            value = math.pow(self.real, rhs.real)
            imag = (
                rhs.real * math.pow(self.real, rhs.real - 1) * self.imag
                + math.log(self.real) * value * rhs.imag
            )
            return self._make(value, imag)

        if not _is_real(rhs):
            return NotImplemented

        rhs = _real(rhs)

        if rhs == 0:
            return self._make(1.0, np.zeros_like(self.imag))

        if isinstance(rhs, int | np.integer):
            imag = rhs * self.real ** (rhs - 1) * self.imag
            return self._make(self.real**rhs, imag)

        imag = rhs * math.pow(self.real, rhs - 1) * self.imag
        return self._make(math.pow(self.real, rhs), imag)

    def __neg__(self) -> Self:
        return self._make(-self.real, -self.imag)

    def __pos__(self) -> Self:
        return self._make(+self.real, self.imag.copy())

    def __abs__(self) -> Self:
        return -self if self.real < 0 else +self

    def __radd__(self, lhs: Self | float) -> Self:
        return self.__add__(lhs)

    def __rsub__(self, lhs: Self | float) -> Self:
        if not _is_real(lhs):
            return NotImplemented

        lhs = _real(lhs)
        return self._make(lhs - self.real, -self.imag)

    def __rmul__(self, lhs: Self | float) -> Self:
        return self.__mul__(lhs)

    def __rtruediv__(self, lhs: Self | float) -> Self:
        if not _is_real(lhs):
            return NotImplemented

        lhs = _real(lhs)
        s = self.real**2
        return self._make(lhs / self.real, -lhs * self.imag / s)

    def __rpow__(self, lhs: Self | float) -> Self:
        if not _is_real(lhs):
            return NotImplemented

        lhs = _real(lhs)
        value = math.pow(lhs, self.real)
        return self._make(value, math.log(lhs) * value * self.imag)
