import dataclasses
import enum
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Final

import numpy as np
import numpy.typing as npt

from fwdiff.autodiff.dual import Dual
from fwdiff.autodiff.errors import SparsityError


class JacobianType(enum.Enum):
    """Jacobian sparsity type specifier.

    Attributes
    ----------
    DENSE
    BANDED
    BLOCK_DIAGONAL
    """

    DENSE = enum.auto()
    BANDED = enum.auto()
    BLOCK_DIAGONAL = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


DENSE: Final = JacobianType.DENSE
BANDED: Final = JacobianType.BANDED
BLOCK_DIAGONAL: Final = JacobianType.BLOCK_DIAGONAL

_ALIASES: Final = {
    "dense": JacobianType.DENSE,
    "banded": JacobianType.BANDED,
    "blockdiagonal": JacobianType.BLOCK_DIAGONAL,
}


def _check_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int | np.integer):
        raise SparsityError(f"`{name}` must be an integer, got {value!r}")

    if value < 1:
        raise SparsityError(f"`{name}` can not be < 1")

    return int(value)


def _stack(outputs: Sequence[Dual]) -> npt.NDArray[np.float64]:
    return np.array([y.imag for y in outputs], dtype=np.float64)


class Sparsity(ABC):
    """Abstract base class for Jacobian sparsity patterns.

    A sparsity pattern decides how many seed directions are needed for a problem of
    size `n` and how the compressed derivatives are unpacked into the Jacobian
    storage.

    See Also
    --------
    Dense, Banded, BlockDiagonal
    """

    __slots__ = ()

    @property
    @abstractmethod
    def kind(self) -> JacobianType:
        """Type specifier of the pattern."""
        raise NotImplementedError

    @abstractmethod
    def seed_width(self, n: int) -> int:
        """Return the number of seed directions used for `n` variables."""
        raise NotImplementedError

    @abstractmethod
    def output_shape(self, n: int) -> tuple[int, int]:
        """Return the shape of the array storing the Jacobian."""
        raise NotImplementedError

    def validate(self, n: int) -> None:
        """Check that the pattern is applicable to `n` variables.

        Raises
        ------
        SparsityError
            If the pattern does not fit into a square Jacobian of order `n`.
        """

    @abstractmethod
    def decompress(self, outputs: Sequence[Dual], dfdx: npt.NDArray) -> None:
        """Unpack derivatives of `outputs` into `dfdx`.

        `outputs` must have been computed from inputs seeded by
        :meth:`JacobianWorkMemory.seed`, and `dfdx` must have the shape given by
        :meth:`output_shape`.
        """
        raise NotImplementedError

    @abstractmethod
    def todense(self, compressed: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Reconstruct the square Jacobian from its compressed storage."""
        raise NotImplementedError


@dataclasses.dataclass(frozen=True, slots=True)
class Dense(Sparsity):
    """Dense Jacobian.

    Every variable gets its own seed direction, and the Jacobian is stored as an
    ``(n, n)`` array whose first index runs over rows::

            | df(0,0) df(0,1) df(0,2) |
        J = | df(1,0) df(1,1) df(1,2) |
            | df(2,0) df(2,1) df(2,2) |
    """

    @property
    def kind(self) -> JacobianType:
        return JacobianType.DENSE

    def seed_width(self, n: int) -> int:
        return n

    def output_shape(self, n: int) -> tuple[int, int]:
        return (n, n)

    def decompress(self, outputs: Sequence[Dual], dfdx: npt.NDArray) -> None:
        dfdx[...] = _stack(outputs)

    def todense(self, compressed: npt.ArrayLike) -> npt.NDArray[np.float64]:
        return np.array(compressed, dtype=np.float64)


@dataclasses.dataclass(frozen=True, slots=True)
class Banded(Sparsity):
    """Banded Jacobian.

    Parameters
    ----------
    bandwidth : int
        Number of non-zero diagonals. It must be odd so that the band is symmetric
        about the main diagonal.

    Notes
    -----
    Variables are seeded cyclically with period `bandwidth`, so that two variables
    sharing a seed direction are farther apart than the band. The diagonals of the
    Jacobian are stored in the rows of a ``(bandwidth, n)`` array, the highest one
    first::

        | df(0,0) df(0,1) 0       0       0       |
        | df(1,0) df(1,1) df(1,2) 0       0       |    | 0       df(0,1) df(1,2) df(2,3) df(3,4) |
        | 0       df(2,1) df(2,2) df(2,3) 0       | -> | df(0,0) df(1,1) df(2,2) df(3,3) df(4,4) |
        | 0       0       df(3,2) df(3,3) df(3,4) |    | df(1,0) df(2,1) df(3,2) df(4,3) 0       |
        | 0       0       0       df(4,3) df(4,4) |

    Entries falling outside the matrix are stored as zero. The bandwidth is not
    checked against the function: a band narrower than the true one gives a wrong
    Jacobian without any error.
    """

    bandwidth: int

    def __post_init__(self):
        object.__setattr__(self, "bandwidth", _check_int("bandwidth", self.bandwidth))

        if self.bandwidth % 2 == 0:
            raise SparsityError("`bandwidth` must be odd")

    @property
    def kind(self) -> JacobianType:
        return JacobianType.BANDED

    @property
    def half_bandwidth(self) -> int:
        """Number of off-diagonals on each side of the main diagonal."""
        return (self.bandwidth - 1) // 2

    def seed_width(self, n: int) -> int:
        return self.bandwidth

    def output_shape(self, n: int) -> tuple[int, int]:
        return (self.bandwidth, n)

    def validate(self, n: int) -> None:
        if self.bandwidth > n:
            raise SparsityError(f"`bandwidth` can not be > {n} (the number of variables)")

    def decompress(self, outputs: Sequence[Dual], dfdx: npt.NDArray) -> None:
        n = len(outputs)
        h = self.half_bandwidth
        derivs = _stack(outputs)
        cols = np.arange(n)
        slots = cols % self.bandwidth

        for d in range(-h, h + 1):
            rows = cols + d
            inside = (rows >= 0) & (rows < n)
            dfdx[d + h] = 0.0
            dfdx[d + h, inside] = derivs[rows[inside], slots[inside]]

    def todense(self, compressed: npt.ArrayLike) -> npt.NDArray[np.float64]:
        compressed = np.asarray(compressed, dtype=np.float64)
        n = compressed.shape[1]
        h = self.half_bandwidth
        result = np.zeros((n, n))
        cols = np.arange(n)

        for d in range(-h, h + 1):
            rows = cols + d
            inside = (rows >= 0) & (rows < n)
            result[rows[inside], cols[inside]] = compressed[d + h, inside]

        return result


@dataclasses.dataclass(frozen=True, slots=True)
class BlockDiagonal(Sparsity):
    """Block-diagonal Jacobian.

    Parameters
    ----------
    blocksize : int
        Order of each diagonal block. The number of variables must be a multiple
        of it.

    Notes
    -----
    The position of a variable within its block is also its seed direction. The
    blocks are stored side by side in a ``(blocksize, n)`` array::

        | df(0,0) df(0,1) 0       0       |
        | df(1,0) df(1,1) 0       0       | -> | df(0,0) df(0,1) df(2,2) df(2,3) |
        | 0       0       df(2,2) df(2,3) | -> | df(1,0) df(1,1) df(3,2) df(3,3) |
        | 0       0       df(3,2) df(3,3) |

    As with :class:`Banded`, entries coupling different blocks are assumed to be
    zero and are never checked.
    """

    blocksize: int

    def __post_init__(self):
        object.__setattr__(self, "blocksize", _check_int("blocksize", self.blocksize))

    @property
    def kind(self) -> JacobianType:
        return JacobianType.BLOCK_DIAGONAL

    def seed_width(self, n: int) -> int:
        return self.blocksize

    def output_shape(self, n: int) -> tuple[int, int]:
        return (self.blocksize, n)

    def validate(self, n: int) -> None:
        if self.blocksize > n:
            raise SparsityError(f"`blocksize` can not be > {n} (the number of variables)")

        if n % self.blocksize != 0:
            raise SparsityError(
                f"the number of variables ({n}) must be an integer multiple of `blocksize`"
            )

    def decompress(self, outputs: Sequence[Dual], dfdx: npt.NDArray) -> None:
        m = self.blocksize
        derivs = _stack(outputs)

        for start in range(0, len(outputs), m):
            block = slice(start, start + m)
            dfdx[:, block] = derivs[block, :]

    def todense(self, compressed: npt.ArrayLike) -> npt.NDArray[np.float64]:
        compressed = np.asarray(compressed, dtype=np.float64)
        m = self.blocksize
        n = compressed.shape[1]
        result = np.zeros((n, n))

        for start in range(0, n, m):
            block = slice(start, start + m)
            result[block, block] = compressed[:, block]

        return result


def make_sparsity(
    kind: Sparsity | JacobianType | str,
    *,
    bandwidth: int | None = None,
    blocksize: int | None = None,
) -> Sparsity:
    """Return the sparsity pattern specified by a type and its parameter.

    Parameters
    ----------
    kind : Sparsity | JacobianType | str
        Either a pattern, which is returned as it is, a :class:`JacobianType`, or
        one of ``"dense"``, ``"banded"`` and ``"block_diagonal"`` (case, hyphens and
        underscores are ignored).
    bandwidth : int, optional
        Required if `kind` specifies a banded Jacobian, and not accepted otherwise.
    blocksize : int, optional
        Required if `kind` specifies a block-diagonal Jacobian, and not accepted
        otherwise.

    Raises
    ------
    SparsityError
        If `kind` is unknown, the parameter required for `kind` is missing or
        invalid, or a parameter that `kind` does not take is given.

    Examples
    --------
    >>> make_sparsity("banded", bandwidth=3)
    Banded(bandwidth=3)
    >>> make_sparsity(JacobianType.BLOCK_DIAGONAL, blocksize=2)
    BlockDiagonal(blocksize=2)
    """
    if isinstance(kind, Sparsity):
        if bandwidth is not None or blocksize is not None:
            raise SparsityError(
                f"`bandwidth` and `blocksize` can not be given with {kind!r}"
            )

        return kind

    if isinstance(kind, str):
        key = kind.lower().replace("_", "").replace("-", "").replace(" ", "")

        if key not in _ALIASES:
            raise SparsityError(f"unknown Jacobian sparsity type {kind!r}")

        kind = _ALIASES[key]

    match kind:
        case JacobianType.DENSE:
            if bandwidth is not None or blocksize is not None:
                raise SparsityError(
                    "`bandwidth` and `blocksize` can not be given for a dense Jacobian"
                )

            return Dense()

        case JacobianType.BANDED:
            if bandwidth is None:
                raise SparsityError(
                    "`bandwidth` must be an argument when computing a banded Jacobian"
                )

            if blocksize is not None:
                raise SparsityError("`blocksize` can not be given for a banded Jacobian")

            return Banded(bandwidth)

        case JacobianType.BLOCK_DIAGONAL:
            if blocksize is None:
                raise SparsityError(
                    "`blocksize` must be an argument when computing a block-diagonal "
                    "Jacobian"
                )

            if bandwidth is not None:
                raise SparsityError(
                    "`bandwidth` can not be given for a block-diagonal Jacobian"
                )

            return BlockDiagonal(blocksize)

        case _:
            raise SparsityError(f"unknown Jacobian sparsity type {kind!r}")
