import operator

import numpy as np
import numpy.typing as npt

from fwdiff.autodiff.dual import Dual
from fwdiff.autodiff.errors import ShapeMismatchError, SparsityError
from fwdiff.autodiff.sparsity import Dense, JacobianType, Sparsity, make_sparsity


class JacobianWorkMemory:
    """Work memory for :func:`jacobian`.

    The memory holds the seeded input duals and the output duals of one evaluation.
    Creating it once and passing it to repeated :func:`jacobian` calls avoids
    reallocating the duals every time.

    Parameters
    ----------
    n : int
        Number of variables.
    sparsity : Sparsity, optional
        Sparsity pattern of the Jacobian. Defaults to :class:`Dense`.

    Attributes
    ----------
    inputs : list[Dual]
        Duals passed to the differentiated function.
    outputs : list[Dual]
        Duals written by the differentiated function.

    Raises
    ------
    ShapeMismatchError
        If `n` is less than one.
    SparsityError
        If `sparsity` is not applicable to `n` variables.

    Warnings
    --------
    The memory must not be shared between concurrent calls. After each call it
    contains the values of the last evaluation.

    Examples
    --------
    >>> from fwdiff.autodiff import Banded
    >>> wrk = JacobianWorkMemory(5, Banded(3))
    >>> wrk.seed_width
    3
    >>> [wrk.seed_slot(j) for j in range(5)]
    [0, 1, 2, 0, 1]
    """

    __slots__ = ("inputs", "outputs", "_owned", "_sparsity")
    inputs: list[Dual]
    outputs: list[Dual]
    _owned: tuple[Dual, ...]
    _sparsity: Sparsity

    def __init__(self, n: int, sparsity: Sparsity | None = None):
        if sparsity is None:
            sparsity = Dense()

        if not isinstance(sparsity, Sparsity):
            raise SparsityError(f"unknown Jacobian sparsity type {sparsity!r}")

        n = operator.index(n)

        if n < 1:
            raise ShapeMismatchError("the number of variables must be positive")

        sparsity.validate(n)
        width = sparsity.seed_width(n)
        self._sparsity = sparsity
        self.inputs = [Dual.constant(0.0, width) for _ in range(n)]
        self._owned = tuple(Dual.constant(0.0, width) for _ in range(n))
        self.outputs = list(self._owned)

    @classmethod
    def create(
        cls,
        n: int,
        kind: Sparsity | JacobianType | str = JacobianType.DENSE,
        *,
        bandwidth: int | None = None,
        blocksize: int | None = None,
    ) -> "JacobianWorkMemory":
        """Create work memory from a sparsity type and its parameter.

        The arguments `kind`, `bandwidth` and `blocksize` are interpreted as in
        :func:`make_sparsity`.
        """
        return cls(n, make_sparsity(kind, bandwidth=bandwidth, blocksize=blocksize))

    @property
    def sparsity(self) -> Sparsity:
        """Sparsity pattern the memory was created for."""
        return self._sparsity

    @property
    def n(self) -> int:
        """Number of variables."""
        return len(self.inputs)

    @property
    def seed_width(self) -> int:
        """Number of seed directions carried by each dual."""
        return self._sparsity.seed_width(len(self.inputs))

    def seed_slot(self, j: int) -> int:
        """Return the seed direction assigned to the `j`-th variable."""
        return j % self.seed_width

    def seed(self, x: npt.ArrayLike) -> list[Dual]:
        """Load `x` into the input duals and seed their derivatives.

        `outputs` is first refilled with the output duals allocated by the memory,
        all reset to zero. Duals the differentiated function stored there are
        dropped from the list but never modified. Each input dual gets the value of
        the corresponding entry of `x`, and the `j`-th one is seeded with a unit
        derivative along :meth:`seed_slot` ``(j)``.

        Returns
        -------
        list[Dual]
            The seeded input duals.
        """
        x = np.asarray(x, dtype=np.float64)

        if x.shape != (len(self.inputs),):
            raise ShapeMismatchError(
                f"input `x` must have shape ({len(self.inputs)},), got {x.shape}"
            )

        width = self.seed_width
        self.outputs[:] = self._owned

        for y in self._owned:
            y.real = 0.0
            y.imag[:] = 0.0

        for j, (xj, dual) in enumerate(zip(x, self.inputs)):
            dual.real = float(xj)
            dual.imag[:] = 0.0
            dual.imag[j % width] = 1.0

        return self.inputs

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n={self.n}, sparsity={self._sparsity!r})"
