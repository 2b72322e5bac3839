"""
##################################################
Automatic differentiation (:mod:`fwdiff.autodiff`)
##################################################

.. currentmodule:: fwdiff.autodiff

This module provides forward-mode automatic differentiation. Jacobians with a
banded or block-diagonal structure are computed with fewer seed directions than
variables.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    derivative
    gradient
    jacobian

Number system containing infinitesimals
---------------------------------------

.. autosummary::
    :toctree: generated/

    Dual

Jacobian sparsity
-----------------

.. autosummary::
    :toctree: generated/

    Sparsity
    Dense
    Banded
    BlockDiagonal
    JacobianType
    JacobianWorkMemory
    make_sparsity

Exceptions
----------

.. autosummary::
    :toctree: generated/

    AutodiffError
    ShapeMismatchError
    SparsityError
    WorkMemoryError

"""

from .autodiff import derivative, gradient
from .dual import Dual
from .errors import AutodiffError, ShapeMismatchError, SparsityError, WorkMemoryError
from .jacobian import jacobian
from .sparsity import (
    BANDED,
    BLOCK_DIAGONAL,
    DENSE,
    Banded,
    BlockDiagonal,
    Dense,
    JacobianType,
    Sparsity,
    make_sparsity,
)
from .workmemory import JacobianWorkMemory

__all__ = [
    "derivative",
    "gradient",
    "jacobian",
    "Dual",
    "AutodiffError",
    "ShapeMismatchError",
    "SparsityError",
    "WorkMemoryError",
    "BANDED",
    "BLOCK_DIAGONAL",
    "DENSE",
    "Banded",
    "BlockDiagonal",
    "Dense",
    "JacobianType",
    "Sparsity",
    "make_sparsity",
    "JacobianWorkMemory",
]
