from .autodiff import (
    Banded,
    BlockDiagonal,
    Dense,
    Dual,
    JacobianWorkMemory,
    derivative,
    gradient,
    jacobian,
)
from .function import cos, exp, log, pow, sin, sqrt

__all__ = [
    "cos",
    "exp",
    "log",
    "pow",
    "sin",
    "sqrt",
    "Banded",
    "BlockDiagonal",
    "Dense",
    "Dual",
    "JacobianWorkMemory",
    "derivative",
    "gradient",
    "jacobian",
]
