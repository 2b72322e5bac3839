"""
#############################
Typing (:mod:`fwdiff.typing`)
#############################

This module provides the protocol shared by floats and
:class:`~fwdiff.autodiff.Dual`, i.e. the operations a differentiated function may
apply to its arguments.

.. autoclass:: ComparableScalar
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self


class ComparableScalar(Protocol):
    """Protocol for numbers a differentiated function can be written against.

    Besides arithmetic with floats, the ordering operators and :func:`abs` are
    required so that piecewise functions such as ``x if x > 0 else -x`` can be
    evaluated on duals. Equality is left to :class:`object`.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: Self | float) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: float) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: float) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: float) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: float) -> Self: ...

    @abstractmethod
    def __rpow__(self, lhs: float) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __abs__(self) -> Self: ...

    @abstractmethod
    def __lt__(self, rhs: Self | float) -> bool: ...

    @abstractmethod
    def __le__(self, rhs: Self | float) -> bool: ...

    @abstractmethod
    def __gt__(self, rhs: Self | float) -> bool: ...

    @abstractmethod
    def __ge__(self, rhs: Self | float) -> bool: ...
