class AutodiffError(ValueError):
    """Error raised by :mod:`fwdiff.autodiff` functions."""


class ShapeMismatchError(AutodiffError):
    """Error raised when an input or output array does not have the required shape."""


class SparsityError(AutodiffError):
    """Error raised when a Jacobian sparsity type or its parameters are invalid."""


class WorkMemoryError(AutodiffError):
    """Error raised when work memory does not match the requested computation."""
