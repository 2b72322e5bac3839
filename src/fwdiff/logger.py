"""Contains the logger of fwdiff modules.

``fwdiff`` logs through the `logging <https://docs.python.org/3/library/logging.html>`__
standard library and never installs handlers itself. Messages are emitted at the
``DEBUG`` level: the sparsity, size and seed width of every Jacobian evaluation,
the allocation of temporary work memory, and the reason of a rejected call.

Calling applications can display them by configuring ``fwdiff.logger.fwdiff_logger``,
e.g.::

    >>> import logging
    >>> logging.basicConfig(  # doctest: +SKIP
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""

import logging

logger_name = "fwdiff"
fwdiff_logger = logging.getLogger(logger_name)
