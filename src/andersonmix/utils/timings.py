"""Wall-clock timing of solver entry points, reported through logging."""

import logging
from functools import wraps
from time import perf_counter

logger = logging.getLogger(__name__)


def timing_decorator(func):
    """Log the run time of ``func`` at INFO level under its qualified name."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        tic = perf_counter()
        result = func(*args, **kwargs)
        elapsed = perf_counter() - tic
        logger.info(f"{func.__module__}.{func.__qualname__} took {elapsed:.3e} s")
        return result

    return wrapper
