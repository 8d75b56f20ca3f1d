"""Options based interface to Anderson accelerated fixed-point iteration."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import numpy as np

import andersonmix

logger = logging.getLogger(__name__)

_DEFAULT_OPTIONS = {
    "num_iter": 1000,
    "xtol": 0.0,
    "ftol": 1e-8,
    "depth": 10,
    "beta": 1.0,
    "store_trace": False,
    "show_trace": False,
    "extended_trace": False,
    "inplace": False,
    "least_squares": "lstsq",
    "least_squares_options": {},
}


class FixedPointSolver:
    """Solver for f(x) = 0 by Anderson accelerated fixed-point iteration.

    Options (all optional):
        num_iter (int): maximum number of iterations, default 1000
        xtol (float): tolerance for the step, default 0
        ftol (float): tolerance for the residual, default 1e-8
        depth (int): depth m of the history, default 10; 0 for Picard iteration
        beta (float): step size in x <- x + beta * f(x), default 1
        store_trace, show_trace, extended_trace (bool): tracing, default False
        inplace (bool): whether f is called as f(fx, x), default False
        least_squares (str): "lstsq" or "regularized", default "lstsq"
        least_squares_options (dict): arguments of the least-squares solver

    The history buffer is kept between calls of :meth:`solve` and reused for
    problems of the same dimension.

    """

    def __init__(self, options: dict = {}) -> None:
        unknown = set(options) - set(_DEFAULT_OPTIONS)
        if len(unknown) > 0:
            raise ValueError(f"Unknown options {sorted(unknown)}.")
        self.options = {**_DEFAULT_OPTIONS, **options}

        self.method = andersonmix.Anderson(
            m=self.options["depth"], beta=self.options["beta"]
        )
        """Parameters of the acceleration."""

        self.convergence_criteria = andersonmix.FixedPointConvergenceCriteria(
            num_iter=self.options["num_iter"],
            xtol=self.options["xtol"],
            ftol=self.options["ftol"],
        )
        """Convergence criteria of the iteration."""

        self.least_squares = andersonmix.make_least_squares_solver(
            self.options["least_squares"], **self.options["least_squares_options"]
        )
        """Solver for the mixing coefficients."""

        self.cache: Optional[andersonmix.AndersonCache] = None
        """History buffer, allocated on first use."""

    def _fetch_cache(self, dimension: int) -> andersonmix.AndersonCache:
        if self.cache is None or self.cache.dimension != dimension:
            logger.debug(
                f"Allocate history of depth {self.method.m} for {dimension} unknowns."
            )
            self.cache = andersonmix.AndersonCache(dimension, self.method)
        return self.cache

    def solve(self, f: Callable, x0: np.ndarray) -> andersonmix.SolverResults:
        """Solve f(x) = 0.

        Args:
            f (callable): residual function
            x0 (array): initial point

        Returns:
            SolverResults: result of the iteration

        """
        x0 = np.asarray(x0, dtype=float)
        objective = andersonmix.Objective(f, x0, inplace=self.options["inplace"])
        result = andersonmix.anderson(
            objective,
            x0,
            self.convergence_criteria.xtol,
            self.convergence_criteria.ftol,
            self.convergence_criteria.num_iter,
            self.options["store_trace"],
            self.options["show_trace"],
            self.options["extended_trace"],
            self.method.m,
            self.method.beta,
            cache=self._fetch_cache(x0.size),
            least_squares=self.least_squares,
        )
        status = self.convergence_criteria.check_convergence_status(
            result.iterations, result.converged, finished=True
        )
        logger.info(f"Fixed-point solve finished with status {status}.")
        return result


def fixedpoint(
    f: Callable, x0: np.ndarray, options: dict = {}
) -> andersonmix.SolverResults:
    """Solve f(x) = 0 by Anderson accelerated fixed-point iteration.

    Args:
        f (callable): residual function
        x0 (array): initial point
        options (dict): see :class:`FixedPointSolver`

    Returns:
        SolverResults: result of the iteration

    """
    return FixedPointSolver(options).solve(f, x0)
