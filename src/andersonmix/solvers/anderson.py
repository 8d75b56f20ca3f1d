"""Anderson acceleration of the fixed-point iteration x <- x + beta * f(x).

Notation follows Walker and Ni, "Anderson acceleration for fixed-point iterations",
SIAM J. Numer. Anal. 49(4), 2011, doi:10.1137/10078356X.

"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Optional

import numpy as np

import andersonmix

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anderson:
    """Parameters of Anderson acceleration."""

    m: int = 10
    """Depth of the history. If 0, plain damped fixed-point (Picard) iteration."""
    beta: float = 1.0
    """Step size of the underlying iteration x <- x + beta * f(x)."""

    def __post_init__(self) -> None:
        if self.m < 0:
            raise ValueError(f"Depth must be non-negative, got {self.m}.")

    def __str__(self) -> str:
        return f"Anderson m={self.m} beta={self.beta}"


class AndersonCache:
    """History of iterates and mapped values, plus scratch space.

    Iterates x_i and mapped values g_i = x_i + beta * f(x_i) are kept in two ring
    buffers of capacity m + 1. Slot 0 is the newest entry, slot m the oldest. The
    buffers are stored column-wise and addressed modulo the capacity, so advancing
    them does not move any data.

    A cache may be reused for several runs with the same dimension and depth; it is
    reset by :meth:`initialize`.

    """

    def __init__(self, dimension: int, method: Anderson) -> None:
        """Allocate storage.

        Args:
            dimension (int): number of unknowns N
            method (Anderson): parameters, only the depth m is used

        """
        if dimension < 1:
            raise ValueError(f"Dimension must be positive, got {dimension}.")

        self.dimension = int(dimension)
        """Number of unknowns."""
        self.depth = method.m
        """Depth of the history."""
        self.capacity = self.depth + 1
        """Number of stored (iterate, mapped value) pairs."""

        self._xs = np.zeros((self.dimension, self.capacity))
        self._gs = np.zeros((self.dimension, self.capacity))
        self._head = 0

        self.previous_iterate = np.zeros(self.dimension)
        """Iterate the step of the convergence test is measured against."""

        # Scratch space for the least-squares problem
        if self.depth > 0:
            self.residuals: Optional[np.ndarray] = np.zeros(
                (self.dimension, self.depth)
            )
            self.alphas: Optional[np.ndarray] = np.zeros(self.depth)
        else:
            self.residuals = None
            self.alphas = None

        self.fx = np.zeros(self.dimension)
        """Residual at the newest iterate."""

    def _column(self, slot: int) -> int:
        return (self._head + slot) % self.capacity

    def _columns(self, start: int, stop: int) -> list[int]:
        return [self._column(slot) for slot in range(start, stop)]

    def initialize(self, initial_x: np.ndarray) -> None:
        """Clear the history and seed the newest slot with the initial point.

        Args:
            initial_x (np.ndarray): flat initial point

        """
        self._xs.fill(0)
        self._gs.fill(0)
        self._head = 0
        self._xs[:, 0] = initial_x
        self.previous_iterate[:] = initial_x

    def iterate(self, slot: int = 0) -> np.ndarray:
        """View of the iterate in a slot, 0 being the newest."""
        return self._xs[:, self._column(slot)]

    def mapped(self, slot: int = 0) -> np.ndarray:
        """View of the mapped value in a slot, 0 being the newest.

        The newest mapped value is only available after the newest iterate has been
        evaluated and passed to :meth:`advance`; before, it holds stale data.

        """
        return self._gs[:, self._column(slot)]

    def iterate_history(self, k: int) -> np.ndarray:
        """Iterates of slots 1, ..., k as columns of an N x k array."""
        return self._xs[:, self._columns(1, k + 1)]

    def mapped_history(self, k: int) -> np.ndarray:
        """Mapped values of slots 1, ..., k as columns of an N x k array."""
        return self._gs[:, self._columns(1, k + 1)]

    def advance(self, new_iterate: np.ndarray, mapped_value: np.ndarray) -> None:
        """Push a new iterate to the front of the history.

        The oldest pair is discarded once the history is full.

        Args:
            new_iterate (np.ndarray): next iterate
            mapped_value (np.ndarray): mapped value of the current newest iterate

        """
        self._gs[:, self._column(0)] = mapped_value
        oldest = self._column(self.depth)

        # For depth > 1 the step is measured from the last iterate, otherwise from
        # the entry which is about to be overwritten.
        if self.depth > 1:
            self.previous_iterate[:] = self._xs[:, self._column(0)]
        else:
            self.previous_iterate[:] = self._xs[:, oldest]

        self._head = oldest
        self._xs[:, self._head] = new_iterate


@andersonmix.timing_decorator
def anderson(
    objective: andersonmix.Objective,
    initial_x: np.ndarray,
    xtol: float,
    ftol: float,
    iterations: int,
    store_trace: bool,
    show_trace: bool,
    extended_trace: bool,
    m: int,
    beta: float,
    cache: Optional[AndersonCache] = None,
    least_squares: Optional[andersonmix.LeastSquaresSolver] = None,
) -> andersonmix.SolverResults:
    """Find a root of f by Anderson accelerated fixed-point iteration.

    Args:
        objective (Objective): residual function f
        initial_x (array): initial point, of any shape
        xtol (float): tolerance for the infinity norm of the step
        ftol (float): tolerance for the infinity norm of f
        iterations (int): maximum number of iterations
        store_trace (bool): keep the convergence history
        show_trace (bool): print the convergence history
        extended_trace (bool): add iterate and residual to the history
        m (int): depth of the history, 0 for Picard iteration
        beta (float): step size of the underlying iteration
        cache (AndersonCache, optional): preallocated cache, reinitialized here
        least_squares (LeastSquaresSolver, optional): solver for the mixing
            coefficients; defaults to the minimum-norm solution of scipy's lstsq

    Returns:
        SolverResults: final iterate and convergence information

    """
    method = Anderson(m, beta)
    x0 = np.asarray(initial_x)
    if x0.size == 0:
        raise ValueError("Initial point is empty.")
    if iterations < 0:
        raise ValueError(
            f"Number of iterations must be non-negative, got {iterations}."
        )
    xtol = float(xtol)
    ftol = float(ftol)

    if cache is None:
        cache = AndersonCache(x0.size, method)
    elif cache.dimension != x0.size or cache.depth != m:
        raise ValueError(
            f"Cache of dimension {cache.dimension} and depth {cache.depth} does not "
            f"fit a problem of dimension {x0.size} and depth {m}."
        )
    # f is evaluated in the shape of the current initial point
    objective.shape = x0.shape
    if least_squares is None:
        least_squares = andersonmix.LstsqSolver()

    # Fixed for the whole run
    picard_iteration = cache.alphas is None

    cache.initialize(x0.ravel())
    cache.fx.fill(np.nan)
    trace = andersonmix.SolverTrace()
    tracing = store_trace or show_trace or extended_trace
    x_converged, f_converged, converged = False, False, False

    iters = 0
    for n in range(1, iterations + 1):
        iters += 1

        # Fixed-point iteration
        x = cache.iterate(0)
        objective.value_into(cache.fx, x)
        candidate = x + beta * cache.fx

        x_converged, f_converged, converged = andersonmix.assess_convergence(
            candidate, cache.previous_iterate, cache.fx, xtol, ftol
        )
        fnorm = float(np.max(np.abs(cache.fx)))

        if tracing:
            metadata = {}
            if extended_trace:
                metadata["x"] = x.copy()
                metadata["f(x)"] = cache.fx.copy()
            stepnorm = (
                float(np.sum((candidate - cache.previous_iterate) ** 2))
                if n > 1
                else np.nan
            )
            trace.update(n, fnorm, stepnorm, metadata, store_trace, show_trace)

        logger.debug(f"Iteration {n}: |f(x)|_inf = {fnorm:.6e}")

        if converged:
            break

        new_x = candidate.copy()

        if not picard_iteration:
            # Effective depth grows with the history until it reaches m
            m_eff = min(n - 1, m)
            if m_eff > 0:
                gs = cache.mapped_history(m_eff)
                xs = cache.iterate_history(m_eff)
                cache.residuals[:, :m_eff] = (gs - xs) - (candidate - x)[:, None]

                # Ill-conditioned problems are left to the solver; only a failure
                # of the solver stops the iteration.
                try:
                    cache.alphas[:m_eff] = least_squares(
                        cache.residuals[:, :m_eff], x - candidate
                    )
                except (np.linalg.LinAlgError, ValueError):
                    reason = (
                        "a failed least-squares solve"
                        if np.all(np.isfinite(cache.fx))
                        else "a non-finite residual"
                    )
                    warnings.warn(
                        f"Anderson iteration stopped in iteration {n} due to {reason}."
                    )
                    break

                new_x += (gs - candidate[:, None]) @ cache.alphas[:m_eff]

        cache.advance(new_x, candidate)

    status = (
        andersonmix.ConvergenceStatus.CONVERGED
        if converged
        else andersonmix.ConvergenceStatus.EXHAUSTED
    )
    logger.info(f"{method}: {status} after {iters} iterations.")

    # Report the newest iterate, not its mapped value
    zero = np.reshape(cache.iterate(0).copy(), x0.shape)

    return andersonmix.SolverResults(
        method=str(method),
        initial_x=x0.copy(),
        zero=zero,
        residual_norm=float(np.max(np.abs(cache.fx))),
        iterations=iters,
        x_converged=x_converged,
        xtol=xtol,
        f_converged=f_converged,
        ftol=ftol,
        trace=trace,
        f_calls=objective.f_calls,
    )
