from dataclasses import dataclass

import numpy as np

import andersonmix


def assess_convergence(
    candidate: np.ndarray,
    prior: np.ndarray,
    map_value: np.ndarray,
    xtol: float,
    ftol: float,
) -> tuple[bool, bool, bool]:
    """Check the step and the residual of a fixed-point iteration.

    Args:
        candidate (np.ndarray): proposed next iterate
        prior (np.ndarray): iterate to measure the step against
        map_value (np.ndarray): residual f at the current iterate
        xtol (float): tolerance for the infinity norm of the step
        ftol (float): tolerance for the infinity norm of the residual

    Returns:
        tuple: x_converged, f_converged, converged

    """
    x_converged = False
    f_converged = False

    # A non-finite prior carries no step information
    if np.all(np.isfinite(prior)):
        x_converged = bool(np.max(np.abs(candidate - prior)) <= xtol)

    f_converged = bool(np.max(np.abs(map_value)) <= ftol)

    return x_converged, f_converged, x_converged or f_converged


@dataclass
class FixedPointConvergenceCriteria:
    """Class to store and check the convergence criteria of a fixed-point iteration."""

    num_iter: int = 1000
    """Maximum number of iterations."""
    xtol: float = 0.0
    """Tolerance for the step (infinity norm)."""
    ftol: float = 1e-8
    """Tolerance for the residual (infinity norm)."""

    def assess(
        self, candidate: np.ndarray, prior: np.ndarray, map_value: np.ndarray
    ) -> tuple[bool, bool, bool]:
        """Check step and residual against the stored tolerances."""
        return assess_convergence(candidate, prior, map_value, self.xtol, self.ftol)

    def check_convergence_status(
        self, iter: int, converged: bool, finished: bool = False
    ) -> andersonmix.ConvergenceStatus:
        """Translate a verdict after ``iter`` iterations into a status.

        An iteration which has ``finished``, e.g. after a numerical breakdown, is
        exhausted unless converged, regardless of the remaining budget.

        """
        if converged:
            return andersonmix.ConvergenceStatus.CONVERGED
        elif finished or iter >= self.num_iter:
            return andersonmix.ConvergenceStatus.EXHAUSTED
        else:
            return andersonmix.ConvergenceStatus.RUNNING
