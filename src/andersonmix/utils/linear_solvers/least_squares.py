"""Module containing least-squares solvers for the dense, tall and thin problem

    min_alpha || matrix @ alpha - vector ||_2

arising in the mixing step of Anderson acceleration. The solvers are passed to the
driver as strategies, so the mixing can be regularized without touching the loop.

"""

from __future__ import annotations

import abc
from typing import Optional

import numpy as np
import scipy.linalg


class LeastSquaresSolver:
    """Abstract base class for dense least-squares solvers."""

    @abc.abstractmethod
    def __call__(self, matrix: np.ndarray, vector: np.ndarray) -> np.ndarray:
        """Main method of the solver - solve the least-squares problem.

        Args:
            matrix (np.ndarray): N x k matrix
            vector (np.ndarray): right hand side of length N

        Returns:
            np.ndarray: coefficients of length k

        """
        pass


class LstsqSolver(LeastSquaresSolver):
    """Least-squares solution based on scipy's lstsq.

    On rank deficiency the minimum-norm solution is returned.

    """

    def __init__(
        self, cond: Optional[float] = None, lapack_driver: Optional[str] = None
    ) -> None:
        self.cond = cond
        """Cut-off ratio for small singular values (None: machine precision)."""
        self.lapack_driver = lapack_driver
        """LAPACK driver used by scipy, one of 'gelsd', 'gelsy', 'gelss'."""

    def __call__(self, matrix: np.ndarray, vector: np.ndarray) -> np.ndarray:
        solution, _, _, _ = scipy.linalg.lstsq(
            matrix, vector, cond=self.cond, lapack_driver=self.lapack_driver
        )
        return solution


class RegularizedLstsqSolver(LeastSquaresSolver):
    """Tikhonov regularized least squares via the normal equations:

        (matrix^T matrix + lam * I) alpha = matrix^T vector

    """

    def __init__(self, lam: float = 1e-8) -> None:
        if lam < 0:
            raise ValueError(f"Regularization must be non-negative, got {lam}.")
        self.lam = lam
        """Regularization parameter."""

    def __call__(self, matrix: np.ndarray, vector: np.ndarray) -> np.ndarray:
        k = matrix.shape[1]
        normal_matrix = matrix.T @ matrix + self.lam * np.eye(k)
        return scipy.linalg.solve(normal_matrix, matrix.T @ vector, assume_a="sym")


def make_least_squares_solver(method: str = "lstsq", **kwargs) -> LeastSquaresSolver:
    """Factory for least-squares solvers.

    Args:
        method (str): "lstsq" or "regularized"
        **kwargs: passed to the constructor of the solver

    Returns:
        LeastSquaresSolver: solver

    """
    if method == "lstsq":
        return LstsqSolver(**kwargs)
    elif method == "regularized":
        return RegularizedLstsqSolver(**kwargs)
    else:
        raise ValueError(f"Least-squares method {method} not supported.")
