from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

import andersonmix


@dataclass(frozen=True)
class SolverResults:
    """Outcome of a fixed-point solve."""

    method: str
    """Description of the method, including its parameters."""
    initial_x: np.ndarray
    zero: np.ndarray
    """Final iterate, same shape as the initial point."""
    residual_norm: float
    """Infinity norm of the last evaluated residual."""
    iterations: int
    x_converged: bool
    xtol: float
    f_converged: bool
    ftol: float
    trace: andersonmix.SolverTrace = field(repr=False)
    f_calls: int
    """Number of evaluations of the residual function."""

    @property
    def converged(self) -> bool:
        return self.x_converged or self.f_converged

    @property
    def status(self) -> andersonmix.ConvergenceStatus:
        if self.converged:
            return andersonmix.ConvergenceStatus.CONVERGED
        return andersonmix.ConvergenceStatus.EXHAUSTED

    def as_dict(self) -> dict:
        return {
            "method": self.method,
            "initial_x": self.initial_x,
            "zero": self.zero,
            "residual_norm": self.residual_norm,
            "iterations": self.iterations,
            "converged": self.converged,
            "x_converged": self.x_converged,
            "xtol": self.xtol,
            "f_converged": self.f_converged,
            "ftol": self.ftol,
            "convergence_history": self.trace.as_dict(),
            "f_calls": self.f_calls,
        }

    def __str__(self) -> str:
        return (
            f"""Results of solving a fixed-point problem\n"""
            f""" * Algorithm: {self.method}\n"""
            f""" * Starting Point: {self.initial_x}\n"""
            f""" * Zero: {self.zero}\n"""
            f""" * Inf-norm of residuals: {self.residual_norm:.6e}\n"""
            f""" * Iterations: {self.iterations}\n"""
            f""" * Convergence: {self.converged}\n"""
            f"""   * |x - x'| <= {self.xtol:.1e}: {self.x_converged}\n"""
            f"""   * |f(x)| <= {self.ftol:.1e}: {self.f_converged}\n"""
            f""" * Function Calls (f): {self.f_calls}"""
        )
