"""Example comparing plain fixed-point (Picard) iteration with Anderson acceleration.

The nonlinear system is the discretized 1d boundary value problem

    -u'' + u^3 = 1 on (0, 1),  u(0) = u(1) = 0,

reformulated as the damped fixed-point iteration u <- u + beta * f(u) with
f(u) = 1 - A u - u^3, where A is the finite difference Laplacian.

"""

import logging

import numpy as np
import scipy.sparse as sps

import andersonmix

logging.basicConfig(level=logging.INFO)

# Discretization
num_cells = 20
h = 1.0 / (num_cells + 1)
laplace = sps.diags(
    [-np.ones(num_cells - 1), 2 * np.ones(num_cells), -np.ones(num_cells - 1)],
    [-1, 0, 1],
) / h**2


def residual(u: np.ndarray) -> np.ndarray:
    return 1.0 - laplace @ u - u**3


# Stability of the explicit iteration requires beta below 2 / lambda_max(A)
beta = 0.9 * h**2 / 2
u0 = np.zeros(num_cells)

options = {"num_iter": 20000, "ftol": 1e-8, "beta": beta}

# Plain fixed-point iteration
picard = andersonmix.fixedpoint(residual, u0, {**options, "depth": 0})
print(picard)

# Anderson acceleration
accelerated = andersonmix.fixedpoint(
    residual, u0, {**options, "depth": 10, "store_trace": True}
)
print(accelerated)

assert accelerated.converged
assert accelerated.iterations < picard.iterations
print(
    f"Anderson acceleration used {accelerated.iterations} instead of "
    f"{picard.iterations} iterations."
)
