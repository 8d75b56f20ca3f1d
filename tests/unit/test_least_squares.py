"""Unit tests for the least-squares solvers of the mixing step."""

import numpy as np
import pytest

import andersonmix


def test_lstsq_overdetermined():
    matrix = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    alpha = np.array([2.0, -1.0])
    solver = andersonmix.LstsqSolver()
    assert np.allclose(solver(matrix, matrix @ alpha), alpha)


def test_lstsq_minimum_norm():
    # Two identical columns - rank deficient
    matrix = np.array([[1.0, 1.0], [2.0, 2.0]])
    vector = np.array([2.0, 4.0])
    solution = andersonmix.LstsqSolver()(matrix, vector)
    assert np.allclose(solution, [1.0, 1.0])


def test_lstsq_zero_matrix():
    solution = andersonmix.LstsqSolver()(np.zeros((3, 2)), np.ones(3))
    assert np.allclose(solution, 0.0)


def test_regularized():
    matrix = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    alpha = np.array([2.0, -1.0])
    vector = matrix @ alpha

    unregularized = andersonmix.RegularizedLstsqSolver(lam=0.0)
    assert np.allclose(unregularized(matrix, vector), alpha)

    # Regularization shrinks the coefficients
    shrunk = andersonmix.RegularizedLstsqSolver(lam=10.0)(matrix, vector)
    assert np.linalg.norm(shrunk) < np.linalg.norm(alpha)

    with pytest.raises(ValueError):
        andersonmix.RegularizedLstsqSolver(lam=-1.0)


def test_factory():
    assert isinstance(
        andersonmix.make_least_squares_solver("lstsq"), andersonmix.LstsqSolver
    )
    solver = andersonmix.make_least_squares_solver("regularized", lam=1e-6)
    assert isinstance(solver, andersonmix.RegularizedLstsqSolver)
    assert solver.lam == 1e-6
    with pytest.raises(ValueError):
        andersonmix.make_least_squares_solver("qr")
