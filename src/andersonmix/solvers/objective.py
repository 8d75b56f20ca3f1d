"""Wrapper of the residual function f whose root is sought by fixed-point iteration."""

from __future__ import annotations

from typing import Callable, Optional

import numpy as np


class Objective:
    """Residual function f, evaluated on flat vectors, counting its calls.

    The wrapped function is called with arrays of the shape of the initial point,
    so n-dimensional problems can be written naturally. Internally all vectors are
    flat float arrays.

    """

    def __init__(
        self,
        f: Callable,
        initial_x: Optional[np.ndarray] = None,
        inplace: bool = False,
    ) -> None:
        """Initialize objective.

        Args:
            f (callable): residual function. If ``inplace`` is False, ``f(x)``
                returns the residual; otherwise ``f(fx, x)`` writes it into ``fx``.
            initial_x (array, optional): point fixing the shape and dtype of the
                problem; if None, set on the first evaluation.
            inplace (bool): calling convention of ``f``.

        """
        self.f = f
        self.inplace = inplace

        self.f_calls = 0
        """Number of evaluations of f."""

        self.x_f: Optional[np.ndarray] = None
        """Last point f was evaluated at (flat)."""

        self.shape: Optional[tuple[int, ...]] = None
        """Shape in which f expects its argument."""

        if initial_x is not None:
            self._set_shape(initial_x)
            self.x_f = np.asarray(initial_x, dtype=float).ravel().copy()

    def _set_shape(self, x: np.ndarray) -> None:
        self.shape = np.shape(x)

    @property
    def dimension(self) -> int:
        """Number of unknowns."""
        if self.shape is None:
            raise ValueError("Dimension unknown before first evaluation.")
        return int(np.prod(self.shape))

    def value_into(self, fx: np.ndarray, x: np.ndarray) -> np.ndarray:
        """Evaluate f at x and store the result in fx.

        Args:
            fx (np.ndarray): flat output array
            x (np.ndarray): flat point

        Returns:
            np.ndarray: fx

        """
        if self.shape is None:
            self._set_shape(x)

        self.f_calls += 1
        self.x_f = np.array(x, dtype=float, copy=True).ravel()

        x_shaped = np.reshape(x, self.shape).copy()
        if self.inplace:
            fx_shaped = np.empty(self.shape, dtype=float)
            self.f(fx_shaped, x_shaped)
        else:
            fx_shaped = np.asarray(self.f(x_shaped), dtype=float)

        if fx_shaped.size != fx.size:
            raise ValueError(
                f"Residual of size {fx_shaped.size} does not match size {fx.size}."
            )
        fx[:] = np.ravel(fx_shaped)
        return fx

    def value(self, x: np.ndarray) -> np.ndarray:
        """Evaluate f at x.

        Args:
            x (np.ndarray): point

        Returns:
            np.ndarray: flat residual

        """
        fx = np.empty(np.size(x), dtype=float)
        return self.value_into(fx, np.ravel(x))

    def reset_calls(self) -> None:
        """Reset the evaluation counter."""
        self.f_calls = 0
