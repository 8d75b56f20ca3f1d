from dataclasses import dataclass, field

import numpy as np


@dataclass
class SolverState:
    """Diagnostics of a single iteration."""

    iteration: int
    fnorm: float
    """Infinity norm of the residual."""
    stepnorm: float
    """Squared Euclidean norm of the last step, NaN in the first iteration."""
    metadata: dict = field(default_factory=dict)

    def __str__(self) -> str:
        line = f"{self.iteration:6d} \t| {self.fnorm:14e} \t| {self.stepnorm:14e}"
        for key, value in self.metadata.items():
            line += f"\n * {key}: {value}"
        return line


@dataclass
class SolverTrace:
    """Class to store the convergence history of a fixed-point iteration."""

    states: list[SolverState] = field(default_factory=list)

    def append(self, state: SolverState) -> None:
        self.states.append(state)

    def update(
        self,
        iteration: int,
        fnorm: float,
        stepnorm: float,
        metadata: dict,
        store_trace: bool,
        show_trace: bool,
    ) -> None:
        """Record the state of an iteration.

        Args:
            iteration (int): iteration count, starting at 1
            fnorm (float): infinity norm of the residual
            stepnorm (float): squared norm of the step
            metadata (dict): further snapshots, e.g. the iterate
            store_trace (bool): whether to keep the state
            show_trace (bool): whether to print the state

        """
        state = SolverState(iteration, float(fnorm), float(stepnorm), metadata)
        if store_trace:
            self.append(state)
        if show_trace:
            if iteration == 1:
                print(
                    """Iter \t| """
                    """f(x) inf-norm \t| """
                    """Step 2-norm"""
                    """\n"""
                    """-------\t|"""
                    """-------------------|"""
                    """-------------------"""
                )
            print(state)

    def __len__(self) -> int:
        return len(self.states)

    def __getitem__(self, index: int) -> SolverState:
        return self.states[index]

    def __iter__(self):
        return iter(self.states)

    @property
    def fnorm(self) -> np.ndarray:
        return np.array([state.fnorm for state in self.states])

    @property
    def stepnorm(self) -> np.ndarray:
        return np.array([state.stepnorm for state in self.states])

    def as_dict(self) -> dict:
        return {
            "iteration": [state.iteration for state in self.states],
            "fnorm": [state.fnorm for state in self.states],
            "stepnorm": [state.stepnorm for state in self.states],
            "metadata": [state.metadata for state in self.states],
        }
