from enum import StrEnum


class ConvergenceStatus(StrEnum):
    """States of a fixed-point iteration.

    An iteration starts RUNNING and ends either CONVERGED, as soon as the step or the
    residual is below its tolerance, or EXHAUSTED, when the iteration budget is used
    up (or the iteration broke down) without convergence.

    """

    RUNNING = "running"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"
