"""Root directory for andersonmix.

isort:skip_file

"""

# Utilities
from andersonmix.utils.convergence_status import *
from andersonmix.utils.timings import *
from andersonmix.utils.linear_solvers.least_squares import *

# Collaborators of the fixed-point iteration
from andersonmix.solvers.objective import *
from andersonmix.solvers.convergence_criteria import *
from andersonmix.solvers.trace import *
from andersonmix.solvers.results import *

# Anderson acceleration (requires all of the above)
from andersonmix.solvers.anderson import *
from andersonmix.solvers.fixed_point import *
