"""Fixed-point solvers. The core is Anderson acceleration of the damped iteration
x <- x + beta * f(x), together with the objective wrapper, the convergence
criteria, the trace and the result record it works with.

"""
