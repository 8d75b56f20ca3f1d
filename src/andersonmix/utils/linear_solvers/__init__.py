"""Dense least-squares solvers used in the mixing step of Anderson acceleration.

"""
