"""Utilities shared by the solvers: status flags, timing and dense linear algebra.

"""
