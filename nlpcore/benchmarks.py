"""
Benchmark problems with closed-form derivatives.

Hock-Schittkowski problem 71:

    minimize    x0 * x3 * (x0 + x1 + x2) + x2
    subject to  x0 * x1 * x2 * x3 >= 25
                x0^2 + x1^2 + x2^2 + x3^2 = 40
                1 <= x_i <= 5

Starting point (1, 5, 5, 1); optimum f* = 17.0140173 at
x* = (1, 4.7429994, 3.8211503, 1.3794082).

Rosenbrock is included for unconstrained and bound-constrained checks.
"""

import numpy as np

from .function import TwiceDifferentiableFunction
from .interval import Interval
from .problem import Problem

HS71_OPTIMUM = 17.0140173
HS71_SOLUTION = np.array([1.0, 4.7429994, 3.8211503, 1.3794082])
HS71_START = np.array([1.0, 5.0, 5.0, 1.0])


class HS71Objective(TwiceDifferentiableFunction):
    def __init__(self):
        super().__init__(4, 1, "x0 * x3 * (x0 + x1 + x2) + x2")

    def _compute(self, x):
        return x[0] * x[3] * (x[0] + x[1] + x[2]) + x[2]

    def _gradient(self, x, index):
        return [
            x[0] * x[3] + x[3] * (x[0] + x[1] + x[2]),
            x[0] * x[3],
            x[0] * x[3] + 1.0,
            x[0] * (x[0] + x[1] + x[2]),
        ]

    def _hessian(self, x, index):
        return [
            [2 * x[3], x[3], x[3], 2 * x[0] + x[1] + x[2]],
            [x[3], 0.0, 0.0, x[0]],
            [x[3], 0.0, 0.0, x[0]],
            [2 * x[0] + x[1] + x[2], x[0], x[0], 0.0],
        ]


class HS71Product(TwiceDifferentiableFunction):
    def __init__(self):
        super().__init__(4, 1, "x0 * x1 * x2 * x3")

    def _compute(self, x):
        return x[0] * x[1] * x[2] * x[3]

    def _gradient(self, x, index):
        return [
            x[1] * x[2] * x[3],
            x[0] * x[2] * x[3],
            x[0] * x[1] * x[3],
            x[0] * x[1] * x[2],
        ]

    def _hessian(self, x, index):
        return [
            [0.0, x[2] * x[3], x[1] * x[3], x[1] * x[2]],
            [x[2] * x[3], 0.0, x[0] * x[3], x[0] * x[2]],
            [x[1] * x[3], x[0] * x[3], 0.0, x[0] * x[1]],
            [x[1] * x[2], x[0] * x[2], x[0] * x[1], 0.0],
        ]


class HS71SumOfSquares(TwiceDifferentiableFunction):
    def __init__(self):
        super().__init__(4, 1, "x0^2 + x1^2 + x2^2 + x3^2")

    def _compute(self, x):
        return x @ x

    def _gradient(self, x, index):
        return 2 * x

    def _hessian(self, x, index):
        return 2 * np.eye(4)


def hs71_problem() -> Problem:
    """Fresh, unfrozen HS71 problem."""
    problem = Problem(HS71Objective())
    problem.set_all_argument_bounds(Interval(1.0, 5.0))
    problem.set_starting_point(HS71_START)
    problem.add_constraint(HS71Product(), [Interval.lower_bounded(25.0)], [1.0])
    problem.add_constraint(HS71SumOfSquares(), [Interval.equality(40.0)], [1.0])
    return problem


class Rosenbrock(TwiceDifferentiableFunction):
    """Chained Rosenbrock function, minimum 0 at (1, ..., 1)."""

    def __init__(self, dimension: int = 2):
        if dimension < 2:
            raise ValueError("Rosenbrock function requires at least 2 dimensions")
        super().__init__(dimension, 1, "rosenbrock")

    def _compute(self, x):
        return np.sum(100.0 * (x[1:] - x[:-1] ** 2) ** 2 + (1.0 - x[:-1]) ** 2)

    def _gradient(self, x, index):
        grad = np.zeros_like(x)
        grad[:-1] = -400.0 * x[:-1] * (x[1:] - x[:-1] ** 2) - 2.0 * (1.0 - x[:-1])
        grad[1:] += 200.0 * (x[1:] - x[:-1] ** 2)
        return grad

    def _hessian(self, x, index):
        n = self.input_size
        hess = np.zeros((n, n))
        for i in range(n - 1):
            hess[i, i] += 1200.0 * x[i] ** 2 - 400.0 * x[i + 1] + 2.0
            hess[i, i + 1] = -400.0 * x[i]
            hess[i + 1, i] = -400.0 * x[i]
            hess[i + 1, i + 1] += 200.0
        return hess
