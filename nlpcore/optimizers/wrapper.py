"""
Objective and gradient wrapper utilities.

Backends hand these to the underlying library instead of the raw functions so
that evaluation counts are tracked the same way for every backend and end up
in the result statistics.
"""

import logging
import numpy as np

from ..function import Function

logger = logging.getLogger(__name__)


class ObjectiveWrapper:
    """
    Wraps a single-output Function as a scalar callable with evaluation counting.

    Usage:
        wrapper = ObjectiveWrapper(problem.objective)
        result = minimize(wrapper, x0, ...)
        print(f"Evaluations: {wrapper.n_evals}")
    """

    def __init__(self, function: Function):
        """
        Initialize objective wrapper.

        Args:
            function: Objective with output_size == 1
        """
        self.function = function
        self.n_evals = 0

    def __call__(self, x: np.ndarray) -> float:
        self.n_evals += 1
        return float(self.function.compute(x)[0])


class GradientWrapper:
    """
    Wraps the gradient of a single-output Function with evaluation counting.

    Usage:
        grad_wrapper = GradientWrapper(problem.objective)
        result = minimize(obj_fn, jac=grad_wrapper, ...)
        print(f"Gradient evaluations: {grad_wrapper.n_evals}")
    """

    def __init__(self, function: Function):
        self.function = function
        self.n_evals = 0

    def __call__(self, x: np.ndarray) -> np.ndarray:
        self.n_evals += 1
        return self.function.gradient(x, 0)


class ScaledConstraintWrapper:
    """
    Stacked, scaled values and Jacobian of every constraint in a problem.

    Component k of the output is scales[k] * g_k(x), matching
    Problem.constraint_bounds_arrays(scaled=True).
    """

    def __init__(self, constraints, scales: np.ndarray):
        self.constraints = list(constraints)
        self.scales = np.asarray(scales, dtype=float)
        self.n_evals = 0
        self.n_jacobian_evals = 0

    def __call__(self, x: np.ndarray) -> np.ndarray:
        self.n_evals += 1
        if not self.constraints:
            return np.zeros(0)
        values = np.concatenate([c.function.compute(x) for c in self.constraints])
        return self.scales * values

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        self.n_jacobian_evals += 1
        if not self.constraints:
            return np.zeros((0, len(x)))
        jac = np.vstack([c.function.jacobian(x) for c in self.constraints])
        return self.scales[:, np.newaxis] * jac

    def hessian(self, x: np.ndarray, weights: np.ndarray) -> np.ndarray:
        """Weighted sum of scaled component Hessians: sum_k w_k s_k H_k(x)."""
        n = len(x)
        total = np.zeros((n, n))
        k = 0
        for constraint in self.constraints:
            for i in range(constraint.size):
                weight = weights[k] * self.scales[k]
                if weight != 0.0:
                    total += weight * constraint.function.hessian(x, i)
                k += 1
        return total
