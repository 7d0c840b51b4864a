"""
Finite-difference derivatives and derivative checks.

FiniteDifferenceGradient lifts a value-only function to the differentiable
tier. check_gradient / check_hessian compare analytic derivatives against
central differences; nothing in the solve path calls them, since inconsistent
derivatives are the function author's responsibility.
"""

from dataclasses import dataclass
import logging
import numpy as np

from .errors import BadGradient
from .function import DifferentiableFunction, Function, FunctionTier

logger = logging.getLogger(__name__)


class FiniteDifferenceGradient(DifferentiableFunction):
    """
    Differentiable view of any function using central differences.

    Costs 2 * input_size evaluations of the wrapped function per gradient.
    """

    def __init__(self, function: Function, epsilon: float = 1e-8):
        super().__init__(
            function.input_size,
            function.output_size,
            f"{function.name} (finite differences)",
        )
        self.function = function
        self.epsilon = epsilon

    def _compute(self, x):
        return self.function.compute(x)

    def _gradient(self, x, index):
        return _central_difference(lambda y: self.function.compute(y)[index], x, self.epsilon)


@dataclass(frozen=True)
class GradientCheck:
    """Outcome of comparing an analytic derivative with finite differences."""

    function_name: str
    index: int
    max_error: float
    tolerance: float
    analytic: np.ndarray
    approximate: np.ndarray

    @property
    def passed(self) -> bool:
        return self.max_error <= self.tolerance


def _central_difference(fn, x: np.ndarray, epsilon: float) -> np.ndarray:
    """Central-difference derivative of fn at x, one column per variable."""
    x = np.array(x, dtype=float)
    columns = []
    for j in range(x.shape[0]):
        step = np.zeros_like(x)
        step[j] = epsilon
        columns.append((np.asarray(fn(x + step)) - np.asarray(fn(x - step))) / (2 * epsilon))
    return np.array(columns)


def _relative_error(analytic: np.ndarray, approximate: np.ndarray) -> float:
    if analytic.size == 0:
        return 0.0
    scale = max(1.0, float(np.max(np.abs(analytic))))
    return float(np.max(np.abs(analytic - approximate))) / scale


def check_gradient(
    function: Function,
    x,
    index: int = 0,
    epsilon: float = 1e-6,
    tolerance: float = 1e-6,
) -> GradientCheck:
    """
    Compare gradient(x, index) with a central difference of compute.

    The error is relative to max(1, |largest analytic entry|).
    """
    analytic = function.gradient(x, index)
    approximate = _central_difference(lambda y: function.compute(y)[index], x, epsilon)
    check = GradientCheck(
        function.name, index, _relative_error(analytic, approximate), tolerance, analytic, approximate
    )
    logger.debug(f"Gradient check '{function.name}'[{index}]: error={check.max_error:.3e}")
    return check


def check_hessian(
    function: Function,
    x,
    index: int = 0,
    epsilon: float = 1e-6,
    tolerance: float = 1e-6,
) -> GradientCheck:
    """Compare hessian(x, index) with a central difference of gradient."""
    analytic = function.hessian(x, index)
    # Row j of the difference is d(gradient)/dx_j, i.e. column j of the Hessian
    approximate = _central_difference(lambda y: function.gradient(y, index), x, epsilon).T
    check = GradientCheck(
        function.name, index, _relative_error(analytic, approximate), tolerance, analytic, approximate
    )
    logger.debug(f"Hessian check '{function.name}'[{index}]: error={check.max_error:.3e}")
    return check


def assert_gradient(function: Function, x, epsilon: float = 1e-6, tolerance: float = 1e-6) -> None:
    """
    Check every output component's derivatives, raising BadGradient on failure.

    Hessians are checked too when the function is twice differentiable.
    """
    checks = [
        check_gradient(function, x, i, epsilon, tolerance) for i in range(function.output_size)
    ]
    if function.supports(FunctionTier.TWICE_DIFFERENTIABLE):
        checks += [
            check_hessian(function, x, i, epsilon, tolerance) for i in range(function.output_size)
        ]
    for check in checks:
        if not check.passed:
            raise BadGradient(
                f"Derivative of '{check.function_name}'[{check.index}] is off by "
                f"{check.max_error:.3e} (tolerance {check.tolerance:.1e})"
            )
