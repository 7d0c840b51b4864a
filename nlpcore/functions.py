"""
Ready-made functions: numeric linear/quadratic forms and callable wrappers.

Most users bring their own closed-form functions. make_function() is the
short path: hand it plain callables and it picks the matching tier.

Example:
    f = make_function(
        lambda x: x[0] ** 2 + x[1] ** 2,
        gradient=lambda x: 2 * x,
        input_size=2,
        name="sphere",
    )
    f.tier  # FunctionTier.DIFFERENTIABLE
"""

from typing import Callable, Optional
import numpy as np

from .errors import DimensionMismatch
from .function import (
    DifferentiableFunction,
    Function,
    TwiceDifferentiableFunction,
)


class NumericLinearFunction(TwiceDifferentiableFunction):
    """f(x) = A x + b, with A of shape (m, n)."""

    def __init__(self, A, b=None, name: str = ""):
        A = np.atleast_2d(np.array(A, dtype=float))
        m, n = A.shape
        b = np.zeros(m) if b is None else np.atleast_1d(np.array(b, dtype=float))
        if b.shape != (m,):
            raise DimensionMismatch("offset of linear function", m, b.size)
        super().__init__(n, m, name or "linear")
        A.setflags(write=False)
        b.setflags(write=False)
        self.A = A
        self.b = b

    def _compute(self, x):
        return self.A @ x + self.b

    def _gradient(self, x, index):
        return self.A[index]

    def _hessian(self, x, index):
        return np.zeros((self.input_size, self.input_size))


class NumericQuadraticFunction(TwiceDifferentiableFunction):
    """f(x) = 0.5 x'Ax + b'x + c, with A symmetric."""

    def __init__(self, A, b=None, c: float = 0.0, name: str = ""):
        A = np.atleast_2d(np.array(A, dtype=float))
        n = A.shape[0]
        if A.shape != (n, n):
            raise DimensionMismatch("quadratic matrix columns", n, A.shape[1])
        if not np.allclose(A, A.T):
            raise ValueError("Quadratic matrix must be symmetric")
        b = np.zeros(n) if b is None else np.atleast_1d(np.array(b, dtype=float))
        if b.shape != (n,):
            raise DimensionMismatch("linear term of quadratic function", n, b.size)
        super().__init__(n, 1, name or "quadratic")
        A.setflags(write=False)
        b.setflags(write=False)
        self.A = A
        self.b = b
        self.c = float(c)

    def _compute(self, x):
        return 0.5 * x @ self.A @ x + self.b @ x + self.c

    def _gradient(self, x, index):
        return self.A @ x + self.b

    def _hessian(self, x, index):
        return self.A.copy()


class CallableFunction(Function):
    """Value-only function backed by a plain callable."""

    def __init__(self, compute: Callable, input_size: int, output_size: int = 1, name: str = ""):
        super().__init__(input_size, output_size, name or getattr(compute, "__name__", ""))
        self._compute_fn = compute

    def _compute(self, x):
        return self._compute_fn(x)


class CallableDifferentiableFunction(DifferentiableFunction):
    """
    Differentiable function backed by callables.

    The gradient callable receives (x) for single-output functions and
    (x, index) otherwise.
    """

    def __init__(
        self,
        compute: Callable,
        gradient: Callable,
        input_size: int,
        output_size: int = 1,
        name: str = "",
    ):
        super().__init__(input_size, output_size, name or getattr(compute, "__name__", ""))
        self._compute_fn = compute
        self._gradient_fn = gradient

    def _compute(self, x):
        return self._compute_fn(x)

    def _gradient(self, x, index):
        if self.output_size == 1:
            return self._gradient_fn(x)
        return self._gradient_fn(x, index)


class CallableTwiceDifferentiableFunction(TwiceDifferentiableFunction):
    """Twice-differentiable function backed by callables (same calling rules)."""

    def __init__(
        self,
        compute: Callable,
        gradient: Callable,
        hessian: Callable,
        input_size: int,
        output_size: int = 1,
        name: str = "",
    ):
        super().__init__(input_size, output_size, name or getattr(compute, "__name__", ""))
        self._compute_fn = compute
        self._gradient_fn = gradient
        self._hessian_fn = hessian

    def _compute(self, x):
        return self._compute_fn(x)

    def _gradient(self, x, index):
        if self.output_size == 1:
            return self._gradient_fn(x)
        return self._gradient_fn(x, index)

    def _hessian(self, x, index):
        if self.output_size == 1:
            return self._hessian_fn(x)
        return self._hessian_fn(x, index)


def make_function(
    compute: Callable,
    gradient: Optional[Callable] = None,
    hessian: Optional[Callable] = None,
    *,
    input_size: int,
    output_size: int = 1,
    name: str = "",
) -> Function:
    """
    Build a function of the highest tier the supplied callables allow.

    Args:
        compute: x -> value (scalar or vector of length output_size)
        gradient: Optional x -> gradient (or (x, index) when output_size > 1)
        hessian: Optional x -> Hessian (same calling rule); needs gradient
        input_size: Number of variables
        output_size: Number of output components
        name: Display name

    Returns:
        CallableFunction, CallableDifferentiableFunction or
        CallableTwiceDifferentiableFunction
    """
    if hessian is not None and gradient is None:
        raise ValueError("A hessian callable requires a gradient callable")
    if hessian is not None:
        return CallableTwiceDifferentiableFunction(
            compute, gradient, hessian, input_size, output_size, name
        )
    if gradient is not None:
        return CallableDifferentiableFunction(compute, gradient, input_size, output_size, name)
    return CallableFunction(compute, input_size, output_size, name)
