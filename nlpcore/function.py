"""
Vector-valued functions with capability tiers.

A function maps R^n -> R^m and declares how much it can tell a solver:

    FUNCTION              compute(x)
    DIFFERENTIABLE        + gradient(x, i), jacobian(x)
    TWICE_DIFFERENTIABLE  + hessian(x, i)

Subclasses implement the private hooks (_compute, _gradient, _hessian); the
public methods check dimensions, indices and tiers before calling them, so
implementations may assume well-formed input.

Example:
    class Square(TwiceDifferentiableFunction):
        def __init__(self):
            super().__init__(1, 1, "x^2")

        def _compute(self, x):
            return [x[0] ** 2]

        def _gradient(self, x, index):
            return [2 * x[0]]

        def _hessian(self, x, index):
            return [[2.0]]
"""

from abc import ABC, abstractmethod
from enum import IntEnum
from typing import ClassVar
import numpy as np

from .errors import CapabilityMismatch, DimensionMismatch, IndexOutOfRange


class FunctionTier(IntEnum):
    """Ordered capability levels; a higher tier includes every lower one."""

    FUNCTION = 0
    DIFFERENTIABLE = 1
    TWICE_DIFFERENTIABLE = 2

    @property
    def label(self) -> str:
        return {
            FunctionTier.FUNCTION: "value-only",
            FunctionTier.DIFFERENTIABLE: "differentiable",
            FunctionTier.TWICE_DIFFERENTIABLE: "twice-differentiable",
        }[self]


class Function(ABC):
    """
    Value-only function R^input_size -> R^output_size.

    Instances are immutable and must be pure: the same input always gives the
    same output, and evaluation touches no shared state. This is what allows
    one function to be shared by several constraints and problems.
    """

    tier: ClassVar[FunctionTier] = FunctionTier.FUNCTION

    def __init__(self, input_size: int, output_size: int = 1, name: str = ""):
        if int(input_size) != input_size or input_size < 0:
            raise ValueError(f"input_size must be a non-negative integer, got {input_size}")
        if int(output_size) != output_size or output_size < 1:
            raise ValueError(f"output_size must be a positive integer, got {output_size}")
        self._input_size = int(input_size)
        self._output_size = int(output_size)
        self._name = name or type(self).__name__

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self._output_size

    @property
    def name(self) -> str:
        return self._name

    def supports(self, tier: FunctionTier) -> bool:
        """Whether this function provides everything `tier` requires."""
        return self.tier >= tier

    def compute(self, x) -> np.ndarray:
        """Evaluate the function, returning a vector of length output_size."""
        x = self._check_argument(x)
        result = np.atleast_1d(np.asarray(self._compute(x), dtype=float)).ravel()
        if result.shape[0] != self._output_size:
            raise DimensionMismatch(f"result of '{self._name}'", self._output_size, result.shape[0])
        return result

    def __call__(self, x) -> np.ndarray:
        return self.compute(x)

    def gradient(self, x, index: int = 0) -> np.ndarray:
        """Partial derivatives of output component `index`, length input_size."""
        self._require(FunctionTier.DIFFERENTIABLE, "gradient")
        x = self._check_argument(x)
        self._check_index(index)
        grad = np.asarray(self._gradient(x, index), dtype=float).ravel()
        if grad.shape[0] != self._input_size:
            raise DimensionMismatch(f"gradient of '{self._name}'", self._input_size, grad.shape[0])
        return grad

    def jacobian(self, x) -> np.ndarray:
        """Matrix of shape (output_size, input_size), one gradient per row."""
        self._require(FunctionTier.DIFFERENTIABLE, "jacobian")
        x = self._check_argument(x)
        jac = np.empty((self._output_size, self._input_size))
        for i in range(self._output_size):
            jac[i] = self.gradient(x, i)
        return jac

    def hessian(self, x, index: int = 0) -> np.ndarray:
        """Second derivatives of output component `index`, shape (n, n)."""
        self._require(FunctionTier.TWICE_DIFFERENTIABLE, "hessian")
        x = self._check_argument(x)
        self._check_index(index)
        hess = np.asarray(self._hessian(x, index), dtype=float)
        n = self._input_size
        if hess.shape != (n, n):
            raise DimensionMismatch(f"hessian of '{self._name}'", n * n, hess.size)
        return hess

    @abstractmethod
    def _compute(self, x: np.ndarray):
        """Return the output vector (or a scalar when output_size == 1)."""

    def _require(self, tier: FunctionTier, operation: str) -> None:
        if not self.supports(tier):
            raise CapabilityMismatch(
                f"'{self._name}' is {self.tier.label}; {operation} needs a "
                f"{tier.label} function"
            )

    def _check_argument(self, x) -> np.ndarray:
        x = np.array(x, dtype=float)
        if x.ndim != 1 or x.shape[0] != self._input_size:
            raise DimensionMismatch(f"argument of '{self._name}'", self._input_size, x.size)
        x.setflags(write=False)
        return x

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._output_size:
            raise IndexOutOfRange(f"output of '{self._name}'", index, self._output_size)

    def __str__(self) -> str:
        return f"{self._name} ({self.tier.label}, R^{self._input_size} -> R^{self._output_size})"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(input_size={self._input_size}, "
            f"output_size={self._output_size}, name={self._name!r})"
        )


class DifferentiableFunction(Function):
    """Function that also provides exact first derivatives."""

    tier: ClassVar[FunctionTier] = FunctionTier.DIFFERENTIABLE

    @abstractmethod
    def _gradient(self, x: np.ndarray, index: int):
        """Return the gradient of output component `index`."""


class TwiceDifferentiableFunction(DifferentiableFunction):
    """Function that also provides exact, symmetric second derivatives."""

    tier: ClassVar[FunctionTier] = FunctionTier.TWICE_DIFFERENTIABLE

    @abstractmethod
    def _hessian(self, x: np.ndarray, index: int):
        """Return the Hessian of output component `index`."""
