"""
Constrained nonlinear program: objective, constraints, bounds, starting point.

    minimize    f(x)
    subject to  l_k <= g_k(x) <= u_k    for every constraint component k
                x_lower <= x <= x_upper

A Problem is assembled incrementally and checked at every call, so a malformed
model fails where it is built rather than inside a solver. Once handed to
get_solver() it is frozen and can be shared by several backends.

Example:
    problem = Problem(objective)
    problem.set_all_argument_bounds(Interval(1.0, 5.0))
    problem.set_starting_point([1.0, 5.0, 5.0, 1.0])
    problem.add_constraint(g0, Interval.lower_bounded(25.0))
    problem.add_constraint(g1, Interval.equality(40.0))
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union
import logging
import math
import numpy as np

from .errors import DimensionMismatch, IndexOutOfRange, InvalidScale, ProblemFrozen
from .function import Function, FunctionTier
from .interval import Interval

logger = logging.getLogger(__name__)

BoundsInput = Union[Interval, Sequence[Interval]]


@dataclass(frozen=True)
class Constraint:
    """
    A function with one bound and one scale per output component.

    bounds[k] and scales[k] both refer to output component k of `function`.
    """

    function: Function
    bounds: Tuple[Interval, ...]
    scales: Tuple[float, ...]

    def __post_init__(self):
        m = self.function.output_size
        if len(self.bounds) != m:
            raise DimensionMismatch(f"bounds of constraint '{self.function.name}'", m, len(self.bounds))
        if len(self.scales) != m:
            raise DimensionMismatch(f"scales of constraint '{self.function.name}'", m, len(self.scales))
        for bound in self.bounds:
            if not isinstance(bound, Interval):
                raise TypeError(f"Constraint bounds must be Interval objects, got {type(bound).__name__}")
        for scale in self.scales:
            if not (scale > 0 and math.isfinite(scale)):
                raise InvalidScale(
                    f"Scales of constraint '{self.function.name}' must be positive and finite, got {scale}"
                )

    @property
    def name(self) -> str:
        return self.function.name

    @property
    def size(self) -> int:
        return self.function.output_size

    def violation(self, x) -> float:
        """Largest distance of any component from its bound."""
        values = self.function.compute(x)
        return max(bound.distance(v) for bound, v in zip(self.bounds, values))


class Problem:
    """
    Nonlinear program over objective.input_size variables.

    The problem owns its argument bounds and starting point; functions are
    shared references and may appear in other problems.
    """

    def __init__(self, objective: Function, argument_names: Optional[Sequence[str]] = None):
        if objective.output_size != 1:
            raise DimensionMismatch(f"output of objective '{objective.name}'", 1, objective.output_size)
        n = objective.input_size
        self._objective = objective
        self._constraints: List[Constraint] = []
        self._argument_bounds: List[Interval] = [Interval.unbounded() for _ in range(n)]
        self._starting_point: Optional[np.ndarray] = None
        self._frozen = False

        if argument_names is None:
            argument_names = [f"x{i}" for i in range(n)]
        if len(argument_names) != n:
            raise DimensionMismatch("argument names", n, len(argument_names))
        self._argument_names = tuple(str(name) for name in argument_names)

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def objective(self) -> Function:
        return self._objective

    @property
    def input_size(self) -> int:
        return self._objective.input_size

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        return tuple(self._constraints)

    @property
    def n_constraints(self) -> int:
        """Total number of constraint components (not Constraint objects)."""
        return sum(c.size for c in self._constraints)

    @property
    def argument_names(self) -> Tuple[str, ...]:
        return self._argument_names

    @property
    def argument_bounds(self) -> Tuple[Interval, ...]:
        return tuple(self._argument_bounds)

    @argument_bounds.setter
    def argument_bounds(self, bounds: Sequence[Interval]) -> None:
        self._check_mutable()
        bounds = list(bounds)
        if len(bounds) != self.input_size:
            raise DimensionMismatch("argument bounds", self.input_size, len(bounds))
        for bound in bounds:
            if not isinstance(bound, Interval):
                raise TypeError(f"Argument bounds must be Interval objects, got {type(bound).__name__}")
        self._argument_bounds = bounds

    @property
    def starting_point(self) -> Optional[np.ndarray]:
        if self._starting_point is None:
            return None
        return self._starting_point.copy()

    @property
    def frozen(self) -> bool:
        return self._frozen

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def set_argument_bounds(self, index: int, interval: Interval) -> None:
        """Overwrite the bound of variable `index`."""
        self._check_mutable()
        if not 0 <= index < self.input_size:
            raise IndexOutOfRange("variable", index, self.input_size)
        if not isinstance(interval, Interval):
            raise TypeError(f"Argument bounds must be Interval objects, got {type(interval).__name__}")
        self._argument_bounds[index] = interval

    def set_all_argument_bounds(self, interval: Interval) -> None:
        """Give every variable the same bound."""
        self.argument_bounds = [interval] * self.input_size

    def set_starting_point(self, x) -> None:
        self._check_mutable()
        x = np.array(x, dtype=float)
        if x.ndim != 1 or x.shape[0] != self.input_size:
            raise DimensionMismatch("starting point", self.input_size, x.size)
        self._starting_point = x

    def add_constraint(
        self,
        function: Function,
        bounds: BoundsInput,
        scales: Optional[Sequence[float]] = None,
    ) -> int:
        """
        Append a constraint and return its index.

        Args:
            function: Constraint function over the same variables as the objective
            bounds: One Interval per output component (a bare Interval is
                accepted for single-output functions)
            scales: One positive factor per output component (default 1.0)

        Returns:
            Position of the new constraint in `constraints`
        """
        self._check_mutable()
        if function.input_size != self.input_size:
            raise DimensionMismatch(f"input of constraint '{function.name}'", self.input_size, function.input_size)
        if isinstance(bounds, Interval):
            bounds = [bounds]
        if scales is None:
            scales = [1.0] * len(bounds)
        # Constraint validates lengths before anything is appended
        constraint = Constraint(function, tuple(bounds), tuple(float(s) for s in scales))
        self._constraints.append(constraint)
        index = len(self._constraints) - 1
        logger.debug(f"Added constraint {index}: {function.name} with bounds {[str(b) for b in bounds]}")
        return index

    def freeze(self) -> None:
        """Make the problem read-only. Idempotent."""
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ProblemFrozen("Problem has been handed to a solver and can no longer be modified")

    # ------------------------------------------------------------------
    # Helpers for backends
    # ------------------------------------------------------------------

    def minimum_tier(self) -> FunctionTier:
        """Lowest tier among the objective and all constraint functions."""
        tiers = [self._objective.tier] + [c.function.tier for c in self._constraints]
        return min(tiers)

    def bounds_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """(lower, upper) arrays of the argument bounds, infinities included."""
        lower = np.array([b.lower for b in self._argument_bounds])
        upper = np.array([b.upper for b in self._argument_bounds])
        return lower, upper

    def constraint_bounds_arrays(self, scaled: bool = False) -> Tuple[np.ndarray, np.ndarray]:
        """(lower, upper) arrays over every constraint component, in order."""
        lower, upper = [], []
        for constraint in self._constraints:
            for bound, scale in zip(constraint.bounds, constraint.scales):
                if scaled:
                    bound = bound.scaled(scale)
                lower.append(bound.lower)
                upper.append(bound.upper)
        return np.array(lower), np.array(upper)

    def constraint_scales(self) -> np.ndarray:
        return np.array([s for c in self._constraints for s in c.scales])

    def initial_point(self) -> np.ndarray:
        """Starting point, or the origin projected into the argument bounds."""
        if self._starting_point is not None:
            return self._starting_point.copy()
        return np.array([b.project(0.0) for b in self._argument_bounds])

    def constraint_values(self, x) -> np.ndarray:
        """Unscaled values of every constraint component, concatenated."""
        if not self._constraints:
            return np.zeros(0)
        return np.concatenate([c.function.compute(x) for c in self._constraints])

    def constraint_violation(self, x) -> float:
        """Largest violation among argument bounds and constraint components."""
        x = np.asarray(x, dtype=float)
        violations = [b.distance(v) for b, v in zip(self._argument_bounds, x)]
        violations += [c.violation(x) for c in self._constraints]
        return max(violations, default=0.0)

    def is_feasible(self, x, tolerance: float = 1e-6) -> bool:
        return self.constraint_violation(x) <= tolerance

    def __str__(self) -> str:
        lines = [f"Problem: minimize {self._objective}"]
        lines.append("  Argument bounds: " + ", ".join(
            f"{name} in {bound}" for name, bound in zip(self._argument_names, self._argument_bounds)
        ))
        if self._starting_point is not None:
            lines.append(f"  Starting point: {self._starting_point.tolist()}")
        if self._constraints:
            lines.append(f"  Constraints ({len(self._constraints)}):")
            for i, c in enumerate(self._constraints):
                bounds = ", ".join(str(b) for b in c.bounds)
                scales = ", ".join(f"{s:g}" for s in c.scales)
                lines.append(f"    [{i}] {c.function} in {bounds} (scales: {scales})")
        return "\n".join(lines)
