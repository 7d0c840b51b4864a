"""
Abstract base class for solver backends.

A backend is bound to one Problem at construction. Construction checks that
the problem's functions reach the tiers the backend needs, so a mismatch
fails before any solving starts. minimum() then runs the algorithm and always
returns exactly one result variant; nothing it does is raised to the caller.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Iterable, Optional
import importlib
import logging
import numpy as np

from ..errors import UnsupportedFunctionTier
from ..function import FunctionTier
from ..problem import Problem
from .configuration import PriorityType, priority_parameters
from .result import (
    NoSolution,
    Result,
    Solved,
    SolvedWithWarnings,
    SolverError,
    SolverResult,
)

logger = logging.getLogger(__name__)

DEFAULT_FEASIBILITY_TOLERANCE = 1e-6


class SolverBackend(ABC):
    """
    Abstract base class for solver backends.

    Subclasses declare:
    - name: registry key (exact match, e.g. 'scipy-slsqp')
    - library: importable third-party module the backend needs, if any
    - objective_tier / constraint_tier: minimum FunctionTier accepted
    - default_parameters: options passed to the library unless overridden
    - key_mappings: convenience aliases for library option names
    and implement _solve().
    """

    name: ClassVar[str]
    description: ClassVar[str] = ""
    library: ClassVar[Optional[str]] = None
    objective_tier: ClassVar[FunctionTier] = FunctionTier.FUNCTION
    constraint_tier: ClassVar[FunctionTier] = FunctionTier.FUNCTION
    default_parameters: ClassVar[Dict[str, Any]] = {}
    key_mappings: ClassVar[Dict[str, str]] = {}

    # Consumed by the core, never forwarded to the library
    core_keys: ClassVar[frozenset] = frozenset({"feasibility_tolerance"})

    def __init__(
        self,
        problem: Problem,
        parameters: Optional[Dict[str, Any]] = None,
        priority: Optional[PriorityType] = None,
    ):
        """
        Bind the backend to a problem.

        Args:
            problem: Problem to solve; frozen by this call
            parameters: Explicit options (highest precedence)
            priority: Optional preset ('robustness', 'speed', 'accuracy', 'balanced')

        Raises:
            UnsupportedFunctionTier: a problem function is below the required tier
            ValueError: unknown priority
        """
        self.check_problem(problem)

        merged = dict(self.default_parameters)
        if priority is not None:
            merged.update(priority_parameters(self.name, priority))
        if parameters:
            merged.update(parameters)
        self.parameters: Dict[str, Any] = {
            self.key_mappings.get(key, key): value for key, value in merged.items()
        }
        self.result: Optional[Result] = None

        # Last, so a rejected configuration leaves the problem editable
        problem.freeze()
        self.problem = problem

    # ------------------------------------------------------------------
    # Capability checks
    # ------------------------------------------------------------------

    @classmethod
    def is_available(cls) -> bool:
        """Whether the backend's third-party library can be imported."""
        if cls.library is None:
            return True
        try:
            importlib.import_module(cls.library)
            return True
        except ImportError:
            return False

    @classmethod
    def check_problem(cls, problem: Problem) -> None:
        """Raise UnsupportedFunctionTier if any function is below the required tier."""
        objective = problem.objective
        if not objective.supports(cls.objective_tier):
            raise UnsupportedFunctionTier(
                cls.name, "objective", objective.name, cls.objective_tier, objective.tier
            )
        for constraint in problem.constraints:
            function = constraint.function
            if not function.supports(cls.constraint_tier):
                raise UnsupportedFunctionTier(
                    cls.name, "constraint", function.name, cls.constraint_tier, function.tier
                )

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        return {
            "name": cls.name,
            "description": cls.description,
            "library": cls.library,
            "objective_tier": cls.objective_tier.label,
            "constraint_tier": cls.constraint_tier.label,
        }

    # ------------------------------------------------------------------
    # Solving
    # ------------------------------------------------------------------

    @property
    def feasibility_tolerance(self) -> float:
        return float(self.parameters.get("feasibility_tolerance", DEFAULT_FEASIBILITY_TOLERANCE))

    def library_options(self, exclude: Iterable[str] = ()) -> Dict[str, Any]:
        """Parameters to pass through to the library."""
        excluded = set(self.core_keys) | set(exclude)
        return {k: v for k, v in self.parameters.items() if k not in excluded}

    def minimum(self) -> Result:
        """
        Run the backend to completion.

        Returns:
            Exactly one of Solved, SolvedWithWarnings, NoSolution, SolverError
        """
        logger.info(
            f"Solving with {self.name}: {self.problem.input_size} variables, "
            f"{self.problem.n_constraints} constraint components"
        )
        try:
            result = self._solve()
        except Exception as e:
            logger.error(f"{self.name} failed: {e}")
            result = SolverError(message=f"{self.name} failed: {e}")

        if not isinstance(result, SolverResult):
            result = SolverError(
                message=f"{self.name} returned {type(result).__name__} instead of a result variant"
            )

        self.result = result
        logger.info(f"{self.name} finished: {result.tag.value}")
        return result

    @abstractmethod
    def _solve(self) -> Result:
        """Run the algorithm on self.problem and return a result variant."""

    def _outcome(
        self,
        x,
        converged: bool,
        message: str,
        warnings: Iterable[str] = (),
        multipliers=None,
        n_iterations: int = 0,
        n_function_evals: int = 0,
        n_gradient_evals: int = 0,
    ) -> Result:
        """
        Classify a finished run.

        Non-finite point, objective or constraint value: SolverError.
        Infeasible point: NoSolution.
        Feasible and converged without warnings: Solved. Feasible otherwise:
        SolvedWithWarnings, with `message` added when the run did not converge.
        """
        x = np.asarray(x, dtype=float)
        if not np.all(np.isfinite(x)):
            return SolverError(message=f"{self.name} produced a non-finite point: {message}")

        value = float(self.problem.objective.compute(x)[0])
        if not np.isfinite(value):
            return SolverError(message=f"Objective is not finite at the final point: {message}")

        constraint_values = self.problem.constraint_values(x)
        if not np.all(np.isfinite(constraint_values)):
            return SolverError(message=f"Constraints are not finite at the final point: {message}")

        violation = self.problem.constraint_violation(x)
        if violation > self.feasibility_tolerance:
            logger.warning(f"{self.name} stopped at an infeasible point (violation {violation:.3e})")
            return NoSolution(
                reason=f"{message} (constraint violation {violation:.3e} exceeds "
                f"{self.feasibility_tolerance:.1e})"
            )

        warnings = list(warnings)
        if not converged:
            warnings.append(message or f"{self.name} did not converge")

        payload = dict(
            x=x,
            value=value,
            constraint_values=constraint_values,
            multipliers=multipliers,
            n_iterations=n_iterations,
            n_function_evals=n_function_evals,
            n_gradient_evals=n_gradient_evals,
        )
        if warnings:
            logger.warning(f"{self.name} solution has warnings: {warnings}")
            return SolvedWithWarnings(warnings=tuple(warnings), **payload)
        return Solved(**payload)

    def __str__(self) -> str:
        lines = [f"Solver: {self.name}"]
        if self.parameters:
            lines.append("  Parameters:")
            for key, value in sorted(self.parameters.items()):
                lines.append(f"    {key}: {value}")
        lines.append(str(self.problem))
        if self.result is not None:
            lines.append(f"  Last result: {self.result.tag.value}")
        return "\n".join(lines)
