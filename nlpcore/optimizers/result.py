"""
Solver outcome variants.

Every SolverBackend.minimum() call returns exactly one of:

    Solved               point and objective value
    SolvedWithWarnings   point and objective value, with caveats
    NoSolution           the backend finished without a usable point
    SolverError          the model or the backend malfunctioned

These are ordinary return values, never raised. Callers branch on `tag` or use
match(), which insists on a handler for every variant:

    message = result.match(
        solved=lambda r: f"f* = {r.value}",
        solved_with_warnings=lambda r: f"f* = {r.value} ({len(r.warnings)} warnings)",
        no_solution=lambda r: "infeasible",
        error=lambda r: r.message,
    )
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple, Union
import numpy as np


class ResultTag(Enum):
    SOLVED = "solved"
    SOLVED_WITH_WARNINGS = "solved_with_warnings"
    NO_SOLUTION = "no_solution"
    ERROR = "error"


def _frozen_array(values) -> Optional[np.ndarray]:
    if values is None:
        return None
    array = np.array(values, dtype=float)
    array.setflags(write=False)
    return array


class SolverResult(ABC):
    """Common behaviour of the four result variants."""

    tag: ClassVar[ResultTag]

    @property
    def is_success(self) -> bool:
        """True for Solved and SolvedWithWarnings."""
        return self.tag in (ResultTag.SOLVED, ResultTag.SOLVED_WITH_WARNINGS)

    def match(
        self,
        *,
        solved: Callable[["Solved"], Any],
        solved_with_warnings: Callable[["SolvedWithWarnings"], Any],
        no_solution: Callable[["NoSolution"], Any],
        error: Callable[["SolverError"], Any],
    ) -> Any:
        """Call the handler for this variant and return what it returns."""
        handlers = {
            ResultTag.SOLVED: solved,
            ResultTag.SOLVED_WITH_WARNINGS: solved_with_warnings,
            ResultTag.NO_SOLUTION: no_solution,
            ResultTag.ERROR: error,
        }
        return handlers[self.tag](self)

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form for logging and serialization."""


@dataclass(frozen=True, eq=False)
class _SolutionResult(SolverResult):
    """Fields shared by the two success variants."""

    x: np.ndarray
    value: float
    constraint_values: Optional[np.ndarray] = None
    multipliers: Optional[np.ndarray] = None
    n_iterations: int = 0
    n_function_evals: int = 0
    n_gradient_evals: int = 0

    def __post_init__(self):
        object.__setattr__(self, "x", _frozen_array(self.x))
        object.__setattr__(self, "value", float(self.value))
        object.__setattr__(self, "constraint_values", _frozen_array(self.constraint_values))
        object.__setattr__(self, "multipliers", _frozen_array(self.multipliers))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.tag.value,
            "x": self.x.tolist(),
            "value": self.value,
            "constraint_values": (
                self.constraint_values.tolist() if self.constraint_values is not None else None
            ),
            "multipliers": self.multipliers.tolist() if self.multipliers is not None else None,
            "n_iterations": self.n_iterations,
            "n_function_evals": self.n_function_evals,
            "n_gradient_evals": self.n_gradient_evals,
        }


@dataclass(frozen=True, eq=False)
class Solved(_SolutionResult):
    """The backend converged to a point satisfying its criteria."""

    tag: ClassVar[ResultTag] = ResultTag.SOLVED


@dataclass(frozen=True, eq=False)
class SolvedWithWarnings(_SolutionResult):
    """A usable point whose quality the backend could not fully certify."""

    tag: ClassVar[ResultTag] = ResultTag.SOLVED_WITH_WARNINGS

    warnings: Tuple[str, ...] = field(default=())

    def __post_init__(self):
        super().__post_init__()
        warnings = tuple(str(w) for w in self.warnings)
        if not warnings:
            raise ValueError("SolvedWithWarnings requires at least one warning")
        object.__setattr__(self, "warnings", warnings)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["warnings"] = list(self.warnings)
        return data


@dataclass(frozen=True, eq=False)
class NoSolution(SolverResult):
    """The backend ran but found no feasible or acceptable point."""

    tag: ClassVar[ResultTag] = ResultTag.NO_SOLUTION

    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.tag.value, "reason": self.reason}


@dataclass(frozen=True, eq=False)
class SolverError(SolverResult):
    """The model or the backend failed; `message` says how."""

    tag: ClassVar[ResultTag] = ResultTag.ERROR

    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.tag.value, "message": self.message}


Result = Union[Solved, SolvedWithWarnings, NoSolution, SolverError]
