"""
nlpcore - constrained nonlinear programs with pluggable solver backends

    from nlpcore import Interval, Problem, get_solver

    problem = Problem(objective)
    problem.set_all_argument_bounds(Interval(1.0, 5.0))
    problem.set_starting_point([1.0, 5.0, 5.0, 1.0])
    problem.add_constraint(g0, Interval.lower_bounded(25.0))
    problem.add_constraint(g1, Interval.equality(40.0))

    result = get_solver("scipy-slsqp", problem).minimum()
    if result.is_success:
        print(result.x, result.value)
"""

__version__ = "0.3.0"

from .errors import (
    BackendNotFound,
    BackendUnavailable,
    BadGradient,
    CapabilityMismatch,
    DimensionMismatch,
    IndexOutOfRange,
    InvalidInterval,
    InvalidScale,
    NLPError,
    ProblemFrozen,
    UnsupportedFunctionTier,
)
from .interval import Interval
from .function import (
    DifferentiableFunction,
    Function,
    FunctionTier,
    TwiceDifferentiableFunction,
)
from .functions import (
    NumericLinearFunction,
    NumericQuadraticFunction,
    make_function,
)
from .derivatives import (
    FiniteDifferenceGradient,
    GradientCheck,
    assert_gradient,
    check_gradient,
    check_hessian,
)
from .problem import Constraint, Problem
from .optimizers import (
    NoSolution,
    Result,
    ResultTag,
    Solved,
    SolvedWithWarnings,
    SolverBackend,
    SolverError,
    get_available_backends,
    get_solver,
    list_backends,
    register_backend,
)

__all__ = [
    # Errors
    "NLPError",
    "DimensionMismatch",
    "InvalidInterval",
    "InvalidScale",
    "IndexOutOfRange",
    "CapabilityMismatch",
    "ProblemFrozen",
    "BackendNotFound",
    "BackendUnavailable",
    "UnsupportedFunctionTier",
    "BadGradient",
    # Model
    "Interval",
    "Function",
    "DifferentiableFunction",
    "TwiceDifferentiableFunction",
    "FunctionTier",
    "NumericLinearFunction",
    "NumericQuadraticFunction",
    "make_function",
    "FiniteDifferenceGradient",
    "GradientCheck",
    "check_gradient",
    "check_hessian",
    "assert_gradient",
    "Constraint",
    "Problem",
    # Solving
    "SolverBackend",
    "get_solver",
    "register_backend",
    "list_backends",
    "get_available_backends",
    "Result",
    "ResultTag",
    "Solved",
    "SolvedWithWarnings",
    "NoSolution",
    "SolverError",
]
