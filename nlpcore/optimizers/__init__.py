"""
Solver backends, dispatch and results.

- base.py: SolverBackend abstract base class
- result.py: Solved / SolvedWithWarnings / NoSolution / SolverError
- wrapper.py: ObjectiveWrapper, GradientWrapper, ScaledConstraintWrapper
- registry.py: backend registration and get_solver() dispatch
- configuration.py: priority presets and backend selection
- backends/: SciPy and IPOPT implementations

Usage:
    from nlpcore.optimizers import get_solver

    solver = get_solver("scipy-slsqp", problem)
    result = solver.minimum()
"""

# Core abstractions
from nlpcore.optimizers.base import SolverBackend
from nlpcore.optimizers.result import (
    NoSolution,
    Result,
    ResultTag,
    Solved,
    SolvedWithWarnings,
    SolverError,
    SolverResult,
)
from nlpcore.optimizers.wrapper import (
    GradientWrapper,
    ObjectiveWrapper,
    ScaledConstraintWrapper,
)
from nlpcore.optimizers.configuration import (
    ConfigurationManager,
    PRIORITIES,
    priority_parameters,
)

# Registry functions
from nlpcore.optimizers.registry import (
    BackendRegistry,
    get_available_backends,
    get_registry,
    get_solver,
    list_backends,
    register_backend,
)

# Backend implementations
from nlpcore.optimizers.backends import (
    COBYLABackend,
    IPOPTBackend,
    IPOPTExactHessianBackend,
    SLSQPBackend,
    TrustConstrBackend,
)

__all__ = [
    # Core abstractions
    "SolverBackend",
    "SolverResult",
    "Result",
    "ResultTag",
    "Solved",
    "SolvedWithWarnings",
    "NoSolution",
    "SolverError",
    "ObjectiveWrapper",
    "GradientWrapper",
    "ScaledConstraintWrapper",
    "ConfigurationManager",
    "PRIORITIES",
    "priority_parameters",
    # Registry
    "BackendRegistry",
    "get_registry",
    "get_solver",
    "list_backends",
    "get_available_backends",
    "register_backend",
    # Backends
    "SLSQPBackend",
    "TrustConstrBackend",
    "COBYLABackend",
    "IPOPTBackend",
    "IPOPTExactHessianBackend",
]
