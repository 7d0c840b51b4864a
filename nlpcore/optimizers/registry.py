"""
Backend registry and solver dispatch.

Maps exact backend names to backend classes. get_solver() is the dispatch
entry point: it resolves the name, checks the problem's function tiers against
the backend's requirements, checks the backend's library is installed, and
returns a backend instance bound to the problem.
"""

from typing import Any, Dict, List, Optional, Type, TYPE_CHECKING
import logging

from ..errors import BackendNotFound, BackendUnavailable

if TYPE_CHECKING:
    from ..problem import Problem
    from .base import SolverBackend
    from .configuration import PriorityType

logger = logging.getLogger(__name__)


class BackendRegistry:
    """
    Registry for solver backends.

    Provides:
    - Backend registration
    - Exact-name lookup
    - Listing of registered and available backends
    - Lazy initialization of the built-in backends

    Usage:
        registry = BackendRegistry()
        registry.register(SLSQPBackend)
        solver = registry.create("scipy-slsqp", problem)
    """

    def __init__(self):
        self._backends: Dict[str, Type["SolverBackend"]] = {}
        self._initialized = False

    def register(self, backend_cls: Type["SolverBackend"]) -> Type["SolverBackend"]:
        """
        Register a backend class under its `name`. Returns the class so this
        can be used as a decorator.
        """
        name = getattr(backend_cls, "name", None)
        if not name:
            raise ValueError(f"{backend_cls.__name__} has no backend name")
        if name in self._backends and self._backends[name] is not backend_cls:
            logger.warning(f"Replacing backend '{name}' ({self._backends[name].__name__})")
        self._backends[name] = backend_cls
        logger.debug(f"Registered backend: {name}")
        return backend_cls

    def get(self, name: str) -> Type["SolverBackend"]:
        """
        Backend class registered under exactly `name`.

        Raises:
            BackendNotFound: nothing is registered under that name
        """
        self._ensure_initialized()
        try:
            return self._backends[name]
        except KeyError:
            raise BackendNotFound(name, list(self._backends)) from None

    def create(
        self,
        name: str,
        problem: "Problem",
        parameters: Optional[Dict[str, Any]] = None,
        priority: Optional["PriorityType"] = None,
    ) -> "SolverBackend":
        """
        Build a backend bound to `problem`.

        Raises:
            BackendNotFound: unknown name
            UnsupportedFunctionTier: a problem function is below the backend's tier
            BackendUnavailable: the backend's library is not installed
        """
        backend_cls = self.get(name)
        backend_cls.check_problem(problem)
        if not backend_cls.is_available():
            raise BackendUnavailable(name, backend_cls.library)
        solver = backend_cls(problem, parameters=parameters, priority=priority)
        logger.info(f"Dispatched problem '{problem.objective.name}' to {name}")
        return solver

    def names(self) -> List[str]:
        self._ensure_initialized()
        return list(self._backends)

    def get_available(self) -> List[str]:
        """Names of backends whose libraries are installed."""
        self._ensure_initialized()
        return [name for name, cls in self._backends.items() if cls.is_available()]

    def list_all(self) -> Dict[str, Dict[str, Any]]:
        """All backends with their capabilities."""
        self._ensure_initialized()
        result = {}
        for name, backend_cls in self._backends.items():
            info = backend_cls.get_info()
            info["available"] = backend_cls.is_available()
            result[name] = info
        return result

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            self._initialized = True
            self._initialize_backends()

    def _initialize_backends(self) -> None:
        """Register the built-in backends."""
        # Imported here to avoid circular imports
        from .backends import BUILTIN_BACKENDS

        for backend_cls in BUILTIN_BACKENDS:
            if backend_cls.name not in self._backends:
                self.register(backend_cls)

        logger.debug(f"Initialized {len(self._backends)} solver backends")


# Global registry instance
_REGISTRY: Optional[BackendRegistry] = None


def get_registry() -> BackendRegistry:
    """Get the global backend registry."""
    global _REGISTRY
    if _REGISTRY is None:
        _REGISTRY = BackendRegistry()
    return _REGISTRY


def get_solver(
    name: str,
    problem: "Problem",
    parameters: Optional[Dict[str, Any]] = None,
    priority: Optional["PriorityType"] = None,
) -> "SolverBackend":
    """
    Resolve a backend by exact name and bind it to `problem`.

    Args:
        name: Registered backend name, e.g. 'scipy-slsqp' or 'ipopt-td'
        problem: Problem to solve (frozen by this call)
        parameters: Backend options, passed through to the library
        priority: Optional preset applied before `parameters`

    Returns:
        Backend instance; call .minimum() to solve
    """
    return get_registry().create(name, problem, parameters=parameters, priority=priority)


def register_backend(backend_cls: Type["SolverBackend"]) -> Type["SolverBackend"]:
    """Register a custom backend class (usable as a decorator)."""
    return get_registry().register(backend_cls)


def list_backends() -> Dict[str, Dict[str, Any]]:
    return get_registry().list_all()


def get_available_backends() -> List[str]:
    return get_registry().get_available()
