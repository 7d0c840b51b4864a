"""
Priority presets and backend selection.

Most users touch only a handful of solver options. A priority expresses
intent and is translated to backend-specific options:

- robustness: conservative tolerances, more iterations
- speed: relaxed tolerances, early stopping
- accuracy: tight tolerances, thorough convergence
- balanced: middle ground (default)

Explicit parameters passed to get_solver() always override a preset.
"""

from typing import Any, Dict, List, Literal, Optional, TYPE_CHECKING
import logging

from ..function import FunctionTier

if TYPE_CHECKING:
    from ..problem import Problem

logger = logging.getLogger(__name__)

PriorityType = Literal["robustness", "speed", "accuracy", "balanced"]

PRIORITIES = ("robustness", "speed", "accuracy", "balanced")


_PRESETS: Dict[str, Dict[str, Dict[str, Any]]] = {
    "scipy-slsqp": {
        "robustness": {"maxiter": 500, "ftol": 1e-8},
        "speed": {"maxiter": 100, "ftol": 1e-6},
        "accuracy": {"maxiter": 1000, "ftol": 1e-12},
        "balanced": {"maxiter": 300, "ftol": 1e-9},
    },
    "scipy-trust-constr": {
        "robustness": {"maxiter": 3000, "gtol": 1e-8, "xtol": 1e-10},
        "speed": {"maxiter": 500, "gtol": 1e-6, "xtol": 1e-8},
        "accuracy": {"maxiter": 5000, "gtol": 1e-10, "xtol": 1e-12},
        "balanced": {"maxiter": 1000, "gtol": 1e-8, "xtol": 1e-10},
    },
    "scipy-cobyla": {
        "robustness": {"maxiter": 20000, "tol": 1e-8, "catol": 1e-8},
        "speed": {"maxiter": 2000, "tol": 1e-5, "catol": 1e-7},
        "accuracy": {"maxiter": 50000, "tol": 1e-10, "catol": 1e-10},
        "balanced": {"maxiter": 10000, "tol": 1e-8, "catol": 1e-8},
    },
    "ipopt": {
        "robustness": {"max_iter": 5000, "tol": 1e-8, "mu_strategy": "monotone"},
        "speed": {"max_iter": 500, "tol": 1e-6, "mu_strategy": "adaptive"},
        "accuracy": {"max_iter": 5000, "tol": 1e-10, "acceptable_tol": 1e-8},
        "balanced": {"max_iter": 3000, "tol": 1e-8},
    },
}
_PRESETS["ipopt-td"] = _PRESETS["ipopt"]


def priority_parameters(backend_name: str, priority: PriorityType) -> Dict[str, Any]:
    """
    Options a priority translates to for one backend.

    Unknown backends get no preset options (a warning is logged).

    Raises:
        ValueError: priority is not one of PRIORITIES
    """
    if priority not in PRIORITIES:
        raise ValueError(f"Unknown priority '{priority}'; expected one of {', '.join(PRIORITIES)}")
    presets = _PRESETS.get(backend_name)
    if presets is None:
        logger.warning(f"No '{priority}' preset for backend '{backend_name}', using its defaults")
        return {}
    return dict(presets[priority])


class ConfigurationManager:
    """
    Backend selection from problem characteristics.

    Example:
        manager = ConfigurationManager()
        name = manager.select_backend(problem, priority="accuracy")
        solver = get_solver(name, problem, priority="accuracy")
    """

    def select_backend(
        self,
        problem: "Problem",
        priority: PriorityType = "balanced",
        available_backends: Optional[List[str]] = None,
    ) -> str:
        """
        Pick a backend name the problem's function tiers can satisfy.

        Decision factors:
        - Tier: value-only functions -> COBYLA
        - Priority: accuracy with Hessians -> trust-constr or IPOPT exact Hessian
        - Size: many variables -> IPOPT when installed
        - Available backends: what is installed (default: SciPy only)
        """
        if available_backends is None:
            available_backends = ["scipy-slsqp", "scipy-trust-constr", "scipy-cobyla"]

        tier = problem.minimum_tier()
        is_large = problem.input_size > 100

        if tier == FunctionTier.FUNCTION:
            choice = "scipy-cobyla"
        elif tier == FunctionTier.TWICE_DIFFERENTIABLE and priority == "accuracy":
            choice = "ipopt-td" if "ipopt-td" in available_backends else "scipy-trust-constr"
        elif is_large and "ipopt" in available_backends:
            choice = "ipopt"
        else:
            choice = "scipy-slsqp"

        if choice not in available_backends:
            raise ValueError(
                f"Selected backend '{choice}' is not available "
                f"(available: {', '.join(available_backends)})"
            )
        logger.info(f"Selected {choice} for a {tier.label} problem with priority='{priority}'")
        return choice
