"""
SciPy solver backends.

Wraps scipy.optimize.minimize with three methods, one per function tier:

- scipy-cobyla: derivative-free, value-only functions
- scipy-slsqp: sequential least squares QP, needs gradients
- scipy-trust-constr: trust-region interior point, uses exact Hessians
"""

from typing import Any, Dict, List
import logging
import numpy as np

from ...function import FunctionTier
from ..base import SolverBackend
from ..result import Result
from ..wrapper import GradientWrapper, ObjectiveWrapper, ScaledConstraintWrapper

logger = logging.getLogger(__name__)


def _scipy_bounds(problem):
    """scipy Bounds for the argument bounds, or None when all are infinite."""
    from scipy.optimize import Bounds

    lower, upper = problem.bounds_arrays()
    if not (np.isfinite(lower).any() or np.isfinite(upper).any()):
        return None
    return Bounds(lower, upper)


def _inequality_form(
    problem,
    constraints: ScaledConstraintWrapper,
    with_jacobian: bool,
    split_equalities: bool,
) -> List[Dict[str, Any]]:
    """
    Express interval constraints as scipy 'eq'/'ineq' dicts (c(x) >= 0).

    A component with bounds [l, u] becomes s*g - s*l >= 0 and s*u - s*g >= 0
    for each finite end, or s*g - s*l == 0 when l == u. COBYLA only accepts
    inequalities, so `split_equalities` turns each equality into both
    inequalities.
    """
    lower, upper = problem.constraint_bounds_arrays(scaled=True)
    is_eq = lower == upper
    if split_equalities:
        eq = np.array([], dtype=int)
        lo = np.where(np.isfinite(lower))[0]
        up = np.where(np.isfinite(upper))[0]
    else:
        eq = np.where(is_eq)[0]
        lo = np.where(~is_eq & np.isfinite(lower))[0]
        up = np.where(~is_eq & np.isfinite(upper))[0]

    specs = []
    if eq.size:
        spec = {"type": "eq", "fun": lambda x: constraints(x)[eq] - lower[eq]}
        if with_jacobian:
            spec["jac"] = lambda x: constraints.jacobian(x)[eq]
        specs.append(spec)

    if lo.size or up.size:
        def ineq(x):
            values = constraints(x)
            return np.concatenate([values[lo] - lower[lo], upper[up] - values[up]])

        spec = {"type": "ineq", "fun": ineq}
        if with_jacobian:
            def ineq_jac(x):
                jac = constraints.jacobian(x)
                return np.vstack([jac[lo], -jac[up]])

            spec["jac"] = ineq_jac
        specs.append(spec)

    return specs


class SLSQPBackend(SolverBackend):
    """
    Sequential least squares programming.

    Recommended default for small and medium constrained problems with
    gradients. Equality components are passed as equalities, interval
    components as one or two inequalities.
    """

    name = "scipy-slsqp"
    description = "SciPy SLSQP (sequential least squares programming)"
    library = "scipy"
    objective_tier = FunctionTier.DIFFERENTIABLE
    constraint_tier = FunctionTier.DIFFERENTIABLE
    default_parameters = {"maxiter": 300, "ftol": 1e-9}
    key_mappings = {"max_iterations": "maxiter", "max_iter": "maxiter", "tol": "ftol"}

    def _solve(self) -> Result:
        from scipy.optimize import minimize

        problem = self.problem
        objective = ObjectiveWrapper(problem.objective)
        gradient = GradientWrapper(problem.objective)
        constraints = ScaledConstraintWrapper(problem.constraints, problem.constraint_scales())

        result = minimize(
            fun=objective,
            x0=problem.initial_point(),
            method="SLSQP",
            jac=gradient,
            bounds=_scipy_bounds(problem),
            constraints=_inequality_form(problem, constraints, with_jacobian=True, split_equalities=False),
            options=self.library_options(),
        )

        return self._outcome(
            result.x,
            converged=bool(result.success),
            message=str(result.message),
            n_iterations=int(getattr(result, "nit", 0)),
            n_function_evals=objective.n_evals,
            n_gradient_evals=gradient.n_evals,
        )


class TrustConstrBackend(SolverBackend):
    """
    Trust-region interior point with exact Hessians.

    Each problem constraint is handed to SciPy as one NonlinearConstraint
    bundle carrying the scaled values, Jacobian and weighted Hessian.
    """

    name = "scipy-trust-constr"
    description = "SciPy trust-constr (trust-region interior point, exact Hessians)"
    library = "scipy"
    objective_tier = FunctionTier.TWICE_DIFFERENTIABLE
    constraint_tier = FunctionTier.TWICE_DIFFERENTIABLE
    # scipy's default barrier (0.1) stops short of active constraints
    default_parameters = {
        "maxiter": 1000,
        "gtol": 1e-8,
        "xtol": 1e-10,
        "initial_barrier_parameter": 1e-4,
    }
    key_mappings = {"max_iterations": "maxiter", "max_iter": "maxiter", "tol": "gtol"}

    def _solve(self) -> Result:
        from scipy.optimize import NonlinearConstraint, minimize

        problem = self.problem
        objective = ObjectiveWrapper(problem.objective)
        gradient = GradientWrapper(problem.objective)
        constraints = ScaledConstraintWrapper(problem.constraints, problem.constraint_scales())

        scipy_constraints = []
        if problem.constraints:
            lower, upper = problem.constraint_bounds_arrays(scaled=True)
            scipy_constraints.append(
                NonlinearConstraint(
                    constraints, lower, upper, jac=constraints.jacobian, hess=constraints.hessian
                )
            )

        result = minimize(
            fun=objective,
            x0=problem.initial_point(),
            method="trust-constr",
            jac=gradient,
            hess=lambda x: problem.objective.hessian(x, 0),
            bounds=_scipy_bounds(problem),
            constraints=scipy_constraints,
            options=self.library_options(),
        )

        # status 1: gtol met, 2: xtol met, 0: iteration limit, 3: stopped by callback
        warnings = []
        if result.status == 2:
            warnings.append(f"Stopped on step size rather than optimality: {result.message}")

        return self._outcome(
            result.x,
            converged=bool(result.success),
            message=str(result.message),
            warnings=warnings,
            n_iterations=int(getattr(result, "nit", 0)),
            n_function_evals=objective.n_evals,
            n_gradient_evals=gradient.n_evals,
        )


class COBYLABackend(SolverBackend):
    """
    Constrained optimization by linear approximation (derivative-free).

    Accepts value-only functions. Equality components are enforced as a pair
    of opposite inequalities, so `catol` bounds how well they are met.
    """

    name = "scipy-cobyla"
    description = "SciPy COBYLA (derivative-free, linear approximations)"
    library = "scipy"
    objective_tier = FunctionTier.FUNCTION
    constraint_tier = FunctionTier.FUNCTION
    default_parameters = {"maxiter": 10000, "tol": 1e-8, "catol": 1e-8}
    key_mappings = {"max_iterations": "maxiter", "max_iter": "maxiter"}

    def _solve(self) -> Result:
        from scipy.optimize import minimize

        problem = self.problem
        objective = ObjectiveWrapper(problem.objective)
        constraints = ScaledConstraintWrapper(problem.constraints, problem.constraint_scales())

        result = minimize(
            fun=objective,
            x0=problem.initial_point(),
            method="COBYLA",
            bounds=_scipy_bounds(problem),
            constraints=_inequality_form(problem, constraints, with_jacobian=False, split_equalities=True),
            options=self.library_options(),
        )

        return self._outcome(
            result.x,
            converged=bool(result.success),
            message=str(result.message),
            n_iterations=int(getattr(result, "nit", 0) or 0),
            n_function_evals=objective.n_evals,
        )
