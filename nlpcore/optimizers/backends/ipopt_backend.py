"""
IPOPT solver backends.

Wraps cyipopt's problem interface for large-scale nonlinear optimization:

- ipopt: gradients only, Hessian of the Lagrangian approximated by L-BFGS
- ipopt-td: exact Hessians from twice-differentiable functions

Constraint bounds are passed unscaled; constraint scales become IPOPT user
scaling factors.
"""

from typing import Any, Dict
import logging
import numpy as np

from ...function import FunctionTier
from ..base import SolverBackend
from ..result import NoSolution, Result, SolverError
from ..wrapper import GradientWrapper, ObjectiveWrapper, ScaledConstraintWrapper

logger = logging.getLogger(__name__)

# IPOPT return codes (ApplicationReturnStatus)
SOLVE_SUCCEEDED = 0
SOLVED_TO_ACCEPTABLE_LEVEL = 1
INFEASIBLE_PROBLEM_DETECTED = 2
# Codes at or below this one are setup or internal failures
FIRST_ERROR_STATUS = -10


class _IpoptAdapter:
    """cyipopt callback object for a Problem, first derivatives only."""

    def __init__(self, problem):
        self.problem = problem
        n = problem.input_size
        m = problem.n_constraints
        self._objective = ObjectiveWrapper(problem.objective)
        self._gradient = GradientWrapper(problem.objective)
        # Unit scales: IPOPT applies the problem's scales itself
        self._constraints = ScaledConstraintWrapper(problem.constraints, np.ones(m))
        self._jacobian_structure = np.nonzero(np.ones((m, n)))
        self.n_iterations = 0

    @property
    def n_function_evals(self) -> int:
        return self._objective.n_evals

    @property
    def n_gradient_evals(self) -> int:
        return self._gradient.n_evals

    def objective(self, x):
        return self._objective(x)

    def gradient(self, x):
        return self._gradient(x)

    def constraints(self, x):
        return self._constraints(x)

    def jacobianstructure(self):
        return self._jacobian_structure

    def jacobian(self, x):
        return self._constraints.jacobian(x).ravel()

    def intermediate(self, alg_mod, iter_count, obj_value, inf_pr, inf_du, mu,
                     d_norm, regularization_size, alpha_du, alpha_pr, ls_trials):
        self.n_iterations = int(iter_count)
        return True


class _IpoptHessianAdapter(_IpoptAdapter):
    """Adds the exact Hessian of the Lagrangian (lower triangle)."""

    def __init__(self, problem):
        super().__init__(problem)
        n = problem.input_size
        self._hessian_structure = np.nonzero(np.tril(np.ones((n, n))))

    def hessianstructure(self):
        return self._hessian_structure

    def hessian(self, x, lagrange, obj_factor):
        h = obj_factor * self.problem.objective.hessian(x, 0)
        h = h + self._constraints.hessian(x, lagrange)
        return h[self._hessian_structure]


class IPOPTBackend(SolverBackend):
    """
    IPOPT interior-point backend with a quasi-Newton Hessian.

    IPOPT is recommended for:
    - Large-scale constrained optimization
    - Problems with many constraints
    - When gradients are available but Hessians are not

    Every IPOPT option can be passed through `parameters`.
    """

    name = "ipopt"
    description = "IPOPT interior point (limited-memory Hessian approximation)"
    library = "cyipopt"
    objective_tier = FunctionTier.DIFFERENTIABLE
    constraint_tier = FunctionTier.DIFFERENTIABLE
    default_parameters = {"max_iter": 3000, "tol": 1e-8, "print_level": 0}
    key_mappings = {"maxiter": "max_iter", "max_iterations": "max_iter"}

    adapter_class = _IpoptAdapter

    def ipopt_options(self) -> Dict[str, Any]:
        return {**self.library_options(), "hessian_approximation": "limited-memory"}

    def _solve(self) -> Result:
        import cyipopt

        problem = self.problem
        adapter = self.adapter_class(problem)
        lb, ub = problem.bounds_arrays()
        cl, cu = problem.constraint_bounds_arrays(scaled=False)

        nlp = cyipopt.Problem(
            n=problem.input_size,
            m=problem.n_constraints,
            problem_obj=adapter,
            lb=lb,
            ub=ub,
            cl=cl,
            cu=cu,
        )

        options = self.ipopt_options()
        scales = problem.constraint_scales()
        if scales.size and np.any(scales != 1.0):
            nlp.set_problem_scaling(obj_scaling=1.0, g_scaling=scales)
            options.setdefault("nlp_scaling_method", "user-scaling")
        for key, value in options.items():
            nlp.add_option(key, value)

        x, info = nlp.solve(problem.initial_point())

        status = int(info["status"])
        message = info["status_msg"]
        if isinstance(message, bytes):
            message = message.decode("utf-8", "replace")
        logger.info(f"IPOPT status {status}: {message}")

        if status <= FIRST_ERROR_STATUS:
            return SolverError(message=f"IPOPT error {status}: {message}")
        if status == INFEASIBLE_PROBLEM_DETECTED:
            return NoSolution(reason=message)

        warnings = []
        if status == SOLVED_TO_ACCEPTABLE_LEVEL:
            warnings.append(message)

        return self._outcome(
            x,
            converged=status in (SOLVE_SUCCEEDED, SOLVED_TO_ACCEPTABLE_LEVEL),
            message=message,
            warnings=warnings,
            multipliers=info.get("mult_g"),
            n_iterations=adapter.n_iterations,
            n_function_evals=adapter.n_function_evals,
            n_gradient_evals=adapter.n_gradient_evals,
        )


class IPOPTExactHessianBackend(IPOPTBackend):
    """IPOPT with exact Hessians; needs twice-differentiable functions."""

    name = "ipopt-td"
    description = "IPOPT interior point (exact Hessians)"
    objective_tier = FunctionTier.TWICE_DIFFERENTIABLE
    constraint_tier = FunctionTier.TWICE_DIFFERENTIABLE

    adapter_class = _IpoptHessianAdapter

    def ipopt_options(self) -> Dict[str, Any]:
        return self.library_options()
