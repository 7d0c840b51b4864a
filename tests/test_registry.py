"""
Tests for backend registration and solver dispatch.
"""

import pytest

from nlpcore import (
    BackendNotFound,
    BackendUnavailable,
    FunctionTier,
    Interval,
    Problem,
    Solved,
    SolverBackend,
    UnsupportedFunctionTier,
    get_solver,
    make_function,
)
from nlpcore.benchmarks import hs71_problem
from nlpcore.optimizers import (
    BackendRegistry,
    SLSQPBackend,
    get_available_backends,
    list_backends,
)


class EchoBackend(SolverBackend):
    """Returns the starting point as the solution."""

    name = "echo"
    objective_tier = FunctionTier.FUNCTION
    constraint_tier = FunctionTier.FUNCTION

    def _solve(self):
        x = self.problem.initial_point()
        return Solved(x=x, value=self.problem.objective(x)[0])


class MissingLibraryBackend(EchoBackend):
    name = "missing-library"
    library = "nlpcore_test_library_that_does_not_exist"


class HessianOnlyBackend(EchoBackend):
    name = "hessian-only"
    objective_tier = FunctionTier.TWICE_DIFFERENTIABLE
    constraint_tier = FunctionTier.TWICE_DIFFERENTIABLE


@pytest.fixture
def registry():
    registry = BackendRegistry()
    registry.register(EchoBackend)
    registry.register(MissingLibraryBackend)
    registry.register(HessianOnlyBackend)
    return registry


@pytest.fixture
def value_only_problem():
    problem = Problem(make_function(lambda x: x[0] ** 2 + x[1] ** 2, input_size=2, name="sphere"))
    problem.set_starting_point([1.0, 1.0])
    return problem


class TestBuiltinRegistry:
    def test_builtins_registered(self):
        """Test the built-in backend names."""
        names = set(list_backends())
        assert {"scipy-slsqp", "scipy-trust-constr", "scipy-cobyla", "ipopt", "ipopt-td"} <= names

    def test_scipy_backends_available(self):
        """Test that SciPy backends are available."""
        available = get_available_backends()
        assert "scipy-slsqp" in available
        assert "scipy-cobyla" in available

    def test_info(self):
        """Test backend info."""
        info = list_backends()["scipy-trust-constr"]
        assert info["objective_tier"] == "twice-differentiable"
        assert info["library"] == "scipy"
        assert info["available"] is True

    def test_get_solver_returns_bound_backend(self):
        """Test a successful dispatch."""
        problem = hs71_problem()
        solver = get_solver("scipy-slsqp", problem)
        assert isinstance(solver, SLSQPBackend)
        assert solver.problem is problem
        assert problem.frozen
        assert solver.result is None


class TestDispatchErrors:
    @pytest.mark.parametrize("name", ["does-not-exist", "SCIPY-SLSQP", "scipy", "scipy-slsqp:SLSQP", ""])
    def test_unknown_name(self, name):
        """Test dispatching an unknown name."""
        with pytest.raises(BackendNotFound):
            get_solver(name, hs71_problem())

    def test_unknown_name_lists_known_backends(self):
        """Test the BackendNotFound message."""
        with pytest.raises(BackendNotFound) as excinfo:
            get_solver("nope", hs71_problem())
        assert "scipy-slsqp" in str(excinfo.value)
        assert isinstance(excinfo.value, LookupError)

    def test_value_only_objective_rejected_by_gradient_backend(self, value_only_problem):
        """Test dispatching a value-only objective to SLSQP."""
        with pytest.raises(UnsupportedFunctionTier) as excinfo:
            get_solver("scipy-slsqp", value_only_problem)
        error = excinfo.value
        assert error.role == "objective"
        assert error.required == FunctionTier.DIFFERENTIABLE
        assert error.actual == FunctionTier.FUNCTION
        assert "differentiable" in str(error)
        assert not value_only_problem.frozen

    def test_constraint_tier_checked(self):
        """Test dispatching a constraint below the backend tier."""
        problem = hs71_problem()
        problem.add_constraint(make_function(lambda x: x[0] + x[1], input_size=4, name="sum"), Interval.upper_bounded(9.0))
        with pytest.raises(UnsupportedFunctionTier) as excinfo:
            get_solver("scipy-trust-constr", problem)
        assert excinfo.value.role == "constraint"
        assert excinfo.value.function_name == "sum"

    def test_tier_checked_before_library(self, value_only_problem):
        """Test check order in dispatch."""
        # ipopt-td needs Hessians whether or not cyipopt is installed
        with pytest.raises(UnsupportedFunctionTier):
            get_solver("ipopt-td", value_only_problem)

    def test_never_downgrades(self):
        """Test that dispatch never falls back to a lower tier."""
        # A differentiable-only problem is not silently sent to a lower tier
        problem = Problem(make_function(lambda x: x @ x, gradient=lambda x: 2 * x, input_size=2))
        with pytest.raises(UnsupportedFunctionTier):
            get_solver("scipy-trust-constr", problem)

    def test_direct_construction_checks_tier(self, value_only_problem):
        """Test constructing a backend directly."""
        with pytest.raises(UnsupportedFunctionTier):
            SLSQPBackend(value_only_problem)


class TestCustomRegistry:
    def test_custom_backend(self, registry, value_only_problem):
        """Test a registered custom backend."""
        solver = registry.create("echo", value_only_problem)
        result = solver.minimum()
        assert isinstance(result, Solved)
        assert result.value == pytest.approx(2.0)
        assert solver.result is result

    def test_builtins_added_lazily(self, registry):
        """Test lazy built-in registration."""
        assert "scipy-slsqp" in registry.names()
        assert "echo" in registry.names()

    def test_missing_library(self, registry, value_only_problem):
        """Test a backend whose library is missing."""
        with pytest.raises(BackendUnavailable) as excinfo:
            registry.create("missing-library", value_only_problem)
        assert isinstance(excinfo.value, BackendNotFound)
        assert "nlpcore_test_library_that_does_not_exist" in str(excinfo.value)
        assert "missing-library" not in registry.get_available()

    def test_tier_mismatch_in_custom_registry(self, registry, value_only_problem):
        """Test tier checks in a custom registry."""
        with pytest.raises(UnsupportedFunctionTier):
            registry.create("hessian-only", value_only_problem)

    def test_register_as_decorator(self, registry):
        """Test registering with a decorator."""
        @registry.register
        class Another(EchoBackend):
            name = "another"

        assert registry.get("another") is Another

    def test_nameless_backend_rejected(self, registry):
        """Test rejecting a backend without a name."""
        class Nameless(EchoBackend):
            name = ""

        with pytest.raises(ValueError):
            registry.register(Nameless)

    def test_problem_reused_by_several_backends(self, registry, value_only_problem):
        """Test dispatching one problem to several backends."""
        first = registry.create("echo", value_only_problem).minimum()
        second = registry.create("scipy-cobyla", value_only_problem).minimum()
        assert first.is_success and second.is_success
        assert second.value == pytest.approx(0.0, abs=1e-6)


class TestFailedDispatchLeavesProblemEditable:
    def test_unknown_priority(self):
        """Test that a rejected priority does not freeze the problem."""
        problem = hs71_problem()
        with pytest.raises(ValueError):
            get_solver("scipy-slsqp", problem, priority="fastest")
        assert not problem.frozen
        problem.set_starting_point([1.0, 1.0, 1.0, 1.0])

    def test_unknown_name(self):
        """Test that an unknown backend name does not freeze the problem."""
        problem = hs71_problem()
        with pytest.raises(BackendNotFound):
            get_solver("nope", problem)
        assert not problem.frozen
