"""
Tests for rich rendering of problems and results.
"""

import numpy as np
import pytest
from rich.console import Console

from nlpcore import NoSolution, Solved, SolvedWithWarnings, SolverError
from nlpcore.benchmarks import hs71_problem
from nlpcore.display import print_problem, print_result


@pytest.fixture
def console():
    return Console(record=True, width=120, color_system=None)


class TestPrintProblem:
    def test_variables_and_constraints(self, console):
        """Test the problem tables."""
        print_problem(hs71_problem(), console)
        text = console.export_text()
        assert "x3" in text
        assert "[1, 5]" in text
        assert "[25, inf)" in text
        assert "twice-differentiable" in text


class TestPrintResult:
    def test_solved(self, console):
        """Test the solved panel."""
        result = Solved(x=np.array([1.0, 4.743, 3.821, 1.379]), value=17.014, constraint_values=[25.0, 40.0])
        print_result(result, console)
        text = console.export_text()
        assert "Solved" in text
        assert "17.014" in text

    def test_warnings(self, console):
        """Test that warnings are listed."""
        print_result(SolvedWithWarnings(x=[1.0], value=2.0, warnings=("acceptable level",)), console)
        assert "acceptable level" in console.export_text()

    def test_failures(self, console):
        """Test the failure panels."""
        print_result(NoSolution(reason="infeasible"), console)
        print_result(SolverError(message="boom"), console)
        text = console.export_text()
        assert "No solution" in text
        assert "infeasible" in text
        assert "boom" in text

    def test_library_text_is_not_markup(self, console):
        """Test that brackets in solver messages are printed literally."""
        print_result(SolverError(message="bad value [/x] in model"), console)
        print_result(NoSolution(reason="stopped at [bold]"), console)
        print_result(SolvedWithWarnings(x=[1.0], value=2.0, warnings=("tag [/yellow] leaked",)), console)
        text = console.export_text()
        assert "bad value [/x] in model" in text
        assert "stopped at [bold]" in text
        assert "tag [/yellow] leaked" in text
