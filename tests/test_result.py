"""
Tests for the solver result variants.
"""

import dataclasses
import itertools

import numpy as np
import pytest

from nlpcore import NoSolution, ResultTag, Solved, SolvedWithWarnings, SolverError
from nlpcore.optimizers import SolverResult


@pytest.fixture
def variants():
    return [
        Solved(x=np.array([1.0, 2.0]), value=3.0),
        SolvedWithWarnings(x=np.array([1.0, 2.0]), value=3.0, warnings=("tolerance not reached",)),
        NoSolution(reason="infeasible"),
        SolverError(message="backend crashed"),
    ]


def _describe(result):
    return result.match(
        solved=lambda r: "solved",
        solved_with_warnings=lambda r: "warnings",
        no_solution=lambda r: "none",
        error=lambda r: "error",
    )


class TestVariants:
    def test_each_variant_has_its_own_tag(self, variants):
        """Test variant tags."""
        tags = [v.tag for v in variants]
        assert tags == [
            ResultTag.SOLVED,
            ResultTag.SOLVED_WITH_WARNINGS,
            ResultTag.NO_SOLUTION,
            ResultTag.ERROR,
        ]

    def test_no_two_variants_compare_equal(self, variants):
        """Test that variants are distinct."""
        for a, b in itertools.combinations(variants, 2):
            assert a != b
            assert a.tag != b.tag

    def test_success_flag(self, variants):
        """Test is_success."""
        assert [v.is_success for v in variants] == [True, True, False, False]

    def test_match_dispatches_by_variant(self, variants):
        """Test match dispatch."""
        assert [_describe(v) for v in variants] == ["solved", "warnings", "none", "error"]

    def test_match_requires_every_handler(self, variants):
        """Test that match needs all four handlers."""
        with pytest.raises(TypeError):
            variants[0].match(solved=lambda r: 1, no_solution=lambda r: 2, error=lambda r: 3)

    def test_match_passes_the_result(self, variants):
        """Test the match handler argument."""
        assert variants[3].match(
            solved=lambda r: None,
            solved_with_warnings=lambda r: None,
            no_solution=lambda r: None,
            error=lambda r: r.message,
        ) == "backend crashed"

    def test_warnings_variant_is_not_solved(self, variants):
        """Test that SolvedWithWarnings is its own variant."""
        assert not isinstance(variants[1], Solved)


class TestSolutionPayload:
    def test_payload(self):
        """Test the solution payload."""
        result = Solved(x=[1.0, 2.0], value=np.float64(3.5), constraint_values=[25.0], n_iterations=4)
        assert isinstance(result.x, np.ndarray)
        assert result.value == 3.5
        np.testing.assert_array_equal(result.constraint_values, [25.0])
        assert result.multipliers is None
        assert result.n_iterations == 4

    def test_immutable(self):
        """Test that results are frozen."""
        result = Solved(x=[1.0, 2.0], value=3.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.value = 0.0
        with pytest.raises(ValueError):
            result.x[0] = 5.0

    def test_point_is_copied(self):
        """Test that the result copies the point."""
        x = np.array([1.0, 2.0])
        result = Solved(x=x, value=0.0)
        x[0] = 9.0
        assert result.x[0] == 1.0

    def test_warnings_required(self):
        """Test rejecting empty warnings."""
        with pytest.raises(ValueError):
            SolvedWithWarnings(x=[1.0], value=0.0)
        with pytest.raises(ValueError):
            SolvedWithWarnings(x=[1.0], value=0.0, warnings=[])

    def test_warnings_stored_as_tuple(self):
        """Test warning storage."""
        result = SolvedWithWarnings(x=[1.0], value=0.0, warnings=["a", "b"])
        assert result.warnings == ("a", "b")


class TestToDict:
    def test_solved(self):
        """Test to_dict for Solved."""
        data = Solved(x=[1.0, 2.0], value=3.0, n_function_evals=7).to_dict()
        assert data["status"] == "solved"
        assert data["x"] == [1.0, 2.0]
        assert data["value"] == 3.0
        assert data["n_function_evals"] == 7
        assert data["constraint_values"] is None

    def test_warnings(self):
        """Test to_dict for SolvedWithWarnings."""
        data = SolvedWithWarnings(x=[1.0], value=0.0, warnings=("w",)).to_dict()
        assert data["status"] == "solved_with_warnings"
        assert data["warnings"] == ["w"]

    def test_failures(self):
        """Test to_dict for failures."""
        assert NoSolution(reason="r").to_dict() == {"status": "no_solution", "reason": "r"}
        assert SolverError(message="m").to_dict() == {"status": "error", "message": "m"}

    def test_base_class_is_abstract(self):
        """Test that only the four concrete variants can be instantiated."""
        with pytest.raises(TypeError):
            SolverResult()
