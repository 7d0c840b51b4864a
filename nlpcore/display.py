"""
Terminal rendering of problems and results with rich.

Used by the example scripts; nothing in the solve path depends on it.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .optimizers.result import (
    NoSolution,
    Result,
    Solved,
    SolvedWithWarnings,
    SolverError,
)
from .problem import Problem


def problem_table(problem: Problem) -> Table:
    """Variables with bounds and starting values."""
    table = Table(title=f"minimize {problem.objective.name}")
    table.add_column("Variable", style="cyan")
    table.add_column("Bounds", style="magenta")
    table.add_column("Start", justify="right")

    start = problem.starting_point
    for i, (name, bound) in enumerate(zip(problem.argument_names, problem.argument_bounds)):
        table.add_row(name, str(bound), "-" if start is None else f"{start[i]:.6g}")
    return table


def constraints_table(problem: Problem) -> Table:
    table = Table(title=f"Constraints ({len(problem.constraints)})")
    table.add_column("#", justify="right")
    table.add_column("Function", style="cyan")
    table.add_column("Tier")
    table.add_column("Bounds", style="magenta")
    table.add_column("Scales", justify="right")

    for i, constraint in enumerate(problem.constraints):
        table.add_row(
            str(i),
            constraint.name,
            constraint.function.tier.label,
            ", ".join(str(b) for b in constraint.bounds),
            ", ".join(f"{s:g}" for s in constraint.scales),
        )
    return table


def print_problem(problem: Problem, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(problem_table(problem))
    if problem.constraints:
        console.print(constraints_table(problem))


def _solution_body(result) -> str:
    lines = [
        f"Objective: {result.value:.10g}",
        f"x = [{', '.join(f'{v:.8g}' for v in result.x)}]",
    ]
    if result.constraint_values is not None and result.constraint_values.size:
        lines.append(f"g(x) = [{', '.join(f'{v:.8g}' for v in result.constraint_values)}]")
    if result.multipliers is not None and result.multipliers.size:
        lines.append(f"lambda = [{', '.join(f'{v:.6g}' for v in result.multipliers)}]")
    lines.append(
        f"Iterations: {result.n_iterations}, evaluations: {result.n_function_evals} "
        f"(gradients: {result.n_gradient_evals})"
    )
    return "\n".join(lines)


def result_panel(result: Result) -> Panel:
    """Colored panel for any result variant."""

    def solved(r: Solved) -> Panel:
        return Panel(_solution_body(r), title="Solved", border_style="green")

    def solved_with_warnings(r: SolvedWithWarnings) -> Panel:
        warnings = "\n".join(f"[yellow]! {escape(w)}[/yellow]" for w in r.warnings)
        return Panel(
            f"{_solution_body(r)}\n{warnings}", title="Solved with warnings", border_style="yellow"
        )

    def no_solution(r: NoSolution) -> Panel:
        return Panel(escape(r.reason) or "No solution found", title="No solution", border_style="red")

    def error(r: SolverError) -> Panel:
        return Panel(f"[bold red]{escape(r.message)}[/bold red]", title="Solver error", border_style="red")

    return result.match(
        solved=solved,
        solved_with_warnings=solved_with_warnings,
        no_solution=no_solution,
        error=error,
    )


def print_result(result: Result, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(result_panel(result))
