#!/usr/bin/env python
"""
Solve Hock-Schittkowski problem 71 with a backend chosen by name.

    python examples/hs71.py                 # scipy-slsqp
    python examples/hs71.py ipopt-td -v     # exact-Hessian IPOPT, with logging

Exit status: 0 when a solution is found, 2 otherwise.
"""

import argparse
import logging
import sys

from rich.console import Console

from nlpcore import NLPError, get_available_backends, get_solver
from nlpcore.benchmarks import hs71_problem
from nlpcore.display import print_problem, print_result


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("backend", nargs="?", default="scipy-slsqp")
    parser.add_argument("--priority", choices=["robustness", "speed", "accuracy", "balanced"])
    parser.add_argument("-v", "--verbose", action="store_true", help="log solver progress")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    console = Console()

    problem = hs71_problem()
    try:
        solver = get_solver(args.backend, problem, priority=args.priority)
    except NLPError as e:
        console.print(f"[red]{e}[/red]")
        console.print(f"Available backends: {', '.join(get_available_backends())}")
        return 2

    print_problem(problem, console)
    result = solver.minimum()
    print_result(result, console)

    return result.match(
        solved=lambda r: 0,
        solved_with_warnings=lambda r: 0,
        no_solution=lambda r: 2,
        error=lambda r: 2,
    )


if __name__ == "__main__":
    sys.exit(main())
