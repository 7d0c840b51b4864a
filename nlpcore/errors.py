"""
Exception taxonomy for problem construction and solver dispatch.

Construction errors are raised at the call that introduces the inconsistency.
Solve-time outcomes (no solution, backend failure) are never raised: they are
returned as result variants from SolverBackend.minimum().

Each error also derives from the closest builtin so that callers catching
ValueError / IndexError / TypeError keep working.
"""

from typing import Optional


class NLPError(Exception):
    """Base class for all nlpcore errors."""


class DimensionMismatch(NLPError, ValueError):
    """Vector, bound or scale length disagrees with a declared size."""

    def __init__(self, what: str, expected: int, actual: int):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected size {expected}, got {actual}")


class InvalidInterval(NLPError, ValueError):
    """Interval with lower > upper or a NaN endpoint."""


class InvalidScale(NLPError, ValueError):
    """Constraint scale that is not a strictly positive finite number."""


class IndexOutOfRange(NLPError, IndexError):
    """Output or variable index outside its valid range."""

    def __init__(self, what: str, index: int, size: int):
        self.what = what
        self.index = index
        self.size = size
        super().__init__(f"{what} index {index} out of range [0, {size})")


class CapabilityMismatch(NLPError, TypeError):
    """Derivative requested from a function that does not provide it."""


class ProblemFrozen(NLPError, RuntimeError):
    """Mutation attempted on a problem already handed to a solver."""


class BackendNotFound(NLPError, LookupError):
    """No backend registered under the requested name."""

    def __init__(self, name: str, known: Optional[list] = None):
        self.name = name
        self.known = sorted(known or [])
        message = f"No solver backend named '{name}'"
        if self.known:
            message += f" (registered: {', '.join(self.known)})"
        super().__init__(message)


class BackendUnavailable(BackendNotFound):
    """Backend is registered but its third-party library is not installed."""

    def __init__(self, name: str, library: str):
        self.library = library
        NLPError.__init__(
            self,
            f"Solver backend '{name}' requires '{library}', which is not installed",
        )
        self.name = name
        self.known = []


class UnsupportedFunctionTier(NLPError, TypeError):
    """A problem function is below the tier a backend requires."""

    def __init__(self, backend: str, role: str, function_name: str, required, actual):
        self.backend = backend
        self.role = role
        self.function_name = function_name
        self.required = required
        self.actual = actual
        super().__init__(
            f"Backend '{backend}' needs a {required.label} {role}, "
            f"but '{function_name}' is only {actual.label}"
        )


class BadGradient(NLPError, AssertionError):
    """Analytic derivative disagrees with its finite-difference estimate."""
