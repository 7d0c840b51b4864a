"""
Built-in solver backend implementations.

Each backend wraps an optimization library and implements the SolverBackend interface.
"""

from .scipy_backend import COBYLABackend, SLSQPBackend, TrustConstrBackend
from .ipopt_backend import IPOPTBackend, IPOPTExactHessianBackend

BUILTIN_BACKENDS = (
    SLSQPBackend,
    TrustConstrBackend,
    COBYLABackend,
    IPOPTBackend,
    IPOPTExactHessianBackend,
)

__all__ = [
    "BUILTIN_BACKENDS",
    "SLSQPBackend",
    "TrustConstrBackend",
    "COBYLABackend",
    "IPOPTBackend",
    "IPOPTExactHessianBackend",
]
