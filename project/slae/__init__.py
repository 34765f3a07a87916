"""
Iterative Solvers for Linear Algebraic Systems
==============================================

This package solves dense systems A @ x = b (2 <= n <= 10) with three
classical iterative methods and records every iteration:

Solvers:
- Jacobi
- Gauss-Seidel
- Steepest (Gradient) Descent

Diagnostics:
- validate / stability_warning: pre-solve checks
- residual / euclidean_norm: post-solve quality of a solution
"""

from .base import (
    IterationRecord,
    Method,
    SolveHistory,
    SolverError,
    InvalidMatrixError,
    ConvergenceGateFailed,
    NumericalOverflowError,
    NearSingularStepError,
    DidNotConvergeError,
)
from .determinant import determinant, minor, leading_principal_minors
from .engine import SOLVERS, solve
from .gauss_seidel import gauss_seidel
from .gradient_descent import gradient_descent
from .jacobi import jacobi
from .linalg_utils import euclidean_norm, max_abs_diff, residual
from .matrix_checks import (
    is_diagonally_dominant,
    is_symmetric,
    is_symmetric_positive_definite,
    stability_warning,
    validate,
)
from .session import SolveSession
from .systems import ReferenceSystem, random_system, reference_systems

__all__ = [
    'solve',
    'SOLVERS',
    'jacobi',
    'gauss_seidel',
    'gradient_descent',
    'Method',
    'IterationRecord',
    'SolveHistory',
    'SolveSession',
    'SolverError',
    'InvalidMatrixError',
    'ConvergenceGateFailed',
    'NumericalOverflowError',
    'NearSingularStepError',
    'DidNotConvergeError',
    'validate',
    'is_diagonally_dominant',
    'is_symmetric',
    'is_symmetric_positive_definite',
    'stability_warning',
    'determinant',
    'minor',
    'leading_principal_minors',
    'max_abs_diff',
    'residual',
    'euclidean_norm',
    'ReferenceSystem',
    'reference_systems',
    'random_system',
]
