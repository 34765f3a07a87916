"""
Solve Session
=============

Caller-owned state for an interactive front end: the system being edited,
the selected method and the outcome of the last solve. The engine itself
keeps nothing between calls; a session is just a convenient place to hold
what a form or CLI needs to show.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import numpy as np

from .base import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_TOLERANCE,
    SLOW_CONVERGENCE_ITERATIONS,
    Method,
    SolveHistory,
)
from .engine import solve
from .linalg_utils import euclidean_norm, residual
from .matrix_checks import stability_warning


@dataclass
class SolveSession:
    """A system plus the settings and result of its most recent solve."""
    A: np.ndarray
    b: np.ndarray
    method: Method = Method.JACOBI
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    history: Optional[SolveHistory] = field(default=None, repr=False)

    def __post_init__(self):
        self.method = Method.parse(self.method)
        self.A = np.array(self.A, dtype=np.float64)
        self.b = np.array(self.b, dtype=np.float64).flatten()

    @property
    def size(self) -> int:
        return len(self.b)

    def check(self) -> str:
        """Stability warning for the current system and method ('' if none)."""
        return stability_warning(self.A, self.method)

    def run(self, verbose: bool = False) -> SolveHistory:
        """
        Solve the current system and remember the history.

        Failures propagate unchanged; the previous history is cleared first so
        a failed solve never leaves a stale result behind.
        """
        self.history = None
        self.history = solve(self.method, self.A, self.b,
                             tolerance=self.tolerance,
                             max_iterations=self.max_iterations,
                             verbose=verbose)
        return self.history

    def residual_norm(self) -> float:
        return euclidean_norm(residual(self.A, self._last().solution, self.b))

    def report(self) -> str:
        """Plain-text summary of the last solve."""
        history = self._last()
        final = history.final

        lines: List[str] = [
            f"Method: {history.method.display_name}",
            f"Number of iterations: {history.iterations}",
            f"Total time: {final.elapsed_ms:.2f} ms",
            "",
            "Solution:",
        ]
        for i, value in enumerate(final.solution):
            lines.append(f"x{i + 1} = {value:.6f}")

        lines.append("")
        lines.append(f"Residual norm: {self.residual_norm():.6E}")
        lines.append(f"Final error: {final.error:.6E}")

        if history.is_slow:
            lines.append("")
            lines.append(f"Note: the method required {history.iterations} iterations "
                         f"(more than {SLOW_CONVERGENCE_ITERATIONS}). This might indicate "
                         f"slow convergence or a poorly conditioned system.")

        return "\n".join(lines)

    def _last(self) -> SolveHistory:
        if self.history is None:
            raise RuntimeError("No solution available, call run() first")
        return self.history
