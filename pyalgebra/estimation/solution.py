"""
Kalman filter solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.result import Result


@dataclass(frozen=True)
class KalmanParams:
    """
    Parameter payload of a batch Kalman filter run.

    Row k of estimates and variances belongs to step k (after the k-th
    measurement); gains[k] is the gain used at that step.
    """
    estimates: Matrix
    variances: Matrix
    gains: tuple[Matrix, ...]
    covariance: Matrix


@dataclass
class KalmanSolution:
    """
    User-facing Kalman filter results.

    Wraps the Result and provides per-state trajectories.
    """
    _result: Result[KalmanParams]

    @property
    def estimates(self) -> Matrix:
        """n_steps x n_states matrix of state estimates."""
        return self._result.params.estimates

    @property
    def variances(self) -> Matrix:
        """n_steps x n_states matrix of error variances, diag(P) per step."""
        return self._result.params.variances

    @property
    def gains(self) -> tuple[Matrix, ...]:
        return self._result.params.gains

    @property
    def covariance(self) -> Matrix:
        """Error covariance after the last step."""
        return self._result.params.covariance

    @property
    def final_estimate(self) -> Vector:
        return self.estimates.get_row(self.n_steps - 1)

    @property
    def n_steps(self) -> int:
        return self.estimates.rows

    def trajectory(self, state: int) -> Vector:
        """Estimates of one state component over all steps."""
        return self.estimates.get_col(state)

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text table of estimates and error variances per step."""
        n_states = self.estimates.cols
        lines = [
            "Kalman Filter Results",
            "=" * 60,
            f"Steps: {self.n_steps}",
            f"States: {n_states}",
            "",
            f"{'Step':<6} " + " ".join(f"{'x[' + str(i) + ']':>12}" for i in range(n_states))
            + "  " + " ".join(f"{'var[' + str(i) + ']':>12}" for i in range(n_states)),
            "-" * 60,
        ]
        for k in range(self.n_steps):
            x = " ".join(f"{v:12.4f}" for v in self.estimates.get_row(k))
            var = " ".join(f"{v:12.4f}" for v in self.variances.get_row(k))
            lines.append(f"{k:<6} {x}  {var}")
        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"KalmanSolution(n_steps={self.n_steps}, n_states={self.estimates.cols})"
