"""Fitting result classes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FitReport:
    """Outcome of one Levenberg-Marquardt run."""

    success: bool
    iterations: int
    chisqr: float
    n_points: int
    n_params: int
    message: str

    @property
    def dof(self) -> int:
        """Degrees of freedom, at least one."""
        return max(self.n_points - self.n_params, 1)

    @property
    def redchi(self) -> float:
        """Reduced chi-squared."""
        return self.chisqr / self.dof

    @classmethod
    def skipped(cls, n_points: int, n_params: int) -> FitReport:
        """Report for a fit with nothing to optimize."""
        reason = "no data points" if n_points == 0 else "no free parameters"
        return cls(
            success=False,
            iterations=0,
            chisqr=float("nan"),
            n_points=n_points,
            n_params=n_params,
            message=f"Fit skipped: {reason}",
        )
