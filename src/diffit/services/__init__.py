"""Service layer exposing the high-level diffit API."""

from diffit.services.fit import CurveFitResult, FitService, PeakResult

__all__ = ["CurveFitResult", "FitService", "PeakResult"]
