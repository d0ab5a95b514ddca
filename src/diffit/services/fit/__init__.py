"""Batch fitting service."""

from diffit.services.fit.service import CurveFitResult, FitService, PeakResult

__all__ = ["CurveFitResult", "FitService", "PeakResult"]
