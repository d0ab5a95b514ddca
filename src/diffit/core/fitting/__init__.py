"""Fitting core: parameters, functions and the Levenberg-Marquardt fitter."""

from diffit.core.fitting.functions import Function, Polynom, SimpleFunction, SumFunctions
from diffit.core.fitting.optimizer import LevenbergMarquardtFitter
from diffit.core.fitting.parameters import Parameter
from diffit.core.fitting.results import FitReport

__all__ = [
    "FitReport",
    "Function",
    "LevenbergMarquardtFitter",
    "Parameter",
    "Polynom",
    "SimpleFunction",
    "SumFunctions",
]
