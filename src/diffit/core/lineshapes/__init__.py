"""Peak function package.

Importing the package registers every built-in function type, so
``function_from_json`` can rebuild any persisted function.
"""

from diffit.core.lineshapes.registry import (
    FUNCTIONS,
    function_from_json,
    get_function,
    list_functions,
    list_peak_types,
    make_function,
    register_function,
)
from diffit.core.lineshapes.base import AmplitudePeak, PeakFunction, guess_peak
from diffit.core.lineshapes.gaussian import Gaussian
from diffit.core.lineshapes.lorentzian import CauchyLorentz
from diffit.core.lineshapes.pvoigt import PseudoVoigt1, PseudoVoigt2
from diffit.core.lineshapes.raw import Raw

__all__ = [
    "FUNCTIONS",
    "AmplitudePeak",
    "CauchyLorentz",
    "Gaussian",
    "PeakFunction",
    "PseudoVoigt1",
    "PseudoVoigt2",
    "Raw",
    "function_from_json",
    "get_function",
    "guess_peak",
    "list_functions",
    "list_peak_types",
    "make_function",
    "register_function",
]
