"""Shared typing aliases used across diffit."""

from collections.abc import Sequence
from typing import Union

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]

# Scalar abscissa or a whole sample grid; evaluation is vectorized over either.
XValue = Union[float, FloatArray]

# Flat override vector handed to Function.y/dy by the fitter.
ParValues = Union[Sequence[float], FloatArray]
