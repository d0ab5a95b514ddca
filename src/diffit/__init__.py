"""diffit - Peak and background fitting for 1D diffraction curves.

Public API:
    - FitService: Batch fitting of curves
    - Dfgram: Lazily fitted curve with background and peak caches
    - FitSetup: Background ranges, degree and peak list

Configuration:
    - DiffitConfig: Main configuration object
    - FitConfig, BackgroundConfig, PeakConfig, OutputConfig: Sub-configurations
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from diffit.core.domain.config import (  # noqa: E402
    BackgroundConfig,
    DiffitConfig,
    FitConfig,
    OutputConfig,
    PeakConfig,
)
from diffit.core.domain.curve import XY, Curve  # noqa: E402
from diffit.core.domain.dfgram import Dfgram  # noqa: E402
from diffit.core.domain.range import Range, Ranges  # noqa: E402
from diffit.core.domain.setup import FitSetup, PeakSetup  # noqa: E402
from diffit.services import CurveFitResult, FitService, PeakResult  # noqa: E402

__all__ = [
    "XY",
    "BackgroundConfig",
    "Curve",
    "CurveFitResult",
    "Dfgram",
    "DiffitConfig",
    "FitConfig",
    "FitService",
    "FitSetup",
    "OutputConfig",
    "PeakConfig",
    "PeakResult",
    "PeakSetup",
    "Range",
    "Ranges",
    "__version__",
]
