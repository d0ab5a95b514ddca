"""Domain value types: ranges, curves and configuration models.

``Dfgram`` and ``FitSetup`` live in their own modules and depend on the
fitting core, so they are imported from there rather than re-exported here.
"""

from diffit.core.domain.curve import XY, Curve
from diffit.core.domain.outcome import RawOutcome
from diffit.core.domain.range import Range, Ranges

__all__ = ["XY", "Curve", "Range", "Ranges", "RawOutcome"]
