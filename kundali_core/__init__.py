from kundali_core.domain.kundali.engine import BirthInstant, KundaliEngine, compute
from kundali_core.domain.kundali.errors import (
    ComputationError,
    EphemerisRangeError,
    InvalidBirthDataError,
    KundaliError,
    PolarLatitudeError,
)
from kundali_core.domain.kundali.schemas import CompleteBirthChart

__all__ = [
    "BirthInstant",
    "CompleteBirthChart",
    "ComputationError",
    "EphemerisRangeError",
    "InvalidBirthDataError",
    "KundaliEngine",
    "KundaliError",
    "PolarLatitudeError",
    "compute",
]
