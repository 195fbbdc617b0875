class KundaliError(Exception):
    """
    Base exception for all kundali-related domain errors.
    """
    pass


class InvalidBirthDataError(KundaliError):
    """
    Raised when birth inputs are invalid or inconsistent.

    Covers missing or malformed instants, non-finite coordinates,
    out-of-range latitude/longitude and an as-of instant that
    precedes the birth instant. Never retryable.
    """
    pass


class ComputationError(KundaliError):
    """
    Raised when astronomical calculation fails.
    """
    pass


class EphemerisRangeError(ComputationError):
    """
    Raised when an instant falls outside the ephemeris model's
    supported range, or the ephemeris library itself fails.
    """
    pass


class PolarLatitudeError(ComputationError):
    """
    Raised when the ascendant cannot be derived because the
    latitude is too close to a pole.
    """
    pass
