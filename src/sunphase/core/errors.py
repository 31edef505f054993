class SunphaseError(Exception):
    """Base error."""

class InputValidationError(SunphaseError, ValueError):
    """Raised when a location, offset or instant argument is malformed."""
