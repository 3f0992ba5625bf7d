# file: exceptions.py

"""Custom exceptions for the host suitability and power models."""

class HostModelError(Exception):
    """Base exception for host model errors."""
    pass

class InvalidParameterError(HostModelError, ValueError):
    """Exception for implausible calibration or link parameters."""
    pass

class OutOfRangeError(HostModelError, ValueError):
    """Exception for a utilization fraction outside [0, 1]."""
    pass

class InvalidReasonError(HostModelError, ValueError):
    """Exception for a missing or empty unsuitability reason."""
    pass
