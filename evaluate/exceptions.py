"""
Exceptions raised by Evaluate.

Failures of the measured work itself are never wrapped: whatever a Work
target or the Value round trip raises reaches the caller unchanged.
"""


class EvaluateError(Exception):
    """Base exception for evaluation errors."""
    pass


class InvalidTerminatingAction(EvaluateError, ValueError):
    """Raised when an unknown terminating action is requested."""
    pass


class ReportAlreadyEmitted(EvaluateError, RuntimeError):
    """Raised when a second terminating action is invoked on one evaluation."""
    pass


class ProbeError(EvaluateError):
    """Base exception for probe errors."""
    pass


class UnknownProbeError(ProbeError, ValueError):
    """Raised when a probe name is not registered."""
    pass
