"""
Error kinds raised while resolving instructions into steps or generating code.

Everything derives from StepResolutionError so callers can present any failure
with a single except clause. Only ConfigurationError is final; the remote
resolver retries the other kinds within its attempt budget.
"""


class StepResolutionError(Exception):
    retryable: bool = True


class ConfigurationError(StepResolutionError):
    """No usable model credential (missing, or rejected by the provider)."""
    retryable = False


class LLMTimeoutError(StepResolutionError, TimeoutError):
    pass


class TransportError(StepResolutionError):
    pass


class ResponseParseError(StepResolutionError, ValueError):
    pass


class ResponseShapeError(StepResolutionError, ValueError):
    pass
