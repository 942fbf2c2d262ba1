"""
Exceptions raised by the tap detection pipeline.
"""


class TapWindowError(Exception):
    """
    Base class for all pipeline errors.
    """


class ConfigurationError(TapWindowError, ValueError):
    """
    Raised at construction time when the pipeline configuration is invalid.
    A pipeline is never usable in an invalid configuration.
    """


class InferenceFailure(TapWindowError, RuntimeError):
    """
    Raised when the inference backend fails or returns an unusable output.
    No default probability is ever substituted for a failed inference.
    """
