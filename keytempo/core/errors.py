"""Exception types raised by keytempo.

"No tempo" and "no key" are not errors: they are reported as ``None``
fields on :class:`~keytempo.core.result.AnalysisResult`.
"""


class AnalysisError(Exception):
    """Base class for keytempo errors."""
    pass


class InvalidInputError(AnalysisError, ValueError):
    """Raised when the pipeline is wired or called with invalid input.

    The usual cause is an FFT size that is not a power of two, which is
    a programming error rather than a property of the audio.
    """
    pass


class ConfigError(AnalysisError):
    """Raised when configuration loading or validation fails."""
    pass
