"""Exception hierarchy for the onset detection engine."""


class OnsetDetectionError(Exception):
    """Base class for all errors raised by onset_detection."""


class ConfigurationError(OnsetDetectionError, ValueError):
    """Invalid hop/frame sizes or an unknown detection function name."""


class InputSizeError(OnsetDetectionError, ValueError):
    """A buffer does not have the length the receiving stage expects."""


class TransformResourceError(OnsetDetectionError, RuntimeError):
    """FFT resources could not be acquired, or were used while not prepared."""


class EngineStateError(OnsetDetectionError, RuntimeError):
    """Operation attempted on an engine that has been closed."""
