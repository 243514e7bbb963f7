"""Exceptions raised by the detection core."""


class ConfigurationError(ValueError):
    """Raised for programming or startup faults.

    Examples are a transform invoked with a buffer of the wrong length, an
    empty note table, or an out-of-range engine setting. Never raised for
    silent or degenerate audio.
    """
