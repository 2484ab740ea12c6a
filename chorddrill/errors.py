"""Exceptions raised by the chord drill engine."""


class ConfigurationError(ValueError):
    """
    A level, catalog lookup or generation request refers to something that does not exist.

    Examples: an unknown key name, an unknown chord-quality id, an empty pool of
    selectable roots or patterns. Always raised synchronously to the caller;
    the engine never substitutes a default.
    """
