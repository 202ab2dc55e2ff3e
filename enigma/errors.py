class EnigmaError(Exception):
    """Base class of every error raised by the machine and its parsers."""


class ConfigError(EnigmaError, ValueError):
    """Malformed alphabet, cycles, rotor selection or machine settings."""


class SymbolError(EnigmaError, LookupError):
    """A symbol that is not part of the alphabet in use."""


class RangeError(EnigmaError, IndexError):
    """An index outside of [0, size of the alphabet)."""
