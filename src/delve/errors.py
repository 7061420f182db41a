class DelveError(Exception):
    """Base error for the delve simulation core."""


class ConfigError(DelveError):
    """Raised when the balance configuration cannot be loaded or validated."""


class EmptyChoiceError(DelveError, IndexError):
    """Raised when picking from an empty collection.

    Callers must guarantee non-empty inputs; hitting this is a programming error.
    """
