"""Exceptions raised at the engine boundary."""


class InputError(ValueError):
    """Raised when a breakdown, task count or record is invalid."""
