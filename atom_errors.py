"""
Errors raised while building Atom feed objects.
"""


class AtomError(Exception):
    """Base class for all feed building errors."""


class InvalidInput(AtomError, ValueError):
    """A constructor or setter was given a value its field does not accept."""

    def __init__(self, field: str, value, reason: str = "is not valid"):
        self.field = field
        self.value = value
        super().__init__(f"Argument {field} {reason}: {value!r}")


class NotPresent(AtomError, LookupError):
    """An optional field was read before it was set."""

    def __init__(self, owner: str, field: str):
        self.owner = owner
        self.field = field
        super().__init__(f"{owner} has no {field} set")
