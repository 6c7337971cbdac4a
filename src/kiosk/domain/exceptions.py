"""Domain-level exceptions.

All failures of the order lifecycle are expressed as subclasses of
DomainException so the HTTP and CLI layers can catch them uniformly and
map them to a status code or a user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Client input or configuration was rejected."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderExpiredError(DomainException):
    """The order exists but its time-to-live has elapsed."""


class StorageError(DomainException):
    """The backing store is missing, unreachable or holds unreadable data."""
