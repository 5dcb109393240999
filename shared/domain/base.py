"""
Base Domain Classes

Foundational building blocks shared by the equipment and booking contexts:
- ValueObject: Immutable objects compared by value
- DomainError: Base class for recoverable business rule violations
"""

from abc import ABC
from dataclasses import dataclass


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass


class DomainError(Exception):
    """
    Base class for business rule violations

    Every domain error is recoverable by the caller: it carries a stable
    machine-readable ``code``, a human-readable ``message`` and the HTTP
    status the API layer should answer with.
    """
    default_message = "Business rule violated"
    default_code = "domain_error"
    status_code = 400

    def __init__(self, message=None, code=None, **extra):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.extra = extra
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for API responses"""
        payload = {'detail': self.message, 'code': self.code}
        payload.update(self.extra)
        return payload
