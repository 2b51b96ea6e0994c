"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each error carries the ids or field names it is about so a caller can act on
them without parsing the message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    def __init__(self, message: str, fields: tuple[str, ...] | list[str] = ()) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class InvalidTransitionError(DomainException):
    """An order was asked to move along an edge the state machine forbids."""

    def __init__(self, order_id: str | None, current: str, target: str) -> None:
        super().__init__(
            f"Order #{order_id}: cannot move from {current} to {target}"
        )
        self.order_id = order_id
        self.current = current
        self.target = target


class ConflictError(DomainException):
    """The request conflicts with the current state (e.g. double assignment)."""


class PermissionDeniedError(DomainException):
    """The caller's role may not perform the requested action."""

    def __init__(self, role: str, action: str) -> None:
        super().__init__(f"Role {role} is not allowed to {action}")
        self.role = role
        self.action = action


class BatchValidationError(DomainException):
    """One or more selected orders are not eligible for a batch."""

    def __init__(self, order_ids: list[str], reason: str = "not ACTIVE") -> None:
        self.order_ids = list(order_ids)
        super().__init__(
            f"Batch rejected, orders {reason}: {', '.join(self.order_ids)}"
        )


class AutomationFailedError(DomainException):
    """The external packing optimizer failed or timed out."""


class PayloadTooLargeError(DomainException):
    """An uploaded file exceeds the size cap."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"File is {size} bytes, maximum allowed is {limit} bytes")
        self.size = size
        self.limit = limit
