"""Error types raised by the storage and aggregation layers."""


class FoodLogError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FoodLogError):
    """Malformed input at the boundary, correctable by the caller."""


class NotFoundError(FoodLogError):
    """A referenced food, serving or entry does not exist."""


class IntegrityError(FoodLogError):
    """A write would violate a cross-entity constraint."""


class StorageFault(FoodLogError):
    """The database failed or its lock could not be acquired."""
