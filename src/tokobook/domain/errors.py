"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def expense_not_found(expense_id: int) -> str:
    """Return message for missing expense."""
    return f"Expense {expense_id} not found"


def address_not_found(address_id: int) -> str:
    """Return message for missing address."""
    return f"Address {address_id} not found"


def customer_not_found(customer_id: int) -> str:
    """Return message for missing customer."""
    return f"Customer {customer_id} not found"


def product_not_found(product_id: int) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def duplicate_name(kind: str, name: str) -> str:
    """Return message for a uniqueness violation on a natural key."""
    return f"{kind} with name '{name}' already exists"


def required_field(field: str) -> str:
    """Return message for a missing required field."""
    return f"{field} is required"


def store_not_found(store_id: int) -> str:
    """Return message for missing store."""
    return f"Store {store_id} not found"
