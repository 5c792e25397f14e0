"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidCodeError(ValidationError):
    """Account code is not a dot-separated sequence of digit segments."""

    def __init__(self, code: str, reason: str):
        super().__init__(invalid_code(code, reason))
        self.code = code
        self.reason = reason


class UnknownCategoryError(ValidationError):
    """Category label is not a member of the reporting taxonomy."""

    def __init__(self, label: str):
        super().__init__(unknown_category(label))
        self.label = label


class EmptyNameError(ValidationError):
    """Account name is empty after trimming."""

    def __init__(self, account_code: str):
        super().__init__(empty_account_name(account_code))
        self.account_code = account_code


class BatchValidationError(ValidationError):
    """A bulk mapping batch was rejected before any write.

    ``index`` and ``account_code`` point at the first offending entry; both
    are None when the batch itself is malformed (e.g. empty).
    """

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        account_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.index = index
        self.account_code = account_code


class CorruptMovementError(DomainError):
    """Movement source references an account code that fails validation."""

    def __init__(self, code: str, client_id: str, year: int, statement_type: str):
        super().__init__(corrupt_movement_code(code, client_id, year, statement_type))
        self.code = code


class PersistenceError(DomainError):
    """Storage layer failed; nothing from the failed operation was kept."""


def invalid_code(code: str, reason: str) -> str:
    """Return message for a malformed account code."""
    return f"Invalid account code '{code}': {reason}"


def unknown_category(label: str) -> str:
    """Return message for a label outside the category taxonomy."""
    return f"Unknown category '{label}'. Run 'dremap categories' to see valid categories"


def empty_account_name(account_code: str) -> str:
    """Return message for a mapping without an account name."""
    return f"Account name for '{account_code}' must not be empty"


def empty_client_id() -> str:
    """Return message for a missing client identifier."""
    return "Client ID must not be empty"


def invalid_statement_type(value: object) -> str:
    """Return message for an unsupported statement type."""
    return f"Invalid statement type '{value}'. Must be one of: dre, patrimonial"


def batch_entry_invalid(index: int, account_code: str, error: Exception) -> str:
    """Return message for the first invalid entry of a bulk batch."""
    return f"Batch rejected at entry {index + 1} ('{account_code}'): {error}"


def empty_batch() -> str:
    """Return message for a bulk batch with no entries."""
    return "Batch rejected: no mappings provided"


def corrupt_movement_code(code: str, client_id: str, year: int, statement_type: str) -> str:
    """Return message for an invalid code found in stored movements."""
    return (
        f"Corrupt movement data for client '{client_id}' ({year}, {statement_type}): "
        f"invalid account code '{code}'"
    )


def movement_row_invalid(row: int, reason: str) -> str:
    """Return message for a rejected movement row."""
    return f"Movement {row}: {reason}"


def storage_failure(operation: str, error: Exception) -> str:
    """Return message for a failed storage operation."""
    return f"Could not {operation}: {error}"
