class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmptyInputError(ValidationError):
    """Raised when an attendance submission carries no marks."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class StoreError(DomainError):
    """Raised when the record store fails to read or write.

    Never retried automatically; a failed batched insert wrote nothing.
    """


class DataIntegrityWarning(DomainError):
    """Raised for a stored value the domain does not recognise.

    Callers log it and skip the offending record; it is never fatal.
    """
