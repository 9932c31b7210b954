class ConstructorError(Exception):
    """Base class for every error raised by the page constructor."""


class ValidationError(ConstructorError):
    """Blank required attribute, duplicate or reserved code_name, missing template."""


class TypeMismatchError(ConstructorError):
    """A value cannot be coerced to the declared type of its field."""


class NotFoundError(ConstructorError):
    """A page, template or field id passed to a mutating operation does not exist."""


class TransactionError(ConstructorError):
    """The record store refused the transaction (conflict or constraint violation)."""
