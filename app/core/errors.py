from typing import List, Optional, Tuple


class CatalogError(Exception):
    """Base class for errors raised below the HTTP layer."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationFailed(CatalogError):
    """
    One or more fields failed validation. `errors` is a list of
    (field, reason) pairs, reported back to the client as-is.
    """

    status_code = 400
    message = "Validation failed"
    provider = "catalog"
    location = "body"

    def __init__(self, errors: List[Tuple[str, str]], message: Optional[str] = None, location: Optional[str] = None,
                 provider: Optional[str] = None):
        self.errors = list(errors)
        if provider is not None:
            self.provider = provider
        if location is not None:
            self.location = location
        if message is None:
            message = f"{len(self.errors)} validation error(s)"
        super().__init__(message)


class InvalidQuery(ValidationFailed):
    """A predicate could not be evaluated (bad operand, bad regex, unknown operator)."""

    provider = "store"
    location = "query"


class NotFound(CatalogError):
    status_code = 404
    message = "Object not found"


class StoreError(CatalogError):
    """The backing table could not be read or written."""

    status_code = 500
    message = "Storage failure"
