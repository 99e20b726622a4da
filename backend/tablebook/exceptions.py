"""
TableBook Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions and the single data-access error mapping.
How:   Each exception carries a user-facing message, an HTTP status code and an
       optional context dict. One global handler (registered in main.py)
       renders every TableBookError as `{"message": ...}` with its status.
Who:   Raised by services and by `Database.session()`; caught by the handler.

Exception Hierarchy:
    TableBookError (base)
    ├── ValidationError   → 400 Bad Request (missing required input)
    ├── NotFoundError     → 404 Not Found (zero rows where one was expected)
    ├── ConflictError     → 400 Bad Request (duplicate user id)
    └── DatabaseError     → 500 Internal Server Error (any data-access failure)

Data-access failures are classified into a small closed set of kinds
(`DataAccessFailure`) for the server log. The kind never changes the
response: every DatabaseError is a 500 with the same generic message.
"""

from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import exc as sa_exc


INTERNAL_ERROR_MESSAGE = "Internal server error"


class TableBookError(Exception):
    """
    Base exception for all TableBook application errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        status_code: HTTP status the global handler responds with
        context:     Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = INTERNAL_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(TableBookError):
    """
    Raised when client input is missing required fields.

    HTTP:    400 Bad Request
    When:    Checked before any statement runs, so no write is attempted.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Please fulfill all required fields",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(TableBookError):
    """Raised when a statement matched no rows. HTTP 404."""

    status_code = 404


class ConflictError(TableBookError):
    """
    Raised when registering a user id that already exists.

    HTTP:    400 Bad Request (the public contract predates a 409 mapping)
    """

    status_code = 400


class DataAccessFailure(str, Enum):
    """Closed set of data-access failure kinds."""

    CONNECTION = "connection"
    STATEMENT = "statement"
    CONSTRAINT = "constraint"
    UNKNOWN = "unknown"


class DatabaseError(TableBookError):
    """
    Raised when a database operation fails for any reason.

    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic. The failure kind
        and the original driver error are kept in `context` and logged
        server-side only.
    """

    status_code = 500

    def __init__(
        self,
        kind: DataAccessFailure = DataAccessFailure.UNKNOWN,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["kind"] = kind.value
        super().__init__(message=INTERNAL_ERROR_MESSAGE, context=ctx)
        self.kind = kind


def classify_database_error(exc: BaseException) -> DataAccessFailure:
    """
    Maps a raised exception onto a DataAccessFailure kind.

    Order matters: every DBAPI error is a StatementError subclass, so the
    specific checks run before the generic statement check.
    """
    if isinstance(exc, sa_exc.IntegrityError):
        return DataAccessFailure.CONSTRAINT
    if isinstance(
        exc,
        (
            sa_exc.OperationalError,
            sa_exc.InterfaceError,
            sa_exc.DisconnectionError,
            sa_exc.TimeoutError,  # pool checkout timed out
            OSError,
        ),
    ):
        return DataAccessFailure.CONNECTION
    if isinstance(exc, sa_exc.StatementError):
        return DataAccessFailure.STATEMENT
    return DataAccessFailure.UNKNOWN


def map_database_error(exc: BaseException) -> DatabaseError:
    """Wraps any data-access exception in a DatabaseError with its kind and cause."""
    kind = classify_database_error(exc)
    return DatabaseError(
        kind=kind,
        context={
            "error_type": type(exc).__name__,
            "original_error": str(exc),
        },
    )
