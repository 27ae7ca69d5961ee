"""
API error types and their JSON rendering.

Every expected failure a handler can produce is an APIError subclass that
knows its HTTP status and body shape. Handlers raise them; the exception
handlers registered in main.py turn them into responses, so route code never
builds error JSON by hand.

Body shapes:
- single error: {"message": "..."}
- validation collection: {"errors": ["...", "..."]}
"""

from enum import Enum
from typing import Iterable, List, Optional
from fastapi import status


def format_validation_errors(errors: Iterable[dict]) -> List[str]:
    """
    Flatten pydantic error dicts into "field: message" strings.

    The "body" segment of a location is dropped, so a bad title reads
    "title: Input should be a valid string".
    """
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        if location:
            messages.append(f"{location}: {error.get('msg')}")
        else:
            messages.append(error.get("msg"))
    return messages


class APIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationFailed(APIError):
    """Client input failed one or more field rules; carries every message found."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(self.default_message)

    def to_dict(self) -> dict:
        return {"errors": self.errors}


class AccessDenied(APIError):
    # Deliberately generic: callers never learn which credential check failed
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access Denied"


class OperationForbidden(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Operation forbidden"


class ResourceNotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource was not found."


class StoreErrorKind(str, Enum):
    """What went wrong inside the persistence layer."""
    VALIDATION = "validation"  # model-level field rules rejected the record
    UNIQUE_VIOLATION = "unique_violation"  # a unique constraint fired on commit
    DATABASE = "database"  # anything else the database raised


class StoreError(Exception):
    """
    Failure raised by the service layer.

    Handlers branch on `kind` instead of inspecting exception class names:
    VALIDATION and UNIQUE_VIOLATION map to a 400, everything else is
    re-raised and ends up in the 500 handler.
    """

    def __init__(self, kind: StoreErrorKind, messages: Optional[Iterable[str]] = None):
        self.kind = kind
        self.messages: List[str] = list(messages or [])
        super().__init__(f"{kind.value}: {'; '.join(self.messages)}")
