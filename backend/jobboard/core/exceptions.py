"""Domain exceptions and their HTTP mapping."""

from typing import Any, Optional

from fastapi import status


class JobBoardError(Exception):
    """Base exception for errors reported to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"
    headers: Optional[dict[str, str]] = None

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class Unauthorized(JobBoardError):
    """Raised when a request carries no usable identity."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class MissingToken(Unauthorized):
    """Raised when the Authorization header is absent or not a bearer header."""

    def __init__(self, message: str = "No token provided"):
        super().__init__(message)


class InvalidToken(Unauthorized):
    """Raised when a token is malformed, badly signed, or expired."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class InvalidCredentials(Unauthorized):
    """Raised when login credentials do not match a user."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class Forbidden(JobBoardError):
    """Raised on role or ownership mismatch."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class NotFound(JobBoardError):
    """Raised when an entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"

    def __init__(self, entity: str, entity_id: Any = None):
        self.entity = entity
        self.entity_id = entity_id
        self.error = f"{entity} not found"
        if entity_id is None:
            message = f"{entity} does not exist"
        else:
            message = f"{entity} with ID {entity_id} does not exist"
        super().__init__(message)


class ValidationFailed(JobBoardError):
    """Raised when request input is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation failed"

    def __init__(self, details: list[dict[str, str]], message: str = "Invalid input"):
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["details"] = self.details
        return body


class Conflict(JobBoardError):
    """Raised on uniqueness and dependent-child violations."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, error: str = "Conflict"):
        self.error = error
        super().__init__(message)


class UploadError(JobBoardError):
    """Base class for rejected uploads."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Upload error"


class MissingFile(UploadError):
    error = "CV required"

    def __init__(self, message: str = "Please upload your CV (PDF format)"):
        super().__init__(message)


class InvalidFileType(UploadError):
    error = "Invalid file type"

    def __init__(self, content_type: Optional[str]):
        self.content_type = content_type
        super().__init__("Only PDF files are allowed for CV uploads")


class FileTooLarge(UploadError):
    error = "File too large"

    def __init__(self, max_size: int):
        self.max_size = max_size
        megabytes = max_size / (1024 * 1024)
        super().__init__(f"File size must be less than {megabytes:g}MB")
