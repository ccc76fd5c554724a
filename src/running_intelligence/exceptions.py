"""
Exceptions for the running intelligence package.

The analytics never raise for thin or missing data; they return documented
empty results. These exceptions cover the edges: reading run files and
user-supplied DNA codes. Each carries a message, an error code and optional
details for structured reporting.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Run data
    RUN_FILE_NOT_FOUND = "RUN_FILE_NOT_FOUND"
    RUN_FILE_INVALID = "RUN_FILE_INVALID"
    RUN_RECORD_INVALID = "RUN_RECORD_INVALID"

    # DNA codes
    INVALID_DNA_CODE = "INVALID_DNA_CODE"


class RunIntelligenceError(Exception):
    """
    Base exception for all running intelligence errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON output."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class RunDataError(RunIntelligenceError):
    """Raised when a run file cannot be read or its records are invalid."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.RUN_FILE_INVALID,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if path:
            error_details["path"] = path
        super().__init__(message=message, code=code, details=error_details)


class InvalidCodeError(RunIntelligenceError):
    """Raised when a user-supplied DNA code cannot be decoded."""

    def __init__(self, code_value: str) -> None:
        super().__init__(
            message=f"Invalid DNA code: {code_value!r} (expected RD- followed by five digits 1-5)",
            code=ErrorCode.INVALID_DNA_CODE,
            details={"code": code_value},
        )
