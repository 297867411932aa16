"""Error types for Dialect SDK."""
from __future__ import annotations

from typing import Any, Optional


class DialectSdkError(Exception):
    """Base exception for Dialect SDK."""

    code: str = "DIALECT_SDK_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        }


class IllegalArgumentError(DialectSdkError):
    """Caller supplied configuration that is contradictory or unrecognized."""

    code = "ILLEGAL_ARGUMENT"


class UnsupportedOperationError(DialectSdkError):
    """Wallet or backend does not support the requested operation."""

    code = "UNSUPPORTED_OPERATION"


class ResourceNotFoundError(DialectSdkError):
    """Requested resource not found."""

    code = "NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class TokenError(DialectSdkError):
    """Auth token is malformed or failed verification."""

    code = "TOKEN_ERROR"


class BroadcastError(DialectSdkError):
    """Every backend failed a broadcast operation."""

    code = "BROADCAST_FAILED"

    def __init__(self, message: str, failures: dict[str, Exception]):
        super().__init__(
            message,
            details={backend: str(error) for backend, error in failures.items()},
        )
        self.failures = failures


class ApiError(DialectSdkError):
    """Error from a Dialect Cloud API response."""

    code = "API_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.status_code = status_code

    @classmethod
    def from_response(cls, status_code: int, body: dict[str, Any]) -> "ApiError":
        """Create ApiError from HTTP response."""
        message = body.get("message", body.get("detail", "Unknown error"))
        if isinstance(message, list):
            return cls(
                message="Validation Error",
                status_code=status_code,
                code="VALIDATION_ERROR",
                details={"errors": message},
            )
        return cls(
            message=str(message),
            status_code=status_code,
            code=body.get("error") if isinstance(body.get("error"), str) else None,
            details=body.get("details"),
        )


class AuthenticationError(ApiError):
    """Auth token rejected by Dialect Cloud."""

    code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Invalid or expired auth token"):
        super().__init__(message, status_code=401)


class RateLimitError(ApiError):
    """Rate limit exceeded error."""

    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class SolanaRpcError(DialectSdkError):
    """Solana JSON-RPC call returned an error."""

    code = "SOLANA_RPC_ERROR"

    def __init__(self, message: str, error_data: Optional[dict[str, Any]] = None):
        super().__init__(message, details=error_data)
        self.error_data = error_data or {}
