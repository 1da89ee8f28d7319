"""Exception classes for the Kafka Connect client"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class KafkaConnectErrorCategory(str, Enum):
    """Error category codes"""
    CONFIG = "CONFIG"
    VALIDATION = "VAL"
    REST = "REST"
    API = "API"
    USAGE = "USAGE"
    UNKNOWN = "UNKNOWN"


class KafkaConnectError(Exception):
    """
    Base exception for Kafka Connect client errors

    All errors in the library extend from this class.
    Provides consistent error handling and categorization.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status_code = status_code
        self.cause = cause
        self.details = details
        self.timestamp = datetime.now(timezone.utc)
        self.category = self._determine_category(code)

    def _determine_category(
        self, code: Optional[str]
    ) -> KafkaConnectErrorCategory:
        """Determine error category from code"""
        if not code:
            return KafkaConnectErrorCategory.UNKNOWN

        if code.startswith("CONFIG"):
            return KafkaConnectErrorCategory.CONFIG
        if code.startswith("VAL"):
            return KafkaConnectErrorCategory.VALIDATION
        if code.startswith("REST"):
            return KafkaConnectErrorCategory.REST
        if code.startswith("API"):
            return KafkaConnectErrorCategory.API
        if code.startswith("USAGE"):
            return KafkaConnectErrorCategory.USAGE

        return KafkaConnectErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "status_code": self.status_code,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: KafkaConnectErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [str(self)]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        return " ".join(parts)


class ValidationError(KafkaConnectError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class ConfigurationError(KafkaConnectError):
    """
    Fatal configuration error

    Raised while building the transport, e.g. when a construction hook
    returns None or the API host cannot be parsed.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        cause: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause, details=details)


class UsageError(KafkaConnectError):
    """Programmer error, such as submitting through a closed transport"""

    def __init__(self, message: str, code: str = "USAGE01") -> None:
        super().__init__(message, code=code)


class RestException(KafkaConnectError):
    """
    Transport failure base class

    Carries the original low-level error as ``cause``.
    """

    def __init__(
        self,
        message: str,
        code: str = "REST00",
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause)


class ConnectionException(RestException):
    """
    The server could not be reached or negotiated with

    Covers socket, protocol and TLS handshake failures. These are
    candidates for a retry by the caller.
    """

    def __init__(
        self, message: str, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message, code="REST01", cause=cause)


class ResultParsingException(RestException):
    """The exchange happened but the request or response payload was unusable"""

    def __init__(
        self, message: str, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message, code="REST02", cause=cause)


class InvalidRequestException(KafkaConnectError):
    """
    The server rejected a request

    ``error_code`` and ``message`` come from the Kafka Connect error body
    when one is present.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        error_code: Optional[int] = None,
        code: str = "API01",
    ) -> None:
        super().__init__(message, code=code, status_code=status_code)
        self.error_code = error_code if error_code is not None else status_code


class UnauthorizedRequestException(InvalidRequestException):
    """Credentials were missing or rejected (HTTP 401)"""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message, status_code=401, code="API02")


class ConcurrentConfigModificationException(InvalidRequestException):
    """A rebalance was in progress when the request was made (HTTP 409)"""

    def __init__(
        self, message: str, error_code: Optional[int] = None
    ) -> None:
        super().__init__(
            message, status_code=409, error_code=error_code, code="API03"
        )
