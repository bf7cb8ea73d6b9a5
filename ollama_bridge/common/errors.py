"""
Error Definitions

Defines the exception taxonomy raised by the bridge. Whole-response failures
propagate to the caller; per-frame stream failures are recovered by the decoder.
"""

from typing import Any, Optional


class BridgeError(Exception):
    """
    Bridge Base Exception

    Base class for all bridge exceptions, containing error message, type, and code.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "bridge_error",
        code: str = "internal_error",
        details: Optional[dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Initialize exception

        Args:
            message: Error message
            error_type: Error type
            code: Error code
            details: Extra error details
            status_code: HTTP status code used when surfaced over the REST API
        """
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.code = code
        self.details = details or {}
        self.status_code = status_code

    def to_dict(self, include_details: bool = True) -> dict[str, Any]:
        """
        Convert to dictionary format (for API response)

        Args:
            include_details: Whether to include extra details

        Returns:
            dict: Error information dictionary
        """
        result = {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "code": self.code,
            }
        }
        if include_details and self.details:
            result["error"]["details"] = self.details
        return result


class BackendHTTPError(BridgeError):
    """
    Backend HTTP Error

    Raised when the backend answers with a non-2xx status. The raw response
    body is kept verbatim for diagnostics.
    """

    def __init__(self, status: int, body: str):
        super().__init__(
            message=f"Ollama API error: {status} - {body}",
            error_type="backend_http_error",
            code="upstream_error",
            details={"status": status, "body": body},
            status_code=502,
        )
        self.status = status
        self.body = body


class TransportError(BridgeError):
    """
    Transport Error

    Raised when the backend cannot be reached or a readable body is missing
    where one was expected.
    """

    def __init__(
        self,
        message: str = "No response body from Ollama",
        code: str = "transport_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="transport_error",
            code=code,
            details=details,
            status_code=502,
        )


class DecodeError(BridgeError):
    """
    Response Decode Error

    Raised when a whole backend response is not valid JSON or misses a
    required field.
    """

    def __init__(
        self,
        message: str = "Malformed backend response",
        code: str = "decode_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_type="decode_error",
            code=code,
            details=details,
            status_code=502,
        )


class FrameDecodeError(DecodeError):
    """
    Stream Frame Decode Error

    Raised for a single malformed `data: ` line. The stream decoder catches it,
    drops the line and keeps going.
    """

    def __init__(self, line: str, reason: str):
        super().__init__(
            message=f"Malformed stream frame: {reason}",
            code="frame_decode_error",
            details={"line": line},
        )
        self.line = line
