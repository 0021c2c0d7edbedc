from typing import Optional

class TideClientError(Exception):
    """Base exception for tide data errors."""

    @property
    def description(self) -> str:
        return str(self)

class InvalidRequest(TideClientError):
    """Raised when a coordinate or date cannot be encoded into a request."""

    def __init__(self, reason: str = "Invalid URL"):
        super().__init__(reason)

class TransportFailure(TideClientError):
    """Raised when the request fails at the network level."""

    def __init__(self, cause: BaseException, detail: Optional[str] = None):
        self.cause = cause
        # Exception text from the transport may embed the request URL and key
        super().__init__(detail or type(cause).__name__)

class InvalidResponse(TideClientError):
    """Raised when the response is not a well-formed success."""

    def __init__(self, http_status: Optional[int] = None):
        self.http_status = http_status
        super().__init__("Invalid response from server")

class ApiError(TideClientError):
    """Raised when WorldTides reports a non-200 status with a message."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

class ServerError(TideClientError):
    """Raised when WorldTides reports a non-200 status without a message."""

    def __init__(self, code: int):
        self.code = code
        super().__init__(f"Server error: {code}")

class DecodingError(TideClientError):
    """Raised when the body does not match the expected structure."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__("Could not decode the data")

class NoDataAvailable(TideClientError):
    """Raised when a report decoded successfully but has no samples."""

    def __init__(self):
        super().__init__("No tide data available for this location")

class QuotaExceeded(TideClientError):
    """Raised when WorldTides signals the credential is out of credits."""

    def __init__(self, message: Optional[str] = None):
        self.message = message
        super().__init__("API quota exceeded")
