"""
Error taxonomy of the AirSense API.

Routes raise these exceptions; the handlers registered in ``airsense.main``
turn them into JSON responses. Each exception carries the exact response body
so that clients can distinguish validation problems (400), missing data for a
well-formed query (404) and data-source failures (500).
"""

from typing import Any, Dict, Optional

from fastapi import status


class AirSenseError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, body: Dict[str, Any], status_code: Optional[int] = None):
        super().__init__(body)
        self.body = body
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AirSenseError):
    """Malformed or out-of-range input. Raised before any data-source access."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, **details: Any):
        super().__init__({"error": message, **details})
        self.message = message


class NotFoundError(AirSenseError):
    """Well-formed query that matched no data."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str, suggestion: Optional[str] = None, **details: Any):
        body: Dict[str, Any] = {"mensaje": message, **details}
        if suggestion:
            body["sugerencia"] = suggestion
        super().__init__(body)
        self.message = message


class UnauthorizedError(AirSenseError):
    """Shared secret mismatch on the health probe."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self):
        super().__init__({"status": "unauthorized"})


class InternalError(AirSenseError):
    """
    Data-source or connection failure.

    The client only receives a generic message naming the endpoint; the
    underlying reason stays in the server logs.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        super().__init__({"error": f"Error interno del servidor al procesar {endpoint}"})
        self.endpoint = endpoint
        self.reason = reason
