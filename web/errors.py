"""
Error responses returned to API callers.
"""
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Dict, Optional

from utils.exceptions import ConfigurationError
from web.http_results import HttpResult, new_result

GENERIC_ERROR_MESSAGE = 'An unexpected error occurred while executing the function.'
CONFIGURATION_ERROR_MESSAGE = 'The function is not configured correctly.'


@dataclass
class ErrorResponse:
    """Error body: status code, error code and human readable message."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    error: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_exception(cls, exception: Exception) -> "ErrorResponse":
        """
        Map an unhandled exception to a generic error.

        Exception details are logged by the caller, not returned.
        """
        if isinstance(exception, ConfigurationError):
            return cls(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                'configuration_error',
                CONFIGURATION_ERROR_MESSAGE,
            )
        return cls(HTTPStatus.INTERNAL_SERVER_ERROR, 'internal_error', GENERIC_ERROR_MESSAGE)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'statusCode': int(self.status_code),
            'error': self.error,
            'errorMessage': self.error_message,
        }

    def to_http_result(self) -> HttpResult:
        return new_result(self.status_code, self.to_dict())
