"""
Execution wrapper for Lambda functions behind API Gateway.

ExecutableFunction runs a handler after an optional bearer-token check,
turns any exception into an error response, and stamps every HttpResult
with a fresh ``x-ds-token`` header.
"""
import hmac
import uuid
from http import HTTPStatus
from typing import Any, Callable, Mapping, Optional, Union

from logger_config import get_logger, set_request_id
from utils.exceptions import ConfigurationError, UnknownAuthorizeTypeError
from web.authorization import Authorize, AuthorizeResult, AuthorizeService
from web.errors import ErrorResponse
from web.http_requests import HttpApiRequest
from web.http_results import HttpResult

logger = get_logger(__name__)

TOKEN_HEADER = 'x-ds-token'
AUTHORIZATION_HEADER = 'authorization'


class ExecutableFunction:
    """Base for functions that need authorization and uniform error handling."""

    def __init__(self, authorize_service: Optional[AuthorizeService] = None):
        self._authorize_service = authorize_service

    def authorize(self, bearer: str) -> AuthorizeResult:
        """Check the Authorization header value. Override to customize."""
        if self._authorize_service is None:
            raise ConfigurationError(
                "Authorization is required but no authorize service is configured.",
                setting="authorize_service",
            )
        return self._authorize_service.authorize(bearer)

    def execute(
        self,
        authorize: Authorize,
        context: Any,
        request: Union[HttpApiRequest, Mapping[str, Any]],
        function: Callable[[], Any]
    ) -> Any:
        """
        Run ``function`` for an HTTP request.

        Args:
            authorize: Authorization requirement of the function
            context: Lambda context (may be None)
            request: Inbound request (or the raw proxy event)
            function: Zero-argument callable producing the response

        Returns:
            The function's response, or an error HttpResult. Never raises.
        """
        result = None
        try:
            if not isinstance(request, HttpApiRequest):
                request = HttpApiRequest.from_event(request)
            self._log_request_details(request, context)

            if authorize is Authorize.UNKNOWN:
                raise UnknownAuthorizeTypeError()

            if authorize is Authorize.REQUIRED:
                result = self._check_authorization(request)

            if result is None:
                result = function()
        except Exception as e:
            logger.error(
                f'Exception thrown while executing the function: {str(e)}',
                exc_info=True
            )
            result = ErrorResponse.from_exception(e).to_http_result()

        if isinstance(result, HttpResult):
            result.add_header(TOKEN_HEADER, str(uuid.uuid4()))

        return result

    def execute_with_api_key(
        self,
        authorize: Authorize,
        context: Any,
        api_key: Optional[str],
        expected_key: Optional[str],
        function: Callable[[], Any]
    ) -> None:
        """
        Run a fire-and-forget ``function`` guarded by an API key.

        Failures are logged, never raised.
        """
        try:
            set_request_id(getattr(context, 'aws_request_id', None))

            if authorize is Authorize.UNKNOWN:
                raise UnknownAuthorizeTypeError()

            if authorize is Authorize.REQUIRED and not _keys_match(api_key, expected_key):
                logger.error('The API Key is invalid.')
                return

            function()
        except Exception as e:
            logger.error(
                f'Exception thrown while executing the function: {str(e)}',
                exc_info=True
            )

    def _check_authorization(self, request: HttpApiRequest) -> Optional[HttpResult]:
        bearer = request.header(AUTHORIZATION_HEADER)
        if bearer is None:
            logger.warning('Authorization header is missing.')
            bearer = ''

        authorize_result = self.authorize(bearer)
        if authorize_result.is_authorized:
            return None

        logger.warning(
            f'Authorization failed: {authorize_result.error}: {authorize_result.error_message}'
        )
        return ErrorResponse(
            authorize_result.status_code or HTTPStatus.INTERNAL_SERVER_ERROR,
            authorize_result.error,
            authorize_result.error_message,
        ).to_http_result()

    def _log_request_details(self, request: HttpApiRequest, context: Any) -> None:
        request_id = getattr(context, 'aws_request_id', None) or request.request_id
        set_request_id(request_id)

        logger.info(f'Processing request: {request.raw_path}, RequestId: {request_id}')
        for name, value in request.headers.items():
            logger.debug(f'Header: {name} = {value}')


def _keys_match(api_key: Optional[str], expected_key: Optional[str]) -> bool:
    if api_key is None or expected_key is None:
        return api_key == expected_key
    return hmac.compare_digest(api_key.encode('utf-8'), expected_key.encode('utf-8'))
