"""
Handler decorators for API Gateway Lambda functions.
"""
import functools
import uuid
from typing import Any, Callable, Dict, Optional

from logger_config import get_logger
from web.authorization import Authorize
from web.executable_function import TOKEN_HEADER, ExecutableFunction
from web.http_requests import HttpApiRequest
from web.http_results import HttpResult, ok

logger = get_logger(__name__)


def executable_handler(
    authorize: Authorize,
    executable_function: Optional[ExecutableFunction] = None
) -> Callable[[Callable[[HttpApiRequest, Any], Any]], Callable[[Dict[str, Any], Any], Dict[str, Any]]]:
    """
    Decorator for Lambda handler functions behind API Gateway.

    Provides:
    - Optional bearer-token authorization before the handler runs
    - Request logging with the Lambda request id
    - Error responses for unhandled exceptions
    - The ``x-ds-token`` correlation header on every response

    The decorated function receives the parsed HttpApiRequest and the
    Lambda context; the Lambda entry point receives the raw event.

    Args:
        authorize: Authorization requirement of the handler
        executable_function: Executor to run through (a default one, with
            no authorize service, when omitted)

    Returns:
        Decorator producing a Lambda entry point
    """
    def decorator(func: Callable[[HttpApiRequest, Any], Any]) -> Callable[[Dict[str, Any], Any], Dict[str, Any]]:
        @functools.wraps(func)
        def wrapper(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
            executor = executable_function or ExecutableFunction()

            # Parsed inside the executor so malformed events become error responses
            result = executor.execute(
                authorize,
                context,
                event,
                lambda: func(HttpApiRequest.from_event(event), context)
            )

            if isinstance(result, HttpResult):
                return result.to_response()

            # Already a proxy response
            if isinstance(result, dict) and 'statusCode' in result:
                return result

            logger.warning(f'Handler {func.__name__} returned a plain value, wrapping in 200')
            return ok(result).add_header(TOKEN_HEADER, str(uuid.uuid4())).to_response()

        return wrapper

    return decorator
