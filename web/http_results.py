"""
HTTP results returned by executable functions.

An HttpResult carries a status, a body and headers, and renders to the
API Gateway proxy response format.
"""
from http import HTTPStatus
from typing import Any, Dict, Optional

from utils.serialization import to_json


class HttpResult:
    """A response whose headers can still be amended before it is returned."""

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None
    ):
        self.status_code = int(status_code)
        self.body = body
        self.headers: Dict[str, str] = dict(headers or {})

    def add_header(self, name: str, value: str) -> "HttpResult":
        self.headers[name] = value
        return self

    def to_response(self) -> Dict[str, Any]:
        """
        Render to an API Gateway proxy response.

        String bodies are sent as-is; anything else is JSON encoded.
        """
        headers = dict(self.headers)
        if self.body is None:
            body = ''
        elif isinstance(self.body, str):
            body = self.body
        else:
            headers.setdefault('Content-Type', 'application/json')
            body = to_json(self.body)

        return {
            'statusCode': self.status_code,
            'headers': headers,
            'body': body,
        }

    def __repr__(self) -> str:
        return f'HttpResult(status_code={self.status_code}, headers={self.headers})'


def new_result(status_code: int, body: Any = None) -> HttpResult:
    return HttpResult(status_code, body)


def ok(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.OK, body)


def no_content(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.NO_CONTENT, body)


def bad_request(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.BAD_REQUEST, body)


def unauthorized(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.UNAUTHORIZED, body)


def forbidden(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.FORBIDDEN, body)


def not_found(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.NOT_FOUND, body)


def internal_server_error(body: Any = None) -> HttpResult:
    return new_result(HTTPStatus.INTERNAL_SERVER_ERROR, body)
