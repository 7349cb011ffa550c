"""
Unit tests for HTTP results, error responses, requests and contracts.
"""
import base64
import json
from decimal import Decimal
from http import HTTPStatus

from utils.exceptions import ConfigurationError
from web.contracts import HealthCheckResponse, HealthStatus
from web.errors import GENERIC_ERROR_MESSAGE, ErrorResponse
from web.http_requests import HttpApiRequest
from web.http_results import HttpResult, bad_request, forbidden, no_content, not_found, ok


class TestHttpResult:
    """Tests for HttpResult rendering."""

    def test_json_body(self):
        response = ok({'total': Decimal('12.50'), 'count': Decimal('3')}).to_response()

        assert response['statusCode'] == 200
        assert response['headers']['Content-Type'] == 'application/json'
        assert json.loads(response['body']) == {'total': 12.5, 'count': 3}

    def test_string_body_is_sent_as_is(self):
        response = HttpResult(200, '<p>hi</p>', {'Content-Type': 'text/html'}).to_response()
        assert response['body'] == '<p>hi</p>'
        assert response['headers'] == {'Content-Type': 'text/html'}

    def test_empty_body(self):
        response = no_content().to_response()
        assert response == {'statusCode': 204, 'headers': {}, 'body': ''}

    def test_add_header(self):
        result = ok().add_header('x-ds-token', 'abc')
        assert result.to_response()['headers'] == {'x-ds-token': 'abc'}

    def test_factories(self):
        assert bad_request().status_code == 400
        assert forbidden().status_code == 403
        assert not_found().status_code == 404


class TestErrorResponse:
    """Tests for ErrorResponse."""

    def test_from_generic_exception(self):
        error = ErrorResponse.from_exception(RuntimeError('secret detail'))

        assert error.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
        assert error.error == 'internal_error'
        assert error.error_message == GENERIC_ERROR_MESSAGE

    def test_from_configuration_error(self):
        error = ErrorResponse.from_exception(ConfigurationError('missing'))
        assert error.error == 'configuration_error'

    def test_to_http_result(self):
        result = ErrorResponse(HTTPStatus.FORBIDDEN, 'forbidden', 'No access.').to_http_result()

        assert result.status_code == 403
        assert json.loads(result.to_response()['body']) == {
            'statusCode': 403,
            'error': 'forbidden',
            'errorMessage': 'No access.',
        }


class TestHttpApiRequest:
    """Tests for HttpApiRequest parsing."""

    def test_from_event(self):
        request = HttpApiRequest.from_event({
            'rawPath': '/orders/1',
            'headers': {'Authorization': 'Bearer t', 'Content-Type': 'application/json'},
            'queryStringParameters': {'expand': 'items'},
            'pathParameters': {'id': '1'},
            'requestContext': {'requestId': 'req-1'},
            'body': '{}',
        })

        assert request.raw_path == '/orders/1'
        assert request.headers == {'authorization': 'Bearer t', 'content-type': 'application/json'}
        assert request.query_string_parameters == {'expand': 'items'}
        assert request.path_parameters == {'id': '1'}
        assert request.request_id == 'req-1'
        assert request.is_base64_encoded is False

    def test_from_empty_event(self):
        request = HttpApiRequest.from_event({})
        assert request.raw_path == ''
        assert request.headers == {}
        assert request.decoded_body() == ''

    def test_header_lookup_is_case_insensitive(self):
        request = HttpApiRequest(headers={'authorization': 'Bearer t'})
        assert request.header('Authorization') == 'Bearer t'
        assert request.header('X-Missing') is None
        assert request.header('X-Missing', '') == ''

    def test_form_values_from_base64_body(self):
        body = base64.b64encode('name=Ada&tags=a&tags=b&empty='.encode('utf-8')).decode('ascii')
        request = HttpApiRequest(body=body, is_base64_encoded=True)

        assert request.to_form_values() == {'name': ['Ada'], 'tags': ['a', 'b'], 'empty': ['']}

    def test_form_values_from_plain_body(self):
        request = HttpApiRequest(body='email=ada%40example.com')
        assert request.to_form_values() == {'email': ['ada@example.com']}


def test_health_check_response_serializes_status():
    response = ok(HealthCheckResponse(HealthStatus.DEGRADED)).to_response()
    assert json.loads(response['body']) == {'status': 'Degraded'}
