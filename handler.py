"""
Lambda handler functions.

This module provides the Lambda entry points built on the executor and
service layer.
"""
from typing import Optional

from config import get_config
from logger_config import get_logger
from services.email_service import EmailService, EmailTemplateMessage
from services.registry import create_email_service, create_storage_service
from services.storage_service import StorageService
from utils.decorators import executable_handler
from web.authorization import Authorize
from web.contracts import HealthCheckResponse, HealthStatus
from web.executable_function import ExecutableFunction
from web.http_results import ok

logger = get_logger(__name__)

# Services live for the lifetime of the execution environment
_storage_service: Optional[StorageService] = None
_email_service: Optional[EmailService] = None


def get_storage_service() -> StorageService:
    global _storage_service
    if _storage_service is None:
        _storage_service = create_storage_service()
    return _storage_service


def get_email_service() -> EmailService:
    global _email_service
    if _email_service is None:
        _email_service = create_email_service()
    return _email_service


@executable_handler(Authorize.NOT_REQUIRED)
def health_check(request, context):
    """GET health status of the function"""
    return ok(HealthCheckResponse(status=HealthStatus.HEALTHY))


def send_templated_email(event, context):
    """
    Send a templated email described by the event.

    Fire-and-forget: the event must carry the configured API key in
    ``apiKey``; failures are logged and nothing is returned.
    """
    config = get_config()

    def send():
        message = EmailTemplateMessage(
            sender=event['sender'],
            template=event['template'],
            parameters=event.get('parameters') or {},
            subject=event.get('subject'),
            to=event.get('to') or [],
            cc=event.get('cc') or [],
            bcc=event.get('bcc') or [],
        )
        result = get_email_service().send_template(
            message, get_storage_service().load_file
        )
        if result.errors:
            logger.error(f'Templated email {message.template} not sent: {result.errors}')

    ExecutableFunction().execute_with_api_key(
        Authorize.REQUIRED, context, event.get('apiKey'), config.api_key, send
    )
