"""
SES service for sending plain and templated emails.
"""
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
from botocore.exceptions import BotoCoreError, ClientError
from logger_config import get_logger

if TYPE_CHECKING:
    from mypy_boto3_ses import SESClient
else:
    SESClient = Any

logger = get_logger(__name__)

CHARSET = 'UTF-8'


@dataclass
class EmailMessage:
    """An email with its final subject and bodies."""

    sender: str
    subject: str
    to: List[str] = field(default_factory=list)
    cc: List[str] = field(default_factory=list)
    bcc: List[str] = field(default_factory=list)
    reply_to: List[str] = field(default_factory=list)
    html_body: str = ''
    text_body: str = ''


@dataclass
class EmailTemplateMessage:
    """
    An email whose bodies come from a stored template.

    ``template`` is the template name; ``<template>.html`` and
    ``<template>.txt`` are loaded and ``$[name]`` tokens replaced by
    ``parameters[name]``.
    """

    sender: str
    template: str
    parameters: Dict[str, str] = field(default_factory=dict)
    subject: Optional[str] = None
    to: List[str] = field(default_factory=list)
    cc: List[str] = field(default_factory=list)
    bcc: List[str] = field(default_factory=list)
    reply_to: List[str] = field(default_factory=list)


@dataclass
class SendEmailResult:
    """Outcome of a send: SES message id, or the errors that prevented it."""

    message_id: Optional[str] = None
    http_status_code: Optional[int] = None
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors and self.message_id is not None

    @classmethod
    def from_response(cls, response: Dict[str, Any]) -> "SendEmailResult":
        return cls(
            message_id=response.get('MessageId'),
            http_status_code=response.get('ResponseMetadata', {}).get('HTTPStatusCode'),
        )


def render_template(text: str, parameters: Dict[str, str]) -> str:
    """
    Replace ``$[key]`` tokens in text with the matching parameter values.

    Tokens without a parameter are left unchanged.
    """
    for key, value in parameters.items():
        text = text.replace('$[' + key + ']', str(value))
    return text


class EmailService:
    """Service for SES operations."""

    def __init__(self, ses_client: SESClient):
        """
        Initialize email service.

        Args:
            ses_client: SES client owned by this service
        """
        self._ses_client: Optional[SESClient] = ses_client
        self._lock = threading.Lock()
        self._closed = False

    def send(self, message: EmailMessage) -> SendEmailResult:
        """
        Send an email.

        Args:
            message: The email to send

        Returns:
            SendEmailResult with the SES message id, or with errors when
            SES rejected the request, could not be reached, or the
            service is closed
        """
        body: Dict[str, Dict[str, str]] = {}
        if message.html_body:
            body['Html'] = {'Charset': CHARSET, 'Data': message.html_body}
        if message.text_body:
            body['Text'] = {'Charset': CHARSET, 'Data': message.text_body}

        with self._lock:
            client = self._ses_client
        if client is None:
            logger.error(f'Email "{message.subject}" not sent, service is closed')
            return SendEmailResult(errors=['Email service is closed.'])

        if not body:
            logger.error(f'Email "{message.subject}" has no HTML or text body, not sending')
            return SendEmailResult(errors=['Email message has no body.'])

        request = {
            'Source': message.sender,
            'Destination': {
                'ToAddresses': list(message.to),
                'CcAddresses': list(message.cc),
                'BccAddresses': list(message.bcc),
            },
            'Message': {
                'Subject': {'Charset': CHARSET, 'Data': message.subject},
                'Body': body,
            },
        }
        if message.reply_to:
            request['ReplyToAddresses'] = list(message.reply_to)

        try:
            response = client.send_email(**request)
        except ClientError as e:
            error = e.response.get('Error', {})
            logger.error(f'SES send_email failed for "{message.subject}": {str(e)}')
            return SendEmailResult(
                http_status_code=e.response.get('ResponseMetadata', {}).get('HTTPStatusCode'),
                errors=[error.get('Message') or str(e)],
            )
        except BotoCoreError as e:
            logger.error(f'SES send_email failed for "{message.subject}": {str(e)}')
            return SendEmailResult(errors=[str(e)])

        result = SendEmailResult.from_response(response)
        logger.info(f'Successfully sent email "{message.subject}" ({result.message_id})')
        return result

    def send_template(
        self,
        message: EmailTemplateMessage,
        load_file: Callable[[str], str]
    ) -> SendEmailResult:
        """
        Render a templated email and send it.

        Args:
            message: The templated email
            load_file: Loads template text by key, e.g. StorageService.load_file

        Returns:
            SendEmailResult of the underlying send
        """
        html_body = load_file(f'{message.template}.html')
        text_body = load_file(f'{message.template}.txt')

        logger.info(f'Found [{len(message.parameters)}] parameters!')
        for key in message.parameters:
            logger.debug(f'Parameter [{key}]')

        return self.send(EmailMessage(
            sender=message.sender,
            subject=message.subject or '',
            to=message.to,
            cc=message.cc,
            bcc=message.bcc,
            reply_to=message.reply_to,
            html_body=render_template(html_body, message.parameters),
            text_body=render_template(text_body, message.parameters),
        ))

    def close(self) -> None:
        """Release the SES client. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            client, self._ses_client = self._ses_client, None
        if client is not None:
            client.close()

    def __enter__(self) -> "EmailService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
