"""
SNS publisher for event-bus messages.
"""
import json
import threading
from typing import Any, Callable, Dict, Optional, TypeVar, TYPE_CHECKING
from botocore.exceptions import ClientError
from logger_config import get_logger
from utils.serialization import to_json

if TYPE_CHECKING:
    from mypy_boto3_sns import SNSClient
else:
    SNSClient = Any

logger = get_logger(__name__)

R = TypeVar('R')


class PublisherService:
    """Publishes JSON messages to SNS topics."""

    def __init__(self, sns_client: SNSClient):
        """
        Initialize publisher service.

        Args:
            sns_client: SNS client owned by this service
        """
        self._sns_client: Optional[SNSClient] = sns_client
        self._lock = threading.Lock()
        self._closed = False

    def publish(
        self,
        bus_name: str,
        message: Any,
        result_factory: Optional[Callable[[Dict[str, Any]], R]] = None
    ) -> Any:
        """
        Publish a message to a topic.

        Args:
            bus_name: Topic ARN
            message: JSON-serializable payload (dataclasses are supported)
            result_factory: Builds the result from the response dict

        Returns:
            The SNS response as a plain dict, or result_factory's value

        Raises:
            ClientError: If SNS operation fails
            TypeError: If the message cannot be serialized
            RuntimeError: If the service is closed
        """
        if self._closed:
            raise RuntimeError('Publisher service is closed')

        payload = to_json(message)

        try:
            response = self._sns_client.publish(TopicArn=bus_name, Message=payload)
        except ClientError as e:
            logger.error(f'SNS publish failed for topic {bus_name}: {str(e)}')
            raise

        logger.info(f'Published message {response.get("MessageId")} to {bus_name}')

        result = json.loads(json.dumps(response, default=str))
        if result_factory is not None:
            return result_factory(result)
        return result

    def close(self) -> None:
        """Release the SNS client. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            client, self._sns_client = self._sns_client, None
        if client is not None:
            client.close()

    def __enter__(self) -> "PublisherService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
