"""
Factories that read configuration and build services around new clients.

Each service owns the client created for it and releases it on close().
"""
from typing import Optional

import boto3

from config import Config, get_config
from logger_config import get_logger
from services.dynamodb_service import DynamoDBService
from services.email_service import EmailService
from services.publisher_service import PublisherService
from services.storage_service import StorageService
from utils.exceptions import ConfigurationError
from utils.regions import to_region_name

logger = get_logger(__name__)


def create_storage_service(config: Optional[Config] = None) -> StorageService:
    """
    Build the S3-backed storage service.

    Raises:
        ConfigurationError: If S3 settings are missing or the region is invalid
    """
    config = config or get_config()
    if config.s3 is None:
        raise ConfigurationError("S3 bucket settings are missing.", setting="AWS_S3_BUCKET_NAME")

    region = to_region_name(config.s3.region, 's3')
    client = boto3.client('s3', region_name=region)
    logger.info(f'Storage service ready for bucket {config.s3.bucket_name} ({region})')
    return StorageService(client, config.s3.bucket_name)


def create_email_service(config: Optional[Config] = None) -> EmailService:
    """
    Build the SES email service.

    Raises:
        ConfigurationError: If SES settings are missing or the region is invalid
    """
    config = config or get_config()
    if config.ses is None:
        raise ConfigurationError("Simple Email Service settings are missing.", setting="AWS_SES_REGION")

    region = to_region_name(config.ses.region, 'ses')
    return EmailService(boto3.client('ses', region_name=region))


def create_publisher_service(config: Optional[Config] = None) -> PublisherService:
    """
    Build the SNS publisher service.

    Raises:
        ConfigurationError: If SNS settings are missing or the region is invalid
    """
    config = config or get_config()
    if config.sns is None:
        raise ConfigurationError(
            "Simple Notification Service settings are missing.", setting="AWS_SNS_REGION"
        )

    region = to_region_name(config.sns.region, 'sns')
    return PublisherService(boto3.client('sns', region_name=region))


def create_dynamodb_service(config: Optional[Config] = None) -> DynamoDBService:
    """
    Build the DynamoDB service.

    Raises:
        ConfigurationError: If DynamoDB settings are missing or the region is invalid
    """
    config = config or get_config()
    if config.dynamodb is None:
        raise ConfigurationError("DynamoDB settings are missing.", setting="AWS_DYNAMODB_REGION")

    region = to_region_name(config.dynamodb.region, 'dynamodb')
    return DynamoDBService(boto3.client('dynamodb', region_name=region))
