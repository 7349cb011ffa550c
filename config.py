"""
Configuration module for environment variable validation and type-safe config.

Each AWS service section mirrors the settings a Lambda needs to construct
its client. Values are read from the environment once and validated.
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class S3BucketSettings:
    """Settings for the S3 bucket backing the storage service."""

    bucket_name: str
    region: str


@dataclass
class SimpleEmailServiceSettings:
    """Settings for the SES client."""

    region: str


@dataclass
class SimpleNotificationServiceSettings:
    """Settings for the SNS client."""

    region: str


@dataclass
class DynamoDBSettings:
    """Settings for the DynamoDB client."""

    region: str


@dataclass
class Config:
    """Type-safe configuration object with validated environment variables."""

    s3: Optional[S3BucketSettings] = None
    ses: Optional[SimpleEmailServiceSettings] = None
    sns: Optional[SimpleNotificationServiceSettings] = None
    dynamodb: Optional[DynamoDBSettings] = None
    api_key: Optional[str] = None
    aws_region: str = "us-east-1"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create Config instance from environment variables.

        Service regions default to AWS_REGION. The S3 section is only
        present when AWS_S3_BUCKET_NAME is set.

        Raises:
            ValueError: If environment variables are invalid.
        """
        aws_region = os.environ.get("AWS_REGION", "us-east-1")
        log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Validate log level
        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level not in valid_log_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {valid_log_levels}, got: {log_level}"
            )

        s3 = None
        bucket_name = os.environ.get("AWS_S3_BUCKET_NAME")
        if bucket_name:
            s3 = S3BucketSettings(
                bucket_name=bucket_name,
                region=os.environ.get("AWS_S3_REGION", aws_region),
            )

        ses = SimpleEmailServiceSettings(
            region=os.environ.get("AWS_SES_REGION", aws_region)
        )
        sns = SimpleNotificationServiceSettings(
            region=os.environ.get("AWS_SNS_REGION", aws_region)
        )
        dynamodb = DynamoDBSettings(
            region=os.environ.get("AWS_DYNAMODB_REGION", aws_region)
        )

        return cls(
            s3=s3,
            ses=ses,
            sns=sns,
            dynamodb=dynamodb,
            api_key=os.environ.get("API_KEY") or None,
            aws_region=aws_region,
            log_level=log_level,
        )


# Global config instance - built on first use
_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config: The validated configuration object

    Raises:
        ValueError: If environment variables are invalid.
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config
