"""
Unit tests for configuration module.
"""
import pytest
import os
from unittest.mock import patch
from config import Config, get_config


class TestConfig:
    """Tests for Config class."""

    @patch.dict(os.environ, {}, clear=True)
    def test_from_env_defaults(self):
        """Test Config.from_env with nothing set."""
        config = Config.from_env()
        assert config.s3 is None
        assert config.ses.region == 'us-east-1'
        assert config.sns.region == 'us-east-1'
        assert config.dynamodb.region == 'us-east-1'
        assert config.api_key is None
        assert config.aws_region == 'us-east-1'
        assert config.log_level == 'INFO'

    @patch.dict(os.environ, {
        'AWS_S3_BUCKET_NAME': 'templates-bucket',
        'AWS_REGION': 'eu-west-1',
    }, clear=True)
    def test_from_env_regions_fall_back_to_aws_region(self):
        """Test service regions default to AWS_REGION."""
        config = Config.from_env()
        assert config.s3.bucket_name == 'templates-bucket'
        assert config.s3.region == 'eu-west-1'
        assert config.ses.region == 'eu-west-1'
        assert config.sns.region == 'eu-west-1'

    @patch.dict(os.environ, {
        'AWS_S3_BUCKET_NAME': 'templates-bucket',
        'AWS_S3_REGION': 'us-west-2',
        'AWS_SES_REGION': 'eu-central-1',
        'AWS_SNS_REGION': 'ap-southeast-2',
        'AWS_DYNAMODB_REGION': 'ca-central-1',
        'API_KEY': 'secret',
        'LOG_LEVEL': 'DEBUG',
    }, clear=True)
    def test_from_env_all_variables(self):
        """Test Config.from_env with all variables set."""
        config = Config.from_env()
        assert config.s3.region == 'us-west-2'
        assert config.ses.region == 'eu-central-1'
        assert config.sns.region == 'ap-southeast-2'
        assert config.dynamodb.region == 'ca-central-1'
        assert config.api_key == 'secret'
        assert config.log_level == 'DEBUG'

    @patch.dict(os.environ, {'LOG_LEVEL': 'INVALID'}, clear=True)
    def test_from_env_invalid_log_level(self):
        """Test Config.from_env raises error for invalid log level."""
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            Config.from_env()

    @patch.dict(os.environ, {'LOG_LEVEL': 'warning'}, clear=True)
    def test_from_env_log_level_case_insensitive(self):
        """Test log level is normalized to uppercase."""
        assert Config.from_env().log_level == 'WARNING'

    @patch.dict(os.environ, {'API_KEY': ''}, clear=True)
    def test_from_env_empty_api_key(self):
        """Test an empty API_KEY counts as unset."""
        assert Config.from_env().api_key is None


class TestGetConfig:
    """Tests for get_config function."""

    @patch.dict(os.environ, {'AWS_S3_BUCKET_NAME': 'templates-bucket'}, clear=True)
    def test_get_config_returns_same_instance(self):
        """Test get_config caches the config instance."""
        first = get_config()
        second = get_config()
        assert first is second
        assert first.s3.bucket_name == 'templates-bucket'
