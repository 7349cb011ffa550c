"""
Custom exception classes for services, mapping helpers and handlers.
"""
from typing import Optional, Any


class ConfigurationError(Exception):
    """Exception raised for missing or invalid configuration."""

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None
    ):
        """
        Initialize configuration error.

        Args:
            message: Error message
            setting: Name of the offending setting if available
        """
        super().__init__(message)
        self.message = message
        self.setting = setting


class UnknownAuthorizeTypeError(ConfigurationError):
    """Raised when a function is executed with Authorize.UNKNOWN."""

    def __init__(self, message: str = "The authorize type is unknown."):
        super().__init__(message, setting="authorize")


class UnsupportedAttributeTypeError(TypeError):
    """Exception raised when a value cannot be mapped to a DynamoDB attribute."""

    def __init__(self, value: Any):
        self.value_type = type(value)
        message = f"Type {self.value_type.__name__} is not supported."
        super().__init__(message)
        self.message = message


class ItemAlreadyExistsError(Exception):
    """Exception raised when a conditional create hits an existing key."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        key: Optional[Any] = None
    ):
        """
        Initialize item exists error.

        Args:
            message: Error message
            table_name: DynamoDB table name if available
            key: Key of the existing item if available
        """
        super().__init__(message)
        self.message = message
        self.table_name = table_name
        self.key = key
