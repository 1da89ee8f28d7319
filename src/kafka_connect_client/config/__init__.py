"""
Configuration module
"""

from kafka_connect_client.config.connect_config import (
    Configuration,
    ENV_VAR_MAPPING,
    ConfigDefaults,
    normalize_api_host,
)
from kafka_connect_client.config.config_loader import ConfigLoader
from kafka_connect_client.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "Configuration",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "normalize_api_host",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
