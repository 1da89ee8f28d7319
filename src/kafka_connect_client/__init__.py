"""
Kafka Connect REST API client for Python

Main entry point for the library
"""

from kafka_connect_client.client import KafkaConnectClient
from kafka_connect_client.exceptions import (
    KafkaConnectError,
    KafkaConnectErrorCategory,
    ValidationError,
    ConfigurationError,
    UsageError,
    RestException,
    ConnectionException,
    ResultParsingException,
    InvalidRequestException,
    UnauthorizedRequestException,
    ConcurrentConfigModificationException,
)

# HTTP Client
from kafka_connect_client.client import (
    RestClient,
    RestResponse,
    RestResponseHandler,
    HttpClientConfigHooks,
    DefaultHttpClientConfigHooks,
    ClientBuilder,
    HttpsContextBuilder,
    RequestConfig,
    CredentialStore,
    AuthCache,
    AuthScope,
    Credentials,
    ExecutionContext,
    HttpHost,
)
from kafka_connect_client.endpoints import HttpMethod, Request

# Configuration
from kafka_connect_client.config import (
    Configuration,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Models
from kafka_connect_client.models import (
    NewConnectorDefinition,
    ConnectorDefinition,
    ConnectorStatus,
    ConnectorTopics,
    ExpandedConnector,
    Task,
    TaskStatus,
    ConnectorPlugin,
    ConnectorPluginConfigDefinition,
    ConfigValidationResults,
    ConnectServerVersion,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "KafkaConnectClient",
    # HTTP Client
    "RestClient",
    "RestResponse",
    "RestResponseHandler",
    "HttpClientConfigHooks",
    "DefaultHttpClientConfigHooks",
    "ClientBuilder",
    "HttpsContextBuilder",
    "RequestConfig",
    "CredentialStore",
    "AuthCache",
    "AuthScope",
    "Credentials",
    "ExecutionContext",
    "HttpHost",
    "HttpMethod",
    "Request",
    # Exceptions
    "KafkaConnectError",
    "KafkaConnectErrorCategory",
    "ValidationError",
    "ConfigurationError",
    "UsageError",
    "RestException",
    "ConnectionException",
    "ResultParsingException",
    "InvalidRequestException",
    "UnauthorizedRequestException",
    "ConcurrentConfigModificationException",
    # Configuration
    "Configuration",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Models
    "NewConnectorDefinition",
    "ConnectorDefinition",
    "ConnectorStatus",
    "ConnectorTopics",
    "ExpandedConnector",
    "Task",
    "TaskStatus",
    "ConnectorPlugin",
    "ConnectorPluginConfigDefinition",
    "ConfigValidationResults",
    "ConnectServerVersion",
]
