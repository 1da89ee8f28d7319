"""
HTTP Client module for the Kafka Connect REST API
"""

from kafka_connect_client.client.auth import (
    AuthCache,
    AuthScope,
    ChallengeBasicAuth,
    CredentialStore,
    Credentials,
    ExecutionContext,
    HttpHost,
)
from kafka_connect_client.client.builders import (
    ClientBuilder,
    HttpsContext,
    HttpsContextBuilder,
    RequestConfig,
    TimeToLiveAdapter,
)
from kafka_connect_client.client.connect_client import KafkaConnectClient
from kafka_connect_client.client.hooks import (
    DefaultHttpClientConfigHooks,
    HttpClientConfigHooks,
)
from kafka_connect_client.client.http_client import RestClient
from kafka_connect_client.client.response_handler import (
    RestResponse,
    RestResponseHandler,
)

__all__ = [
    "KafkaConnectClient",
    "RestClient",
    "RestResponse",
    "RestResponseHandler",
    "HttpClientConfigHooks",
    "DefaultHttpClientConfigHooks",
    "ClientBuilder",
    "HttpsContext",
    "HttpsContextBuilder",
    "RequestConfig",
    "TimeToLiveAdapter",
    "AuthCache",
    "AuthScope",
    "ChallengeBasicAuth",
    "CredentialStore",
    "Credentials",
    "ExecutionContext",
    "HttpHost",
]
