"""
Kafka Connect REST endpoint definitions
"""

from kafka_connect_client.endpoints.base import (
    AcceptedRequest,
    HttpMethod,
    Request,
)
from kafka_connect_client.endpoints.connectors import (
    DeleteConnector,
    GetConnector,
    GetConnectorConfig,
    GetConnectors,
    GetConnectorsExpanded,
    GetConnectorStatus,
    GetConnectorTopics,
    PostConnector,
    PostConnectorRestart,
    PostConnectorRestartWithOptions,
    PutConnectorConfig,
    PutConnectorPause,
    PutConnectorResume,
    PutConnectorTopicsReset,
)
from kafka_connect_client.endpoints.plugins import (
    GetConnectorPlugins,
    PutConnectorPluginConfigValidate,
)
from kafka_connect_client.endpoints.server import GetConnectServerVersion
from kafka_connect_client.endpoints.tasks import (
    GetConnectorTasks,
    GetConnectorTaskStatus,
    PostConnectorTaskRestart,
)

__all__ = [
    "AcceptedRequest",
    "HttpMethod",
    "Request",
    "DeleteConnector",
    "GetConnector",
    "GetConnectorConfig",
    "GetConnectors",
    "GetConnectorsExpanded",
    "GetConnectorStatus",
    "GetConnectorTopics",
    "PostConnector",
    "PostConnectorRestart",
    "PostConnectorRestartWithOptions",
    "PutConnectorConfig",
    "PutConnectorPause",
    "PutConnectorResume",
    "PutConnectorTopicsReset",
    "GetConnectorPlugins",
    "PutConnectorPluginConfigValidate",
    "GetConnectServerVersion",
    "GetConnectorTasks",
    "GetConnectorTaskStatus",
    "PostConnectorTaskRestart",
]
