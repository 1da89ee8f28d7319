"""Models module initialization"""

from kafka_connect_client.models.connector import (
    NewConnectorDefinition,
    ConnectorDefinition,
    ConnectorState,
    ConnectorStatus,
    ConnectorTopics,
    ExpandedConnector,
    TaskState,
)
from kafka_connect_client.models.task import Task, TaskId, TaskStatus
from kafka_connect_client.models.plugin import (
    ConnectorPlugin,
    ConnectorPluginConfigDefinition,
    ConfigDefinition,
    ConfigValue,
    ConfigValidationEntry,
    ConfigValidationResults,
)
from kafka_connect_client.models.server import ConnectServerVersion

__all__ = [
    "NewConnectorDefinition",
    "ConnectorDefinition",
    "ConnectorState",
    "ConnectorStatus",
    "ConnectorTopics",
    "ExpandedConnector",
    "TaskState",
    "Task",
    "TaskId",
    "TaskStatus",
    "ConnectorPlugin",
    "ConnectorPluginConfigDefinition",
    "ConfigDefinition",
    "ConfigValue",
    "ConfigValidationEntry",
    "ConfigValidationResults",
    "ConnectServerVersion",
]
