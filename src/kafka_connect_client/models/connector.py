"""Connector models"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from kafka_connect_client.models.task import TaskId


def stringify_config(value: Any) -> Any:
    """Kafka Connect expects every config value as a string"""
    if not isinstance(value, dict):
        return value
    converted = {}
    for key, item in value.items():
        if isinstance(item, bool):
            converted[key] = "true" if item else "false"
        elif item is None or isinstance(item, str):
            converted[key] = item
        else:
            converted[key] = str(item)
    return converted


class NewConnectorDefinition(BaseModel):
    """Definition used to create a connector"""

    name: str = Field(..., description="Connector name", min_length=1)
    config: Dict[str, str] = Field(default_factory=dict, description="Connector configuration")

    @field_validator("config", mode="before")
    @classmethod
    def coerce_config_values(cls, v: Any) -> Any:
        return stringify_config(v)


class ConnectorDefinition(BaseModel):
    """Connector as reported by the worker"""

    name: str = Field(..., description="Connector name")
    type: Optional[str] = Field(None, description="source or sink")
    config: Dict[str, str] = Field(default_factory=dict, description="Connector configuration")
    tasks: List[TaskId] = Field(default_factory=list, description="Tasks of the connector")


class ConnectorState(BaseModel):
    """Runtime state of a connector instance"""

    state: str = Field(..., description="RUNNING, PAUSED, FAILED, UNASSIGNED or RESTARTING")
    worker_id: str = Field(..., description="Worker running the connector")
    trace: Optional[str] = Field(None, description="Stack trace when the connector failed")


class TaskState(BaseModel):
    """Runtime state of a task as listed in a connector status"""

    id: int
    state: str
    worker_id: str
    trace: Optional[str] = None


class ConnectorStatus(BaseModel):
    """Status of a connector and its tasks"""

    name: str = Field(..., description="Connector name")
    type: Optional[str] = Field(None, description="source or sink")
    connector: ConnectorState = Field(..., description="Connector state")
    tasks: List[TaskState] = Field(default_factory=list, description="Task states")


class ExpandedConnector(BaseModel):
    """Connector entry returned by GET /connectors?expand=..."""

    info: Optional[ConnectorDefinition] = None
    status: Optional[ConnectorStatus] = None


class ConnectorTopics(BaseModel):
    """Topics a connector has used since creation or the last reset"""

    name: str
    topics: List[str] = Field(default_factory=list)
