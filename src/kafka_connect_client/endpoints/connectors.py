"""Connector endpoint definitions"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from kafka_connect_client.endpoints.base import (
    AcceptedRequest,
    HttpMethod,
    Request,
    connector_path,
    parse_json,
)
from kafka_connect_client.models.connector import (
    ConnectorDefinition,
    ConnectorStatus,
    ConnectorTopics,
    ExpandedConnector,
    NewConnectorDefinition,
    stringify_config,
)


@dataclass(frozen=True)
class GetConnectors(Request[List[str]]):
    """GET /connectors"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    @property
    def api_endpoint(self) -> str:
        return "/connectors"

    def parse_response(self, body: str) -> List[str]:
        return parse_json(body, List[str])


@dataclass(frozen=True)
class GetConnectorsExpanded(Request[Dict[str, ExpandedConnector]]):
    """
    GET /connectors?expand=...

    ``expand`` holds any of "status" and "info".
    """

    method: ClassVar[HttpMethod] = HttpMethod.GET

    expand: Tuple[str, ...] = ("status", "info")

    @property
    def api_endpoint(self) -> str:
        query = "&".join(f"expand={option}" for option in self.expand)
        return f"/connectors?{query}" if query else "/connectors"

    def parse_response(self, body: str) -> Dict[str, ExpandedConnector]:
        return parse_json(body, Dict[str, ExpandedConnector])


@dataclass(frozen=True)
class GetConnector(Request[ConnectorDefinition]):
    """GET /connectors/{name}"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name)

    def parse_response(self, body: str) -> ConnectorDefinition:
        return ConnectorDefinition.model_validate_json(body)


@dataclass(frozen=True)
class GetConnectorConfig(Request[Dict[str, str]]):
    """GET /connectors/{name}/config"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "config")

    def parse_response(self, body: str) -> Dict[str, str]:
        return parse_json(body, Dict[str, str])


@dataclass(frozen=True)
class GetConnectorStatus(Request[ConnectorStatus]):
    """GET /connectors/{name}/status"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "status")

    def parse_response(self, body: str) -> ConnectorStatus:
        return ConnectorStatus.model_validate_json(body)


@dataclass(frozen=True)
class GetConnectorTopics(Request[ConnectorTopics]):
    """GET /connectors/{name}/topics"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "topics")

    def parse_response(self, body: str) -> ConnectorTopics:
        # {"<name>": {"topics": [...]}}
        by_name = parse_json(body, Dict[str, Dict[str, List[str]]])
        entry = by_name.get(self.connector_name, {})
        return ConnectorTopics(name=self.connector_name, topics=entry.get("topics", []))


@dataclass(frozen=True)
class PutConnectorTopicsReset(AcceptedRequest):
    """PUT /connectors/{name}/topics/reset"""

    method: ClassVar[HttpMethod] = HttpMethod.PUT

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "topics", "reset")


@dataclass(frozen=True)
class PostConnector(Request[ConnectorDefinition]):
    """POST /connectors"""

    method: ClassVar[HttpMethod] = HttpMethod.POST

    definition: NewConnectorDefinition

    @property
    def api_endpoint(self) -> str:
        return "/connectors"

    @property
    def request_body(self) -> Any:
        return self.definition

    def parse_response(self, body: str) -> ConnectorDefinition:
        return ConnectorDefinition.model_validate_json(body)


@dataclass(frozen=True)
class PutConnectorConfig(Request[ConnectorDefinition]):
    """PUT /connectors/{name}/config"""

    method: ClassVar[HttpMethod] = HttpMethod.PUT

    connector_name: str
    config: Dict[str, Any] = field(default_factory=dict)

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "config")

    @property
    def request_body(self) -> Any:
        return stringify_config(self.config)

    def parse_response(self, body: str) -> ConnectorDefinition:
        return ConnectorDefinition.model_validate_json(body)


@dataclass(frozen=True)
class PostConnectorRestart(AcceptedRequest):
    """POST /connectors/{name}/restart"""

    method: ClassVar[HttpMethod] = HttpMethod.POST

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "restart")


@dataclass(frozen=True)
class PostConnectorRestartWithOptions(Request[Optional[ConnectorStatus]]):
    """
    POST /connectors/{name}/restart?includeTasks=..&onlyFailed=..

    The worker answers 202 with the connector status when instances are
    restarted, and 204 with no body when nothing needed restarting.
    """

    method: ClassVar[HttpMethod] = HttpMethod.POST

    connector_name: str
    include_tasks: bool = False
    only_failed: bool = False

    @property
    def api_endpoint(self) -> str:
        path = connector_path(self.connector_name, "restart")
        include_tasks = "true" if self.include_tasks else "false"
        only_failed = "true" if self.only_failed else "false"
        return f"{path}?includeTasks={include_tasks}&onlyFailed={only_failed}"

    def parse_response(self, body: str) -> Optional[ConnectorStatus]:
        if not body.strip():
            return None
        return ConnectorStatus.model_validate_json(body)


@dataclass(frozen=True)
class PutConnectorPause(AcceptedRequest):
    """PUT /connectors/{name}/pause"""

    method: ClassVar[HttpMethod] = HttpMethod.PUT

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "pause")


@dataclass(frozen=True)
class PutConnectorResume(AcceptedRequest):
    """PUT /connectors/{name}/resume"""

    method: ClassVar[HttpMethod] = HttpMethod.PUT

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "resume")


@dataclass(frozen=True)
class DeleteConnector(AcceptedRequest):
    """DELETE /connectors/{name}"""

    method: ClassVar[HttpMethod] = HttpMethod.DELETE

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name)
