"""Connector plugin endpoint definitions"""

from dataclasses import dataclass
from typing import Any, ClassVar, List

from kafka_connect_client.endpoints.base import HttpMethod, Request, parse_json
from kafka_connect_client.models.plugin import (
    ConfigValidationResults,
    ConnectorPlugin,
    ConnectorPluginConfigDefinition,
)
from kafka_connect_client.utils.url import escape_path


@dataclass(frozen=True)
class GetConnectorPlugins(Request[List[ConnectorPlugin]]):
    """GET /connector-plugins"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    @property
    def api_endpoint(self) -> str:
        return "/connector-plugins"

    def parse_response(self, body: str) -> List[ConnectorPlugin]:
        return parse_json(body, List[ConnectorPlugin])


@dataclass(frozen=True)
class PutConnectorPluginConfigValidate(Request[ConfigValidationResults]):
    """PUT /connector-plugins/{plugin}/config/validate"""

    method: ClassVar[HttpMethod] = HttpMethod.PUT

    definition: ConnectorPluginConfigDefinition

    @property
    def api_endpoint(self) -> str:
        return f"/connector-plugins/{escape_path(self.definition.name)}/config/validate"

    @property
    def request_body(self) -> Any:
        return self.definition.config

    def parse_response(self, body: str) -> ConfigValidationResults:
        return ConfigValidationResults.model_validate_json(body)
