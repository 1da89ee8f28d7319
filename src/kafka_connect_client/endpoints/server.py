"""Worker endpoint definitions"""

from dataclasses import dataclass
from typing import ClassVar

from kafka_connect_client.endpoints.base import HttpMethod, Request
from kafka_connect_client.models.server import ConnectServerVersion


@dataclass(frozen=True)
class GetConnectServerVersion(Request[ConnectServerVersion]):
    """GET /"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    @property
    def api_endpoint(self) -> str:
        return "/"

    def parse_response(self, body: str) -> ConnectServerVersion:
        return ConnectServerVersion.model_validate_json(body)
