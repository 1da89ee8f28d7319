"""Task endpoint definitions"""

from dataclasses import dataclass
from typing import ClassVar, List

from kafka_connect_client.endpoints.base import (
    AcceptedRequest,
    HttpMethod,
    Request,
    connector_path,
    parse_json,
)
from kafka_connect_client.models.task import Task, TaskStatus


@dataclass(frozen=True)
class GetConnectorTasks(Request[List[Task]]):
    """GET /connectors/{name}/tasks"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    connector_name: str

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "tasks")

    def parse_response(self, body: str) -> List[Task]:
        return parse_json(body, List[Task])


@dataclass(frozen=True)
class GetConnectorTaskStatus(Request[TaskStatus]):
    """GET /connectors/{name}/tasks/{id}/status"""

    method: ClassVar[HttpMethod] = HttpMethod.GET

    connector_name: str
    task_id: int

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "tasks", str(self.task_id), "status")

    def parse_response(self, body: str) -> TaskStatus:
        return TaskStatus.model_validate_json(body)


@dataclass(frozen=True)
class PostConnectorTaskRestart(AcceptedRequest):
    """POST /connectors/{name}/tasks/{id}/restart"""

    method: ClassVar[HttpMethod] = HttpMethod.POST

    connector_name: str
    task_id: int

    @property
    def api_endpoint(self) -> str:
        return connector_path(self.connector_name, "tasks", str(self.task_id), "restart")
