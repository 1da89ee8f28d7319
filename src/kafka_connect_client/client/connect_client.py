"""
Kafka Connect API Client

High-level client exposing the Kafka Connect REST API as methods that
return parsed models
"""

import json
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple, TypeVar

from pydantic import ValidationError as PydanticValidationError

from kafka_connect_client.client.http_client import RestClient
from kafka_connect_client.client.response_handler import RestResponse
from kafka_connect_client.config.connect_config import Configuration
from kafka_connect_client.endpoints import (
    DeleteConnector,
    GetConnectServerVersion,
    GetConnector,
    GetConnectorConfig,
    GetConnectorPlugins,
    GetConnectors,
    GetConnectorsExpanded,
    GetConnectorStatus,
    GetConnectorTasks,
    GetConnectorTaskStatus,
    GetConnectorTopics,
    PostConnector,
    PostConnectorRestart,
    PostConnectorRestartWithOptions,
    PostConnectorTaskRestart,
    PutConnectorConfig,
    PutConnectorPause,
    PutConnectorPluginConfigValidate,
    PutConnectorResume,
    PutConnectorTopicsReset,
    Request,
)
from kafka_connect_client.exceptions import (
    ConcurrentConfigModificationException,
    InvalidRequestException,
    ResultParsingException,
    UnauthorizedRequestException,
)
from kafka_connect_client.models import (
    ConfigValidationResults,
    ConnectServerVersion,
    ConnectorDefinition,
    ConnectorPlugin,
    ConnectorPluginConfigDefinition,
    ConnectorStatus,
    ConnectorTopics,
    ExpandedConnector,
    NewConnectorDefinition,
    Task,
    TaskStatus,
)


T = TypeVar("T")

# Logger for this module
logger = logging.getLogger(__name__)


class KafkaConnectClient:
    """
    Client for the Kafka Connect REST API

    The transport is initialized on first use and reused until close().

    Example:
        >>> config = Configuration(api_host="localhost:8083")
        >>> with KafkaConnectClient(config) as client:
        ...     client.get_connectors()
        ['my-connector']
    """

    def __init__(
        self,
        configuration: Configuration,
        rest_client: Optional[RestClient] = None,
    ) -> None:
        """
        Create a new client

        Args:
            configuration: Client configuration
            rest_client: Transport to use; defaults to a RestClient with
                default hooks
        """
        self._configuration = configuration
        self._rest_client = rest_client or RestClient()
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    def get_connect_server_version(self) -> ConnectServerVersion:
        """Version of the worker and the Kafka cluster it belongs to"""
        return self.submit_request(GetConnectServerVersion())

    def get_connectors(self) -> List[str]:
        """Names of all deployed connectors"""
        return self.submit_request(GetConnectors())

    def get_connectors_expand_status(self) -> Dict[str, ExpandedConnector]:
        """All deployed connectors with their status"""
        return self.submit_request(GetConnectorsExpanded(expand=("status",)))

    def get_connectors_expand_info(self) -> Dict[str, ExpandedConnector]:
        """All deployed connectors with their definition"""
        return self.submit_request(GetConnectorsExpanded(expand=("info",)))

    def get_connectors_expand_all(self) -> Dict[str, ExpandedConnector]:
        """All deployed connectors with their status and definition"""
        return self.submit_request(GetConnectorsExpanded(expand=("status", "info")))

    def get_connector(self, connector_name: str) -> ConnectorDefinition:
        return self.submit_request(GetConnector(connector_name))

    def get_connector_config(self, connector_name: str) -> Dict[str, str]:
        return self.submit_request(GetConnectorConfig(connector_name))

    def get_connector_status(self, connector_name: str) -> ConnectorStatus:
        return self.submit_request(GetConnectorStatus(connector_name))

    def get_connector_topics(self, connector_name: str) -> ConnectorTopics:
        return self.submit_request(GetConnectorTopics(connector_name))

    def reset_connector_topics(self, connector_name: str) -> bool:
        return self.submit_request(PutConnectorTopicsReset(connector_name))

    def add_connector(self, definition: NewConnectorDefinition) -> ConnectorDefinition:
        """
        Create a new connector

        Args:
            definition: Name and configuration of the connector

        Returns:
            Definition of the created connector
        """
        return self.submit_request(PostConnector(definition))

    def update_connector_config(
        self, connector_name: str, config: Dict[str, Any]
    ) -> ConnectorDefinition:
        """Create or update the configuration of a connector"""
        return self.submit_request(PutConnectorConfig(connector_name, config))

    def restart_connector(self, connector_name: str) -> bool:
        return self.submit_request(PostConnectorRestart(connector_name))

    def restart_connector_with_options(
        self,
        connector_name: str,
        include_tasks: bool = False,
        only_failed: bool = False,
    ) -> Optional[ConnectorStatus]:
        """
        Restart a connector and optionally its tasks

        Returns:
            Status of the restarted instances, or None when nothing was
            restarted
        """
        return self.submit_request(
            PostConnectorRestartWithOptions(connector_name, include_tasks, only_failed)
        )

    def pause_connector(self, connector_name: str) -> bool:
        return self.submit_request(PutConnectorPause(connector_name))

    def resume_connector(self, connector_name: str) -> bool:
        return self.submit_request(PutConnectorResume(connector_name))

    def delete_connector(self, connector_name: str) -> bool:
        return self.submit_request(DeleteConnector(connector_name))

    def get_connector_tasks(self, connector_name: str) -> List[Task]:
        return self.submit_request(GetConnectorTasks(connector_name))

    def get_connector_task_status(self, connector_name: str, task_id: int) -> TaskStatus:
        return self.submit_request(GetConnectorTaskStatus(connector_name, task_id))

    def restart_connector_task(self, connector_name: str, task_id: int) -> bool:
        return self.submit_request(PostConnectorTaskRestart(connector_name, task_id))

    def get_connector_plugins(self) -> List[ConnectorPlugin]:
        """Connector plugins installed on the worker"""
        return self.submit_request(GetConnectorPlugins())

    def validate_connector_plugin_config(
        self, definition: ConnectorPluginConfigDefinition
    ) -> ConfigValidationResults:
        """Validate a configuration against a connector plugin"""
        return self.submit_request(PutConnectorPluginConfigValidate(definition))

    def submit_request(self, request: Request[T]) -> T:
        """
        Submit a request and interpret the response

        Args:
            request: Endpoint definition

        Returns:
            Parsed response of the request

        Raises:
            UnauthorizedRequestException: On HTTP 401
            ConcurrentConfigModificationException: On HTTP 409
            InvalidRequestException: On any other non-2xx status
            ResultParsingException: If a 2xx body cannot be parsed
            RestException: If the transport fails
        """
        self._ensure_initialized()

        response = self._rest_client.submit_request(request)
        status_code = response.status_code

        if response.is_success:
            try:
                return request.parse_response(response.body)
            except (PydanticValidationError, ValueError) as e:
                raise ResultParsingException(
                    f"Unable to parse response: {e}", cause=e
                ) from e

        error_code, message = self._parse_error(response)
        logger.debug(
            "Request %s %s failed with status %d",
            request.method.value,
            request.api_endpoint,
            status_code,
        )

        if status_code == 401:
            raise UnauthorizedRequestException(message or "Invalid credentials")
        if status_code == 409:
            raise ConcurrentConfigModificationException(
                message or "Concurrent config modification", error_code
            )
        raise InvalidRequestException(
            message or f"Request failed with status {status_code}",
            status_code=status_code,
            error_code=error_code,
        )

    @staticmethod
    def _parse_error(response: RestResponse) -> Tuple[Optional[int], Optional[str]]:
        """Extract error_code and message from a Kafka Connect error body"""
        try:
            data = json.loads(response.body)
        except ValueError:
            return None, response.body.strip() or None
        if not isinstance(data, dict):
            return None, None

        error_code = data.get("error_code")
        if not isinstance(error_code, int) or isinstance(error_code, bool):
            error_code = None
        message = data.get("message")
        return error_code, message if isinstance(message, str) else None

    def _ensure_initialized(self) -> None:
        if self._initialized:
            return
        with self._lock:
            if not self._initialized:
                self._rest_client.init(self._configuration)
                self._initialized = True

    def close(self) -> None:
        """Close the client and release pooled connections"""
        with self._lock:
            self._rest_client.close()
            self._initialized = False

    def __enter__(self) -> "KafkaConnectClient":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit"""
        self.close()
