"""
HTTP transport layer for the Kafka Connect REST API
Builds the underlying requests.Session from configuration, wires basic-auth
and proxy credentials with preemptive authentication, and dispatches
GET/POST/PUT/DELETE requests through one execution path that classifies
failures as connection-level or result-level errors
"""

import json
import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

import requests
from pydantic import BaseModel
from urllib3.exceptions import ReadTimeoutError

from kafka_connect_client.client.auth import (
    AuthCache,
    AuthScope,
    BASIC_SCHEME,
    CredentialStore,
    Credentials,
    ExecutionContext,
    HttpHost,
)
from kafka_connect_client.client.builders import ClientBuilder, RequestConfig
from kafka_connect_client.client.hooks import (
    DefaultHttpClientConfigHooks,
    HttpClientConfigHooks,
)
from kafka_connect_client.client.response_handler import (
    RestResponse,
    RestResponseHandler,
)
from kafka_connect_client.config.connect_config import Configuration
from kafka_connect_client.endpoints.base import HttpMethod
from kafka_connect_client.exceptions import (
    ConfigurationError,
    ConnectionException,
    RestException,
    ResultParsingException,
    UsageError,
)


T = TypeVar("T")

# Logger for this module
logger = logging.getLogger(__name__)


# Default headers included with every request
DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType({
    "Accept": "application/json",
    "Content-Type": "application/json",
})


# Failures reaching or negotiating with the server. SSLError, ProxyError
# and ConnectTimeout are all ConnectionError subclasses.
CONNECTION_ERRORS = (
    requests.exceptions.ConnectionError,
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.URLRequired,
    requests.exceptions.InvalidHeader,
    requests.exceptions.TooManyRedirects,
)


# Sensitive fields that should be redacted in logs
SENSITIVE_FIELDS = [
    "password",
    "secret",
    "token",
    "credential",
    "jaas.config",
    "user.info",
    "api.key",
    "apikey",
]


ResponseHandler = Callable[[requests.Response], T]


class RestClient:
    """
    Transport for the Kafka Connect REST API

    Owns one requests.Session between init() and close(). After init()
    the client may be shared by concurrent callers; init() and close()
    must not race with submit_request().

    Example:
        >>> client = RestClient()
        >>> client.init(Configuration(api_host="http://localhost:8083"))
        >>> response = client.submit_request(GetConnectors())
        >>> response.status_code
        200
        >>> client.close()
    """

    def __init__(self, hooks: Optional[HttpClientConfigHooks] = None) -> None:
        """
        Create a new transport

        Args:
            hooks: Construction hooks; defaults to DefaultHttpClientConfigHooks
        """
        self._hooks = hooks or DefaultHttpClientConfigHooks()
        self._configuration: Optional[Configuration] = None
        self._session: Optional[requests.Session] = None
        self._request_config: Optional[RequestConfig] = None
        self._credential_store: Optional[CredentialStore] = None
        self._auth_cache: Optional[AuthCache] = None

    def init(self, configuration: Configuration) -> None:
        """
        Build the underlying session from configuration

        Args:
            configuration: Client configuration

        Raises:
            ConfigurationError: If a hook returns None or the API host
                cannot be parsed for basic auth
        """
        hooks = self._hooks
        # Re-initializing replaces the previous session
        self.close()
        self._configuration = configuration

        https_context_builder = self._require(
            hooks.create_https_context_builder(configuration),
            "create_https_context_builder",
        )
        https_context = https_context_builder.build()

        client_builder: ClientBuilder = self._require(
            hooks.create_client_builder(configuration), "create_client_builder"
        )
        client_builder = (
            client_builder
            .with_connection_time_to_live(configuration.connection_time_to_live_in_seconds)
            .with_https_context(https_context)
        )

        request_config: RequestConfig = self._require(
            hooks.create_request_config(configuration), "create_request_config"
        )
        request_config = request_config.with_connect_timeout(
            configuration.request_timeout_in_seconds * 1000
        )

        credential_store: CredentialStore = self._require(
            hooks.create_credential_store(configuration), "create_credential_store"
        )
        auth_cache: AuthCache = self._require(
            hooks.create_auth_cache(configuration), "create_auth_cache"
        )

        if configuration.has_proxy:
            proxy = HttpHost(
                configuration.proxy_host,
                configuration.proxy_port,
                configuration.proxy_scheme,
            )
            if configuration.proxy_username is not None:
                credential_store.set_credentials(
                    proxy.scope,
                    Credentials(configuration.proxy_username, configuration.proxy_password),
                )
                auth_cache.put(proxy, BASIC_SCHEME)
            request_config = request_config.with_proxy(proxy)

        if configuration.has_basic_auth:
            try:
                api_host = HttpHost.from_url(configuration.api_host)
            except ValueError as e:
                raise ConfigurationError(
                    f"Unable to parse api_host {configuration.api_host!r}: {e}",
                    code="CONFIG_INVALID_HOST",
                    cause=e,
                ) from e
            credential_store.set_credentials(
                AuthScope(api_host.host, api_host.port),
                Credentials(
                    configuration.basic_auth_username,
                    configuration.basic_auth_password,
                ),
            )
            auth_cache.put(api_host, BASIC_SCHEME)

        auth_cache = self._require(
            hooks.modify_auth_cache(configuration, auth_cache), "modify_auth_cache"
        )
        credential_store = self._require(
            hooks.modify_credential_store(configuration, credential_store),
            "modify_credential_store",
        )
        request_config = self._require(
            hooks.modify_request_config(configuration, request_config),
            "modify_request_config",
        )

        client_builder = (
            client_builder
            .with_credential_store(credential_store)
            .with_default_request_config(request_config)
        )
        client_builder = self._require(
            hooks.modify_client_builder(configuration, client_builder),
            "modify_client_builder",
        )

        self._credential_store = credential_store
        self._auth_cache = auth_cache
        self._request_config = request_config
        self._session = client_builder.build()

        logger.info(
            "Initialized REST client for %s %s",
            configuration.api_host,
            client_builder.describe(),
        )

    def close(self) -> None:
        """Close the underlying session; safe to call more than once"""
        if self._session is not None:
            try:
                self._session.close()
            except Exception as e:
                logger.error("Error closing: %s", e, exc_info=True)
            else:
                logger.info("Closed REST client")
        self._session = None

    def submit_request(self, request: Any) -> RestResponse:
        """
        Submit a request to the configured host

        Args:
            request: Object exposing ``method``, ``api_endpoint`` and
                ``request_body``

        Returns:
            Status code and body text of the response

        Raises:
            ConnectionException: If the server could not be reached
            ResultParsingException: If the payload could not be produced
                or the response could not be read
            UsageError: If the client is not initialized or the method is
                unknown
        """
        self._require_initialized()

        try:
            method = HttpMethod(getattr(request, "method", None))
        except ValueError:
            raise UsageError(
                f"Unknown Request Method: {getattr(request, 'method', None)}",
                code="USAGE_UNKNOWN_METHOD",
            ) from None

        url = self._construct_api_url(request.api_endpoint)
        response_handler = RestResponseHandler(self._configuration.encoding)
        body = getattr(request, "request_body", None)

        if method is HttpMethod.GET:
            return self._submit_get_request(url, {}, response_handler)
        if method is HttpMethod.POST:
            return self._submit_post_request(url, body, response_handler)
        if method is HttpMethod.PUT:
            return self._submit_put_request(url, body, response_handler)
        return self._submit_delete_request(url, body, response_handler)

    def _submit_get_request(
        self,
        url: str,
        get_params: Mapping[str, str],
        response_handler: ResponseHandler[T],
    ) -> T:
        """Internal GET; query parameters are encoded by requests"""
        return self._execute(
            HttpMethod.GET,
            url,
            response_handler,
            params=dict(get_params) or None,
        )

    def _submit_post_request(
        self, url: str, request_body: Any, response_handler: ResponseHandler[T]
    ) -> T:
        return self._execute(
            HttpMethod.POST, url, response_handler, data=self._serialize_body(request_body)
        )

    def _submit_put_request(
        self, url: str, request_body: Any, response_handler: ResponseHandler[T]
    ) -> T:
        return self._execute(
            HttpMethod.PUT, url, response_handler, data=self._serialize_body(request_body)
        )

    def _submit_delete_request(
        self, url: str, request_body: Any, response_handler: ResponseHandler[T]
    ) -> T:
        """Internal DELETE; the API accepts a body on some DELETE endpoints"""
        return self._execute(
            HttpMethod.DELETE, url, response_handler, data=self._serialize_body(request_body)
        )

    def _execute(
        self,
        method: HttpMethod,
        url: str,
        response_handler: ResponseHandler[T],
        params: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
    ) -> T:
        """Send one request with a fresh execution context and classify failures"""
        session = self._require_initialized()
        context = self._create_execution_context()

        logger.debug("Executing request %s %s", method.value, url)

        try:
            response = session.request(
                method.value,
                url,
                headers=dict(DEFAULT_HEADERS),
                params=params,
                data=data,
                auth=context.resolve_auth(url),
                timeout=self._request_config.timeout,
                stream=True,
            )
            return response_handler(response)
        except RestException:
            raise
        except requests.exceptions.ConnectionError as e:
            # A read timeout while streaming the body arrives wrapped in
            # ConnectionError; the connection itself had succeeded
            if e.args and isinstance(e.args[0], ReadTimeoutError):
                raise ResultParsingException(str(e), cause=e) from e
            raise ConnectionException(str(e), cause=e) from e
        except CONNECTION_ERRORS as e:
            # Typically a connection or certificate issue
            raise ConnectionException(str(e), cause=e) from e
        except requests.exceptions.RequestException as e:
            # The exchange happened but the result could not be read
            raise ResultParsingException(str(e), cause=e) from e
        except (OSError, UnicodeError) as e:
            raise ResultParsingException(str(e), cause=e) from e

    def _serialize_body(self, request_body: Any) -> Optional[bytes]:
        """
        Serialize a request body to JSON in the configured encoding

        Returns:
            Encoded payload, or None when there is no body

        Raises:
            ResultParsingException: If the body cannot be serialized
        """
        if request_body is None:
            return None

        try:
            if isinstance(request_body, BaseModel):
                payload = request_body.model_dump(
                    mode="json", by_alias=True, exclude_none=True
                )
            else:
                payload = request_body
            json_payload = json.dumps(payload, ensure_ascii=False)
            encoded = json_payload.encode(self._configuration.encoding)
        except (TypeError, ValueError) as e:
            raise ResultParsingException(
                f"Unable to serialize request body: {e}", cause=e
            ) from e

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Request payload %s", json.dumps(self._redact_sensitive_data(payload)))
        return encoded

    def _redact_sensitive_data(self, obj: Any) -> Any:
        """Redact sensitive data from object for logging"""
        if isinstance(obj, list):
            return [self._redact_sensitive_data(item) for item in obj]

        if isinstance(obj, dict):
            redacted = {}
            for key, value in obj.items():
                lower_key = str(key).lower()
                is_sensitive = any(
                    field in lower_key for field in SENSITIVE_FIELDS
                )

                if is_sensitive:
                    redacted[key] = "[REDACTED]"
                elif isinstance(value, (dict, list)):
                    redacted[key] = self._redact_sensitive_data(value)
                else:
                    redacted[key] = value
            return redacted

        return obj

    def _construct_api_url(self, end_point: str) -> str:
        """Prepend the API host; the endpoint is used verbatim"""
        return f"{self._configuration.api_host}{end_point}"

    def _create_execution_context(self) -> ExecutionContext:
        context = self._require(
            self._hooks.create_execution_context(self._configuration),
            "create_execution_context",
        )
        context.auth_cache = self._auth_cache
        context.credential_store = self._credential_store
        return self._require(
            self._hooks.modify_execution_context(self._configuration, context),
            "modify_execution_context",
        )

    def _require_initialized(self) -> requests.Session:
        if self._session is None:
            raise UsageError(
                "RestClient is not initialized; call init() before submitting requests",
                code="USAGE_NOT_INITIALIZED",
            )
        return self._session

    @staticmethod
    def _require(value: Optional[T], hook_name: str) -> T:
        if value is None:
            raise ConfigurationError(
                f"HttpClientConfigHooks.{hook_name}() must return non-null instance.",
                code="CONFIG_HOOK_RETURNED_NONE",
            )
        return value

    @property
    def configuration(self) -> Optional[Configuration]:
        return self._configuration

    @property
    def credential_store(self) -> Optional[CredentialStore]:
        return self._credential_store

    @property
    def auth_cache(self) -> Optional[AuthCache]:
        return self._auth_cache

    @property
    def request_config(self) -> Optional[RequestConfig]:
        return self._request_config

    @property
    def is_initialized(self) -> bool:
        return self._session is not None

    def __enter__(self) -> "RestClient":
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit"""
        self.close()
