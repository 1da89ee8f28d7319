"""
REST Transport Unit Tests
"""

import socket
import threading
from contextlib import contextmanager
from types import SimpleNamespace
from unittest.mock import MagicMock, PropertyMock, patch

import pytest
import requests
from requests.auth import HTTPBasicAuth
from urllib3.exceptions import ReadTimeoutError

from kafka_connect_client.client.auth import AuthScope, ChallengeBasicAuth, Credentials, HttpHost
from kafka_connect_client.client.hooks import DefaultHttpClientConfigHooks
from kafka_connect_client.client.http_client import DEFAULT_HEADERS, RestClient
from kafka_connect_client.client.response_handler import RestResponse
from kafka_connect_client.config import Configuration
from kafka_connect_client.endpoints import GetConnectors, PostConnector
from kafka_connect_client.exceptions import (
    ConfigurationError,
    ConnectionException,
    ResultParsingException,
    UsageError,
)
from kafka_connect_client.models import NewConnectorDefinition


def raw_request(method: str, endpoint: str = "/connectors", body=None) -> SimpleNamespace:
    return SimpleNamespace(method=method, api_endpoint=endpoint, request_body=body)


@contextmanager
def stalling_server(payload: bytes):
    """Serve one connection that sends payload and then stops responding"""
    release = threading.Event()
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    listener.settimeout(5)

    def serve():
        conn, _ = listener.accept()
        with conn:
            conn.recv(65536)
            conn.sendall(payload)
            release.wait(5)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield listener.getsockname()[1]
    finally:
        release.set()
        thread.join(5)
        listener.close()


class ShortReadTimeoutHooks(DefaultHttpClientConfigHooks):
    def modify_request_config(self, configuration, request_config):
        return request_config.with_socket_timeout(300)


@pytest.fixture
def config() -> Configuration:
    return Configuration(api_host="http://localhost:8083")


@pytest.fixture
def client(config: Configuration):
    rest_client = RestClient()
    rest_client.init(config)
    yield rest_client
    rest_client.close()


@pytest.fixture
def session_request(make_response):
    with patch("requests.Session.request") as mock_request:
        mock_request.return_value = make_response(200, "")
        yield mock_request


class TestRestClientInit:
    """Tests for RestClient.init"""

    def test_init_without_auth(self, client: RestClient):
        """Should start with an empty credential store and auth cache"""
        assert client.is_initialized is True
        assert len(client.credential_store) == 0
        assert len(client.auth_cache) == 0
        assert client.request_config.connect_timeout_ms == 300_000
        assert client.request_config.proxy is None

    def test_init_seeds_basic_auth(self):
        """Should register credentials and seed the auth cache for the API host"""
        config = Configuration(api_host="http://example.com:80").with_basic_auth("u", "p")
        with RestClient() as client:
            client.init(config)

            assert client.credential_store.get_credentials(
                AuthScope("example.com", 80)
            ) == Credentials("u", "p")
            assert HttpHost("example.com", 80, "http") in client.auth_cache

    def test_init_basic_auth_default_port(self):
        """Should scope credentials to the scheme's default port"""
        config = Configuration(api_host="https://connect.example.com").with_basic_auth("u", "p")
        with RestClient() as client:
            client.init(config)

            assert client.credential_store.find("connect.example.com", 443) is not None
            assert HttpHost("connect.example.com", 443, "https") in client.auth_cache

    def test_init_basic_auth_uppercase_scheme(self):
        """Should scope credentials to the host of an upper-case scheme URL"""
        config = Configuration(api_host="HTTPS://kc.example:8443").with_basic_auth("u", "p")
        with RestClient() as client:
            client.init(config)

            assert client.credential_store.get_credentials(
                AuthScope("kc.example", 8443)
            ) == Credentials("u", "p")
            assert HttpHost("kc.example", 8443, "https") in client.auth_cache

    def test_init_seeds_proxy_credentials(self, config: Configuration):
        """Should register proxy credentials and route through the proxy"""
        configured = config.with_proxy("proxy.local", 3128).with_proxy_authentication("pu", "pp")
        with RestClient() as client:
            client.init(configured)

            proxy = HttpHost("proxy.local", 3128, "http")
            assert client.credential_store.get_credentials(proxy.scope) == Credentials("pu", "pp")
            assert proxy in client.auth_cache
            assert client.request_config.proxy == proxy

    def test_init_proxy_without_credentials(self, config: Configuration):
        """Should route through the proxy without registering credentials"""
        with RestClient() as client:
            client.init(config.with_proxy("proxy.local", 3128))

            assert client.request_config.proxy == HttpHost("proxy.local", 3128)
            assert len(client.credential_store) == 0

    @pytest.mark.parametrize("hook_name", [
        "create_https_context_builder",
        "create_client_builder",
        "create_request_config",
        "create_credential_store",
        "create_auth_cache",
        "modify_auth_cache",
        "modify_credential_store",
        "modify_request_config",
        "modify_client_builder",
    ])
    def test_init_hook_returning_none(self, config: Configuration, hook_name: str):
        """Should raise ConfigurationError before any network access"""
        hooks = DefaultHttpClientConfigHooks()
        setattr(hooks, hook_name, lambda *args: None)
        client = RestClient(hooks=hooks)

        with patch("requests.Session.request") as mock_request:
            with pytest.raises(ConfigurationError) as exc_info:
                client.init(config)

        assert hook_name in str(exc_info.value)
        assert exc_info.value.code == "CONFIG_HOOK_RETURNED_NONE"
        assert client.is_initialized is False
        mock_request.assert_not_called()

    def test_init_invalid_host_for_basic_auth(self):
        """Should raise ConfigurationError when the API host cannot be parsed"""
        config = Configuration(api_host="http://bad-port:99999").with_basic_auth("u", "p")
        with pytest.raises(ConfigurationError) as exc_info:
            RestClient().init(config)
        assert exc_info.value.code == "CONFIG_INVALID_HOST"

    def test_modify_hooks_see_configured_values(self, config: Configuration):
        """Should run modify hooks after configured values are applied"""
        seen = {}

        class RecordingHooks(DefaultHttpClientConfigHooks):
            def modify_request_config(self, configuration, request_config):
                seen["connect_timeout_ms"] = request_config.connect_timeout_ms
                return request_config.with_socket_timeout(5000)

            def modify_client_builder(self, configuration, client_builder):
                seen["ttl"] = client_builder.connection_time_to_live
                return client_builder

        with RestClient(hooks=RecordingHooks()) as client:
            client.init(config.with_request_timeout(7).with_connection_time_to_live(60))

            assert seen == {"connect_timeout_ms": 7000, "ttl": 60}
            assert client.request_config.timeout == (7.0, 5.0)

    def test_reinit_replaces_session(self, config: Configuration):
        """Should close the previous session when initialized again"""
        client = RestClient()
        client.init(config)
        first = client._session
        with patch.object(first, "close") as close:
            client.init(config)
        close.assert_called_once()
        assert client._session is not first
        client.close()


class TestRestClientSubmit:
    """Tests for RestClient.submit_request"""

    def test_get_connectors(self, client: RestClient, session_request, make_response):
        """Should call apiHost + endpoint with only the default headers"""
        session_request.return_value = make_response(200, '["a","b"]')

        response = client.submit_request(GetConnectors())

        assert response == RestResponse(200, '["a","b"]')
        args, kwargs = session_request.call_args
        assert args == ("GET", "http://localhost:8083/connectors")
        assert kwargs["headers"] == {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        assert kwargs["auth"] is None
        assert kwargs["data"] is None
        assert kwargs["timeout"] == (300.0, None)

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    def test_all_methods_send_default_headers(self, client: RestClient, session_request, method: str):
        """Should send the same headers and no credentials for every method"""
        client.submit_request(raw_request(method, "/connectors/x"))

        args, kwargs = session_request.call_args
        assert args == (method, "http://localhost:8083/connectors/x")
        assert kwargs["headers"] == dict(DEFAULT_HEADERS)
        assert "Authorization" not in kwargs["headers"]
        assert kwargs["auth"] is None

    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
    def test_body_serialized_as_json(self, client: RestClient, session_request, method: str):
        """Should attach the body as encoded JSON"""
        client.submit_request(raw_request(method, body={"name": "x", "config": {"tasks.max": "1"}}))

        data = session_request.call_args[1]["data"]
        assert data == b'{"name": "x", "config": {"tasks.max": "1"}}'

    @pytest.mark.parametrize("method", ["POST", "PUT", "DELETE"])
    def test_null_body_attaches_nothing(self, client: RestClient, session_request, method: str):
        """Should not attach an entity without a body"""
        client.submit_request(raw_request(method))
        assert session_request.call_args[1]["data"] is None

    def test_model_body(self, client: RestClient, session_request):
        """Should serialize pydantic models by their wire names"""
        definition = NewConnectorDefinition(name="sink", config={"tasks.max": 2})
        client.submit_request(PostConnector(definition))

        data = session_request.call_args[1]["data"]
        assert data == b'{"name": "sink", "config": {"tasks.max": "2"}}'

    def test_body_uses_configured_encoding(self, session_request):
        """Should encode the payload with the configured encoding"""
        config = Configuration(api_host="localhost:8083", encoding="latin-1")
        with RestClient() as client:
            client.init(config)
            client.submit_request(raw_request("PUT", body={"name": "café"}))

        assert session_request.call_args[1]["data"] == '{"name": "café"}'.encode("latin-1")

    def test_unencodable_body(self, session_request):
        """Should raise ResultParsingException when the payload cannot be encoded"""
        config = Configuration(api_host="localhost:8083", encoding="ascii")
        with RestClient() as client:
            client.init(config)
            with pytest.raises(ResultParsingException):
                client.submit_request(raw_request("POST", body={"name": "café"}))
        session_request.assert_not_called()

    def test_unserializable_body(self, client: RestClient, session_request):
        """Should raise ResultParsingException for bodies JSON cannot represent"""
        with pytest.raises(ResultParsingException):
            client.submit_request(raw_request("POST", body={"when": object()}))
        session_request.assert_not_called()

    def test_debug_payload_redacts_credentials_only(self, client: RestClient, session_request, caplog):
        """Should redact credentials but keep converter settings readable"""
        body = {
            "name": "sink",
            "config": {
                "key.converter": "org.apache.kafka.connect.json.JsonConverter",
                "key.converter.schemas.enable": "false",
                "connection.password": "hunter2",
                "sasl.jaas.config": "PlainLoginModule required password=hunter2;",
            },
        }
        with caplog.at_level("DEBUG", logger="kafka_connect_client.client.http_client"):
            client.submit_request(raw_request("POST", body=body))

        assert "JsonConverter" in caplog.text
        assert '"key.converter.schemas.enable": "false"' in caplog.text
        assert "hunter2" not in caplog.text
        assert "[REDACTED]" in caplog.text

    def test_preemptive_basic_auth(self, session_request):
        """Should send basic auth with the first request"""
        config = Configuration(api_host="http://localhost:8083").with_basic_auth("u", "p")
        with RestClient() as client:
            client.init(config)
            client.submit_request(GetConnectors())

        assert session_request.call_args[1]["auth"] == HTTPBasicAuth("u", "p")

    def test_challenge_auth_when_cache_cleared(self, session_request):
        """Should fall back to challenge auth when the host is not cached"""

        class NoPreemptiveAuth(DefaultHttpClientConfigHooks):
            def modify_auth_cache(self, configuration, auth_cache):
                auth_cache.clear()
                return auth_cache

        config = Configuration(api_host="http://localhost:8083").with_basic_auth("u", "p")
        with RestClient(hooks=NoPreemptiveAuth()) as client:
            client.init(config)
            client.submit_request(GetConnectors())

        assert session_request.call_args[1]["auth"] == ChallengeBasicAuth("u", "p")

    def test_execution_context_is_fresh_per_request(self, client: RestClient, session_request):
        """Should create and modify a new context for every request"""
        contexts = []

        class RecordingHooks(DefaultHttpClientConfigHooks):
            def modify_execution_context(self, configuration, context):
                contexts.append(context)
                return context

        client._hooks = RecordingHooks()
        client.submit_request(GetConnectors())
        client.submit_request(GetConnectors())

        assert len(contexts) == 2
        assert contexts[0] is not contexts[1]
        assert contexts[0].credential_store is client.credential_store
        assert contexts[0].auth_cache is client.auth_cache

    def test_execution_context_hook_returning_none(self, client: RestClient, session_request):
        """Should raise ConfigurationError without sending the request"""
        hooks = DefaultHttpClientConfigHooks()
        hooks.create_execution_context = lambda configuration: None
        client._hooks = hooks

        with pytest.raises(ConfigurationError):
            client.submit_request(GetConnectors())
        session_request.assert_not_called()

    def test_non_2xx_returned(self, client: RestClient, session_request, make_response):
        """Should return error statuses for the caller to interpret"""
        session_request.return_value = make_response(
            404, '{"error_code":404,"message":"Connector x not found"}'
        )
        response = client.submit_request(GetConnectors())
        assert response.status_code == 404
        assert response.is_success is False
        assert "not found" in response.body


class TestRestClientErrors:
    """Tests for failure classification"""

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    @pytest.mark.parametrize("error", [
        requests.exceptions.ConnectionError("Connection refused"),
        requests.exceptions.SSLError("certificate verify failed"),
        requests.exceptions.ProxyError("proxy unreachable"),
        requests.exceptions.ConnectTimeout("connect timed out"),
        requests.exceptions.InvalidURL("bad uri"),
    ])
    def test_connection_failures(self, client: RestClient, session_request, method: str, error):
        """Should raise ConnectionException for connectivity failures"""
        session_request.side_effect = error

        with pytest.raises(ConnectionException) as exc_info:
            client.submit_request(raw_request(method, body={"a": 1}))

        assert exc_info.value.cause is error
        assert str(error) in str(exc_info.value)

    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
    @pytest.mark.parametrize("error", [
        requests.exceptions.ChunkedEncodingError("broken stream"),
        requests.exceptions.ContentDecodingError("bad gzip"),
        requests.exceptions.ReadTimeout("read timed out"),
        requests.exceptions.ConnectionError(ReadTimeoutError(None, "/connectors", "Read timed out.")),
        OSError("stream closed"),
    ])
    def test_result_failures(self, client: RestClient, session_request, method: str, error):
        """Should raise ResultParsingException for other I/O failures"""
        session_request.side_effect = error

        with pytest.raises(ResultParsingException) as exc_info:
            client.submit_request(raw_request(method))

        assert exc_info.value.cause is error

    def test_unreadable_body(self, client: RestClient, session_request):
        """Should raise ResultParsingException when the body cannot be read"""
        response = MagicMock()
        type(response).text = PropertyMock(
            side_effect=requests.exceptions.ChunkedEncodingError("Connection broken")
        )
        session_request.return_value = response

        with pytest.raises(ResultParsingException):
            client.submit_request(GetConnectors())

        response.__exit__.assert_called_once()

    def test_connection_refused(self, closed_port: int):
        """Should raise ConnectionException when nothing is listening"""
        config = Configuration(api_host=f"http://127.0.0.1:{closed_port}", request_timeout_in_seconds=2)
        with RestClient() as client:
            client.init(config)
            with pytest.raises(ConnectionException):
                client.submit_request(GetConnectors())

    @pytest.mark.parametrize("payload", [
        b"",
        b'HTTP/1.1 200 OK\r\nContent-Type: application/json\r\nContent-Length: 100\r\n\r\n["a"',
    ], ids=["before_headers", "mid_body"])
    def test_read_timeout_is_result_failure(self, payload: bytes):
        """Should raise ResultParsingException whenever the read times out"""
        with stalling_server(payload) as port:
            with RestClient(hooks=ShortReadTimeoutHooks()) as client:
                client.init(Configuration(api_host=f"http://127.0.0.1:{port}"))
                with pytest.raises(ResultParsingException):
                    client.submit_request(GetConnectors())

    def test_submit_before_init(self):
        """Should fail fast when not initialized"""
        with pytest.raises(UsageError) as exc_info:
            RestClient().submit_request(GetConnectors())
        assert exc_info.value.code == "USAGE_NOT_INITIALIZED"

    def test_submit_after_close(self, config: Configuration, session_request):
        """Should fail fast after close"""
        client = RestClient()
        client.init(config)
        client.close()

        with pytest.raises(UsageError):
            client.submit_request(GetConnectors())
        session_request.assert_not_called()

    def test_unknown_method(self, client: RestClient, session_request):
        """Should reject methods other than GET, POST, PUT and DELETE"""
        with pytest.raises(UsageError) as exc_info:
            client.submit_request(raw_request("PATCH"))
        assert exc_info.value.code == "USAGE_UNKNOWN_METHOD"
        session_request.assert_not_called()


class TestRestClientClose:
    """Tests for RestClient.close"""

    def test_close_twice(self, config: Configuration):
        """Should treat a second close as a no-op"""
        client = RestClient()
        client.init(config)
        client.close()
        client.close()
        assert client.is_initialized is False

    def test_close_before_init(self):
        """Should do nothing when never initialized"""
        RestClient().close()

    def test_close_logs_failures(self, config: Configuration, caplog):
        """Should log and swallow errors from releasing the session"""
        client = RestClient()
        client.init(config)

        with patch.object(client._session, "close", side_effect=RuntimeError("boom")):
            client.close()

        assert client.is_initialized is False
        assert "Error closing" in caplog.text

    def test_context_manager(self, config: Configuration):
        """Should close on exit"""
        with RestClient() as client:
            client.init(config)
        assert client.is_initialized is False
