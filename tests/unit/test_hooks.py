"""
Construction Hook Unit Tests
"""

import pytest

from kafka_connect_client.client.auth import AuthCache, CredentialStore, ExecutionContext
from kafka_connect_client.client.builders import ClientBuilder, HttpsContextBuilder, RequestConfig
from kafka_connect_client.client.hooks import (
    DefaultHttpClientConfigHooks,
    HttpClientConfigHooks,
)
from kafka_connect_client.config import Configuration


@pytest.fixture
def config() -> Configuration:
    return Configuration(api_host="localhost:8083")


class TestDefaultHttpClientConfigHooks:
    """Tests for DefaultHttpClientConfigHooks"""

    @pytest.fixture
    def hooks(self) -> DefaultHttpClientConfigHooks:
        return DefaultHttpClientConfigHooks()

    def test_create_hooks_return_fresh_defaults(self, hooks, config: Configuration):
        """Should create new default artifacts on every call"""
        assert isinstance(hooks.create_https_context_builder(config), HttpsContextBuilder)
        assert hooks.create_client_builder(config) == ClientBuilder()
        assert hooks.create_request_config(config) == RequestConfig()
        assert hooks.create_credential_store(config) is not hooks.create_credential_store(config)
        assert isinstance(hooks.create_auth_cache(config), AuthCache)
        assert hooks.create_execution_context(config) is not hooks.create_execution_context(config)

    def test_modify_hooks_are_identity(self, hooks, config: Configuration):
        """Should return the given artifact unchanged"""
        builder = ClientBuilder()
        request_config = RequestConfig()
        store = CredentialStore()
        cache = AuthCache()
        context = ExecutionContext()

        assert hooks.modify_client_builder(config, builder) is builder
        assert hooks.modify_request_config(config, request_config) is request_config
        assert hooks.modify_credential_store(config, store) is store
        assert hooks.modify_auth_cache(config, cache) is cache
        assert hooks.modify_execution_context(config, context) is context


class TestHttpClientConfigHooks:
    """Tests for the hooks interface"""

    def test_interface_is_abstract(self):
        """Should not be instantiable without every hook"""
        with pytest.raises(TypeError):
            HttpClientConfigHooks()

    def test_override_single_hook(self, config: Configuration):
        """Should allow overriding one hook on top of the defaults"""

        class ShortReads(DefaultHttpClientConfigHooks):
            def modify_request_config(self, configuration, request_config):
                return request_config.with_socket_timeout(1000)

        result = ShortReads().modify_request_config(config, RequestConfig())
        assert result.socket_timeout_ms == 1000
