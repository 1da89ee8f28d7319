"""
Configuration Examples for the Kafka Connect client
Demonstrates various ways to configure and use the client
"""

from kafka_connect_client import (
    Configuration,
    ConfigLoader,
    ConfigValidator,
    DefaultHttpClientConfigHooks,
    KafkaConnectClient,
    NewConnectorDefinition,
    RestClient,
)


# =============================================================================
# Example 1: Programmatic Configuration
# =============================================================================

def programmatic_config_example() -> Configuration:
    """Configure the client with the fluent helpers"""
    return (
        Configuration(api_host="https://connect.example.com:8443")
        .with_basic_auth("connect-admin", "your-password")
        .with_request_timeout(30)
        .with_trust_store("/path/to/ca.pem")
    )


# =============================================================================
# Example 2: File-based Configuration
# =============================================================================

def file_config_example() -> Configuration:
    """Load configuration from JSON file"""
    loader = ConfigLoader()

    # TLS file paths in the file are resolved relative to it
    return loader.load(
        file="./config/kafka_connect.json",
        env=True,  # Environment variables override the file
    )


# =============================================================================
# Example 3: Environment Variables Configuration
# =============================================================================

def env_config_example() -> Configuration:
    """
    Load configuration from environment variables

    Set these environment variables before running:

    export KAFKA_CONNECT_HOST="http://localhost:8083"
    export KAFKA_CONNECT_REQUEST_TIMEOUT="30"
    export KAFKA_CONNECT_USERNAME="connect-admin"
    export KAFKA_CONNECT_PASSWORD="your-password"
    export KAFKA_CONNECT_PROXY_HOST="proxy.internal"
    export KAFKA_CONNECT_PROXY_PORT="3128"
    """
    loader = ConfigLoader()
    return loader.load(env=True)


# =============================================================================
# Example 4: Merged Configuration (File + Environment + Programmatic)
# =============================================================================

def merged_config_example() -> Configuration:
    """
    Merge configuration from multiple sources
    Priority: programmatic > environment > file
    """
    loader = ConfigLoader()

    return loader.load(
        file="./config/kafka_connect.json",
        env=True,
        config={
            "request_timeout_in_seconds": 120,
        },
    )


# =============================================================================
# Example 5: Proxy and Custom Hooks
# =============================================================================

class LongReadHooks(DefaultHttpClientConfigHooks):
    """Bound the read timeout, which is unbounded by default"""

    def modify_request_config(self, configuration, request_config):
        return request_config.with_socket_timeout(120_000)


def proxy_and_hooks_example() -> KafkaConnectClient:
    """Route through an authenticated proxy with a custom transport"""
    config = (
        Configuration(api_host="http://connect.internal:8083")
        .with_proxy("proxy.internal", 3128)
        .with_proxy_authentication("proxy-user", "proxy-password")
    )
    return KafkaConnectClient(config, rest_client=RestClient(hooks=LongReadHooks()))


# =============================================================================
# Example 6: Creating a Configuration Template
# =============================================================================

def create_config_template_example() -> None:
    """Create a template configuration file"""
    loader = ConfigLoader()

    loader.create_template("./config/kafka_connect.template.json")

    print("Configuration template created at ./config/kafka_connect.template.json")


# =============================================================================
# Example 7: Configuration Validation
# =============================================================================

def validation_example() -> None:
    """Validate configuration before use"""
    validator = ConfigValidator()

    partial_config = {
        "proxy_host": "proxy.internal",
        # Missing api_host and proxy_port...
    }

    result = validator.validate(partial_config)

    if not result.valid:
        print("Configuration validation failed:")
        for error in result.errors:
            print(f"  - {error.field}: {error.message}")


# =============================================================================
# Example 8: Managing Connectors
# =============================================================================

def connector_example() -> None:
    """Deploy a connector and inspect its status"""
    config = Configuration(api_host="localhost:8083")

    with KafkaConnectClient(config) as client:
        print(f"Worker version: {client.get_connect_server_version().version}")

        client.add_connector(NewConnectorDefinition(
            name="file-sink",
            config={
                "connector.class": "FileStreamSink",
                "tasks.max": 1,
                "topics": "orders",
                "file": "/tmp/orders.txt",
            },
        ))

        status = client.get_connector_status("file-sink")
        print(f"{status.name}: {status.connector.state}")


# =============================================================================
# Run Examples
# =============================================================================

if __name__ == "__main__":
    print("=== Kafka Connect Client Configuration Examples ===\n")

    # Example 7: Validation
    print("7. Configuration Validation:")
    validation_example()
    print()

    # Example 6: Create template
    print("6. Create Configuration Template:")
    create_config_template_example()
