"""Utilities module initialization"""

from kafka_connect_client.utils.url import escape_path

__all__ = ["escape_path"]
