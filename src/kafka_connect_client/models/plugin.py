"""Connector plugin models"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from kafka_connect_client.models.connector import stringify_config


class ConnectorPlugin(BaseModel):
    """Connector plugin installed on the worker"""

    class_name: str = Field(..., alias="class", description="Connector class")
    type: Optional[str] = Field(None, description="source or sink")
    version: Optional[str] = Field(None, description="Plugin version")

    model_config = {"populate_by_name": True}


class ConnectorPluginConfigDefinition(BaseModel):
    """Connector configuration to validate against a plugin"""

    name: str = Field(..., description="Plugin class name, short or fully qualified", min_length=1)
    config: Dict[str, str] = Field(default_factory=dict, description="Configuration to validate")

    @field_validator("config", mode="before")
    @classmethod
    def coerce_config_values(cls, v: Any) -> Any:
        return stringify_config(v)


class ConfigDefinition(BaseModel):
    """Definition of one plugin configuration key"""

    name: str
    type: Optional[str] = None
    required: bool = False
    default_value: Optional[str] = None
    importance: Optional[str] = None
    documentation: Optional[str] = None
    group: Optional[str] = None
    width: Optional[str] = None
    display_name: Optional[str] = None
    dependents: List[str] = Field(default_factory=list)
    order: Optional[int] = None


class ConfigValue(BaseModel):
    """Validated value of one configuration key"""

    name: str
    value: Optional[str] = None
    recommended_values: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    visible: bool = True


class ConfigValidationEntry(BaseModel):
    """Definition and validated value of one configuration key"""

    definition: ConfigDefinition
    value: ConfigValue


class ConfigValidationResults(BaseModel):
    """Result of validating a connector configuration"""

    name: str = Field(..., description="Plugin class name")
    error_count: int = Field(0, description="Number of invalid values")
    groups: List[str] = Field(default_factory=list, description="Configuration groups")
    configs: List[ConfigValidationEntry] = Field(default_factory=list)

    def get_errors(self) -> Dict[str, List[str]]:
        """Map of config key to its validation errors, for keys with errors"""
        return {
            entry.value.name: entry.value.errors
            for entry in self.configs
            if entry.value.errors
        }
