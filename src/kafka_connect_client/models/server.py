"""Connect worker version model"""

from typing import Optional
from pydantic import BaseModel, Field


class ConnectServerVersion(BaseModel):
    """Version details reported by the root endpoint"""

    version: str = Field(..., description="Kafka Connect worker version")
    commit: Optional[str] = Field(None, description="Git commit of the worker build")
    kafka_cluster_id: Optional[str] = Field(None, description="Kafka cluster ID")
