"""Task models"""

from typing import Dict, Optional
from pydantic import BaseModel, Field


class TaskId(BaseModel):
    """Identifies one task of a connector"""

    connector: str = Field(..., description="Connector name")
    task: int = Field(..., description="Task number")


class Task(BaseModel):
    """Task with its configuration"""

    id: TaskId = Field(..., description="Task identifier")
    config: Dict[str, str] = Field(default_factory=dict, description="Task configuration")


class TaskStatus(BaseModel):
    """Runtime state of a task"""

    id: int = Field(..., description="Task number")
    state: str = Field(..., description="RUNNING, PAUSED, FAILED, UNASSIGNED or RESTARTING")
    worker_id: str = Field(..., description="Worker running the task")
    trace: Optional[str] = Field(None, description="Stack trace when the task failed")
