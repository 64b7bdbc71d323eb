"""Pydantic request schemas for API."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkflowGraphRequest(BaseModel):
    """Request for a workflow structure preview."""
    model_config = ConfigDict(populate_by_name=True)
    workflow: Any = Field(..., description="Workflow object, or its JSON/YAML text")
    size: Optional[str] = None


class PhaseGraphRequest(BaseModel):
    """Request for a task's phase graph. Without a workflow the phases are drawn linearly."""
    model_config = ConfigDict(populate_by_name=True)
    phases: List[dict] = Field(default_factory=list)
    workflow: Optional[Any] = None
    workflow_type: str = Field(default="", alias="workflowType")
    size: Optional[str] = None


class WorkflowValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    workflow: Any = Field(..., description="Workflow object, or its JSON/YAML text")
