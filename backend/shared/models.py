"""
Workflow and phase-status models.
Accepts both the dashboard's camelCase payloads and the snake_case keys used in
workflow YAML definitions.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class PhaseStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    CREATED = "created"

    @classmethod
    def parse(cls, value: Any) -> "PhaseStatus":
        """Coerce a free-form status value. Anything unrecognized is PENDING."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip())
            except ValueError:
                pass
        return cls.PENDING


class WorkflowNode(BaseModel):
    """One phase definition. `ref` is expected to be unique but is not checked here."""
    model_config = ConfigDict(populate_by_name=True)

    ref: str = ""
    display_name: str = Field(default="", alias="displayName")
    agent: str = ""
    model: str = ""
    timeout: int = Field(default=0, alias="timeoutSeconds")
    required: bool = False
    depends_on: List[str] = Field(default_factory=list, alias="dependsOn")
    parallel_group: Optional[str] = Field(default=None, alias="parallelGroup")
    node_config: Dict[str, Any] = Field(default_factory=dict, alias="config")

    @field_validator("ref", "display_name", "agent", "model", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator("depends_on", mode="before")
    @classmethod
    def _coerce_depends_on(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if isinstance(v, (list, tuple)):
            return [str(d) for d in v if d is not None]
        return v

    @field_validator("node_config", mode="before")
    @classmethod
    def _none_to_dict(cls, v):
        return v or {}

    @property
    def label(self) -> str:
        return self.display_name or self.ref


def coerce_node(raw: Any, idx: int) -> Optional[WorkflowNode]:
    """One raw node entry as a WorkflowNode, or None (with a warning) when it cannot be read."""
    if isinstance(raw, WorkflowNode):
        return raw
    if not isinstance(raw, dict):
        logger.warning("Skipping non-object workflow node at index {}", idx)
        return None
    try:
        return WorkflowNode.model_validate(raw)
    except ValidationError as e:
        logger.warning("Skipping malformed workflow node at index {}: {} field error(s)", idx, e.error_count())
        return None


class Workflow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    display_name: str = Field(default="", alias="displayName")
    description: str = ""
    version: str = ""
    workflow_type: str = Field(default="", alias="workflowType")
    nodes: List[WorkflowNode] = Field(default_factory=list)
    is_builtin: bool = Field(default=False, alias="isBuiltin")

    @field_validator("name", "display_name", "description", "version", "workflow_type", mode="before")
    @classmethod
    def _scalar_to_str(cls, v):
        # YAML turns `version: 1.0` into a float
        return "" if v is None else str(v)

    @field_validator("nodes", mode="before")
    @classmethod
    def _drop_malformed_nodes(cls, v):
        # one bad node must not reject the whole workflow
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            return v
        return [node for node in (coerce_node(raw, idx) for idx, raw in enumerate(v)) if node is not None]


class PhaseStatusRecord(BaseModel):
    """Runtime status of one executed phase, as reported by the task engine."""
    model_config = ConfigDict(populate_by_name=True, extra="allow", protected_namespaces=())

    phase_name: str = Field(default="", alias="phaseName")
    display_name: str = Field(default="", alias="displayName")
    agent_name: str = Field(default="", alias="agentName")
    model_name: str = Field(default="", alias="modelName")
    status: PhaseStatus = PhaseStatus.PENDING
    output_text: Optional[str] = Field(default=None, alias="outputText")
    error: Optional[str] = None

    @field_validator("phase_name", "display_name", "agent_name", "model_name", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator("status", mode="before")
    @classmethod
    def _parse_status(cls, v):
        return PhaseStatus.parse(v)
