"""Pydantic schemas and enums for Consigliere request/response contracts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AgentId(str, Enum):
    """Available agent personas."""

    PLANNER = "planner"
    REVIEWER = "reviewer"
    ARCHITECT = "architect"


class ToolName(str, Enum):
    """Tools exposed over MCP."""

    PLAN_PROJECT = "plan_project"
    REVIEW_CODE = "review_code"
    DESIGN_ARCHITECTURE = "design_architecture"
    CONSULT_AGENT = "consult_agent"


class BackendMode(str, Enum):
    """How model calls reach Gemini."""

    DIRECT = "direct"
    PROXY = "proxy"


@dataclass(frozen=True)
class AgentDefinition:
    """A named persona: fixed system prompt and target model."""

    id: AgentId
    display_name: str
    system_prompt: str
    model_id: str


# --- Request Schemas ---


class ToolInvocation(BaseModel):
    """A single tool call as received from the transport."""

    tool_name: str
    arguments: dict[str, str] = Field(default_factory=dict)


# --- Tool Input Schemas (advertised only; the dispatcher validates) ---


class PlanProjectInput(BaseModel):
    """Input for plan_project."""

    requirements: str = Field(..., description="Project requirements and description")
    context: str = Field(
        default="",
        description="Additional context like tech stack preferences, constraints, etc.",
    )


class ReviewCodeInput(BaseModel):
    """Input for review_code."""

    code: str = Field(..., description="Code to review")
    language: str = Field(default="", description="Programming language")
    focus: str = Field(
        default="",
        description="Specific areas to focus on (security, performance, etc.)",
    )


class DesignArchitectureInput(BaseModel):
    """Input for design_architecture."""

    requirements: str = Field(..., description="System requirements and constraints")
    scale: str = Field(default="", description="Expected scale (users, data, requests, etc.)")
    existing_system: str = Field(
        default="",
        description="Description of existing system if applicable",
    )


class ConsultAgentInput(BaseModel):
    """Input for consult_agent."""

    agent: str = Field(
        ...,
        description="Which agent to consult",
        json_schema_extra={"enum": [agent_id.value for agent_id in AgentId]},
    )
    prompt: str = Field(..., description="Your question or request")


# --- Configuration ---


class BackendConfig(BaseModel):
    """Process-wide backend selection, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    mode: BackendMode
    api_key: str | None = None
    base_url: str = "http://localhost:4000"

    @property
    def use_proxy(self) -> bool:
        return self.mode == BackendMode.PROXY
