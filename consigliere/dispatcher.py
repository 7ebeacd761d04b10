"""Tool request dispatch: argument validation, prompt assembly, formatting."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from consigliere.agents import get_agent
from consigliere.backends import Backend
from consigliere.errors import ConsigliereError, InvalidArguments, UnknownTool
from consigliere.schemas import AgentDefinition, AgentId, ToolInvocation, ToolName

logger = logging.getLogger(__name__)

PLANNING_TITLE = "Project Planning Analysis"
REVIEW_TITLE = "Code Review"
ARCHITECTURE_TITLE = "Architecture Design"


def _require(arguments: Mapping[str, str | None], name: str) -> str:
    """Return a required argument, raising if missing or empty."""
    value = arguments.get(name)
    if not value:
        raise InvalidArguments(f"Missing required argument: {name}")
    return value


def format_section(title: str, body: str) -> str:
    return f"## {title}\n\n{body}"


# --- Prompt builders ---


def build_plan_prompt(requirements: str, context: str = "") -> str:
    return f"{requirements}\n\nAdditional Context: {context}"


def build_review_prompt(code: str, language: str = "", focus: str = "") -> str:
    focus_clause = f" with focus on: {focus}" if focus else ""
    return f"Please review this {language} code{focus_clause}:\n\n```{language}\n{code}\n```"


def build_architecture_prompt(requirements: str, scale: str = "", existing_system: str = "") -> str:
    """Requirements followed by optional scale and existing-system paragraphs."""
    prompt = f"System Requirements:\n{requirements}"
    if scale:
        prompt += f"\n\nExpected Scale:\n{scale}"
    if existing_system:
        prompt += f"\n\nExisting System:\n{existing_system}"
    return prompt


class Dispatcher:
    """Routes tool calls to agents through a single backend.

    The tool methods raise ConsigliereError subclasses. ``call_tool`` is the
    transport boundary: it turns those errors into ``"Error: ..."`` text so
    the protocol call itself always succeeds.
    """

    def __init__(self, backend: Backend):
        self.backend = backend

    async def _ask(self, agent: AgentDefinition, prompt: str) -> str:
        logger.info(f"Consulting {agent.id.value} via {self.backend.name}")
        return await self.backend.invoke(agent, prompt)

    async def plan_project(self, requirements: str, context: str = "") -> str:
        prompt = build_plan_prompt(requirements, context or "")
        response = await self._ask(get_agent(AgentId.PLANNER), prompt)
        return format_section(PLANNING_TITLE, response)

    async def review_code(self, code: str, language: str = "", focus: str = "") -> str:
        prompt = build_review_prompt(code, language or "", focus or "")
        response = await self._ask(get_agent(AgentId.REVIEWER), prompt)
        return format_section(REVIEW_TITLE, response)

    async def design_architecture(
        self,
        requirements: str,
        scale: str = "",
        existing_system: str = "",
    ) -> str:
        prompt = build_architecture_prompt(requirements, scale or "", existing_system or "")
        response = await self._ask(get_agent(AgentId.ARCHITECT), prompt)
        return format_section(ARCHITECTURE_TITLE, response)

    async def consult_agent(self, agent: str, prompt: str) -> str:
        definition = get_agent(agent)
        response = await self._ask(definition, prompt)
        return format_section(f"{definition.display_name} Response", response)

    async def dispatch(self, invocation: ToolInvocation) -> str:
        """Validate arguments and run the named tool.

        Raises:
            UnknownTool: tool name is not one of ToolName
            InvalidArguments: a required argument is missing or empty
            UnknownAgent: consult_agent named an unknown agent
            BackendError: the model call failed
        """
        try:
            tool = ToolName(invocation.tool_name)
        except ValueError:
            raise UnknownTool(f"Unknown tool: {invocation.tool_name}") from None

        args = invocation.arguments

        if tool == ToolName.PLAN_PROJECT:
            return await self.plan_project(
                _require(args, "requirements"),
                args.get("context", ""),
            )
        elif tool == ToolName.REVIEW_CODE:
            return await self.review_code(
                _require(args, "code"),
                args.get("language", ""),
                args.get("focus", ""),
            )
        elif tool == ToolName.DESIGN_ARCHITECTURE:
            return await self.design_architecture(
                _require(args, "requirements"),
                args.get("scale", ""),
                args.get("existing_system", ""),
            )
        else:
            agent = _require(args, "agent")
            prompt = _require(args, "prompt")
            return await self.consult_agent(agent, prompt)

    async def call_tool(self, invocation: ToolInvocation) -> str:
        """Run a tool call, returning error text instead of raising."""
        logger.info(f"Received tool call: {invocation.tool_name}")
        try:
            return await self.dispatch(invocation)
        except ConsigliereError as e:
            logger.warning(f"Tool call {invocation.tool_name} failed: {e}")
            return f"Error: {e}"
