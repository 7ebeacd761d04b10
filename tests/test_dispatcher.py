"""Tests for tool dispatch, prompt assembly and error flattening."""

import asyncio
import json

import pytest
from unittest.mock import MagicMock, AsyncMock

from consigliere.agents import get_agent
from consigliere.backends import GeminiBackend
from consigliere.dispatcher import (
    Dispatcher,
    build_architecture_prompt,
    build_plan_prompt,
    build_review_prompt,
)
from consigliere.errors import InvalidArguments, UnknownTool
from consigliere.schemas import ToolInvocation


def call(dispatcher, tool_name, **arguments):
    return asyncio.run(dispatcher.call_tool(ToolInvocation(tool_name=tool_name, arguments=arguments)))


class TestPromptBuilders:
    """Test prompt assembly helpers."""

    def test_plan_prompt(self):
        assert build_plan_prompt("Build a todo app", "Use Flask") == (
            "Build a todo app\n\nAdditional Context: Use Flask"
        )

    def test_plan_prompt_without_context(self):
        assert build_plan_prompt("Build a todo app") == "Build a todo app\n\nAdditional Context: "

    def test_review_prompt_without_focus(self):
        prompt = build_review_prompt("x=1", language="python")
        assert "```python\nx=1\n```" in prompt
        assert "with focus on" not in prompt
        assert prompt.startswith("Please review this python code:")

    def test_review_prompt_with_focus(self):
        prompt = build_review_prompt("x=1", language="python", focus="security")
        assert "with focus on: security" in prompt
        assert prompt == "Please review this python code with focus on: security:\n\n```python\nx=1\n```"

    def test_architecture_prompt_requirements_only(self):
        prompt = build_architecture_prompt("Chat service")
        assert prompt == "System Requirements:\nChat service"
        assert "Expected Scale" not in prompt
        assert "Existing System" not in prompt

    def test_architecture_prompt_all_sections_in_order(self):
        prompt = build_architecture_prompt("Chat service", "1M users", "Monolith on Rails")
        assert prompt.count("Expected Scale:") == 1
        assert prompt.count("Existing System:") == 1
        assert prompt.index("Expected Scale:") < prompt.index("Existing System:")
        assert prompt == (
            "System Requirements:\nChat service"
            "\n\nExpected Scale:\n1M users"
            "\n\nExisting System:\nMonolith on Rails"
        )

    def test_architecture_prompt_empty_scale_skipped(self):
        prompt = build_architecture_prompt("Chat service", "", "Monolith")
        assert "Expected Scale" not in prompt
        assert "Existing System:\nMonolith" in prompt


class TestDispatcherTools:
    """Test each tool with a recording backend."""

    @pytest.mark.parametrize("tool_name,arguments,header,agent_id", [
        ("plan_project", {"requirements": "Build X"}, "## Project Planning Analysis\n\n", "planner"),
        ("review_code", {"code": "x=1"}, "## Code Review\n\n", "reviewer"),
        ("design_architecture", {"requirements": "Build X"}, "## Architecture Design\n\n", "architect"),
    ])
    def test_required_only_has_section_header(self, dispatcher, backend, tool_name, arguments, header, agent_id):
        text = call(dispatcher, tool_name, **arguments)

        assert text == header + "Model says hi"
        assert len(backend.calls) == 1
        assert backend.calls[0][0] is get_agent(agent_id)

    def test_review_code_prompt_reaches_backend(self, dispatcher, backend):
        call(dispatcher, "review_code", code="x=1", language="python", focus="security")
        _, prompt = backend.calls[0]
        assert "```python\nx=1\n```" in prompt
        assert "with focus on: security" in prompt

    def test_design_architecture_prompt_reaches_backend(self, dispatcher, backend):
        call(dispatcher, "design_architecture", requirements="R", scale="S", existing_system="E")
        _, prompt = backend.calls[0]
        assert prompt == "System Requirements:\nR\n\nExpected Scale:\nS\n\nExisting System:\nE"

    def test_consult_agent_uses_selected_agent(self, dispatcher, backend):
        text = call(dispatcher, "consult_agent", agent="reviewer", prompt="Is this safe?")

        agent, prompt = backend.calls[0]
        assert agent.system_prompt == get_agent("reviewer").system_prompt
        assert agent.model_id == get_agent("reviewer").model_id
        assert prompt == "Is this safe?"
        assert text == "## Code Review Agent Response\n\nModel says hi"

    def test_consult_agent_unknown_agent(self, dispatcher, backend):
        text = call(dispatcher, "consult_agent", agent="bogus", prompt="Hi")

        assert text == "Error: Unknown agent type: bogus"
        assert backend.calls == []


class TestDispatcherErrors:
    """Test the error boundary."""

    def test_missing_requirements_no_backend_call(self, dispatcher, backend):
        text = call(dispatcher, "plan_project")

        assert text.startswith("Error:")
        assert "requirements" in text
        assert backend.calls == []

    def test_empty_required_argument(self, dispatcher, backend):
        text = call(dispatcher, "review_code", code="")
        assert text == "Error: Missing required argument: code"
        assert backend.calls == []

    def test_consult_agent_missing_prompt(self, dispatcher, backend):
        text = call(dispatcher, "consult_agent", agent="planner")
        assert text == "Error: Missing required argument: prompt"
        assert backend.calls == []

    def test_unknown_tool(self, dispatcher):
        assert call(dispatcher, "deploy_project") == "Error: Unknown tool: deploy_project"

    def test_dispatch_raises_typed_errors(self, dispatcher):
        with pytest.raises(UnknownTool):
            asyncio.run(dispatcher.dispatch(ToolInvocation(tool_name="nope")))
        with pytest.raises(InvalidArguments):
            asyncio.run(dispatcher.dispatch(ToolInvocation(tool_name="design_architecture")))

    @pytest.mark.parametrize("tool_name,arguments", [
        ("plan_project", {"requirements": "R"}),
        ("review_code", {"code": "x=1"}),
        ("design_architecture", {"requirements": "R"}),
        ("consult_agent", {"agent": "architect", "prompt": "P"}),
    ])
    def test_proxy_failure_becomes_error_text(self, make_proxy_backend, tool_name, arguments):
        dispatcher = Dispatcher(make_proxy_backend(status_code=500, text="quota exceeded"))

        text = call(dispatcher, tool_name, **arguments)

        assert text.startswith("Error:")
        assert "500" in text
        assert "quota exceeded" in text


class TestBackendSwitching:
    """Same call, different backend: only the backend changes."""

    def test_identical_output_for_either_backend(self, make_proxy_backend, completion_body, captured_requests):
        client = MagicMock()
        client.aio.models.generate_content = AsyncMock(return_value=MagicMock(text="Proxy answer"))
        direct = Dispatcher(GeminiBackend(api_key="g-key", client=client))
        proxy = Dispatcher(make_proxy_backend(body=completion_body))

        direct_text = call(direct, "review_code", code="x=1", language="python")
        proxy_text = call(proxy, "review_code", code="x=1", language="python")

        assert direct_text == proxy_text == "## Code Review\n\nProxy answer"
        assert client.aio.models.generate_content.await_count == 1
        assert len(captured_requests) == 1
        direct_prompt = client.aio.models.generate_content.call_args.kwargs["contents"]
        proxy_prompt = json.loads(captured_requests[0].content)["messages"][1]["content"]
        assert direct_prompt == proxy_prompt
