"""CLI for Consigliere - specialist LLM agents over MCP."""

from __future__ import annotations

import asyncio
import json
import logging
import shutil
import sys
from pathlib import Path

import click
from dotenv import find_dotenv, load_dotenv

from consigliere import __version__
from consigliere.config import configure_logging, get_log_level, load_config
from consigliere.errors import ConfigurationError
from consigliere.schemas import BackendConfig

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _load_config_or_exit() -> BackendConfig:
    """Read configuration, exiting with status 1 if it is unusable."""
    try:
        return load_config()
    except ConfigurationError as e:
        logging.critical(str(e))
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="consigliere")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (defaults to CONSIGLIERE_LOG_LEVEL or INFO)",
)
def main(log_level: str | None) -> None:
    """Consigliere - planning, review and architecture agents for Claude.

    Exposes Gemini-backed specialist agents as MCP tools.
    """
    load_dotenv(find_dotenv(usecwd=True))
    configure_logging((log_level or get_log_level()).upper())


@main.command()
def serve() -> None:
    """Run the MCP server on stdio.

    \b
    Configure in .mcp.json:
        {
            "mcpServers": {
                "consigliere": {
                    "command": "consigliere",
                    "args": ["serve"]
                }
            }
        }
    """
    config = _load_config_or_exit()

    from mcp_consigliere.server import run_stdio
    run_stdio(config)


@main.command()
def agents() -> None:
    """List the available agents."""
    from consigliere.agents import list_agents

    for agent in list_agents():
        click.echo(f"  {agent.id.value:<10} {agent.display_name} ({agent.model_id})")


@main.command()
def tools() -> None:
    """Print the advertised MCP tool schemas as JSON."""
    from mcp_consigliere.server import list_tool_schemas

    click.echo(json.dumps(
        [
            {
                "name": tool.name,
                "description": tool.description,
                "inputSchema": tool.inputSchema,
            }
            for tool in list_tool_schemas()
        ],
        indent=2,
    ))


@main.command()
@click.argument("agent")
@click.argument("prompt")
def ask(agent: str, prompt: str) -> None:
    """Consult an agent once from the shell.

    \b
    Example:
        consigliere ask architect "Design a URL shortener"
    """
    from consigliere.backends import create_backend
    from consigliere.dispatcher import Dispatcher
    from consigliere.schemas import ToolInvocation, ToolName

    config = _load_config_or_exit()
    dispatcher = Dispatcher(create_backend(config))
    text = asyncio.run(dispatcher.call_tool(ToolInvocation(
        tool_name=ToolName.CONSULT_AGENT.value,
        arguments={"agent": agent, "prompt": prompt},
    )))
    click.echo(text)
    if text.startswith("Error:"):
        sys.exit(1)


@main.command()
@click.option(
    "--litellm",
    is_flag=True,
    help="Configure the server to use a LiteLLM proxy",
)
@click.option(
    "--base-url",
    default=None,
    help="LiteLLM proxy base URL (with --litellm)",
)
def init(litellm: bool, base_url: str | None) -> None:
    """Register Consigliere in the project's .mcp.json.

    \b
    Example:
        cd /path/to/myproject
        consigliere init
        consigliere init --litellm --base-url http://localhost:4000
    """
    mcp_json_path = Path.cwd() / ".mcp.json"
    executable = shutil.which("consigliere") or "consigliere"

    server_config: dict = {
        "command": executable,
        "args": ["serve"],
    }
    if litellm:
        env = {"USE_LITELLM": "true"}
        if base_url:
            env["LITELLM_BASE_URL"] = base_url
        server_config["env"] = env

    if mcp_json_path.exists():
        try:
            mcp_config = json.loads(mcp_json_path.read_text())
        except json.JSONDecodeError:
            mcp_config = {"mcpServers": {}}
    else:
        mcp_config = {"mcpServers": {}}

    if "mcpServers" not in mcp_config:
        mcp_config["mcpServers"] = {}

    if "consigliere" in mcp_config["mcpServers"]:
        click.echo(".mcp.json already has consigliere config, skipping...")
        return

    mcp_config["mcpServers"]["consigliere"] = server_config
    mcp_json_path.write_text(json.dumps(mcp_config, indent=2) + "\n")
    click.echo("Updated .mcp.json with consigliere MCP server")
    if not litellm:
        click.echo("Remember to set GEMINI_API_KEY in the server environment")


if __name__ == "__main__":
    main()
