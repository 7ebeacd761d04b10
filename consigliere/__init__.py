"""Consigliere: specialist LLM agents exposed as MCP tools.

Planner, reviewer and architect personas backed by Gemini, either
directly or through a LiteLLM proxy.
"""

__version__ = "1.0.0"
