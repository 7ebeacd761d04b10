"""MCP transport for Consigliere."""
