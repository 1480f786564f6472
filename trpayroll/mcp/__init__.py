"""MCP server exposing the payroll tools to AI agents."""
