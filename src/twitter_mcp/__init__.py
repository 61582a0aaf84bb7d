"""MCP server exposing Twitter reading, posting and engagement tools."""
