"""MCP server exposing the module graph session as tools."""
