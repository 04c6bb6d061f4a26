"""
MCP (JSON-RPC) tool server.

Responsibilities:
- Parse JSON-RPC envelopes posted to /mcp.
- Expose recipe search, recipe lookup and diet plans as tools and resources.
- Report not-found and store failures with distinct error codes.
"""
