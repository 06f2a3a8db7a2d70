# tools package for MCP server tools
# Modules in this package expose `get_tools() -> dict[str, dict]` mapping a tool name to
# {"func": async callable, "title": str, "description": str, "read_only": bool}.
# The server imports every module here whose name does not start with "_" and registers the tools.
__all__ = []
