from core.logging_config import setup_logging
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import TextResource
from mcp.types import ToolAnnotations
from dotenv import load_dotenv
from pathlib import Path
from importlib import import_module
from typing import List, Optional, Tuple
import logging
import pkgutil
import sys

from commerce.client import CommerceClient
from commerce.errors import ConfigurationError
from core.client import set_client
from core.config import get_setting
from core.resources import get_resource_map, load_resources

logger = logging.getLogger("server")

ROOT_DIR = Path(__file__).resolve().parent
RESOURCES_DIR = ROOT_DIR / "resources"
TOOLS_PACKAGE = "tools"

###################################################### MCP Resources ######################################################


def register_resources(mcp: FastMCP, resource_files: List[Tuple[Path, str]]) -> int:
    count = 0
    for file_path, content in resource_files:
        try:
            mcp.add_resource(
                TextResource(
                    uri=f"resource://{file_path.stem.replace(' ', '_')}",
                    name=file_path.stem,
                    text=content,
                    description=f"Contents of {file_path.name}",
                    mime_type="text/markdown",
                )
            )
            count += 1
        except Exception:
            logger.exception(f"Failed to add resource {file_path}")
    logger.info(f"Total resources loaded into MCP: {count}")
    return count


###################################################### MCP Tools ######################################################


def register_tools(mcp: FastMCP, package: str = TOOLS_PACKAGE) -> List[str]:
    """Import every public module of `package` and register what its get_tools() returns."""
    tools_path = ROOT_DIR / package
    registered: List[str] = []
    for _, name, _ in pkgutil.iter_modules([str(tools_path)]):
        if name.startswith("_"):
            continue
        module_name = f"{package}.{name}"
        try:
            mod = import_module(module_name)
        except Exception:
            logger.exception(f"Failed to load tools from module {module_name}")
            continue
        if not hasattr(mod, "get_tools"):
            continue
        logger.info(f"Imported tools module: {module_name}")

        for tool_name, meta in mod.get_tools().items():
            if isinstance(meta, dict):
                func = meta.get("func")
                title = meta.get("title")
                description = meta.get("description")
                read_only = bool(meta.get("read_only", False))
            else:
                func, title, description, read_only = meta, None, None, False

            if not func:
                logger.warning(f"Tool {tool_name} in {module_name} did not provide a callable; skipping")
                continue

            annotations = ToolAnnotations(
                title=title,
                readOnlyHint=read_only,
                destructiveHint=not read_only,
                idempotentHint=read_only,
                openWorldHint=True,
            )
            try:
                mcp.add_tool(func, name=tool_name, title=title, description=description, annotations=annotations)
                registered.append(tool_name)
                logger.info(f"Added tool via add_tool: {tool_name} (title={title}) from {module_name}")
            except Exception:
                logger.exception(f"Failed to register tool {tool_name} from {module_name}")

    logger.info(f"Total tools registered: {len(registered)} , tool names: {registered}")
    return registered


###################################################### Startup ######################################################


def create_server(client: Optional[CommerceClient] = None) -> FastMCP:
    """Build the MCP server. Without `client`, credentials are resolved from the environment."""
    if client is None:
        client = CommerceClient.from_env()
    set_client(client)

    logger.info("Loading MCP resources...")
    resource_files = load_resources(RESOURCES_DIR)
    instructions = get_resource_map().get("assistant_instructions")

    mcp = FastMCP(get_setting("server_name", "commerce"), instructions=instructions)
    logger.info("MCP server instance created with instructions: %s", bool(instructions))

    register_resources(mcp, resource_files)
    logger.info("Loading MCP tools...")
    register_tools(mcp)
    return mcp


def main() -> None:
    load_dotenv()
    setup_logging()
    logger.info("MCP server bootstrap starting.")
    try:
        mcp = create_server()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("Starting MCP server...")
    try:
        mcp.run(transport="stdio")
        logger.info("MCP server shut down.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/server_*.log for details.", file=sys.stderr)
        sys.exit(-1)


if __name__ == "__main__":
    main()
