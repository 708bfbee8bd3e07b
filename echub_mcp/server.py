"""FastMCP server initialization for EC HUB MCP."""

from mcp.server.fastmcp import FastMCP

# Initialize the MCP server
mcp = FastMCP("echub_mcp")


def run() -> None:
    """Run the MCP server."""
    # Registers the tools on ``mcp``
    import echub_mcp.tools  # noqa: F401

    mcp.run()


if __name__ == "__main__":
    run()
