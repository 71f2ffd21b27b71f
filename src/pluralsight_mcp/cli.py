"""
Pluralsight MCP CLI

Commands:
    pluralsight-mcp server      Start the MCP server (stdio mode)
    pluralsight-mcp init        Create ~/.pluralsight-mcp/ and generate config
    pluralsight-mcp mcp-config  Print MCP client JSON config
    pluralsight-mcp tools       List the tool catalog
    pluralsight-mcp call        Invoke one tool and print its response text
"""

import asyncio
import json
import sys

import click

from pluralsight_mcp import __version__
from pluralsight_mcp.config import ClientConfig, Config


@click.group()
@click.version_option(version=__version__, prog_name="pluralsight-mcp")
def main():
    """Pluralsight course catalog as MCP tools."""
    pass


@main.command()
def init():
    """Create the data directory and a commented config.env."""
    Config.ensure_dirs()

    config_env = Config.DATA_DIR / "config.env"
    if not config_env.exists():
        config_env.write_text(
            "# Pluralsight MCP Configuration\n"
            "# Uncomment and edit as needed.\n"
            "\n"
            "# PLURALSIGHT_API_KEY=\n"
            "# PLURALSIGHT_BASE_URL=https://app.pluralsight.com/api\n"
            "# PLURALSIGHT_MCP_LOG_LEVEL=INFO\n"
        )

    click.echo(f"Pluralsight MCP initialized at {Config.DATA_DIR}")
    click.echo(f"  Config: {config_env}")
    click.echo(f"  Logs:   {Config.LOG_DIR}")
    click.echo()
    click.echo("Without PLURALSIGHT_API_KEY every lookup is answered from fixture data.")
    click.echo("Run `pluralsight-mcp mcp-config` to get the client JSON snippet.")


@main.command()
def server():
    """Start the MCP server (stdio mode)."""
    from pluralsight_mcp.catalog.client import CatalogClient
    from pluralsight_mcp.server.server import MCPServer
    from pluralsight_mcp.tools.catalog_tools import TOOLS, CatalogTools

    async def _run():
        client = CatalogClient(ClientConfig.from_env())
        srv = MCPServer()
        srv.register_tools(TOOLS, CatalogTools(client).handle_tool)
        srv.on_shutdown(client.aclose)
        await srv.run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        pass


@main.command("mcp-config")
def mcp_config():
    """Print MCP config JSON for an MCP client."""
    command, args = _find_command()
    config = {
        "mcpServers": {
            "pluralsight": {
                "command": command,
                "args": args,
                "env": {"PLURALSIGHT_API_KEY": "<your api key>"},
            }
        }
    }

    click.echo("Add this to your MCP client settings:\n")
    click.echo(json.dumps(config, indent=2))


@main.command()
def tools():
    """List the tools this server exposes."""
    from pluralsight_mcp.tools.catalog_tools import TOOLS

    for tool in TOOLS:
        required = tool["inputSchema"].get("required", [])
        suffix = f" (requires: {', '.join(required)})" if required else ""
        click.echo(f"{tool['name']}: {tool['description']}{suffix}")


@main.command()
@click.argument("name")
@click.option(
    "--arg", "-a", "pairs", multiple=True, metavar="KEY=VALUE",
    help="Tool argument; repeat for several.",
)
def call(name, pairs):
    """Invoke tool NAME once and print the response text."""
    from pluralsight_mcp.catalog.client import CatalogClient
    from pluralsight_mcp.tools.catalog_tools import CatalogTools

    args = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--arg")
        args[key] = value

    async def _call():
        async with CatalogClient(ClientConfig.from_env()) as client:
            return await CatalogTools(client).handle_tool(name, args)

    result = asyncio.run(_call())
    for item in result["content"]:
        click.echo(item["text"])
    if result.get("isError"):
        sys.exit(1)


def _find_command():
    """Find the pluralsight-mcp command path and its server arguments."""
    import shutil
    path = shutil.which("pluralsight-mcp")
    if path:
        return path, ["server"]
    # Fallback: python -m pluralsight_mcp
    return sys.executable, ["-m", "pluralsight_mcp", "server"]


if __name__ == "__main__":
    main()
