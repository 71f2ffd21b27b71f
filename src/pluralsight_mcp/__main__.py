from pluralsight_mcp.cli import main

main()
