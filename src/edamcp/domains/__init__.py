"""Domain packages for the OnlineEDA MCP server.

Bounded contexts:
- shared: result contract and error taxonomy
- session: the single authenticated remote-UI session
- dispatch: tool registry and uniform invocation
- platform: navigation, project management and file upload
- verification: verification run orchestration and result extraction
- intent: natural-language intent resolution (read-only, no session access)
"""
