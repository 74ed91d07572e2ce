"""
Tool namespace for the SAP Cloud ALM MCP server.

Every public coroutine in a submodule whose first parameter is ``clients`` is
registered automatically by ``cloud_alm_mcp.core.registry``.
"""
