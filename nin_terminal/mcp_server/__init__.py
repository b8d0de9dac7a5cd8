"""NIN Terminal MCP server.

Tool registration lives in ``tooling.registry``; dispatch in ``gateway``.
"""
