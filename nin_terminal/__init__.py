"""NIN Terminal: financial analysis and brokerage tools served over MCP."""

__version__ = "0.1.0"
