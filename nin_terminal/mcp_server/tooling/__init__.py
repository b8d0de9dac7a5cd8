"""MCP tooling modules, split by domain.

- shared: envelope builders and the handler error boundary
- formatting: number and table helpers for reports
- *_handlers: tool implementations (analysis, market, portfolio, groww, binance)
- *_registration: typed FastMCP wrappers that delegate to the gateway
- registry: tool registration orchestration
"""
