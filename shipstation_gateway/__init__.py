"""
ShipStation Gateway

Exposes the ShipStation API v2 through two front ends that share one
operation dispatcher:
- mcp: line-delimited JSON-RPC tool server on stdin/stdout
- routes: FastAPI REST routes under /api
"""

__version__ = "1.0.0"
