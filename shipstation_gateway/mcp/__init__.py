"""
MCP (Model Context Protocol) front end for the ShipStation gateway.

JSON-RPC Methods:
- initialize - protocol handshake
- tools/list - the operation catalog (name, description, inputSchema)
- tools/call - run one operation through the dispatcher
- ping
"""
