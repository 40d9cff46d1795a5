"""
ShipStation Gateway Routes

Route Modules:
- health: liveness check and the route documentation map
- shipments, labels, rates, carriers, warehouses, inventory, batches,
  manifests, packages, pickups, tags, webhooks, account, downloads

API Structure:
- /health, / - service endpoints
- /api/* - one route per dispatcher operation
"""
