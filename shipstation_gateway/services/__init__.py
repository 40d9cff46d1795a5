"""Service layer exports."""

from .shipstation import ShipStationClient

__all__ = ["ShipStationClient"]
