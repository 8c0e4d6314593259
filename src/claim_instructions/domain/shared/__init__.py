"""Shared domain protocols."""

from .bridge_hub_protocol import BridgeHubProtocol

__all__ = ["BridgeHubProtocol"]
