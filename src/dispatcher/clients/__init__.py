"""Clients package - HTTP clients for the model providers."""

from dispatcher.clients.base import ProviderCallError, ProviderClient
from dispatcher.clients.holder import (
    close_clients,
    get_primary_client,
    get_secondary_client,
    reset_clients,
)
from dispatcher.clients.primary import PrimaryClient
from dispatcher.clients.secondary import SecondaryClient

__all__ = [
    "ProviderCallError",
    "ProviderClient",
    "PrimaryClient",
    "SecondaryClient",
    "get_primary_client",
    "get_secondary_client",
    "reset_clients",
    "close_clients",
]
