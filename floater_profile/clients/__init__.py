"""Clients for fetching floater profiles."""

from floater_profile.clients.base_client import BaseFloaterClient, DateOption, FetchError
from floater_profile.clients.static_client import StaticFloaterClient

__all__ = [
    "BaseFloaterClient",
    "DateOption",
    "FetchError",
    "StaticFloaterClient",
]
