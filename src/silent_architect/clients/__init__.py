"""Network clients for the Vault and Airtable."""

from .airtable_client import AirtableClient
from .client import Client
from .exceptions import (
    APIError,
    ClientError,
    ConfigurationError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .vault_client import VaultClient

__all__ = [
    "Client",
    "AirtableClient",
    "VaultClient",
    "ClientError",
    "ConfigurationError",
    "ConnectionError",
    "APIError",
    "RateLimitError",
    "NotFoundError",
    "ValidationError",
]
