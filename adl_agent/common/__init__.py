"""
ADL Agent Common Module

Shared infrastructure: configuration, schemas and the ADL-MCP client.
"""

from .config import ADLConfig, load_config, configure_logging
from .adl_client import ADLClient, ADLClientError, CreateEntryResult

__all__ = [
    "ADLConfig",
    "load_config",
    "configure_logging",
    "ADLClient",
    "ADLClientError",
    "CreateEntryResult",
]
