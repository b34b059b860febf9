"""
Velixar

Python client for the Velixar memory service: persistent memory for AI
applications.
"""

__version__ = "0.1.3"

from .client import VelixarClient, create_velixar_client
from .config import DEFAULT_BASE_URL, VelixarConfig, VelixarSettings
from .exceptions import (
    VelixarAPIError,
    VelixarConfigError,
    VelixarError,
    VelixarNotFoundError,
)
from .models import (
    DeleteMemoryResponse,
    GetMemoryResponse,
    Memory,
    SearchResult,
    StoreMemoryResponse,
)

__all__ = [
    # Client classes
    "VelixarClient",
    "VelixarConfig",
    "VelixarSettings",
    "create_velixar_client",
    "DEFAULT_BASE_URL",
    # Exceptions
    "VelixarError",
    "VelixarConfigError",
    "VelixarAPIError",
    "VelixarNotFoundError",
    # Models
    "Memory",
    "SearchResult",
    "StoreMemoryResponse",
    "GetMemoryResponse",
    "DeleteMemoryResponse",
]
