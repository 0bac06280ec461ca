"""External service clients.

All clients inherit from BaseHTTPClient and provide typed interfaces.
"""

from notify_console.infra.external.base_client import BaseHTTPClient
from notify_console.infra.external.relay_client import RelayTemplateStore

__all__ = [
    "BaseHTTPClient",
    "RelayTemplateStore",
]
