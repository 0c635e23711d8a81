"""
Iconik Client

Python client library and command-line tools for the Iconik
media asset management API.
"""

from .clients.iconik_client import Credentials, IconikClient
from .models.errors import IconikError

__version__ = "0.1.0"

__all__ = [
    "Credentials",
    "IconikClient",
    "IconikError",
]
