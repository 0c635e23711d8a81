"""
Iconik API clients.
"""

from .iconik_client import Credentials, IconikClient

__all__ = ["Credentials", "IconikClient"]
