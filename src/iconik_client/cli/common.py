"""
Shared plumbing for the command-line tools: logging setup, credential
flags and client construction.
"""

import argparse
import logging
from typing import Optional

import httpx

from iconik_client.clients.iconik_client import IconikClient
from iconik_client.config import IconikConfig


def setup_logging(verbose: bool = False, level: Optional[str] = None):
    """Configure logging"""
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, (level or "INFO").upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def add_common_arguments(parser: argparse.ArgumentParser, config: IconikConfig) -> None:
    """Credential and debug flags; defaults come from the environment."""
    parser.add_argument(
        '--app-id',
        default=config.app_id,
        help='Iconik application id (default: from ICONIK_APP_ID env var)'
    )
    parser.add_argument(
        '--token',
        default=config.auth_token,
        help='Iconik auth token (default: from ICONIK_AUTH_TOKEN env var)'
    )
    parser.add_argument(
        '--host',
        default=config.host,
        help='Iconik API base URL (default: from ICONIK_HOST env var)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        default=config.debug,
        help='Log API requests and responses'
    )


def apply_arguments(config: IconikConfig, args: argparse.Namespace) -> IconikConfig:
    """Return ``config`` with command-line values applied and validated."""
    updated = config.model_copy(
        update={
            "app_id": args.app_id,
            "auth_token": args.token,
            "host": args.host,
            "debug": args.debug,
        }
    )
    updated.validate_required_fields()
    return updated


def build_client(
    config: IconikConfig,
    transport: Optional[httpx.BaseTransport] = None,
) -> IconikClient:
    return IconikClient.from_config(config, transport=transport)
