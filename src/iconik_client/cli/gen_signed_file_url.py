"""
Generate a signed download URL for an asset's file and fetch it.

Prints the URL, then performs a GET on it and prints the status code and
response headers.

Usage:
    iconik-signed-url --iconik-id 6b1e7e2a-0000-0000-0000-000000000000
"""

import argparse
import logging
import sys
from typing import List, Optional

import httpx

from iconik_client.cli.common import (
    add_common_arguments,
    apply_arguments,
    build_client,
    setup_logging,
)
from iconik_client.config import IconikConfig

logger = logging.getLogger(__name__)


def fetch_url(url: str, http: httpx.Client) -> httpx.Response:
    """GET ``url`` and print its status code and headers."""
    response = http.get(url)
    print(f"Status Code: {response.status_code}")
    print("Response Headers:")
    for key, value in response.headers.items():
        print(f"{key}: {value}")
    return response


def main(argv: Optional[List[str]] = None) -> int:
    config = IconikConfig()
    parser = argparse.ArgumentParser(
        description="Generate a signed file URL for an Iconik asset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    add_common_arguments(parser, config)
    parser.add_argument(
        '--iconik-id',
        required=True,
        help='Asset ID to get the signed URL for'
    )
    args = parser.parse_args(argv)

    setup_logging(args.debug, config.log_level)

    try:
        config = apply_arguments(config, args)
        with build_client(config) as client:
            url = client.generate_signed_file_url(args.iconik_id)
        print(f"Signed URL: {url}")

        with httpx.Client(timeout=config.request_timeout, follow_redirects=True) as http:
            fetch_url(url, http)
        return 0

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130

    except Exception as e:
        logger.exception("Signed URL generation failed")
        print(f"\n✗ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
