"""
Search Iconik assets by title and/or tag.

Prints the file names of every hit, then a signed download URL for every
proxy of every hit.

Usage:
    iconik-search --title "Lecture 1" --tag TeachingVideos
    iconik-search --tag GPTeaching --exact --title "Intro"
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

import httpx
from pydantic import ValidationError

from iconik_client.cli.common import (
    add_common_arguments,
    apply_arguments,
    build_client,
    setup_logging,
)
from iconik_client.clients.iconik_client import IconikClient
from iconik_client.config import IconikConfig
from iconik_client.models.errors import IconikError
from iconik_client.models.search_models import SearchResponse

logger = logging.getLogger(__name__)


def print_results(client: IconikClient, response: SearchResponse) -> int:
    """
    Print file names and proxy URLs for a search response.

    Returns:
        Number of proxy URLs that could not be generated
    """
    ids: List[Tuple[str, str]] = []
    for obj in response.objects:
        for proxy in obj.proxies:
            ids.append((obj.id, proxy.id))
        for f in obj.files:
            print(f.name)

    failures = 0
    for asset_id, proxy_id in ids:
        try:
            url = client.generate_signed_proxy_url(asset_id, proxy_id)
        except (IconikError, httpx.HTTPError, ValidationError) as e:
            print(f"Error: {e}")
            failures += 1
            continue
        print(url)
    return failures


def main(argv: Optional[List[str]] = None) -> int:
    config = IconikConfig()
    parser = argparse.ArgumentParser(
        description="Search Iconik assets and print signed proxy URLs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    add_common_arguments(parser, config)
    parser.add_argument(
        '--title',
        default='',
        help='Title you are searching for'
    )
    parser.add_argument(
        '--tag',
        default='',
        help='Tag you are searching for'
    )
    parser.add_argument(
        '--exact',
        action='store_true',
        help='Match the title exactly instead of as free text'
    )
    args = parser.parse_args(argv)

    setup_logging(args.debug, config.log_level)

    if not args.title and not args.tag:
        parser.error("at least one of --title or --tag is required")

    try:
        config = apply_arguments(config, args)
        with build_client(config) as client:
            response = client.search_with_title_and_tag(args.title, args.tag, args.exact)
            logger.info(f"Search returned {len(response.objects)} objects")
            print_results(client, response)
        return 0

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130

    except Exception as e:
        logger.exception("Search failed")
        print(f"\n✗ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
