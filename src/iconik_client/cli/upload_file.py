"""
Upload a local file to the storage behind Iconik and ingest it as a new
asset in a collection.

Usage:
    iconik-upload --filename /media/lecture1.mp4 --title "Lecture 1" \\
        --collection "Teaching Videos" --storage-path /lectures/
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from iconik_client.cli.common import (
    add_common_arguments,
    apply_arguments,
    build_client,
    setup_logging,
)
from iconik_client.config import IconikConfig
from iconik_client.orchestration.asset_upload import upload_file

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    config = IconikConfig()
    parser = argparse.ArgumentParser(
        description="Upload a local file into an Iconik collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    add_common_arguments(parser, config)
    parser.add_argument(
        '--filename',
        type=Path,
        required=True,
        help='File that you want to upload (local full path)'
    )
    parser.add_argument(
        '--title',
        required=True,
        help='Title you want to see in Iconik'
    )
    parser.add_argument(
        '--collection',
        required=True,
        help='Collection you want to add the asset to'
    )
    parser.add_argument(
        '--storage-path',
        default='/',
        help='Storage path you want to save to (default: /)'
    )
    parser.add_argument(
        '--skip-keyframes',
        action='store_true',
        help='Do not request keyframe generation'
    )
    args = parser.parse_args(argv)

    setup_logging(args.debug, config.log_level)

    if not args.filename.is_file():
        parser.error(f"not a file: {args.filename}")

    try:
        config = apply_arguments(config, args)
        with build_client(config) as client:
            collection_ids = client.get_collection_ids(args.collection)
            if not collection_ids:
                raise ValueError(f"No collection titled {args.collection!r}")
            for i, entry in enumerate(collection_ids):
                if i == 0:
                    logger.info(f"Using collectionID entry: {entry.collection_id}")
                else:
                    logger.info(f"(unused) collectionID entry: {entry.collection_id}")

            nau = upload_file(
                client,
                args.filename,
                args.title,
                collection_ids[0].collection_id,
                storage_path=args.storage_path,
                keyframes=not args.skip_keyframes,
            )

        logger.info(f"Uploaded asset {nau.asset_id}")
        print("success!")
        return 0

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130

    except Exception as e:
        logger.exception("Upload failed")
        print(f"\n✗ Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
