#!/usr/bin/env python3
"""
Content Migration Script
Copies every asset of a merchant store from one storage backend to another.

Usage:
    python -m storefront.scripts.migrate_content --store DEFAULT --source local --target aws

Backend settings (bucket names, Redis host, local root) come from the
usual CMS_* environment variables.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..cms import ContentStorageError, create_content_manager
from ..cms.base import ContentAssetsManager
from ..config.settings import CMS_METHODS, CMSSettings

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_manager(method: str, base: CMSSettings) -> ContentAssetsManager:
    return create_content_manager(base.model_copy(update={"method": method}))


def migrate(
    source: ContentAssetsManager,
    target: ContentAssetsManager,
    store_code: str,
    dry_run: bool = False,
) -> int:
    """
    Copy a store's assets between managers.

    Returns:
        Number of files copied (or that would be copied on a dry run)
    """
    if dry_run:
        keys = [
            key for key in source.iter_store_keys(store_code) if not key.endswith("/")
        ]
        for key in keys[:10]:
            logger.info(f"  would copy {key}")
        return len(keys)

    return source.copy_store_to(target, store_code)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run content migration."""
    parser = argparse.ArgumentParser(description="Copy merchant store assets between backends")
    parser.add_argument("--store", required=True, help="Merchant store code")
    parser.add_argument("--source", required=True, choices=CMS_METHODS, help="Source backend")
    parser.add_argument("--target", required=True, choices=CMS_METHODS, help="Target backend")
    parser.add_argument(
        "--dry-run", action="store_true", help="List what would be copied without writing"
    )

    args = parser.parse_args(argv)

    if args.source == args.target:
        logger.error("Source and target backends must differ")
        return 1

    settings = CMSSettings()
    logger.info(f"Migrating store {args.store}: {args.source} -> {args.target}")

    try:
        source = build_manager(args.source, settings)
        target = build_manager(args.target, settings)
        count = migrate(source, target, args.store, dry_run=args.dry_run)
    except ContentStorageError as e:
        logger.error(f"Migration failed: {e}")
        return 1

    if args.dry_run:
        logger.info(f"DRY RUN: {count} files would be copied")
    else:
        logger.info(f"Copied {count} files")
    return 0


if __name__ == "__main__":
    sys.exit(main())
