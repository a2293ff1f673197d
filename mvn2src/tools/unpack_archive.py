#!/usr/bin/env python3
"""
Command-line tool for unpacking a single source archive.
"""

import argparse
import sys
from pathlib import Path

from mvn2src.utils.archive_extractor import extract_archive, is_supported_archive
from mvn2src.utils.logger import setup_logger


def main(argv=None):
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(description='Unpack a jar, zip or tar.gz archive.')
    parser.add_argument('archive', type=str, help='The archive to unpack.')
    parser.add_argument('output_dir', type=str, help='Directory to unpack into.')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging.')

    args = parser.parse_args(argv)

    logger = setup_logger(verbose=args.verbose)

    archive_path = Path(args.archive)
    if not archive_path.is_file():
        logger.error(f"Archive not found: {archive_path}")
        return 1

    if not is_supported_archive(archive_path):
        logger.error(f"Unsupported file format: {archive_path}")
        return 1

    if not extract_archive(archive_path, Path(args.output_dir)):
        return 1

    logger.info(f"Extracted {archive_path} to {args.output_dir}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
