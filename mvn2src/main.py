#!/usr/bin/env python3
# Copyright (c) 2023-2024 mvn2src Contributors

"""
Main entry point for mvn2src.
This script handles the workflow of:
1. Validating the Maven project and locating Maven
2. Listing the project's dependencies with mvn dependency:tree
3. Downloading source JARs with mvn dependency:sources
4. Extracting source JARs, or decompiling binary JARs when no sources exist

Usage:
    mvn2src /path/to/project
    mvn2src /path/to/project -d java-decompiler.jar
    mvn2src /path/to/project -o custom_output --direct-only

Options:
    PROJECT_DIR            Maven project directory (containing pom.xml)
    -d, --decompiler JAR   Path to the Java decompiler (java-decompiler.jar)
    -o, --output DIR       Output directory (default: <PROJECT_DIR>/third, or $THIRD_DIR)
    --direct-only          Extract only direct dependencies, excluding transitive ones
    --config FILE          YAML file with extra settings (repo_path, timeouts, ...)
    --log-file FILE        Also write a detailed log to FILE
    --verbose              Enable verbose logging
    --no-progress          Do not show a progress bar

Environment Variables:
    MAVEN_HOME   Maven installation directory
    MAVEN_REPO   Local Maven repository (default: ~/.m2/repository)
    THIRD_DIR    Output directory name, relative to the project dir (default: third)
    JAVA_CMD     Java executable used to run the decompiler (default: java)
"""

import argparse
import sys
from pathlib import Path

from mvn2src.utils.config import load_config
from mvn2src.utils.logger import setup_logger
from mvn2src.utils.maven_detector import find_maven
from mvn2src.utils.source_extractor import MavenSourceExtractor


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='mvn2src',
        description='Extract Maven project dependencies and their source code.'
    )
    parser.add_argument(
        'project_dir',
        metavar='PROJECT_DIR',
        help='Maven project directory (containing pom.xml)'
    )
    parser.add_argument(
        '-d', '--decompiler',
        metavar='DECOMPILER',
        default=None,
        help='Path to Java decompiler (java-decompiler.jar)'
    )
    parser.add_argument(
        '-o', '--output',
        metavar='DIR',
        default=None,
        help='Output directory (default: third, relative to the project dir; can be set by THIRD_DIR)'
    )
    parser.add_argument(
        '--direct-only',
        action='store_true',
        help='Extract only direct dependencies, excluding transitive dependencies'
    )
    parser.add_argument(
        '--config',
        metavar='FILE',
        default=None,
        help='YAML configuration file'
    )
    parser.add_argument(
        '--log-file',
        metavar='FILE',
        default=None,
        help='Write a detailed log to this file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--no-progress',
        action='store_true',
        help='Do not show a progress bar'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """
    Run mvn2src.

    Returns:
        int: Exit code (0 for success, 1 for failure)
    """
    args = parse_arguments(argv)
    logger = setup_logger(log_file=args.log_file, verbose=args.verbose)

    try:
        config = load_config(args.config)

        project_path = Path(args.project_dir)
        if not project_path.exists():
            logger.error(f"Error: Project directory does not exist: {args.project_dir}")
            return 1

        if not (project_path / 'pom.xml').exists():
            logger.error(f"Error: pom.xml not found in: {args.project_dir}")
            return 1

        maven_command = find_maven(config.maven_home)
        if maven_command is None:
            logger.error("Error: Maven not found. Please install Maven or set MAVEN_HOME environment variable")
            return 1

        decompiler_path = None
        if args.decompiler:
            decompiler_path = Path(args.decompiler)
            if not decompiler_path.exists():
                logger.warning(f"Warning: Decompiler JAR not found: {args.decompiler}")
                decompiler_path = None

        output_path = config.resolve_output_dir(project_path, args.output)

        extractor = MavenSourceExtractor(
            project_path,
            maven_command,
            output_path,
            decompiler_path=decompiler_path,
            direct_only=args.direct_only,
            config=config,
            logger=logger,
            show_progress=not args.no_progress
        )
        extractor.run()
        return 0

    except Exception as e:
        logger.error(f"Error: {str(e)}")
        logger.debug("Traceback:", exc_info=True)
        return 1


if __name__ == '__main__':
    sys.exit(main())
