#!/usr/bin/env python3
"""
Command-line tool for listing the dependencies of a Maven project.
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from mvn2src.utils.config import load_config
from mvn2src.utils.logger import setup_logger
from mvn2src.utils.maven_detector import find_maven
from mvn2src.utils.tree_parser import DependencyTreeParser


def main(argv=None):
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(description='List the dependencies of a Maven project.')
    parser.add_argument('project_dir', type=str, nargs='?', default='.', help='Path to the Maven project.')
    parser.add_argument('--direct-only', action='store_true', help='List only direct dependencies.')
    parser.add_argument('--output', type=str, help='Path to save the dependency list.')
    parser.add_argument('--json', action='store_true', help='Output in JSON format.')
    parser.add_argument('--config', type=str, help='YAML configuration file.')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging.')

    args = parser.parse_args(argv)

    logger = setup_logger(verbose=args.verbose)

    project_path = Path(args.project_dir).resolve()
    logger.info(f"Listing dependencies of project: {project_path}")

    try:
        config = load_config(args.config)

        maven_command = find_maven(config.maven_home)
        if maven_command is None:
            return 1

        tree_parser = DependencyTreeParser(
            maven_command,
            project_path,
            direct_only=args.direct_only,
            tree_file_name=config.tree_file_name,
            tree_timeout=config.tree_timeout,
            logger=logger
        )
        dependencies = tree_parser.get_dependency_tree()

        print(f"\nDependencies Summary:")
        print(f"Dependencies Found: {len(dependencies)}")

        print("\nDependencies:")
        for dep in dependencies:
            print(f"  {dep.key} ({dep.scope})")

        if args.output:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)

            with open(output_path, 'w', encoding='utf-8') as f:
                if args.json:
                    json.dump({'dependencies': [asdict(dep) for dep in dependencies]}, f, indent=2)
                else:
                    f.write('\n'.join(dep.key for dep in dependencies))

            logger.info(f"Dependencies saved to {output_path}")

        return 0

    except Exception as e:
        logger.error(f"An error occurred: {str(e)}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
