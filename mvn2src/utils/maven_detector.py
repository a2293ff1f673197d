"""
Locates a working Maven installation.
"""

import logging
import os
import sys
from pathlib import Path

from mvn2src.utils.process_runner import ProcessTimeoutError, execute, find_command_path


logger = logging.getLogger(__name__)


def maven_executable_name():
    return 'mvn.cmd' if sys.platform == 'win32' else 'mvn'


def is_valid_maven(command):
    """Check that ``command --version`` runs and identifies itself as Apache Maven."""
    try:
        result = execute([command, '--version'], timeout=10)
    except (OSError, ProcessTimeoutError) as e:
        logger.debug(f"Maven validation failed for command {command}: {e}")
        return False
    return result.is_success() and 'Apache Maven' in result.stdout


def find_maven(maven_home=None):
    """
    Find the Maven command, preferring MAVEN_HOME over PATH.

    Args:
        maven_home (str, optional): Maven installation directory. Defaults to $MAVEN_HOME.

    Returns:
        str or None: The command to run Maven with, or None if not found.
    """
    if maven_home is None:
        maven_home = os.environ.get('MAVEN_HOME')

    if maven_home and maven_home.strip():
        maven_cmd = Path(maven_home) / 'bin' / maven_executable_name()
        if maven_cmd.exists() and is_valid_maven(str(maven_cmd)):
            logger.info(f"Found Maven (from MAVEN_HOME): {maven_cmd}")
            return str(maven_cmd)

    maven_cmd = maven_executable_name()
    if is_valid_maven(maven_cmd):
        logger.info(f"Found Maven (from PATH): {find_command_path(maven_cmd)}")
        return maven_cmd

    logger.error("Maven not found. Please install Maven or set MAVEN_HOME environment variable")
    return None
